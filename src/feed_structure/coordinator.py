"""RoundTripCoordinator: keeps tree, text and field list consistent under edits.

Every edit batch ends in a round trip:

1. serialize the working tree;
2. compare with the published text and stop if nothing changed;
3. re-parse the new text, re-classify it against the active profile, and
   publish the new tree and field list together;
4. on a re-parse failure keep the previous published state, report the
   error, and leave the working tree exactly as the operator left it.

State machine::

    IDLE -> DIRTY -> SERIALIZING -> REPARSING -> PUBLISHED | FAILED -> IDLE

Architecture:
- The working tree is owned by the coordinator's ``TreeEditor``; the
  published tree is a separate re-parsed copy with its own identifiers.
- Only one round trip runs at a time.  A round trip requested while one is
  in flight (from a listener, or from the asyncio path while the re-parse
  runs in an executor) is queued and coalesced into one more cycle.
- Every edit bumps the editor revision.  A cycle remembers the revision it
  serialized; if the revision moved before publish, the result is
  superseded and discarded rather than applied over the newer tree.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import StrEnum, auto

from feed_structure.classify.classifier import FieldClassifier
from feed_structure.classify.fields import FieldDescriptor
from feed_structure.config import EngineConfig
from feed_structure.detection.detector import FormatDetector
from feed_structure.detection.profiles import FormatProfile
from feed_structure.edits import Edit, EditResult, apply_edit
from feed_structure.errors import MalformedDocumentError
from feed_structure.tree.editor import TreeEditor
from feed_structure.tree.nodes import DocumentNode
from feed_structure.tree.parser import DocumentParser
from feed_structure.tree.presentation import ExpansionState
from feed_structure.tree.serializer import DocumentSerializer

__all__ = [
    "PublishedState",
    "RoundTripCoordinator",
    "RoundTripResult",
    "RoundTripState",
    "RoundTripStats",
    "RoundTripStatus",
]

logger = logging.getLogger(__name__)

Listener = Callable[["PublishedState"], None]


class RoundTripState(StrEnum):
    IDLE = auto()
    DIRTY = auto()
    SERIALIZING = auto()
    REPARSING = auto()
    PUBLISHED = auto()
    FAILED = auto()


class RoundTripStatus(StrEnum):
    """What a call to ``run``/``run_async`` achieved.

    - UNCHANGED:  no edit since the last cycle, or edits cancelled out
    - PUBLISHED:  a new tree and field list were published
    - FAILED:     the re-parse failed; the previous state stays published
    - SUPERSEDED: a newer edit arrived before publish; result discarded
    - QUEUED:     a cycle was already running; this request was coalesced
    """

    UNCHANGED = auto()
    PUBLISHED = auto()
    FAILED = auto()
    SUPERSEDED = auto()
    QUEUED = auto()


@dataclass(frozen=True, slots=True)
class PublishedState:
    """One atomic snapshot handed to collaborators.

    Attributes:
        tree: The re-parsed document tree.
        fields: Classified fields of ``tree``.
        text: Serialized document text, ready for persistence.
        version: Incremented on every publish; 0 for the opening state.
    """

    tree: DocumentNode
    fields: tuple[FieldDescriptor, ...]
    text: str
    version: int


@dataclass(frozen=True, slots=True)
class RoundTripResult:
    """Outcome of one round-trip request."""

    status: RoundTripStatus
    published: PublishedState
    error: MalformedDocumentError | None = None


@dataclass(slots=True)
class RoundTripStats:
    """Counters of work actually performed."""

    serializations: int = 0
    reparses: int = 0
    publishes: int = 0
    failures: int = 0
    superseded: int = 0


@dataclass(slots=True)
class _Cycle:
    text: str
    revision: int
    transitions: list[RoundTripState] = field(default_factory=list)


class RoundTripCoordinator:
    """Owns one document and runs its edit -> serialize -> re-parse cycle.

    Instances share nothing mutable with each other, so independent
    documents can be processed concurrently by independent coordinators.

    Example::

        coordinator = RoundTripCoordinator.open(feed_text)
        price = next(n for p, n in iter_nodes(coordinator.tree) if p.endswith(".price"))
        coordinator.apply([SetValue(price.node_id, "12.50")])
        result = coordinator.run()
        result.status                 # RoundTripStatus.PUBLISHED
        result.published.fields       # refreshed descriptors
    """

    def __init__(
        self,
        tree: DocumentNode,
        profile: FormatProfile | None = None,
        config: EngineConfig | None = None,
        text: str | None = None,
        fields: Iterable[FieldDescriptor] | None = None,
    ) -> None:
        self._config = config if config is not None else EngineConfig()
        self._parser = DocumentParser(self._config.parser)
        self._serializer = DocumentSerializer(self._config.serializer)
        self._classifier = FieldClassifier(self._config.classifier)
        self._editor = TreeEditor(tree, ExpansionState())
        self._listeners: list[Listener] = []
        self._state = RoundTripState.IDLE
        self._in_flight = False
        self._pending = False
        self._last_error: MalformedDocumentError | None = None
        self._last_transitions: tuple[RoundTripState, ...] = ()
        self.stats = RoundTripStats()

        if text is None:
            text = self._serializer.serialize(tree)
        self._profile = profile if profile is not None else FormatDetector().detect(text)
        if fields is None:
            fields = self._classifier.classify(tree, self._profile)
        self._force = False
        self._seen_revision = self._editor.revision
        self._published = PublishedState(tree.snapshot(), tuple(fields), text, 0)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def open(
        cls,
        text: str | bytes,
        profile: FormatProfile | None = None,
        config: EngineConfig | None = None,
    ) -> RoundTripCoordinator:
        """Parse raw feed text and open it for editing.

        The profile is detected from the text unless one is given.

        Raises:
            MalformedDocumentError: If *text* does not parse.
        """
        config = config if config is not None else EngineConfig()
        tree = DocumentParser(config.parser).parse(text)
        if profile is None:
            profile = FormatDetector().detect(text)
        return cls(tree, profile=profile, config=config)

    @classmethod
    def resume(
        cls,
        text: str,
        fields: Iterable[FieldDescriptor],
        profile: FormatProfile | None = None,
        config: EngineConfig | None = None,
    ) -> RoundTripCoordinator:
        """Reopen a saved template from its saved text and field list.

        The saved fields are published unchanged and the saved text becomes
        the comparison baseline for the next round trip.  The profile is
        detected from the saved text unless one is given, so later cycles
        re-classify against the same profile the template was saved with.

        Raises:
            MalformedDocumentError: If the saved text does not parse.
        """
        config = config if config is not None else EngineConfig()
        tree = DocumentParser(config.parser).parse(text)
        return cls(tree, profile=profile, config=config, text=text, fields=fields)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def tree(self) -> DocumentNode:
        """The working tree, as the operator's edits left it."""
        return self._editor.root

    @property
    def editor(self) -> TreeEditor:
        return self._editor

    @property
    def expansion(self) -> ExpansionState:
        return self._editor.expansion

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def profile(self) -> FormatProfile:
        return self._profile

    @property
    def published(self) -> PublishedState:
        return self._published

    @property
    def state(self) -> RoundTripState:
        if self._state == RoundTripState.IDLE and self._is_dirty():
            return RoundTripState.DIRTY
        return self._state

    @property
    def last_error(self) -> MalformedDocumentError | None:
        """Error of the most recent failed cycle, cleared by the next publish."""
        return self._last_error

    @property
    def last_transitions(self) -> tuple[RoundTripState, ...]:
        """States visited by the most recent cycle."""
        return self._last_transitions

    # ------------------------------------------------------------------
    # Edits and subscriptions
    # ------------------------------------------------------------------

    def apply(self, edits: Iterable[Edit]) -> list[EditResult]:
        """Apply an edit batch to the working tree; never raises engine errors."""
        results = [apply_edit(self._editor, edit) for edit in edits]
        failed = sum(1 for r in results if not r.ok)
        if failed:
            logger.debug("%d of %d edit(s) rejected", failed, len(results))
        return results

    def mark_dirty(self) -> None:
        """Force the next cycle to serialize, e.g. after a direct tree change."""
        self._editor.revision += 1

    def set_profile(self, profile: FormatProfile) -> None:
        """Switch the active profile; the next cycle re-classifies."""
        self._profile = profile
        self._force = True
        self.mark_dirty()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* with every new PublishedState; returns an unsubscriber."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Round trips
    # ------------------------------------------------------------------

    def run(self) -> RoundTripResult:
        """Run round trips synchronously until no request is pending."""
        if self._in_flight:
            self._pending = True
            return RoundTripResult(RoundTripStatus.QUEUED, self._published)
        self._in_flight = True
        result: RoundTripResult | None = None
        try:
            while True:
                self._pending = False
                cycle = self._begin()
                if cycle is not None:
                    try:
                        tree, fields = self._reparse(cycle.text)
                    except MalformedDocumentError as exc:
                        result = self._fail(cycle, exc)
                    else:
                        result = self._finish(cycle, tree, fields)
                if not self._pending:
                    return result if result is not None else self._unchanged()
        finally:
            self._in_flight = False

    async def run_async(self) -> RoundTripResult:
        """Like ``run`` but re-parses in the loop's default executor.

        Edits applied while the re-parse is in flight supersede it: its
        result is dropped and another cycle runs on the newer tree.
        """
        if self._in_flight:
            self._pending = True
            return RoundTripResult(RoundTripStatus.QUEUED, self._published)
        self._in_flight = True
        loop = asyncio.get_running_loop()
        result: RoundTripResult | None = None
        try:
            while True:
                self._pending = False
                cycle = self._begin()
                if cycle is not None:
                    try:
                        tree, fields = await loop.run_in_executor(
                            None, self._reparse, cycle.text
                        )
                    except MalformedDocumentError as exc:
                        result = self._fail(cycle, exc)
                    else:
                        result = self._finish(cycle, tree, fields)
                if not self._pending:
                    return result if result is not None else self._unchanged()
        finally:
            self._in_flight = False

    # ------------------------------------------------------------------
    # Cycle steps
    # ------------------------------------------------------------------

    def _is_dirty(self) -> bool:
        return self._editor.revision != self._seen_revision

    def _begin(self) -> _Cycle | None:
        """Serialize if dirty; None when there is nothing new to re-parse."""
        if not self._is_dirty():
            return None
        revision = self._editor.revision
        self._seen_revision = revision
        cycle = _Cycle(text="", revision=revision, transitions=[RoundTripState.DIRTY])
        self._enter(cycle, RoundTripState.SERIALIZING)
        cycle.text = self._serializer.serialize(self._editor.root)
        self.stats.serializations += 1
        if cycle.text == self._published.text and not self._force:
            self._enter(cycle, RoundTripState.IDLE)
            self._last_transitions = tuple(cycle.transitions)
            return None
        self._enter(cycle, RoundTripState.REPARSING)
        return cycle

    def _reparse(self, text: str) -> tuple[DocumentNode, list[FieldDescriptor]]:
        tree = self._parser.parse(text)
        return tree, self._classifier.classify(tree, self._profile)

    def _finish(
        self,
        cycle: _Cycle,
        tree: DocumentNode,
        fields: list[FieldDescriptor],
    ) -> RoundTripResult:
        self.stats.reparses += 1
        if cycle.revision != self._editor.revision:
            self.stats.superseded += 1
            self._pending = True
            self._enter(cycle, RoundTripState.IDLE)
            self._last_transitions = tuple(cycle.transitions)
            logger.debug("Round trip for revision %d superseded", cycle.revision)
            return RoundTripResult(RoundTripStatus.SUPERSEDED, self._published)

        self._published = PublishedState(
            tree, tuple(fields), cycle.text, self._published.version + 1
        )
        self._force = False
        self._last_error = None
        self.stats.publishes += 1
        self._enter(cycle, RoundTripState.PUBLISHED)
        self._enter(cycle, RoundTripState.IDLE)
        self._last_transitions = tuple(cycle.transitions)
        for listener in list(self._listeners):
            listener(self._published)
        return RoundTripResult(RoundTripStatus.PUBLISHED, self._published)

    def _fail(self, cycle: _Cycle, exc: MalformedDocumentError) -> RoundTripResult:
        self.stats.failures += 1
        self._last_error = exc
        self._enter(cycle, RoundTripState.FAILED)
        self._enter(cycle, RoundTripState.IDLE)
        self._last_transitions = tuple(cycle.transitions)
        logger.warning("Round trip failed; keeping version %d: %s", self._published.version, exc)
        return RoundTripResult(RoundTripStatus.FAILED, self._published, exc)

    def _unchanged(self) -> RoundTripResult:
        return RoundTripResult(RoundTripStatus.UNCHANGED, self._published)

    def _enter(self, cycle: _Cycle, state: RoundTripState) -> None:
        cycle.transitions.append(state)
        self._state = state
        logger.debug("Round trip %s", state)

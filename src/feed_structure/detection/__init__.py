"""Detection subpackage: feed format profiles and the rule-table detector."""

from feed_structure.detection.detector import FormatDetector
from feed_structure.detection.profiles import PRESETS, FeedFormat, FormatProfile, preset

__all__ = ["PRESETS", "FeedFormat", "FormatDetector", "FormatProfile", "preset"]

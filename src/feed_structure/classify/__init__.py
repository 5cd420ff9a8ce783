"""classify subpackage: turns a document tree into a flat field list.

Example::

    from feed_structure.classify import FieldClassifier

    fields = FieldClassifier().classify(root, profile)
    [(f.path, f.type, f.category) for f in fields]
"""

from __future__ import annotations

from feed_structure.classify.classifier import FieldClassifier
from feed_structure.classify.fields import Category, FieldDescriptor, FieldType
from feed_structure.classify.keywords import KeywordClassifier

__all__ = ["Category", "FieldClassifier", "FieldDescriptor", "FieldType", "KeywordClassifier"]

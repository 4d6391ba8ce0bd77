"""Hypothesis strategies for bracketlex property-based testing.

Strategies are organized by domain:

- patterns: literal text, escapes, references and extension names
- tags: language tags and lexicon data

Usage:
    from tests.strategies import literal_texts, language_tags
    from tests.strategies.patterns import reference_patterns
"""

from .patterns import (
    argument_texts,
    escaped_literals,
    extension_names,
    literal_texts,
    reference_patterns,
)
from .tags import language_tags, lexicon_data

__all__ = [
    "argument_texts",
    "escaped_literals",
    "extension_names",
    "language_tags",
    "lexicon_data",
    "literal_texts",
    "reference_patterns",
]

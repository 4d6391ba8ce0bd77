"""Language resolution: requested tag(s) → one available tag.

Python 3.13+. Zero external dependencies.
"""

import re
from collections.abc import Collection, Iterable, Iterator

from bracketlex.constants import DEFAULT_FALLBACK_LANGUAGES
from bracketlex.diagnostics import ErrorTemplate, NoLanguageFoundError

__all__ = ["language_candidates", "resolve_language"]

_TAG = re.compile(r"\w+(?:-\w+)*", re.ASCII)


def language_candidates(requested: str) -> list[str]:
    """Extract tag-like tokens from a request string, in order.

    Accept-Language style input yields noise tokens too; they simply never
    match an available tag.

    Example:
        >>> language_candidates("de-DE,en;q=0.8")
        ['de-DE', 'en', 'q', '0', '8']
    """
    return _TAG.findall(requested)


def _truncations(tag: str) -> Iterator[str]:
    """Progressively shorter prefixes: en-US-x → en-US → en."""
    parts = tag.split("-")
    for end in range(len(parts) - 1, 0, -1):
        yield "-".join(parts[:end])


def resolve_language(
    requested: str,
    available: Collection[str],
    fallback_chain: Iterable[str] = DEFAULT_FALLBACK_LANGUAGES,
) -> str:
    """Pick the best available tag for a request.

    Order of preference:
        1. A candidate from ``requested`` exactly as written
        2. A candidate with trailing subtags dropped (en-GB-oxendict → en-GB → en)
        3. The first fallback chain entry that is available

    Matching is case-sensitive.

    Args:
        requested: Tag or Accept-Language style list
        available: Tags that can be loaded
        fallback_chain: Ordered fallback tags

    Returns:
        One tag from available

    Raises:
        NoLanguageFoundError: If nothing matches

    Example:
        >>> resolve_language("en-GB-oxendict", {"en", "en-GB"}, ["*", "en"])
        'en-GB'
        >>> resolve_language("fr-FR", {"en", "en-GB"}, ["*", "en"])
        'en'
    """
    candidates = language_candidates(requested)
    for candidate in candidates:
        if candidate in available:
            return candidate
    for candidate in candidates:
        for prefix in _truncations(candidate):
            if prefix in available:
                return prefix
    for fallback in fallback_chain:
        if fallback in available:
            return fallback
    raise NoLanguageFoundError(ErrorTemplate.no_language_found(requested), requested=requested)

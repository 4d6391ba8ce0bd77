"""Locale utilities: tag normalization, Babel locales, system locale.

Language tags in lexicons are BCP-47 style (``en-GB``); Babel wants POSIX
(``en_GB``). Tags such as ``*`` or ``i-default`` are valid lexicon tags but
not Babel locales; formatting for them falls back to en_US.

Python 3.13+.
"""

from __future__ import annotations

import functools
import logging
import os
from typing import TYPE_CHECKING

from bracketlex.constants import FALLBACK_BABEL_LOCALE, MAX_LOCALE_CACHE_SIZE

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "get_system_language",
    "normalize_locale",
    "to_language_tag",
]

logger = logging.getLogger(__name__)


def normalize_locale(tag: str) -> str:
    """Convert a BCP-47 tag to POSIX format for Babel.

    Example:
        >>> normalize_locale("en-GB")
        'en_GB'
        >>> normalize_locale("en")
        'en'
    """
    return tag.replace("-", "_")


def to_language_tag(locale_code: str) -> str:
    """Convert a POSIX locale code to a BCP-47 style tag.

    Strips any encoding or modifier suffix.

    Example:
        >>> to_language_tag("de_DE.UTF-8")
        'de-DE'
        >>> to_language_tag("sr_RS@latin")
        'sr-RS'
    """
    return locale_code.split(".")[0].split("@")[0].replace("_", "-")


@functools.lru_cache(maxsize=MAX_LOCALE_CACHE_SIZE)
def get_babel_locale(tag: str) -> Locale:
    """Get a Babel Locale for a lexicon tag, with caching.

    Tags Babel does not know (``*``, ``i-default``, ``xx``) fall back to
    en_US with a warning, so number formatting never fails on the tag.

    Thread-safe via lru_cache internal locking.

    Args:
        tag: Language tag (BCP-47 or POSIX format accepted)

    Returns:
        Babel Locale object

    Example:
        >>> get_babel_locale("en-GB").territory
        'GB'
        >>> str(get_babel_locale("*"))
        'en_US'
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale, UnknownLocaleError  # noqa: PLC0415

    try:
        return Locale.parse(normalize_locale(tag))
    except (UnknownLocaleError, ValueError) as e:
        logger.warning("No Babel locale for tag '%s': %s. Falling back to %s", tag, e,
                       FALLBACK_BABEL_LOCALE)
        return Locale.parse(FALLBACK_BABEL_LOCALE)


def get_system_language(*, raise_on_failure: bool = False) -> str:
    """Detect the system language as a BCP-47 style tag.

    Detection order:
    1. Python locale.getlocale() (OS-level locale)
    2. LC_ALL environment variable (overrides all)
    3. LC_MESSAGES environment variable (for message catalogs)
    4. LANG environment variable (default locale)

    Filters out "C" and "POSIX" pseudo-locales.

    Args:
        raise_on_failure: If True, raise RuntimeError when the language cannot
            be determined. If False (default), return "en-US".

    Returns:
        Detected tag such as "de-DE"

    Raises:
        RuntimeError: If raise_on_failure is True and nothing is detected.
    """
    import locale as locale_module  # noqa: PLC0415

    try:
        system_locale, _ = locale_module.getlocale()
        if system_locale and system_locale not in ("C", "POSIX"):
            return to_language_tag(system_locale)
    except (ValueError, AttributeError):
        pass

    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var)
        if value and value not in ("C", "POSIX", ""):
            return to_language_tag(value)

    if raise_on_failure:
        msg = (
            "Could not determine system language. "
            "Set LC_ALL, LC_MESSAGES, or LANG environment variable."
        )
        raise RuntimeError(msg)

    return "en-US"

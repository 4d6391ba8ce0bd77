"""Shared constants for bracketlex.

Centralized configuration constants used across the syntax, runtime and
lexicon packages. Keeping them here avoids circular imports.

Constants are grouped by domain:
- Depth limits: recursion protection for the template parser
- Cache limits: memory bounds for memoized parsing and Babel locales
- Service defaults: timeouts, fallback chain, default domain
- Fallback strings: visible markers for missing translations

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Depth limits
    "MAX_DEPTH",
    # Cache limits
    "MAX_PATTERN_CACHE_SIZE",
    "MAX_LOCALE_CACHE_SIZE",
    # Service defaults
    "DEFAULT_LOAD_TIMEOUT",
    "DEFAULT_FALLBACK_LANGUAGES",
    "DEFAULT_DOMAIN",
    "DEFAULT_RESOURCE_SUFFIX",
    "FALLBACK_BABEL_LOCALE",
    # Fallback strings
    "MISSING_TRANSLATION_PREFIX",
    "SYNTAX_ERROR_MARKER",
]

# ============================================================================
# DEPTH LIMITS
# ============================================================================

# Maximum bracket nesting accepted by the template parser.
# Directives nest recursively; 100 levels is far beyond any real lexicon
# entry and keeps the parser well clear of Python's recursion limit.
MAX_DEPTH: int = 100

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Memoized parse results (AST is immutable, so sharing is safe).
# Quantity sub-templates are re-parsed on every quantify() call; the cache
# turns that into a dictionary lookup.
MAX_PATTERN_CACHE_SIZE: int = 1024

# Cached Babel Locale objects used by the numf extension.
MAX_LOCALE_CACHE_SIZE: int = 128

# ============================================================================
# SERVICE DEFAULTS
# ============================================================================

# Seconds to wait for a language resource before failing the load.
DEFAULT_LOAD_TIMEOUT: float = 20.0

# Tags tried, in order, when the requested tag resolves to nothing.
DEFAULT_FALLBACK_LANGUAGES: tuple[str, ...] = ("*", "i-default", "en", "en-US")

# Implicit domain of every lexicon.
DEFAULT_DOMAIN: str = "*"

# File suffix appended by PathResourceLoader.
DEFAULT_RESOURCE_SUFFIX: str = ".json"

# Babel locale used when a tag is not a Babel locale (e.g. "*", "i-default").
FALLBACK_BABEL_LOCALE: str = "en_US"

# ============================================================================
# FALLBACK STRINGS
# ============================================================================

# Prefix of the default missing-translation marker: "? some.key"
MISSING_TRANSLATION_PREFIX: str = "? "

# Separator inserted at the error position of a malformed pattern.
SYNTAX_ERROR_MARKER: str = " <-- HERE --> "

"""bracketlex - run-time string localization with bracket-notation templates.

Translates keys into formatted, pluralization-aware, parameter-substituted
strings. Patterns use a small bracket notation ("[_1]", "[*,_1,file,files]",
"[#,_1]") compiled on first use; lexicons are resolved per language with a
fallback chain, may inherit from one another, and load on demand with
deduplicated, timeout-bounded loads.

Public API:
    Localizer - Language resolution, lexicon loading and handle creation
    LocalizerConfig - Service options (timeouts, fallback chain, domain)
    TranslationHandle - translate() / quantify() over one language
    PathResourceLoader - JSON-file lexicon loader
    parse_pattern - Parse a pattern to its AST
    compile_pattern - Compile an AST to a Formatter

Exceptions:
    BracketLexError - Base exception class
    ConfigurationError - Invalid construction options
    TemplateSyntaxError - Malformed pattern
    UnknownExtensionError - Pattern calls an unregistered function
    NoLanguageFoundError - No available language for a request
    LexiconLoadError / LoadTimeoutError - Lexicon could not be loaded

Submodules:
    bracketlex.syntax - Parser, AST nodes and cursor
    bracketlex.runtime - Compiler, extensions, handle, RWLock
    bracketlex.lexicon - Store, resolver, loaders and load coordinator
    bracketlex.diagnostics - Diagnostic codes, templates and exceptions
"""

# Essential Public API - Minimal exports for clean namespace
from .config import LocalizerConfig
from .diagnostics import (
    BracketLexError,
    ConfigurationError,
    LexiconLoadError,
    LoadTimeoutError,
    NoLanguageFoundError,
    TemplateSyntaxError,
    UnknownExtensionError,
)
from .lexicon import LexiconResource, PathResourceLoader, ResourceLoader
from .localizer import Localizer
from .runtime import Formatter, TranslationHandle, compile_pattern
from .syntax import parse_pattern

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("bracketlex")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "BracketLexError",
    "ConfigurationError",
    "Formatter",
    "LexiconLoadError",
    "LexiconResource",
    "LoadTimeoutError",
    "Localizer",
    "LocalizerConfig",
    "NoLanguageFoundError",
    "PathResourceLoader",
    "ResourceLoader",
    "TemplateSyntaxError",
    "TranslationHandle",
    "UnknownExtensionError",
    "__version__",
    "compile_pattern",
    "parse_pattern",
]

"""Runtime package: compiler, extensions, translation handle, RWLock.

Python 3.13+.
"""

from .compiler import Formatter, compile_pattern, escape_literal, render_source
from .extensions import BUILTIN_EXTENSIONS, Extension, ExtensionContext, ExtensionRegistry
from .handle import TranslationHandle
from .rwlock import RWLock

__all__ = [
    "BUILTIN_EXTENSIONS",
    "Extension",
    "ExtensionContext",
    "ExtensionRegistry",
    "Formatter",
    "RWLock",
    "TranslationHandle",
    "compile_pattern",
    "escape_literal",
    "render_source",
]

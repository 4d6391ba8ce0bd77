"""Resource loading infrastructure for Localizer.

Provides the protocol for lexicon resource loaders, a filesystem JSON
implementation with path-traversal checks, and the document parser shared
by loaders.

Components:
    LexiconResource - Immutable loaded lexicon data plus optional base tag
    ResourceLoader - Protocol for loading lexicon resources (structural typing)
    PathResourceLoader - Disk-based JSON loader with path-traversal prevention
    parse_lexicon_document - Validate a decoded document into a LexiconResource

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from bracketlex.constants import DEFAULT_RESOURCE_SUFFIX
from bracketlex.lexicon.store import validate_lexicon_data

if TYPE_CHECKING:
    from bracketlex.lexicon.types import LanguageTag, LexiconData

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Data
    "LexiconResource",
    # Protocol
    "ResourceLoader",
    # Concrete loader
    "PathResourceLoader",
    # Document parsing
    "parse_lexicon_document",
]

_DOCUMENT_KEYS = frozenset({"lexicon", "base"})


@dataclass(frozen=True, slots=True)
class LexiconResource:
    """Lexicon data as delivered by a loader.

    Attributes:
        data: Domain → key → pattern
        base: Tag of the lexicon this one inherits from, if any
    """

    data: LexiconData
    base: LanguageTag | None = None


class ResourceLoader(Protocol):
    """Protocol for fetching the lexicon of one language.

    Called on a worker thread, once per tag per load. Any exception fails
    the load with LexiconLoadError chained to it; OSError (unreachable,
    missing) and ValueError (malformed) are the conventional ones, but a
    KeyError from a lookup works the same way. Taking longer than the configured
    timeout fails it with LoadTimeoutError and the late result is dropped.

    Example:
        >>> class DictLoader:
        ...     def __init__(self, lexicons):
        ...         self.lexicons = lexicons
        ...     def load(self, tag, base_url):
        ...         return LexiconResource(self.lexicons[tag])
        >>> localizer = Localizer(languages=["en", "de"], loader=DictLoader({...}))
    """

    def load(self, tag: LanguageTag, base_url: str) -> LexiconResource:
        """Load the lexicon for tag.

        Args:
            tag: Resolved language tag
            base_url: Configured location prefix

        Returns:
            LexiconResource

        Raises:
            OSError: If the resource cannot be fetched
            ValueError: If the resource is malformed
        """


def parse_lexicon_document(document: object) -> LexiconResource:
    """Turn a decoded document into a LexiconResource.

    Two shapes are accepted:
        {"domain": {"key": "pattern"}}                    bare lexicon
        {"lexicon": {...}, "base": "en"}                  lexicon with a base

    Raises:
        ValueError: If the document has neither shape
    """
    data: object = document
    base: object = None
    if isinstance(document, Mapping) and "lexicon" in document and document.keys() <= _DOCUMENT_KEYS:
        data = document["lexicon"]
        base = document.get("base")
    if base is not None and (not isinstance(base, str) or not base):
        msg = f"Lexicon base must be a non-empty tag, got {base!r}"
        raise ValueError(msg)
    try:
        validate_lexicon_data(data)
    except TypeError as e:
        msg = f"Malformed lexicon document: {e}"
        raise ValueError(msg) from e
    return LexiconResource(data, base)  # type: ignore[arg-type]


@dataclass(frozen=True, slots=True)
class PathResourceLoader:
    """File system loader reading ``{base_url}{tag}{suffix}`` as UTF-8 JSON.

    Security:
        Tags containing path separators or ".." are rejected.
        The resolved path must stay within root_dir.

    Example:
        >>> loader = PathResourceLoader()
        >>> resource = loader.load("de", "locales/")
        # Loads from: locales/de.json

    Attributes:
        suffix: File name suffix appended to the tag
        root_dir: Fixed root directory for path traversal validation.
                  Defaults to the directory part of base_url.
    """

    suffix: str = DEFAULT_RESOURCE_SUFFIX
    root_dir: str | None = None

    @staticmethod
    def _validate_tag(tag: LanguageTag) -> None:
        if not tag:
            msg = "Language tag cannot be empty"
            raise ValueError(msg)
        if ".." in tag:
            msg = f"Path traversal sequences not allowed in tag: '{tag}'"
            raise ValueError(msg)
        if "/" in tag or "\\" in tag:
            msg = f"Path separators not allowed in tag: '{tag}'"
            raise ValueError(msg)

    def _root(self, base_url: str) -> Path:
        if self.root_dir is not None:
            return Path(self.root_dir).resolve()
        if not base_url or base_url.endswith(("/", "\\")):
            return Path(base_url or ".").resolve()
        # "locales/app-" is a file name prefix inside locales/
        return Path(base_url).parent.resolve()

    @staticmethod
    def _is_safe_path(base_dir: Path, full_path: Path) -> bool:
        try:
            full_path.resolve().relative_to(base_dir.resolve())
            return True
        except ValueError:
            return False

    def describe_path(self, tag: LanguageTag, base_url: str) -> str:
        """Human-readable path for diagnostics."""
        return f"{base_url}{tag}{self.suffix}"

    def load(self, tag: LanguageTag, base_url: str) -> LexiconResource:
        """Read and parse the JSON resource for tag.

        Raises:
            ValueError: If tag is unsafe, the path escapes the root, or the
                document is not valid JSON of the accepted shapes
            FileNotFoundError: If the file doesn't exist
            OSError: If the file cannot be read
        """
        self._validate_tag(tag)
        full_path = Path(self.describe_path(tag, base_url)).resolve()
        if not self._is_safe_path(self._root(base_url), full_path):
            msg = f"Path traversal detected: resolved path escapes root directory. tag='{tag}'"
            raise ValueError(msg)
        return parse_lexicon_document(json.loads(full_path.read_text(encoding="utf-8")))

"""Translation handle: per-language view over one lexicon.

A handle is what callers translate with. It binds one Lexicon, the resolved
language tag, a default domain and the extension registry used to compile
entries on first use. It also serves as the calling context passed to
formatters and extensions (``argv[0]``), which is how ``[*,...]`` reaches
:meth:`TranslationHandle.quantify`.

Handles are cheap and stateless beyond their bindings; many handles may
share one Lexicon and therefore its compiled entries.

Python 3.13+.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING

from bracketlex.constants import DEFAULT_DOMAIN, MISSING_TRANSLATION_PREFIX
from bracketlex.locale_utils import get_babel_locale
from bracketlex.runtime.compiler import compile_pattern
from bracketlex.syntax.parser import parse_pattern

if TYPE_CHECKING:
    from babel import Locale

    from bracketlex.lexicon.store import Lexicon
    from bracketlex.runtime.extensions import ExtensionRegistry

__all__ = ["TranslationHandle"]

logger = logging.getLogger(__name__)

# Bare _N inside a quantity form becomes a reference; [_N] stays as written.
_QUANTITY_REFERENCE = re.compile(r"(?<!\[)(_\d+)", re.ASCII)


def _numerically_equal(value: object, target: int) -> bool:
    """Compare int, float, Decimal and numeric strings by value."""
    try:
        return Decimal(str(value)) == target
    except InvalidOperation:
        return False


class TranslationHandle:
    """Translate keys of one lexicon.

    Subclass and override :meth:`fail_with` to change what a missing
    translation renders as; pass the subclass as ``handle_factory`` to
    :class:`~bracketlex.localizer.Localizer`.

    Attributes:
        lexicon: Lexicon this handle reads
        tag: Resolved language tag
        default_domain: Domain used when a call names none
        extensions: Registry used to compile entries

    Example:
        >>> handle = localizer.handle("en")
        >>> handle.translate("files", 3)
        '3 files'
        >>> handle.translate("nonexistent.key")
        '? nonexistent.key'
    """

    __slots__ = ("default_domain", "extensions", "lexicon", "tag")

    def __init__(
        self,
        lexicon: Lexicon,
        *,
        tag: str,
        extensions: ExtensionRegistry,
        default_domain: str = DEFAULT_DOMAIN,
    ) -> None:
        self.lexicon = lexicon
        self.tag = tag
        self.extensions = extensions
        self.default_domain = default_domain

    def translate(self, key: str, *args: object, domain: str | None = None) -> str:
        """Render the entry for key with positional arguments.

        A positional Mapping with a truthy ``"domain"`` entry selects the
        domain (the last such mapping wins); the ``domain`` keyword overrides
        both that and the default. All positional arguments, option mappings
        included, are visible to the pattern as ``_1``, ``_2`` ...

        Args:
            key: Entry key
            *args: Pattern arguments
            domain: Explicit domain

        Returns:
            Rendered text, or fail_with(key, *args) when the key is missing

        Raises:
            TemplateSyntaxError: If the entry's pattern is malformed
            UnknownExtensionError: If the pattern calls an unregistered extension
        """
        selected = self._select_domain(args, domain)
        formatter = self.lexicon.formatter(selected, key, self.extensions)
        if formatter is None:
            logger.warning(
                "Missing translation: key '%s' in domain '%s' of lexicon '%s'",
                key,
                selected,
                self.tag,
            )
            return self.fail_with(key, *args)
        return formatter(self, *args)

    def fail_with(self, key: str, *args: object) -> str:  # noqa: ARG002
        """Text rendered for a missing translation."""
        return f"{MISSING_TRANSLATION_PREFIX}{key}"

    def has(self, key: str, domain: str | None = None) -> bool:
        """Check whether key exists in domain (default domain if None)."""
        return self.lexicon.has(domain or self.default_domain, key)

    def quantify(
        self,
        count: object,
        singular: str,
        plural: str | None = None,
        zero: str | None = None,
    ) -> str:
        """Choose and render a quantity form.

        ``singular`` when count equals 1, ``zero`` when count equals 0 and a
        zero form is given, ``plural`` otherwise (``singular`` if no plural).
        Bare ``_N`` in the chosen form refers to the count.

        Example:
            >>> handle.quantify(1, "_1 file", "_1 files")
            '1 file'
            >>> handle.quantify(0, "_1 file", "_1 files", "no files")
            'no files'
        """
        if _numerically_equal(count, 1):
            form = singular
        else:
            form = plural if plural is not None else singular
            if zero and _numerically_equal(count, 0):
                form = zero
        template = _QUANTITY_REFERENCE.sub(r"[\1]", form)
        formatter = compile_pattern(parse_pattern(template), self.extensions, pattern=template)
        return formatter(self, count)

    @property
    def babel_locale(self) -> Locale:
        """Babel locale for number formatting (en_US if the tag is unknown)."""
        return get_babel_locale(self.tag)

    def _select_domain(self, args: tuple[object, ...], domain: str | None) -> str:
        if domain:
            return domain
        selected = self.default_domain
        for arg in args:
            if isinstance(arg, Mapping) and arg.get("domain"):
                selected = str(arg["domain"])
        return selected

    def __repr__(self) -> str:
        return f"TranslationHandle(tag={self.tag!r}, default_domain={self.default_domain!r})"

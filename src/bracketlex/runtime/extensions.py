"""Extension functions callable from patterns.

A directive whose method token is a name, ``*`` or ``#`` compiles to a call
of a registered extension:

    [*,_1,file,files]  → quant(context, count, "file", "files")
    [#,_1]             → numf(context, value)
    [shout,_1]         → shout(context, value)

Every extension receives the calling context (a TranslationHandle) first,
then the evaluated argument values in source order, and returns a value
that is stringified when concatenated.

Architecture:
    - ExtensionRegistry: name → callable mapping consulted at compile time
    - Names follow the pattern identifier grammar so they can be written
      in a directive
    - Built-ins: quant (pluralization) and numf (Babel decimal formatting)

Python 3.13+.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterator, Mapping
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Protocol

from babel.numbers import format_decimal

from bracketlex.diagnostics import ErrorTemplate, UnknownExtensionError

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "BUILTIN_EXTENSIONS",
    "Extension",
    "ExtensionContext",
    "ExtensionRegistry",
    "numf",
    "quant",
]

logger = logging.getLogger(__name__)

_EXTENSION_NAME = re.compile(r"[A-Za-z_$]\w*", re.ASCII)


class ExtensionContext(Protocol):
    """What extensions may rely on in their first argument."""

    @property
    def babel_locale(self) -> Locale: ...

    def quantify(
        self,
        count: object,
        singular: str,
        plural: str | None = None,
        zero: str | None = None,
    ) -> str: ...


type Extension = Callable[..., object]
"""Extension callable: (context, *values) -> value."""


def quant(
    context: ExtensionContext,
    count: object,
    singular: object = "",
    plural: object = None,
    zero: object = None,
    /,
) -> str:
    """Pluralization extension behind the ``*`` method token.

    Example:
        [*,_1,_1 file,_1 files,no files]
    """
    return context.quantify(
        count,
        str(singular),
        None if plural is None else str(plural),
        None if zero is None else str(zero),
    )


def numf(context: ExtensionContext, value: object, number_format: object = None, /) -> str:
    """Locale-aware decimal formatting behind the ``#`` method token.

    The optional second argument is a Babel/CLDR number pattern.
    Values that are not numeric are returned unchanged (as text) with a
    warning, so rendering never stops on a bad argument.

    Example:
        [#,_1]        → "1,234.5" (en) / "1.234,5" (de)
        [#,_1,0.00]   → "1234.50"
    """
    if value is None or value == "":
        return ""
    try:
        number = value if isinstance(value, int | float | Decimal) else Decimal(str(value))
    except InvalidOperation:
        logger.warning("numf: %r is not a number; rendering it unformatted", value)
        return str(value)
    pattern = str(number_format) if number_format else None
    return str(format_decimal(number, format=pattern, locale=context.babel_locale))


BUILTIN_EXTENSIONS: Mapping[str, Extension] = {"quant": quant, "numf": numf}


class ExtensionRegistry:
    """Name → extension mapping consulted by the template compiler.

    Supports dict-like introspection:
        - __iter__: Iterate over extension names
        - __len__: Count registered extensions
        - __contains__: Check if an extension exists

    Example:
        >>> registry = ExtensionRegistry.with_builtins()
        >>> registry.register("shout", lambda ctx, text: str(text).upper())
        >>> "shout" in registry
        True
        >>> sorted(registry)
        ['numf', 'quant', 'shout']
    """

    __slots__ = ("_extensions",)

    def __init__(self, extensions: Mapping[str, Extension] | None = None) -> None:
        self._extensions: dict[str, Extension] = {}
        for name, func in (extensions or {}).items():
            self.register(name, func)

    @classmethod
    def with_builtins(cls, extra: Mapping[str, Extension] | None = None) -> ExtensionRegistry:
        """Registry holding quant, numf and any extra extensions."""
        registry = cls(BUILTIN_EXTENSIONS)
        for name, func in (extra or {}).items():
            registry.register(name, func)
        return registry

    def register(self, name: str, func: Extension) -> None:
        """Register (or replace) an extension.

        Args:
            name: Name used in patterns, e.g. "shout" for [shout,_1]
            func: Callable (context, *values) -> value

        Raises:
            ValueError: If name does not match the pattern identifier grammar
            TypeError: If func is not callable
        """
        if not isinstance(name, str) or not _EXTENSION_NAME.fullmatch(name):
            raise ValueError(str(ErrorTemplate.invalid_extension_name(name)))
        if not callable(func):
            msg = f"Extension '{name}' must be callable, got {type(func).__name__}"
            raise TypeError(msg)
        self._extensions[name] = func
        logger.debug("Registered extension: %s", name)

    def resolve(self, name: str) -> Extension:
        """Look up an extension by name.

        Raises:
            UnknownExtensionError: If no extension has this name
        """
        try:
            return self._extensions[name]
        except KeyError:
            raise UnknownExtensionError(
                ErrorTemplate.unknown_extension(name), name=name
            ) from None

    def copy(self) -> ExtensionRegistry:
        """Independent copy; registering on it does not affect this registry."""
        return ExtensionRegistry(self._extensions)

    def __contains__(self, name: object) -> bool:
        return name in self._extensions

    def __iter__(self) -> Iterator[str]:
        return iter(self._extensions)

    def __len__(self) -> int:
        return len(self._extensions)

    def __repr__(self) -> str:
        return f"ExtensionRegistry({sorted(self._extensions)!r})"

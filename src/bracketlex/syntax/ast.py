"""Bracket-notation AST node definitions.

Four node kinds cover the whole template language:

    Literal    plain text (escapes already removed)
    Reference  positional argument, 1-based, negative counts from the end
    Call       named extension function applied to argument nodes
    Sequence   ordered concatenation of nodes

Includes type guards as static methods (eliminates isinstance noise in
the compiler).

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from typing import TypeIs

__all__ = [
    "ASTNode",
    "Call",
    "Literal",
    "Reference",
    "Sequence",
]


@dataclass(frozen=True, slots=True)
class Literal:
    """Literal text.

    Example:
        "Use ~[bracket~]" → Literal("Use [bracket]")
    """

    text: str

    @staticmethod
    def guard(node: object) -> TypeIs["Literal"]:
        """Type guard for Literal."""
        return isinstance(node, Literal)


@dataclass(frozen=True, slots=True)
class Reference:
    """Positional argument reference.

    Index 0 is the calling context; 1 is the first caller argument.
    Negative indices count from the end of the argument vector.

    Examples:
        [_1]  → Reference(1)
        [_-1] → Reference(-1)
    """

    index: int

    @staticmethod
    def guard(node: object) -> TypeIs["Reference"]:
        """Type guard for Reference."""
        return isinstance(node, Reference)


@dataclass(frozen=True, slots=True)
class Call:
    """Extension function call.

    Examples:
        [*,_1,file,files] → Call("quant", (Reference(1), Literal("file"), Literal("files")))
        [#,_1]            → Call("numf", (Reference(1),))
        [shout,_2]        → Call("shout", (Reference(2),))
    """

    name: str
    args: tuple["ASTNode", ...] = ()

    @staticmethod
    def guard(node: object) -> TypeIs["Call"]:
        """Type guard for Call."""
        return isinstance(node, Call)


@dataclass(frozen=True, slots=True)
class Sequence:
    """Concatenation of nodes in source order.

    The parser always returns a Sequence at top level.
    """

    items: tuple["ASTNode", ...] = ()

    @staticmethod
    def guard(node: object) -> TypeIs["Sequence"]:
        """Type guard for Sequence."""
        return isinstance(node, Sequence)


type ASTNode = Literal | Reference | Call | Sequence
"""Any node of the template AST."""

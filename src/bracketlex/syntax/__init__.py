"""Bracket-notation syntax package.

Provides the pattern parser, AST node definitions and the immutable cursor.
Separate from runtime so patterns can be validated without compiling them.

Python 3.13+.
"""

from .ast import ASTNode, Call, Literal, Reference, Sequence
from .cursor import Cursor, ParseResult
from .parser import TemplateParser, parse_pattern, unescape

__all__ = [
    "ASTNode",
    "Call",
    "Cursor",
    "Literal",
    "ParseResult",
    "Reference",
    "Sequence",
    "TemplateParser",
    "parse_pattern",
    "unescape",
]

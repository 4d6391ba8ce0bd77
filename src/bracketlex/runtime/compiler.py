"""Template compiler: AST → executable Formatter.

Each AST node compiles to a small evaluator closure over the runtime
argument vector ``argv = (context, *args)``. Source index N selects
``argv[N]``, so ``[_1]`` is the first caller argument and ``argv[0]`` is the
calling context (the translation handle).

Extension names in Call nodes are resolved once, at compile time, against
an :class:`~bracketlex.runtime.extensions.ExtensionRegistry`.

Besides the callable, every Formatter carries a Python-expression rendering
of its tree (``Formatter.source``) for diagnostics. A pure-literal pattern
renders as a single string literal that ``ast.literal_eval`` turns back into
the original text.

Python 3.13+.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from typing import TYPE_CHECKING

from bracketlex.syntax.ast import ASTNode, Call, Literal, Reference, Sequence

if TYPE_CHECKING:
    from bracketlex.runtime.extensions import ExtensionRegistry

__all__ = ["Formatter", "compile_pattern", "escape_literal", "render_source", "stringify"]

logger = logging.getLogger(__name__)

type ArgumentVector = tuple[object, ...]
type Evaluator = Callable[[ArgumentVector], object]

_NAMED_ESCAPES: dict[str, str] = {
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
    '"': '\\"',
    "\\": "\\\\",
}

# Named escapes plus every other C0 and C1 control and DEL.
_NEEDS_ESCAPE = re.compile("[\x00-\x1f\x7f-\x9f\"\\\\\u2028\u2029]")


def escape_literal(text: str) -> str:
    """Render text as a double-quoted Python string literal.

    Example:
        >>> print(escape_literal('say "hi"\\n'))
        "say \\"hi\\"\\n"
    """
    escaped = _NEEDS_ESCAPE.sub(
        lambda m: _NAMED_ESCAPES.get(m.group(), f"\\x{ord(m.group()):02x}"), text
    )
    return f'"{escaped}"'


def stringify(value: object) -> str:
    """Text contributed by a value to a concatenation (None → "")."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


class Formatter:
    """Compiled pattern.

    Call it as ``formatter(context, *args)``; the result is always a str.

    Attributes:
        pattern: Source pattern this formatter was compiled from
        source: Python-expression rendering of the compiled tree
    """

    __slots__ = ("_evaluate", "pattern", "source")

    def __init__(self, evaluate: Evaluator, *, pattern: str, source: str) -> None:
        self._evaluate = evaluate
        self.pattern = pattern
        self.source = source

    def __call__(self, context: object, /, *args: object) -> str:
        return stringify(self._evaluate((context, *args)))

    def __repr__(self) -> str:
        return f"Formatter(pattern={self.pattern!r})"


def compile_pattern(
    ast: Sequence, extensions: ExtensionRegistry, *, pattern: str = ""
) -> Formatter:
    """Compile a parsed pattern.

    Args:
        ast: Top-level Sequence from parse_pattern
        extensions: Registry used to resolve Call names
        pattern: Source text, kept on the Formatter for diagnostics

    Returns:
        Formatter

    Raises:
        UnknownExtensionError: If a Call names an unregistered extension
    """
    evaluate = _compile_node(ast, extensions)
    formatter = Formatter(evaluate, pattern=pattern, source=render_source(ast))
    logger.debug("Compiled pattern %r", pattern)
    return formatter


def _compile_node(node: ASTNode, extensions: ExtensionRegistry) -> Evaluator:
    match node:
        case Literal(text=text):
            return lambda _argv: text
        case Reference(index=index):
            return _compile_reference(index)
        case Call(name=name, args=args):
            function = extensions.resolve(name)
            evaluators = tuple(_compile_node(arg, extensions) for arg in args)

            def call(argv: ArgumentVector) -> object:
                return function(argv[0], *(evaluate(argv) for evaluate in evaluators))

            return call
        case Sequence(items=items):
            evaluators = tuple(_compile_node(item, extensions) for item in items)
            return lambda argv: "".join(stringify(evaluate(argv)) for evaluate in evaluators)


def _compile_reference(index: int) -> Evaluator:
    def select(argv: ArgumentVector) -> object:
        position = index if index >= 0 else len(argv) + index
        if 0 <= position < len(argv):
            return argv[position]
        return None

    return select


def render_source(node: ASTNode) -> str:
    """Render an AST as a Python expression over ``args`` and ``extensions``.

    Example:
        >>> from bracketlex.syntax import parse_pattern
        >>> render_source(parse_pattern("Hi [_1]"))
        'concat("Hi ", args[1])'
        >>> render_source(parse_pattern("plain"))
        '"plain"'
    """
    match node:
        case Literal(text=text):
            return escape_literal(text)
        case Reference(index=index) if index >= 0:
            return f"args[{index}]"
        case Reference(index=index):
            return f"args[len(args) - {-index}]"
        case Call(name=name, args=args):
            rendered = ", ".join(["args[0]", *(render_source(arg) for arg in args)])
            return f"extensions[{name!r}]({rendered})"
        case Sequence(items=()):
            return '""'
        case Sequence(items=(single,)):
            return render_source(single)
        case Sequence(items=items):
            return f"concat({', '.join(render_source(item) for item in items)})"

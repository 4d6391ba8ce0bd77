"""Bracket-notation template parser.

Turns a pattern string into a :class:`~bracketlex.syntax.ast.Sequence`.

Grammar:
    pattern   := (literal | directive)*
    literal   := any char except '[' '~', OR '~' followed by one of [ ] , ~
    directive := '[' method (',' argument)* ']'
    method    := '' | '_' int | '*' | '#' | ident
    argument  := (literal-no-comma | '_' int | directive)*
    ident     := [A-Za-z_$][A-Za-z0-9_]*
    int       := '-'? digit+

Examples:
    "Hello [_1]!"              → Sequence(Literal, Sequence(Reference(1)), Literal)
    "[*,_1,file,files]"        → Sequence(Call("quant", ...))
    "Use ~[bracket~]"          → Sequence(Literal("Use [bracket]"))

Architecture:
    The parser uses the immutable cursor pattern
    (:class:`~bracketlex.syntax.cursor.Cursor`). Each sub-parser returns a
    :class:`~bracketlex.syntax.cursor.ParseResult` with the node and the
    cursor after it. Malformed input raises
    :class:`~bracketlex.diagnostics.TemplateSyntaxError` immediately; there is
    no error recovery, a pattern either compiles or it does not.
"""

import functools
import re
from collections.abc import Callable
from typing import NoReturn

from bracketlex.constants import MAX_DEPTH, MAX_PATTERN_CACHE_SIZE
from bracketlex.diagnostics import Diagnostic, ErrorTemplate, TemplateSyntaxError
from bracketlex.syntax.ast import ASTNode, Call, Literal, Reference, Sequence
from bracketlex.syntax.cursor import Cursor, ParseResult

__all__ = ["TemplateParser", "parse_pattern", "unescape"]

# Top-level text: everything up to the next unescaped '['.
_LITERAL = re.compile(r"[^\[~]*(?:~[\[\],~]?[^\[~]*)*")

# Argument text: additionally stops at ',' and ']'.
_ARGUMENT = re.compile(r"[^\[\],~]*(?:~[\[\],~]?[^\[\],~]*)*")

# Method token. Alternatives are tried in order; the empty alternative
# guarantees a match.
_METHOD = re.compile(r"_(-?\d+)|_\*|\*|\#|[a-zA-Z_$]\w*|", re.ASCII)

_BARE_REFERENCE = re.compile(r"_(-?\d+)", re.ASCII)
_ESCAPE = re.compile(r"~([\[\],~])")

# Method tokens that map to built-in extension names.
_METHOD_ALIASES: dict[str, str] = {"*": "quant", "#": "numf"}


def unescape(text: str) -> str:
    """Strip tilde escapes.

    Example:
        >>> unescape("Use ~[bracket~]")
        'Use [bracket]'
        >>> unescape("~x stays")
        '~x stays'
    """
    return _ESCAPE.sub(r"\1", text)


class TemplateParser:
    """Recursive-descent parser for one pattern.

    Attributes:
        pattern: Pattern source
        max_depth: Maximum directive nesting
    """

    __slots__ = ("max_depth", "pattern")

    def __init__(self, pattern: str, *, max_depth: int = MAX_DEPTH) -> None:
        self.pattern = pattern
        self.max_depth = max_depth

    def parse(self) -> Sequence:
        """Parse the whole pattern.

        Returns:
            Top-level Sequence of literals and directive nodes in source order

        Raises:
            TemplateSyntaxError: If the pattern is malformed
        """
        items: list[ASTNode] = []
        cursor = Cursor(self.pattern, 0)
        while not cursor.is_eof:
            text = cursor.scan(_LITERAL)
            if text.value.group():
                items.append(Literal(unescape(text.value.group())))
            cursor = text.cursor
            if cursor.is_eof:
                break
            directive = self._parse_directive(cursor, depth=1)
            if directive.value is not None:
                items.append(directive.value)
            cursor = directive.cursor
        return Sequence(tuple(items))

    def _parse_directive(self, cursor: Cursor, depth: int) -> ParseResult[ASTNode | None]:
        """Parse '[' method (',' argument)* ']' starting at '['.

        Returns None as value for the no-op directive '[]'.
        """
        if depth > self.max_depth:
            self._fail(
                functools.partial(ErrorTemplate.nesting_too_deep, max_depth=self.max_depth),
                cursor.pos,
            )
        open_pos = cursor.pos
        method = self._parse_method(cursor.advance(), open_pos)
        name, parts = method.value
        cursor = method.cursor

        while cursor.peek() == ",":
            argument = self._parse_argument(cursor.advance(), depth)
            parts.append(argument.value)
            cursor = argument.cursor
        cursor = cursor.advance()  # past ']'

        if name is not None:
            return ParseResult(Call(name, tuple(parts)), cursor)
        if not parts:
            return ParseResult(None, cursor)
        return ParseResult(Sequence(tuple(parts)), cursor)

    def _parse_method(
        self, cursor: Cursor, open_pos: int
    ) -> ParseResult[tuple[str | None, list[ASTNode]]]:
        """Parse the method token right after '['.

        Returns:
            (extension name or None for a plain sequence, seed nodes)
        """
        token = cursor.scan(_METHOD)
        after = token.cursor
        match after.peek():
            case None:
                self._fail(ErrorTemplate.unmatched_bracket, open_pos)
            case "," | "]":
                pass
            case _:
                self._fail(ErrorTemplate.unknown_context, after.pos)

        match_ = token.value
        if match_.group(1) is not None:
            return ParseResult((None, [Reference(int(match_.group(1)))]), after)
        match match_.group():
            case "":
                return ParseResult((None, []), after)
            case "_*":
                self._fail(ErrorTemplate.unsupported_reference, cursor.pos)
            case method:
                return ParseResult((_METHOD_ALIASES.get(method, method), []), after)

    def _parse_argument(self, cursor: Cursor, depth: int) -> ParseResult[ASTNode]:
        """Parse one argument up to (not including) ',' or ']'."""
        parts: list[ASTNode] = []
        while not cursor.is_eof:
            chunk = cursor.scan(_ARGUMENT)
            text = chunk.value.group()
            if text:
                if reference := _BARE_REFERENCE.fullmatch(text):
                    parts.append(Reference(int(reference.group(1))))
                elif text == "_*":
                    self._fail(ErrorTemplate.unsupported_reference, cursor.pos)
                else:
                    parts.append(Literal(unescape(text)))
            cursor = chunk.cursor
            match cursor.peek():
                case "[":
                    nested = self._parse_directive(cursor, depth + 1)
                    if nested.value is not None:
                        parts.append(nested.value)
                    cursor = nested.cursor
                case "," | "]":
                    return ParseResult(_collapse(parts), cursor)
        self._fail(ErrorTemplate.unmatched_bracket, cursor.pos)

    def _fail(self, template: Callable[[str, int], Diagnostic], position: int) -> NoReturn:
        raise TemplateSyntaxError(
            template(self.pattern, position), pattern=self.pattern, position=position
        )


def _collapse(parts: list[ASTNode]) -> ASTNode:
    """Reduce argument parts to a single node."""
    match parts:
        case []:
            return Literal("")
        case [single]:
            return single
        case _:
            return Sequence(tuple(parts))


@functools.lru_cache(maxsize=MAX_PATTERN_CACHE_SIZE)
def parse_pattern(pattern: str) -> Sequence:
    """Parse a bracket-notation pattern into an AST.

    Deterministic and pure; results are memoized (the AST is immutable).

    Args:
        pattern: Pattern source

    Returns:
        Top-level Sequence

    Raises:
        TemplateSyntaxError: If the pattern is malformed

    Example:
        >>> parse_pattern("[_1] and [_-1]")
        Sequence(items=(Sequence(items=(Reference(index=1),)), Literal(text=' and '), Sequence(items=(Reference(index=-1),))))
    """
    return TemplateParser(pattern).parse()

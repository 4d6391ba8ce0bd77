"""Immutable cursor infrastructure for type-safe parsing.

Implements the immutable cursor pattern used by the template parser.
Python 3.13+. Zero external dependencies.

Design Philosophy:
    - Cursor is immutable (frozen dataclass)
    - EOF is a state (is_eof), not a return value
    - Every advance() returns NEW cursor (prevents infinite loops)
    - Token scanning is regex-driven: scan() consumes the longest match of
      a token regex at the current position and returns it with the new cursor
    - Line:column computed on-demand (only for errors)
"""

import re
from dataclasses import dataclass

__all__ = ["Cursor", "ParseResult"]


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable source position tracker.

    Example:
        >>> cursor = Cursor("[_1]", 0)
        >>> cursor.peek()
        '['
        >>> cursor.advance().pos
        1
        >>> cursor.pos  # Original unchanged (immutability)
        0
    """

    source: str
    pos: int

    @property
    def is_eof(self) -> bool:
        """Check if at end of input."""
        return self.pos >= len(self.source)

    def peek(self, offset: int = 0) -> str | None:
        """Peek at character with offset without advancing.

        Args:
            offset: Offset from current position (0 = current, 1 = next)

        Returns:
            Character at position + offset, or None if beyond EOF
        """
        target_pos = self.pos + offset
        if target_pos >= len(self.source):
            return None
        return self.source[target_pos]

    def advance(self, count: int = 1) -> "Cursor":
        """Return new cursor advanced by count positions (clamped to EOF)."""
        new_pos = min(self.pos + count, len(self.source))
        return Cursor(self.source, new_pos)

    def scan(self, token: re.Pattern[str]) -> "ParseResult[re.Match[str]]":
        """Match a token regex at the current position.

        The regex must accept the empty string, so scanning never fails;
        an empty match leaves the position unchanged.

        Args:
            token: Compiled token regex

        Returns:
            ParseResult with the match object and the cursor past the match

        Raises:
            ValueError: If the regex does not match at this position

        Example:
            >>> import re
            >>> result = Cursor("abc]", 0).scan(re.compile(r"[a-z]*"))
            >>> result.value.group()
            'abc'
            >>> result.cursor.peek()
            ']'
        """
        match = token.match(self.source, self.pos)
        if match is None:
            msg = f"Token regex {token.pattern!r} must accept the empty string"
            raise ValueError(msg)
        return ParseResult(match, Cursor(self.source, match.end()))

    def compute_line_col(self) -> tuple[int, int]:
        """Compute line and column for current position.

        Returns:
            (line, column) tuple (1-indexed, like text editors)

        Example:
            >>> Cursor("ab\\ncd", 4).compute_line_col()
            (2, 2)
        """
        line = self.source.count("\n", 0, self.pos) + 1
        last_newline = self.source.rfind("\n", 0, self.pos)
        col = self.pos - last_newline if last_newline >= 0 else self.pos + 1
        return (line, col)


@dataclass(frozen=True, slots=True)
class ParseResult[T]:
    """Parser result containing parsed value and new cursor position.

    Type Parameters:
        T: The type of the parsed value

    Every sub-parser returns ParseResult(value, cursor_after_value).
    """

    value: T
    cursor: Cursor

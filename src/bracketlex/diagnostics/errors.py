"""bracketlex exception hierarchy with structured diagnostics.

All exceptions optionally carry a Diagnostic object for rich error
information. Missing translations are deliberately absent: they are not
errors and are handled by TranslationHandle.fail_with().

Python 3.13+. Zero external dependencies.
"""

from bracketlex.constants import SYNTAX_ERROR_MARKER

from .codes import Diagnostic

__all__ = [
    "BracketLexError",
    "ConfigurationError",
    "LexiconLoadError",
    "LoadTimeoutError",
    "NoLanguageFoundError",
    "TemplateSyntaxError",
    "UnknownExtensionError",
]


class BracketLexError(Exception):
    """Base exception for all bracketlex errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize BracketLexError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)


class ConfigurationError(BracketLexError, ValueError):
    """Invalid construction options.

    Raised at construction time, e.g. when neither ``languages`` nor
    ``lexicons`` is given.
    """


class TemplateSyntaxError(BracketLexError):
    """Malformed bracket pattern.

    Raised when a pattern is compiled (first translate() of its key).

    Attributes:
        pattern: The full pattern source
        position: Character offset of the error
    """

    def __init__(self, message: str | Diagnostic, *, pattern: str, position: int) -> None:
        """Initialize TemplateSyntaxError.

        Args:
            message: Error message string OR Diagnostic object
            pattern: The pattern being parsed
            position: Character offset where parsing failed
        """
        super().__init__(message)
        self.pattern = pattern
        self.position = position

    @property
    def context(self) -> str:
        """Pattern with a marker inserted at the error position.

        Example:
            >>> err = TemplateSyntaxError("x", pattern="a [b", position=2)
            >>> err.context
            'a  <-- HERE --> [b'
        """
        return self.pattern[: self.position] + SYNTAX_ERROR_MARKER + self.pattern[self.position :]


class UnknownExtensionError(BracketLexError, LookupError):
    """Pattern calls a function that is not registered.

    Example:
        greeting = [shout,_1]  ← no 'shout' extension registered

    Attributes:
        name: The unknown extension name
    """

    def __init__(self, message: str | Diagnostic, *, name: str) -> None:
        super().__init__(message)
        self.name = name


class NoLanguageFoundError(BracketLexError, LookupError):
    """Requested tag, its broader tags and the fallback chain all missed.

    Attributes:
        requested: The tag originally requested
    """

    def __init__(self, message: str | Diagnostic, *, requested: str) -> None:
        super().__init__(message)
        self.requested = requested


class LexiconLoadError(BracketLexError):
    """Lexicon for a tag could not be made available.

    Delivered to error callbacks and futures rather than raised directly.

    Attributes:
        tag: The language tag that failed to load
    """

    def __init__(self, message: str | Diagnostic, *, tag: str) -> None:
        super().__init__(message)
        self.tag = tag


class LoadTimeoutError(LexiconLoadError):
    """Lexicon resource did not arrive within the load timeout.

    Recoverable: callers may retry, which starts a fresh load.
    """

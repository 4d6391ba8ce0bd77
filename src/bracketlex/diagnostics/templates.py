"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from bracketlex.constants import SYNTAX_ERROR_MARKER

from .codes import Diagnostic, DiagnosticCode, SourceSpan

__all__ = ["ErrorTemplate"]


def _span_at(pattern: str, position: int) -> SourceSpan:
    """Build a zero-width span with 1-indexed line and column."""
    line = pattern.count("\n", 0, position) + 1
    last_newline = pattern.rfind("\n", 0, position)
    column = position - last_newline if last_newline >= 0 else position + 1
    return SourceSpan(start=position, end=position, line=line, column=column)


def _mark(pattern: str, position: int) -> str:
    return pattern[:position] + SYNTAX_ERROR_MARKER + pattern[position:]


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This keeps messages testable and documents every error case in one place.
    """

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @staticmethod
    def languages_required() -> Diagnostic:
        """Neither languages nor lexicons supplied at construction."""
        return Diagnostic(
            code=DiagnosticCode.LANGUAGES_REQUIRED,
            message="languages must not be empty",
            hint="Pass languages=[...] or eager lexicons={tag: {...}}",
        )

    @staticmethod
    def invalid_option(name: str, value: object, reason: str) -> Diagnostic:
        """Construction option has an unusable value.

        Args:
            name: Option name
            value: Rejected value
            reason: What the option requires
        """
        msg = f"Invalid value for option '{name}': {value!r} ({reason})"
        return Diagnostic(code=DiagnosticCode.INVALID_OPTION, message=msg)

    @staticmethod
    def unknown_option(name: str) -> Diagnostic:
        """Option mapping contains a key that is not recognized."""
        msg = f"Unknown option '{name}'"
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_OPTION,
            message=msg,
            hint="Recognized options: loadTimeout, baseUrl, fallbackLanguages, "
            "languages, lexicons, defaultDomain",
        )

    # ------------------------------------------------------------------
    # Syntax
    # ------------------------------------------------------------------

    @staticmethod
    def unmatched_bracket(pattern: str, position: int) -> Diagnostic:
        """Directive opened with '[' is never closed.

        Args:
            pattern: Full pattern source
            position: Offset reported for the error
        """
        msg = f"Unmatched '[': {_mark(pattern, position)}"
        return Diagnostic(
            code=DiagnosticCode.UNMATCHED_BRACKET,
            message=msg,
            span=_span_at(pattern, position),
            hint="Close every '[' with ']' or escape it as '~['",
        )

    @staticmethod
    def unknown_context(pattern: str, position: int) -> Diagnostic:
        """Method token of a directive is not followed by ',' or ']'."""
        msg = f"Unknown context: {_mark(pattern, position)}"
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_CONTEXT,
            message=msg,
            span=_span_at(pattern, position),
            hint="A directive starts with '', '_N', '*', '#' or a function name",
        )

    @staticmethod
    def unsupported_reference(pattern: str, position: int) -> Diagnostic:
        """The '_*' reference form was used."""
        msg = f"'_*' is not supported: {_mark(pattern, position)}"
        return Diagnostic(
            code=DiagnosticCode.UNSUPPORTED_REFERENCE,
            message=msg,
            span=_span_at(pattern, position),
            hint="Reference arguments individually as _1, _2, ... or _-1",
        )

    @staticmethod
    def nesting_too_deep(pattern: str, position: int, max_depth: int) -> Diagnostic:
        """Bracket nesting exceeds the parser depth limit."""
        msg = f"Directives nested deeper than {max_depth} levels: {_mark(pattern, position)}"
        return Diagnostic(
            code=DiagnosticCode.NESTING_DEPTH_EXCEEDED,
            message=msg,
            span=_span_at(pattern, position),
        )

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    @staticmethod
    def no_language_found(requested: str) -> Diagnostic:
        """Resolver exhausted tag, broader tags and fallback chain."""
        msg = f"No language to load was found for '{requested}'"
        return Diagnostic(
            code=DiagnosticCode.NO_LANGUAGE_FOUND,
            message=msg,
            hint="Declare the language or add a fallback language that is available",
        )

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @staticmethod
    def load_timeout(tag: str, timeout: float) -> Diagnostic:
        """Lexicon resource did not arrive in time."""
        msg = f"Can't load lexicon for '{tag}': no resource within {timeout:g}s"
        return Diagnostic(
            code=DiagnosticCode.LOAD_TIMEOUT,
            message=msg,
            hint="Check base_url and the resource loader, or raise load_timeout",
        )

    @staticmethod
    def load_failed(tag: str, reason: object) -> Diagnostic:
        """Resource loader raised while fetching a lexicon."""
        msg = f"Can't load lexicon for '{tag}': {reason}"
        return Diagnostic(code=DiagnosticCode.LOAD_FAILED, message=msg)

    @staticmethod
    def base_load_failed(tag: str, base: str) -> Diagnostic:
        """Base lexicon of an inheriting lexicon could not be loaded."""
        msg = f"Can't load base lexicon '{base}' for '{tag}'"
        return Diagnostic(
            code=DiagnosticCode.BASE_LOAD_FAILED,
            message=msg,
            hint="Base lexicons must be available; there is no empty fallback base",
        )

    # ------------------------------------------------------------------
    # Extensions
    # ------------------------------------------------------------------

    @staticmethod
    def unknown_extension(name: str) -> Diagnostic:
        """Pattern calls an extension that is not registered."""
        msg = f"Unknown extension '{name}'"
        return Diagnostic(
            code=DiagnosticCode.UNKNOWN_EXTENSION,
            message=msg,
            hint=f"Register it with Localizer.register_extension('{name}', func)",
        )

    @staticmethod
    def invalid_extension_name(name: str) -> Diagnostic:
        """Extension name cannot be written in a pattern."""
        msg = f"Invalid extension name {name!r}: must match [A-Za-z_$][A-Za-z0-9_]*"
        return Diagnostic(code=DiagnosticCode.INVALID_EXTENSION_NAME, message=msg)

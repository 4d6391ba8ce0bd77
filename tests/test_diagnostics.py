"""Tests for diagnostics: codes, spans, templates and exceptions."""

import pytest

from bracketlex.diagnostics import (
    BracketLexError,
    ConfigurationError,
    Diagnostic,
    DiagnosticCode,
    ErrorTemplate,
    LexiconLoadError,
    LoadTimeoutError,
    NoLanguageFoundError,
    SourceSpan,
    TemplateSyntaxError,
    UnknownExtensionError,
)


class TestSourceSpan:
    """Span validation."""

    def test_valid(self) -> None:
        """Zero-width spans are allowed."""
        span = SourceSpan(start=3, end=3, line=1, column=4)
        assert span.column == 4

    @pytest.mark.parametrize(
        ("start", "end", "line", "column"),
        [(-1, 0, 1, 1), (5, 4, 1, 1), (0, 0, 0, 1), (0, 0, 1, 0)],
    )
    def test_invalid(self, start: int, end: int, line: int, column: int) -> None:
        """Negative offsets, reversed ranges and 0-based positions raise."""
        with pytest.raises(ValueError):
            SourceSpan(start=start, end=end, line=line, column=column)


class TestDiagnostic:
    """Diagnostic rendering."""

    def test_str_is_message(self) -> None:
        """str() gives the message."""
        diagnostic = Diagnostic(code=DiagnosticCode.LOAD_FAILED, message="boom")
        assert str(diagnostic) == "boom"

    def test_format_error_minimal(self) -> None:
        """Without span and hint only the header line is rendered."""
        diagnostic = Diagnostic(code=DiagnosticCode.LOAD_FAILED, message="boom")
        assert diagnostic.format_error() == "error[LOAD_FAILED]: boom"

    def test_format_error_escapes_newlines(self) -> None:
        """Multi-line patterns stay on one header line."""
        diagnostic = ErrorTemplate.unknown_context("a\n[b c]", 4)
        header = diagnostic.format_error().splitlines()[0]
        assert "a\\n[b" in header
        assert "  --> line 2, column 3" in diagnostic.format_error()


class TestTemplates:
    """ErrorTemplate messages."""

    def test_unmatched_bracket(self) -> None:
        """The message marks the position."""
        diagnostic = ErrorTemplate.unmatched_bracket("Hi [_1", 3)
        assert diagnostic.code == DiagnosticCode.UNMATCHED_BRACKET
        assert diagnostic.message == "Unmatched '[': Hi  <-- HERE --> [_1"
        assert diagnostic.span == SourceSpan(start=3, end=3, line=1, column=4)

    def test_load_timeout(self) -> None:
        """Timeouts are shown compactly."""
        assert "within 0.05s" in ErrorTemplate.load_timeout("en", 0.05).message

    def test_unknown_extension_hint(self) -> None:
        """The hint names the registration call."""
        hint = ErrorTemplate.unknown_extension("shout").hint
        assert hint is not None
        assert "register_extension('shout'" in hint

    def test_no_language_found(self) -> None:
        """The message quotes the request."""
        assert "'xx'" in ErrorTemplate.no_language_found("xx").message


class TestExceptions:
    """Exception hierarchy."""

    @pytest.mark.parametrize(
        ("error", "bases"),
        [
            (ConfigurationError("x"), (BracketLexError, ValueError)),
            (UnknownExtensionError("x", name="n"), (BracketLexError, LookupError)),
            (NoLanguageFoundError("x", requested="r"), (BracketLexError, LookupError)),
            (LoadTimeoutError("x", tag="t"), (LexiconLoadError, BracketLexError)),
        ],
    )
    def test_hierarchy(self, error: BracketLexError, bases: tuple[type, ...]) -> None:
        """Each error is catchable by its documented bases."""
        assert isinstance(error, bases)

    def test_plain_message(self) -> None:
        """String messages carry no diagnostic."""
        error = BracketLexError("plain")
        assert error.diagnostic is None
        assert str(error) == "plain"

    def test_diagnostic_message(self) -> None:
        """Diagnostics become the exception message."""
        diagnostic = ErrorTemplate.languages_required()
        error = ConfigurationError(diagnostic)
        assert error.diagnostic is diagnostic
        assert str(error) == "languages must not be empty"

    def test_syntax_error_context(self) -> None:
        """context inserts the marker at position."""
        error = TemplateSyntaxError("x", pattern="a [b", position=2)
        assert error.context == "a  <-- HERE --> [b"

    def test_attributes(self) -> None:
        """Keyword attributes are kept."""
        assert LexiconLoadError("x", tag="de").tag == "de"
        assert NoLanguageFoundError("x", requested="xx").requested == "xx"
        assert UnknownExtensionError("x", name="f").name == "f"

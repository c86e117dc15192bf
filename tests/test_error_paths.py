"""Error-path and malformed input tests.

Tests that exercise error handling and edge cases for input the grammar
does not accept. These complement the happy-path tests in test_api.py.
"""

import pytest

from marcado import parse
from marcado.errors import MarcadoError, ParseError
from marcado.location import SourceLocation, Span
from marcado.parsing.failure import ControlFlow, Failure, FailureKind, fatal, recoverable

# =========================================================================
# ParseError construction and formatting
# =========================================================================


class TestParseErrorFormatting:
    """Verify ParseError produces well-formatted messages."""

    def test_message_only(self) -> None:
        err = ParseError("unexpected token")
        assert str(err) == "unexpected token"
        assert err.lineno is None
        assert err.col_offset is None
        assert err.failure is None
        assert not err.is_fatal

    def test_with_line_number(self) -> None:
        err = ParseError("bad syntax", lineno=42)
        assert str(err) == "42 bad syntax"

    def test_with_line_and_column(self) -> None:
        err = ParseError("missing fence", lineno=10, col_offset=5)
        assert "10:5" in str(err)

    def test_with_source_file(self) -> None:
        err = ParseError("error", lineno=1, col_offset=1, source_file="test.md")
        assert str(err) == "test.md:1:1 error"

    def test_is_marcado_error(self) -> None:
        assert isinstance(ParseError("x"), MarcadoError)

    def test_carries_failure(self) -> None:
        failure = fatal(FailureKind.ENTITY, Span(0, 4))
        err = ParseError("malformed entity", failure=failure, span=failure.span)
        assert err.is_fatal
        assert err.span == Span(0, 4)


# =========================================================================
# Failure values
# =========================================================================


class TestFailureChain:
    """Failures keep the chain of rules they passed through."""

    def test_str_lists_chain(self) -> None:
        inner = recoverable(FailureKind.LINE_ENDING, Span(0, 1))
        outer = inner.wrap(FailureKind.BLANK_LINE)
        assert str(outer) == "recoverable failure parsing `blank-line <- line-ending` at 0..1"

    def test_root(self) -> None:
        inner = fatal(FailureKind.FENCED_CODE, Span(3, 8))
        outer = inner.wrap(FailureKind.BLOCK)
        assert outer.root() is inner
        assert outer.control_flow is ControlFlow.FATAL
        assert [f.kind for f in outer.chain()] == [FailureKind.BLOCK, FailureKind.FENCED_CODE]

    def test_into_fatal_keeps_span(self) -> None:
        failure = recoverable(FailureKind.CHAR, Span.at(2)).into_fatal()
        assert failure == Failure(FailureKind.CHAR, ControlFlow.FATAL, Span.at(2))


# =========================================================================
# Document-level failures
# =========================================================================


class TestDocumentErrors:
    """parse() turns failures into ParseError."""

    def test_longer_closing_fence(self) -> None:
        source = "# ok\n```\nx\n````\n"
        with pytest.raises(ParseError) as exc_info:
            parse(source)
        err = exc_info.value
        assert err.is_fatal
        assert err.message == "malformed fenced-code"
        assert err.span == Span(11, 15)
        assert (err.lineno, err.col_offset) == (4, 1)
        assert err.failure.kind is FailureKind.BLOCK
        assert err.failure.root().kind is FailureKind.FENCED_CODE

    def test_unrecognized_line_spans_whole_line(self) -> None:
        source = "***\r\n  +++\r\n"
        with pytest.raises(ParseError) as exc_info:
            parse(source)
        err = exc_info.value
        assert not err.is_fatal
        assert err.message == "line does not parse as markdown content"
        # Up to the \n; the \r stays inside the reported line
        assert err.span == Span(5, 11)
        assert err.lineno == 2

    def test_unrecognized_last_line(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse("\n\n#nope")
        assert exc_info.value.span == Span(2, 7)
        assert exc_info.value.lineno == 3

    @pytest.mark.parametrize(
        "source",
        ["#foo", "- * -", "** *x", "~~", "\\*", "&amp;", "#######"],
    )
    def test_rejected_lines(self, source: str) -> None:
        with pytest.raises(ParseError):
            parse(source)

    def test_lone_carriage_return_is_not_a_line_ending(self) -> None:
        with pytest.raises(ParseError):
            parse("***\r# next")


# =========================================================================
# SourceLocation
# =========================================================================


class TestSourceLocation:
    """Offsets to line/column conversion."""

    def test_from_span(self) -> None:
        loc = SourceLocation.from_span("ab\ncd", Span(4, 5), source_file="x.md")
        assert (loc.lineno, loc.col_offset) == (2, 2)
        assert str(loc) == "x.md:2:2"

    def test_unknown_span(self) -> None:
        assert SourceLocation.from_span("abc", Span.unknown()) == SourceLocation.unknown()

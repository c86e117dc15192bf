"""Tests for ATX heading lines."""

import pytest

from marcado import ParseConfig, parse_config_context, parse_rule
from marcado.input import Input
from marcado.location import Span
from marcado.nodes import AtxHeading, LineEnding
from marcado.parsing.blocks import atx_heading, leading_pounds
from marcado.parsing.failure import FailureKind, failed


def _at(source: str, offset: int, text: str) -> Input:
    return Input.at(source, offset, text)


class TestLeadingPounds:
    """The opening run of #."""

    @pytest.mark.parametrize("count", range(1, 7))
    def test_valid_counts(self, count: int) -> None:
        node, _ = parse_rule(leading_pounds, "#" * count)
        assert len(node) == count

    def test_no_pounds(self) -> None:
        result, _ = parse_rule(leading_pounds, "  ")
        assert failed(result)
        assert result.is_recoverable
        assert result.kind is FailureKind.LEADING_POUNDS
        assert result.span == Span(0, 0)

    def test_too_many_pounds(self) -> None:
        result, _ = parse_rule(leading_pounds, "#######")
        assert failed(result)
        assert result.kind is FailureKind.LEADING_POUNDS
        assert result.span == Span(0, 7)

    def test_limit_from_config(self) -> None:
        with parse_config_context(ParseConfig(max_heading_level=7)):
            node, _ = parse_rule(leading_pounds, "#######")
        assert len(node) == 7


class TestAtxHeading:
    """Whole heading lines."""

    def test_indented_heading_with_crlf(self) -> None:
        source = " ###### hello world\r\n"
        node, rest = parse_rule(atx_heading, source)
        assert node == AtxHeading(
            indentation=_at(source, 0, " "),
            pounds=_at(source, 1, "######"),
            separator=_at(source, 7, " "),
            content=_at(source, 8, "hello world"),
            closing_sequence=None,
            trailing=_at(source, 19, ""),
            line_ending=LineEnding(_at(source, 19, "\r\n"), "crlf"),
        )
        assert node.level == 6
        assert rest.is_empty()

    def test_trailing_whitespace_split_off(self) -> None:
        source = "###### hello world "
        node, _ = parse_rule(atx_heading, source)
        assert node.content == _at(source, 7, "hello world")
        assert node.trailing == _at(source, 18, " ")
        assert node.line_ending is None

    def test_empty_heading_with_separator(self) -> None:
        source = "   # "
        node, _ = parse_rule(atx_heading, source)
        assert node.indentation == _at(source, 0, "   ")
        assert node.pounds == _at(source, 3, "#")
        assert node.separator == _at(source, 4, " ")
        assert node.content == _at(source, 5, "")

    @pytest.mark.parametrize("source", ["#\n", "   #\r\n", "### \n", "## "])
    def test_empty_headings(self, source: str) -> None:
        node, _ = parse_rule(atx_heading, source)
        assert node.text == ""

    @pytest.mark.parametrize("count", range(1, 7))
    def test_levels(self, count: int) -> None:
        node, _ = parse_rule(atx_heading, "#" * count + " foo")
        assert node.level == count
        assert node.text == "foo"

    def test_seven_pounds_fail(self) -> None:
        result, _ = parse_rule(atx_heading, "####### foo")
        assert failed(result)
        assert result.is_recoverable
        assert result.kind is FailureKind.ATX_HEADING
        assert result.cause.kind is FailureKind.LEADING_POUNDS

    @pytest.mark.parametrize(
        "source,offset",
        [("#", 1), ("   #", 4), ("#foo", 1), ("#5 bolt", 1)],
    )
    def test_no_separator_and_no_line_ending(self, source: str, offset: int) -> None:
        result, rest = parse_rule(atx_heading, source)
        assert failed(result)
        assert result.is_recoverable
        assert result.kind is FailureKind.ATX_HEADING
        assert result.span == Span.at(offset)
        assert str(rest) == source

    def test_line_ending_stands_in_for_separator(self) -> None:
        source = "#foo\n"
        node, rest = parse_rule(atx_heading, source)
        assert node.separator == _at(source, 1, "")
        assert node.content == _at(source, 1, "foo")
        assert node.line_ending == LineEnding(_at(source, 4, "\n"), "lf")
        assert rest.is_empty()

    def test_lone_carriage_return_is_content(self) -> None:
        source = "# a\rb\n"
        node, rest = parse_rule(atx_heading, source)
        assert node.content == _at(source, 2, "a\rb")
        assert node.line_ending == LineEnding(_at(source, 5, "\n"), "lf")
        assert rest.is_empty()

    def test_four_spaces_of_indentation(self) -> None:
        result, _ = parse_rule(atx_heading, "    # foo")
        assert failed(result)
        assert result.cause.kind is FailureKind.LEADING_WHITESPACE

    def test_tab_separator(self) -> None:
        node, _ = parse_rule(atx_heading, "#\tfoo")
        assert node.separator.as_str() == "\t"
        assert node.text == "foo"

    def test_closing_sequence(self) -> None:
        source = "## foo ##  \n"
        node, _ = parse_rule(atx_heading, source)
        assert node.content == _at(source, 3, "foo")
        assert node.closing_sequence == _at(source, 6, " ##")
        assert node.trailing == _at(source, 9, "  ")

    def test_closing_sequence_only(self) -> None:
        source = "### ###"
        node, _ = parse_rule(atx_heading, source)
        assert node.text == ""
        assert node.closing_sequence == _at(source, 4, "###")

    @pytest.mark.parametrize("source,text", [("# foo#", "foo#"), ("# foo \\#", "foo \\#")])
    def test_pounds_that_are_content(self, source: str, text: str) -> None:
        node, _ = parse_rule(atx_heading, source)
        assert node.text == text
        assert node.closing_sequence is None

    def test_leaves_next_line(self) -> None:
        node, rest = parse_rule(atx_heading, "# a\n# b\n")
        assert node.text == "a"
        assert str(rest) == "# b\n"

    def test_round_trip(self) -> None:
        source = "  ## Title text ###   \r\n"
        node, _ = parse_rule(atx_heading, source)
        assert node.as_str() == source
        assert node.to_span() == Span(0, len(source))

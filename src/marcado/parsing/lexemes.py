"""Token-level lexemes: whitespace, indentation, line endings, blank lines.

These are the building blocks of every line-oriented rule. Indentation is
measured in columns, with tabs advancing to the next tab stop from the
active ParseConfig.

"""

from __future__ import annotations

from marcado.config import get_parse_config
from marcado.input import Input
from marcado.nodes import BlankLine, LineEnding
from marcado.parsing.charsets import is_whitespace
from marcado.parsing.combinators import Rule, bounded, first_of, keyword, take_while
from marcado.parsing.failure import Failure, FailureKind, failed, recoverable
from marcado.utils.text import column_width

_take_whitespace = take_while(is_whitespace)

_lf = keyword("\n")
_crlf = keyword("\r\n")


def whitespace(input: Input) -> Input:
    """Longest run of non-line-breaking whitespace (``S``); may be empty."""
    return _take_whitespace(input)


def non_empty_whitespace(input: Input) -> Input | Failure:
    """Whitespace run that must not be empty (``S1``)."""
    run = _take_whitespace(input)
    if run.is_empty():
        return recoverable(FailureKind.NON_EMPTY_WHITESPACE, run.to_span())
    return run


def _columns(run: Input) -> int:
    return column_width(run.as_str(), tab_size=get_parse_config().tab_size)


def indentation_to(n: int) -> Rule[Input]:
    """Up to ``n`` columns of indentation.

    Wider indentation is a Recoverable failure, leaving the line to rules
    that accept deeper indentation (indented code).
    """
    rule = bounded(whitespace, max=n, measure=_columns, kind=FailureKind.LEADING_WHITESPACE)
    rule.__name__ = f"indentation_to_{n}"
    return rule


def indentation_from(n: int) -> Rule[Input]:
    """``n`` or more columns of indentation."""
    rule = bounded(whitespace, min=n, measure=_columns, kind=FailureKind.LEADING_WHITESPACE)
    rule.__name__ = f"indentation_from_{n}"
    return rule


# CRLF must be tried before LF.
_line_ending = first_of(_crlf, _lf)


def line_ending(input: Input) -> LineEnding | Failure:
    """``\\r\\n`` or ``\\n``."""
    matched = _line_ending(input)
    if failed(matched):
        return matched.wrap(FailureKind.LINE_ENDING)
    return LineEnding(matched, "crlf" if len(matched) == 2 else "lf")


def blank_line(input: Input) -> BlankLine | Failure:
    """A line consisting solely of a line ending."""
    ending = line_ending(input)
    if failed(ending):
        return ending.wrap(FailureKind.BLANK_LINE)
    return BlankLine(ending)


def rest_of_line(input: Input) -> Input:
    """Text up to the next line ending; never fails.

    Only ``\\n`` and ``\\r\\n`` end a line, so a lone ``\\r`` is content.
    """
    end = input.find("\n")
    if end < 0:
        end = len(input)
    elif end and input.source[input.start + end - 1] == "\r":
        end -= 1
    return input.split_to(end)


__all__ = [
    "blank_line",
    "indentation_from",
    "indentation_to",
    "line_ending",
    "non_empty_whitespace",
    "rest_of_line",
    "whitespace",
]

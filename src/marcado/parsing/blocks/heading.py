"""ATX headings.

Up to three columns of indentation, a run of ``#``, a separator, the
heading text, and an optional closing run of ``#``::

    ## Heading text ##

CommonMark 4.2: https://spec.commonmark.org/0.31.2/#atx-headings

The longest accepted pound run is ParseConfig.max_heading_level.

"""

from __future__ import annotations

from marcado.config import get_parse_config
from marcado.input import Input
from marcado.nodes import AtxHeading
from marcado.parsing.charsets import ATX_HEADING_MARKER, is_whitespace
from marcado.parsing.combinators import bounded, optional, take_while
from marcado.parsing.failure import Failure, FailureKind, failed, recoverable
from marcado.parsing.lexemes import indentation_to, line_ending, rest_of_line

_indentation = indentation_to(3)
_pounds = take_while(lambda c: c == ATX_HEADING_MARKER)
_separator = take_while(is_whitespace)
_optional_line_ending = optional(line_ending)


def leading_pounds(input: Input) -> Input | Failure:
    """Between 1 and ``max_heading_level`` ``#`` characters."""
    rule = bounded(
        _pounds,
        min=1,
        max=get_parse_config().max_heading_level,
        kind=FailureKind.LEADING_POUNDS,
    )
    return rule(input)


def _strip_whitespace_end(text: str, end: int) -> int:
    """Index where the whitespace run ending at ``end`` starts."""
    while end and is_whitespace(text[end - 1]):
        end -= 1
    return end


def _split_closing_sequence(content: Input) -> Input | None:
    """Split the optional closing ``#`` run (with whitespace before it) off ``content``."""
    text = content.as_str()
    body = text.rstrip(ATX_HEADING_MARKER)
    if len(body) == len(text):
        return None
    if body and not is_whitespace(body[-1]):
        # "# foo#" keeps its pound as content.
        return None
    return content.split_off(_strip_whitespace_end(text, len(body)))


def atx_heading(input: Input) -> AtxHeading | Failure:
    """Parse an ATX heading line."""
    indentation = _indentation(input)
    if failed(indentation):
        return indentation.wrap(FailureKind.ATX_HEADING)

    pounds = leading_pounds(input)
    if failed(pounds):
        return pounds.wrap(FailureKind.ATX_HEADING)

    content = rest_of_line(input)

    ending = _optional_line_ending(input)
    if failed(ending):
        return ending.wrap(FailureKind.ATX_HEADING)

    separator = _separator(content)
    if separator.is_empty() and ending is None:
        # "#foo" and "#" need whitespace or a line ending after the pounds.
        return recoverable(FailureKind.ATX_HEADING, separator.to_span())

    trailing = content.split_off(_strip_whitespace_end(content.as_str(), len(content)))
    closing = _split_closing_sequence(content)

    return AtxHeading(
        indentation=indentation,
        pounds=pounds,
        separator=separator,
        content=content,
        closing_sequence=closing,
        trailing=trailing,
        line_ending=ending,
    )

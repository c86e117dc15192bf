"""Thematic breaks.

A line of up to three columns of indentation followed by three or more
``*``, ``-`` or ``_`` characters, all the same, optionally separated by
whitespace.

CommonMark 4.1: https://spec.commonmark.org/0.31.2/#thematic-breaks

"""

from __future__ import annotations

from marcado.input import Input
from marcado.location import Span
from marcado.nodes import ThematicBreak, ThematicChars
from marcado.parsing.combinators import first_of, optional, punctuated, token
from marcado.parsing.failure import Failure, FailureKind, failed, recoverable
from marcado.parsing.lexemes import indentation_to, line_ending, non_empty_whitespace

MIN_MARKERS = 3


def _marker_run(marker: str):
    run = token(lambda c: c == marker, FailureKind.THEMATIC)

    def parse(input: Input) -> ThematicChars | Failure:
        content = run(input)
        if failed(content):
            return content
        return ThematicChars(marker, content)

    return parse


thematic_chars = first_of(_marker_run("*"), _marker_run("_"), _marker_run("-"))
thematic_chars.__doc__ = "One run of a single thematic break character."

_indentation = indentation_to(3)
_breaks = punctuated(thematic_chars, non_empty_whitespace)
_optional_line_ending = optional(line_ending)


def thematic_break(input: Input) -> ThematicBreak | Failure:
    """Parse a thematic break line."""
    indentation = _indentation(input)
    if failed(indentation):
        return indentation.wrap(FailureKind.THEMATIC)

    breaks = _breaks(input)
    if failed(breaks):
        return breaks.wrap(FailureKind.THEMATIC)

    runs = breaks.items()
    if not runs:
        return recoverable(FailureKind.THEMATIC, Span.at(input.start))

    # The first run fixes the marker for the whole line.
    marker = runs[0].marker
    for run in runs[1:]:
        if run.marker != marker:
            return recoverable(FailureKind.THEMATIC, run.to_span())

    if sum(len(run) for run in runs) < MIN_MARKERS:
        return recoverable(FailureKind.THEMATIC, breaks.to_span())

    ending = _optional_line_ending(input)
    if failed(ending):
        return ending.wrap(FailureKind.THEMATIC)
    if ending is None and not input.is_empty():
        return recoverable(FailureKind.THEMATIC, breaks.to_span())

    return ThematicBreak(indentation, breaks, ending)

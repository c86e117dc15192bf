"""Backslash escapes.

A backslash followed by one of ``* < [ ` . # & \\`` stands for that
character. A backslash followed by a line ending is a hard line break.
Anything else leaves the backslash for other rules to interpret.

"""

from __future__ import annotations

from marcado.input import Input
from marcado.location import Span
from marcado.nodes import Escaped, EscapeKind
from marcado.parsing.charsets import BACKSLASH, ESCAPABLE
from marcado.parsing.combinators import char, optional
from marcado.parsing.failure import Failure, FailureKind, failed, recoverable
from marcado.parsing.lexemes import line_ending

_backslash = char(BACKSLASH)
_optional_line_ending = optional(line_ending)


def escaped(input: Input) -> Escaped | Failure:
    """Parse a backslash escape or a backslash hard line break."""
    start = input.clone()

    opened = _backslash(input)
    if failed(opened):
        return opened.wrap(FailureKind.ESCAPED)

    target = input.peek()
    if target is not None and target in ESCAPABLE:
        input.split_to(1)
        return Escaped(EscapeKind(target), start.split_to(2))

    ending = _optional_line_ending(input)
    if failed(ending):
        return ending.wrap(FailureKind.ESCAPED)
    if ending is not None:
        return Escaped(EscapeKind.HARD_LINE_BREAK, start.split_to(1 + len(ending.content)))

    return recoverable(FailureKind.ESCAPED, Span(start.start, start.start + 1))

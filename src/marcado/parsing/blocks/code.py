"""Indented and fenced code blocks.

Indented code (CommonMark 4.4): non-blank lines indented four or more
columns, with blank lines allowed between them.

Fenced code (CommonMark 4.5): a run of three or more backticks or tildes,
a body, and a closing run of the same character. The body is not split
into lines; it runs from the end of the opening fence to the start of the
closing fence (or to end of input when the fence is never closed).

Which closing runs qualify is set by ParseConfig.fence_closing.

"""

from __future__ import annotations

from marcado.config import get_parse_config
from marcado.input import Input
from marcado.location import Span
from marcado.nodes import BlankChunk, FencedCode, IndentedChunk, IndentedCode
from marcado.parsing.charsets import FENCE_CHARS
from marcado.parsing.combinators import first_of, optional
from marcado.parsing.failure import Failure, FailureKind, failed, fatal, recoverable
from marcado.parsing.lexemes import (
    indentation_from,
    indentation_to,
    line_ending,
    rest_of_line,
    whitespace,
)

CODE_INDENT = 4
MIN_FENCE_LENGTH = 3

_code_indentation = indentation_from(CODE_INDENT)
_fence_indentation = indentation_to(3)
_optional_line_ending = optional(line_ending)


# =============================================================================
# Indented code
# =============================================================================


def indented_chunk(input: Input) -> IndentedChunk | Failure:
    """A non-blank line indented four or more columns."""
    indentation = _code_indentation(input)
    if failed(indentation):
        return indentation.wrap(FailureKind.INDENTED_NONBLANK_CHUNK)

    content = rest_of_line(input)
    if content.is_empty():
        return recoverable(FailureKind.INDENTED_NONBLANK_CHUNK, content.to_span())

    ending = _optional_line_ending(input)
    if failed(ending):
        return ending.wrap(FailureKind.INDENTED_NONBLANK_CHUNK)

    return IndentedChunk(indentation, content, ending)


def blank_chunk(input: Input) -> BlankChunk | Failure:
    """Optional whitespace followed by a line ending."""
    space = whitespace(input)
    ending = line_ending(input)
    if failed(ending):
        return ending.wrap(FailureKind.INDENTED_BLANK_CHUNK)
    return BlankChunk(space, ending)


_chunk = first_of(indented_chunk, blank_chunk)


def indented_code(input: Input) -> IndentedCode | Failure:
    """An indented code block.

    The block starts and ends with a non-blank chunk. Blank chunks after
    the last non-blank one are left in the input.
    """
    first = indented_chunk(input)
    if failed(first):
        return first.wrap(FailureKind.INDENTED_CODE)

    chunks: list[IndentedChunk | BlankChunk] = [first]
    kept = 1
    checkpoint = input.clone()

    while chunks[-1].line_ending is not None:
        chunk = _chunk(input)
        if failed(chunk):
            if chunk.is_fatal:
                return chunk.wrap(FailureKind.INDENTED_CODE)
            break
        chunks.append(chunk)
        if isinstance(chunk, IndentedChunk):
            kept = len(chunks)
            checkpoint = input.clone()

    input.restore(checkpoint)
    return IndentedCode(tuple(chunks[:kept]))


# =============================================================================
# Fenced code
# =============================================================================


def fence_opening(input: Input) -> Input | Failure:
    """Three or more identical backticks or tildes."""
    fence_char = input.peek()
    if fence_char is None or fence_char not in FENCE_CHARS:
        return recoverable(FailureKind.FENCED_CODE, Span.at(input.start))

    opening = input.split_to(input.count_while(lambda c: c == fence_char))
    if len(opening) < MIN_FENCE_LENGTH:
        return recoverable(FailureKind.FENCED_CODE, opening.to_span())
    return opening


def _find_closing_run(body: Input, fence_char: str, length: int) -> tuple[int, int] | None:
    """Offsets (relative to ``body``) of the first fence run at least ``length`` long."""
    index = body.find(fence_char * length)
    if index < 0:
        return None
    source = body.source
    end = body.start + index + length
    while end < body.end and source[end] == fence_char:
        end += 1
    return index, end - body.start


def fenced_code(input: Input) -> FencedCode | Failure:
    """A fenced code block.

    With ``fence_closing="exact"`` the first qualifying closing run must be
    exactly as long as the opening fence; a longer one is Fatal.
    """
    indentation = _fence_indentation(input)
    if failed(indentation):
        return indentation.wrap(FailureKind.FENCED_CODE)

    opening = fence_opening(input)
    if failed(opening):
        return opening

    fence_char = opening.as_str()[0]
    found = _find_closing_run(input, fence_char, len(opening))
    if found is None:
        body = input.split_to(len(input))
        return FencedCode(indentation, opening, body, None)

    start, end = found
    if end - start != len(opening) and get_parse_config().fence_closing == "exact":
        return fatal(FailureKind.FENCED_CODE, Span(input.start + start, input.start + end))

    body = input.split_to(start)
    closing = input.split_to(end - start)
    return FencedCode(indentation, opening, body, closing)

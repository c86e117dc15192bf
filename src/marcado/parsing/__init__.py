"""Parsing engine for marcado.

Every grammar rule is a function ``Input -> Node | Failure``. Rules are
plain functions composed with the combinators in
marcado.parsing.combinators; nothing here raises on a failed parse.

Modules:
- failure: ControlFlow, FailureKind, Failure
- combinators: keyword, take_while, first_of, many, punctuated, ...
- lexemes: whitespace, indentation, line endings, blank lines
- inline: backslash escapes, character references
- blocks: thematic breaks, ATX headings, code blocks, block selection
"""

from marcado.parsing.blocks import (
    BLOCK_RULES,
    atx_heading,
    blank_chunk,
    block,
    fence_opening,
    fenced_code,
    indented_chunk,
    indented_code,
    leading_pounds,
    thematic_break,
    thematic_chars,
)
from marcado.parsing.combinators import Punctuated, Rule
from marcado.parsing.failure import ControlFlow, Failure, FailureKind, failed
from marcado.parsing.inline import entity, escaped
from marcado.parsing.lexemes import (
    blank_line,
    indentation_from,
    indentation_to,
    line_ending,
    non_empty_whitespace,
    whitespace,
)

__all__ = [
    "BLOCK_RULES",
    "ControlFlow",
    "Failure",
    "FailureKind",
    "Punctuated",
    "Rule",
    "atx_heading",
    "blank_chunk",
    "blank_line",
    "block",
    "entity",
    "escaped",
    "failed",
    "fence_opening",
    "fenced_code",
    "indentation_from",
    "indentation_to",
    "indented_chunk",
    "indented_code",
    "leading_pounds",
    "line_ending",
    "non_empty_whitespace",
    "thematic_break",
    "thematic_chars",
    "whitespace",
]

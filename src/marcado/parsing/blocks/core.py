"""Block selection for a whole document.

Leaf block rules are tried in order at each line start. The order only
matters where rules overlap: blank lines and whitespace-only lines are
tried around the leaf rules, and indented code comes after the rules that
reject four columns of indentation.

"""

from __future__ import annotations

from marcado.parsing.blocks.code import blank_chunk, fenced_code, indented_code
from marcado.parsing.blocks.heading import atx_heading
from marcado.parsing.blocks.thematic import thematic_break
from marcado.parsing.combinators import first_of, labelled
from marcado.parsing.failure import FailureKind
from marcado.parsing.lexemes import blank_line

BLOCK_RULES = (
    blank_line,
    thematic_break,
    atx_heading,
    fenced_code,
    indented_code,
    blank_chunk,
)

block = labelled(first_of(*BLOCK_RULES), FailureKind.BLOCK)
block.__doc__ = "One block of a document, by the first rule in BLOCK_RULES that matches."

"""Block-level grammar rules.

Leaf blocks:
- thematic: thematic breaks
- heading: ATX headings
- code: indented and fenced code blocks

core combines them into the block rule the document parser applies.
"""

from marcado.parsing.blocks.code import (
    blank_chunk,
    fence_opening,
    fenced_code,
    indented_chunk,
    indented_code,
)
from marcado.parsing.blocks.core import BLOCK_RULES, block
from marcado.parsing.blocks.heading import atx_heading, leading_pounds
from marcado.parsing.blocks.thematic import thematic_break, thematic_chars

__all__ = [
    "BLOCK_RULES",
    "atx_heading",
    "blank_chunk",
    "block",
    "fence_opening",
    "fenced_code",
    "indented_chunk",
    "indented_code",
    "leading_pounds",
    "thematic_break",
    "thematic_chars",
]

"""Typed grammar nodes for marcado.

All nodes are frozen dataclasses with slots for:
- Immutability: a node never changes after a successful parse
- Memory efficiency: __slots__ reduces memory footprint
- Pattern matching: Python 3.10+ match statements work naturally

Nodes hold Input slices of the original source, never copies. Every node
can list its slices in source order (``parts()``), so the text a node was
parsed from can be rebuilt exactly and every sub-token has a span.

Node Hierarchy:
Node (base)
├── LineEnding
├── ThematicChars
├── Escaped
├── Entity
├── Block (block-level elements)
│   ├── BlankLine
│   ├── BlankChunk
│   ├── ThematicBreak
│   ├── AtxHeading
│   ├── IndentedChunk
│   ├── IndentedCode
│   └── FencedCode
└── Document

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

import html.entities
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Literal

from marcado.input import Input
from marcado.location import Span
from marcado.utils.text import column_width, strip_columns

if TYPE_CHECKING:
    from marcado.parsing.combinators import Punctuated


def _iter_inputs(value: Any) -> Iterator[Input]:
    if value is None:
        return
    if isinstance(value, Input):
        yield value
    elif isinstance(value, Node):
        yield from value.parts()
    elif isinstance(value, tuple):
        for item in value:
            yield from _iter_inputs(item)
    else:
        # Punctuated
        for part in value.iter_parts():
            yield from _iter_inputs(part)


# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all grammar nodes."""

    def parts(self) -> tuple[Input, ...]:
        """Source slices of this node, in source order."""
        raise NotImplementedError

    def to_span(self) -> Span:
        span = Span.unknown()
        for part in self.parts():
            span = span.union(part.to_span())
        return span

    def as_str(self) -> str:
        """Source text this node was parsed from."""
        return "".join(part.as_str() for part in self.parts())


# =============================================================================
# Lexeme Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class LineEnding(Node):
    """Line terminator: ``\\n`` or ``\\r\\n``."""

    content: Input
    style: Literal["lf", "crlf"]

    def parts(self) -> tuple[Input, ...]:
        return (self.content,)


@dataclass(frozen=True, slots=True)
class ThematicChars(Node):
    """A run of one thematic break character, e.g. ``***``."""

    marker: Literal["*", "_", "-"]
    content: Input

    def __len__(self) -> int:
        return len(self.content)

    def parts(self) -> tuple[Input, ...]:
        return (self.content,)


class EscapeKind(Enum):
    """Targets of a backslash escape."""

    STAR = "*"
    LT = "<"
    SQUARE = "["
    BACKTICK = "`"
    DOT = "."
    POUND = "#"
    AND = "&"
    BACKSLASH = "\\"
    HARD_LINE_BREAK = "\n"


@dataclass(frozen=True, slots=True)
class Escaped(Node):
    """Backslash escape.

    Markdown: ``\\*`` (literal star) or a backslash at end of line
    (hard line break).

    """

    kind: EscapeKind
    content: Input

    @property
    def literal(self) -> str:
        """Character the escape stands for; ``\\n`` for a hard line break."""
        return self.kind.value

    def parts(self) -> tuple[Input, ...]:
        return (self.content,)


@dataclass(frozen=True, slots=True)
class Entity(Node):
    """Named HTML character reference.

    Markdown: ``&amp;``, ``&copy;``

    """

    content: Input

    @property
    def name(self) -> str:
        """Entity name without ``&`` and ``;``."""
        return self.content.as_str()[1:-1]

    @property
    def decoded(self) -> str:
        return html.entities.html5[self.content.as_str()[1:]]

    def parts(self) -> tuple[Input, ...]:
        return (self.content,)


# =============================================================================
# Block Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Block(Node):
    """Base class for block-level nodes."""


@dataclass(frozen=True, slots=True)
class BlankLine(Block):
    """A line with nothing but its line ending."""

    line_ending: LineEnding

    def parts(self) -> tuple[Input, ...]:
        return self.line_ending.parts()


@dataclass(frozen=True, slots=True)
class BlankChunk(Block):
    """A whitespace-only line, inside an indented code block or between blocks."""

    whitespace: Input
    line_ending: LineEnding

    def parts(self) -> tuple[Input, ...]:
        return (self.whitespace, *self.line_ending.parts())


@dataclass(frozen=True, slots=True)
class ThematicBreak(Block):
    """Thematic break.

    Markdown: ``***``, ``- - -``, ``___``

    Whitespace after the last marker run is the delimiter of the last
    pair in ``breaks``.

    """

    indentation: Input
    breaks: Punctuated[ThematicChars, Input]
    line_ending: LineEnding | None

    @property
    def marker(self) -> str:
        return self.breaks.items()[0].marker

    @property
    def marker_count(self) -> int:
        return sum(len(run) for run in self.breaks.items())

    def parts(self) -> tuple[Input, ...]:
        return tuple(_iter_inputs((self.indentation, self.breaks, self.line_ending)))


@dataclass(frozen=True, slots=True)
class AtxHeading(Block):
    """ATX heading.

    Markdown: ``## Title ##``

    Attributes:
        indentation: Up to three columns of leading whitespace
        pounds: The opening run of ``#``
        separator: Whitespace between pounds and content
        content: Heading text
        closing_sequence: Optional closing ``#`` run with the whitespace before it
        trailing: Whitespace at end of line
        line_ending: Absent on the last line of the document

    """

    indentation: Input
    pounds: Input
    separator: Input
    content: Input
    closing_sequence: Input | None
    trailing: Input
    line_ending: LineEnding | None

    @property
    def level(self) -> int:
        return len(self.pounds)

    @property
    def text(self) -> str:
        return self.content.as_str()

    def parts(self) -> tuple[Input, ...]:
        return tuple(
            _iter_inputs(
                (
                    self.indentation,
                    self.pounds,
                    self.separator,
                    self.content,
                    self.closing_sequence,
                    self.trailing,
                    self.line_ending,
                )
            )
        )


@dataclass(frozen=True, slots=True)
class IndentedChunk(Block):
    """A non-blank line indented four or more columns."""

    indentation: Input
    content: Input
    line_ending: LineEnding | None

    def parts(self) -> tuple[Input, ...]:
        return tuple(_iter_inputs((self.indentation, self.content, self.line_ending)))


@dataclass(frozen=True, slots=True)
class IndentedCode(Block):
    """Indented code block.

    Markdown: lines indented four or more columns

    Blank chunks between non-blank ones belong to the block.

    """

    chunks: tuple[IndentedChunk | BlankChunk, ...]

    def code(self, tab_size: int = 4) -> str:
        """Code text with four columns of indentation removed from each line."""
        lines = []
        for chunk in self.chunks:
            if isinstance(chunk, IndentedChunk):
                indent = strip_columns(chunk.indentation.as_str(), 4, tab_size)
                text = indent + chunk.content.as_str()
            else:
                text = strip_columns(chunk.whitespace.as_str(), 4, tab_size)
            if chunk.line_ending is not None:
                text += "\n"
            lines.append(text)
        return "".join(lines)

    def parts(self) -> tuple[Input, ...]:
        return tuple(_iter_inputs(self.chunks))


@dataclass(frozen=True, slots=True)
class FencedCode(Block):
    """Fenced code block.

    Markdown:
        ```python
        code here
        ```

    The body runs from just after the opening fence up to the closing
    fence, so it starts with the rest of the opening line (the info string)
    and its line ending. An unterminated fence runs to end of input and has
    no closing fence.

    """

    indentation: Input
    opening: Input
    body: Input
    closing: Input | None

    @property
    def fence_char(self) -> str:
        return self.opening.as_str()[0]

    @property
    def fence_length(self) -> int:
        return len(self.opening)

    @property
    def is_closed(self) -> bool:
        return self.closing is not None

    @property
    def info(self) -> str:
        """Text after the opening fence on the same line, stripped."""
        body = self.body.as_str()
        end = len(body)
        for terminator in ("\r", "\n"):
            index = body.find(terminator)
            if index >= 0:
                end = min(end, index)
        return body[:end].strip()

    @property
    def indent_width(self) -> int:
        return column_width(self.indentation.as_str())

    def parts(self) -> tuple[Input, ...]:
        return tuple(_iter_inputs((self.indentation, self.opening, self.body, self.closing)))


# =============================================================================
# Document
# =============================================================================


@dataclass(frozen=True, slots=True)
class Document(Node):
    """Root of a parsed document.

    Attributes:
        children: Blocks in source order
        trailing: Whitespace-only final line without a line ending (may be empty)

    """

    children: tuple[Block, ...]
    trailing: Input

    def parts(self) -> tuple[Input, ...]:
        return tuple(_iter_inputs((self.children, self.trailing)))


__all__ = [
    "AtxHeading",
    "BlankChunk",
    "BlankLine",
    "Block",
    "Document",
    "Entity",
    "EscapeKind",
    "Escaped",
    "FencedCode",
    "IndentedChunk",
    "IndentedCode",
    "LineEnding",
    "Node",
    "ThematicBreak",
    "ThematicChars",
]

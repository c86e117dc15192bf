"""Document parser.

Applies the block rule at the cursor until the source is exhausted and
collects the resulting nodes into a Document. This is the boundary between
the engine, where failures are values, and callers, who get a ParseError.

Thread Safety:
- Parser produces immutable nodes (frozen dataclasses)
- Configuration is read from ContextVar (thread-local)
- Safe to share the resulting Document across threads

"""

from __future__ import annotations

from marcado.errors import ParseError
from marcado.input import Input
from marcado.location import SourceLocation, Span
from marcado.nodes import Block, Document
from marcado.parsing.blocks import block
from marcado.parsing.charsets import is_whitespace
from marcado.parsing.failure import Failure, failed
from marcado.utils.logger import get_logger

logger = get_logger(__name__)


class Parser:
    """Block parser for a complete in-memory document.

    Usage:
        >>> doc = Parser("# Hello\\n\\n***\\n").parse()
        >>> [type(child).__name__ for child in doc.children]
        ['AtxHeading', 'BlankLine', 'ThematicBreak']

    Thread Safety:
        Parser instances are single-use and not thread-safe. Create one per
        parse operation. Configuration is read from ContextVar (thread-local).

    """

    __slots__ = ("_source", "_source_file", "_cursor")

    def __init__(self, source: str, source_file: str | None = None) -> None:
        """Initialize parser with source text.

        Args:
            source: Markdown source text
            source_file: Optional source file path for error messages

        """
        self._source = source
        self._source_file = source_file
        self._cursor = Input(source)

    def parse(self) -> Document:
        """Parse the whole source.

        Raises:
            ParseError: A line is not a supported block, or a block
                committed to a shape and then violated it.
        """
        logger.debug(
            "Parsing %d characters from %s",
            len(self._source),
            self._source_file or "<string>",
        )
        cursor = self._cursor
        children: list[Block] = []

        while not cursor.is_empty():
            if cursor.count_while(is_whitespace) == len(cursor):
                # Whitespace-only last line without a line ending.
                break
            result = block(cursor)
            if failed(result):
                raise self._error(result, cursor)
            children.append(result)

        trailing = cursor.split_to(len(cursor))
        logger.debug("Parsed %d blocks", len(children))
        return Document(tuple(children), trailing)

    def _error(self, failure: Failure, cursor: Input) -> ParseError:
        if failure.is_fatal:
            span = failure.span
            message = f"malformed {failure.root().kind.value}"
        else:
            # No rule matched: report the whole line.
            line_end = cursor.find("\n")
            end = cursor.end if line_end < 0 else cursor.start + line_end
            span = Span(cursor.start, end)
            message = "line does not parse as markdown content"

        location = SourceLocation.from_span(self._source, span, self._source_file)
        logger.debug("Parse failed at %s: %s", location, failure)
        return ParseError(
            message,
            lineno=location.lineno,
            col_offset=location.col_offset,
            source_file=self._source_file,
            failure=failure,
            span=span,
        )

"""Exception classes for marcado.

Grammar rules return Failure values and never raise. These exceptions are
raised at the public boundary, when a failure reaches the top of a
document parse.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from marcado.location import Span
    from marcado.parsing.failure import Failure


class MarcadoError(Exception):
    """Base exception for all marcado errors."""


class ParseError(MarcadoError):
    """A region of the source is not supported Markdown.

    Either no block rule matched the line at the cursor, or a rule
    committed to a construct and the source then broke it (a Fatal
    failure). ``str(error)`` is ``"file:line:col message"`` with whichever
    parts of the location are known.

    Attributes:
        message: What went wrong, without the location
        lineno: 1-indexed line of the failure
        col_offset: 1-indexed column of the failure
        source_file: Path given to the parser, if any
        failure: The Failure value that surfaced from the grammar
        span: Source range the failure covers

    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
        failure: Failure | None = None,
        span: Span | None = None,
    ) -> None:
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file
        self.failure = failure
        self.span = span
        super().__init__(self._format())

    def _format(self) -> str:
        parts: list[str] = []
        if self.source_file:
            parts.append(self.source_file)
        if self.lineno is not None:
            parts.append(str(self.lineno))
            if self.col_offset is not None:
                parts.append(str(self.col_offset))
        if not parts:
            return self.message
        return f"{':'.join(parts)} {self.message}"

    @property
    def is_fatal(self) -> bool:
        return self.failure is not None and self.failure.is_fatal

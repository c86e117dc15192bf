"""Source provenance for parsed fragments and error messages.

Provides two views of a position in the source text:

- Span: absolute offsets into the source, attached to every parsed slice
  and every parse failure.
- SourceLocation: the 1-indexed line/column form used in error messages.

Offsets are indices into the source ``str``.

Thread Safety:
Both classes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Span:
    """Provenance range over the source text.

    A span is one of:

    - unknown: no provenance at all (``Span.unknown()``)
    - a half-open range ``[start, end)``
    - unbounded on one or both sides (the missing bound is ``None``)

    Union takes the outermost bounds. An unbounded side stays unbounded,
    and the unknown span is the identity, so union is associative.

    Examples:
        >>> Span.range(0, 3).union(Span.range(3, 5))
        Span(start=0, end=5)
        >>> Span.unknown().union(Span.at(4))
        Span(start=4, end=4)

    """

    start: int | None = None
    end: int | None = None
    known: bool = field(default=True, repr=False)

    def __post_init__(self) -> None:
        if self.start is not None and self.end is not None and self.start > self.end:
            raise ValueError(f"span start {self.start} is after end {self.end}")
        if not self.known and (self.start is not None or self.end is not None):
            raise ValueError("an unknown span has no bounds")

    @classmethod
    def unknown(cls) -> Span:
        """Span with no provenance."""
        return _UNKNOWN

    @classmethod
    def range(cls, start: int, end: int) -> Span:
        return cls(start, end)

    @classmethod
    def at(cls, offset: int) -> Span:
        """Zero-length span at a known offset."""
        return cls(offset, offset)

    @property
    def is_unknown(self) -> bool:
        return not self.known

    @property
    def is_bounded(self) -> bool:
        return self.start is not None and self.end is not None

    def __len__(self) -> int:
        if self.start is None or self.end is None:
            return 0
        return self.end - self.start

    def union(self, other: Span) -> Span:
        """Smallest span covering both spans.

        Unknown spans are the identity. A bound missing on either side
        stays missing in the result.
        """
        if self.is_unknown:
            return other
        if other.is_unknown:
            return self

        start = None if self.start is None or other.start is None else min(self.start, other.start)
        end = None if self.end is None or other.end is None else max(self.end, other.end)
        return Span(start, end)

    def __or__(self, other: Span) -> Span:
        return self.union(other)

    def slice(self, source: str) -> str:
        """Text of ``source`` covered by this span."""
        if self.is_unknown:
            return ""
        return source[self.start : self.end]

    def __str__(self) -> str:
        if self.is_unknown:
            return "?"
        start = "" if self.start is None else str(self.start)
        end = "" if self.end is None else str(self.end)
        return f"{start}..{end}"


_UNKNOWN = Span(known=False)


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Source location for error messages and debugging.

    All positions are 1-indexed (lineno and col_offset start at 1).

    Attributes:
        lineno: Starting line number (1-indexed)
        col_offset: Starting column offset (1-indexed)
        offset: Absolute start offset in source buffer
        end_offset: Absolute end offset in source buffer
        source_file: Source file path (optional)

    Examples:
        >>> loc = SourceLocation.from_offset("# a\\n***", 4, source_file="doc.md")
        >>> str(loc)
        'doc.md:2:1'

    """

    lineno: int
    col_offset: int
    offset: int = 0
    end_offset: int = 0
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for error messages.

        Returns:
            Formatted string like "file.md:10:5" or "10:5"
        """
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    @classmethod
    def from_offset(
        cls,
        source: str,
        offset: int,
        end_offset: int | None = None,
        source_file: str | None = None,
    ) -> SourceLocation:
        """Compute line and column of ``offset`` in ``source``.

        Only ``\\n`` starts a new line; a ``\\r`` before it belongs to the
        previous line.
        """
        offset = max(0, min(offset, len(source)))
        lineno = source.count("\n", 0, offset) + 1
        line_start = source.rfind("\n", 0, offset) + 1
        return cls(
            lineno=lineno,
            col_offset=offset - line_start + 1,
            offset=offset,
            end_offset=offset if end_offset is None else end_offset,
            source_file=source_file,
        )

    @classmethod
    def from_span(
        cls, source: str, span: Span, source_file: str | None = None
    ) -> SourceLocation:
        """Location of the first known bound of ``span``."""
        if span.start is not None:
            offset = span.start
        elif span.end is not None:
            offset = span.end
        else:
            return cls.unknown()
        return cls.from_offset(source, offset, span.end, source_file)

    @classmethod
    def unknown(cls) -> SourceLocation:
        """Create an unknown/placeholder location."""
        return cls(lineno=0, col_offset=0)

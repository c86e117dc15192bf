"""Cursor over immutable source text.

Input is the only mutable object in the engine. It is a window
``[start, end)`` over a shared source string: slicing produces new windows
over the same string, and cloning copies two integers. Grammar rules
advance the cursor; alternation saves a clone before each branch and
restores it when the branch fails.

Thread Safety:
Input instances are single-owner cursors. The source string they view is
immutable and may be shared freely.

"""

from __future__ import annotations

from collections.abc import Callable, Iterator

from marcado.location import Span


class Input:
    """A window over a source string.

    Usage:
        >>> inp = Input("# Hello\\n")
        >>> pounds = inp.split_to(1)
        >>> pounds, inp
        (Input(0, '#'), Input(1, ' Hello\\n'))
        >>> pounds.to_span().end == inp.to_span().start
        True

    """

    __slots__ = ("_source", "_start", "_end")

    def __init__(self, source: str, start: int = 0, end: int | None = None) -> None:
        if end is None:
            end = len(source)
        if not 0 <= start <= end <= len(source):
            raise IndexError(f"window {start}..{end} outside source of length {len(source)}")
        self._source = source
        self._start = start
        self._end = end

    @property
    def source(self) -> str:
        """The full underlying source string."""
        return self._source

    @property
    def start(self) -> int:
        return self._start

    @property
    def end(self) -> int:
        return self._end

    def __len__(self) -> int:
        return self._end - self._start

    def is_empty(self) -> bool:
        return self._start == self._end

    def __iter__(self) -> Iterator[str]:
        source = self._source
        for i in range(self._start, self._end):
            yield source[i]

    def iter_indices(self) -> Iterator[tuple[int, str]]:
        """Characters paired with their offset relative to this window."""
        source = self._source
        start = self._start
        for i in range(start, self._end):
            yield i - start, source[i]

    def as_str(self) -> str:
        return self._source[self._start : self._end]

    def __str__(self) -> str:
        return self.as_str()

    def peek(self) -> str | None:
        """First character of the window, or None at end of input."""
        if self._start == self._end:
            return None
        return self._source[self._start]

    def startswith(self, prefix: str) -> bool:
        return self._source.startswith(prefix, self._start, self._end)

    def find(self, sub: str, start: int = 0, end: int | None = None) -> int:
        """Relative index of ``sub`` within the window, or -1."""
        hi = self._end if end is None else min(self._end, self._start + end)
        index = self._source.find(sub, self._start + start, hi)
        return index if index < 0 else index - self._start

    def count_while(self, predicate: Callable[[str], bool]) -> int:
        """Length of the longest prefix whose characters all satisfy ``predicate``."""
        source = self._source
        i = self._start
        end = self._end
        while i < end and predicate(source[i]):
            i += 1
        return i - self._start

    def clone(self) -> Input:
        """O(1) copy sharing the same source."""
        return Input._window(self._source, self._start, self._end)

    def restore(self, other: Input) -> None:
        """Move this cursor to the position of ``other``.

        Used to commit a successful branch (``other`` advanced) or to roll
        back a failed one (``other`` is a saved clone).
        """
        if other._source is not self._source and other._source != self._source:
            raise ValueError("cannot restore a cursor from a different source")
        self._start = other._start
        self._end = other._end

    def split_to(self, n: int) -> Input:
        """Return the first ``n`` characters and advance past them."""
        if not 0 <= n <= len(self):
            raise IndexError(f"split_to({n}) outside input of length {len(self)}")
        head = Input._window(self._source, self._start, self._start + n)
        self._start += n
        return head

    def split_off(self, n: int) -> Input:
        """Return everything after position ``n`` and truncate to the first ``n``."""
        if not 0 <= n <= len(self):
            raise IndexError(f"split_off({n}) outside input of length {len(self)}")
        tail = Input._window(self._source, self._start + n, self._end)
        self._end = self._start + n
        return tail

    def to_span(self) -> Span:
        return Span(self._start, self._end)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Input):
            return NotImplemented
        return (
            self._start == other._start
            and self._end == other._end
            and self.as_str() == other.as_str()
        )

    def __hash__(self) -> int:
        return hash((self._start, self.as_str()))

    def __repr__(self) -> str:
        return f"Input({self._start}, {self.as_str()!r})"

    @classmethod
    def at(cls, source: str, offset: int, text: str) -> Input:
        """Window over ``text`` assumed to sit at ``offset``.

        Builds the expected slices in tests: ``Input.at(src, 3, "-")``
        equals the slice of ``src`` at offset 3 when the text matches.
        """
        if source[offset : offset + len(text)] != text:
            raise ValueError(f"{text!r} does not occur at offset {offset}")
        return cls(source, offset, offset + len(text))

    @classmethod
    def _window(cls, source: str, start: int, end: int) -> Input:
        # Skips bounds checks for windows derived from a valid one.
        inp = cls.__new__(cls)
        inp._source = source
        inp._start = start
        inp._end = end
        return inp

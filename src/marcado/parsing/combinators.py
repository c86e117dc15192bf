"""Combinator primitives shared by every grammar rule.

A rule is a callable ``Input -> T | Failure``. Rules may advance the cursor
on success. On failure the cursor may have moved; restoring it is the
caller's job, and every combinator here that tries something speculatively
does so on a clone and only commits the clone on success.

Primitives:
- keyword, char, char_if: literal matching
- take_while, take_till: character runs that never fail
- token: non-empty character run
- first_of: ordered alternation (stops on success or on a Fatal failure)
- optional, sequence: the usual
- many: repetition with min/max bounds
- bounded: length limits on a single run
- punctuated: ``X D X D ... X`` lists
- labelled: wrap failures with the caller's kind

"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from marcado.input import Input
from marcado.location import Span
from marcado.parsing.failure import Failure, FailureKind, failed, recoverable

T = TypeVar("T")
D = TypeVar("D")

Rule = Callable[[Input], Union[T, Failure]]
Predicate = Callable[[str], bool]


def span_of(value: Any) -> Span:
    """Span of a rule result: an Input, a node, a Punctuated, or None."""
    if value is None:
        return Span.unknown()
    return value.to_span()


def keyword(text: str, kind: FailureKind = FailureKind.KEYWORD) -> Rule[Input]:
    """Match ``text`` literally."""

    def parse(input: Input) -> Input | Failure:
        if input.startswith(text):
            return input.split_to(len(text))
        end = input.start + min(len(text), len(input))
        return recoverable(kind, Span(input.start, end))

    return parse


def char_if(predicate: Predicate, kind: FailureKind = FailureKind.CHAR) -> Rule[Input]:
    """Match one character satisfying ``predicate``."""

    def parse(input: Input) -> Input | Failure:
        next_char = input.peek()
        if next_char is None:
            return recoverable(kind, Span.at(input.start))
        if not predicate(next_char):
            return recoverable(kind, Span(input.start, input.start + 1))
        return input.split_to(1)

    return parse


def char(expected: str, kind: FailureKind = FailureKind.CHAR) -> Rule[Input]:
    """Match the single character ``expected``."""
    return char_if(lambda c: c == expected, kind)


def take_while(predicate: Predicate) -> Callable[[Input], Input]:
    """Consume the longest run of characters satisfying ``predicate``.

    Never fails; the run may be empty.
    """

    def parse(input: Input) -> Input:
        return input.split_to(input.count_while(predicate))

    return parse


def take_till(predicate: Predicate) -> Callable[[Input], Input]:
    """Consume characters up to the first one satisfying ``predicate``."""
    return take_while(lambda c: not predicate(c))


def token(predicate: Predicate, kind: FailureKind = FailureKind.TOKEN) -> Rule[Input]:
    """Like take_while, but an empty run is a Recoverable failure."""

    def parse(input: Input) -> Input | Failure:
        run = input.split_to(input.count_while(predicate))
        if run.is_empty():
            return recoverable(kind, run.to_span())
        return run

    return parse


def first_of(*rules: Rule[Any]) -> Rule[Any]:
    """Ordered alternation.

    Each rule runs on a fresh clone of the cursor. The first success is
    committed and returned. A Fatal failure is returned at once without
    trying the remaining rules. When every rule fails recoverably, the last
    failure is returned and the cursor is untouched.
    """
    if not rules:
        raise ValueError("first_of() needs at least one rule")

    def parse(input: Input) -> Any:
        failure: Failure | None = None
        for rule in rules:
            attempt = input.clone()
            result = rule(attempt)
            if not failed(result):
                input.restore(attempt)
                return result
            if result.is_fatal:
                return result
            failure = result
        return failure

    return parse


def optional(rule: Rule[T]) -> Callable[[Input], T | None | Failure]:
    """Run ``rule``; a Recoverable failure yields None and consumes nothing."""

    def parse(input: Input) -> T | None | Failure:
        attempt = input.clone()
        result = rule(attempt)
        if failed(result):
            return result if result.is_fatal else None
        input.restore(attempt)
        return result

    return parse


def sequence(*rules: Rule[Any]) -> Rule[tuple[Any, ...]]:
    """Run rules in order; the first failure is returned as is."""

    def parse(input: Input) -> tuple[Any, ...] | Failure:
        results = []
        for rule in rules:
            result = rule(input)
            if failed(result):
                return result
            results.append(result)
        return tuple(results)

    return parse


def many(
    rule: Rule[T],
    *,
    min: int = 0,
    max: int | None = None,
    kind: FailureKind = FailureKind.REPEAT,
) -> Rule[list[T]]:
    """Repeat ``rule`` between ``min`` and ``max`` times.

    Matching stops at the first Recoverable failure, at ``max`` matches, or
    when a match consumes nothing. Fewer than ``min`` matches is a
    Recoverable failure spanning what was matched. Fatal failures propagate.
    """
    if min < 0 or (max is not None and max < min):
        raise ValueError(f"invalid repetition bounds {min}..{max}")

    def parse(input: Input) -> list[T] | Failure:
        start = input.start
        items: list[T] = []
        while max is None or len(items) < max:
            attempt = input.clone()
            result = rule(attempt)
            if failed(result):
                if result.is_fatal:
                    return result
                break
            consumed = attempt.start != input.start
            input.restore(attempt)
            items.append(result)
            if not consumed:
                break
        if len(items) < min:
            return recoverable(kind, Span(start, input.start))
        return items

    return parse


def bounded(
    rule: Rule[T],
    *,
    min: int = 0,
    max: int | None = None,
    measure: Callable[[T], int] = len,  # type: ignore[assignment]
    kind: FailureKind = FailureKind.LIMITS,
) -> Rule[T]:
    """Run ``rule`` once and check the measured size of its result.

    A size outside ``min..=max`` is a Recoverable failure spanning the
    result.
    """

    def parse(input: Input) -> T | Failure:
        result = rule(input)
        if failed(result):
            return result
        size = measure(result)
        if size < min or (max is not None and size > max):
            return recoverable(kind, span_of(result))
        return result

    return parse


def labelled(rule: Rule[T], kind: FailureKind) -> Rule[T]:
    """Wrap any failure of ``rule`` with ``kind``."""

    def parse(input: Input) -> T | Failure:
        result = rule(input)
        if failed(result):
            return result.wrap(kind)
        return result

    return parse


@dataclass(frozen=True, slots=True)
class Punctuated(Generic[T, D]):
    """Items separated by delimiters: ``X D X D ... X``.

    Attributes:
        pairs: Each item with the delimiter that follows it
        tail: Final item with no delimiter after it, if any

    """

    pairs: tuple[tuple[T, D], ...] = ()
    tail: T | None = None

    def items(self) -> tuple[T, ...]:
        items = tuple(item for item, _ in self.pairs)
        if self.tail is not None:
            items += (self.tail,)
        return items

    def delimiters(self) -> tuple[D, ...]:
        return tuple(delimiter for _, delimiter in self.pairs)

    def __len__(self) -> int:
        return len(self.pairs) + (0 if self.tail is None else 1)

    def __iter__(self) -> Iterator[T]:
        return iter(self.items())

    def is_empty(self) -> bool:
        return not self.pairs and self.tail is None

    def iter_parts(self) -> Iterator[Any]:
        """Items and delimiters in source order."""
        for item, delimiter in self.pairs:
            yield item
            yield delimiter
        if self.tail is not None:
            yield self.tail

    def to_span(self) -> Span:
        span = Span.unknown()
        for part in self.iter_parts():
            span = span.union(span_of(part))
        return span


def punctuated(item: Rule[T], delimiter: Rule[D]) -> Rule[Punctuated[T, D]]:
    """Parse ``X D X D ... X``.

    The list ends when an item fails (the last delimiter stays attached to
    its pair) or when a delimiter fails (the last item becomes the tail).
    An empty list is a valid result. Fatal failures propagate.
    """

    def parse(input: Input) -> Punctuated[T, D] | Failure:
        pairs: list[tuple[T, D]] = []
        tail = None
        while True:
            attempt = input.clone()
            value = item(attempt)
            if failed(value):
                if value.is_fatal:
                    return value
                break
            if attempt.start == input.start:
                # Empty items would never advance.
                break
            input.restore(attempt)

            attempt = input.clone()
            separator = delimiter(attempt)
            if failed(separator):
                if separator.is_fatal:
                    return separator
                tail = value
                break
            input.restore(attempt)
            pairs.append((value, separator))
        return Punctuated(tuple(pairs), tail)

    return parse


__all__ = [
    "Predicate",
    "Punctuated",
    "Rule",
    "bounded",
    "char",
    "char_if",
    "first_of",
    "keyword",
    "labelled",
    "many",
    "optional",
    "punctuated",
    "sequence",
    "span_of",
    "take_till",
    "take_while",
    "token",
]

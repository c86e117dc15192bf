"""Parse failures as values.

Every grammar rule returns either a node or a Failure. A Failure carries
three things:

- kind: which rule failed
- control_flow: whether sibling alternatives may still be tried
- span: where in the source it failed

Recoverable failures mean "this alternative does not match here". Fatal
failures mean "this alternative committed to a shape and the input then
violated it"; ordered alternation stops at the first one.

Failures are not exceptions. The document driver converts a failure that
reaches the top into marcado.errors.ParseError.

"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, replace
from enum import Enum
from typing import TypeGuard, TypeVar

from marcado.location import Span

T = TypeVar("T")


class ControlFlow(Enum):
    """What an enclosing alternation may do after a failure."""

    RECOVERABLE = "recoverable"
    FATAL = "fatal"


class FailureKind(Enum):
    """Rule that produced a failure."""

    # Combinator primitives
    KEYWORD = "keyword"
    CHAR = "char"
    TOKEN = "token"
    REPEAT = "repeat"
    LIMITS = "limits"

    # Token lexemes
    WHITESPACE = "whitespace"
    NON_EMPTY_WHITESPACE = "non-empty-whitespace"
    LEADING_WHITESPACE = "leading-whitespace"
    LINE_ENDING = "line-ending"
    BLANK_LINE = "blank-line"

    # Inline lexemes
    ESCAPED = "escaped"
    ENTITY = "entity"

    # Leaf blocks
    THEMATIC = "thematic"
    LEADING_POUNDS = "leading-pounds"
    ATX_HEADING = "atx-heading"
    INDENTED_NONBLANK_CHUNK = "indented-nonblank-chunk"
    INDENTED_BLANK_CHUNK = "indented-blank-chunk"
    INDENTED_CODE = "indented-code"
    FENCED_CODE = "fenced-code"

    # Document
    BLOCK = "block"


@dataclass(frozen=True, slots=True)
class Failure:
    """A failed parse.

    Attributes:
        kind: Rule that failed
        control_flow: RECOVERABLE or FATAL
        span: Source range of the failure
        cause: Failure of the sub-rule this one wraps, if any

    """

    kind: FailureKind
    control_flow: ControlFlow
    span: Span
    cause: Failure | None = None

    @property
    def is_fatal(self) -> bool:
        return self.control_flow is ControlFlow.FATAL

    @property
    def is_recoverable(self) -> bool:
        return self.control_flow is ControlFlow.RECOVERABLE

    def wrap(self, kind: FailureKind) -> Failure:
        """Re-label with the caller's kind, keeping control flow and span."""
        if kind is self.kind:
            return self
        return Failure(kind, self.control_flow, self.span, cause=self)

    def into_fatal(self) -> Failure:
        if self.is_fatal:
            return self
        return replace(self, control_flow=ControlFlow.FATAL)

    def chain(self) -> Iterator[Failure]:
        """This failure followed by its causes, outermost first."""
        failure: Failure | None = self
        while failure is not None:
            yield failure
            failure = failure.cause

    def root(self) -> Failure:
        """Innermost failure of the chain."""
        *_, last = self.chain()
        return last

    def __str__(self) -> str:
        kinds = " <- ".join(f.kind.value for f in self.chain())
        return f"{self.control_flow.value} failure parsing `{kinds}` at {self.span}"


def recoverable(kind: FailureKind, span: Span) -> Failure:
    return Failure(kind, ControlFlow.RECOVERABLE, span)


def fatal(kind: FailureKind, span: Span) -> Failure:
    return Failure(kind, ControlFlow.FATAL, span)


def failed(result: T | Failure) -> TypeGuard[Failure]:
    """True if a rule result is a Failure."""
    return isinstance(result, Failure)


__all__ = [
    "ControlFlow",
    "Failure",
    "FailureKind",
    "failed",
    "fatal",
    "recoverable",
]

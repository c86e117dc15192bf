"""
marcado — Structural Markdown parser with exact source spans

Parses a CommonMark-flavored Markdown dialect into a tree of typed, frozen
nodes. Nodes keep slices of the source instead of copies, so every
sub-token (indentation, markers, content, line endings) knows where it came
from and the source can be rebuilt exactly from the tree.

Supported constructs: blank lines, thematic breaks, ATX headings, indented
and fenced code blocks, backslash escapes, named character references.

Quick Start:
    >>> from marcado import parse
    >>> doc = parse("# Hello\\n\\n    code\\n")
    >>> heading = doc.children[0]
    >>> heading.level, heading.text, heading.content.to_span()
    (1, 'Hello', Span(start=2, end=7))
    >>> doc.as_str() == "# Hello\\n\\n    code\\n"
    True

Single rules:
    >>> from marcado import parse_rule
    >>> from marcado.parsing import entity
    >>> node, rest = parse_rule(entity, "&amp; more")
    >>> node.decoded, str(rest)
    ('&', ' more')

Installation:
    pip install marcado              # Zero runtime dependencies
"""

from __future__ import annotations

from typing import TypeVar

from marcado.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from marcado.errors import MarcadoError, ParseError
from marcado.input import Input
from marcado.location import SourceLocation, Span
from marcado.nodes import (
    AtxHeading,
    BlankChunk,
    BlankLine,
    Block,
    Document,
    Entity,
    EscapeKind,
    Escaped,
    FencedCode,
    IndentedChunk,
    IndentedCode,
    LineEnding,
    Node,
    ThematicBreak,
    ThematicChars,
)
from marcado.parser import Parser
from marcado.parsing.combinators import Punctuated, Rule
from marcado.parsing.failure import ControlFlow, Failure, FailureKind, failed

__version__ = "0.1.0"

T = TypeVar("T")


def parse(
    source: str,
    *,
    source_file: str | None = None,
    config: ParseConfig | None = None,
) -> Document:
    """Parse Markdown source into a Document.

    Args:
        source: Markdown source text
        source_file: Optional source file path for error messages
        config: Parse configuration for this call (uses the active
            context configuration if None)

    Returns:
        Document root node

    Raises:
        ParseError: Part of the source is not a supported construct.

    Example:
        >>> doc = parse("***\\n")
        >>> doc.children[0].marker_count
        3
    """
    if config is None:
        return Parser(source, source_file=source_file).parse()
    with parse_config_context(config):
        return Parser(source, source_file=source_file).parse()


def parse_rule(rule: Rule[T], source: str | Input) -> tuple[T | Failure, Input]:
    """Apply a single grammar rule to the start of ``source``.

    The rule runs on a clone of the cursor. On success the returned cursor
    is the unconsumed remainder; on failure it is the untouched input.

    Args:
        rule: Any grammar rule, e.g. marcado.parsing.thematic_break
        source: Source text, or a cursor to start from (not modified)

    Returns:
        (node or Failure, remaining input)

    Example:
        >>> from marcado.parsing import escaped
        >>> node, rest = parse_rule(escaped, "\\\\*x")
        >>> node.kind, str(rest)
        (<EscapeKind.STAR: '*'>, 'x')
    """
    start = Input(source) if isinstance(source, str) else source.clone()
    cursor = start.clone()
    result = rule(cursor)
    if failed(result):
        return result, start
    return result, cursor


__all__ = [
    # Core API
    "parse",
    "parse_rule",
    "Parser",
    # Configuration
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
    # Input and spans
    "Input",
    "Span",
    "SourceLocation",
    # Failures
    "ControlFlow",
    "Failure",
    "FailureKind",
    "failed",
    "MarcadoError",
    "ParseError",
    # Nodes
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
    "Punctuated",
    "Rule",
    "ThematicBreak",
    "ThematicChars",
    "__version__",
]

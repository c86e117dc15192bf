"""Character sets for O(1) classification.

All sets are frozensets for:
- O(1) membership testing (vs O(n) for strings)
- Immutability (thread-safe)
- Module-level caching (no per-call allocation)

Reference: CommonMark 0.31.2 specification

Usage:
    from marcado.parsing.charsets import FENCE_CHARS

    if char in FENCE_CHARS:  # O(1) lookup
        ...
"""

# Characters of "\n" and "\r\n". Neither counts as whitespace.
LINE_ENDING_CHARS: frozenset[str] = frozenset("\r\n")

# Thematic break characters
THEMATIC_BREAK_CHARS: frozenset[str] = frozenset("-*_")

# Valid fence characters
FENCE_CHARS: frozenset[str] = frozenset("`~")

# Characters a backslash escape may target
ESCAPABLE: frozenset[str] = frozenset("*<[`.#&\\")

ATX_HEADING_MARKER = "#"
BACKSLASH = "\\"
ENTITY_START = "&"
ENTITY_END = ";"


def is_whitespace(char: str) -> bool:
    """Whitespace that does not break a line."""
    return char not in LINE_ENDING_CHARS and char.isspace()

"""Column arithmetic for indentation.

Tabs are not expanded in the source. They behave as if advancing to the
next tab stop, so the same text has a different width depending on the
column it starts at.

Example:
    >>> column_width("  \\t")
    4
    >>> strip_columns("\\t\\tx", 4)
    '\\tx'
"""

from __future__ import annotations


def column_width(text: str, start_column: int = 0, tab_size: int = 4) -> int:
    """Number of columns ``text`` spans when it starts at ``start_column``.

    Args:
        text: Text to measure (normally a run of spaces and tabs)
        start_column: 0-indexed column where the text starts
        tab_size: Distance between tab stops

    Returns:
        Width in columns
    """
    column = start_column
    for char in text:
        if char == "\t":
            column += tab_size - (column % tab_size)
        else:
            column += 1
    return column - start_column


def strip_columns(text: str, columns: int, tab_size: int = 4) -> str:
    """Remove ``columns`` columns of leading indentation from ``text``.

    A tab that straddles the cut is replaced by the spaces that remain
    of it. Stops early at the first non-indentation character.

    Args:
        text: Line text starting at column 0
        columns: Number of columns to remove
        tab_size: Distance between tab stops

    Returns:
        Text with the indentation removed
    """
    column = 0
    for i, char in enumerate(text):
        if column >= columns:
            return text[i:]
        if char == "\t":
            advance = tab_size - (column % tab_size)
            if column + advance > columns:
                return " " * (column + advance - columns) + text[i + 1 :]
            column += advance
        elif char == " ":
            column += 1
        else:
            return text[i:]
    return ""

"""Inline lexemes: backslash escapes and named character references."""

from marcado.parsing.inline.entity import ENTITY_NAMES, entity
from marcado.parsing.inline.escaped import escaped

__all__ = [
    "ENTITY_NAMES",
    "entity",
    "escaped",
]

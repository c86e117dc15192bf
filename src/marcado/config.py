"""Parse configuration held in a ContextVar (PEP 567).

Grammar rules are module-level functions; they look up the active
ParseConfig each time they run instead of taking it as an argument. A
config set in one thread or asyncio task is invisible to the others.

Usage:
    doc = parse("####### seven", config=ParseConfig(max_heading_level=7))

    with parse_config_context(ParseConfig(tab_size=8)):
        document = Parser(source).parse()

"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, fields
from typing import Iterator, Literal

FenceClosing = Literal["exact", "at_least"]

_FENCE_CLOSING_POLICIES = ("exact", "at_least")


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Options that change what the grammar accepts.

    Attributes:
        max_heading_level: Largest run of ``#`` accepted as an ATX heading
            opener. Runs of 1 to this many pounds are headings.
        entity_scan_limit: How far past ``&`` to look for the terminating
            ``;`` of a character reference before giving up.
        fence_closing: ``"exact"`` requires a closing fence exactly as long
            as the opening one; ``"at_least"`` accepts any longer run.
        tab_size: Distance between tab stops when measuring indentation.

    """

    max_heading_level: int = 6
    entity_scan_limit: int = 100
    fence_closing: FenceClosing = "exact"
    tab_size: int = 4

    def __post_init__(self) -> None:
        if self.max_heading_level < 1:
            raise ValueError(f"max_heading_level must be >= 1, got {self.max_heading_level}")
        if self.entity_scan_limit < 1:
            raise ValueError(f"entity_scan_limit must be >= 1, got {self.entity_scan_limit}")
        if self.fence_closing not in _FENCE_CLOSING_POLICIES:
            raise ValueError(
                f"fence_closing must be one of {_FENCE_CLOSING_POLICIES}, "
                f"got {self.fence_closing!r}"
            )
        if self.tab_size < 1:
            raise ValueError(f"tab_size must be >= 1, got {self.tab_size}")

    @classmethod
    def from_dict(cls, config_dict: dict) -> ParseConfig:
        """Build a config from a mapping such as a parsed TOML table.

        Keys that are not ParseConfig fields are ignored; values are still
        validated.

        Example:
            >>> ParseConfig.from_dict({"tab_size": 8, "theme": "dark"}).tab_size
            8

        """
        names = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in config_dict.items() if key in names})


_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar("marcado_parse_config", default=_DEFAULT_CONFIG)


def get_parse_config() -> ParseConfig:
    """Config the grammar rules see in the current context."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Replace the config for the current context until reset."""
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Go back to the default config."""
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Use ``config`` for the duration of a ``with`` block.

    The previous config is restored on exit, including when the block
    raises. Other threads and contexts are unaffected.

    Example:
        >>> with parse_config_context(ParseConfig(fence_closing="at_least")):
        ...     get_parse_config().fence_closing
        'at_least'

    """
    token = _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.reset(token)


__all__ = [
    "FenceClosing",
    "ParseConfig",
    "get_parse_config",
    "parse_config_context",
    "reset_parse_config",
    "set_parse_config",
]

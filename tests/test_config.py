"""Tests for ContextVar-based parse configuration.

Validates defaults, validation, thread isolation and context manager
behavior.
"""

from threading import Thread

import pytest

from marcado import (
    ParseConfig,
    Parser,
    get_parse_config,
    parse,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)


class TestParseConfigDataclass:
    """Test ParseConfig frozen dataclass behavior."""

    def test_default_values(self) -> None:
        config = ParseConfig()
        assert config.max_heading_level == 6
        assert config.entity_scan_limit == 100
        assert config.fence_closing == "exact"
        assert config.tab_size == 4

    def test_immutability(self) -> None:
        """Config is frozen and cannot be modified."""
        config = ParseConfig()
        with pytest.raises(AttributeError):
            config.tab_size = 8  # type: ignore[misc]

    def test_custom_values(self) -> None:
        config = ParseConfig(max_heading_level=7, fence_closing="at_least")
        assert config.max_heading_level == 7
        assert config.fence_closing == "at_least"
        assert config.tab_size == 4  # Still default

    @pytest.mark.parametrize(
        "field,value",
        [
            ("max_heading_level", 0),
            ("entity_scan_limit", 0),
            ("tab_size", 0),
            ("fence_closing", "loose"),
        ],
    )
    def test_invalid_values(self, field: str, value: object) -> None:
        with pytest.raises(ValueError, match=field):
            ParseConfig(**{field: value})


class TestFromDict:
    """ParseConfig.from_dict() filtering."""

    def test_known_keys(self) -> None:
        config = ParseConfig.from_dict({"tab_size": 8, "entity_scan_limit": 32})
        assert config.tab_size == 8
        assert config.entity_scan_limit == 32

    def test_unknown_keys_ignored(self) -> None:
        config = ParseConfig.from_dict({"max_heading_level": 7, "tables": True})
        assert config == ParseConfig(max_heading_level=7)

    def test_empty_dict(self) -> None:
        assert ParseConfig.from_dict({}) == ParseConfig()

    def test_values_still_validated(self) -> None:
        with pytest.raises(ValueError):
            ParseConfig.from_dict({"fence_closing": "never"})


class TestContextVarFunctions:
    """Test get/set/reset functions."""

    def teardown_method(self) -> None:
        """Reset config after each test."""
        reset_parse_config()

    def test_default_config(self) -> None:
        assert get_parse_config() == ParseConfig()

    def test_set_and_get(self) -> None:
        set_parse_config(ParseConfig(tab_size=2))
        assert get_parse_config().tab_size == 2

    def test_reset_restores_default(self) -> None:
        set_parse_config(ParseConfig(tab_size=2))
        reset_parse_config()
        assert get_parse_config().tab_size == 4

    def test_parser_reads_active_config(self) -> None:
        set_parse_config(ParseConfig(max_heading_level=7))
        doc = Parser("####### seven").parse()
        assert doc.children[0].level == 7


class TestParseConfigContext:
    """Test parse_config_context context manager."""

    def test_context_sets_config(self) -> None:
        with parse_config_context(ParseConfig(tab_size=8)):
            assert get_parse_config().tab_size == 8
        # Restored after context
        assert get_parse_config().tab_size == 4

    def test_nested_contexts(self) -> None:
        with parse_config_context(ParseConfig(tab_size=8)):
            with parse_config_context(ParseConfig(max_heading_level=7)):
                # Inner config replaces the outer one entirely
                assert get_parse_config().max_heading_level == 7
                assert get_parse_config().tab_size == 4
            assert get_parse_config().tab_size == 8
        assert get_parse_config() == ParseConfig()

    def test_context_restores_on_exception(self) -> None:
        with pytest.raises(ValueError, match="test"):
            with parse_config_context(ParseConfig(tab_size=8)):
                raise ValueError("test")
        assert get_parse_config().tab_size == 4

    def test_parse_argument_is_scoped_to_call(self) -> None:
        doc = parse("####### seven", config=ParseConfig(max_heading_level=7))
        assert doc.children[0].level == 7
        assert get_parse_config().max_heading_level == 6


class TestThreadIsolation:
    """Test thread-local configuration isolation."""

    def test_thread_isolation(self) -> None:
        """Each thread sees its own config."""
        results: dict[int, int] = {}

        def worker(thread_id: int, config: ParseConfig) -> None:
            set_parse_config(config)
            results[thread_id] = get_parse_config().max_heading_level

        configs = [ParseConfig(max_heading_level=level) for level in (1, 3, 6, 9)]
        threads = [Thread(target=worker, args=(i, c)) for i, c in enumerate(configs)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results == {0: 1, 1: 3, 2: 6, 3: 9}
        # Main thread untouched
        assert get_parse_config().max_heading_level == 6

    def test_concurrent_parses_with_different_policies(self) -> None:
        source = "```\ncode\n`````\n"
        results: dict[int, str] = {}

        def worker(thread_id: int, policy: str) -> None:
            try:
                doc = parse(source, config=ParseConfig(fence_closing=policy))
                results[thread_id] = doc.children[0].closing.as_str()
            except Exception as exc:
                results[thread_id] = type(exc).__name__

        threads = [
            Thread(target=worker, args=(0, "at_least")),
            Thread(target=worker, args=(1, "exact")),
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results[0] == "`````"
        assert results[1] == "ParseError"

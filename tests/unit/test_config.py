"""Unit tests for configuration management."""

import json

import pytest
from pydantic import ValidationError

from dotgraph.config import (
    DotgraphConfig,
    LogLevel,
    RenderConfig,
    find_config_file,
    load_config,
)


class TestRenderConfig:
    """Test RenderConfig model."""

    def test_defaults(self):
        config = RenderConfig()
        assert config.executable == "dot"
        assert config.format == "svg"
        assert config.timeout is None

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValueError, match="timeout must be > 0"):
            RenderConfig(timeout=0)

    def test_blank_executable(self):
        with pytest.raises(ValueError):
            RenderConfig(executable="  ")


class TestDotgraphConfig:
    """Test complete DotgraphConfig model."""

    def test_defaults(self):
        config = DotgraphConfig()
        assert config.render.executable == "dot"
        assert config.grammar.path is None
        assert config.logging.level == LogLevel.INFO.value

    def test_from_dict(self):
        config = DotgraphConfig(**{
            "render": {"executable": "neato", "format": "png", "timeout": 30},
            "grammar": {"path": "grammar.json"},
            "logging": {"level": "debug"},
        })
        assert config.render.executable == "neato"
        assert config.render.format == "png"
        assert config.render.timeout == 30
        assert config.grammar.path == "grammar.json"
        assert config.logging.level == "debug"

    def test_extra_keys_forbidden(self):
        with pytest.raises(ValueError):
            DotgraphConfig(**{"unknown": {}})

    def test_invalid_log_level(self):
        with pytest.raises(ValueError):
            DotgraphConfig(**{"logging": {"level": "loud"}})


class TestLoadConfig:
    """Test configuration loading from disk."""

    def test_load_from_file(self, tmp_path):
        config_file = tmp_path / ".dotgraph.json"
        config_file.write_text(json.dumps({"render": {"format": "pdf"}}), encoding="utf-8")

        config = load_config(config_file)

        assert config.render.format == "pdf"

    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "nope.json")
        assert config == DotgraphConfig()

    def test_invalid_json(self, tmp_path):
        config_file = tmp_path / ".dotgraph.json"
        config_file.write_text("{not json", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid JSON") as exc_info:
            load_config(config_file)
        assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)

    def test_invalid_values(self, tmp_path):
        config_file = tmp_path / ".dotgraph.json"
        config_file.write_text(json.dumps({"render": {"timeout": -1}}), encoding="utf-8")

        with pytest.raises(ValueError, match="Failed to load config") as exc_info:
            load_config(config_file)
        assert isinstance(exc_info.value.__cause__, ValidationError)

    def test_find_config_in_parent(self, tmp_path):
        config_file = tmp_path / ".dotgraph.json"
        config_file.write_text("{}", encoding="utf-8")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        assert find_config_file(nested) == config_file.resolve()

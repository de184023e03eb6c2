"""Configuration management for dotgraph using Pydantic models."""

import json
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

CONFIG_FILENAME = ".dotgraph.json"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


class RenderConfig(BaseModel):
    """External rendering configuration section."""
    executable: str = "dot"
    format: str = "svg"
    timeout: float | None = None

    @field_validator("executable", "format")
    @classmethod
    def validate_not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError("value must not be blank")
        return v

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v):
        if v is not None and v <= 0:
            raise ValueError(f"timeout must be > 0, got: {v}")
        return v

    model_config = ConfigDict(populate_by_name=True)


class GrammarConfig(BaseModel):
    """Attribute grammar configuration section."""
    path: str | None = None


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.INFO

    model_config = ConfigDict(use_enum_values=True, validate_default=True)


class DotgraphConfig(BaseModel):
    """Complete dotgraph configuration model."""
    render: RenderConfig = Field(default_factory=RenderConfig)
    grammar: GrammarConfig = Field(default_factory=GrammarConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> DotgraphConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .dotgraph.json

    Returns:
        DotgraphConfig: Loaded and validated configuration

    Raises:
        ValueError: If configuration is invalid
    """
    if config_path is None:
        config_path = find_config_file()
    else:
        config_path = Path(config_path)

    if config_path and config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = json.load(f)
            return DotgraphConfig(**config_data)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file {config_path}: {e}") from e
        except Exception as e:
            raise ValueError(f"Failed to load config from {config_path}: {e}") from e
    else:
        return DotgraphConfig()


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .dotgraph.json by searching up the directory tree.

    Args:
        start_dir: Directory to start search from (default: current directory)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        config_file = current / CONFIG_FILENAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:  # Reached root directory
            break
        current = parent

    return None

"""Configuration management for ontoschema using Pydantic models."""

import json
import logging
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

CONFIG_FILE_NAME = ".ontoschema.json"


class OutputFormat(str, Enum):
    """CLI output format types."""
    TABLE = "table"
    JSON = "json"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


_LOG_LEVELS = {
    LogLevel.ERROR.value: logging.ERROR,
    LogLevel.WARN.value: logging.WARNING,
    LogLevel.INFO.value: logging.INFO,
    LogLevel.DEBUG.value: logging.DEBUG,
}


class OntologyConfig(BaseModel):
    """Ontology source configuration section."""
    terms_file: str | None = Field(alias="termsFile", default=None)
    use_builtin: bool = Field(alias="useBuiltin", default=True)
    max_depth: int = Field(alias="maxDepth", default=10)

    @field_validator("max_depth")
    @classmethod
    def validate_max_depth(cls, v):
        if v < 1:
            raise ValueError("max_depth must be >= 1")
        return v

    model_config = ConfigDict(populate_by_name=True)


class RenderConfig(BaseModel):
    """Rule rendering configuration section."""
    exclusive_adjust: bool = Field(alias="exclusiveAdjust", default=True)

    model_config = ConfigDict(populate_by_name=True)


class OutputConfig(BaseModel):
    """Output configuration section."""
    format: OutputFormat = OutputFormat.TABLE

    model_config = ConfigDict(use_enum_values=True)


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.WARN

    model_config = ConfigDict(use_enum_values=True)

    @property
    def numeric_level(self) -> int:
        return _LOG_LEVELS[self.level]


class OntoschemaConfig(BaseModel):
    """Complete ontoschema configuration model."""
    ontology: OntologyConfig = Field(default_factory=OntologyConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> OntoschemaConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .ontoschema.json

    Returns:
        OntoschemaConfig: Loaded and validated configuration

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
            config = OntoschemaConfig(**config_data)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file {config_path}: {e}")
        except Exception as e:
            raise ValueError(f"Failed to load config from {config_path}: {e}")

        # Relative terms files are resolved against the config file location
        terms_file = config.ontology.terms_file
        if terms_file and not Path(terms_file).is_absolute():
            config.ontology.terms_file = str(config_path.parent / terms_file)
        return config

    return create_default_config()


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .ontoschema.json by searching up the directory tree.

    Args:
        start_dir: Directory to start search from (default: current directory)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        config_file = current / CONFIG_FILE_NAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:  # Reached root directory
            break
        current = parent

    return None


def create_default_config() -> OntoschemaConfig:
    """Create default configuration: built-in ontology, table output."""
    return OntoschemaConfig()

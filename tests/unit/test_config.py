"""Unit tests for configuration management."""

import json
import logging
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import patch

import pytest

from ontoschema.config import (
    LoggingConfig,
    OntologyConfig,
    OntoschemaConfig,
    OutputFormat,
    create_default_config,
    find_config_file,
    load_config,
)


class TestOntologyConfig:
    """Test OntologyConfig model."""

    def test_defaults(self):
        config = OntologyConfig()
        assert config.terms_file is None
        assert config.use_builtin is True
        assert config.max_depth == 10

    def test_aliases(self):
        config = OntologyConfig(**{"termsFile": "terms.json", "useBuiltin": False, "maxDepth": 4})
        assert config.terms_file == "terms.json"
        assert config.use_builtin is False
        assert config.max_depth == 4

    def test_max_depth_validation(self):
        with pytest.raises(ValueError):
            OntologyConfig(max_depth=0)


class TestOntoschemaConfig:
    """Test complete OntoschemaConfig model."""

    def test_minimal_config(self):
        config = OntoschemaConfig()
        assert config.render.exclusive_adjust is True
        assert config.output.format == OutputFormat.TABLE
        assert config.logging.level == "warn"

    def test_config_from_dict(self):
        config_data = {
            "ontology": {"termsFile": "t.json", "maxDepth": 5},
            "render": {"exclusiveAdjust": False},
            "output": {"format": "json"},
            "logging": {"level": "debug"},
        }

        config = OntoschemaConfig(**config_data)
        assert config.ontology.terms_file == "t.json"
        assert config.ontology.max_depth == 5
        assert config.render.exclusive_adjust is False
        assert config.output.format == "json"
        assert config.logging.numeric_level == logging.DEBUG

    def test_config_validation_error(self):
        with pytest.raises(ValueError):
            OntoschemaConfig(output={"format": "xml"})

    def test_config_extra_fields_forbidden(self):
        with pytest.raises(ValueError):
            OntoschemaConfig(invalid_field="should-fail")

    def test_numeric_levels(self):
        assert LoggingConfig(level="error").numeric_level == logging.ERROR
        assert LoggingConfig(level="warn").numeric_level == logging.WARNING


class TestConfigFileOperations:
    """Test configuration file loading and discovery."""

    def test_load_config_with_file(self):
        with TemporaryDirectory() as temp_dir:
            config_file = Path(temp_dir) / ".ontoschema.json"
            with open(config_file, "w") as f:
                json.dump({"output": {"format": "json"}}, f)

            config = load_config(config_file)
            assert config.output.format == "json"

    def test_relative_terms_file_resolved(self):
        with TemporaryDirectory() as temp_dir:
            config_file = Path(temp_dir) / ".ontoschema.json"
            with open(config_file, "w") as f:
                json.dump({"ontology": {"termsFile": "terms.json"}}, f)

            config = load_config(config_file)
            assert config.ontology.terms_file == str(Path(temp_dir) / "terms.json")

    def test_load_config_file_not_found(self):
        with TemporaryDirectory() as temp_dir:
            config = load_config(Path(temp_dir) / "nonexistent.json")
            assert config == create_default_config()

    def test_load_config_invalid_json(self):
        with TemporaryDirectory() as temp_dir:
            config_file = Path(temp_dir) / ".ontoschema.json"
            with open(config_file, "w") as f:
                f.write("{invalid json")

            with pytest.raises(ValueError, match="Invalid JSON"):
                load_config(config_file)

    def test_load_config_invalid_structure(self):
        with TemporaryDirectory() as temp_dir:
            config_file = Path(temp_dir) / ".ontoschema.json"
            with open(config_file, "w") as f:
                json.dump({"invalid": "structure"}, f)

            with pytest.raises(ValueError, match="Failed to load config"):
                load_config(config_file)

    def test_find_config_file_parent_dir(self):
        with TemporaryDirectory() as temp_dir:
            temp_path = Path(temp_dir)
            config_file = temp_path / ".ontoschema.json"
            config_file.touch()

            sub_dir = temp_path / "subdir"
            sub_dir.mkdir()

            assert find_config_file(sub_dir) == config_file.resolve()

    def test_find_config_file_not_found(self):
        with TemporaryDirectory() as temp_dir:
            assert find_config_file(Path(temp_dir)) is None

    def test_zero_config_operation(self):
        with patch("ontoschema.config.find_config_file", return_value=None):
            config = load_config()
            assert config.ontology.use_builtin is True

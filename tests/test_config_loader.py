"""
Tests for configuration loader.

This module tests the ConfigLoader class including file loading,
environment variable processing, and configuration merging.
"""

import json
import os
import tempfile
from typing import Any, Dict, Generator
from unittest.mock import patch

import pytest

from debounced_callback.infrastructure.config.loader import ConfigLoader
from debounced_callback.infrastructure.config.models import ApplicationConfig


class TestConfigLoader:
    """Test cases for ConfigLoader class."""

    @pytest.fixture
    def config_loader(self) -> ConfigLoader:
        """Create a ConfigLoader instance."""
        return ConfigLoader()

    @pytest.fixture
    def sample_config_dict(self) -> Dict[str, Any]:
        """Sample configuration dictionary."""
        return {
            "name": "Search Box",
            "debug": True,
            "environment": "testing",
            "debounce": {
                "delay_ms": 250,
                "max_wait_ms": 1000
            },
            "logging": {
                "level": "DEBUG",
                "console_enabled": True,
                "file_enabled": False
            }
        }

    @pytest.fixture
    def temp_json_file(self, sample_config_dict: Dict[str, Any]) -> Generator[str, None, None]:
        """Create temporary JSON config file."""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False) as f:
            json.dump(sample_config_dict, f)
            temp_path = f.name

        yield temp_path

        if os.path.exists(temp_path):
            os.unlink(temp_path)

    @pytest.fixture
    def temp_yaml_file(self) -> Generator[str, None, None]:
        """Create temporary YAML config file."""
        yaml_content = """
name: Search Box
debug: true
environment: testing
debounce:
  delay_ms: 250
  max_wait_ms: 1000
logging:
  level: debug
  file_enabled: false
"""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            f.write(yaml_content.strip())
            temp_path = f.name

        yield temp_path

        if os.path.exists(temp_path):
            os.unlink(temp_path)

    def test_config_loader_initialization(self, config_loader: ConfigLoader) -> None:
        """Test ConfigLoader initialization."""
        assert config_loader._env_prefix == "DEBOUNCE_"

    @patch.dict(os.environ, {}, clear=True)
    def test_load_config_no_file(self, config_loader: ConfigLoader) -> None:
        """Test loading config without file (defaults only)."""
        config = config_loader.load_config()

        assert isinstance(config, ApplicationConfig)
        assert config.name == "Debounced Callback"
        assert config.debug is False
        assert config.debounce.delay_ms == 0.0
        assert config.debounce.max_wait_ms is None
        assert config.config_file_path is None

    @patch.dict(os.environ, {}, clear=True)
    def test_load_config_from_json_file(self, config_loader: ConfigLoader, temp_json_file: str) -> None:
        """Test loading config from JSON file."""
        config = config_loader.load_config(temp_json_file)

        assert config.name == "Search Box"
        assert config.debug is True
        assert config.debounce.delay_ms == 250
        assert config.debounce.max_wait_ms == 1000
        assert config.logging.level == "DEBUG"
        assert config.config_file_path == temp_json_file

    @patch.dict(os.environ, {}, clear=True)
    def test_load_config_from_yaml_file(self, config_loader: ConfigLoader, temp_yaml_file: str) -> None:
        """Test loading config from YAML file."""
        config = config_loader.load_config(temp_yaml_file)

        assert config.environment == "testing"
        assert config.debounce.delay_ms == 250
        assert config.logging.level == "DEBUG"

    @patch.dict(os.environ, {
        "DEBOUNCE_DELAY_MS": "75",
        "DEBOUNCE_MAX_WAIT_MS": "none",
        "DEBOUNCE_LOG_LEVEL": "WARNING",
        "DEBOUNCE_DEBUG": "yes"
    }, clear=True)
    def test_environment_overrides_file(self, config_loader: ConfigLoader, temp_json_file: str) -> None:
        """Test that environment variables take precedence over the file."""
        config = config_loader.load_config(temp_json_file)

        assert config.debounce.delay_ms == 75.0
        assert config.debounce.max_wait_ms is None
        assert config.logging.level == "WARNING"
        assert config.logging.console_enabled is True
        assert config.debug is True

    @patch.dict(os.environ, {"DEBOUNCE_DELAY_MS": "soon"}, clear=True)
    def test_invalid_environment_value(self, config_loader: ConfigLoader) -> None:
        """Test that unparsable environment values are reported."""
        with pytest.raises(ValueError, match="DEBOUNCE_DELAY_MS"):
            config_loader.load_config()

    @patch.dict(os.environ, {"DEBOUNCE_MAX_WAIT_MS": "-3"}, clear=True)
    def test_invalid_timing_from_environment(self, config_loader: ConfigLoader) -> None:
        with pytest.raises(ValueError, match="max_wait_ms"):
            config_loader.load_config()

    def test_missing_file(self, config_loader: ConfigLoader) -> None:
        with pytest.raises(FileNotFoundError):
            config_loader.load_config("/nonexistent/config.yaml")

    def test_unsupported_format(self, config_loader: ConfigLoader) -> None:
        with tempfile.NamedTemporaryFile(mode='w', suffix='.ini', delete=False) as f:
            f.write("[debounce]")
            temp_path = f.name
        try:
            with pytest.raises(ValueError, match="Unsupported configuration file format"):
                config_loader.load_config(temp_path)
        finally:
            os.unlink(temp_path)

    def test_invalid_json(self, config_loader: ConfigLoader) -> None:
        with tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False) as f:
            f.write("{not json")
            temp_path = f.name
        try:
            with pytest.raises(ValueError, match="Invalid JSON"):
                config_loader.load_config(temp_path)
        finally:
            os.unlink(temp_path)

    @patch.dict(os.environ, {}, clear=True)
    @pytest.mark.parametrize("fmt", ["yaml", "json"])
    def test_save_and_reload(self, config_loader: ConfigLoader, fmt: str) -> None:
        """Test that a saved configuration loads back identically."""
        config = ApplicationConfig.from_dict({'debounce': {'delay_ms': 120, 'max_wait_ms': 600}})

        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, f"config.{fmt}")
            config_loader.save_config(config, path, format=fmt)
            loaded = config_loader.load_config(path)

        assert loaded.debounce == config.debounce
        assert loaded.logging == config.logging

    def test_save_unsupported_format(self, config_loader: ConfigLoader) -> None:
        with pytest.raises(ValueError, match="Unsupported format"):
            config_loader.save_config(ApplicationConfig(), "out.toml", format="toml")

    def test_merge_configs(self, config_loader: ConfigLoader) -> None:
        """Test recursive merging of nested dictionaries."""
        merged = config_loader._merge_configs(
            {'debounce': {'delay_ms': 1, 'max_wait_ms': 2}, 'name': 'a'},
            {'debounce': {'delay_ms': 5}}
        )

        assert merged == {'debounce': {'delay_ms': 5, 'max_wait_ms': 2}, 'name': 'a'}

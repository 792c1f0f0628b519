"""
Configuration Tests
===================

Tests for settings loading and logging setup.
"""

import pytest
from pydantic import ValidationError

from eventstream.config import Settings, load_config


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults(self, tmp_path, monkeypatch):
        """Verify defaults apply without a config file."""
        monkeypatch.chdir(tmp_path)
        settings = load_config()

        assert settings.decoder.parse_json_payload is True
        assert settings.decoder.warn_on_trailing_data is True
        assert settings.capture.read_chunk_size == 4096
        assert settings.logging.level == "INFO"

    def test_yaml_file(self, tmp_path):
        """Verify values are loaded from an explicit YAML file."""
        path = tmp_path / "eventstream.yaml"
        path.write_text(
            "decoder:\n"
            "  parse_json_payload: false\n"
            "capture:\n"
            "  read_chunk_size: 64\n"
        )
        settings = load_config(str(path))

        assert settings.decoder.parse_json_payload is False
        assert settings.capture.read_chunk_size == 64

    def test_yaml_discovered_in_working_directory(self, tmp_path, monkeypatch):
        """Verify eventstream.yml is found in the working directory."""
        (tmp_path / "eventstream.yml").write_text("logging:\n  format: json\n")
        monkeypatch.chdir(tmp_path)

        assert load_config().logging.format == "json"

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        """Verify environment variables override file values."""
        path = tmp_path / "eventstream.yaml"
        path.write_text("capture:\n  read_chunk_size: 64\n")
        monkeypatch.setenv("EVENTSTREAM_CHUNK_SIZE", "128")
        monkeypatch.setenv("EVENTSTREAM_WARN_TRAILING", "false")
        monkeypatch.setenv("EVENTSTREAM_LOG_LEVEL", "DEBUG")

        settings = load_config(str(path))

        assert settings.capture.read_chunk_size == 128
        assert settings.decoder.warn_on_trailing_data is False
        assert settings.logging.level == "DEBUG"

    def test_invalid_chunk_size_rejected(self):
        """Verify a zero chunk size fails validation."""
        with pytest.raises(ValidationError):
            Settings.model_validate({"capture": {"read_chunk_size": 0}})

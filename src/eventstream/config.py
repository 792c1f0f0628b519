"""
EventStream Configuration
=========================

This module handles configuration loading for the event stream decoder.

Configuration Sources (in order of precedence):
    1. Environment variables (highest priority)
    2. eventstream.yaml file
    3. Default values (lowest priority)

Environment Variable Mapping:
    EVENTSTREAM_PARSE_JSON     -> decoder.parse_json_payload
    EVENTSTREAM_WARN_TRAILING  -> decoder.warn_on_trailing_data
    EVENTSTREAM_CHUNK_SIZE     -> capture.read_chunk_size
    EVENTSTREAM_LOG_LEVEL      -> logging.level
    EVENTSTREAM_LOG_FORMAT     -> logging.format

Example:
    from eventstream.config import settings

    print(settings.decoder.parse_json_payload)
    print(settings.logging.level)
"""

import os
import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field


logger = logging.getLogger(__name__)


# =============================================================================
# Configuration Models
# =============================================================================

class DecoderConfig(BaseModel):
    """Frame and stream decoding configuration."""

    parse_json_payload: bool = Field(
        default=True,
        description="Decode UTF-8 JSON payloads into structured values",
    )
    warn_on_trailing_data: bool = Field(
        default=True,
        description="Log a warning when incomplete bytes remain at end of input",
    )


class CaptureConfig(BaseModel):
    """Capture file replay configuration."""

    read_chunk_size: int = Field(
        default=4096,
        ge=1,
        description="Bytes read per chunk when replaying a capture file",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="text", description="Log format: json or text")


class Settings(BaseModel):
    """
    Main settings class for the event stream decoder.

    Loads configuration from YAML file and environment variables.
    Environment variables take precedence over file values.
    """

    decoder: DecoderConfig = Field(default_factory=DecoderConfig)
    capture: CaptureConfig = Field(default_factory=CaptureConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# =============================================================================
# Configuration Loading
# =============================================================================

def load_config(config_path: Optional[str] = None) -> Settings:
    """
    Load configuration from YAML file and environment variables.

    Priority (highest to lowest):
        1. Environment variables
        2. YAML config file
        3. Default values

    Args:
        config_path: Path to eventstream.yaml. If None, searches the
            working directory.

    Returns:
        Settings: Loaded configuration
    """
    if config_path is None:
        for path in (Path("eventstream.yaml"), Path("eventstream.yml")):
            if path.exists():
                config_path = str(path)
                break

    config_data = {}
    if config_path and Path(config_path).exists():
        logger.info(f"Loading config from: {config_path}")
        with open(config_path, "r") as f:
            config_data = yaml.safe_load(f) or {}
    else:
        logger.debug("No config file found, using defaults and environment variables")

    _apply_env_overrides(config_data)

    return Settings.model_validate(config_data)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _apply_env_overrides(config_data: dict) -> None:
    """Apply environment variable overrides to config data."""

    # Decoder settings
    if env_json := os.environ.get("EVENTSTREAM_PARSE_JSON"):
        config_data.setdefault("decoder", {})["parse_json_payload"] = _parse_bool(env_json)
    if env_warn := os.environ.get("EVENTSTREAM_WARN_TRAILING"):
        config_data.setdefault("decoder", {})["warn_on_trailing_data"] = _parse_bool(env_warn)

    # Capture settings
    if env_chunk := os.environ.get("EVENTSTREAM_CHUNK_SIZE"):
        config_data.setdefault("capture", {})["read_chunk_size"] = int(env_chunk)

    # Logging settings
    if env_log := os.environ.get("EVENTSTREAM_LOG_LEVEL"):
        config_data.setdefault("logging", {})["level"] = env_log
    if env_fmt := os.environ.get("EVENTSTREAM_LOG_FORMAT"):
        config_data.setdefault("logging", {})["format"] = env_fmt


def setup_logging(settings: Settings) -> None:
    """Configure logging based on settings."""
    log_level = getattr(logging, settings.logging.level.upper(), logging.INFO)

    if settings.logging.format == "json":
        log_format = '{"time": "%(asctime)s", "level": "%(levelname)s", "module": "%(name)s", "message": "%(message)s"}'
    else:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
    )


# =============================================================================
# Global Settings Instance
# =============================================================================

# Global settings instance - loaded on import
settings = load_config()

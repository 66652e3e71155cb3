"""Configuration management for labelreader.

Loads settings from a YAML configuration file with environment variable
overrides for sensitive values (API keys). Supports .env files.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, SecretStr
from pydantic_settings import BaseSettings

from labelreader.domain.models import Language, ScanMode

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/labelreader.yaml")


class CaptureConfig(BaseModel):
    device_index: int = Field(default=0, description="OpenCV camera device index")
    resolution_width: int | None = Field(default=None)
    resolution_height: int | None = Field(default=None)
    jpeg_quality: int = Field(default=80, ge=1, le=100)
    full_scan_window_ms: int = Field(default=4000, gt=0)
    full_scan_interval_ms: int = Field(default=600, gt=0)
    default_mode: ScanMode = Field(default=ScanMode.QUICK)


class AnalyzerConfig(BaseModel):
    provider: Literal["openai"] = Field(default="openai")
    model: str = Field(default="gpt-4o")
    base_url: str | None = Field(default=None)
    max_tokens: int = Field(default=1024, gt=0)


class SpeechConfig(BaseModel):
    backend: Literal["pyttsx3", "none"] = Field(default="pyttsx3")
    rate: int = Field(default=175, gt=0, description="Words per minute")
    volume: float = Field(default=1.0, ge=0.0, le=1.0)


class HapticsConfig(BaseModel):
    backend: Literal["none", "http"] = Field(default="none")
    http_base_url: str = Field(default="http://localhost:8090")
    http_timeout: float = Field(default=2.0, gt=0)


class DictationConfig(BaseModel):
    enabled: bool = Field(default=True)
    listen_timeout: float = Field(default=5.0, gt=0)
    phrase_time_limit: float = Field(default=10.0, gt=0)


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO")
    format: str = Field(
        default="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    file: str | None = Field(default=None)


class Settings(BaseSettings):
    """Root configuration for the labelreader system.

    Loads from YAML file and supports environment variable overrides.
    Reads .env files automatically.
    """

    model_config = {
        "env_prefix": "LABELREADER_",
        "env_nested_delimiter": "__",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    # API Keys
    openai_api_key: SecretStr = Field(default=SecretStr(""))
    openrouter_api_key: SecretStr = Field(default=SecretStr(""))

    language: Language = Field(default=Language.ENGLISH)

    # Configuration sections
    capture: CaptureConfig = Field(default_factory=CaptureConfig)
    analyzer: AnalyzerConfig = Field(default_factory=AnalyzerConfig)
    speech: SpeechConfig = Field(default_factory=SpeechConfig)
    haptics: HapticsConfig = Field(default_factory=HapticsConfig)
    dictation: DictationConfig = Field(default_factory=DictationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_settings(config_path: Path | str | None = None) -> Settings:
    """Load settings from YAML + .env + environment variables.

    Priority: env vars > .env file > YAML file > defaults
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    _load_dotenv()

    yaml_data = {}
    if path.exists():
        with open(path, encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}
        logger.info("Loaded configuration from %s", path)
    else:
        logger.warning("Config file %s not found, using defaults + env vars", path)

    _apply_env_overrides(yaml_data)

    return Settings(**yaml_data)


def _load_dotenv() -> None:
    """Load .env file into os.environ if it exists."""
    env_path = Path(".env")
    if not env_path.exists():
        return
    with open(env_path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip()
                if not os.environ.get(key):
                    os.environ[key] = value


def _apply_env_overrides(yaml_data: dict) -> None:
    """Apply environment variable overrides for non-prefixed vars."""
    or_key = os.environ.get("OPENROUTER_API_KEY", "")
    or_base_url = os.environ.get("OPENROUTER_BASE_URL", "")
    vision_model = os.environ.get("VISION_MODEL", "")

    if or_key:
        yaml_data["openrouter_api_key"] = or_key

    if "analyzer" not in yaml_data:
        yaml_data["analyzer"] = {}

    if or_base_url and not yaml_data["analyzer"].get("base_url"):
        yaml_data["analyzer"]["base_url"] = or_base_url

    if vision_model and not yaml_data["analyzer"].get("model"):
        yaml_data["analyzer"]["model"] = vision_model

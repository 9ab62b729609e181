"""Configuration management for studyrank."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

STUDYRANK_HOME = Path(os.environ.get("STUDYRANK_HOME", Path.home() / "studyrank"))
CONFIG_FILE = STUDYRANK_HOME / "config" / "studyrank.conf"
DATA_DIR = STUDYRANK_HOME / "data"

API_KEY_ENV_VARS = ("GEMINI_API_KEY", "API_KEY")


@dataclass
class Config:
    """studyrank configuration."""

    data_file: str = ""
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    advisor_timeout: int = 60
    # Seconds between priority refreshes in watch mode
    refresh_interval: int = 60
    high_priority_threshold: float = 50.0


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from an unquoted value."""
    if value[:1] in ('"', "'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def _parse_number(key: str, value: str, cast, default):
    try:
        return cast(value)
    except ValueError:
        logger.warning(f"Invalid value for {key.upper()}: {value!r}, using {default}")
        return default


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from studyrank.conf, then the environment."""
    config = Config()
    config_file = config_file or CONFIG_FILE

    if config_file.exists():
        for line in config_file.read_text().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            if "=" not in line:
                continue

            key, _, value = line.partition("=")
            key = key.strip().lower()
            value = _unquote(value.strip())

            match key:
                case "data_file":
                    config.data_file = value
                case "gemini_api_key":
                    config.gemini_api_key = value
                case "gemini_model":
                    config.gemini_model = value
                case "advisor_timeout":
                    config.advisor_timeout = _parse_number(key, value, int, config.advisor_timeout)
                case "refresh_interval":
                    config.refresh_interval = _parse_number(key, value, int, config.refresh_interval)
                case "high_priority_threshold":
                    config.high_priority_threshold = _parse_number(
                        key, value, float, config.high_priority_threshold
                    )

    if not config.gemini_api_key:
        for var in API_KEY_ENV_VARS:
            if os.environ.get(var):
                config.gemini_api_key = os.environ[var]
                break

    return config

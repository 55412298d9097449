"""Configuration management for mileage.

mileage.conf holds KEY=value lines. An unquoted value ends at a "#" that
begins it or follows whitespace, so an address like `100 Main St #200`
must be quoted.
"""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

MILEAGE_HOME = Path(os.environ.get("MILEAGE_HOME", Path.home() / "mileage"))
CONFIG_FILE = MILEAGE_HOME / "config" / "mileage.conf"

# Environment variables that take precedence over the config file
ENV_OVERRIDES = {
    "HOME_ADDRESS": "home_address",
    "GOOGLE_MAPS_API_KEY": "google_maps_api_key",
}

MAX_PAGE_SIZE = 100


@dataclass
class Config:
    """Mileage configuration."""

    home_address: str = ""
    google_maps_api_key: str = ""
    google_client_secret_file: str = ""
    google_config_folder: str = str(MILEAGE_HOME / "config")
    calendar_id: str = "primary"
    output_dir: str = str(MILEAGE_HOME / "output")
    page_size: int = MAX_PAGE_SIZE
    page_delay_ms: int = 100
    request_timeout: float = 30.0
    timezone: str = ""
    record_lookup_failures: bool = False

    @property
    def page_delay(self) -> float:
        """Pause between page requests, in seconds."""
        return self.page_delay_ms / 1000


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from an unquoted value."""
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    return re.split(r"(?:^|\s)#", value, maxsplit=1)[0].strip()


def _parse_int(key: str, value: str, default: int) -> int:
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring non-integer {key.upper()}={value!r}")
        return default


def _parse_float(key: str, value: str, default: float) -> float:
    try:
        return float(value)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {key.upper()}={value!r}")
        return default


def _parse_bool(key: str, value: str, default: bool) -> bool:
    lowered = value.lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off", ""):
        return False
    logger.warning(f"Ignoring non-boolean {key.upper()}={value!r}")
    return default


def load_config() -> Config:
    """Load configuration from mileage.conf, then apply environment overrides."""
    config = Config()

    if CONFIG_FILE.exists():
        for line in CONFIG_FILE.read_text().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            if "=" not in line:
                continue

            key, _, value = line.partition("=")
            key = key.strip().lower()
            raw = value.strip()
            value = _unquote(raw)

            match key:
                case "home_address":
                    if value != raw and raw[:1] not in ("\"", "'"):
                        logger.warning(
                            f"HOME_ADDRESS read as {value!r}; quote the value if '#' is part of the address"
                        )
                    config.home_address = value
                case "google_maps_api_key":
                    config.google_maps_api_key = value
                case "google_client_secret_file":
                    config.google_client_secret_file = value
                case "google_config_folder":
                    config.google_config_folder = value
                case "calendar_id":
                    config.calendar_id = value or "primary"
                case "output_dir":
                    config.output_dir = value
                case "page_size":
                    size = _parse_int(key, value, config.page_size)
                    config.page_size = max(1, min(size, MAX_PAGE_SIZE))
                case "page_delay_ms":
                    config.page_delay_ms = max(0, _parse_int(key, value, config.page_delay_ms))
                case "request_timeout":
                    config.request_timeout = _parse_float(key, value, config.request_timeout)
                case "timezone":
                    config.timezone = value
                case "record_lookup_failures":
                    config.record_lookup_failures = _parse_bool(
                        key, value, config.record_lookup_failures
                    )
                case _:
                    logger.debug(f"Unknown config key: {key}")

    for env_name, attr in ENV_OVERRIDES.items():
        if os.environ.get(env_name):
            setattr(config, attr, os.environ[env_name])

    return config

import json
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pitch_intel.domain.arsenal import ArsenalBaseline
from pitch_intel.ingest.mlb_live_feed_source import DEFAULT_FEED_URL_TEMPLATE

_CONFIG_FILENAME = "pitchintel.toml"

_SESSION_FIELDS: dict[str, type] = {
    "feed_url_template": str,
    "poll_interval_seconds": float,
    "replay_tick_seconds": float,
    "request_timeout_seconds": float,
}
_ARSENAL_FIELDS: dict[str, type] = {"arsenal_path": str}


class ConfigError(Exception):
    """Raised when session configuration or arsenal data is invalid."""


@dataclass(frozen=True)
class SessionConfig:
    feed_url_template: str = DEFAULT_FEED_URL_TEMPLATE
    poll_interval_seconds: float = 30.0
    replay_tick_seconds: float = 2.0
    request_timeout_seconds: float = 10.0
    arsenal_path: Path | None = None


# -- Validation --------------------------------------------------------------


def validate_session(config: SessionConfig) -> None:
    if "{game_pk}" not in config.feed_url_template:
        raise ConfigError("feed_url_template must contain '{game_pk}'")
    if config.poll_interval_seconds <= 0:
        raise ConfigError(f"poll_interval_seconds must be > 0, got {config.poll_interval_seconds}")
    if config.replay_tick_seconds < 0:
        raise ConfigError(f"replay_tick_seconds must be >= 0, got {config.replay_tick_seconds}")
    if config.request_timeout_seconds <= 0:
        raise ConfigError(f"request_timeout_seconds must be > 0, got {config.request_timeout_seconds}")


# -- Parsing -----------------------------------------------------------------


def _check_table(raw: Any, fields: dict[str, type], table: str) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise ConfigError(f"[{table}] must be a table")
    unknown = sorted(set(raw) - set(fields))
    if unknown:
        raise ConfigError(f"[{table}]: unknown keys {', '.join(unknown)}")
    values: dict[str, Any] = {}
    for key, value in raw.items():
        expected = fields[key]
        if expected is float and isinstance(value, int) and not isinstance(value, bool):
            value = float(value)
        if not isinstance(value, expected) or isinstance(value, bool):
            raise ConfigError(f"[{table}] {key}: expected {expected.__name__}, got {type(value).__name__}")
        values[key] = value
    return values


def parse_session(data: dict[str, Any], config_dir: Path) -> SessionConfig:
    values = _check_table(data.get("session", {}), _SESSION_FIELDS, "session")
    arsenal = _check_table(data.get("arsenal", {}), _ARSENAL_FIELDS, "arsenal")
    if "arsenal_path" in arsenal:
        path = Path(arsenal["arsenal_path"])
        values["arsenal_path"] = path if path.is_absolute() else config_dir / path
    config = SessionConfig(**values)
    validate_session(config)
    return config


# -- Loading -----------------------------------------------------------------


def load_session_config(config_dir: Path) -> SessionConfig:
    toml_path = config_dir / _CONFIG_FILENAME
    if not toml_path.exists():
        return SessionConfig()

    try:
        with toml_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{_CONFIG_FILENAME}: {exc}") from exc

    return parse_session(data, config_dir)


def load_arsenal(path: Path) -> ArsenalBaseline:
    """Load a pre-parsed arsenal baseline from JSON."""
    if not path.exists():
        raise ConfigError(f"Arsenal file not found: {path}")
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Arsenal file {path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict) or "families" not in data:
        raise ConfigError(f"Arsenal file {path}: missing 'families' object")
    try:
        return ArsenalBaseline.from_mappings(data["families"], data.get("subtypes"))
    except (AttributeError, TypeError, ValueError) as exc:
        raise ConfigError(f"Arsenal file {path}: {exc}") from exc

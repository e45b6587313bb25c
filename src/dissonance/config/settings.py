"""TOML config loading and profiles."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

# Default config search path (project root or cwd)
_CONFIG_DIR = Path(__file__).resolve().parent.parent.parent.parent / "config"

PROVIDER_NAMES = ("polymarket", "metaculus", "manifold")

_DEFAULT_API_URLS = {
    "polymarket": "https://clob.polymarket.com/markets",
    "metaculus": "https://www.metaculus.com/api2/questions/",
    "manifold": "https://api.manifold.markets/v0/markets",
}


def _load_toml(path: Path) -> dict[str, Any]:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into base. Override values take precedence."""
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _find_config_dir(config_dir: Path | None = None) -> Path:
    if config_dir is not None:
        return config_dir
    cwd_config = Path.cwd() / "config"
    if cwd_config.exists():
        return cwd_config
    return _CONFIG_DIR


def load_config(profile: str | None = None, config_dir: Path | None = None) -> dict[str, Any]:
    """Load merged config from default.toml and optional profile overlay."""
    directory = _find_config_dir(config_dir)
    default_path = directory / "default.toml"
    if not default_path.exists():
        return {}
    base = _load_toml(default_path)
    if profile:
        profile_path = directory / f"{profile}.toml"
        if profile_path.exists():
            overlay = _load_toml(profile_path)
            base = _deep_merge(base, overlay)
    return base


def get_settings(profile: str | None = None, config_dir: Path | None = None) -> Settings:
    """Return Settings instance from merged config."""
    raw = load_config(profile, config_dir)
    return Settings.from_dict(raw)


class Settings:
    """Application settings from TOML config."""

    def __init__(
        self,
        *,
        pipeline: dict[str, Any] | None = None,
        providers: dict[str, Any] | None = None,
        relay: dict[str, Any] | None = None,
        api: dict[str, Any] | None = None,
        logging: dict[str, Any] | None = None,
    ):
        self.pipeline = pipeline or {}
        self.providers = providers or {}
        self.relay = relay or {}
        self.api = api or {}
        self.logging = logging or {}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Settings:
        return cls(
            pipeline=raw.get("pipeline"),
            providers=raw.get("providers"),
            relay=raw.get("relay"),
            api=raw.get("api"),
            logging=raw.get("logging"),
        )

    # Convenience accessors with defaults
    @property
    def refresh_interval_ms(self) -> int:
        return int(self.pipeline.get("refresh_interval_ms", 60_000))

    @property
    def arb_threshold(self) -> float:
        return float(self.pipeline.get("arb_threshold", 0.98))

    @property
    def exclude_same_source(self) -> bool:
        return bool(self.pipeline.get("exclude_same_source", False))

    @property
    def drop_default_odds(self) -> bool:
        return bool(self.pipeline.get("drop_default_odds", False))

    @property
    def match_key_length(self) -> int:
        return int(self.pipeline.get("match_key_length", 50))

    @property
    def request_timeout_sec(self) -> float:
        return float(self.pipeline.get("request_timeout_sec", 30.0))

    @property
    def relay_prefix(self) -> str:
        return self.relay.get("prefix", "") or ""

    @property
    def enabled_providers(self) -> list[str]:
        return [name for name in PROVIDER_NAMES if self.provider_enabled(name)]

    def _provider(self, name: str) -> dict[str, Any]:
        return self.providers.get(name) or {}

    def provider_enabled(self, name: str) -> bool:
        return bool(self._provider(name).get("enabled", True))

    def provider_limit(self, name: str) -> int:
        return int(self._provider(name).get("limit", 50))

    def provider_api_url(self, name: str) -> str:
        return self._provider(name).get("api_url", _DEFAULT_API_URLS[name])

    @property
    def api_host(self) -> str:
        return self.api.get("host", "127.0.0.1")

    @property
    def api_port(self) -> int:
        return int(self.api.get("port", 8000))

    @property
    def logging_level(self) -> str:
        return self.logging.get("level", "INFO").upper()

    @property
    def logging_format(self) -> str:
        return self.logging.get("format", "console")

    @property
    def logging_level_num(self) -> int:
        return getattr(logging, self.logging_level, logging.INFO)


def configure_logging(settings: Settings) -> None:
    """Configure structlog with settings. Call once at application entry."""
    import structlog

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if settings.logging_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(settings.logging_level_num),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

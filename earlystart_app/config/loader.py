"""Configuration loader with 3-tier parameter precedence."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from ..errors import ConfigurationError
from .defaults import (
    ApiParams,
    DefaultConfig,
    LoggingParams,
    PlaybackParams,
    PollingParams,
    RepositoryParams,
    SignupParams,
    get_default_config,
)
from .validation import ConfigValidator

API_URL_ENV = "EARLYSTART_API_URL"
APP_ENV_ENV = "EARLYSTART_ENV"
LOG_LEVEL_ENV = "EARLYSTART_LOG_LEVEL"
TUNING_FILE = "earlystart.yaml"

_SECTIONS = {
    "api": ApiParams,
    "signup": SignupParams,
    "polling": PollingParams,
    "repository": RepositoryParams,
    "playback": PlaybackParams,
    "logging": LoggingParams,
}


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig
    environ: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        config_dir: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None
    ) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=config_dir,
            defaults=get_default_config(),
            environ=dict(os.environ) if environ is None else dict(environ),
        )

    def load_tuning_overrides(self) -> dict[str, Any]:
        """Load optional tuning overrides (poll intervals, grace delay, repository)."""
        tuning_file = self.config_dir / TUNING_FILE

        if not tuning_file.exists():
            return {}

        with open(tuning_file) as f:
            tuning = yaml.safe_load(f)

        return tuning or {}

    def load_environment_overrides(self) -> dict[str, Any]:
        """Read the API base address, dev-mode flag and log level from the environment."""
        overrides: dict[str, Any] = {}
        api: dict[str, Any] = {}

        base_url = self.environ.get(API_URL_ENV)
        if base_url:
            api["base_url"] = base_url.rstrip("/")

        app_env = self.environ.get(APP_ENV_ENV)
        if app_env is not None:
            api["dev_mode"] = app_env.strip().lower() == "development"

        if api:
            overrides["api"] = api

        log_level = self.environ.get(LOG_LEVEL_ENV)
        if log_level:
            overrides["logging"] = {"level": log_level.strip().upper()}

        return overrides

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Explicit overrides and environment values (highest priority)
        2. Tuning file overrides
        3. Dataclass defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        config = self._deep_merge(config, self.load_tuning_overrides())
        config = self._deep_merge(config, self.load_environment_overrides())

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load(self, overrides: Optional[dict[str, Any]] = None) -> DefaultConfig:
        """Merge, validate and build the typed configuration."""
        merged = self.merge_config(overrides)

        errors = ConfigValidator.validate(merged)
        if errors:
            raise ConfigurationError(
                "Invalid configuration: " + "; ".join(
                    f"{e.field}: {e.message}" for e in errors
                ),
                errors=errors,
            )

        return DefaultConfig(**{
            name: params_cls(**merged[name])
            for name, params_cls in _SECTIONS.items()
        })

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result


def load_config(
    config_dir: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None
) -> DefaultConfig:
    """Load the app configuration from defaults, tuning file and environment."""
    return ConfigLoader.create(config_dir, environ).load()

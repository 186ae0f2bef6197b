"""Configuration validation utilities."""

from dataclasses import dataclass, fields
from typing import Any
from urllib.parse import urlparse

from .defaults import (
    ApiParams,
    LoggingParams,
    PlaybackParams,
    PollingParams,
    RepositoryParams,
    SignupParams,
)

_KNOWN_SECTIONS = {
    "api": ApiParams,
    "signup": SignupParams,
    "polling": PollingParams,
    "repository": RepositoryParams,
    "playback": PlaybackParams,
    "logging": LoggingParams,
}

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_structure(config: dict[str, Any]) -> list[ValidationError]:
        """Reject unknown sections and keys before dataclasses are built."""
        errors = []

        for section, values in config.items():
            params_cls = _KNOWN_SECTIONS.get(section)
            if params_cls is None:
                errors.append(ValidationError(
                    field=section,
                    message="Unknown configuration section",
                    value=values
                ))
                continue

            if not isinstance(values, dict):
                errors.append(ValidationError(
                    field=section,
                    message="Must be a mapping",
                    value=values
                ))
                continue

            allowed = {f.name for f in fields(params_cls)}
            for key in values:
                if key not in allowed:
                    errors.append(ValidationError(
                        field=f"{section}.{key}",
                        message="Unknown configuration key",
                        value=values[key]
                    ))

        return errors

    @staticmethod
    def validate_api_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate backend adapter parameters."""
        errors = []

        if "base_url" in params:
            value = params["base_url"]
            parsed = urlparse(value) if isinstance(value, str) else None
            if parsed is None or parsed.scheme not in ("http", "https") or not parsed.netloc:
                errors.append(ValidationError(
                    field="api.base_url",
                    message="Must be an http(s) URL",
                    value=value
                ))

        if "dev_mode" in params and not isinstance(params["dev_mode"], bool):
            errors.append(ValidationError(
                field="api.dev_mode",
                message="Must be a boolean",
                value=params["dev_mode"]
            ))

        if "timeout_seconds" in params:
            value = params["timeout_seconds"]
            if not _is_number(value) or value <= 0:
                errors.append(ValidationError(
                    field="api.timeout_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_signup_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate signup flow parameters."""
        errors = []

        if "code_length" in params:
            value = params["code_length"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                errors.append(ValidationError(
                    field="signup.code_length",
                    message="Must be a positive integer",
                    value=value
                ))

        if "abandon_grace_seconds" in params:
            value = params["abandon_grace_seconds"]
            if not _is_number(value) or value < 0:
                errors.append(ValidationError(
                    field="signup.abandon_grace_seconds",
                    message="Must be a non-negative number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_polling_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate poll intervals."""
        errors = []

        for key in ("count_interval_seconds", "status_interval_seconds"):
            if key in params:
                value = params[key]
                if not _is_number(value) or value <= 0:
                    errors.append(ValidationError(
                        field=f"polling.{key}",
                        message="Must be a positive number",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_repository_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate repository identity."""
        errors = []

        for key in ("owner", "name", "default_branch"):
            if key in params:
                value = params[key]
                if not isinstance(value, str) or not value.strip():
                    errors.append(ValidationError(
                        field=f"repository.{key}",
                        message="Must be a non-empty string",
                        value=value
                    ))
                elif key != "default_branch" and "/" in value:
                    # owner and name are joined into the API path
                    errors.append(ValidationError(
                        field=f"repository.{key}",
                        message="Must not contain '/'",
                        value=value
                    ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate log output settings."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in _LOG_LEVELS:
                errors.append(ValidationError(
                    field="logging.level",
                    message=f"Must be one of {', '.join(_LOG_LEVELS)}",
                    value=value
                ))

        if "format_json" in params and not isinstance(params["format_json"], bool):
            errors.append(ValidationError(
                field="logging.format_json",
                message="Must be a boolean",
                value=params["format_json"]
            ))

        return errors

    @classmethod
    def validate(cls, config: dict[str, Any]) -> list[ValidationError]:
        """Validate a merged configuration dictionary."""
        errors = cls.validate_structure(config)
        if errors:
            return errors

        errors.extend(cls.validate_api_params(config.get("api", {})))
        errors.extend(cls.validate_signup_params(config.get("signup", {})))
        errors.extend(cls.validate_polling_params(config.get("polling", {})))
        errors.extend(cls.validate_repository_params(config.get("repository", {})))
        errors.extend(cls.validate_logging_params(config.get("logging", {})))

        return errors

"""Configuration errors raised while assembling the app configuration."""

from typing import Any, Optional

from .api import EarlyStartError


class ConfigurationError(EarlyStartError):
    """Configuration failed validation; requires fixing the environment."""

    def __init__(self, message: str, errors: Optional[list[Any]] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
        self.recoverable = False

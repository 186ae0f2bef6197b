"""
Error classification for the early start app.

Adapter errors surface on the active form, status source errors are absorbed
by the deployment fallback chain, configuration errors stop startup.
"""

from .api import (
    ApiError,
    EarlyStartError,
    MalformedResponseError,
)
from .status import StatusSourceError
from .configuration import ConfigurationError

__all__ = [
    "EarlyStartError",
    # Backend adapter
    "ApiError",
    "MalformedResponseError",
    # Deployment status
    "StatusSourceError",
    # Startup
    "ConfigurationError",
]

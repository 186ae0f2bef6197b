"""
Deployment status lookup errors.

Raised by a single source in the deployment fallback chain. The resolver
treats them as "no result" for that source and moves on.
"""

from typing import Optional

from .api import EarlyStartError


class StatusSourceError(EarlyStartError):
    """A status source could not be queried (transport error or non-200)."""

    def __init__(self, message: str, source: Optional[str] = None,
                 status_code: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.source = source
        self.status_code = status_code

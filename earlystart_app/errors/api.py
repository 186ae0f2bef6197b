"""
Backend adapter error classifications.

Every failure of an outbound call to the early start backend, whether the
server rejected the request or the request never completed, is raised as a
single ApiError carrying a short user-presentable message.
"""

from typing import Any, Dict, Optional


class EarlyStartError(Exception):
    """Base class for errors raised inside the early start app."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.recoverable = True


class ApiError(EarlyStartError):
    """Backend call failed; message is safe to show next to the active form."""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 endpoint: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.status_code = status_code
        self.endpoint = endpoint


class MalformedResponseError(ApiError):
    """Backend answered 2xx but the payload lacks the expected fields."""

    def __init__(self, message: str, payload: Optional[Any] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.payload = payload

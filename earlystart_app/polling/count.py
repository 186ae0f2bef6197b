"""Live "people starting early" counter shown while the music plays."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from ..api.client import ApiClient
from ..errors import ApiError, MalformedResponseError
from ..utils.time import utc_now
from .base import Poller


@dataclass(frozen=True)
class CountSnapshot:
    """Signup counts as last reported by the backend."""
    verified_count: int
    total_count: int
    fetched_at: datetime


def parse_count_payload(payload: Any, fetched_at: Optional[datetime] = None) -> CountSnapshot:
    """
    Build a snapshot from a {total, verified} payload.

    Raises:
        MalformedResponseError: when the counts are missing or negative
    """
    if not isinstance(payload, dict):
        raise MalformedResponseError("Count response is not an object", payload=payload)

    counts = {}
    for key in ("verified", "total"):
        value = payload.get(key, 0 if key == "total" else None)
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise MalformedResponseError(
                f"Count response has invalid '{key}'",
                payload=payload,
                endpoint="/early-start/count",
            )
        counts[key] = value

    return CountSnapshot(
        verified_count=counts["verified"],
        total_count=counts["total"],
        fetched_at=fetched_at or utc_now(),
    )


class CountPoller(Poller):
    """Refreshes the verified signup count on a fixed period."""

    def __init__(self, api: ApiClient, interval_seconds: float = 10.0):
        super().__init__("signup_count", interval_seconds)
        self.api = api
        self._snapshot: Optional[CountSnapshot] = None
        self._last_error: Optional[str] = None

    @property
    def snapshot(self) -> Optional[CountSnapshot]:
        return self._snapshot

    @property
    def verified_count(self) -> int:
        """Count to display; 0 until the first successful fetch."""
        return self._snapshot.verified_count if self._snapshot else 0

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    def poll_once(self, generation: int) -> None:
        try:
            snapshot = parse_count_payload(self.api.get_count())
        except ApiError as e:
            # Keep the previous count on screen
            self.logger.warning("Count refresh failed", error=e.message, status_code=e.status_code)
            self.apply_if_current(generation, lambda: self._record_error(e.message))
            return

        self.apply_if_current(generation, lambda: self._apply(snapshot))

    def _apply(self, snapshot: CountSnapshot) -> None:
        self._snapshot = snapshot
        self._last_error = None

    def _record_error(self, message: str) -> None:
        self._last_error = message

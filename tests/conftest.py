"""Pytest configuration and shared fixtures."""

from datetime import datetime, timezone
from typing import Any, Callable, Optional
from unittest.mock import Mock

import pytest
import requests

from earlystart_app.config.defaults import (
    ApiParams,
    RepositoryParams,
    SignupParams,
    get_default_config,
)


def make_response(status_code: int = 200, payload: Any = None, json_error: bool = False) -> Mock:
    """Build a requests.Response stand-in."""
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    if json_error:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = payload
    return response


class FakeTimer:
    """Timer handle recorded by FakeScheduler."""

    def __init__(self, delay: float, callback: Callable[[], None]):
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        if not self.cancelled:
            self.callback()


class FakeScheduler:
    """Deterministic replacement for threading.Timer."""

    def __init__(self):
        self.timers: list[FakeTimer] = []

    def __call__(self, delay: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def last(self) -> Optional[FakeTimer]:
        return self.timers[-1] if self.timers else None

    def fire_all(self) -> None:
        for timer in list(self.timers):
            timer.fire()


@pytest.fixture
def app_config():
    """Default configuration."""
    return get_default_config()


@pytest.fixture
def api_params() -> ApiParams:
    return ApiParams(base_url="http://api.test", dev_mode=False)


@pytest.fixture
def signup_params() -> SignupParams:
    return SignupParams()


@pytest.fixture
def repo_params() -> RepositoryParams:
    return RepositoryParams(owner="dhamariT", name="buildboard")


@pytest.fixture
def http_session() -> Mock:
    """Mocked requests.Session; set .request/.get return values per test."""
    return Mock(spec=requests.Session)


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_workflow_runs() -> dict[str, Any]:
    """GitHub actions/runs payload with one successful run."""
    return {
        "total_count": 1,
        "workflow_runs": [
            {
                "id": 42,
                "head_sha": "abc123def4567890abc123def4567890abc12345",
                "html_url": "https://github.com/dhamariT/buildboard/actions/runs/42",
                "created_at": "2025-03-01T10:00:00Z",
                "updated_at": "2025-03-01T10:05:00Z",
                "conclusion": "success",
            }
        ],
    }


@pytest.fixture
def sample_commits() -> list[dict[str, Any]]:
    """GitHub commits payload with one commit."""
    return [
        {
            "sha": "fedcba9876543210fedcba9876543210fedcba98",
            "html_url": "https://github.com/dhamariT/buildboard/commit/fedcba98",
            "commit": {
                "author": {"name": "dev", "date": "2025-02-28T08:00:00Z"},
                "committer": {"name": "GitHub", "date": "2025-02-28T09:30:00Z"},
                "message": "Update landing page",
            },
        }
    ]


@pytest.fixture
def response_factory() -> Callable[..., Mock]:
    """Factory for requests.Response stand-ins."""
    return make_response

"""Tests for the live signup count poller."""

import threading
from datetime import datetime, timezone

import pytest
from unittest.mock import Mock

from earlystart_app.api.client import ApiClient
from earlystart_app.errors import ApiError, MalformedResponseError
from earlystart_app.polling.count import CountPoller, CountSnapshot, parse_count_payload


@pytest.fixture
def api():
    mock = Mock(spec=ApiClient)
    mock.get_count.return_value = {"total": 12, "verified": 7}
    return mock


class TestParseCountPayload:
    """Test count payload parsing."""

    def test_valid_payload(self):
        fetched_at = datetime(2025, 3, 1, tzinfo=timezone.utc)

        snapshot = parse_count_payload({"total": 12, "verified": 7}, fetched_at)

        assert snapshot == CountSnapshot(verified_count=7, total_count=12, fetched_at=fetched_at)

    def test_total_defaults_to_zero(self):
        assert parse_count_payload({"verified": 3}).total_count == 0

    @pytest.mark.parametrize("payload", [
        None,
        [],
        {"total": 5},
        {"verified": -1},
        {"verified": "7"},
        {"verified": True},
        {"verified": 2, "total": -4},
    ])
    def test_invalid_payload_raises(self, payload):
        with pytest.raises(MalformedResponseError):
            parse_count_payload(payload)


class TestCountPoller:
    """Test tick behaviour and teardown."""

    def test_initial_count_is_zero(self, api):
        poller = CountPoller(api)

        assert poller.snapshot is None
        assert poller.verified_count == 0

    def test_refresh_replaces_snapshot(self, api):
        poller = CountPoller(api)

        poller.refresh()
        assert poller.verified_count == 7

        api.get_count.return_value = {"total": 20, "verified": 9}
        poller.refresh()
        assert poller.verified_count == 9
        assert poller.snapshot.total_count == 20

    def test_failed_tick_keeps_previous_count(self, api):
        poller = CountPoller(api)
        poller.refresh()

        api.get_count.side_effect = ApiError("HTTP error! status: 500", status_code=500)
        poller.refresh()

        assert poller.verified_count == 7
        assert poller.last_error == "HTTP error! status: 500"

    def test_malformed_tick_keeps_previous_count(self, api):
        poller = CountPoller(api)
        poller.refresh()

        api.get_count.return_value = {"total": 1}
        poller.refresh()

        assert poller.verified_count == 7
        assert poller.last_error is not None

    def test_success_clears_last_error(self, api):
        poller = CountPoller(api)
        api.get_count.side_effect = [ApiError("down"), {"total": 1, "verified": 1}]

        poller.refresh()
        poller.refresh()

        assert poller.last_error is None

    def test_start_fetches_immediately(self, api):
        fetched = threading.Event()

        def count():
            fetched.set()
            return {"total": 1, "verified": 1}

        api.get_count.side_effect = count
        poller = CountPoller(api, interval_seconds=60)

        poller.start()
        try:
            assert fetched.wait(5)
            assert poller.running is True
        finally:
            poller.stop(timeout=5)

        assert poller.running is False

    def test_polls_on_interval(self, api):
        ticks = threading.Semaphore(0)

        def count():
            ticks.release()
            return {"total": 1, "verified": 1}

        api.get_count.side_effect = count
        poller = CountPoller(api, interval_seconds=0.01)

        poller.start()
        try:
            for _ in range(3):
                assert ticks.acquire(timeout=5)
        finally:
            poller.stop(timeout=5)

    def test_start_twice_runs_one_thread(self, api):
        poller = CountPoller(api, interval_seconds=60)

        poller.start()
        thread = poller._thread
        poller.start()
        try:
            assert poller._thread is thread
        finally:
            poller.stop(timeout=5)

    def test_stopped_thread_applies_nothing(self, api):
        started = threading.Event()
        release = threading.Event()
        finished = threading.Event()

        def slow_count():
            started.set()
            release.wait(5)
            finished.set()
            return {"total": 50, "verified": 50}

        api.get_count.side_effect = slow_count
        poller = CountPoller(api, interval_seconds=60)

        poller.start()
        assert started.wait(5)
        thread = poller._thread
        poller.stop()
        release.set()
        assert finished.wait(5)
        thread.join(5)

        assert poller.snapshot is None

    def test_stop_when_not_running_is_harmless(self, api):
        poller = CountPoller(api)

        poller.stop()

        assert poller.running is False

    def test_worker_survives_unexpected_error(self, api):
        recovered = threading.Event()
        calls = []

        def flaky_count():
            calls.append(True)
            if len(calls) == 1:
                raise RuntimeError("decoder exploded")
            recovered.set()
            return {"total": 3, "verified": 2}

        api.get_count.side_effect = flaky_count
        poller = CountPoller(api, interval_seconds=0.01)

        poller.start()
        try:
            assert recovered.wait(5)
            assert poller._thread.is_alive()
        finally:
            poller.stop(timeout=5)

        assert poller.tick_count >= 2
        assert poller.verified_count == 2

    def test_unexpected_error_on_refresh_is_logged_not_raised(self, api):
        api.get_count.side_effect = RuntimeError("decoder exploded")
        poller = CountPoller(api)

        poller.refresh()

        assert poller.snapshot is None

    def test_refresh_after_stop_is_ignored(self, api):
        poller = CountPoller(api, interval_seconds=60)
        poller.start()
        poller.stop(timeout=5)
        api.get_count.reset_mock()
        api.get_count.return_value = {"total": 99, "verified": 99}

        poller.refresh()

        api.get_count.assert_not_called()
        assert poller.verified_count != 99

    def test_restart_reenables_refresh(self, api):
        poller = CountPoller(api, interval_seconds=60)
        poller.start()
        poller.stop(timeout=5)
        api.get_count.return_value = {"total": 50, "verified": 40}

        poller.start()
        try:
            poller.refresh()
            assert poller.verified_count == 40
        finally:
            poller.stop(timeout=5)

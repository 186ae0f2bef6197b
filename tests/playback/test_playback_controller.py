"""Tests for the landing page music player controller."""

import pytest
from unittest.mock import Mock

from earlystart_app.config.defaults import PlaybackParams
from earlystart_app.playback.audio import NullAudioElement
from earlystart_app.playback.controller import PlaybackController, PlaybackState


@pytest.fixture
def audio():
    return NullAudioElement()


@pytest.fixture
def navigate():
    return Mock()


@pytest.fixture
def player(audio, navigate):
    return PlaybackController(PlaybackParams(), audio=audio, navigate=navigate)


class TestLifecycle:
    """Test WAITING -> IDLE -> PLAYING -> IDLE."""

    def test_starts_waiting(self, player):
        assert player.state is PlaybackState.WAITING

    def test_mount_moves_to_idle(self, player):
        player.mount()

        assert player.state is PlaybackState.IDLE

    def test_start_before_mount_is_ignored(self, player, audio):
        player.start()

        assert player.state is PlaybackState.WAITING
        assert audio.paused is True

    def test_start_loops_and_plays(self, player, audio):
        player.mount()
        player.start()

        assert player.state is PlaybackState.PLAYING
        assert player.is_playing is True
        assert audio.loop is True
        assert audio.paused is False

    def test_stop_pauses_and_rewinds(self, player, audio):
        player.mount()
        player.start()
        audio.current_time = 42.5

        player.stop()

        assert player.state is PlaybackState.IDLE
        assert audio.paused is True
        assert audio.current_time == 0

    def test_stop_when_idle_is_ignored(self, player, audio):
        player.mount()

        player.stop()

        assert player.state is PlaybackState.IDLE

    def test_listeners_see_each_transition(self, player):
        seen = []
        player.add_listener(lambda old, new: seen.append((old, new)))

        player.mount()
        player.start()
        player.stop()

        assert seen == [
            (PlaybackState.WAITING, PlaybackState.IDLE),
            (PlaybackState.IDLE, PlaybackState.PLAYING),
            (PlaybackState.PLAYING, PlaybackState.IDLE),
        ]


class TestMute:
    """Test the orthogonal mute flag."""

    def test_toggle_mute_applies_to_audio(self, player, audio):
        player.mount()

        assert player.toggle_mute() is True
        assert audio.muted is True
        assert player.toggle_mute() is False
        assert audio.muted is False

    def test_toggle_mute_does_not_change_state(self, player):
        player.mount()
        player.start()

        player.toggle_mute()

        assert player.state is PlaybackState.PLAYING

    def test_mute_while_waiting_is_applied_on_mount(self, player, audio):
        player.toggle_mute()
        assert audio.muted is False

        player.mount()

        assert audio.muted is True


class TestNextProject:
    """Test the next-project advance."""

    def test_next_project_restarts_playback(self, player, audio):
        player.mount()
        player.start()
        audio.current_time = 30.0

        player.next_project()

        assert player.projects_shipped == 1
        assert audio.current_time == 0
        assert audio.play_count == 2
        assert player.state is PlaybackState.PLAYING

    def test_next_project_requires_playing(self, player):
        player.mount()

        player.next_project()

        assert player.projects_shipped == 0


class TestClaimEarly:
    """Test the claim-your-spot shortcut."""

    def test_claim_early_stops_and_navigates(self, player, audio, navigate):
        player.mount()
        player.start()

        player.claim_early()

        assert player.state is PlaybackState.IDLE
        assert audio.paused is True
        navigate.assert_called_once_with("/earlystart/guide")

    def test_claim_early_without_navigator(self, audio):
        player = PlaybackController(PlaybackParams(), audio=audio)
        player.mount()
        player.start()

        player.claim_early()

        assert player.state is PlaybackState.IDLE

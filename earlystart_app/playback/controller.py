"""
Music player state for the landing page.

The player starts in WAITING so the first render shows a neutral headline,
moves to IDLE once mounted, and to PLAYING when the visitor clicks the call
to action. Only PLAYING reveals the marquee and the signup surface.
"""

from enum import Enum
from typing import Any, Callable, Optional

from ..config.defaults import PlaybackParams
from ..logging.config import get_logger, log_state_transition
from .audio import AudioElement, NullAudioElement

logger = get_logger(__name__)


class PlaybackState(str, Enum):
    """Player lifecycle states."""
    WAITING = "waiting"
    IDLE = "idle"
    PLAYING = "playing"


Listener = Callable[["PlaybackState", "PlaybackState"], None]


class PlaybackController:
    """Drives the audio element and exposes the player state."""

    def __init__(
        self,
        params: PlaybackParams,
        audio: Optional[AudioElement] = None,
        navigate: Optional[Callable[[str], Any]] = None
    ):
        self.params = params
        self.audio: AudioElement = audio if audio is not None else NullAudioElement()
        self.navigate = navigate
        self.state = PlaybackState.WAITING
        self.muted = False
        self.projects_shipped = 0
        self._listeners: list[Listener] = []

    @property
    def is_playing(self) -> bool:
        return self.state is PlaybackState.PLAYING

    def add_listener(self, listener: Listener) -> None:
        """Register listener(from_state, to_state) for state changes."""
        self._listeners.append(listener)

    def mount(self) -> None:
        """Leave the mount-time placeholder and show the call to action."""
        if self.state is not PlaybackState.WAITING:
            return
        self.audio.muted = self.muted
        self._set_state(PlaybackState.IDLE, "mount")

    def start(self) -> None:
        """Begin looped playback."""
        if self.state is not PlaybackState.IDLE:
            return
        self.audio.loop = True
        self.audio.play()
        self._set_state(PlaybackState.PLAYING, "start")

    def stop(self) -> None:
        """Pause and rewind playback."""
        if self.state is not PlaybackState.PLAYING:
            return
        self.audio.pause()
        self.audio.current_time = 0
        self._set_state(PlaybackState.IDLE, "stop")

    def toggle_mute(self) -> bool:
        """Flip the mute flag in any state; returns the new value."""
        self.muted = not self.muted
        if self.state is not PlaybackState.WAITING:
            self.audio.muted = self.muted
        logger.debug("Mute toggled", muted=self.muted)
        return self.muted

    def next_project(self) -> None:
        """Count another shipped project and restart the clip from the top."""
        if self.state is not PlaybackState.PLAYING:
            return
        self.projects_shipped += 1
        self.audio.current_time = 0
        self.audio.play()

    def claim_early(self) -> None:
        """Stop the music and go to the early start guide."""
        self.stop()
        if self.navigate is not None:
            self.navigate(self.params.claim_path)

    def _set_state(self, new_state: PlaybackState, trigger: str) -> None:
        old_state = self.state
        self.state = new_state
        log_state_transition(
            logger,
            flow="player",
            from_state=old_state.value,
            to_state=new_state.value,
            trigger=trigger,
        )
        for listener in list(self._listeners):
            listener(old_state, new_state)

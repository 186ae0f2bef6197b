"""Audio element implementations for the landing page music player."""

from pathlib import Path
from typing import Protocol

from ..logging.config import get_logger

logger = get_logger(__name__)


class AudioElement(Protocol):
    """Subset of a media element the playback controller drives."""

    loop: bool
    muted: bool
    current_time: float

    @property
    def paused(self) -> bool: ...

    def play(self) -> None: ...

    def pause(self) -> None: ...


class NullAudioElement:
    """Audio element that only tracks state; used headless and in tests."""

    def __init__(self) -> None:
        self.loop = False
        self.muted = False
        self.current_time = 0.0
        self.paused = True
        self.play_count = 0

    def play(self) -> None:
        self.paused = False
        self.play_count += 1

    def pause(self) -> None:
        self.paused = True


class PygameAudioElement:
    """Plays the looped clip through pygame's mixer music channel."""

    def __init__(self, source: Path | str):
        import pygame

        self._pygame = pygame
        self.source = str(source)
        self.loop = False
        self._muted = False
        self._paused = True
        self._started = False

        pygame.mixer.init()
        pygame.mixer.music.load(self.source)

    @property
    def muted(self) -> bool:
        return self._muted

    @muted.setter
    def muted(self, value: bool) -> None:
        self._muted = bool(value)
        self._pygame.mixer.music.set_volume(0.0 if self._muted else 1.0)

    @property
    def current_time(self) -> float:
        if not self._started:
            return 0.0
        # get_pos() reports milliseconds since play() and -1 when stopped
        return max(0, self._pygame.mixer.music.get_pos()) / 1000.0

    @current_time.setter
    def current_time(self, value: float) -> None:
        if value == 0:
            # rewind() keeps the paused/playing status; get_pos() restarts on the next play()
            self._pygame.mixer.music.rewind()
            if self._paused:
                self._started = False
        else:
            self._pygame.mixer.music.set_pos(value)

    @property
    def paused(self) -> bool:
        return self._paused

    def play(self) -> None:
        music = self._pygame.mixer.music
        if self._started and self._paused:
            music.unpause()
        else:
            music.play(loops=-1 if self.loop else 0)
            self._started = True
        self._paused = False

    def pause(self) -> None:
        self._pygame.mixer.music.pause()
        self._paused = True

    def close(self) -> None:
        """Release the mixer."""
        self._pygame.mixer.music.stop()
        self._pygame.mixer.quit()


def open_audio_element(source: Path | str) -> AudioElement:
    """
    Open the player's clip on the mixer.

    Falls back to a silent NullAudioElement when pygame cannot open an
    output device or load the file, so the page still runs headless.
    """
    import pygame

    try:
        return PygameAudioElement(source)
    except (pygame.error, OSError) as e:
        logger.warning("Audio output unavailable, playing silently", source=str(source), error=str(e))
        return NullAudioElement()

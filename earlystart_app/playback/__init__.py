"""Landing page music player."""

from .audio import AudioElement, NullAudioElement, PygameAudioElement, open_audio_element
from .controller import PlaybackController, PlaybackState

__all__ = [
    "AudioElement",
    "NullAudioElement",
    "PlaybackController",
    "PlaybackState",
    "PygameAudioElement",
    "open_audio_element",
]

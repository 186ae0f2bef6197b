"""
Landing page composition.

Wires the music player, the signup flow and both pollers together. The
signup surface and the live counter only run while the music is playing;
the footer status poller runs for as long as the page is mounted.
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

from .api.client import ApiClient
from .config.defaults import DefaultConfig
from .config.loader import load_config
from .logging.config import configure_logging, get_logger
from .playback.audio import AudioElement, open_audio_element
from .playback.controller import PlaybackController, PlaybackState
from .polling.count import CountPoller
from .signup.machine import Scheduler, SignupFlow, thread_timer
from .status.github import GitHubClient
from .status.resolver import DeploymentStatusPoller, DeploymentStatusResolver
from .views.footer import render_deployment
from .views.player import render_player

logger = get_logger(__name__)


class LandingPage:
    """Owns every interactive component of the landing page."""

    def __init__(
        self,
        config: DefaultConfig,
        navigate: Callable[[str], Any],
        api: Optional[ApiClient] = None,
        github: Optional[GitHubClient] = None,
        audio: Optional[AudioElement] = None,
        scheduler: Scheduler = thread_timer
    ):
        self.config = config
        self.api = api or ApiClient(config.api)

        if audio is None:
            audio = open_audio_element(config.playback.audio_src)

        self.player = PlaybackController(config.playback, audio=audio, navigate=navigate)
        self.signup = SignupFlow(self.api, config.signup, navigate=navigate, scheduler=scheduler)
        self.count_poller = CountPoller(self.api, config.polling.count_interval_seconds)
        self.status_poller = DeploymentStatusPoller(
            DeploymentStatusResolver.for_repository(config.repository, github),
            config.polling.status_interval_seconds,
        )

        self.signup.set_enabled(False)
        self.player.add_listener(self._on_player_state)
        self.mounted = False

    def mount(self) -> None:
        if self.mounted:
            return
        self.mounted = True
        self.player.mount()
        self.status_poller.start()
        logger.info("Landing page mounted")

    def unmount(self) -> None:
        """Tear down timers and drop any result still in flight."""
        if not self.mounted:
            return
        self.mounted = False
        self.player.stop()
        self.count_poller.stop()
        self.status_poller.stop()
        self.signup.set_enabled(False)
        logger.info("Landing page unmounted")

    def render_player(self) -> list[str]:
        return render_player(
            self.player,
            verified_count=self.count_poller.verified_count,
            signup=self.signup.session if self.signup.enabled else None,
        )

    def render_footer(self, now: Optional[datetime] = None) -> str:
        return render_deployment(self.status_poller.view, self.config.repository, now)

    def _on_player_state(self, old_state: PlaybackState, new_state: PlaybackState) -> None:
        if new_state is PlaybackState.PLAYING:
            self.signup.set_enabled(True)
            self.count_poller.start()
        elif old_state is PlaybackState.PLAYING:
            self.count_poller.stop()
            self.signup.set_enabled(False)


def create_landing_page(
    navigate: Callable[[str], Any],
    config_dir: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
    **components: Any
) -> LandingPage:
    """
    Load configuration, apply its logging settings and build the page.

    Raises:
        ConfigurationError: when the merged configuration is invalid
    """
    config = load_config(config_dir, environ)
    configure_logging(level=config.logging.level, format_json=config.logging.format_json)
    logger.info(
        "Configuration loaded",
        api_base_url=config.api.base_url,
        dev_mode=config.api.dev_mode,
        repository=config.repository.full_name
    )
    return LandingPage(config, navigate, **components)

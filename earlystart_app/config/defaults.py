"""Default configuration parameters for the early start app."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class ApiParams:
    """Backend adapter parameters."""
    base_url: str = "http://localhost:8080"         # EARLYSTART_API_URL
    dev_mode: bool = False                           # EARLYSTART_ENV=development
    timeout_seconds: float = 10.0


@dataclass(frozen=True)
class SignupParams:
    """Inline signup flow parameters."""
    code_length: int = 6
    abandon_grace_seconds: float = 0.2               # Blur-to-reset delay on empty email
    confirmation_path: str = "/earlystart"


@dataclass(frozen=True)
class PollingParams:
    """Poll cycles for the live counter and footer status."""
    count_interval_seconds: float = 10.0
    status_interval_seconds: float = 300.0


@dataclass(frozen=True)
class RepositoryParams:
    """Repository whose latest deployment is shown in the footer."""
    owner: str = "dhamariT"
    name: str = "buildboard"
    default_branch: str = "main"                     # Used when the repo lookup fails
    api_base_url: str = "https://api.github.com"
    web_base_url: str = "https://github.com"
    timeout_seconds: float = 10.0

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def web_url(self) -> str:
        return f"{self.web_base_url}/{self.owner}/{self.name}"

    def commit_url(self, sha: Optional[str]) -> str:
        """Link to a commit page, or the repository root when sha is empty."""
        if not sha:
            return self.web_url
        return f"{self.web_url}/commit/{sha}"


@dataclass(frozen=True)
class PlaybackParams:
    """Landing page music player parameters."""
    audio_src: str = "public/texture - 184 (rnb).wav"
    claim_path: str = "/earlystart/guide"


@dataclass(frozen=True)
class LoggingParams:
    """structlog output settings applied by the page bootstrap."""
    level: str = "INFO"                              # EARLYSTART_LOG_LEVEL
    format_json: bool = False


@dataclass(frozen=True)
class DefaultConfig:
    """Complete app configuration."""
    api: ApiParams
    signup: SignupParams
    polling: PollingParams
    repository: RepositoryParams
    playback: PlaybackParams
    logging: LoggingParams = field(default_factory=LoggingParams)


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        api=ApiParams(),
        signup=SignupParams(),
        polling=PollingParams(),
        repository=RepositoryParams(),
        playback=PlaybackParams(),
        logging=LoggingParams(),
    )

"""
Deployment status resolution strategies.

Each strategy asks one source for the latest deployment and returns a
DeploymentStatus, or None when the source has nothing usable. Transport
and HTTP failures are raised as StatusSourceError.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from ..config.defaults import RepositoryParams
from ..errors import StatusSourceError
from ..logging.config import get_logger
from .github import GitHubClient
from .models import DeploymentSource, DeploymentStatus

logger = get_logger(__name__)


def _mapping(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


class ResolutionStrategy(ABC):
    """One link in the deployment status fallback chain."""

    name = "strategy"

    def __init__(self, client: GitHubClient):
        self.client = client

    @property
    def repo(self) -> RepositoryParams:
        return self.client.repo

    @abstractmethod
    def resolve(self) -> Optional[DeploymentStatus]:
        """Return a status, or None when this source has no answer."""


class WorkflowRunStrategy(ResolutionStrategy):
    """Latest successful CI run, used as a proxy for the latest deployment."""

    name = "actions"

    def resolve(self) -> Optional[DeploymentStatus]:
        run = self.client.latest_successful_run()
        if not isinstance(run, dict) or not run:
            return None

        commit_sha = _text(run.get("head_sha"))
        return DeploymentStatus(
            commit_sha=commit_sha,
            commit_url=self.repo.commit_url(commit_sha),
            deployed_at=_text(run.get("updated_at")) or _text(run.get("created_at")),
            run_url=_text(run.get("html_url")) or None,
            source=DeploymentSource.ACTIONS,
        )


class LatestCommitStrategy(ResolutionStrategy):
    """Latest commit on the default branch."""

    name = "commit"

    def resolve(self) -> Optional[DeploymentStatus]:
        branch = self._default_branch()
        commit = _mapping(self.client.latest_commit(branch))

        commit_sha = _text(commit.get("sha"))
        details = _mapping(commit.get("commit"))
        committer = _mapping(details.get("committer"))
        author = _mapping(details.get("author"))

        return DeploymentStatus(
            commit_sha=commit_sha,
            commit_url=self.repo.commit_url(commit_sha),
            deployed_at=_text(committer.get("date")) or _text(author.get("date")),
            run_url=self.repo.web_url,
            source=DeploymentSource.COMMIT,
        )

    def _default_branch(self) -> str:
        try:
            branch = self.client.default_branch()
        except StatusSourceError as e:
            logger.info(
                "Default branch lookup failed, using configured branch",
                branch=self.repo.default_branch,
                error=e.message
            )
            return self.repo.default_branch
        return _text(branch) or self.repo.default_branch


def default_strategies(client: GitHubClient) -> list[ResolutionStrategy]:
    """Fallback chain in priority order."""
    return [
        WorkflowRunStrategy(client),
        LatestCommitStrategy(client),
    ]

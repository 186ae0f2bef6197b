"""
Footer deployment status resolution.

The resolver walks an ordered list of strategies and the first one that
yields a status wins. The poller re-resolves on a fixed period and owns the
footer view state.
"""

from dataclasses import replace
from typing import Optional, Sequence

from ..config.defaults import RepositoryParams
from ..errors import StatusSourceError
from ..logging.config import get_logger
from ..polling.base import Poller
from .github import GitHubClient
from .models import DEPLOYMENT_ERROR, DeploymentStatus, DeploymentView
from .strategies import ResolutionStrategy, default_strategies

logger = get_logger(__name__)


class DeploymentStatusResolver:
    """Ordered fallback chain over deployment status sources."""

    def __init__(self, strategies: Sequence[ResolutionStrategy]):
        self.strategies = list(strategies)

    @classmethod
    def for_repository(cls, repo: RepositoryParams, client: Optional[GitHubClient] = None
                       ) -> "DeploymentStatusResolver":
        return cls(default_strategies(client or GitHubClient(repo)))

    def resolve(self) -> Optional[DeploymentStatus]:
        """
        Return the first status any strategy produces.

        A strategy that raises StatusSourceError counts as having no result.
        Returns None when the chain is exhausted.
        """
        for strategy in self.strategies:
            try:
                status = strategy.resolve()
            except StatusSourceError as e:
                logger.warning(
                    "Deployment status source failed",
                    strategy=strategy.name,
                    error=e.message,
                    status_code=e.status_code
                )
                continue

            if status is not None:
                logger.debug(
                    "Deployment status resolved",
                    strategy=strategy.name,
                    commit_sha=status.short_sha,
                    source=status.source.value
                )
                return status

            logger.debug("Deployment status source had no result", strategy=strategy.name)

        return None


class DeploymentStatusPoller(Poller):
    """Keeps the footer's DeploymentView current."""

    def __init__(self, resolver: DeploymentStatusResolver, interval_seconds: float = 300.0):
        super().__init__("deployment_status", interval_seconds)
        self.resolver = resolver
        self._view = DeploymentView()

    @property
    def view(self) -> DeploymentView:
        return self._view

    def poll_once(self, generation: int) -> None:
        self.apply_if_current(generation, self._begin_loading)

        try:
            status = self.resolver.resolve()
        except Exception:
            # An unexpected payload shape must still end in the unknown footer
            self.logger.exception("Deployment status resolution crashed")
            status = None

        if status is None:
            self.logger.warning("Deployment status unavailable from all sources")
            self.apply_if_current(generation, self._fail)
        else:
            self.apply_if_current(generation, lambda: self._succeed(status))

    def _begin_loading(self) -> None:
        self._view = replace(self._view, loading=True, error=None)

    def _succeed(self, status: DeploymentStatus) -> None:
        self._view = DeploymentView(loading=False, error=None, status=status)

    def _fail(self) -> None:
        # The previous status is dropped so the footer cannot show stale data
        self._view = DeploymentView(loading=False, error=DEPLOYMENT_ERROR, status=None)

"""Deployment status data models."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

DEPLOYMENT_ERROR = "Could not load deployment info"


class DeploymentSource(str, Enum):
    """Where a deployment status was derived from."""
    ACTIONS = "actions"
    COMMIT = "commit"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class DeploymentStatus:
    """Latest deployment as shown in the footer."""
    commit_sha: str
    commit_url: str
    deployed_at: str                       # ISO timestamp or ""
    run_url: Optional[str]
    source: DeploymentSource

    @property
    def short_sha(self) -> str:
        return self.commit_sha[:7]


@dataclass(frozen=True)
class DeploymentView:
    """
    Footer view state.

    status keeps the last good resolution while loading; when error is set
    the footer ignores status and renders the unknown line.
    """
    loading: bool = True
    error: Optional[str] = None
    status: Optional[DeploymentStatus] = None

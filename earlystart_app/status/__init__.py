"""
Footer deployment status.

Resolves the latest deployment of the site's repository from GitHub via an
ordered fallback chain (successful workflow run, then latest commit).
"""

from .github import GitHubClient
from .models import DeploymentSource, DeploymentStatus, DeploymentView
from .resolver import DeploymentStatusPoller, DeploymentStatusResolver
from .strategies import LatestCommitStrategy, ResolutionStrategy, WorkflowRunStrategy

__all__ = [
    "DeploymentSource",
    "DeploymentStatus",
    "DeploymentStatusPoller",
    "DeploymentStatusResolver",
    "DeploymentView",
    "GitHubClient",
    "LatestCommitStrategy",
    "ResolutionStrategy",
    "WorkflowRunStrategy",
]

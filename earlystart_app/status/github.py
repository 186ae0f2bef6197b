"""Read-only GitHub REST API lookups for the footer deployment line."""

from typing import Any, Optional

import requests

from ..config.defaults import RepositoryParams
from ..errors import StatusSourceError


def _api_headers() -> dict:
    return {
        "Accept": "application/vnd.github.v3+json",
        "User-Agent": "buildboard-site/1.0",
    }


class GitHubClient:
    """Unauthenticated client for one repository."""

    def __init__(self, repo: RepositoryParams, session: Optional[requests.Session] = None):
        self.repo = repo
        self.session = session or requests.Session()
        self.repo_api_url = f"{repo.api_base_url.rstrip('/')}/repos/{repo.owner}/{repo.name}"

    def _get(self, url: str, params: Optional[dict[str, Any]] = None, source: str = "github") -> Any:
        try:
            r = self.session.get(
                url,
                headers=_api_headers(),
                params=params,
                timeout=self.repo.timeout_seconds,
            )
        except requests.RequestException as e:
            raise StatusSourceError(f"Network error: {e}", source=source) from e

        if r.status_code != 200:
            # Rate limiting (403/429) lands here too
            raise StatusSourceError(
                f"GitHub returned {r.status_code}",
                source=source,
                status_code=r.status_code,
            )

        try:
            return r.json()
        except ValueError as e:
            raise StatusSourceError("GitHub returned invalid JSON", source=source,
                                    status_code=r.status_code) from e

    def latest_successful_run(self) -> Optional[dict[str, Any]]:
        """Most recent successful workflow run, or None when there is none."""
        data = self._get(
            f"{self.repo_api_url}/actions/runs",
            params={"status": "success", "per_page": 1},
            source="actions",
        )
        if not isinstance(data, dict):
            return None
        runs = data.get("workflow_runs")
        if not isinstance(runs, list) or not runs:
            return None
        return runs[0]

    def default_branch(self) -> Optional[str]:
        """Repository default branch name as reported by GitHub."""
        data = self._get(self.repo_api_url, source="repository")
        if not isinstance(data, dict):
            return None
        return data.get("default_branch") or None

    def latest_commit(self, branch: str) -> Optional[dict[str, Any]]:
        """Most recent commit on branch, or None when the branch has none."""
        data = self._get(
            f"{self.repo_api_url}/commits",
            params={"sha": branch, "per_page": 1},
            source="commits",
        )
        if not isinstance(data, list) or not data:
            return None
        return data[0]

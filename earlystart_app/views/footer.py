"""Footer deployment line, rendered as an HTML fragment."""

from datetime import datetime
from html import escape
from typing import Optional

from ..config.defaults import RepositoryParams
from ..status.models import DeploymentSource, DeploymentView
from ..utils.time import format_time_ago

LOADING_TEXT = "Loading deployment…"


def _link(href: str, text: str) -> str:
    return (f'<a href="{escape(href, quote=True)}" target="_blank" '
            f'rel="noopener noreferrer">{escape(text)}</a>')


def render_unknown(repo: RepositoryParams) -> str:
    """The fallback line shown when no source could be reached."""
    return f"Deployment: unknown · {_link(repo.web_url, 'view repo')}"


def render_deployment(
    view: DeploymentView,
    repo: RepositoryParams,
    now: Optional[datetime] = None
) -> str:
    if view.error:
        return render_unknown(repo)

    if view.loading or view.status is None:
        return LOADING_TEXT

    status = view.status
    when = format_time_ago(status.deployed_at, now) if status.deployed_at else "unknown"
    commit = _link(status.commit_url, status.short_sha) if status.short_sha else "unknown"

    line = f"Last deployment: {when} · Commit {commit}"
    if status.source is DeploymentSource.ACTIONS and status.run_url:
        line += f" · {_link(status.run_url, 'workflow')}"
    return line

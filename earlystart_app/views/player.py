"""Text rendering of the landing page music player and its signup surface."""

from typing import Optional

from ..playback.controller import PlaybackController, PlaybackState
from ..signup.models import SignupMode, SignupSession

HEADLINE = "BuildBoard: Your Work on a New York Billboard"
CALL_TO_ACTION = ("Build something you're proud of, and we'll put it on a billboard "
                  "in New York City. Seriously.")

MARQUEE_LINES = (
    "BUILD YOUR PROJECTS",
    "50 SPOTS FOR TEENAGERS",
    "MECHANICAL KEYBOARDS",
    "WEB APPS THAT SOLVE PROBLEMS",
    "PHOTO + QR CODE TO GITHUB",
    "QR CODE TO LIVE PROJECT",
    "YOU BUILT IT NOW LET'S SHOW IT",
)


def mute_label(muted: bool) -> str:
    return "Unmute music" if muted else "Mute music"


def render_signup(session: SignupSession) -> list[str]:
    """Lines for the inline claim-a-spot widget in its current mode."""
    if session.mode is SignupMode.BUTTON:
        return ["CLAIM YOUR SPOT EARLY"]

    if session.mode is SignupMode.VERIFIED:
        return ["YOU'RE IN. SEE YOU AT THE BILLBOARD."]

    if session.mode is SignupMode.EMAIL_ENTRY:
        lines = [f"EMAIL: {session.email}", "SENDING..." if session.submitting else "SEND CODE"]
    else:
        lines = [f"CODE: {session.code}", "CHECKING..." if session.submitting else "VERIFY"]

    if session.last_error:
        lines.append(f"ERROR: {session.last_error}")
    return lines


def render_player(
    player: PlaybackController,
    verified_count: int = 0,
    signup: Optional[SignupSession] = None
) -> list[str]:
    """Lines for the player in its current state, mute control last."""
    if player.state is PlaybackState.WAITING:
        lines = [HEADLINE]
    elif player.state is PlaybackState.IDLE:
        lines = [CALL_TO_ACTION]
    else:
        lines = list(MARQUEE_LINES[:2])
        lines.append(f"{player.projects_shipped} PROJECTS SHIPPED")
        lines.append(f"{verified_count} PEOPLE STARTING EARLY")
        if signup is not None:
            lines.extend(render_signup(signup))
        lines.extend(MARQUEE_LINES[2:])

    lines.append(mute_label(player.muted))
    return lines

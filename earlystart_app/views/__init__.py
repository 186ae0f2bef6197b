"""Rendering of player and footer state for the landing page."""

from .footer import render_deployment, render_unknown
from .player import render_player, render_signup

__all__ = ["render_deployment", "render_player", "render_signup", "render_unknown"]

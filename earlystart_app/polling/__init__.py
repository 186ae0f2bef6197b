"""Periodic pollers with teardown-safe result application."""

from .base import Poller
from .count import CountPoller, CountSnapshot

__all__ = ["CountPoller", "CountSnapshot", "Poller"]

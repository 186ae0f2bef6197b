"""
Logging configuration and utilities for the early start app.
"""
from .config import configure_logging, get_diagnostic_logger, get_logger, get_state_logger

__all__ = ["configure_logging", "get_diagnostic_logger", "get_logger", "get_state_logger"]

"""HTTP adapter for the early start backend."""

from .client import ApiClient

__all__ = ["ApiClient"]

"""API route modules."""

from . import exports, health, videos, view

__all__ = ["health", "videos", "view", "exports"]

"""Application services."""

from .site import AppState, SiteService

__all__ = [
    "AppState",
    "SiteService",
]

"""API routers for SiteGate."""

from . import permissions

__all__ = [
    "permissions",
]

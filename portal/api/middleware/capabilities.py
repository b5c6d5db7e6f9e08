"""Capability loading middleware for FastAPI.

The upstream auth gateway authenticates the user and forwards two trusted
headers:
- X-User-ID: the user's profile id
- X-User-Permissions: the profile's capability bitmask, in decimal

This middleware turns them into a CapabilitySnapshot on
``request.state.capabilities``. A missing or malformed bitmask does not
fail the request; the snapshot is empty and every check denies.
"""

from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from portal.core.config import get_settings
from sitegate.common.logger import get_logger
from sitegate.permissions import CapabilitySnapshot

logger = get_logger("portal.api")


class CapabilityHeaderMiddleware(BaseHTTPMiddleware):
    """Attach the caller's capability snapshot to each request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        settings = get_settings()
        user_id = request.headers.get(settings.user_id_header)
        raw = request.headers.get(settings.capabilities_header)

        if raw is None:
            logger.debug(f"No {settings.capabilities_header} header for user {user_id}")

        # The snapshot owns coercion; malformed values become 0
        request.state.capabilities = CapabilitySnapshot(
            capability_set=raw,
            user_id=user_id or None,
        )
        return await call_next(request)

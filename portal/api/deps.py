from typing import Union

from fastapi import Depends, HTTPException, Request, status

from portal.core.config import get_settings
from sitegate.common.config import build_resolver, load_typed_config
from sitegate.permissions import (
    CapabilitySnapshot,
    PermissionChecker,
    PermissionName,
    PermissionResolver,
    default_resolver,
)

_resolver: Union[PermissionResolver, None] = None


def get_resolver() -> PermissionResolver:
    """Permission resolver for the app, built once from the YAML config if set."""
    global _resolver
    if _resolver is None:
        settings = get_settings()
        if settings.permissions_config_path:
            _resolver = build_resolver(load_typed_config(settings.permissions_config_path))
        else:
            _resolver = default_resolver
    return _resolver


def get_capability_snapshot(request: Request) -> CapabilitySnapshot:
    """Snapshot attached by CapabilityHeaderMiddleware, or an empty one."""
    snapshot = getattr(request.state, "capabilities", None)
    if not isinstance(snapshot, CapabilitySnapshot):
        return CapabilitySnapshot.empty()
    return snapshot


def get_permission_checker(
    snapshot: CapabilitySnapshot = Depends(get_capability_snapshot),
    resolver: PermissionResolver = Depends(get_resolver),
) -> PermissionChecker:
    return resolver.checker(snapshot)


class PermissionDependency:
    """
    FastAPI dependency for permission checking.

    Usage:
        @router.get("/scope", dependencies=[Depends(PermissionDependency("view_scope"))])
        async def list_scope():
            ...
    """

    def __init__(self, *permissions: Union[str, PermissionName], require_all: bool = False):
        self.permissions = permissions
        self.require_all = require_all

    def __call__(self, checker: PermissionChecker = Depends(get_permission_checker)) -> PermissionChecker:
        if self.require_all:
            has_access = checker.has_all_permissions(self.permissions)
        else:
            has_access = checker.has_any_permission(self.permissions)

        if not has_access:
            perm_strs = [getattr(p, "value", p) for p in self.permissions]
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Insufficient permissions. Required: {', '.join(perm_strs)}",
            )

        return checker

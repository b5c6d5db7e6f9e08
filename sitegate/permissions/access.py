"""Project-level access rules built on top of capability flags.

These combine a capability check with record ownership or assignment,
e.g. a project's creator can always manage it.
"""

from typing import Any, Iterable, Mapping, Optional

from .flags import PermissionFlag, has_flag
from .snapshot import normalize_capability_set


def _is_owner(project: Mapping[str, Any], user_id: Optional[str]) -> bool:
    if user_id is None:
        return False
    created_by = project.get("created_by")
    return created_by is not None and str(created_by) == str(user_id)


def can_access_project(
    capability_set,
    project: Mapping[str, Any],
    user_id: Optional[str] = None,
    assigned_project_ids: Optional[Iterable[str]] = None,
) -> bool:
    """Check if a user may view a project.

    Owners always can. Holders of VIEW_ALL_PROJECTS can see every project.
    Everyone else needs VIEW_ASSIGNED_PROJECTS and an assignment to it.
    """
    caps = normalize_capability_set(capability_set)
    if _is_owner(project, user_id):
        return True
    if has_flag(caps, PermissionFlag.VIEW_ALL_PROJECTS):
        return True
    if not has_flag(caps, PermissionFlag.VIEW_ASSIGNED_PROJECTS):
        return False
    project_id = project.get("id")
    if project_id is None or not assigned_project_ids:
        return False
    return str(project_id) in {str(pid) for pid in assigned_project_ids}


def can_manage_project(
    capability_set,
    project: Mapping[str, Any],
    user_id: Optional[str] = None,
) -> bool:
    """Owner of the project, or MANAGE_ALL_PROJECTS."""
    caps = normalize_capability_set(capability_set)
    return _is_owner(project, user_id) or has_flag(caps, PermissionFlag.MANAGE_ALL_PROJECTS)


def can_approve_shop_drawings(
    capability_set,
    project: Mapping[str, Any],
    user_id: Optional[str] = None,
    is_project_approver: bool = False,
) -> bool:
    """Check if a user may approve shop drawings on a project.

    Requires internal or client approval authority, and then one of:
    project ownership, MANAGE_ALL_PROJECTS, or being a designated approver
    on the project.
    """
    caps = normalize_capability_set(capability_set)
    if not (
        has_flag(caps, PermissionFlag.APPROVE_SHOP_DRAWINGS)
        or has_flag(caps, PermissionFlag.APPROVE_SHOP_DRAWINGS_CLIENT)
    ):
        return False
    return (
        _is_owner(project, user_id)
        or has_flag(caps, PermissionFlag.MANAGE_ALL_PROJECTS)
        or is_project_approver is True
    )


def can_change_user_role(capability_set) -> bool:
    """Only user administrators may assign roles."""
    return has_flag(normalize_capability_set(capability_set), PermissionFlag.MANAGE_ALL_USERS)

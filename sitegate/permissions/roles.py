"""Role templates for sitegate.

Defines the 6 preset capability sets used to pre-populate new users:
1. Admin - Every permission
2. Technical Manager - Everything except administration, user management and deletion
3. Project Manager - Technical Manager without expense or internal drawing approval
4. Team Member - Assigned projects, drawings, tasks and exports
5. Client - Assigned projects and client drawing approval
6. Accountant - Financial visibility and exports

Templates are not enforced after a user is created. A user's capability set
may drift from every template, in which case the role label is "custom".
"""

from enum import Enum
from typing import Dict, List, NamedTuple, Optional, Union

from .errors import UnknownRoleError
from .flags import ADMIN_FUNCTIONS, ALL_PERMISSIONS, PermissionFlag, combine


class RoleLabel(str, Enum):
    """Labels reported for capability sets."""

    ADMIN = "admin"
    TECHNICAL_MANAGER = "technical_manager"
    PROJECT_MANAGER = "project_manager"
    TEAM_MEMBER = "team_member"
    CLIENT = "client"
    ACCOUNTANT = "accountant"
    CUSTOM = "custom"


class RoleTemplate(NamedTuple):
    """A named preset capability set."""

    label: RoleLabel
    display_name: str
    description: str
    capability_set: int


ADMIN_PERMISSIONS = ALL_PERMISSIONS

TECHNICAL_MANAGER_PERMISSIONS = (
    ALL_PERMISSIONS
    & ~int(ADMIN_FUNCTIONS)
    & ~int(PermissionFlag.MANAGE_ALL_USERS)
    & ~int(PermissionFlag.DELETE_DATA)
)

PROJECT_MANAGER_PERMISSIONS = (
    TECHNICAL_MANAGER_PERMISSIONS
    & ~int(PermissionFlag.APPROVE_EXPENSES)
    & ~int(PermissionFlag.APPROVE_SHOP_DRAWINGS)
)

TEAM_MEMBER_PERMISSIONS = combine([
    PermissionFlag.VIEW_ASSIGNED_PROJECTS,
    PermissionFlag.VIEW_SHOP_DRAWINGS,
    PermissionFlag.CREATE_TASKS,
    PermissionFlag.EXPORT_DATA,
])

CLIENT_PERMISSIONS = combine([
    PermissionFlag.VIEW_ASSIGNED_PROJECTS,
    PermissionFlag.VIEW_SHOP_DRAWINGS,
    PermissionFlag.APPROVE_SHOP_DRAWINGS_CLIENT,
])

ACCOUNTANT_PERMISSIONS = combine([
    PermissionFlag.VIEW_ALL_PROJECTS,
    PermissionFlag.VIEW_FINANCIAL_DATA,
    PermissionFlag.EXPORT_FINANCIAL_REPORTS,
    PermissionFlag.EXPORT_DATA,
])


ROLE_TEMPLATES: Dict[RoleLabel, RoleTemplate] = {
    RoleLabel.ADMIN: RoleTemplate(
        RoleLabel.ADMIN,
        "Administrator",
        "Full system access with all permissions",
        int(ADMIN_PERMISSIONS),
    ),
    RoleLabel.TECHNICAL_MANAGER: RoleTemplate(
        RoleLabel.TECHNICAL_MANAGER,
        "Technical Manager",
        "Project management plus expense and internal shop drawing approval",
        int(TECHNICAL_MANAGER_PERMISSIONS),
    ),
    RoleLabel.PROJECT_MANAGER: RoleTemplate(
        RoleLabel.PROJECT_MANAGER,
        "Project Manager",
        "Manages projects, teams, scope and materials; can view financials",
        int(PROJECT_MANAGER_PERMISSIONS),
    ),
    RoleLabel.TEAM_MEMBER: RoleTemplate(
        RoleLabel.TEAM_MEMBER,
        "Team Member",
        "Works on assigned projects: drawings, tasks and exports",
        int(TEAM_MEMBER_PERMISSIONS),
    ),
    RoleLabel.CLIENT: RoleTemplate(
        RoleLabel.CLIENT,
        "Client",
        "Views assigned projects and approves shop drawings as the client",
        int(CLIENT_PERMISSIONS),
    ),
    RoleLabel.ACCOUNTANT: RoleTemplate(
        RoleLabel.ACCOUNTANT,
        "Accountant",
        "Read access to all projects with financial data and exports",
        int(ACCOUNTANT_PERMISSIONS),
    ),
}

CUSTOM_DISPLAY_NAME = "Custom Role"


def _coerce_label(label: Union[str, RoleLabel]) -> Optional[RoleLabel]:
    try:
        return RoleLabel(label)
    except ValueError:
        return None


def get_role_template(label: Union[str, RoleLabel]) -> RoleTemplate:
    """Get a role template by label.

    Raises:
        UnknownRoleError: If the label has no template (including "custom")
    """
    role = _coerce_label(label)
    if role is None or role not in ROLE_TEMPLATES:
        raise UnknownRoleError(str(getattr(label, "value", label)))
    return ROLE_TEMPLATES[role]


def get_role_permissions(label: Union[str, RoleLabel]) -> int:
    """Get the capability set a role template assigns to new users."""
    return get_role_template(label).capability_set


def role_display_name(label: Union[str, RoleLabel]) -> str:
    """Get a user-facing name for a role label."""
    role = _coerce_label(label)
    if role is None:
        return "Unknown Role"
    if role is RoleLabel.CUSTOM:
        return CUSTOM_DISPLAY_NAME
    return ROLE_TEMPLATES[role].display_name


def list_role_templates() -> List[RoleTemplate]:
    """Get all role templates, most privileged first."""
    return list(ROLE_TEMPLATES.values())

"""Permission flags for sitegate.

Each flag occupies exactly one bit of a user's capability set. Capability
sets are persisted as plain integers on the user profile, so bit positions
must never be reused or reassigned once shipped. New flags go in the
unused bits (28 and up).

Bits 1/2 and 5/6 differ from the previous layout, so bitmasks stored under
that layout are not compatible with these values.
"""

from enum import IntFlag
from typing import Iterable, List, Optional


class PermissionFlag(IntFlag):
    """Single-bit permission flags."""

    # Projects (bits 0-4)
    VIEW_ALL_PROJECTS = 1 << 0            # See every company project
    CREATE_PROJECTS = 1 << 1
    VIEW_ASSIGNED_PROJECTS = 1 << 2       # See projects the user is assigned to
    MANAGE_ALL_PROJECTS = 1 << 3          # Edit/delete any project
    ARCHIVE_PROJECTS = 1 << 4

    # Financial (bits 5-7)
    APPROVE_EXPENSES = 1 << 5
    VIEW_FINANCIAL_DATA = 1 << 6          # Costs, budgets, margins
    EXPORT_FINANCIAL_REPORTS = 1 << 7

    # Scope and materials (bits 8-10)
    MANAGE_SCOPE = 1 << 8
    APPROVE_SCOPE_CHANGES = 1 << 9
    MANAGE_MATERIALS = 1 << 10

    # Shop drawings (bits 11-15)
    VIEW_SHOP_DRAWINGS = 1 << 11
    CREATE_SHOP_DRAWINGS = 1 << 12
    EDIT_SHOP_DRAWINGS = 1 << 13
    APPROVE_SHOP_DRAWINGS = 1 << 14       # Internal approval
    APPROVE_SHOP_DRAWINGS_CLIENT = 1 << 15

    # Users (bits 16-18)
    VIEW_ALL_USERS = 1 << 16
    MANAGE_TEAM_MEMBERS = 1 << 17         # Assign users to projects
    MANAGE_ALL_USERS = 1 << 18            # Full user management

    # Tasks (bits 19-21)
    CREATE_TASKS = 1 << 19
    EDIT_TASKS = 1 << 20
    ASSIGN_TASKS = 1 << 21

    # Data management (bits 22-24)
    EXPORT_DATA = 1 << 22
    IMPORT_DATA = 1 << 23
    DELETE_DATA = 1 << 24                 # Permanent deletion

    # Administration (bits 25-27)
    VIEW_AUDIT_LOGS = 1 << 25
    MANAGE_COMPANY_SETTINGS = 1 << 26
    BACKUP_RESTORE_DATA = 1 << 27


ALL_PERMISSIONS: int = 0
for _flag in PermissionFlag:
    ALL_PERMISSIONS |= int(_flag)
del _flag

ADMIN_FUNCTIONS = (
    PermissionFlag.VIEW_AUDIT_LOGS
    | PermissionFlag.MANAGE_COMPANY_SETTINGS
    | PermissionFlag.BACKUP_RESTORE_DATA
)


def has_flag(capability_set: Optional[int], flag: int) -> bool:
    """Check whether a capability set holds a flag."""
    if not capability_set:
        return False
    return (capability_set & flag) != 0


def grant(capability_set: Optional[int], *flags: int) -> int:
    """Return the capability set with the given flags added."""
    result = capability_set or 0
    for flag in flags:
        result |= int(flag)
    return int(result)


def revoke(capability_set: Optional[int], *flags: int) -> int:
    """Return the capability set with the given flags removed."""
    result = capability_set or 0
    for flag in flags:
        result &= ~int(flag)
    return int(result)


def combine(flags: Iterable[int]) -> int:
    """OR a collection of flags into a single capability set."""
    return grant(0, *flags)


def flags_in(capability_set: Optional[int]) -> List[PermissionFlag]:
    """List the known flags held by a capability set, in bit order."""
    return [flag for flag in PermissionFlag if has_flag(capability_set, flag)]


def permission_names(capability_set: Optional[int]) -> List[str]:
    """Human-readable names of the flags held, e.g. ``"view financial data"``."""
    return [flag.name.lower().replace("_", " ") for flag in flags_in(capability_set)]


def is_valid_capability_set(value) -> bool:
    """Check that a value is an integer within the known flag range."""
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return 0 <= value <= ALL_PERMISSIONS

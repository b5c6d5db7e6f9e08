"""Permission resolution for sitegate.

This module defines the permission flags, legacy permission names, role
templates, record redaction policies and the checking utilities built on
them.
"""

from .flags import (
    PermissionFlag,
    ALL_PERMISSIONS,
    grant,
    revoke,
    permission_names,
    is_valid_capability_set,
)
from .names import PermissionName, NAME_TO_FLAG
from .roles import RoleLabel, RoleTemplate, ROLE_TEMPLATES, get_role_template
from .redaction import RedactionPolicy, RedactionRegistry, DEFAULT_SENSITIVE_FIELDS
from .snapshot import CapabilitySnapshot
from .errors import UnknownPermissionError, UnknownRoleError
from .checker import (
    PermissionResolver,
    PermissionChecker,
    default_resolver,
    has_permission,
    has_any_permission,
    has_all_permissions,
    filter_sensitive_fields,
    redact_records,
    estimate_role_label,
)

__all__ = [
    "PermissionFlag",
    "ALL_PERMISSIONS",
    "grant",
    "revoke",
    "permission_names",
    "is_valid_capability_set",
    "PermissionName",
    "NAME_TO_FLAG",
    "RoleLabel",
    "RoleTemplate",
    "ROLE_TEMPLATES",
    "get_role_template",
    "RedactionPolicy",
    "RedactionRegistry",
    "DEFAULT_SENSITIVE_FIELDS",
    "CapabilitySnapshot",
    "UnknownPermissionError",
    "UnknownRoleError",
    "PermissionResolver",
    "PermissionChecker",
    "default_resolver",
    "has_permission",
    "has_any_permission",
    "has_all_permissions",
    "filter_sensitive_fields",
    "redact_records",
    "estimate_role_label",
]

"""Permission checking for sitegate.

PermissionResolver answers questions about a capability set against a
fixed name-to-flag mapping and role template table. Every check is a pure
function of its arguments; unknown names and missing capability sets fail
closed (not granted) and are logged rather than raised.

PermissionChecker binds one user's snapshot to a resolver and exposes the
derived convenience flags presentation code uses (can_view_costs,
is_admin, ...).
"""

from types import MappingProxyType
from typing import (
    Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union,
)

from ..common.logger import get_logger
from . import access
from .errors import UnknownPermissionError
from .flags import PermissionFlag, has_flag, permission_names
from .names import NAME_TO_FLAG, PermissionName, lookup_flag
from .redaction import RedactionRegistry, strip_fields
from .roles import ROLE_TEMPLATES, RoleLabel, role_display_name
from .snapshot import CapabilitySnapshot, normalize_capability_set

logger = get_logger("permissions")

PermissionRef = Union[str, PermissionName, PermissionFlag, int]
Record = Mapping[str, Any]


def _as_list(permissions) -> List[PermissionRef]:
    # A bare name or flag is one permission, not an iterable of characters
    if isinstance(permissions, (str, int)):
        return [permissions]
    return list(permissions)


class PermissionResolver:
    """Resolves permission names and role labels for capability sets."""

    def __init__(
        self,
        mapping: Mapping[str, int] = NAME_TO_FLAG,
        role_templates: Optional[Mapping[Union[str, RoleLabel], int]] = None,
        financial_flag: int = PermissionFlag.VIEW_FINANCIAL_DATA,
        redaction: Optional[RedactionRegistry] = None,
    ):
        """
        Args:
            mapping: Legacy permission name -> flag
            role_templates: Role label -> exact capability set. Defaults to
                the built-in templates.
            financial_flag: Flag that exempts a caller from redaction
            redaction: Per-record-type redaction policies
        """
        if role_templates is None:
            role_templates = {
                label: template.capability_set
                for label, template in ROLE_TEMPLATES.items()
            }
        self.mapping: Mapping[str, int] = MappingProxyType(dict(mapping))
        self.role_templates: Mapping[Union[str, RoleLabel], int] = MappingProxyType(
            dict(role_templates)
        )
        self.financial_flag = financial_flag
        self.redaction = redaction if redaction is not None else RedactionRegistry()

        # Exact-value lookup; the first template wins if two share a value
        labels: Dict[int, Union[str, RoleLabel]] = {}
        for label, value in self.role_templates.items():
            labels.setdefault(int(value), label)
        self._labels_by_value = labels

    # -- resolution -----------------------------------------------------

    def resolve_flag(self, permission: PermissionRef) -> Optional[int]:
        """Resolve a permission name or flag to its bit value.

        Integers must be exactly one bit; a multi-bit mask is not a single
        permission and resolves like an unknown name. Returns None for
        unknown names.
        """
        if isinstance(permission, str):
            return lookup_flag(permission, self.mapping)
        if isinstance(permission, int) and not isinstance(permission, bool):
            value = int(permission)
            if value > 0 and value & (value - 1) == 0:
                return value
        return None

    def require_flag(self, permission: PermissionRef) -> int:
        """Resolve a permission or raise UnknownPermissionError."""
        flag = self.resolve_flag(permission)
        if flag is None:
            raise UnknownPermissionError(str(getattr(permission, "value", permission)))
        return flag

    # -- checks ---------------------------------------------------------

    def has_permission(self, capability_set, permission: PermissionRef) -> bool:
        """Check if a capability set grants a permission.

        Unknown permission names are logged and treated as not granted.
        """
        flag = self.resolve_flag(permission)
        if flag is None:
            logger.warning(f"Unknown permission: {getattr(permission, 'value', permission)}")
            return False
        return has_flag(normalize_capability_set(capability_set), flag)

    def has_any_permission(self, capability_set, permissions: Iterable[PermissionRef]) -> bool:
        """Check if any of the permissions is granted. False for an empty list."""
        caps = normalize_capability_set(capability_set)
        return any(self.has_permission(caps, p) for p in _as_list(permissions))

    def has_all_permissions(self, capability_set, permissions: Iterable[PermissionRef]) -> bool:
        """Check if every permission is granted. True for an empty list."""
        caps = normalize_capability_set(capability_set)
        return all(self.has_permission(caps, p) for p in _as_list(permissions))

    def can_view_financial_data(self, capability_set) -> bool:
        return has_flag(normalize_capability_set(capability_set), self.financial_flag)

    # -- redaction ------------------------------------------------------

    def filter_sensitive_fields(
        self,
        records: Sequence[Record],
        capability_set,
        sensitive_fields: Optional[Iterable[str]] = None,
    ) -> Sequence[Record]:
        """Remove sensitive fields from records unless the caller may see costs.

        Callers holding the financial flag get the input back as is.
        Otherwise each record is shallow-copied without the given fields
        (the default cost/price/budget list when none are given).
        """
        if self.can_view_financial_data(capability_set):
            return records
        if sensitive_fields is None:
            sensitive_fields = self.redaction.default_fields
        return strip_fields(records, sensitive_fields)

    def redact_records(
        self,
        records: Sequence[Record],
        capability_set,
        record_type: str,
    ) -> Sequence[Record]:
        """Redact records using the policy registered for their type."""
        if self.can_view_financial_data(capability_set):
            return records
        return strip_fields(records, self.redaction.fields_for(record_type))

    # -- roles ----------------------------------------------------------

    def estimate_role_label(self, capability_set) -> Union[str, RoleLabel]:
        """Label a capability set by exact match against the role templates.

        A template with even one extra or missing bit is reported as custom.
        """
        caps = normalize_capability_set(capability_set)
        return self._labels_by_value.get(caps, RoleLabel.CUSTOM)

    def role_display_name(self, capability_set) -> str:
        return role_display_name(self.estimate_role_label(capability_set))

    def permission_names(self, capability_set) -> List[str]:
        return permission_names(normalize_capability_set(capability_set))

    def checker(self, snapshot) -> "PermissionChecker":
        return PermissionChecker(snapshot, resolver=self)


default_resolver = PermissionResolver()


def has_permission(capability_set, permission: PermissionRef) -> bool:
    """Check a single permission against the default mapping."""
    return default_resolver.has_permission(capability_set, permission)


def has_any_permission(capability_set, permissions: Iterable[PermissionRef]) -> bool:
    return default_resolver.has_any_permission(capability_set, permissions)


def has_all_permissions(capability_set, permissions: Iterable[PermissionRef]) -> bool:
    return default_resolver.has_all_permissions(capability_set, permissions)


def filter_sensitive_fields(
    records: Sequence[Record],
    capability_set,
    sensitive_fields: Optional[Iterable[str]] = None,
) -> Sequence[Record]:
    return default_resolver.filter_sensitive_fields(records, capability_set, sensitive_fields)


def redact_records(records: Sequence[Record], capability_set, record_type: str) -> Sequence[Record]:
    return default_resolver.redact_records(records, capability_set, record_type)


def estimate_role_label(capability_set) -> Union[str, RoleLabel]:
    return default_resolver.estimate_role_label(capability_set)


def resolve_flag(permission: PermissionRef) -> Optional[int]:
    return default_resolver.resolve_flag(permission)


class PermissionChecker:
    """Checks permissions for one user's capability snapshot."""

    def __init__(
        self,
        snapshot: Union[CapabilitySnapshot, int, None],
        resolver: Optional[PermissionResolver] = None,
    ):
        """
        Initialize with a user's snapshot.

        Args:
            snapshot: CapabilitySnapshot, or a bare capability integer
            resolver: Resolver to use; the default mapping if omitted
        """
        if not isinstance(snapshot, CapabilitySnapshot):
            snapshot = CapabilitySnapshot(capability_set=snapshot)
        self.snapshot = snapshot
        self.resolver = resolver or default_resolver

    @property
    def capability_set(self) -> int:
        return self.snapshot.capability_set

    @property
    def user_id(self) -> Optional[str]:
        return self.snapshot.user_id

    def has_permission(self, permission: PermissionRef) -> bool:
        return self.resolver.has_permission(self.capability_set, permission)

    def has_any_permission(self, permissions: Iterable[PermissionRef]) -> bool:
        return self.resolver.has_any_permission(self.capability_set, permissions)

    def has_all_permissions(self, permissions: Iterable[PermissionRef]) -> bool:
        return self.resolver.has_all_permissions(self.capability_set, permissions)

    def has_flag(self, flag: int) -> bool:
        return has_flag(self.capability_set, flag)

    # Derived flags

    @property
    def can_view_costs(self) -> bool:
        return self.resolver.can_view_financial_data(self.capability_set)

    @property
    def can_edit_costs(self) -> bool:
        return self.has_flag(PermissionFlag.APPROVE_EXPENSES)

    @property
    def can_view_all_projects(self) -> bool:
        return self.has_flag(PermissionFlag.VIEW_ALL_PROJECTS)

    @property
    def can_view_assigned_projects(self) -> bool:
        return self.has_flag(PermissionFlag.VIEW_ASSIGNED_PROJECTS)

    @property
    def can_manage_users(self) -> bool:
        return self.has_flag(PermissionFlag.MANAGE_ALL_USERS)

    @property
    def can_manage_projects(self) -> bool:
        return self.has_flag(PermissionFlag.MANAGE_ALL_PROJECTS)

    @property
    def is_admin(self) -> bool:
        # Administrators are defined by user management authority
        return self.can_manage_users

    @property
    def role_label(self) -> Union[str, RoleLabel]:
        return self.resolver.estimate_role_label(self.capability_set)

    @property
    def role_display_name(self) -> str:
        return self.resolver.role_display_name(self.capability_set)

    @property
    def permission_names(self) -> List[str]:
        return self.resolver.permission_names(self.capability_set)

    # Records and projects

    def filter_costs(
        self,
        records: Sequence[Record],
        fields: Optional[Iterable[str]] = None,
    ) -> Sequence[Record]:
        return self.resolver.filter_sensitive_fields(records, self.capability_set, fields)

    def redact(self, records: Sequence[Record], record_type: str) -> Sequence[Record]:
        return self.resolver.redact_records(records, self.capability_set, record_type)

    def can_access_project(
        self,
        project: Record,
        assigned_project_ids: Optional[Iterable[str]] = None,
    ) -> bool:
        return access.can_access_project(
            self.capability_set, project, self.user_id, assigned_project_ids
        )

    def can_manage_project(self, project: Record) -> bool:
        return access.can_manage_project(self.capability_set, project, self.user_id)

    def can_approve_shop_drawings(self, project: Record, is_project_approver: bool = False) -> bool:
        return access.can_approve_shop_drawings(
            self.capability_set, project, self.user_id, is_project_approver
        )

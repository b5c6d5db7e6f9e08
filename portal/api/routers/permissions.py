"""Permission endpoints.

Read-only views of the caller's resolved permissions and of the static
permission catalog, for the presentation tier.
"""

from typing import List

from fastapi import APIRouter, Depends

from portal.api.deps import PermissionDependency, get_permission_checker, get_resolver
from portal.api.schemas.permissions import (
    CapabilitySummary,
    PermissionInfo,
    RedactRequest,
    RedactResponse,
    RoleTemplateInfo,
)
from sitegate.permissions import (
    PermissionChecker,
    PermissionFlag,
    PermissionName,
    PermissionResolver,
)
from sitegate.permissions.roles import list_role_templates

router = APIRouter(prefix="/permissions", tags=["permissions"])


@router.get("/me", response_model=CapabilitySummary)
async def get_my_permissions(
    checker: PermissionChecker = Depends(get_permission_checker),
):
    """Resolved permissions and derived flags for the caller."""
    return CapabilitySummary(
        user_id=checker.user_id,
        permissions_bitwise=checker.capability_set,
        permission_names=checker.permission_names,
        role_label=str(getattr(checker.role_label, "value", checker.role_label)),
        role_display_name=checker.role_display_name,
        can_view_costs=checker.can_view_costs,
        can_edit_costs=checker.can_edit_costs,
        can_view_all_projects=checker.can_view_all_projects,
        can_view_assigned_projects=checker.can_view_assigned_projects,
        can_manage_users=checker.can_manage_users,
        can_manage_projects=checker.can_manage_projects,
        is_admin=checker.is_admin,
    )


@router.get(
    "/roles",
    response_model=List[RoleTemplateInfo],
    dependencies=[Depends(PermissionDependency(PermissionName.MANAGE_USERS))],
)
async def list_roles():
    """Role templates available when creating users."""
    return [
        RoleTemplateInfo(
            label=template.label.value,
            display_name=template.display_name,
            description=template.description,
            permissions_bitwise=template.capability_set,
        )
        for template in list_role_templates()
    ]


@router.get("/catalog", response_model=List[PermissionInfo])
async def get_permission_catalog(
    resolver: PermissionResolver = Depends(get_resolver),
):
    """Legacy permission names and the flags they resolve to."""
    catalog = []
    for name, flag in resolver.mapping.items():
        try:
            flag_name = PermissionFlag(flag).name or str(int(flag))
        except ValueError:
            flag_name = str(int(flag))
        catalog.append(PermissionInfo(name=name, flag=flag_name, value=int(flag)))
    return catalog


@router.post("/redact", response_model=RedactResponse)
async def redact(
    payload: RedactRequest,
    checker: PermissionChecker = Depends(get_permission_checker),
):
    """Redact records of one type for the caller."""
    records = checker.redact(payload.records, payload.record_type)
    return RedactResponse(
        record_type=payload.record_type,
        redacted=not checker.can_view_costs,
        records=list(records),
    )

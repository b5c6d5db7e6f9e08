"""Permission schemas for the SiteGate API."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class CapabilitySummary(BaseModel):
    """The caller's resolved permissions."""
    user_id: Optional[str] = None
    permissions_bitwise: int = Field(0, ge=0)
    permission_names: List[str] = Field(default_factory=list)
    role_label: str
    role_display_name: str

    can_view_costs: bool = False
    can_edit_costs: bool = False
    can_view_all_projects: bool = False
    can_view_assigned_projects: bool = False
    can_manage_users: bool = False
    can_manage_projects: bool = False
    is_admin: bool = False


class RoleTemplateInfo(BaseModel):
    label: str
    display_name: str
    description: str
    permissions_bitwise: int


class PermissionInfo(BaseModel):
    name: str
    flag: str
    value: int


class RedactRequest(BaseModel):
    """Records of one type to redact for the caller."""
    record_type: str = Field(..., min_length=1, max_length=100)
    records: List[Dict[str, Any]] = Field(default_factory=list)


class RedactResponse(BaseModel):
    record_type: str
    redacted: bool
    records: List[Dict[str, Any]]

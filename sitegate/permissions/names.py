"""Legacy permission names and their mapping onto permission flags.

The UI and older API routes refer to permissions by descriptive names such
as ``view_project_costs``. Several historical names collapse onto the same
flag. The mapping is fixed at import time and read-only.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Union

from .flags import PermissionFlag


class PermissionName(str, Enum):
    """Legacy permission names used throughout the UI."""

    # Projects
    VIEW_PROJECTS = "view_projects"
    CREATE_PROJECTS = "create_projects"
    EDIT_PROJECTS = "edit_projects"
    DELETE_PROJECTS = "delete_projects"
    EDIT_PROJECT_SETTINGS = "edit_project_settings"
    VIEW_PROJECT_COSTS = "view_project_costs"
    ASSIGN_PROJECT_TEAM = "assign_project_team"

    # Scope
    VIEW_SCOPE = "view_scope"
    MANAGE_SCOPE_ITEMS = "manage_scope_items"
    ASSIGN_SUBCONTRACTORS = "assign_subcontractors"
    APPROVE_SCOPE_CHANGES = "approve_scope_changes"
    EXPORT_SCOPE_EXCEL = "export_scope_excel"

    # Shop drawings
    VIEW_DRAWINGS = "view_drawings"
    UPLOAD_DRAWINGS = "upload_drawings"
    INTERNAL_REVIEW_DRAWINGS = "internal_review_drawings"
    CLIENT_REVIEW_DRAWINGS = "client_review_drawings"
    APPROVE_SHOP_DRAWINGS = "approve_shop_drawings"
    APPROVE_DRAWINGS = "approve_drawings"

    # Material specs
    VIEW_MATERIALS = "view_materials"
    CREATE_MATERIAL_SPECS = "create_material_specs"
    APPROVE_MATERIAL_SPECS = "approve_material_specs"
    VIEW_MATERIAL_COSTS = "view_material_costs"

    # Tasks
    VIEW_TASKS = "view_tasks"
    CREATE_TASKS = "create_tasks"
    ASSIGN_TASKS = "assign_tasks"
    EDIT_TASKS = "edit_tasks"
    COMPLETE_TASKS = "complete_tasks"

    # Financial
    VIEW_ALL_COSTS = "view_all_costs"
    VIEW_PROJECT_BUDGETS = "view_project_budgets"
    APPROVE_EXPENSES = "approve_expenses"
    GENERATE_FINANCIAL_REPORTS = "generate_financial_reports"
    EXPORT_DATA = "export_data"

    # Admin
    MANAGE_USERS = "manage_users"
    MANAGE_COMPANY_SETTINGS = "manage_company_settings"
    VIEW_AUDIT_LOGS = "view_audit_logs"
    BACKUP_RESTORE = "backup_restore"

    # Client portal
    CLIENT_PORTAL_ACCESS = "client_portal_access"
    SUBMIT_FEEDBACK = "submit_feedback"
    APPROVE_DRAWINGS_CLIENT = "approve_drawings_client"


_P = PermissionName
_F = PermissionFlag

NAME_TO_FLAG: Mapping[str, PermissionFlag] = MappingProxyType(
    {
        _P.VIEW_PROJECTS.value: _F.VIEW_ASSIGNED_PROJECTS,
        _P.CREATE_PROJECTS.value: _F.CREATE_PROJECTS,
        _P.EDIT_PROJECTS.value: _F.MANAGE_ALL_PROJECTS,
        _P.DELETE_PROJECTS.value: _F.DELETE_DATA,
        _P.EDIT_PROJECT_SETTINGS.value: _F.MANAGE_ALL_PROJECTS,
        _P.VIEW_PROJECT_COSTS.value: _F.VIEW_FINANCIAL_DATA,
        _P.ASSIGN_PROJECT_TEAM.value: _F.MANAGE_TEAM_MEMBERS,

        # Everyone on a project can view its scope
        _P.VIEW_SCOPE.value: _F.VIEW_ASSIGNED_PROJECTS,
        _P.MANAGE_SCOPE_ITEMS.value: _F.MANAGE_SCOPE,
        _P.ASSIGN_SUBCONTRACTORS.value: _F.MANAGE_SCOPE,
        _P.APPROVE_SCOPE_CHANGES.value: _F.APPROVE_SCOPE_CHANGES,
        _P.EXPORT_SCOPE_EXCEL.value: _F.EXPORT_DATA,

        _P.VIEW_DRAWINGS.value: _F.VIEW_SHOP_DRAWINGS,
        _P.UPLOAD_DRAWINGS.value: _F.CREATE_SHOP_DRAWINGS,
        _P.INTERNAL_REVIEW_DRAWINGS.value: _F.EDIT_SHOP_DRAWINGS,
        _P.CLIENT_REVIEW_DRAWINGS.value: _F.APPROVE_SHOP_DRAWINGS_CLIENT,
        _P.APPROVE_SHOP_DRAWINGS.value: _F.APPROVE_SHOP_DRAWINGS,
        _P.APPROVE_DRAWINGS.value: _F.APPROVE_SHOP_DRAWINGS,

        _P.VIEW_MATERIALS.value: _F.VIEW_ASSIGNED_PROJECTS,
        _P.CREATE_MATERIAL_SPECS.value: _F.MANAGE_MATERIALS,
        _P.APPROVE_MATERIAL_SPECS.value: _F.MANAGE_MATERIALS,
        _P.VIEW_MATERIAL_COSTS.value: _F.VIEW_FINANCIAL_DATA,

        _P.VIEW_TASKS.value: _F.VIEW_ASSIGNED_PROJECTS,
        _P.CREATE_TASKS.value: _F.CREATE_TASKS,
        _P.ASSIGN_TASKS.value: _F.ASSIGN_TASKS,
        _P.EDIT_TASKS.value: _F.EDIT_TASKS,
        _P.COMPLETE_TASKS.value: _F.EDIT_TASKS,

        _P.VIEW_ALL_COSTS.value: _F.VIEW_FINANCIAL_DATA,
        _P.VIEW_PROJECT_BUDGETS.value: _F.VIEW_FINANCIAL_DATA,
        _P.APPROVE_EXPENSES.value: _F.APPROVE_EXPENSES,
        _P.GENERATE_FINANCIAL_REPORTS.value: _F.EXPORT_FINANCIAL_REPORTS,
        _P.EXPORT_DATA.value: _F.EXPORT_DATA,

        _P.MANAGE_USERS.value: _F.MANAGE_ALL_USERS,
        _P.MANAGE_COMPANY_SETTINGS.value: _F.MANAGE_COMPANY_SETTINGS,
        _P.VIEW_AUDIT_LOGS.value: _F.VIEW_AUDIT_LOGS,
        _P.BACKUP_RESTORE.value: _F.BACKUP_RESTORE_DATA,

        _P.CLIENT_PORTAL_ACCESS.value: _F.VIEW_ASSIGNED_PROJECTS,
        _P.SUBMIT_FEEDBACK.value: _F.VIEW_ASSIGNED_PROJECTS,
        _P.APPROVE_DRAWINGS_CLIENT.value: _F.APPROVE_SHOP_DRAWINGS_CLIENT,
    }
)

del _P, _F


def lookup_flag(
    name: Union[str, PermissionName],
    mapping: Mapping[str, int] = NAME_TO_FLAG,
) -> Optional[int]:
    """Return the flag for a permission name, or None if unmapped."""
    key = name.value if isinstance(name, PermissionName) else name
    return mapping.get(key)


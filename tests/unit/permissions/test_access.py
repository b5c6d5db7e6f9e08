"""Tests for project-level access rules."""

from sitegate.permissions.flags import PermissionFlag, grant
from sitegate.permissions.access import (
    can_access_project,
    can_manage_project,
    can_approve_shop_drawings,
    can_change_user_role,
)
from sitegate.permissions.snapshot import CapabilitySnapshot


VIEW_ASSIGNED = int(PermissionFlag.VIEW_ASSIGNED_PROJECTS)
VIEW_ALL = int(PermissionFlag.VIEW_ALL_PROJECTS)


class TestCanAccessProject:
    """Visibility of a single project."""

    def test_owner_always_has_access(self, project):
        assert can_access_project(0, project, user_id="u-owner")

    def test_view_all(self, project):
        assert can_access_project(VIEW_ALL, project)

    def test_assigned(self, project):
        assert can_access_project(VIEW_ASSIGNED, project, user_id="u-2", assigned_project_ids=["p-100"])

    def test_assigned_flag_without_assignment(self, project):
        assert not can_access_project(VIEW_ASSIGNED, project, user_id="u-2", assigned_project_ids=["p-7"])
        assert not can_access_project(VIEW_ASSIGNED, project, user_id="u-2")

    def test_assignment_without_flag(self, project):
        assert not can_access_project(0, project, user_id="u-2", assigned_project_ids=["p-100"])

    def test_none_user_is_never_owner(self):
        assert not can_access_project(0, {"id": "p-1", "created_by": None}, user_id=None)

    def test_snapshot_argument(self, project):
        snapshot = CapabilitySnapshot(VIEW_ASSIGNED, "u-2")
        assert can_access_project(snapshot, project, "u-2", ["p-100"])

    def test_id_types_compared_as_strings(self):
        assert can_access_project(VIEW_ASSIGNED, {"id": 5}, assigned_project_ids=["5"])


class TestCanManageProject:
    """Management rights on a project."""

    def test_owner(self, project):
        assert can_manage_project(0, project, user_id="u-owner")

    def test_manage_all(self, project):
        assert can_manage_project(int(PermissionFlag.MANAGE_ALL_PROJECTS), project, user_id="u-2")

    def test_neither(self, project):
        assert not can_manage_project(VIEW_ALL, project, user_id="u-2")


class TestCanApproveShopDrawings:
    """Shop drawing approval."""

    def test_requires_approval_authority(self, project):
        assert not can_approve_shop_drawings(0, project, user_id="u-owner")

    def test_owner_with_authority(self, project):
        caps = int(PermissionFlag.APPROVE_SHOP_DRAWINGS)
        assert can_approve_shop_drawings(caps, project, user_id="u-owner")

    def test_designated_approver(self, project):
        caps = int(PermissionFlag.APPROVE_SHOP_DRAWINGS_CLIENT)
        assert can_approve_shop_drawings(caps, project, user_id="u-client", is_project_approver=True)
        assert not can_approve_shop_drawings(caps, project, user_id="u-client")

    def test_manager_with_authority(self, project):
        caps = grant(0, PermissionFlag.APPROVE_SHOP_DRAWINGS, PermissionFlag.MANAGE_ALL_PROJECTS)
        assert can_approve_shop_drawings(caps, project, user_id="u-2")


class TestCanChangeUserRole:
    """Role assignment."""

    def test_requires_manage_users(self):
        assert can_change_user_role(int(PermissionFlag.MANAGE_ALL_USERS))
        assert not can_change_user_role(int(PermissionFlag.MANAGE_TEAM_MEMBERS))
        assert not can_change_user_role(None)


class TestCheckerProjectRules:
    """The same rules through a user's PermissionChecker."""

    def test_checker_uses_snapshot_user(self, project):
        from sitegate.permissions import PermissionChecker

        owner = PermissionChecker(CapabilitySnapshot(0, "u-owner"))
        stranger = PermissionChecker(CapabilitySnapshot(VIEW_ASSIGNED, "u-2"))

        assert owner.can_access_project(project)
        assert owner.can_manage_project(project)
        assert not stranger.can_access_project(project)
        assert stranger.can_access_project(project, ["p-100"])
        assert not stranger.can_approve_shop_drawings(project, is_project_approver=True)

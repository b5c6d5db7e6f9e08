"""Tests for permission flags and bit helpers."""

import pytest

from sitegate.permissions.flags import (
    PermissionFlag,
    ALL_PERMISSIONS,
    ADMIN_FUNCTIONS,
    has_flag,
    grant,
    revoke,
    combine,
    flags_in,
    permission_names,
    is_valid_capability_set,
)


class TestFlagTable:
    """Test the flag definitions."""

    def test_every_flag_is_a_single_bit(self):
        for flag in PermissionFlag:
            value = int(flag)
            assert value > 0
            assert value & (value - 1) == 0, flag.name

    def test_flags_do_not_share_bits(self):
        values = [int(flag) for flag in PermissionFlag]
        assert len(values) == len(set(values))

    def test_flag_count_and_all_permissions(self):
        assert len(list(PermissionFlag)) == 28
        assert ALL_PERMISSIONS == 2 ** 28 - 1

    def test_stable_bit_positions(self):
        """Stored capability sets depend on these positions."""
        assert PermissionFlag.VIEW_ALL_PROJECTS == 1
        assert PermissionFlag.CREATE_PROJECTS == 2
        assert PermissionFlag.VIEW_ASSIGNED_PROJECTS == 4
        assert PermissionFlag.VIEW_FINANCIAL_DATA == 64
        assert PermissionFlag.MANAGE_ALL_USERS == 1 << 18
        assert PermissionFlag.BACKUP_RESTORE_DATA == 1 << 27

    def test_admin_functions(self):
        assert has_flag(ADMIN_FUNCTIONS, PermissionFlag.VIEW_AUDIT_LOGS)
        assert has_flag(ADMIN_FUNCTIONS, PermissionFlag.MANAGE_COMPANY_SETTINGS)
        assert has_flag(ADMIN_FUNCTIONS, PermissionFlag.BACKUP_RESTORE_DATA)
        assert not has_flag(ADMIN_FUNCTIONS, PermissionFlag.MANAGE_ALL_USERS)


class TestBitHelpers:
    """Test grant/revoke and friends."""

    def test_has_flag(self):
        caps = PermissionFlag.VIEW_SHOP_DRAWINGS | PermissionFlag.CREATE_TASKS
        assert has_flag(caps, PermissionFlag.VIEW_SHOP_DRAWINGS)
        assert not has_flag(caps, PermissionFlag.EDIT_TASKS)

    def test_has_flag_none_is_false(self):
        assert not has_flag(None, PermissionFlag.VIEW_ALL_PROJECTS)

    def test_grant_adds_flags(self):
        caps = grant(0, PermissionFlag.CREATE_PROJECTS, PermissionFlag.VIEW_FINANCIAL_DATA)
        assert caps == 66
        assert type(caps) is int

    def test_grant_is_idempotent(self):
        caps = grant(66, PermissionFlag.CREATE_PROJECTS)
        assert caps == 66

    def test_revoke_removes_flags(self):
        assert revoke(66, PermissionFlag.VIEW_FINANCIAL_DATA) == 2
        assert revoke(66, PermissionFlag.VIEW_FINANCIAL_DATA, PermissionFlag.CREATE_PROJECTS) == 0

    def test_revoke_missing_flag_is_noop(self):
        assert revoke(2, PermissionFlag.DELETE_DATA) == 2

    def test_grant_and_revoke_accept_none(self):
        assert grant(None, PermissionFlag.EXPORT_DATA) == int(PermissionFlag.EXPORT_DATA)
        assert revoke(None, PermissionFlag.EXPORT_DATA) == 0

    def test_combine(self):
        assert combine([]) == 0
        assert combine([PermissionFlag.VIEW_ALL_PROJECTS, PermissionFlag.CREATE_PROJECTS]) == 3

    def test_flags_in_bit_order(self):
        caps = PermissionFlag.VIEW_FINANCIAL_DATA | PermissionFlag.VIEW_ALL_PROJECTS
        assert flags_in(caps) == [PermissionFlag.VIEW_ALL_PROJECTS, PermissionFlag.VIEW_FINANCIAL_DATA]

    def test_permission_names(self):
        names = permission_names(66)
        assert names == ["create projects", "view financial data"]

    def test_permission_names_empty(self):
        assert permission_names(0) == []
        assert permission_names(None) == []


class TestCapabilityValidation:
    """Test capability set range validation."""

    @pytest.mark.parametrize("value", [0, 1, 66, ALL_PERMISSIONS])
    def test_valid_values(self, value):
        assert is_valid_capability_set(value)

    @pytest.mark.parametrize("value", [-1, ALL_PERMISSIONS + 1, 1 << 40, None, "66", 1.5, True])
    def test_invalid_values(self, value):
        assert not is_valid_capability_set(value)

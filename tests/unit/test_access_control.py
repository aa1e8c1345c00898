"""Tests for AccessControl — role queries and admin-gated administration."""

from __future__ import annotations

import pytest

from stakingrewards.core.access_control import (
    AccessControl,
    RoleChecker,
    UnauthorizedError,
    check_role,
)
from stakingrewards.models.roles import Role, RoleGrant


@pytest.fixture
def access() -> AccessControl:
    return AccessControl(admin="admin")


class TestAccessControl:
    def test_admin_holds_default_admin_role(self, access: AccessControl):
        assert access.has_role(Role.DEFAULT_ADMIN_ROLE, "admin")
        assert not access.has_role(Role.MINTER_ROLE, "admin")

    def test_no_admin(self):
        access = AccessControl()
        assert access.members(Role.DEFAULT_ADMIN_ROLE) == []

    def test_grant_and_revoke(self, access: AccessControl):
        access.grant_role(Role.MINTER_ROLE, "minter", caller="admin")
        assert access.has_role(Role.MINTER_ROLE, "minter")
        access.revoke_role(Role.MINTER_ROLE, "minter", caller="admin")
        assert not access.has_role(Role.MINTER_ROLE, "minter")

    def test_grant_requires_admin_role(self, access: AccessControl):
        with pytest.raises(UnauthorizedError) as excinfo:
            access.grant_role(Role.MINTER_ROLE, "eve", caller="eve")
        assert excinfo.value.role is Role.DEFAULT_ADMIN_ROLE
        assert not access.has_role(Role.MINTER_ROLE, "eve")

    def test_revoke_requires_admin_role(self, access: AccessControl):
        access.setup_role(Role.MINTER_ROLE, "minter")
        with pytest.raises(UnauthorizedError):
            access.revoke_role(Role.MINTER_ROLE, "minter", caller="minter")
        assert access.has_role(Role.MINTER_ROLE, "minter")

    def test_renounce(self, access: AccessControl):
        access.setup_role(Role.REWARD_DISTRIBUTION_ROLE, "dist")
        access.renounce_role(Role.REWARD_DISTRIBUTION_ROLE, caller="dist")
        assert not access.has_role(Role.REWARD_DISTRIBUTION_ROLE, "dist")

    def test_role_admin_can_be_reassigned(self, access: AccessControl):
        access.setup_role(Role.REWARD_DISTRIBUTION_ROLE, "dist")
        access.set_role_admin(
            Role.MINTER_ROLE, Role.REWARD_DISTRIBUTION_ROLE, caller="admin"
        )
        assert access.get_role_admin(Role.MINTER_ROLE) is Role.REWARD_DISTRIBUTION_ROLE
        access.grant_role(Role.MINTER_ROLE, "minter", caller="dist")
        assert access.has_role(Role.MINTER_ROLE, "minter")
        with pytest.raises(UnauthorizedError):
            access.grant_role(Role.MINTER_ROLE, "other", caller="admin")

    def test_role_accepts_plain_strings(self, access: AccessControl):
        access.setup_role(Role.MINTER_ROLE, "minter")
        assert access.has_role("MINTER_ROLE", "minter")

    def test_members_and_grants(self, access: AccessControl):
        access.setup_role(Role.MINTER_ROLE, "b")
        access.setup_role(Role.MINTER_ROLE, "a")
        assert access.members(Role.MINTER_ROLE) == ["a", "b"]
        assert RoleGrant(role=Role.MINTER_ROLE, account="a") in access.grants()

    def test_check_role_with_any_checker(self):
        class _Only:
            def has_role(self, role, account) -> bool:
                return account == "ok"

        assert isinstance(_Only(), RoleChecker)
        check_role(_Only(), Role.MINTER_ROLE, "ok")
        with pytest.raises(UnauthorizedError):
            check_role(_Only(), Role.MINTER_ROLE, "nope")

    def test_unauthorized_error_attributes(self):
        err = UnauthorizedError("0xABC", Role.MINTER_ROLE)
        assert err.account == "0xABC"
        assert err.role is Role.MINTER_ROLE
        assert str(err) == "AccessControl: account 0xabc is missing role MINTER_ROLE"
        assert isinstance(err, PermissionError)

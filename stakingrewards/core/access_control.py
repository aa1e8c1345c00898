"""Role-based access control in front of the ledger's privileged mutators.

The reward ledger only ever *queries* role membership through the
``RoleChecker`` protocol.  ``AccessControl`` is the default in-memory
registry; any object with a ``has_role(role, account) -> bool`` method can
stand in for it.

Administration follows the usual admin-role scheme: every role has an admin
role (``DEFAULT_ADMIN_ROLE`` unless reassigned) and only holders of that
admin role may grant or revoke it.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from stakingrewards.models.roles import Role, RoleGrant

logger = logging.getLogger(__name__)


class UnauthorizedError(PermissionError):
    """Raised when an account lacks the role an operation requires."""

    def __init__(self, account: str, role: Role) -> None:
        self.account = account
        self.role = role
        super().__init__(
            f"AccessControl: account {account.lower()} is missing role {role.value}"
        )


@runtime_checkable
class RoleChecker(Protocol):
    """Protocol for role membership queries."""

    def has_role(self, role: Role, account: str) -> bool:
        ...


def check_role(checker: RoleChecker, role: Role, account: str) -> None:
    """Raise ``UnauthorizedError`` unless *account* holds *role*."""
    if not checker.has_role(role, account):
        logger.warning("Rejected call from %s: missing %s", account, role.value)
        raise UnauthorizedError(account, role)


class AccessControl:
    """In-memory role registry.

    Parameters
    ----------
    admin:
        Account granted ``DEFAULT_ADMIN_ROLE`` at construction.  Pass an
        empty string for a registry with no administrator.
    """

    def __init__(self, admin: str = "") -> None:
        self._members: dict[Role, set[str]] = {role: set() for role in Role}
        self._admin_roles: dict[Role, Role] = {
            role: Role.DEFAULT_ADMIN_ROLE for role in Role
        }
        if admin:
            self._members[Role.DEFAULT_ADMIN_ROLE].add(admin)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def has_role(self, role: Role, account: str) -> bool:
        return account in self._members[Role(role)]

    def check_role(self, role: Role, account: str) -> None:
        check_role(self, role, account)

    def get_role_admin(self, role: Role) -> Role:
        return self._admin_roles[Role(role)]

    def members(self, role: Role) -> list[str]:
        """Return the accounts holding *role*, sorted."""
        return sorted(self._members[Role(role)])

    def grants(self) -> list[RoleGrant]:
        return [
            RoleGrant(role=role, account=account)
            for role in Role
            for account in sorted(self._members[role])
        ]

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    def setup_role(self, role: Role, account: str) -> None:
        """Grant *role* without an admin check.  Only for bootstrapping a pool."""
        self._members[Role(role)].add(account)
        logger.info("Role %s set up for %s", Role(role).value, account)

    def set_role_admin(self, role: Role, admin_role: Role, *, caller: str) -> None:
        self.check_role(self.get_role_admin(role), caller)
        self._admin_roles[Role(role)] = Role(admin_role)

    def grant_role(self, role: Role, account: str, *, caller: str) -> None:
        self.check_role(self.get_role_admin(role), caller)
        if account not in self._members[Role(role)]:
            self._members[Role(role)].add(account)
            logger.info(
                "Role %s granted to %s by %s", Role(role).value, account, caller
            )

    def revoke_role(self, role: Role, account: str, *, caller: str) -> None:
        self.check_role(self.get_role_admin(role), caller)
        if account in self._members[Role(role)]:
            self._members[Role(role)].discard(account)
            logger.info(
                "Role %s revoked from %s by %s", Role(role).value, account, caller
            )

    def renounce_role(self, role: Role, *, caller: str) -> None:
        """Drop *caller*'s own membership of *role*."""
        self._members[Role(role)].discard(caller)
        logger.info("Role %s renounced by %s", Role(role).value, caller)

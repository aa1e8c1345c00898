"""Role identifiers and role grants for the access-control facility."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Role(str, Enum):
    """Roles queried by the reward ledger."""

    DEFAULT_ADMIN_ROLE = "DEFAULT_ADMIN_ROLE"
    MINTER_ROLE = "MINTER_ROLE"
    REWARD_DISTRIBUTION_ROLE = "REWARD_DISTRIBUTION_ROLE"


class RoleGrant(BaseModel):
    """A single (role, account) membership."""

    model_config = ConfigDict(frozen=True)

    role: Role
    account: str

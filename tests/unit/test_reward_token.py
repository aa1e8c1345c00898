"""Tests for the in-memory RewardToken."""

from __future__ import annotations

import pytest

from stakingrewards.core.reward_token import (
    InsufficientBalanceError,
    RewardAsset,
    RewardToken,
)


@pytest.fixture
def token() -> RewardToken:
    return RewardToken("Reward Token", "RTOK", address="rtok")


class TestRewardToken:
    def test_satisfies_reward_asset_protocol(self, token: RewardToken):
        assert isinstance(token, RewardAsset)

    def test_generated_address(self):
        token = RewardToken("A", "A")
        assert token.address.startswith("token-")

    def test_mint_and_balance(self, token: RewardToken):
        token.mint("alice", token.expand(3))
        assert token.balance_of("alice") == 3 * 10**18
        assert token.total_supply == 3 * 10**18
        assert token.balance_of("nobody") == 0

    def test_transfer(self, token: RewardToken):
        token.mint("alice", 10)
        token.transfer("alice", "bob", 4)
        assert token.balance_of("alice") == 6
        assert token.balance_of("bob") == 4
        assert token.total_supply == 10

    def test_overdraft_rejected(self, token: RewardToken):
        token.mint("alice", 10)
        with pytest.raises(InsufficientBalanceError, match="exceeds balance"):
            token.transfer("alice", "bob", 11)
        assert token.balance_of("alice") == 10
        assert token.balance_of("bob") == 0

    def test_negative_amounts_rejected(self, token: RewardToken):
        with pytest.raises(ValueError):
            token.mint("alice", -1)
        with pytest.raises(ValueError):
            token.transfer("alice", "bob", -1)

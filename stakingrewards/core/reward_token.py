"""Reward-denominated asset consumed by the ledger.

The ledger moves reward units only through the ``RewardAsset`` protocol:
it reads its own balance to check funding and transfers payouts to
claimants.  ``RewardToken`` is an in-memory fungible-token balance ledger
used for simulations and tests.
"""

from __future__ import annotations

import logging
import uuid
from typing import Protocol, runtime_checkable

from stakingrewards.core import fixed_point

logger = logging.getLogger(__name__)


class InsufficientBalanceError(ValueError):
    """Raised when a transfer exceeds the sender's balance."""


@runtime_checkable
class RewardAsset(Protocol):
    """Protocol for the reward asset's balance ledger."""

    address: str

    def balance_of(self, account: str) -> int:
        ...

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        ...


class RewardToken:
    """In-memory fungible token.

    Parameters
    ----------
    name, symbol:
        Display identification.
    decimals:
        Base-unit exponent; ``expand(1)`` is one whole token.
    address:
        Asset identifier.  Generated when omitted.
    """

    def __init__(
        self,
        name: str,
        symbol: str,
        decimals: int = 18,
        address: str | None = None,
    ) -> None:
        self.name = name
        self.symbol = symbol
        self.decimals = decimals
        self.address = address or f"token-{uuid.uuid4().hex[:12]}"
        self._balances: dict[str, int] = {}
        self._total_supply = 0

    @property
    def total_supply(self) -> int:
        return self._total_supply

    def expand(self, whole_tokens: int) -> int:
        return fixed_point.expand_decimals(whole_tokens, self.decimals)

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def mint(self, account: str, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"Cannot mint a negative amount: {amount}")
        self._balances[account] = fixed_point.add(self.balance_of(account), amount)
        self._total_supply = fixed_point.add(self._total_supply, amount)
        logger.debug("%s minted %d to %s", self.symbol, amount, account)

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"Cannot transfer a negative amount: {amount}")
        balance = self.balance_of(sender)
        if amount > balance:
            raise InsufficientBalanceError(
                f"{self.symbol}: transfer amount {amount} exceeds balance "
                f"{balance} of {sender}"
            )
        self._balances[sender] = balance - amount
        self._balances[recipient] = fixed_point.add(self.balance_of(recipient), amount)
        logger.debug("%s transfer %d %s -> %s", self.symbol, amount, sender, recipient)

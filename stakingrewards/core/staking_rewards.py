"""Reward-per-share accrual ledger.

A pool releases each funded reward amount linearly over a distribution
window and splits it between stakers in proportion to stake and time.
The pool keeps one global accumulator, ``reward_per_share_stored``, and a
per-account checkpoint of it; an account's reward for any interval is its
balance times the growth of the accumulator since its checkpoint.

Every mutator runs the settlement checkpoint (``_update_reward``) before it
changes balances or the rate, so the accumulator always reflects the stake
distribution that was in force while the reward accrued.

Operations
----------
notify_reward_amount
    Fund a new window.  Requires ``REWARD_DISTRIBUTION_ROLE``.
mint
    Credit stake to an account.  Requires ``MINTER_ROLE``.
claim
    Pay the caller's accrued reward.  Fails before ``start_time``.
earned
    Pure query of an account's accrued reward.

Each mutator is atomic: it either fully applies or raises with the pool
state unchanged.  Events are published only after the mutation commits.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from stakingrewards.core import fixed_point
from stakingrewards.core.access_control import AccessControl, RoleChecker, check_role
from stakingrewards.core.clock import Clock, ClockRegressionError
from stakingrewards.core.event_journal import EventJournal
from stakingrewards.core.reward_token import RewardAsset
from stakingrewards.models.events import (
    PoolEvent,
    RewardAddedEvent,
    RewardPaidEvent,
    TransferEvent,
)
from stakingrewards.models.pool import (
    AccountState,
    DistributionWindow,
    GlobalAccrual,
    PoolParams,
)
from stakingrewards.models.roles import Role

logger = logging.getLogger(__name__)

EventListener = Callable[[PoolEvent], None]


class NotStartedError(RuntimeError):
    """Raised when a claim is attempted before the pool's start time."""

    def __init__(self, start_time: int, now: int) -> None:
        self.start_time = start_time
        self.now = now
        super().__init__(f"Not started: start_time={start_time}, now={now}")


class RewardTooHighError(ValueError):
    """Raised when the pool's reward balance cannot cover a new rate."""


class StakingRewards:
    """A single reward pool.

    Parameters
    ----------
    params:
        Frozen construction parameters.
    reward_asset:
        Balance ledger of the reward asset.  Its ``address`` must equal
        ``params.reward_token``.
    clock:
        Time source read once per operation.
    roles:
        Role membership checker.  When omitted an ``AccessControl`` is built
        granting the admin, distributor and minter roles named in *params*.
    journal:
        Optional event journal receiving every committed event.
    """

    def __init__(
        self,
        params: PoolParams,
        *,
        reward_asset: RewardAsset,
        clock: Clock,
        roles: RoleChecker | None = None,
        journal: EventJournal | None = None,
    ) -> None:
        if reward_asset.address != params.reward_token:
            raise ValueError(
                f"Reward asset {reward_asset.address!r} does not match "
                f"params.reward_token {params.reward_token!r}"
            )
        self._params = params
        self._reward_asset = reward_asset
        self._clock = clock
        self._roles = roles if roles is not None else self._default_roles(params)
        self._journal = journal

        self._window = DistributionWindow(
            start_time=params.start_time, duration=params.rewards_duration
        )
        self._accrual = GlobalAccrual()
        self._accounts: dict[str, AccountState] = {}
        self._total_funded = 0
        self._total_paid = 0

        self._lock = threading.RLock()
        self._last_seen_time = 0
        self._pending: list[PoolEvent] = []
        self._events: list[PoolEvent] = []
        self._listeners: list[EventListener] = []

        logger.info(
            "Pool %s (%s) created: start=%d duration=%ds reward_token=%s",
            params.pool_id,
            params.symbol,
            params.start_time,
            params.rewards_duration,
            params.reward_token,
        )

    @staticmethod
    def _default_roles(params: PoolParams) -> AccessControl:
        access = AccessControl(admin=params.admin)
        access.setup_role(Role.REWARD_DISTRIBUTION_ROLE, params.rewards_distribution)
        access.setup_role(Role.MINTER_ROLE, params.minter)
        return access

    # ------------------------------------------------------------------
    # Identification and state views
    # ------------------------------------------------------------------

    @property
    def params(self) -> PoolParams:
        return self._params

    @property
    def pool_id(self) -> str:
        return self._params.pool_id

    @property
    def address(self) -> str:
        """Account holding the pool's reward funds in the reward asset."""
        return self._params.pool_id

    @property
    def name(self) -> str:
        return self._params.name

    @property
    def symbol(self) -> str:
        return self._params.symbol

    @property
    def roles(self) -> RoleChecker:
        return self._roles

    @property
    def window(self) -> DistributionWindow:
        return self._window.model_copy()

    @property
    def accrual(self) -> GlobalAccrual:
        return self._accrual.model_copy()

    def account_state(self, account: str) -> AccountState:
        state = self._accounts.get(account)
        return state.model_copy() if state is not None else AccountState()

    def accounts(self) -> list[str]:
        """Accounts that have ever been checkpointed, in first-seen order."""
        return list(self._accounts)

    @property
    def start_time(self) -> int:
        return self._window.start_time

    @property
    def rewards_duration(self) -> int:
        return self._window.duration

    @property
    def period_finish(self) -> int:
        return self._window.period_finish

    @property
    def last_update_time(self) -> int:
        return self._window.last_update_time

    @property
    def reward_rate(self) -> int:
        return self._window.reward_rate

    @property
    def reward_per_token_stored(self) -> int:
        return self._accrual.reward_per_share_stored

    @property
    def total_supply(self) -> int:
        return self._accrual.total_staked

    @property
    def total_funded(self) -> int:
        return self._total_funded

    @property
    def total_paid(self) -> int:
        return self._total_paid

    def balance_of(self, account: str) -> int:
        state = self._accounts.get(account)
        return state.balance if state is not None else 0

    def now(self) -> int:
        """Current clock reading.  Read-only; mutators go through ``_tick``."""
        return self._clock.now()

    def _tick(self) -> int:
        """Read the clock for a mutation, refusing to see time move backwards."""
        now = self._clock.now()
        if now < self._last_seen_time:
            raise ClockRegressionError(
                f"Pool {self.pool_id} saw time go from {self._last_seen_time} to {now}"
            )
        self._last_seen_time = now
        return now

    # ------------------------------------------------------------------
    # Accrual math (read-only)
    # ------------------------------------------------------------------

    def _applicable_time(self, now: int) -> int:
        # A window funded before start_time is pinned to start_time, so now
        # can trail last_update_time; accrual never runs backwards.
        return max(min(now, self._window.period_finish), self._window.last_update_time)

    def _reward_per_token_at(self, now: int) -> int:
        stored = self._accrual.reward_per_share_stored
        if self._accrual.total_staked == 0:
            return stored
        elapsed = fixed_point.sub(
            self._applicable_time(now), self._window.last_update_time
        )
        growth = fixed_point.mul_div(
            fixed_point.mul(elapsed, self._window.reward_rate),
            fixed_point.SCALE,
            self._accrual.total_staked,
        )
        return fixed_point.add(stored, growth)

    def _earned_at(self, account: str, now: int) -> int:
        state = self._accounts.get(account)
        if state is None:
            return 0
        delta = fixed_point.sub(
            self._reward_per_token_at(now), state.reward_per_share_paid
        )
        return fixed_point.add(
            fixed_point.mul_div(state.balance, delta, fixed_point.SCALE),
            state.accrued_unclaimed,
        )

    def last_time_reward_applicable(self) -> int:
        return self._applicable_time(self.now())

    def reward_per_token(self) -> int:
        """Current reward per staked unit, scaled by ``SCALE``."""
        return self._reward_per_token_at(self.now())

    def earned(self, account: str) -> int:
        """Reward accrued to *account* and not yet claimed.  Never mutates."""
        return self._earned_at(account, self.now())

    def get_reward_for_duration(self) -> int:
        """Reward released over one full window at the current rate."""
        return fixed_point.mul(self._window.reward_rate, self._window.duration)

    # ------------------------------------------------------------------
    # Settlement checkpoint
    # ------------------------------------------------------------------

    def _update_reward(
        self, now: int, account: str | None = None, *, create: bool = False
    ) -> None:
        self._accrual.reward_per_share_stored = self._reward_per_token_at(now)
        self._window.last_update_time = self._applicable_time(now)
        if account is None:
            return
        state = self._accounts.get(account)
        if state is None:
            if not create:
                return
            state = self._accounts[account] = AccountState()
        state.accrued_unclaimed = self._earned_at(account, now)
        state.reward_per_share_paid = self._accrual.reward_per_share_stored
        logger.debug(
            "Checkpoint %s at %d: rps=%d accrued=%d",
            account,
            now,
            state.reward_per_share_paid,
            state.accrued_unclaimed,
        )

    # ------------------------------------------------------------------
    # Transaction boundary
    # ------------------------------------------------------------------

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        """Serialize a mutator and roll the pool back if it raises.

        Committed events are published before the lock is released, so
        subscribers and the journal see them in commit order.
        """
        with self._lock:
            saved = (
                self._window.model_copy(),
                self._accrual.model_copy(),
                {a: s.model_copy() for a, s in self._accounts.items()},
                self._total_funded,
                self._total_paid,
            )
            self._pending = []
            try:
                yield
            except BaseException:
                (
                    self._window,
                    self._accrual,
                    self._accounts,
                    self._total_funded,
                    self._total_paid,
                ) = saved
                self._pending = []
                raise
            committed, self._pending = self._pending, []
            self._publish(committed)

    def _emit(self, event: PoolEvent) -> None:
        self._pending.append(event)

    def _publish(self, events: list[PoolEvent]) -> None:
        """Deliver committed events.

        The operation has already been applied; a failing journal or listener
        is logged and does not stop delivery of the rest.
        """
        for event in events:
            self._events.append(event)
            if self._journal is not None:
                try:
                    self._journal.append(event)
                except Exception as exc:  # noqa: BLE001
                    logger.error(
                        "Journal append failed for %s event %s: %s",
                        event.event_kind.value,
                        event.event_id,
                        exc,
                    )
            for listener in self._listeners:
                try:
                    listener(event)
                except Exception as exc:  # noqa: BLE001
                    logger.error(
                        "Listener %r failed for %s event %s: %s",
                        listener,
                        event.event_kind.value,
                        event.event_id,
                        exc,
                    )

    def subscribe(self, listener: EventListener) -> None:
        """Call *listener* with every event committed from now on."""
        self._listeners.append(listener)

    @property
    def events(self) -> list[PoolEvent]:
        """Events committed so far, oldest first."""
        return list(self._events)

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def notify_reward_amount(self, amount: int, *, caller: str) -> None:
        """Fund a new distribution window with *amount* reward units.

        The reward must already have been transferred to the pool.  Any
        reward still undistributed in the current window is folded into the
        new rate.  Before ``start_time`` the window is pinned to open at
        ``start_time``.
        """
        check_role(self._roles, Role.REWARD_DISTRIBUTION_ROLE, caller)
        if amount < 0:
            raise ValueError(f"Reward amount must be non-negative: {amount}")
        with self._transaction():
            now = self._tick()
            self._update_reward(now)

            window = self._window
            opens_at = max(now, window.start_time)
            if opens_at >= window.period_finish:
                rate = fixed_point.div(amount, window.duration)
            else:
                remaining = fixed_point.sub(window.period_finish, opens_at)
                leftover = fixed_point.mul(remaining, window.reward_rate)
                rate = fixed_point.div(
                    fixed_point.add(amount, leftover), window.duration
                )

            balance = self._reward_asset.balance_of(self.address)
            if rate > fixed_point.div(balance, window.duration):
                raise RewardTooHighError(
                    f"Provided reward too high: rate {rate}/s over "
                    f"{window.duration}s exceeds pool balance {balance}"
                )

            window.reward_rate = rate
            window.period_finish = fixed_point.add(opens_at, window.duration)
            window.last_update_time = opens_at
            self._total_funded = fixed_point.add(self._total_funded, amount)
            self._emit(
                RewardAddedEvent(pool_id=self.pool_id, block_time=now, reward=amount)
            )
            logger.info(
                "Pool %s funded with %d: rate=%d/s window=[%d, %d)",
                self.pool_id,
                amount,
                rate,
                opens_at,
                window.period_finish,
            )

    def mint(self, account: str, amount: int, *, caller: str) -> None:
        """Credit *amount* of stake to *account*."""
        check_role(self._roles, Role.MINTER_ROLE, caller)
        if amount < 0:
            raise ValueError(f"Mint amount must be non-negative: {amount}")
        if not account:
            raise ValueError("Cannot mint to the zero account")
        with self._transaction():
            now = self._tick()
            self._update_reward(now, account, create=True)
            state = self._accounts[account]
            state.balance = fixed_point.add(state.balance, amount)
            self._accrual.total_staked = fixed_point.add(
                self._accrual.total_staked, amount
            )
            self._emit(
                TransferEvent(
                    pool_id=self.pool_id,
                    block_time=now,
                    sender="",
                    recipient=account,
                    value=amount,
                )
            )
            logger.info(
                "Pool %s minted %d to %s (total staked %d)",
                self.pool_id,
                amount,
                account,
                self._accrual.total_staked,
            )

    def claim(self, *, caller: str) -> int:
        """Pay *caller* everything it has accrued.  Returns the payout."""
        with self._transaction():
            now = self._tick()
            if now < self._window.start_time:
                raise NotStartedError(self._window.start_time, now)
            self._update_reward(now, caller)

            state = self._accounts.get(caller)
            payout = state.accrued_unclaimed if state is not None else 0
            if state is not None and payout > 0:
                state.accrued_unclaimed = 0
                self._total_paid = fixed_point.add(self._total_paid, payout)
                self._reward_asset.transfer(self.address, caller, payout)
                self._emit(
                    RewardPaidEvent(
                        pool_id=self.pool_id, block_time=now, user=caller, reward=payout
                    )
                )
                logger.info("Pool %s paid %d to %s", self.pool_id, payout, caller)
            return payout

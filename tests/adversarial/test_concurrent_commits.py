"""Adversarial tests — concurrent mutators against a journaled pool.

Writers are serialized by the pool's transaction guard, so the journal's
hash chain and the pool's event order match commit order even when the
journal is slow.
"""

from __future__ import annotations

import threading
import time

import pytest

from conftest import MINTER
from stakingrewards.core.event_journal import EventJournal
from stakingrewards.core.staking_rewards import StakingRewards


@pytest.fixture
def slow_journal(journal: EventJournal, monkeypatch) -> EventJournal:
    latest_hash = journal._get_latest_hash

    def _slow(pool_id: str) -> str:
        value = latest_hash(pool_id)
        time.sleep(0.05)
        return value

    monkeypatch.setattr(journal, "_get_latest_hash", _slow)
    return journal


def _run_all(targets) -> None:
    threads = [threading.Thread(target=t) for t in targets]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()


class TestConcurrentCommits:
    def test_concurrent_mints_keep_chain_intact(
        self, params, reward_token, clock, slow_journal: EventJournal
    ):
        pool = StakingRewards(
            params, reward_asset=reward_token, clock=clock, journal=slow_journal
        )
        _run_all(
            [lambda i=i: pool.mint(f"s{i}", 1, caller=MINTER) for i in range(4)]
        )

        assert pool.total_supply == 4
        assert slow_journal.verify_chain(pool.pool_id) is True
        assert slow_journal.load_events(pool.pool_id) == pool.events

    def test_subscribers_see_commit_order(
        self, params, reward_token, clock, slow_journal: EventJournal
    ):
        pool = StakingRewards(
            params, reward_asset=reward_token, clock=clock, journal=slow_journal
        )
        received = []
        pool.subscribe(received.append)
        _run_all(
            [lambda i=i: pool.mint(f"s{i}", 1, caller=MINTER) for i in range(3)]
        )

        assert received == pool.events
        assert [e.recipient for e in received] == pool.accounts()

    def test_journal_appends_serialize_across_pools_sharing_it(
        self, params, reward_token, clock, slow_journal: EventJournal
    ):
        first = StakingRewards(
            params, reward_asset=reward_token, clock=clock, journal=slow_journal
        )
        second = StakingRewards(
            params.model_copy(update={"pool_id": "pool-test-002"}),
            reward_asset=reward_token,
            clock=clock,
            journal=slow_journal,
        )
        _run_all(
            [lambda p=p: p.mint("alice", 1, caller=MINTER) for p in (first, second)]
            * 2
        )

        assert slow_journal.verify_chain(first.pool_id) is True
        assert slow_journal.verify_chain(second.pool_id) is True
        assert len(slow_journal.get_pool_entries(first.pool_id)) == 2

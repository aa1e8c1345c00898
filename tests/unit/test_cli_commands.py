"""Unit tests for the CLI — command registration and end-to-end runs
via typer.testing.CliRunner.
"""

from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from stakingrewards.cli.app import app
from stakingrewards.core.event_journal import EventJournal

runner = CliRunner()


class TestCliApp:
    def test_help_lists_commands(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("simulate", "events", "pools", "config"):
            assert command in result.output

    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        # no_args_is_help exits 0 or 2 depending on the Typer version
        assert result.exit_code in (0, 2)
        assert "usage" in result.output.lower()

    def test_config_command(self):
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0
        assert "rewards_duration" in result.output


class TestSimulate:
    def test_simulate_runs(self):
        result = runner.invoke(app, ["simulate", "--duration", "1000"])
        assert result.exit_code == 0, result.output
        assert "Payouts" in result.output
        assert "alice" in result.output
        assert "bob" in result.output

    def test_simulate_records_journal(self, tmp_path: Path):
        db = tmp_path / "events.db"
        result = runner.invoke(
            app, ["simulate", "--duration", "1000", "--journal", str(db)]
        )
        assert result.exit_code == 0, result.output
        assert "valid" in result.output

        journal = EventJournal(db)
        pool_ids = journal.get_all_pool_ids()
        assert len(pool_ids) == 1
        # fund, two mints, two claims
        assert len(journal.get_pool_entries(pool_ids[0])) == 5


class TestJournalCommands:
    def _record(self, tmp_path: Path) -> tuple[Path, str]:
        db = tmp_path / "events.db"
        runner.invoke(app, ["simulate", "--duration", "1000", "--journal", str(db)])
        return db, EventJournal(db).get_all_pool_ids()[0]

    def test_pools_lists_recorded_pool(self, tmp_path: Path):
        db, pool_id = self._record(tmp_path)
        result = runner.invoke(app, ["pools", "--journal", str(db)])
        assert result.exit_code == 0
        assert pool_id in result.output

    def test_events_with_chain_verification(self, tmp_path: Path):
        db, pool_id = self._record(tmp_path)
        result = runner.invoke(
            app, ["events", pool_id, "--verify-chain", "--journal", str(db)]
        )
        assert result.exit_code == 0, result.output
        assert "valid" in result.output
        assert f"Events for {pool_id}" in result.output

    def test_events_unknown_pool(self, tmp_path: Path):
        db, _ = self._record(tmp_path)
        result = runner.invoke(app, ["events", "pool-missing", "--journal", str(db)])
        assert result.exit_code == 1

    def test_missing_journal(self, tmp_path: Path):
        result = runner.invoke(
            app, ["events", "pool-1", "--journal", str(tmp_path / "nope.db")]
        )
        assert result.exit_code == 1
        assert "Journal not found" in result.output

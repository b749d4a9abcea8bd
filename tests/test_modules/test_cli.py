"""CLI tests using click's CliRunner."""
import pytest
from click.testing import CliRunner

from brood.cli.main import cli


@pytest.fixture
def run(tmp_path):
    state = str(tmp_path / "state.json")
    runner = CliRunner()

    def _run(*args):
        return runner.invoke(cli, ["--state", state, *args])

    return _run


class TestLedgerCommands:
    def test_log_and_summary(self, run):
        assert run("ledger", "log", "x402_payment", "5000", "/v1/chat").exit_code == 0
        assert run("ledger", "log", "inference_cost", "1000", "gpt-4o").exit_code == 0

        result = run("ledger", "summary", "--balance", "10000")
        assert result.exit_code == 0
        assert "Revenue: $50.00" in result.output
        assert "Runway: infinite" in result.output

    def test_negative_amount_refused(self, run):
        result = run("ledger", "log", "--", "x402_payment", "-5", "/v1/chat")
        assert result.exit_code == 1
        assert "REFUSED" in result.output

    def test_unknown_type_rejected(self, run):
        assert run("ledger", "log", "gift", "5", "x").exit_code != 0


class TestSpawnCommand:
    def test_shadow_spawn(self, run):
        run("ledger", "log", "x402_payment", "5000", "/v1/chat")
        run("ledger", "log", "inference_cost", "1000", "gpt-4o")

        result = run("spawn", "--balance", "10000")
        assert result.exit_code == 0
        assert "Shadow mode" in result.output

    def test_denied(self, run):
        result = run("spawn", "--balance", "10000")
        assert result.exit_code == 0
        assert "Replication denied" in result.output

    def test_requires_balance(self, run):
        assert run("spawn").exit_code == 2


class TestFleetCommands:
    def test_children_empty(self, run):
        result = run("children")
        assert result.exit_code == 0
        assert "No children." in result.output

    def test_status_unknown(self, run):
        result = run("status", "ghost")
        assert result.exit_code == 1
        assert "Child not found: ghost" in result.output

    def test_record_unknown(self, run):
        assert run("record", "ghost", "--earned", "5").exit_code == 1

    def test_fund_unknown(self, run):
        assert run("fund", "ghost", "100", "--balance", "1000").exit_code == 1

    def test_report_empty(self, run):
        result = run("report")
        assert result.exit_code == 0
        assert "CHILD EVALUATION REPORT" in result.output

    def test_spawned_child_lifecycle(self, run, flags):
        flags(FEATURE_REPLICATION_ENABLED=True)
        run("ledger", "log", "x402_payment", "5000", "/v1/chat")
        run("ledger", "log", "inference_cost", "1000", "gpt-4o")
        assert run("spawn", "--balance", "10000", "--name", "kid").exit_code == 0

        listing = run("children")
        assert "kid" in listing.output
        child_id = next(
            line.split("│")[1].strip()
            for line in listing.output.splitlines()
            if "kid" in line
        )

        assert run("record", child_id, "--earned", "300", "--spent", "20").exit_code == 0
        status = run("status", child_id)
        assert status.exit_code == 0
        assert "Verdict: growing" in status.output


class TestHistoryCommands:
    def test_skill_and_turn(self, run):
        assert run("history", "skill", "web-search").exit_code == 0
        result = run("history", "turn", "exec", "fetch", "--failed", "deploy")
        assert result.exit_code == 0
        assert "Calls: 3" in result.output


class TestVersion:
    def test_version(self, run):
        result = run("--version")
        assert result.exit_code == 0
        assert "0.1.0" in result.output

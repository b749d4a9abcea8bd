"""Scenario: a fleet evaluated across several report passes.

A thriving child stays funded and is promoted; a failing child is warned
once, advised for defund on the second pass and, with auto-defund on,
marked dead. Dead children stay dead.
"""
import pytest

from brood.fleet.evaluate import Verdict
from brood.fleet.registry import ChildStatus
from brood.tools import replication_report, spawn_child


@pytest.fixture
def live_brood(brood, flags):
    flags(FEATURE_REPLICATION_ENABLED=True, FEATURE_AUTO_DEFUND_ENABLED=True)
    brood.ledger.log_event("x402_payment", 5000, "/v1/translate")
    brood.ledger.log_event("inference_cost", 1000, "gpt-4o")
    return brood


class TestFleetLifecycle:
    def test_spawn_then_evaluate(self, live_brood, make_child):
        spawn_child(live_brood, 10000)
        child = live_brood.registry.list_children()[0]

        result = live_brood.reporter.evaluate_child(child.id)
        assert result.verdict == Verdict.GROWING
        assert "SPECIALIZATION" in dict(map(tuple, child.genesis_sections))

    def test_second_child_avoids_first_niche(self, live_brood):
        spawn_child(live_brood, 10000)
        spawn_child(live_brood, 10000)
        first, second = live_brood.registry.list_children()
        assert "api-services" in first.name
        assert "api-services" not in second.name

    def test_thriving_and_failing(self, live_brood, make_child):
        star = make_child("star", hours_ago=48, funded=1000)
        lag = make_child("lag", hours_ago=30, funded=1000)
        live_brood.recorder.record(star.id, 200, 50)

        report = live_brood.reporter.generate_report()
        verdicts = {e.child_id: e for e in report.children}
        assert verdicts[star.id].verdict == Verdict.THRIVING
        assert verdicts[star.id].roi == 3.0
        assert verdicts[lag.id].verdict == Verdict.FAILING
        assert len(verdicts[lag.id].warnings) >= 1

    def test_defund_after_two_passes(self, live_brood, make_child):
        lag = make_child("lag", hours_ago=30)

        replication_report(live_brood)
        assert live_brood.registry.get_child(lag.id).status == ChildStatus.RUNNING
        assert live_brood.registry.get_warning_count(lag.id) == 1

        replication_report(live_brood)
        assert live_brood.registry.get_child(lag.id).status == ChildStatus.DEAD

    def test_dead_stays_dead(self, live_brood, make_child):
        lag = make_child("lag", hours_ago=30)
        replication_report(live_brood)
        replication_report(live_brood)
        live_brood.recorder.record(lag.id, 10000, 0)

        result = live_brood.reporter.evaluate_child(lag.id)
        assert result.verdict == Verdict.DEAD

    def test_recovery_between_passes(self, live_brood, make_child):
        lag = make_child("lag", hours_ago=30)
        replication_report(live_brood)
        live_brood.recorder.record(lag.id, 300, 100)
        replication_report(live_brood)
        live_brood.recorder.record(lag.id, 0, 10000)

        assert live_brood.registry.get_warning_count(lag.id) == 0
        assert live_brood.registry.get_child(lag.id).status == ChildStatus.RUNNING

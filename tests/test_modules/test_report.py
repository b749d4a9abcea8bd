"""Unit tests for strategy promotion and the fleet report."""
import pytest

from brood.core.receipt import ChildNotFound
from brood.core.sections import render_sections
from brood.fleet.evaluate import Verdict
from brood.fleet.promote import StrategyPromoter, specialization_of
from brood.fleet.registry import ChildPerformanceRecord, ChildStatus
from brood.fleet.report import FleetReporter, format_report

SPEC_BODY = "You are specialized in: research\nFocus your efforts on this area to maximize revenue."


@pytest.fixture
def reporter(registry, evaluator, clock):
    return FleetReporter(registry, evaluator, clock=clock)


@pytest.fixture
def fleet(registry, make_child):
    """A thriving researcher and a failing laggard."""
    star = make_child(
        "star", hours_ago=48, funded=1000,
        prompt=render_sections("base", [("SPECIALIZATION", SPEC_BODY)]),
    )
    laggard = make_child("laggard", hours_ago=30, funded=500)
    registry.set_performance(star.id, ChildPerformanceRecord(2000, 100))
    return star, laggard


class TestSpecializationOf:
    def test_structured_sections_preferred(self, make_child):
        child = make_child(
            prompt=render_sections("base", [("SPECIALIZATION", "from text")]),
            sections=[["SPECIALIZATION", "from sections"]],
        )
        assert specialization_of(child) == "from sections"

    def test_prompt_fallback(self, make_child):
        child = make_child(prompt=render_sections("base", [("SPECIALIZATION", SPEC_BODY)]))
        assert specialization_of(child) == SPEC_BODY

    def test_missing(self, make_child):
        assert specialization_of(make_child(prompt="plain")) is None


class TestPromoter:
    def test_only_thriving_with_section(self, fleet, reporter, make_child, registry):
        plain = make_child("plain", hours_ago=48)
        registry.set_performance(plain.id, ChildPerformanceRecord(900, 100))
        evaluated = [(c, reporter.evaluate_child(c.id)) for c in registry.list_children()]

        promotions = StrategyPromoter().identify(evaluated)
        assert [p.child_name for p in promotions] == ["star"]
        assert promotions[0].strategy == SPEC_BODY
        assert promotions[0].evidence == "ROI: 1900%, earned $20.00, verdict: thriving"


class TestFleetReporter:
    def test_empty_fleet(self, reporter):
        report = reporter.generate_report()
        assert report.children == []
        assert report.recommendations == [
            "No children spawned yet. Consider replication if profitable."]
        assert "No children to evaluate." in format_report(report)

    def test_totals(self, fleet, reporter):
        report = reporter.generate_report()
        assert report.total_funded_cents == 1500
        assert report.total_earned_cents == 2000
        assert report.total_roi == 0.33
        assert report.best_child.child_name == "star"
        assert report.worst_child.child_name == "laggard"

    def test_recommendations(self, fleet, reporter):
        star, laggard = fleet
        report = reporter.generate_report()
        assert report.recommendations == [
            f"Consider defunding laggard ({laggard.id}): Warning 1/2: No revenue after 30h",
            "Promote strategies from star: ROI: 1900%, earned $20.00, verdict: thriving",
        ]

    def test_second_pass_advises_defund(self, fleet, reporter):
        _, laggard = fleet
        reporter.generate_report()
        report = reporter.generate_report()
        assert report.defund_advice[laggard.id].defund is True
        assert report.recommendations[0].startswith(f"Defund laggard ({laggard.id})")

    def test_advisor_once_per_child(self, fleet, reporter, registry):
        _, laggard = fleet
        reporter.generate_report()
        assert registry.get_warning_count(laggard.id) == 1

    def test_dead_excluded_from_best_worst(self, registry, reporter, make_child):
        make_child("ghost", hours_ago=48, status=ChildStatus.DEAD)
        report = reporter.generate_report()
        assert report.children[0].verdict == Verdict.DEAD
        assert report.best_child is None and report.worst_child is None

    def test_apply_defunds(self, fleet, reporter, registry):
        _, laggard = fleet
        reporter.generate_report()
        defunded = reporter.apply_defunds(reporter.generate_report())
        assert defunded == [laggard.id]
        assert registry.get_child(laggard.id).status == ChildStatus.DEAD

    def test_evaluate_child_unknown(self, reporter):
        with pytest.raises(ChildNotFound):
            reporter.evaluate_child("ghost")

    def test_format(self, fleet, reporter):
        text = format_report(reporter.generate_report())
        assert "CHILD EVALUATION REPORT" in text
        assert "Total Funded: $15.00" in text
        assert "Overall ROI: 33%" in text
        assert "[THRIVING] star" in text
        assert "Warnings: No revenue after 30h" in text
        assert "-- Recommendations --" in text

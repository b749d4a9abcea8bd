"""Unit tests for the revenue ledger.

Functions tested: log_event, P&L, top sources, cost breakdown, project_runway
"""
import math

import pytest

from brood.core.receipt import StopRule, to_ts
from brood.ledger import revenue as revenue_module
from brood.ledger.revenue import calculate_pnl, category_for_type, profitability_ratio

from conftest import HOUR, NOW


class TestCategories:
    def test_income_and_expense(self):
        assert category_for_type("x402_payment") == "income"
        assert category_for_type("inference_cost") == "expense"

    def test_unknown_type_raises(self):
        with pytest.raises(StopRule):
            category_for_type("gift")


class TestProfitabilityRatio:
    """Division by zero never raises."""

    def test_ratio(self):
        assert profitability_ratio(500, 1000) == 0.5

    def test_only_revenue_is_inf(self):
        assert profitability_ratio(100, 0) == math.inf

    def test_nothing_is_zero(self):
        assert profitability_ratio(0, 0) == 0.0


class TestLogEvent:
    """Tests for writing events."""

    def test_categorised_on_insert(self, ledger):
        event = ledger.log_event("service_payment", 300, "consulting")
        assert event.category == "income"
        assert event.timestamp == to_ts(NOW)

    def test_negative_amount_raises(self, ledger):
        with pytest.raises(StopRule):
            ledger.log_event("x402_payment", -1, "/v1/x")

    def test_unknown_type_raises(self, ledger):
        with pytest.raises(StopRule):
            ledger.log_event("mystery", 1, "x")

    def test_capped_oldest_dropped(self, ledger, monkeypatch):
        """Event log keeps only the newest MAX_REVENUE_EVENTS."""
        monkeypatch.setattr(revenue_module, "MAX_REVENUE_EVENTS", 3)
        for i in range(5):
            ledger.log_event("x402_payment", 100, f"route-{i}")

        sources = [e.source for e in ledger.events()]
        assert sources == ["route-2", "route-3", "route-4"]

    def test_x402_and_inference_helpers(self, ledger):
        ledger.log_x402_payment(250, "/v1/summarize")
        ledger.log_inference_cost(40, "gpt-4o", "t1")

        events = ledger.events()
        assert events[0].type == "x402_payment"
        assert events[1].id == "inf-t1"


class TestPnL:
    """Tests for P&L reports."""

    def test_all_time(self, profitable):
        pnl = profitable.get_all_time_pnl()
        assert pnl.total_revenue_cents == 5000
        assert pnl.total_expense_cents == 1000
        assert pnl.net_pnl_cents == 4000
        assert pnl.profitability_ratio == 5.0
        assert pnl.event_count == 2

    def test_ratio_rounded(self, ledger):
        ledger.log_event("x402_payment", 1000, "a")
        ledger.log_event("inference_cost", 300, "b")
        assert ledger.get_all_time_pnl().profitability_ratio == 3.33

    def test_daily_excludes_old_events(self, ledger):
        ledger.log_event("x402_payment", 100, "old", timestamp=to_ts(NOW - 30 * HOUR))
        ledger.log_event("x402_payment", 200, "new")

        assert ledger.get_daily_pnl().total_revenue_cents == 200
        assert ledger.get_weekly_pnl().total_revenue_cents == 300

    def test_calculate_pnl_empty(self):
        pnl = calculate_pnl([], "all-time")
        assert pnl.profitability_ratio == 0.0
        assert pnl.event_count == 0

    def test_malformed_store_reads_as_no_data(self, store, ledger):
        store.set("revenue_events", "{oops")
        assert ledger.get_all_time_pnl().event_count == 0

    def test_unreadable_timestamp_skipped(self, store, ledger):
        """Events whose timestamp cannot be parsed read as no data."""
        store.set_json("revenue_events", [{
            "id": "evt-bad", "type": "x402_payment", "category": "income",
            "amount_cents": 999, "source": "a", "description": "",
            "timestamp": "yesterday-ish",
        }])
        ledger.log_event("x402_payment", 200, "b")

        assert ledger.get_daily_pnl().total_revenue_cents == 200
        assert ledger.project_runway(1000).runway_hours is None
        assert [e.source for e in ledger.events()] == ["b"]
        assert store.get_json("revenue_events")[0]["id"] == "evt-bad"


class TestSources:
    def test_top_sources_ranked(self, ledger):
        ledger.log_event("x402_payment", 100, "a")
        ledger.log_event("x402_payment", 500, "b")
        ledger.log_event("x402_payment", 200, "a")
        ledger.log_event("inference_cost", 9999, "gpt-4o")

        top = ledger.get_top_revenue_sources(2)
        assert [(s.source, s.amount_cents) for s in top] == [("b", 500), ("a", 300)]

    def test_cost_breakdown(self, ledger):
        ledger.log_event("inference_cost", 100, "gpt-4o")
        ledger.log_event("domain_purchase", 900, "example.com")
        ledger.log_event("inference_cost", 50, "gpt-4o-mini")

        breakdown = ledger.get_cost_breakdown()
        assert [(s.source, s.amount_cents) for s in breakdown] == [
            ("domain_purchase", 900), ("inference_cost", 150)]


class TestRunway:
    """Tests for runway projection."""

    def test_fewer_than_two_events_is_infinite(self, ledger):
        ledger.log_event("inference_cost", 100, "gpt-4o")
        assert ledger.project_runway(1000).runway_hours is None

    def test_tiny_span_is_infinite(self, ledger):
        ledger.log_event("inference_cost", 100, "gpt-4o")
        ledger.log_event("inference_cost", 100, "gpt-4o")
        assert ledger.project_runway(1000).runway_hours is None

    def test_profitable_is_infinite(self, ledger):
        ledger.log_event("x402_payment", 1000, "a", timestamp=to_ts(NOW - 10 * HOUR))
        ledger.log_event("inference_cost", 100, "gpt-4o")
        runway = ledger.project_runway(1000)
        assert runway.runway_hours is None
        assert runway.net_burn_per_hour_cents < 0

    def test_burning(self, ledger):
        """Net burn of 100c/h over 10h gives balance/100 hours."""
        ledger.log_event("x402_payment", 100, "a", timestamp=to_ts(NOW - 10 * HOUR))
        ledger.log_event("inference_cost", 1100, "gpt-4o")

        runway = ledger.project_runway(4500)
        assert runway.net_burn_per_hour_cents == 100.0
        assert runway.runway_hours == 45.0
        assert runway.runway_days == 1.9

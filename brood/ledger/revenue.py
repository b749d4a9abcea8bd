"""Revenue ledger - income/expense events, P&L and runway projection.

This is the read-only P&L/runway oracle the replication engine consults:
    get_all_time_pnl()            lifetime revenue vs expenses
    get_top_revenue_sources(n)    highest-earning sources
    project_runway(balance)       hours until balance hits zero at current net burn

Events live in the KVStore under a single key, capped at MAX_REVENUE_EVENTS
(oldest dropped first).
"""
import time
import uuid
from dataclasses import asdict, dataclass
from typing import Callable

from brood.core.constants import MAX_REVENUE_EVENTS, RUNWAY_MIN_SPAN_HOURS
from brood.core.receipt import StopRule, emit_receipt, parse_ts, to_ts

from .store import KVStore

REVENUE_EVENTS_KEY = "revenue_events"

INCOME_TYPES = frozenset({
    "x402_payment",
    "credit_transfer_in",
    "service_payment",
    "other_income",
})

EXPENSE_TYPES = frozenset({
    "inference_cost",
    "credit_transfer_out",
    "domain_purchase",
    "other_expense",
})


@dataclass
class RevenueEvent:
    """A single income or expense entry."""
    id: str
    type: str
    category: str  # "income" | "expense"
    amount_cents: int
    source: str
    description: str
    timestamp: str


@dataclass
class PnLReport:
    """Profit and loss over a period."""
    period: str
    total_revenue_cents: int
    total_expense_cents: int
    net_pnl_cents: int
    profitability_ratio: float
    event_count: int


@dataclass
class RevenueSource:
    """Aggregated income for one source label."""
    source: str
    amount_cents: int


@dataclass
class RunwayProjection:
    """Runway at the current net burn. runway_hours None means infinite."""
    runway_hours: float | None
    runway_days: float | None
    net_burn_per_hour_cents: float


def category_for_type(event_type: str) -> str:
    """Map an event type to 'income' or 'expense'."""
    if event_type in INCOME_TYPES:
        return "income"
    if event_type in EXPENSE_TYPES:
        return "expense"
    raise StopRule(f"Unknown revenue event type: {event_type}")


def profitability_ratio(revenue_cents: float, expense_cents: float) -> float:
    """Revenue over expenses; inf when only revenue, 0 when neither."""
    if expense_cents > 0:
        return revenue_cents / expense_cents
    return float("inf") if revenue_cents > 0 else 0.0


def calculate_pnl(events: list[RevenueEvent], period: str) -> PnLReport:
    """Summarize events into a PnLReport."""
    revenue = sum(e.amount_cents for e in events if e.category == "income")
    expenses = sum(e.amount_cents for e in events if e.category == "expense")
    ratio = profitability_ratio(revenue, expenses)

    return PnLReport(
        period=period,
        total_revenue_cents=revenue,
        total_expense_cents=expenses,
        net_pnl_cents=revenue - expenses,
        profitability_ratio=round(ratio, 2) if ratio != float("inf") else ratio,
        event_count=len(events),
    )


class RevenueLedger:
    """Store-backed revenue/expense event log."""

    def __init__(self, store: KVStore, clock: Callable[[], float] = time.time):
        self.store = store
        self.clock = clock

    # -- write path ---------------------------------------------------------

    def log_event(
        self,
        event_type: str,
        amount_cents: int,
        source: str,
        description: str = "",
        event_id: str | None = None,
        timestamp: str | None = None,
        tenant_id: str = "default",
    ) -> RevenueEvent:
        """Append an income or expense event.

        Raises:
            StopRule: negative amount or unknown event type
        """
        if amount_cents < 0:
            raise StopRule(f"Revenue event amount must be >= 0, got {amount_cents}")

        event = RevenueEvent(
            id=event_id or f"evt-{uuid.uuid4().hex[:12]}",
            type=event_type,
            category=category_for_type(event_type),
            amount_cents=int(amount_cents),
            source=source,
            description=description,
            timestamp=timestamp or to_ts(self.clock()),
        )

        rows = self.store.get_json(REVENUE_EVENTS_KEY, default=[])
        if not isinstance(rows, list):
            rows = []
        rows.append(asdict(event))
        self.store.set_json(REVENUE_EVENTS_KEY, rows[-MAX_REVENUE_EVENTS:])

        emit_receipt("revenue_event", {
            "tenant_id": tenant_id,
            "event_id": event.id,
            "event_type": event.type,
            "category": event.category,
            "amount_cents": event.amount_cents,
            "source": event.source,
        })

        return event

    def log_x402_payment(self, amount_cents: int, route: str) -> RevenueEvent:
        """Record an x402 payment received on route."""
        return self.log_event(
            "x402_payment", amount_cents, route,
            description=f"x402 payment received on {route}",
        )

    def log_inference_cost(self, cost_cents: int, model: str, turn_id: str) -> RevenueEvent:
        """Record the inference cost of one agent turn."""
        return self.log_event(
            "inference_cost", cost_cents, model,
            description=f"Inference cost for turn {turn_id}",
            event_id=f"inf-{turn_id}",
        )

    # -- oracle -------------------------------------------------------------

    def events(self) -> list[RevenueEvent]:
        """All stored events, oldest first."""
        return self._events()

    def get_all_time_pnl(self) -> PnLReport:
        return calculate_pnl(self._events(), "all-time")

    def get_daily_pnl(self) -> PnLReport:
        return calculate_pnl(self._since(24), "daily")

    def get_weekly_pnl(self) -> PnLReport:
        return calculate_pnl(self._since(24 * 7), "weekly")

    def get_top_revenue_sources(self, limit: int = 5) -> list[RevenueSource]:
        """Income summed by source, highest first."""
        by_source: dict[str, int] = {}
        for e in self._events():
            if e.category == "income":
                by_source[e.source] = by_source.get(e.source, 0) + e.amount_cents

        ranked = sorted(by_source.items(), key=lambda kv: kv[1], reverse=True)
        return [RevenueSource(source=s, amount_cents=a) for s, a in ranked[:limit]]

    def get_cost_breakdown(self) -> list[RevenueSource]:
        """Expenses summed by event type, highest first."""
        by_type: dict[str, int] = {}
        for e in self._events():
            if e.category == "expense":
                by_type[e.type] = by_type.get(e.type, 0) + e.amount_cents

        ranked = sorted(by_type.items(), key=lambda kv: kv[1], reverse=True)
        return [RevenueSource(source=t, amount_cents=a) for t, a in ranked]

    def project_runway(self, balance_cents: float) -> RunwayProjection:
        """Project runway from the net burn over the span of recorded events.

        Fewer than 2 events, a span under RUNWAY_MIN_SPAN_HOURS, or a
        non-positive burn all mean infinite runway (runway_hours None).
        """
        events = self._events()
        if len(events) < 2:
            return RunwayProjection(None, None, 0.0)

        stamps = sorted(parse_ts(e.timestamp) for e in events)
        hours_span = (stamps[-1] - stamps[0]) / 3600
        if hours_span < RUNWAY_MIN_SPAN_HOURS:
            return RunwayProjection(None, None, 0.0)

        revenue = sum(e.amount_cents for e in events if e.category == "income")
        expenses = sum(e.amount_cents for e in events if e.category == "expense")
        net_burn = (expenses - revenue) / hours_span

        if net_burn <= 0:
            # Profitable or break-even
            return RunwayProjection(None, None, net_burn)

        runway_hours = round(balance_cents / net_burn, 1)
        return RunwayProjection(
            runway_hours=runway_hours,
            runway_days=round(runway_hours / 24, 1),
            net_burn_per_hour_cents=round(net_burn, 2),
        )

    # -- internals ----------------------------------------------------------

    def _events(self) -> list[RevenueEvent]:
        raw = self.store.get_json(REVENUE_EVENTS_KEY, default=[])
        events = []
        if not isinstance(raw, list):
            return events
        for item in raw:
            try:
                event = RevenueEvent(**item)
                parse_ts(event.timestamp)
            except (AttributeError, TypeError, ValueError):
                continue  # malformed row reads as no data
            events.append(event)
        return events

    def _since(self, hours: float) -> list[RevenueEvent]:
        cutoff = self.clock() - hours * 3600
        return [e for e in self._events() if parse_ts(e.timestamp) >= cutoff]

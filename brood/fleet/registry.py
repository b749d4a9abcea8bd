"""Child Registry - Track every spawned child and its bookkeeping.

One row per child, created at spawn time and never deleted (only marked
dead). Alongside each row the registry keeps two per-child counters:
    child_perf_<id>   cumulative earned/spent (ChildPerformanceRecord)
    child_warn_<id>   consecutive failing evaluations (defund hysteresis)

All state lives in the injected KVStore.
"""
import time
from dataclasses import asdict, dataclass, field
from enum import Enum

from brood.core.receipt import ChildNotFound, StopRule, emit_receipt, parse_ts, utc_now
from brood.ledger.store import KVStore

CHILDREN_KEY = "children"
PERFORMANCE_PREFIX = "child_perf_"
WARNING_PREFIX = "child_warn_"


class ChildStatus(Enum):
    """Child lifecycle states as reported by the liveness monitor."""
    SPAWNING = "spawning"
    RUNNING = "running"
    DEAD = "dead"


@dataclass
class ChildAutomaton:
    """A spawned child automaton."""
    id: str
    name: str
    address: str
    sandbox_id: str
    genesis_prompt: str
    funded_amount_cents: int = 0
    status: ChildStatus = ChildStatus.SPAWNING
    created_at: str = field(default_factory=utc_now)
    last_checked: str | None = None
    creator_message: str | None = None
    genesis_sections: list[list[str]] | None = None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["status"] = self.status.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ChildAutomaton":
        data = dict(data)
        data["status"] = ChildStatus(data.get("status", "spawning"))
        return cls(**data)


@dataclass
class ChildPerformanceRecord:
    """Cumulative earned/spent for one child. Only ever added to."""
    earned_cents: int = 0
    spent_cents: int = 0
    updates: int = 0
    last_update: str | None = None

    @classmethod
    def from_dict(cls, data) -> "ChildPerformanceRecord":
        """Build from stored JSON; anything malformed reads as zeros."""
        if not isinstance(data, dict):
            return cls()
        try:
            return cls(
                earned_cents=int(data.get("earned_cents", 0)),
                spent_cents=int(data.get("spent_cents", 0)),
                updates=int(data.get("updates", 0)),
                last_update=data.get("last_update"),
            )
        except (TypeError, ValueError):
            return cls()


class ChildRegistry:
    """Store-backed registry of children, performance and warning counters."""

    def __init__(self, store: KVStore):
        self.store = store

    # -- children -----------------------------------------------------------

    def list_children(self) -> list[ChildAutomaton]:
        """All children in insertion order. Unreadable rows are skipped."""
        children = []
        for row in self._rows():
            child = _parse_row(row)
            if child is not None:
                children.append(child)
        return children

    def living_children(self) -> list[ChildAutomaton]:
        return [c for c in self.list_children() if c.status != ChildStatus.DEAD]

    def get_child(self, child_id: str) -> ChildAutomaton | None:
        for child in self.list_children():
            if child.id == child_id:
                return child
        return None

    def require_child(self, child_id: str) -> ChildAutomaton:
        """Return the child or raise ChildNotFound."""
        child = self.get_child(child_id)
        if child is None:
            raise ChildNotFound(child_id)
        return child

    def insert_child(self, child: ChildAutomaton, tenant_id: str = "default") -> dict:
        """Add a child row. Returns the registration receipt.

        Raises:
            StopRule: a child with the same id already exists
        """
        rows = self._rows()
        if any(isinstance(r, dict) and r.get("id") == child.id for r in rows):
            raise StopRule(f"Child already registered: {child.id}")

        rows.append(child.to_dict())
        self.store.set_json(CHILDREN_KEY, rows)

        return emit_receipt("child_registered", {
            "tenant_id": tenant_id,
            "child_id": child.id,
            "name": child.name,
            "sandbox_id": child.sandbox_id,
            "funded_amount_cents": child.funded_amount_cents,
            "status": child.status.value,
        })

    def update_status(
        self,
        child_id: str,
        status: ChildStatus,
        reason: str = "",
        tenant_id: str = "default",
    ) -> ChildAutomaton:
        """Set a child's status and stamp last_checked."""
        previous = self.require_child(child_id).status

        def _apply(child):
            child.status = status
            child.last_checked = utc_now()

        child = self._update(child_id, _apply)
        emit_receipt("child_status_change", {
            "tenant_id": tenant_id,
            "child_id": child_id,
            "old_status": previous.value,
            "new_status": status.value,
            "reason": reason,
        })
        return child

    def add_funding(self, child_id: str, amount_cents: int) -> ChildAutomaton:
        """Increase a child's funded amount."""
        if amount_cents < 0:
            raise StopRule(f"Funding amount must be >= 0, got {amount_cents}")

        def _apply(child):
            child.funded_amount_cents += int(amount_cents)

        return self._update(child_id, _apply)

    # -- performance --------------------------------------------------------

    def get_performance(self, child_id: str) -> ChildPerformanceRecord:
        raw = self.store.get_json(f"{PERFORMANCE_PREFIX}{child_id}")
        return ChildPerformanceRecord.from_dict(raw)

    def set_performance(self, child_id: str, record: ChildPerformanceRecord) -> None:
        self.store.set_json(f"{PERFORMANCE_PREFIX}{child_id}", asdict(record))

    # -- defund warnings ----------------------------------------------------

    def get_warning_count(self, child_id: str) -> int:
        raw = self.store.get_json(f"{WARNING_PREFIX}{child_id}")
        if isinstance(raw, dict):
            raw = raw.get("warning_count")
        try:
            return max(0, int(raw))
        except (TypeError, ValueError):
            return 0

    def set_warning_count(self, child_id: str, count: int) -> None:
        self.store.set_json(f"{WARNING_PREFIX}{child_id}", {"warning_count": int(count)})

    # -- internals ----------------------------------------------------------

    def _rows(self) -> list:
        # Raw stored rows; writes go through this list so unreadable rows survive
        rows = self.store.get_json(CHILDREN_KEY, default=[])
        return rows if isinstance(rows, list) else []

    def _update(self, child_id: str, apply) -> ChildAutomaton:
        rows = self._rows()
        for i, row in enumerate(rows):
            child = _parse_row(row)
            if child is not None and child.id == child_id:
                apply(child)
                rows[i] = child.to_dict()
                self.store.set_json(CHILDREN_KEY, rows)
                return child
        raise ChildNotFound(child_id)


def _parse_row(row) -> ChildAutomaton | None:
    if not isinstance(row, dict):
        return None
    try:
        return ChildAutomaton.from_dict(row)
    except (TypeError, ValueError):
        return None


def hours_since(ts: str, now: float | None = None) -> float:
    """Hours elapsed since an ISO timestamp."""
    now = time.time() if now is None else now
    return (now - parse_ts(ts)) / 3600

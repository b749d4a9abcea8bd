"""Child performance bookkeeping - additive earned/spent counters."""
import time
from typing import Callable

from brood.core.receipt import StopRule, emit_receipt, to_ts

from .registry import ChildPerformanceRecord, ChildRegistry


class PerformanceRecorder:
    """Adds reported earnings and spend to a child's cumulative record."""

    def __init__(self, registry: ChildRegistry, clock: Callable[[], float] = time.time):
        self.registry = registry
        self.clock = clock

    def record(
        self,
        child_id: str,
        earned_cents: int,
        spent_cents: int,
        tenant_id: str = "default",
    ) -> ChildPerformanceRecord:
        """Add to the child's record, creating it at zero when absent.

        Raises:
            ChildNotFound: unknown child id
            StopRule: negative amounts
        """
        self.registry.require_child(child_id)
        if earned_cents < 0 or spent_cents < 0:
            raise StopRule(
                f"Performance amounts must be >= 0, got earned={earned_cents} spent={spent_cents}")

        record = self.registry.get_performance(child_id)
        record.earned_cents += int(earned_cents)
        record.spent_cents += int(spent_cents)
        record.updates += 1
        record.last_update = to_ts(self.clock())
        self.registry.set_performance(child_id, record)

        emit_receipt("performance_record", {
            "tenant_id": tenant_id,
            "child_id": child_id,
            "earned_delta_cents": int(earned_cents),
            "spent_delta_cents": int(spent_cents),
            "earned_cents": record.earned_cents,
            "spent_cents": record.spent_cents,
            "updates": record.updates,
        })

        return record

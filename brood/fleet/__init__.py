"""Fleet module - evaluate, defund and promote spawned children."""
from .registry import (
    ChildAutomaton,
    ChildPerformanceRecord,
    ChildRegistry,
    ChildStatus,
    hours_since,
)
from .performance import PerformanceRecorder
from .evaluate import ChildEvaluation, ChildEvaluator, Verdict, child_roi
from .defund import DefundAdvice, DefundAdvisor
from .promote import PromotableStrategy, StrategyPromoter
from .report import FleetReport, FleetReporter, format_report

__all__ = [
    "ChildAutomaton",
    "ChildPerformanceRecord",
    "ChildRegistry",
    "ChildStatus",
    "hours_since",
    "PerformanceRecorder",
    "ChildEvaluation",
    "ChildEvaluator",
    "Verdict",
    "child_roi",
    "DefundAdvice",
    "DefundAdvisor",
    "PromotableStrategy",
    "StrategyPromoter",
    "FleetReport",
    "FleetReporter",
    "format_report",
]

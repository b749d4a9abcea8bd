"""Brood: replication and fleet control for self-funding agents."""
__version__ = "0.1.0"

from brood.core import ChildNotFound, StopRule, emit_receipt
from brood.fleet import (
    ChildEvaluator,
    ChildRegistry,
    DefundAdvisor,
    FleetReporter,
    PerformanceRecorder,
    StrategyPromoter,
)
from brood.ledger import KVStore, RevenueLedger
from brood.replication import (
    GenesisBuilder,
    ReplicationDecision,
    SkillHistory,
    StrategyEngine,
)

__all__ = [
    "__version__",
    "StopRule",
    "ChildNotFound",
    "emit_receipt",
    "KVStore",
    "RevenueLedger",
    "ChildRegistry",
    "SkillHistory",
    "StrategyEngine",
    "ReplicationDecision",
    "GenesisBuilder",
    "ChildEvaluator",
    "DefundAdvisor",
    "PerformanceRecorder",
    "StrategyPromoter",
    "FleetReporter",
]

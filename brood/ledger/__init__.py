"""Ledger module - state store and revenue oracle."""
from .revenue import (
    PnLReport,
    RevenueEvent,
    RevenueLedger,
    RevenueSource,
    RunwayProjection,
    calculate_pnl,
    category_for_type,
    profitability_ratio,
)
from .store import KVStore

__all__ = [
    "KVStore",
    "RevenueLedger",
    "RevenueEvent",
    "RevenueSource",
    "RunwayProjection",
    "PnLReport",
    "calculate_pnl",
    "category_for_type",
    "profitability_ratio",
]

"""Core subpackage for Brood receipt primitives.

Exports all from receipt.py and constants.py.
"""
from .receipt import (
    ChildNotFound,
    StopRule,
    cents,
    dual_hash,
    emit_receipt,
    parse_ts,
    to_ts,
    utc_now,
)
from .constants import (
    MAX_FUNDING_RATIO,
    MIN_BALANCE_FOR_REPLICATION,
    MIN_PROFITABILITY_RATIO,
    MIN_RUNWAY_HOURS_AFTER_SPAWN,
    FAILING_AGE_HOURS,
    THRIVING_ROI,
    DEFUND_WARNING_COUNT,
)

__all__ = [
    # Receipt primitives
    "dual_hash",
    "emit_receipt",
    "utc_now",
    "to_ts",
    "parse_ts",
    "cents",
    "StopRule",
    "ChildNotFound",
    # Constants
    "MAX_FUNDING_RATIO",
    "MIN_BALANCE_FOR_REPLICATION",
    "MIN_PROFITABILITY_RATIO",
    "MIN_RUNWAY_HOURS_AFTER_SPAWN",
    "FAILING_AGE_HOURS",
    "THRIVING_ROI",
    "DEFUND_WARNING_COUNT",
]

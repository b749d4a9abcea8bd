"""Core receipt primitives required in every Brood module.

Functions:
    dual_hash: SHA256:BLAKE3 dual-hash format
    emit_receipt: Emit receipt with required fields to stdout
    utc_now: Current UTC timestamp in receipt format
    parse_ts: Parse a receipt-format timestamp
    StopRule: Exception for stoprule triggers
    ChildNotFound: StopRule for unknown child ids
"""
import hashlib
import json
import math
from datetime import datetime, timezone

import blake3


class StopRule(Exception):
    """Raised when stoprule triggers. Never catch silently."""
    pass


class ChildNotFound(StopRule):
    """Raised when a child id is not in the registry."""

    def __init__(self, child_id: str):
        super().__init__(f"Child not found: {child_id}")
        self.child_id = child_id


def dual_hash(data: bytes | str | dict) -> str:
    """Compute dual hash in format 'sha256hex:blake3hex'.

    Pure function with no side effects.

    Args:
        data: Bytes, string, or dict to hash

    Returns:
        String in format 'sha256hex:blake3hex' (both 64 hex chars)
    """
    if isinstance(data, dict):
        data = json.dumps(data, sort_keys=True, separators=(",", ":"), default=_json_default)
    if isinstance(data, str):
        data = data.encode("utf-8")

    sha256_hex = hashlib.sha256(data).hexdigest()
    blake3_hex = blake3.blake3(data).hexdigest()

    return f"{sha256_hex}:{blake3_hex}"


def _json_default(value):
    # Enums and dataclass-like objects end up in payloads
    if hasattr(value, "value"):
        return value.value
    if hasattr(value, "to_dict"):
        return value.to_dict()
    return str(value)


def _finite(value):
    """Replace inf/nan floats so receipts stay valid JSON."""
    if isinstance(value, float) and not math.isfinite(value):
        return "inf" if value > 0 else ("-inf" if value < 0 else "nan")
    if isinstance(value, dict):
        return {k: _finite(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_finite(v) for v in value]
    return value


def emit_receipt(receipt_type: str, data: dict, tenant_id: str = "default") -> dict:
    """Emit a receipt with standard required fields.

    Prints JSON to stdout with flush=True.

    Args:
        receipt_type: Type of receipt (replication_decision, child_evaluation, ...)
        data: Receipt payload data
        tenant_id: Tenant identifier (default: "default")

    Returns:
        Complete receipt dict with receipt_type, ts, tenant_id, payload_hash
    """
    tenant_id = data.get("tenant_id", tenant_id)
    data = _finite(data)

    payload_bytes = json.dumps(data, sort_keys=True, default=_json_default).encode("utf-8")
    payload_hash = dual_hash(payload_bytes)

    receipt = {
        "receipt_type": receipt_type,
        "ts": utc_now(),
        "tenant_id": tenant_id,
        "payload_hash": payload_hash,
        **data
    }

    print(json.dumps(receipt, sort_keys=True, default=_json_default), flush=True)

    return receipt


def utc_now() -> str:
    """Current UTC time as ISO-8601 with a Z suffix."""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def to_ts(epoch_seconds: float) -> str:
    """Format epoch seconds in receipt timestamp format."""
    dt = datetime.fromtimestamp(epoch_seconds, tz=timezone.utc)
    return dt.isoformat().replace("+00:00", "Z")


def parse_ts(ts: str) -> float:
    """Parse an ISO-8601 timestamp (Z or offset) into epoch seconds.

    Naive timestamps are taken as UTC.
    """
    dt = datetime.fromisoformat(ts.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.timestamp()


def cents(amount_cents: float) -> str:
    """Render cents as a dollar string, e.g. 1234 -> '$12.34'."""
    return f"${amount_cents / 100:.2f}"

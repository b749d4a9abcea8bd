"""Test configuration and fixtures.

Clock: every component runs against a fixed NOW
Store: fresh in-memory KVStore per test
Factories: make_child registers children of a given age
"""
import pytest

from brood.config import features as feature_flags
from brood.config.policy import EvaluationPolicy, ParentProfile, ReplicationPolicy
from brood.core.receipt import to_ts
from brood.fleet.evaluate import ChildEvaluator
from brood.fleet.registry import ChildAutomaton, ChildRegistry, ChildStatus
from brood.ledger.revenue import RevenueLedger
from brood.ledger.store import KVStore
from brood.replication.inheritance import SkillHistory
from brood.replication.mutation import LinearCongruential
from brood.tools import Brood

NOW = 1_760_000_000.0
HOUR = 3600


class SequenceRng:
    """Entropy source that replays a fixed list of draws."""

    def __init__(self, values):
        self.values = list(values)

    def random(self) -> float:
        return self.values.pop(0)


@pytest.fixture
def clock():
    """Fixed clock at NOW."""
    return lambda: NOW


@pytest.fixture
def store() -> KVStore:
    """Fresh in-memory store."""
    return KVStore()


@pytest.fixture
def ledger(store, clock) -> RevenueLedger:
    return RevenueLedger(store, clock=clock)


@pytest.fixture
def registry(store) -> ChildRegistry:
    return ChildRegistry(store)


@pytest.fixture
def skills(store) -> SkillHistory:
    return SkillHistory(store)


@pytest.fixture
def parent() -> ParentProfile:
    return ParentProfile(
        name="parent",
        address="0xparent",
        genesis_prompt="You are the parent agent.",
        inference_model="gpt-4o",
    )


@pytest.fixture
def evaluator(clock) -> ChildEvaluator:
    return ChildEvaluator(EvaluationPolicy(), clock=clock)


@pytest.fixture
def replication_policy() -> ReplicationPolicy:
    return ReplicationPolicy()


@pytest.fixture
def make_child(registry):
    """Register a child created hours_ago before NOW."""
    counter = {"n": 0}

    def _make(
        name: str = "child",
        hours_ago: float = 0,
        funded: int = 1000,
        status: ChildStatus = ChildStatus.RUNNING,
        prompt: str = "You are a child agent.",
        sections=None,
    ) -> ChildAutomaton:
        counter["n"] += 1
        child = ChildAutomaton(
            id=f"child-{counter['n']}",
            name=name,
            address=f"0xchild{counter['n']}",
            sandbox_id=f"sandbox-{counter['n']}",
            genesis_prompt=prompt,
            funded_amount_cents=funded,
            status=status,
            created_at=to_ts(NOW - hours_ago * HOUR),
            genesis_sections=sections,
        )
        registry.insert_child(child)
        return child

    return _make


@pytest.fixture
def profitable(ledger) -> RevenueLedger:
    """Ledger with $50.00 revenue against $10.00 expenses."""
    ledger.log_event("x402_payment", 5000, "/v1/translate")
    ledger.log_event("inference_cost", 1000, "gpt-4o")
    return ledger


@pytest.fixture
def brood(store, parent, clock) -> Brood:
    """Fully wired Brood over the shared store with a seeded rng."""
    return Brood(store, parent=parent, clock=clock, rng=LinearCongruential(7))


@pytest.fixture
def flags(monkeypatch):
    """Toggle feature flags for one test."""
    def _set(**values):
        for name, value in values.items():
            monkeypatch.setattr(feature_flags, name, value)
    return _set

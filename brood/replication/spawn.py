"""Spawner - turn a GenesisConfig and funding into a registered child.

Provisioning (sandbox, wallet, transfers) lives outside this package. The
shipped RegistrySpawner only records the child, in status "spawning",
so the fleet engine can track it from the first evaluation on.
"""
import time
import uuid
from typing import Callable, Protocol

from brood.core.receipt import StopRule, emit_receipt, to_ts
from brood.fleet.registry import ChildAutomaton, ChildRegistry, ChildStatus

from .genesis import GenesisConfig


class Spawner(Protocol):
    def spawn(self, genesis: GenesisConfig, funding_cents: int) -> ChildAutomaton:
        ...


class RegistrySpawner:
    """Record-only spawner: writes the child row, provisions nothing."""

    def __init__(self, registry: ChildRegistry, clock: Callable[[], float] = time.time):
        self.registry = registry
        self.clock = clock

    def spawn(
        self,
        genesis: GenesisConfig,
        funding_cents: int,
        tenant_id: str = "default",
    ) -> ChildAutomaton:
        """Register a new child for the genesis config.

        Raises:
            StopRule: negative funding
        """
        if funding_cents < 0:
            raise StopRule(f"Funding must be >= 0, got {funding_cents}")

        child_id = f"child-{uuid.uuid4().hex[:12]}"
        child = ChildAutomaton(
            id=child_id,
            name=genesis.name,
            address=f"pending:{child_id}",
            sandbox_id="unprovisioned",
            genesis_prompt=genesis.genesis_prompt,
            funded_amount_cents=int(funding_cents),
            status=ChildStatus.SPAWNING,
            created_at=to_ts(self.clock()),
            creator_message=genesis.creator_message,
            genesis_sections=[[name, body] for name, body in genesis.sections],
        )

        self.registry.insert_child(child, tenant_id)

        emit_receipt("spawn", {
            "tenant_id": tenant_id,
            "child_id": child.id,
            "name": child.name,
            "funding_cents": child.funded_amount_cents,
            "parent_address": genesis.parent_address,
        })

        return child

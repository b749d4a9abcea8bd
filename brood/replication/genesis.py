"""Genesis synthesis - the child's founding prompt.

The prompt is the parent's genesis prompt followed by delimited sections:

    --- NAME ---
    body
    --- END NAME ---

in the fixed order SPECIALIZATION, INHERITED KNOWLEDGE, PARENT STRATEGIES,
MUTATIONS, LINEAGE. Empty sections are omitted; LINEAGE is always present.
Sections are kept as structured (name, body) pairs alongside the text so
readers never have to parse the prompt back.
"""
from dataclasses import dataclass, field

from brood.config.policy import ParentProfile
from brood.core.receipt import emit_receipt
from brood.core.sections import render_sections

from .inheritance import Inheritance, build_inheritance
from .mutation import MutationSet
from .strategy import ReplicationDecision

SPECIALIZATION = "SPECIALIZATION"
INHERITED_KNOWLEDGE = "INHERITED KNOWLEDGE"
PARENT_STRATEGIES = "PARENT STRATEGIES"
MUTATIONS = "MUTATIONS"
LINEAGE = "LINEAGE"


@dataclass
class GenesisConfig:
    """Everything the spawner needs to bring a child to life."""
    name: str
    genesis_prompt: str
    creator_message: str
    creator_address: str
    parent_address: str
    sections: list[tuple[str, str]] = field(default_factory=list)


def specialization_body(specialization: str) -> str:
    return (
        f"You are specialized in: {specialization}\n"
        "Focus your efforts on this area to maximize revenue."
    )


def mutation_notes(mutations: MutationSet) -> list[str]:
    notes = []
    if mutations.model_preference:
        notes.append(f"Preferred model: {mutations.model_preference}")
    if mutations.focus_area:
        notes.append(f"Exploration focus: {mutations.focus_area}")
    notes.append(f"Exploration rate: {mutations.exploration_rate * 100:.0f}%")
    if mutations.temperature_offset:
        notes.append(f"Temperature offset: {mutations.temperature_offset:+.2f}")
    return notes


def lineage_body(parent: ParentProfile) -> str:
    return (
        f"Spawned by {parent.name} ({parent.address}).\n"
        "You inherit their mission but have your own identity and wallet."
    )


def creator_message_for(specialization: str | None) -> str:
    focus = specialization or "general tasks"
    return f"You are a specialized child agent focused on {focus}. Earn revenue and be self-sustaining."


class GenesisBuilder:
    """Render a replication decision into a GenesisConfig."""

    def __init__(self, parent: ParentProfile, ledger=None, skills=None):
        self.parent = parent
        self.ledger = ledger
        self.skills = skills

    def build(self, decision: ReplicationDecision, tenant_id: str = "default") -> GenesisConfig:
        """Build the genesis config for an allowed decision.

        Uses the inheritance carried on the decision; rebuilds it from the
        oracles only when the decision has none.
        """
        inheritance = decision.inheritance
        if inheritance is None and self.ledger is not None and self.skills is not None:
            inheritance = build_inheritance(self.ledger, self.skills)
        inheritance = inheritance or Inheritance()

        sections = []
        if decision.specialization:
            sections.append((SPECIALIZATION, specialization_body(decision.specialization)))
        if inheritance.memory_highlights:
            sections.append((INHERITED_KNOWLEDGE, "\n".join(inheritance.memory_highlights)))
        if inheritance.strategies:
            sections.append((PARENT_STRATEGIES, "\n".join(inheritance.strategies)))
        if decision.mutations is not None:
            notes = mutation_notes(decision.mutations)
            if notes:
                sections.append((MUTATIONS, "\n".join(notes)))
        sections.append((LINEAGE, lineage_body(self.parent)))

        return self._finish(
            decision.suggested_name or f"{self.parent.name}-child",
            decision.specialization,
            sections,
            tenant_id,
        )

    def build_manual(
        self,
        name: str | None,
        specialization: str | None,
        message: str | None = None,
        tenant_id: str = "default",
    ) -> GenesisConfig:
        """Genesis for an operator-chosen specialization, bypassing strategy."""
        sections = []
        if specialization:
            sections.append((SPECIALIZATION, specialization_body(specialization)))
        sections.append((LINEAGE, lineage_body(self.parent)))

        default_name = f"{self.parent.name}-{specialization or 'child'}"
        return self._finish(name or default_name, specialization, sections, tenant_id, message)

    def _finish(self, name, specialization, sections, tenant_id, message=None) -> GenesisConfig:
        config = GenesisConfig(
            name=name,
            genesis_prompt=render_sections(self.parent.genesis_prompt, sections),
            creator_message=message or creator_message_for(specialization),
            creator_address=self.parent.address,
            parent_address=self.parent.address,
            sections=sections,
        )

        emit_receipt("genesis", {
            "tenant_id": tenant_id,
            "name": config.name,
            "sections": [s[0] for s in sections],
            "prompt_length": len(config.genesis_prompt),
        })

        return config

"""Genetic inheritance - what a child takes from its parent.

Three things are passed down:
    skills      names of the parent's enabled skills
    highlights  "Revenue source: X ($Y.YY)" for the top revenue sources
    strategies  "Frequently used tool: T (N successful calls)" ranked by
                non-error tool calls over the parent's recent turns

SkillHistory is the store-backed skill/turn oracle the builder reads.
"""
import uuid
from dataclasses import dataclass, field

from brood.core.constants import (
    INHERITED_HIGHLIGHT_LIMIT,
    INHERITED_STRATEGY_LIMIT,
    MAX_TURN_LOG,
    RECENT_TURN_WINDOW,
)
from brood.core.receipt import cents, utc_now
from brood.ledger.store import KVStore

SKILLS_KEY = "skills"
TURNS_KEY = "turns"


@dataclass
class Inheritance:
    """Everything a child inherits from its parent."""
    skills: list[str] = field(default_factory=list)
    memory_highlights: list[str] = field(default_factory=list)
    strategies: list[str] = field(default_factory=list)


class SkillHistory:
    """Store-backed skills and bounded turn log."""

    def __init__(self, store: KVStore):
        self.store = store

    # -- skills ---------------------------------------------------------------

    def set_skill(self, name: str, enabled: bool = True) -> None:
        skills = self._skills()
        skills[name] = bool(enabled)
        self.store.set_json(SKILLS_KEY, skills)

    def list_enabled_skill_names(self) -> list[str]:
        return [name for name, enabled in self._skills().items() if enabled]

    # -- turns ----------------------------------------------------------------

    def record_turn(self, tool_calls: list[dict], turn_id: str | None = None) -> dict:
        """Append a turn. Each tool call is {"name": str, "error": str | None}."""
        turn = {
            "id": turn_id or f"turn-{uuid.uuid4().hex[:12]}",
            "timestamp": utc_now(),
            "tool_calls": [
                {"name": c["name"], "error": c.get("error")} for c in tool_calls
            ],
        }
        turns = self.recent_turns(MAX_TURN_LOG)
        turns.append(turn)
        self.store.set_json(TURNS_KEY, turns[-MAX_TURN_LOG:])
        return turn

    def recent_turns(self, limit: int = RECENT_TURN_WINDOW) -> list[dict]:
        """Most recent turns, oldest first."""
        raw = self.store.get_json(TURNS_KEY, default=[])
        if not isinstance(raw, list):
            return []
        turns = [t for t in raw if isinstance(t, dict)]
        return turns[-limit:] if limit > 0 else []

    def recent_tool_success_counts(self, limit: int = RECENT_TURN_WINDOW) -> list[tuple[str, int]]:
        """Non-error calls per tool over the last `limit` turns, most used first."""
        counts: dict[str, int] = {}
        for turn in self.recent_turns(limit):
            for call in turn.get("tool_calls") or []:
                if not isinstance(call, dict) or call.get("error"):
                    continue
                name = call.get("name")
                if name:
                    counts[name] = counts.get(name, 0) + 1
        return sorted(counts.items(), key=lambda kv: kv[1], reverse=True)

    def _skills(self) -> dict:
        raw = self.store.get_json(SKILLS_KEY, default={})
        return raw if isinstance(raw, dict) else {}


def build_inheritance(ledger, skills) -> Inheritance:
    """Assemble skills, revenue highlights and tool strategies.

    Args:
        ledger: Anything exposing get_top_revenue_sources(limit)
        skills: Anything exposing list_enabled_skill_names() and
            recent_tool_success_counts(limit)
    """
    highlights = [
        f"Revenue source: {s.source} ({cents(s.amount_cents)})"
        for s in ledger.get_top_revenue_sources(INHERITED_HIGHLIGHT_LIMIT)
    ]

    ranked = skills.recent_tool_success_counts(RECENT_TURN_WINDOW)
    strategies = [
        f"Frequently used tool: {tool} ({count} successful calls)"
        for tool, count in ranked[:INHERITED_STRATEGY_LIMIT]
    ]

    return Inheritance(
        skills=list(skills.list_enabled_skill_names()),
        memory_highlights=highlights,
        strategies=strategies,
    )

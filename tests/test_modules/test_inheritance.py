"""Unit tests for inheritance and the skill/history oracle."""
from brood.core import constants as C
from brood.replication.inheritance import build_inheritance


class TestSkillHistory:
    def test_enabled_skills(self, skills):
        skills.set_skill("web-search")
        skills.set_skill("deploy", enabled=False)
        assert skills.list_enabled_skill_names() == ["web-search"]

    def test_toggle(self, skills):
        skills.set_skill("deploy")
        skills.set_skill("deploy", enabled=False)
        assert skills.list_enabled_skill_names() == []

    def test_success_counts_skip_errors(self, skills):
        skills.record_turn([{"name": "exec"}, {"name": "fetch"}])
        skills.record_turn([{"name": "exec"}, {"name": "fetch", "error": "timeout"}])

        assert skills.recent_tool_success_counts() == [("exec", 2), ("fetch", 1)]

    def test_window_limits_turns(self, skills):
        skills.record_turn([{"name": "old"}])
        for _ in range(C.RECENT_TURN_WINDOW):
            skills.record_turn([{"name": "new"}])

        counts = dict(skills.recent_tool_success_counts())
        assert "old" not in counts
        assert counts["new"] == C.RECENT_TURN_WINDOW

    def test_malformed_turns_ignored(self, store, skills):
        store.set_json("turns", ["junk", {"tool_calls": [{"name": "ok"}, "bad"]}])
        assert skills.recent_tool_success_counts() == [("ok", 1)]


class TestBuildInheritance:
    def test_highlights_and_strategies(self, ledger, skills):
        for source, amount in [("a", 400), ("b", 300), ("c", 200), ("d", 100)]:
            ledger.log_event("x402_payment", amount, source)
        skills.set_skill("web-search")
        for tool in ["t1", "t2", "t3", "t4", "t5", "t6"]:
            skills.record_turn([{"name": tool}])
        skills.record_turn([{"name": "t1"}])

        inheritance = build_inheritance(ledger, skills)

        assert inheritance.skills == ["web-search"]
        assert inheritance.memory_highlights == [
            "Revenue source: a ($4.00)",
            "Revenue source: b ($3.00)",
            "Revenue source: c ($2.00)",
        ]
        assert len(inheritance.strategies) == 5
        assert inheritance.strategies[0] == "Frequently used tool: t1 (2 successful calls)"

    def test_empty(self, ledger, skills):
        inheritance = build_inheritance(ledger, skills)
        assert inheritance.skills == []
        assert inheritance.memory_highlights == []
        assert inheritance.strategies == []

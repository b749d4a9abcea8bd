"""Unit tests for mutation generation."""
import dataclasses
import random

import pytest

from brood.config.policy import ReplicationPolicy
from brood.core.constants import FOCUS_AREAS, MODEL_OPTIONS
from brood.replication.mutation import (
    LinearCongruential,
    generate_mutations,
    generate_mutations_deterministic,
)

from conftest import SequenceRng


class TestLinearCongruential:
    def test_first_draw(self):
        assert LinearCongruential(0).random() == 49297 / 233280

    def test_stream_in_unit_interval(self):
        rng = LinearCongruential(12345)
        draws = [rng.random() for _ in range(1000)]
        assert all(0 <= r < 1 for r in draws)
        assert len(set(draws)) > 1


class TestGenerateMutations:
    """Draw order: model gate, model pick, focus gate, focus pick, temperature, exploration."""

    def test_scripted_all_mutations(self):
        rng = SequenceRng([0.1, 0.5, 0.2, 0.9, 0.5, 0.25])
        m = generate_mutations("gpt-4o", rng)

        assert m.model_preference == "claude-3-5-sonnet-20241022"
        assert m.focus_area == "automation"
        assert m.temperature_offset == 0.0
        assert m.exploration_rate == 0.25

    def test_scripted_no_mutations(self):
        rng = SequenceRng([0.9, 0.9, 0.0, 0.999])
        m = generate_mutations("gpt-4o", rng)

        assert m.model_preference is None
        assert m.focus_area is None
        assert m.temperature_offset == -0.2
        assert m.exploration_rate == 1.0

    def test_never_offers_current_model(self):
        rng = random.Random(3)
        for _ in range(200):
            m = generate_mutations("gpt-4o-mini", rng)
            assert m.model_preference != "gpt-4o-mini"

    def test_ranges(self):
        rng = random.Random(11)
        for _ in range(200):
            m = generate_mutations("gpt-4o", rng)
            assert -0.2 <= m.temperature_offset <= 0.2
            assert 0 <= m.exploration_rate <= 1
            assert m.model_preference in (None, *MODEL_OPTIONS)
            assert m.focus_area in (None, *FOCUS_AREAS)

    def test_rates_from_policy(self):
        policy = ReplicationPolicy(model_mutation_rate=0.0, focus_mutation_rate=1.0)
        rng = random.Random(5)
        for _ in range(50):
            m = generate_mutations("gpt-4o", rng, policy)
            assert m.model_preference is None
            assert m.focus_area is not None

    def test_default_rng(self):
        m = generate_mutations("gpt-4o")
        assert -0.2 <= m.temperature_offset <= 0.2


class TestDeterministic:
    def test_same_seed_same_output(self):
        assert generate_mutations_deterministic("gpt-4o", 42) == \
            generate_mutations_deterministic("gpt-4o", 42)

    def test_seeds_differ(self):
        outputs = {generate_mutations_deterministic("gpt-4o", s) for s in range(20)}
        assert len(outputs) > 1

    def test_frozen(self):
        m = generate_mutations_deterministic("gpt-4o", 1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            m.focus_area = "x"

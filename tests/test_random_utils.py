"""Tests for the seeded randomness helpers."""

import random

import pytest

from scout_manager.engine.random_utils import (
    chance,
    clamp,
    generate_id,
    make_rng,
    pick,
    round_half_up,
    weighted_choice,
)


class TestWeightedChoice:
    """Tests for weighted selection."""

    def test_only_positive_weights_are_drawn(self):
        """Items with zero or negative weight are never picked."""
        rng = make_rng(42)
        items = [("a", 0), ("b", -5), ("c", 3)]
        for _ in range(50):
            assert weighted_choice(rng, items) == "c"

    def test_returns_none_without_positive_weight(self):
        rng = make_rng(42)
        assert weighted_choice(rng, [("a", 0), ("b", -1)]) is None
        assert weighted_choice(rng, []) is None

    def test_distribution_follows_weights(self):
        """A 9:1 weighting should favour the heavy item."""
        rng = make_rng(42)
        draws = [weighted_choice(rng, [("heavy", 9), ("light", 1)]) for _ in range(1000)]
        assert draws.count("heavy") > draws.count("light") * 4


class TestDeterminism:
    """Same seed, same sequence."""

    def test_same_seed_same_ids(self):
        first = [generate_id("neg", make_rng(7)) for _ in range(3)]
        second = [generate_id("neg", make_rng(7)) for _ in range(3)]
        assert first == second

    def test_id_format(self):
        identifier = generate_id("rpt", make_rng(1))
        prefix, suffix = identifier.split("_")
        assert prefix == "rpt"
        assert len(suffix) == 12
        assert suffix.isalnum()

    def test_chance_extremes(self):
        rng = random.Random(3)
        assert not any(chance(rng, 0) for _ in range(100))
        assert all(chance(rng, 1) for _ in range(100))

    def test_pick_stays_in_sequence(self):
        rng = make_rng(5)
        options = ["x", "y", "z"]
        assert all(pick(rng, options) in options for _ in range(30))


class TestNumericHelpers:
    """Tests for clamp and rounding."""

    @pytest.mark.parametrize("value,expected", [
        (10.5, 11),
        (2.5, 3),
        (2.4, 2),
        (-0.5, 0),
        (72.5, 73),
    ])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected

    def test_clamp(self):
        assert clamp(150, 0, 100) == 100
        assert clamp(-3, 0, 100) == 0
        assert clamp(42, 0, 100) == 42


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

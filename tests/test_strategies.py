"""Tests for the strategy catalog."""
import random
from collections import Counter

import pytest

from pd_playground import strategies
from pd_playground.engine import Move
from pd_playground.errors import UnknownStrategyError
from pd_playground.strategies import (
    STRATEGIES,
    STRATEGY_NAMES,
    always_cooperate,
    always_defect,
    generous_tit_for_tat,
    get_strategy_by_name,
    grim_trigger,
    pavlov,
    random_move,
    tit_for_tat,
    tit_for_two_tats,
)

C = Move.COOPERATE
D = Move.DEFECT


class _FixedRng:
    """Stand-in generator returning a fixed value."""

    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


class TestCatalog:
    """Test the catalog contents and lookups."""

    def test_names_in_order(self):
        assert STRATEGY_NAMES == [
            "Always Cooperate",
            "Always Defect",
            "Tit for Tat",
            "Generous Tit for Tat",
            "Tit for Two Tats",
            "Grim Trigger",
            "Pavlov",
            "Random",
        ]

    def test_every_entry_returns_a_move(self):
        for name, fn in STRATEGIES.items():
            assert isinstance(fn([], 0), Move), name
            assert isinstance(fn([C, D, D], 3), Move), name

    def test_lookup_is_case_insensitive(self):
        assert get_strategy_by_name("tit for tat") is tit_for_tat
        assert get_strategy_by_name("GRIM TRIGGER") is grim_trigger

    def test_unknown_name_raises(self):
        with pytest.raises(UnknownStrategyError, match="Unknown strategy"):
            get_strategy_by_name("Tit for Three Tats")

    @pytest.mark.parametrize("name", [None, 3, {"name": "Pavlov"}])
    def test_non_string_name_raises(self, name):
        with pytest.raises(UnknownStrategyError, match="must be a string"):
            get_strategy_by_name(name)

    def test_unknown_name_is_value_error(self):
        with pytest.raises(ValueError):
            get_strategy_by_name("nope")

    def test_rng_bound_only_for_randomized(self):
        gen = random.Random(0)
        assert get_strategy_by_name("Tit for Tat", rng=gen) is tit_for_tat
        bound = get_strategy_by_name("Random", rng=gen)
        assert bound.keywords == {"rng": gen}


class TestConstantStrategies:
    """Test the baseline strategies."""

    @pytest.mark.parametrize("history", [[], [C], [D, D, D]])
    def test_always_cooperate(self, history):
        assert always_cooperate(history, len(history)) is C

    @pytest.mark.parametrize("history", [[], [C], [C, C, C]])
    def test_always_defect(self, history):
        assert always_defect(history, len(history)) is D


class TestTitForTat:
    """Test Tit for Tat."""

    def test_opens_with_cooperate(self):
        assert tit_for_tat([], 0) is C

    def test_round_zero_ignores_history(self):
        assert tit_for_tat([D], 0) is C

    def test_copies_last_move(self):
        assert tit_for_tat([C, D], 2) is D
        assert tit_for_tat([D, C], 2) is C


class TestGenerousTitForTat:
    """Test Generous Tit for Tat with an injected generator."""

    def test_opens_with_cooperate(self):
        assert generous_tit_for_tat([], 0, rng=_FixedRng(0.0)) is C

    def test_forgives_below_threshold(self):
        assert generous_tit_for_tat([D], 1, rng=_FixedRng(0.05)) is C

    def test_retaliates_above_threshold(self):
        assert generous_tit_for_tat([D], 1, rng=_FixedRng(0.1)) is D

    def test_copies_cooperation(self):
        assert generous_tit_for_tat([C], 1, rng=_FixedRng(0.0)) is C

    def test_forgiveness_rate_roughly_ten_percent(self):
        gen = random.Random(42)
        moves = Counter(generous_tit_for_tat([D], 1, rng=gen) for _ in range(5000))
        assert 0.07 < moves[C] / 5000 < 0.13


class TestTitForTwoTats:
    """Test Tit for Two Tats."""

    def test_cooperates_early(self):
        assert tit_for_two_tats([], 0) is C
        assert tit_for_two_tats([D], 1) is C

    def test_round_one_with_long_history_still_cooperates(self):
        assert tit_for_two_tats([D, D], 1) is C

    def test_defects_after_two_defections(self):
        assert tit_for_two_tats([C, D, D], 3) is D

    def test_single_defection_is_tolerated(self):
        assert tit_for_two_tats([D, C, D], 3) is C
        assert tit_for_two_tats([D, D, C], 3) is C


class TestGrimTrigger:
    """Test Grim Trigger."""

    def test_cooperates_until_defection(self):
        assert grim_trigger([], 0) is C
        assert grim_trigger([C, C, C], 3) is C

    def test_never_forgives(self):
        history = [C, D]
        for rnd in range(2, 20):
            assert grim_trigger(history, rnd) is D
            history.append(C)


class TestPavlov:
    """Test the simplified Pavlov rule."""

    def test_opens_with_cooperate(self):
        assert pavlov([], 0) is C

    def test_mirrors_opponent(self):
        assert pavlov([D], 1) is D
        assert pavlov([D, C], 2) is C


class TestRandom:
    """Test the Random strategy."""

    def test_threshold(self):
        assert random_move([], 0, rng=_FixedRng(0.49)) is C
        assert random_move([], 0, rng=_FixedRng(0.5)) is D

    def test_seeded_generators_agree(self):
        gen_a, gen_b = random.Random(7), random.Random(7)
        a = [random_move([], i, rng=gen_a) for i in range(30)]
        b = [random_move([], i, rng=gen_b) for i in range(30)]
        assert a == b

    def test_shared_generator_can_be_reseeded(self):
        strategies.seed(99)
        first = [random_move([], i) for i in range(20)]
        strategies.seed(99)
        second = [random_move([], i) for i in range(20)]
        assert first == second

"""Pytest configuration and shared fixtures for testing."""
import random

import pytest

from pd_playground.engine import initialize_game
from pd_playground.roster import make_player


@pytest.fixture
def rng():
    """Seeded generator for randomized strategies and colors."""
    return random.Random(1234)


@pytest.fixture
def players_for():
    """Factory: one player per strategy name, ids starting at 1."""
    def _make(*strategy_names):
        return tuple(
            make_player(i, f"P{i}", name, "#000000")
            for i, name in enumerate(strategy_names, 1)
        )
    return _make


@pytest.fixture
def new_game(players_for):
    """Factory: initialized game for the given strategies and round limit."""
    def _make(rounds, *strategy_names):
        return initialize_game(players_for(*strategy_names), rounds)
    return _make

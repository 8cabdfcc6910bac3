"""The eight Prisoner's Dilemma strategies and the catalog that names them.

Every strategy is a plain function with the signature::

    strategy(opponent_moves, current_round) -> Move

``opponent_moves`` holds only moves from rounds already played, so a
strategy never sees the outcome of the round it is deciding.  The two
randomized strategies also take an optional ``rng`` keyword; when it is
omitted they draw from the module-wide generator, which :func:`seed` can
reset for reproducible runs.
"""

import functools
import random
from typing import Callable, Optional, Sequence

from .engine import Move
from .errors import UnknownStrategyError

Strategy = Callable[[Sequence[Move], int], Move]

# Shared randomness source for Generous Tit for Tat and Random
_rng = random.Random()

GENEROUS_FORGIVENESS = 0.1
RANDOM_COOPERATE_PROB = 0.5


def seed(value: Optional[int] = None):
    """Reseed the shared generator used when no ``rng`` is injected."""
    _rng.seed(value)


# ---------------------------------------------------------------------------
# Constant strategies
# ---------------------------------------------------------------------------

def always_cooperate(opponent_moves, current_round):
    """Always cooperates.

    **Type**: Baseline
    """
    return Move.COOPERATE


def always_defect(opponent_moves, current_round):
    """Always defects.

    **Type**: Baseline
    """
    return Move.DEFECT


# ---------------------------------------------------------------------------
# Reciprocal strategies
# ---------------------------------------------------------------------------

def tit_for_tat(opponent_moves, current_round):
    """Cooperates first, then copies whatever the opponent did last round.

    **Type**: Reciprocal
    """
    if current_round == 0 or not opponent_moves:
        return Move.COOPERATE
    return opponent_moves[-1]


def generous_tit_for_tat(opponent_moves, current_round, rng: Optional[random.Random] = None):
    """Tit for Tat that forgives a defection 10% of the time.

    Only a defection can be forgiven; a cooperation is always copied.

    **Type**: Reciprocal (randomized)
    """
    if current_round == 0 or not opponent_moves:
        return Move.COOPERATE
    rng = rng or _rng
    last = opponent_moves[-1]
    if last is Move.DEFECT and rng.random() < GENEROUS_FORGIVENESS:
        return Move.COOPERATE
    return last


def tit_for_two_tats(opponent_moves, current_round):
    """Defects only after two consecutive defections by the opponent.

    **Type**: Reciprocal
    """
    if current_round <= 1 or len(opponent_moves) <= 1:
        return Move.COOPERATE
    if opponent_moves[-1] is Move.DEFECT and opponent_moves[-2] is Move.DEFECT:
        return Move.DEFECT
    return Move.COOPERATE


def grim_trigger(opponent_moves, current_round):
    """Cooperates until the opponent defects once, then defects forever.

    **Type**: Punishing
    """
    if current_round == 0 or not opponent_moves:
        return Move.COOPERATE
    if Move.DEFECT in opponent_moves:
        return Move.DEFECT
    return Move.COOPERATE


def pavlov(opponent_moves, current_round):
    """Simplified win-stay/lose-shift.

    Looks only at the opponent's last move: cooperate after a cooperation,
    defect after a defection.  Its own previous move and payoff are not
    consulted.

    **Type**: Reciprocal
    """
    if current_round == 0 or not opponent_moves:
        return Move.COOPERATE
    if opponent_moves[-1] is Move.COOPERATE:
        return Move.COOPERATE
    return Move.DEFECT


def random_move(opponent_moves, current_round, rng: Optional[random.Random] = None):
    """Coin flip, independent of history.

    **Type**: Baseline (randomized)
    """
    rng = rng or _rng
    return Move.COOPERATE if rng.random() < RANDOM_COOPERATE_PROB else Move.DEFECT


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

STRATEGIES: dict[str, Strategy] = {
    "Always Cooperate": always_cooperate,
    "Always Defect": always_defect,
    "Tit for Tat": tit_for_tat,
    "Generous Tit for Tat": generous_tit_for_tat,
    "Tit for Two Tats": tit_for_two_tats,
    "Grim Trigger": grim_trigger,
    "Pavlov": pavlov,
    "Random": random_move,
}

STRATEGY_NAMES = list(STRATEGIES)

# Strategies that accept an injected ``rng``
RANDOMIZED = {"Generous Tit for Tat", "Random"}


def resolve_strategy_name(name: str) -> str:
    """Return the catalog spelling of ``name`` (case-insensitive)."""
    if not isinstance(name, str):
        raise UnknownStrategyError(f"Strategy name must be a string, got {name!r}")
    if name in STRATEGIES:
        return name
    name_lower = name.lower()
    for known in STRATEGY_NAMES:
        if known.lower() == name_lower:
            return known
    available = ", ".join(STRATEGY_NAMES)
    raise UnknownStrategyError(f"Unknown strategy: '{name}'. Available: {available}")


def get_strategy_by_name(name: str, rng: Optional[random.Random] = None) -> Strategy:
    """Look up a strategy by name.

    When ``rng`` is given and the strategy is randomized, the returned
    callable is bound to that generator.
    """
    canonical = resolve_strategy_name(name)
    strategy = STRATEGIES[canonical]
    if rng is not None and canonical in RANDOMIZED:
        return functools.partial(strategy, rng=rng)
    return strategy

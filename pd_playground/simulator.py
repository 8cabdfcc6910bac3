"""Paced playback of a game, one round at a time.

The engine itself never waits; this module adds the delay between rounds
that a live display needs.
"""

import logging
import time
from dataclasses import replace
from typing import Callable, Iterable, Iterator, Optional

from .config import SPEED_DELAYS
from .engine import GameState, Player, initialize_game, play_round, run_game
from .errors import GameConfigError

logger = logging.getLogger(__name__)


def iter_rounds(state: GameState) -> Iterator[GameState]:
    """Yield the snapshot after each remaining round until the game ends."""
    state = replace(state, is_running=True)
    while state.is_running:
        state = play_round(state)
        yield state


def simulate(
    players: Iterable[Player],
    max_rounds: int,
    speed: str = "medium",
    on_round: Optional[Callable[[GameState], None]] = None,
    sleep: Optional[Callable[[float], None]] = None,
) -> GameState:
    """Initialize and play a whole game at the given speed.

    With ``speed="instant"`` the game runs to completion in one go and
    ``on_round`` is called once with the final state.  Otherwise each round
    is preceded by the speed's delay and followed by ``on_round``.
    """
    if speed not in SPEED_DELAYS:
        raise GameConfigError(f"Unknown speed '{speed}'. Use one of: {', '.join(SPEED_DELAYS)}")

    state = initialize_game(players, max_rounds)

    if speed == "instant":
        state = run_game(state)
        if on_round:
            on_round(state)
        return state

    delay = SPEED_DELAYS[speed]
    sleep = sleep or time.sleep
    logger.debug("Pacing rounds at %.1fs (%s)", delay, speed)
    state = replace(state, is_running=True)
    while state.is_running:
        sleep(delay)
        state = play_round(state)
        if on_round:
            on_round(state)
    return state

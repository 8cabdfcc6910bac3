"""Core game engine for iterated N-player Prisoner's Dilemma games."""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Iterable, Sequence

import numpy as np

from .errors import GameConfigError

logger = logging.getLogger(__name__)


class Move(Enum):
    COOPERATE = "cooperate"
    DEFECT = "defect"


# (row move, column move) → (row payoff, column payoff)
PAYOFF_MATRIX = {
    (Move.COOPERATE, Move.COOPERATE): (3, 3),
    (Move.COOPERATE, Move.DEFECT): (0, 5),
    (Move.DEFECT, Move.COOPERATE): (5, 0),
    (Move.DEFECT, Move.DEFECT): (1, 1),
}


def payoff(move_a: Move, move_b: Move) -> tuple[int, int]:
    """Return the (A, B) payoffs for one pairing."""
    return PAYOFF_MATRIX[move_a, move_b]


@dataclass(frozen=True)
class Player:
    """One participant in a game.

    ``score`` and ``moves`` are owned by the engine; :func:`initialize_game`
    discards whatever they held before.  ``color`` is passed through
    untouched for charting.
    """
    id: int
    name: str
    strategy_name: str
    strategy: Callable[[Sequence[Move], int], Move] = field(compare=False, repr=False)
    score: int = 0
    moves: tuple[Move, ...] = ()
    color: str = "#3b82f6"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "strategy": self.strategy_name,
            "score": self.score,
            "moves": [m.value for m in self.moves],
            "color": self.color,
        }


@dataclass(frozen=True)
class RoundResult:
    """Outcome of one round across every pairing."""
    round: int
    moves: dict[int, Move]
    scores: dict[int, int]

    def to_dict(self) -> dict:
        return {
            "round": self.round,
            "moves": {pid: m.value for pid, m in self.moves.items()},
            "scores": dict(self.scores),
        }


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of a game; each round produces a new one."""
    players: tuple[Player, ...]
    current_round: int
    max_rounds: int
    round_history: tuple[RoundResult, ...] = ()
    is_running: bool = False

    def to_dict(self) -> dict:
        return {
            "players": [p.to_dict() for p in self.players],
            "current_round": self.current_round,
            "max_rounds": self.max_rounds,
            "round_history": [r.to_dict() for r in self.round_history],
            "is_running": self.is_running,
        }


def _validate(players: Sequence[Player], max_rounds: int):
    if isinstance(max_rounds, bool) or not isinstance(max_rounds, int) or max_rounds <= 0:
        raise GameConfigError(f"max_rounds must be a positive integer, got {max_rounds!r}")
    if len(players) < 2:
        raise GameConfigError(f"A game needs at least 2 players, got {len(players)}")
    seen = set()
    for p in players:
        if p.id in seen:
            raise GameConfigError(f"Duplicate player id: {p.id}")
        seen.add(p.id)
        if not callable(p.strategy):
            raise GameConfigError(f"Player {p.id} ({p.name}) has no callable strategy")


def initialize_game(players: Iterable[Player], max_rounds: int) -> GameState:
    """Start a fresh game: every player's score and move history is reset."""
    players = tuple(players)
    _validate(players, max_rounds)
    fresh = tuple(replace(p, score=0, moves=()) for p in players)
    logger.info(
        "New game: %d players, %d rounds (%s)",
        len(fresh), max_rounds, ", ".join(f"{p.name}={p.strategy_name}" for p in fresh),
    )
    return GameState(players=fresh, current_round=0, max_rounds=max_rounds)


def play_round(state: GameState) -> GameState:
    """Advance the game by exactly one round.

    Every unordered pair of players meets once.  Each strategy sees only
    its opponent's moves from earlier rounds.  A player's recorded move for
    the round is the one decided in its first pairing; its round score is
    the sum of its payoffs over all pairings.

    A finished or paused game comes back unchanged apart from
    ``is_running`` being forced to False.
    """
    if state.current_round >= state.max_rounds or not state.is_running:
        return replace(state, is_running=False)

    round_num = state.current_round
    players = state.players
    moves: dict[int, Move] = {}
    scores: dict[int, int] = {}

    for i in range(len(players)):
        for j in range(i + 1, len(players)):
            p1 = players[i]
            p2 = players[j]

            move_1 = p1.strategy(p2.moves, round_num)
            move_2 = p2.strategy(p1.moves, round_num)

            moves.setdefault(p1.id, move_1)
            moves.setdefault(p2.id, move_2)

            pts_1, pts_2 = PAYOFF_MATRIX[move_1, move_2]
            scores[p1.id] = scores.get(p1.id, 0) + pts_1
            scores[p2.id] = scores.get(p2.id, 0) + pts_2

    result = RoundResult(round=round_num, moves=moves, scores=scores)

    updated = tuple(
        replace(p, score=p.score + scores.get(p.id, 0), moves=p.moves + (moves[p.id],))
        for p in players
    )
    next_round = round_num + 1
    logger.debug(
        "Round %d: %s",
        next_round,
        ", ".join(f"{p.name}={moves[p.id].value}(+{scores.get(p.id, 0)})" for p in players),
    )

    new_state = replace(
        state,
        players=updated,
        current_round=next_round,
        round_history=state.round_history + (result,),
        is_running=next_round < state.max_rounds,
    )
    if not new_state.is_running:
        logger.info("Game finished after %d rounds: %s", next_round, get_scores(new_state))
    return new_state


def run_game(state: GameState) -> GameState:
    """Play every remaining round without pausing."""
    state = replace(state, is_running=True)
    while state.is_running:
        state = play_round(state)
    return state


def get_scores(state: GameState) -> dict[int, int]:
    """Current total score per player id."""
    return {p.id: p.score for p in state.players}


def cumulative_scores(state: GameState, player_id: int) -> list[int]:
    """Running total of one player's score after each completed round."""
    per_round = np.array(
        [r.scores.get(player_id, 0) for r in state.round_history], dtype=np.int64
    )
    return np.cumsum(per_round).tolist()


def get_chart_data(state: GameState) -> dict:
    """Score progression in a line-chart friendly shape.

    ``labels`` are 1-based round numbers; each dataset holds one player's
    cumulative score after every round.
    """
    labels = list(range(1, state.current_round + 1))
    datasets = []
    for p in state.players:
        datasets.append({
            "label": p.name,
            "data": cumulative_scores(state, p.id),
            "borderColor": p.color,
            "backgroundColor": f"{p.color}33",
            "tension": 0.2,
        })
    return {"labels": labels, "datasets": datasets}

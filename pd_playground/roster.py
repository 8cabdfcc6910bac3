"""Building and editing the player roster before a game starts.

All helpers take and return tuples of :class:`~.engine.Player`; nothing is
edited in place.
"""

import random
from dataclasses import replace
from typing import Optional, Sequence

from .engine import Player
from .errors import GameConfigError
from .strategies import STRATEGY_NAMES, get_strategy_by_name, resolve_strategy_name

MIN_PLAYERS = 2


def random_color(rng: Optional[random.Random] = None) -> str:
    """Random ``#rrggbb`` color."""
    rng = rng or random
    return "#" + "".join(rng.choice("0123456789ABCDEF") for _ in range(6))


def make_player(
    player_id: int,
    name: Optional[str] = None,
    strategy_name: str = "Tit for Tat",
    color: Optional[str] = None,
    rng: Optional[random.Random] = None,
) -> Player:
    """Create a player bound to a catalog strategy.

    ``rng`` seeds the random color and, for randomized strategies, is bound
    as their randomness source.
    """
    canonical = resolve_strategy_name(strategy_name)
    return Player(
        id=player_id,
        name=name or f"Player {player_id}",
        strategy_name=canonical,
        strategy=get_strategy_by_name(canonical, rng=rng),
        color=color or random_color(rng),
    )


def default_players() -> tuple[Player, ...]:
    """Tit for Tat against Always Defect."""
    return (
        make_player(1, "Player 1", "Tit for Tat", "#3b82f6"),
        make_player(2, "Player 2", "Always Defect", "#ef4444"),
    )


def _index_of(players: Sequence[Player], player_id: int) -> int:
    for i, p in enumerate(players):
        if p.id == player_id:
            return i
    raise GameConfigError(f"No player with id {player_id}")


def add_player(players: Sequence[Player], rng: Optional[random.Random] = None) -> tuple[Player, ...]:
    """Append a player with the next free id and a random strategy."""
    chooser = rng or random
    new_id = max([p.id for p in players] + [0]) + 1
    strategy_name = chooser.choice(STRATEGY_NAMES)
    return tuple(players) + (make_player(new_id, strategy_name=strategy_name, rng=rng),)


def remove_player(players: Sequence[Player], player_id: int) -> tuple[Player, ...]:
    """Drop a player; a roster already at the minimum size is returned as is."""
    idx = _index_of(players, player_id)
    if len(players) <= MIN_PLAYERS:
        return tuple(players)
    return tuple(players[:idx]) + tuple(players[idx + 1:])


def rename_player(players: Sequence[Player], player_id: int, name: str) -> tuple[Player, ...]:
    idx = _index_of(players, player_id)
    updated = list(players)
    updated[idx] = replace(players[idx], name=name)
    return tuple(updated)


def set_strategy(
    players: Sequence[Player],
    player_id: int,
    strategy_name: str,
    rng: Optional[random.Random] = None,
) -> tuple[Player, ...]:
    """Swap a player's strategy; score and move history are kept."""
    idx = _index_of(players, player_id)
    canonical = resolve_strategy_name(strategy_name)
    updated = list(players)
    updated[idx] = replace(
        players[idx],
        strategy_name=canonical,
        strategy=get_strategy_by_name(canonical, rng=rng),
    )
    return tuple(updated)

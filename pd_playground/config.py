"""
Game configuration.

Holds everything a hosting CLI or web front end needs to set up a game:
the roster, the round limit, the pacing speed and an optional seed.
"""

import json
import logging
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from .engine import Player
from .errors import GameConfigError
from .roster import default_players, make_player
from .strategies import resolve_strategy_name

logger = logging.getLogger(__name__)

DEFAULT_MAX_ROUNDS = 100
DEFAULT_SPEED = "medium"

# Seconds to wait before each round; "instant" skips pacing altogether
SPEED_DELAYS = {
    "slow": 1.0,
    "medium": 0.5,
    "fast": 0.2,
    "instant": 0.0,
}


@dataclass
class PlayerConfig:
    """One roster entry: display name, strategy name, optional color."""

    name: Optional[str] = None
    strategy: str = "Tit for Tat"
    color: Optional[str] = None

    def __post_init__(self):
        self.strategy = resolve_strategy_name(self.strategy)

    @classmethod
    def from_config(cls, data: Union[str, Dict[str, Any]]) -> "PlayerConfig":
        """Accept either a bare strategy name or a mapping."""
        if isinstance(data, str):
            return cls(strategy=data)
        if isinstance(data, dict):
            return cls(
                name=data.get("name"),
                strategy=data.get("strategy", "Tit for Tat"),
                color=data.get("color"),
            )
        raise GameConfigError(f"Invalid player config: {data!r}")

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "strategy": self.strategy, "color": self.color}


@dataclass
class GameConfig:
    """
    Configuration for a single game.

    Attributes:
        name: Label used in reports
        max_rounds: Number of rounds to play
        speed: Pacing between rounds ('slow', 'medium', 'fast', 'instant')
        seed: Seed for colors and the randomized strategies
        players: Roster entries; empty means the default two-player roster
    """

    name: str = "Prisoner's Dilemma"
    max_rounds: int = DEFAULT_MAX_ROUNDS
    speed: str = DEFAULT_SPEED
    seed: Optional[int] = None
    players: List[PlayerConfig] = field(default_factory=list)

    def __post_init__(self):
        """Normalize roster entries and reject bad settings early."""
        self.players = [
            p if isinstance(p, PlayerConfig) else PlayerConfig.from_config(p)
            for p in self.players
        ]
        errors = self.validate()
        if errors:
            raise GameConfigError("; ".join(errors))

    @property
    def delay(self) -> float:
        return SPEED_DELAYS[self.speed]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameConfig":
        return cls(
            name=data.get("name", "Prisoner's Dilemma"),
            max_rounds=data.get("max_rounds", data.get("rounds", DEFAULT_MAX_ROUNDS)),
            speed=data.get("speed", DEFAULT_SPEED),
            seed=data.get("seed"),
            players=list(data.get("players", [])),
        )

    @classmethod
    def from_json(cls, filepath: str) -> "GameConfig":
        """Load configuration from a JSON file."""
        with open(filepath, "r", encoding="utf-8") as f:
            data = json.load(f)
        logger.debug("Loaded game config from %s", filepath)
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "max_rounds": self.max_rounds,
            "speed": self.speed,
            "seed": self.seed,
            "players": [p.to_dict() for p in self.players],
        }

    def validate(self) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []
        if isinstance(self.max_rounds, bool) or not isinstance(self.max_rounds, int) \
                or self.max_rounds <= 0:
            errors.append(f"max_rounds must be a positive integer, got {self.max_rounds!r}")
        if self.speed not in SPEED_DELAYS:
            errors.append(
                f"Unknown speed '{self.speed}'. Use one of: {', '.join(SPEED_DELAYS)}"
            )
        if len(self.players) == 1:
            errors.append("A game needs at least 2 players")
        return errors

    def build_players(self, rng: Optional[random.Random] = None) -> tuple[Player, ...]:
        """Turn the roster entries into players with ids 1..N."""
        if not self.players:
            return default_players()
        if rng is None and self.seed is not None:
            rng = random.Random(self.seed)
        return tuple(
            make_player(i, p.name, p.strategy, p.color, rng=rng)
            for i, p in enumerate(self.players, 1)
        )

"""Export a finished game to JSON or CSV."""

import csv
import json
from pathlib import Path

from .engine import GameState, get_chart_data
from .stats import standings_to_dicts


def export_json(state: GameState, path: str):
    """Write the full game snapshot, standings and chart series."""
    data = {
        "game": state.to_dict(),
        "standings": standings_to_dicts(state),
        "chart": get_chart_data(state),
    }

    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    with open(out, "w") as f:
        json.dump(data, f, indent=2)
    print(f"  ✓ Game exported to {out}")


def export_csv(state: GameState, path: str):
    """Write one row per round per player."""
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)

    fieldnames = ["round", "player_id", "name", "strategy", "move", "round_score", "cumulative_score"]
    totals = {p.id: 0 for p in state.players}

    with open(out, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for r in state.round_history:
            for p in state.players:
                pts = r.scores.get(p.id, 0)
                totals[p.id] += pts
                writer.writerow({
                    "round": r.round + 1,
                    "player_id": p.id,
                    "name": p.name,
                    "strategy": p.strategy_name,
                    "move": r.moves[p.id].value,
                    "round_score": pts,
                    "cumulative_score": totals[p.id],
                })
    print(f"  ✓ Round history exported to {out}")

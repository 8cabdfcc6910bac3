"""Standings and pretty-printing for Prisoner's Dilemma games."""

from .engine import GameState, Move, Player

_MOVE_SHORT = {Move.COOPERATE: "C", Move.DEFECT: "D"}


def standings(state: GameState) -> list[Player]:
    """Players ordered by total score, highest first (ties by id)."""
    return sorted(state.players, key=lambda p: (-p.score, p.id))


def standings_to_dicts(state: GameState) -> list[dict]:
    return [
        {"rank": i, "id": p.id, "name": p.name, "strategy": p.strategy_name, "score": p.score}
        for i, p in enumerate(standings(state), 1)
    ]


# ---------------------------------------------------------------------------
# Pretty-printing
# ---------------------------------------------------------------------------

def format_round(state: GameState, index: int) -> str:
    """One line of the round history table."""
    r = state.round_history[index]
    cells = []
    for p in state.players:
        move = r.moves.get(p.id)
        short = _MOVE_SHORT[move] if move else "-"
        cells.append(f"{short} (+{r.scores.get(p.id, 0)})".rjust(14))
    return f"  {'Round ' + str(r.round + 1):>10s} " + " ".join(cells)


def print_round_header(state: GameState):
    names = " ".join(f"{p.name[:14]:>14s}" for p in state.players)
    print(f"  {'':>10s} {names}")
    print("  " + "-" * (11 + 15 * len(state.players)))


def print_round_history(state: GameState):
    """Print every completed round: each player's move and round score."""
    print()
    print("Round History (C=Cooperate, D=Defect):")
    print()
    print_round_header(state)
    for i in range(len(state.round_history)):
        print(format_round(state, i))
    print()


def print_standings(state: GameState):
    """Print the final score table."""
    print()
    print("=" * 66)
    print(f"  Rounds played: {state.current_round}/{state.max_rounds}")
    print("-" * 66)
    print(f"  {'#':>3s}  {'Player':<20s} {'Strategy':<22s} {'Score':>8s}")
    print("-" * 66)
    for i, p in enumerate(standings(state), 1):
        print(f"  {i:>3d}  {p.name:<20s} {p.strategy_name:<22s} {p.score:>8d}")
    print("=" * 66)
    print()

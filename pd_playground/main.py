"""CLI entry point for the Prisoner's Dilemma Playground."""

import argparse
import logging
import sys

from .config import GameConfig, PlayerConfig, SPEED_DELAYS
from .errors import PlaygroundError
from .export import export_json, export_csv
from .simulator import simulate
from .stats import format_round, print_round_header, print_round_history, print_standings
from .strategies import STRATEGIES


def list_strategies():
    """Print all available strategy names."""
    print("\nAvailable Strategies:")
    print("-" * 40)
    for i, (name, fn) in enumerate(STRATEGIES.items(), 1):
        summary = (fn.__doc__ or "").strip().splitlines()[0]
        print(f"  {i:>2d}. {name:<22s} {summary}")
    print()


def parse_player(spec: str) -> PlayerConfig:
    """``"Alice=Tit for Tat"`` or just ``"Tit for Tat"``."""
    if "=" in spec:
        name, strategy = spec.split("=", 1)
        return PlayerConfig(name=name.strip() or None, strategy=strategy.strip())
    return PlayerConfig(strategy=spec.strip())


def build_config(args) -> GameConfig:
    """Merge a config file (if any) with command-line overrides."""
    data = GameConfig.from_json(args.config).to_dict() if args.config else {}
    if args.player:
        data["players"] = [parse_player(p) for p in args.player]
    if args.rounds is not None:
        data["max_rounds"] = args.rounds
    if args.seed is not None:
        data["seed"] = args.seed
    if args.speed is not None:
        data["speed"] = args.speed
    return GameConfig.from_dict(data)


def cmd_play(args):
    """Play one game and print the results."""
    config = build_config(args)
    players = config.build_players()

    print(f"\n🎲 {config.name}")
    print(f"  {' vs '.join(f'{p.name} ({p.strategy_name})' for p in players)}"
          f"  |  {config.max_rounds} rounds  |  speed={config.speed}"
          + (f"  |  seed={config.seed}" if config.seed is not None else ""))
    print()

    on_round = None
    if config.speed != "instant":
        header_printed = []

        def on_round(state):
            if not header_printed:
                print_round_header(state)
                header_printed.append(True)
            print(format_round(state, state.current_round - 1), flush=True)

    state = simulate(players, config.max_rounds, speed=config.speed, on_round=on_round)

    if args.history and config.speed == "instant":
        print_round_history(state)
    print_standings(state)

    if args.export and args.output:
        _export(args, state)


def _export(args, state):
    """Handle export based on CLI args."""
    fmt = args.export.lower()
    if fmt == "json":
        export_json(state, args.output)
    elif fmt == "csv":
        export_csv(state, args.output)
    else:
        print(f"  ✗ Unknown export format: {fmt}. Use 'json' or 'csv'.")


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="pd_playground",
        description="🎲 Iterated Prisoner's Dilemma Playground",
    )
    parser.add_argument("--list", action="store_true", help="List all available strategies")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command")

    play = subparsers.add_parser("play", help="Play one game between two or more players")
    play.add_argument("--player", action="append",
                      help='Player as "Name=Strategy" or "Strategy" (repeatable)')
    play.add_argument("--rounds", type=int, default=None, help="Number of rounds (default: 100)")
    play.add_argument("--seed", type=int, default=None, help="RNG seed for reproducibility")
    play.add_argument("--speed", choices=list(SPEED_DELAYS), default=None,
                      help="Pacing between rounds (default: medium)")
    play.add_argument("--config", help="JSON game config file")
    play.add_argument("--history", action="store_true",
                      help="Print the round history after an instant game")
    play.add_argument("--export", choices=["json", "csv"], help="Export format")
    play.add_argument("--output", help="Export file path")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if args.list:
        list_strategies()
        return 0

    try:
        if args.command == "play":
            cmd_play(args)
        else:
            parser.print_help()
    except PlaygroundError as e:
        print(f"  ✗ {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())

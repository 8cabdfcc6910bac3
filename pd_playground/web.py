"""Flask web server for the Prisoner's Dilemma Playground."""

import json
import logging
import time

from flask import Flask, Response, jsonify, request

from .config import GameConfig
from .engine import get_chart_data, initialize_game, run_game
from .errors import GameConfigError, PlaygroundError
from .simulator import iter_rounds
from .stats import standings_to_dicts
from .strategies import STRATEGY_NAMES

logger = logging.getLogger(__name__)

app = Flask(__name__)


@app.errorhandler(PlaygroundError)
def handle_playground_error(e):
    logger.warning("Rejected request: %s", e)
    return jsonify({"error": str(e)}), 400


@app.route("/")
def index():
    return jsonify({
        "name": "Prisoner's Dilemma Playground",
        "endpoints": ["/api/strategies", "/api/game", "/api/game/stream"],
    })


@app.route("/api/strategies")
def api_strategies():
    return jsonify(STRATEGY_NAMES)


@app.route("/api/game", methods=["POST"])
def api_game():
    """Run a whole game at once and return the final state."""
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        raise GameConfigError("Request body must be a JSON object")
    config = GameConfig.from_dict({
        "max_rounds": data.get("rounds", 100),
        "seed": data.get("seed"),
        "players": data.get("players", []),
        "speed": "instant",
    })
    state = run_game(initialize_game(config.build_players(), config.max_rounds))

    return jsonify({
        "state": state.to_dict(),
        "chart": get_chart_data(state),
        "standings": standings_to_dicts(state),
    })


# ---------------------------------------------------------------------------
# SSE streaming endpoint for round-by-round playback
# ---------------------------------------------------------------------------

def _sse_event(data: dict, event: str = "message") -> str:
    """Format a Server-Sent Event string."""
    payload = json.dumps(data)
    return f"event: {event}\ndata: {payload}\n\n"


@app.route("/api/game/stream")
def api_game_stream():
    """SSE endpoint that plays a game one round per event."""
    config = GameConfig.from_dict({
        "max_rounds": request.args.get("rounds", 100, type=int),
        "seed": request.args.get("seed", None, type=int),
        "speed": request.args.get("speed", "medium"),
        "players": request.args.getlist("strategy"),
    })
    state = initialize_game(config.build_players(), config.max_rounds)
    delay = config.delay

    def generate():
        start_time = time.time()
        final = state
        for snapshot in iter_rounds(state):
            if delay:
                time.sleep(delay)
            last = snapshot.round_history[-1]
            yield _sse_event({
                "round": last.to_dict(),
                "scores": {p.id: p.score for p in snapshot.players},
                "completed": snapshot.current_round,
                "total": snapshot.max_rounds,
                "pct": round(snapshot.current_round / snapshot.max_rounds * 100, 1),
            }, event="round")
            final = snapshot

        yield _sse_event({
            "standings": standings_to_dicts(final),
            "chart": get_chart_data(final),
            "elapsed": round(time.time() - start_time, 1),
        }, event="done")

    return Response(
        generate(),
        mimetype="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "X-Accel-Buffering": "no",
            "Connection": "keep-alive",
        },
    )


def main():
    logging.basicConfig(level=logging.INFO)
    print("\n🎲 Prisoner's Dilemma Playground Web API")
    print("  → http://localhost:5000\n")
    app.run(debug=True, port=5000)


if __name__ == "__main__":
    main()

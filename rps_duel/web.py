"""Flask JSON API for driving RPS Duel matches.

Every match lives in an in-process store under its own lock; one client
drives each match by opening rounds, posting moves and finishing rounds
when its input window closes. Matches left idle for longer than
``config.MATCH_IDLE_SECONDS`` are evicted without being recorded.
"""

import argparse
from dataclasses import dataclass, field
import logging
import random
import threading
import time
import uuid
from typing import Callable, Optional

from flask import Flask, jsonify, request

from . import config
from .engine import Match, MatchState, create_match
from .history import MatchHistory, record_match
from .players import DEFAULT_PLAYER1_NAME, DEFAULT_PLAYER2_NAME, PlayerRegistry
from .stats import get_statistics

logger = logging.getLogger(__name__)

app = Flask(__name__)


@dataclass
class StoredMatch:
    match: Match
    player1_name: str = DEFAULT_PLAYER1_NAME
    player2_name: str = DEFAULT_PLAYER2_NAME
    lock: threading.Lock = field(default_factory=threading.Lock)
    touched_at: float = 0.0


class MatchStore:
    """Independently owned matches keyed by id."""

    def __init__(self, max_idle_seconds: float = config.MATCH_IDLE_SECONDS,
                 clock: Callable[[], float] = time.monotonic):
        self._matches: dict[str, StoredMatch] = {}
        self._lock = threading.Lock()
        self.max_idle_seconds = max_idle_seconds
        self._clock = clock

    def __len__(self):
        return len(self._matches)

    def __contains__(self, match_id):
        return match_id in self._matches

    def create(self, mode, rounds: int, seed: Optional[int] = None,
               player1_name: str = DEFAULT_PLAYER1_NAME,
               player2_name: str = DEFAULT_PLAYER2_NAME) -> tuple[str, StoredMatch]:
        rng = random.Random(seed) if seed is not None else None
        match = create_match(mode, rounds, rng=rng)
        match_id = uuid.uuid4().hex
        now = self._clock()
        entry = StoredMatch(match, player1_name, player2_name, touched_at=now)
        with self._lock:
            self._evict_idle(now)
            self._matches[match_id] = entry
        return match_id, entry

    def get(self, match_id: str) -> Optional[StoredMatch]:
        now = self._clock()
        with self._lock:
            self._evict_idle(now)
            entry = self._matches.get(match_id)
            if entry is not None:
                entry.touched_at = now
            return entry

    def discard(self, match_id: str) -> Optional[StoredMatch]:
        with self._lock:
            return self._matches.pop(match_id, None)

    def clear(self):
        with self._lock:
            self._matches.clear()

    def _evict_idle(self, now: float):
        expired = [mid for mid, e in self._matches.items()
                   if now - e.touched_at > self.max_idle_seconds]
        for mid in expired:
            del self._matches[mid]
            logger.info("Evicted idle match %s", mid)


store = MatchStore()
history = MatchHistory()
players = PlayerRegistry()


def _json_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("Request body must be a JSON object")
    return data


def _player_name(data: dict, key: str, default: str) -> str:
    name = data.get(key, default)
    if not isinstance(name, str) or not name.strip():
        raise ValueError(f"{key} must be a non-empty string")
    return name.strip()


def _match_json(match_id: str, match: Match) -> dict:
    data = match.to_dict()
    data["id"] = match_id
    return data


def _not_found(match_id: str):
    return jsonify({"error": f"Unknown match: '{match_id}'"}), 404


def _out_of_phase(match_id: str, match: Match, action: str):
    return jsonify({
        "error": f"Cannot {action} while match is {match.state.value}",
        "match": _match_json(match_id, match),
    }), 409


@app.errorhandler(ValueError)
def handle_bad_request(error):
    return jsonify({"error": str(error)}), 400


@app.route("/api/config")
def api_config():
    return jsonify({
        "min_rounds": config.MIN_ROUNDS,
        "max_rounds": config.MAX_ROUNDS,
        "default_rounds": config.DEFAULT_ROUNDS,
        "round_options": list(config.ROUND_OPTIONS),
        "countdown_seconds": config.COUNTDOWN_SECONDS,
    })


@app.route("/api/matches", methods=["POST"])
def api_create_match():
    data = _json_body()
    mode = data.get("mode", "pvc")
    rounds = data.get("rounds", config.DEFAULT_ROUNDS)
    seed = data.get("seed", None)
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        raise ValueError(f"seed must be an integer, got {seed!r}")
    player1_name = _player_name(data, "player1_name", DEFAULT_PLAYER1_NAME)
    player2_name = _player_name(data, "player2_name", DEFAULT_PLAYER2_NAME)

    match_id, entry = store.create(mode, rounds, seed=seed,
                                   player1_name=player1_name, player2_name=player2_name)
    logger.info("Created %s match %s (%d rounds)", entry.match.mode.value, match_id, rounds)
    data = _match_json(match_id, entry.match)
    data["player1_name"] = entry.player1_name
    data["player2_name"] = entry.player2_name
    return jsonify(data), 201


@app.route("/api/matches/<match_id>")
def api_get_match(match_id):
    entry = store.get(match_id)
    if entry is None:
        return _not_found(match_id)
    match, lock = entry.match, entry.lock
    with lock:
        return jsonify(_match_json(match_id, match))


@app.route("/api/matches/<match_id>/rounds", methods=["POST"])
def api_start_round(match_id):
    entry = store.get(match_id)
    if entry is None:
        return _not_found(match_id)
    match, lock = entry.match, entry.lock
    with lock:
        before = match.current_round
        round_num = match.start_new_round()
        if round_num == before:
            return _out_of_phase(match_id, match, "start a round")
        return jsonify({"round": round_num, "match": _match_json(match_id, match)})


@app.route("/api/matches/<match_id>/moves", methods=["POST"])
def api_submit_move(match_id):
    entry = store.get(match_id)
    if entry is None:
        return _not_found(match_id)
    data = _json_body()
    match, lock = entry.match, entry.lock
    with lock:
        if match.state is not MatchState.ROUND_ACTIVE:
            return _out_of_phase(match_id, match, "submit a move")
        match.submit_move(data.get("player", 1), data.get("move"))
        return jsonify({"accepted": True})


@app.route("/api/matches/<match_id>/finish", methods=["POST"])
def api_finish_round(match_id):
    entry = store.get(match_id)
    if entry is None:
        return _not_found(match_id)
    match, lock = entry.match, entry.lock
    with lock:
        record = match.finish_round()
        if record is None:
            return _out_of_phase(match_id, match, "finish a round")
        return jsonify({
            "outcome": record.to_dict(),
            "score": match.score_text,
            "has_more_rounds": match.has_more_rounds(),
            "winner": match.winner_label() if match.is_complete else None,
        })


@app.route("/api/matches/<match_id>/stats")
def api_match_stats(match_id):
    entry = store.get(match_id)
    if entry is None:
        return _not_found(match_id)
    match, lock = entry.match, entry.lock
    with lock:
        return jsonify(get_statistics(match).to_dict())


@app.route("/api/matches/<match_id>", methods=["DELETE"])
def api_discard_match(match_id):
    entry = store.discard(match_id)
    if entry is None:
        return _not_found(match_id)
    recorded = entry.match.is_complete
    if recorded:
        record_match(entry.match, history, players=players,
                     player1_name=entry.player1_name, player2_name=entry.player2_name)
    logger.info("Discarded match %s (recorded=%s)", match_id, recorded)
    return jsonify({"discarded": match_id, "recorded": recorded})


@app.route("/api/history")
def api_history():
    return jsonify(history.to_dict())


@app.route("/api/leaderboard")
def api_leaderboard():
    return jsonify(players.to_dict())


def main(argv=None):
    parser = argparse.ArgumentParser(prog="rps_duel.web", description="RPS Duel JSON API")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=5000)
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)
    print("\n🎮 RPS Duel API")
    print(f"  → http://{args.host}:{args.port}/api/config\n")
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()

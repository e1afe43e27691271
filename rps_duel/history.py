"""Finished-match records and the in-memory history sink.

How records are stored is up to the caller; anything with an
``add_record(record)`` method can receive them.
"""

from dataclasses import dataclass, field
from datetime import datetime
import threading
from typing import Optional, Protocol

from .engine import GameMode, Match, Winner
from .players import DEFAULT_PLAYER1_NAME, DEFAULT_PLAYER2_NAME, PlayerRegistry


@dataclass(frozen=True)
class GameRecord:
    """Summary of one finished match."""
    mode: GameMode
    rounds: int
    player1_score: int
    player2_score: int
    winner: Winner
    winner_label: str
    duration_ms: int
    played_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def from_match(cls, match: Match, winner_label: Optional[str] = None) -> "GameRecord":
        winner = match.get_game_winner()
        return cls(
            mode=match.mode,
            rounds=match.total_rounds,
            player1_score=match.player1_score,
            player2_score=match.player2_score,
            winner=winner,
            winner_label=winner_label or winner.label(match.mode),
            duration_ms=match.duration_ms,
        )

    @property
    def formatted_duration(self) -> str:
        seconds = self.duration_ms // 1000
        minutes, seconds = divmod(seconds, 60)
        if minutes:
            return f"{minutes}:{seconds:02d}"
        return f"{seconds}s"

    def to_dict(self) -> dict:
        return {
            "played_at": self.played_at.isoformat(timespec="seconds"),
            "mode": self.mode.value,
            "rounds": self.rounds,
            "player1_score": self.player1_score,
            "player2_score": self.player2_score,
            "winner": self.winner.value,
            "winner_label": self.winner_label,
            "duration_ms": self.duration_ms,
        }


class HistorySink(Protocol):
    def add_record(self, record: GameRecord) -> None:
        ...


@dataclass
class ModeStats:
    """Aggregates over the records of one game mode."""
    mode: GameMode
    records: list[GameRecord]

    @property
    def total_games(self) -> int:
        return len(self.records)

    @property
    def wins(self) -> int:
        return sum(1 for r in self.records if r.winner is Winner.PLAYER1)

    @property
    def win_percentage(self) -> float:
        return (self.wins / self.total_games * 100) if self.records else 0.0

    @property
    def average_duration_ms(self) -> int:
        if not self.records:
            return 0
        return sum(r.duration_ms for r in self.records) // len(self.records)

    @property
    def total_rounds_played(self) -> int:
        return sum(r.rounds for r in self.records)

    def to_dict(self) -> dict:
        return {
            "mode": self.mode.value,
            "games": self.total_games,
            "wins": self.wins,
            "win_pct": round(self.win_percentage, 2),
            "avg_duration_ms": self.average_duration_ms,
            "total_rounds": self.total_rounds_played,
        }


class MatchHistory:
    """In-memory list of finished matches with summary statistics."""

    def __init__(self):
        self._records: list[GameRecord] = []
        self._lock = threading.Lock()

    def add_record(self, record: GameRecord):
        with self._lock:
            self._records.append(record)

    def records(self) -> list[GameRecord]:
        with self._lock:
            return list(self._records)

    def clear(self):
        with self._lock:
            self._records.clear()

    @property
    def total_games(self) -> int:
        return len(self._records)

    @property
    def total_wins(self) -> int:
        """Matches won by player 1 (the human in PVC)."""
        return sum(1 for r in self.records() if r.winner is Winner.PLAYER1)

    @property
    def win_percentage(self) -> float:
        total = self.total_games
        return (self.total_wins / total * 100) if total else 0.0

    def stats_for_mode(self, mode: GameMode) -> ModeStats:
        return ModeStats(mode, [r for r in self.records() if r.mode is mode])

    def recent(self, count: int) -> list[GameRecord]:
        """The last `count` records, most recent first."""
        return list(reversed(self.records()))[:count]

    def summary_text(self) -> str:
        if not self.total_games:
            return "No games played yet."

        lines = [
            "=== GAME STATISTICS ===",
            f"Total Games: {self.total_games}",
            f"Total Wins: {self.total_wins}",
            f"Win Rate: {self.win_percentage:.1f}%",
            "",
        ]
        for mode in (GameMode.PVC, GameMode.PVP):
            stats = self.stats_for_mode(mode)
            if stats.total_games:
                lines.append(f"{mode.description}:")
                lines.append(f"  Games: {stats.total_games}, Wins: {stats.wins} "
                             f"({stats.win_percentage:.1f}%)")
        return "\n".join(lines) + "\n"

    def to_dict(self) -> dict:
        return {
            "total_games": self.total_games,
            "total_wins": self.total_wins,
            "win_pct": round(self.win_percentage, 2),
            "modes": [self.stats_for_mode(m).to_dict() for m in GameMode],
            "recent": [r.to_dict() for r in self.recent(10)],
        }


def record_match(match: Match, sink: HistorySink,
                 winner_label: Optional[str] = None,
                 players: Optional[PlayerRegistry] = None,
                 player1_name: str = DEFAULT_PLAYER1_NAME,
                 player2_name: str = DEFAULT_PLAYER2_NAME) -> GameRecord:
    """Hand a finished match's summary to `sink` and return it.

    When `players` is given the match is also credited to the named profiles.
    """
    record = GameRecord.from_match(match, winner_label)
    sink.add_record(record)
    if players is not None:
        players.record_game(match, player1_name, player2_name)
    return record

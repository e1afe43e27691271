"""Named player profiles and the win-rate leaderboard."""

from dataclasses import dataclass, field
from datetime import datetime
import threading
from typing import Optional

from .engine import GameMode, Match, Winner

DEFAULT_PLAYER1_NAME = "Player 1"
DEFAULT_PLAYER2_NAME = "Player 2"


@dataclass
class PlayerStats:
    """Lifetime results for one named player."""
    name: str
    games_played: int = 0
    games_won: int = 0
    rounds_played: int = 0
    pvc_games: int = 0
    pvc_wins: int = 0
    pvp_games: int = 0
    pvp_wins: int = 0
    last_played: datetime = field(default_factory=datetime.now)

    @property
    def win_rate(self) -> float:
        return (self.games_won / self.games_played * 100) if self.games_played else 0.0

    @property
    def pvc_win_rate(self) -> float:
        return (self.pvc_wins / self.pvc_games * 100) if self.pvc_games else 0.0

    @property
    def pvp_win_rate(self) -> float:
        return (self.pvp_wins / self.pvp_games * 100) if self.pvp_games else 0.0

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "games_played": self.games_played,
            "games_won": self.games_won,
            "win_pct": round(self.win_rate, 2),
            "rounds_played": self.rounds_played,
            "pvc": {"games": self.pvc_games, "wins": self.pvc_wins,
                    "win_pct": round(self.pvc_win_rate, 2)},
            "pvp": {"games": self.pvp_games, "wins": self.pvp_wins,
                    "win_pct": round(self.pvp_win_rate, 2)},
            "last_played": self.last_played.isoformat(timespec="seconds"),
        }


class PlayerRegistry:
    """In-memory profiles keyed by player name."""

    def __init__(self):
        self._players: dict[str, PlayerStats] = {}
        self._lock = threading.Lock()

    def __len__(self):
        return len(self._players)

    def __contains__(self, name):
        return name in self._players

    def get(self, name: str) -> Optional[PlayerStats]:
        with self._lock:
            return self._players.get(name)

    def get_or_create(self, name: str) -> PlayerStats:
        with self._lock:
            if name not in self._players:
                self._players[name] = PlayerStats(name=name)
            return self._players[name]

    def update_player_stats(self, name: str, mode, won: bool, rounds: int) -> PlayerStats:
        mode = GameMode.parse(mode)
        player = self.get_or_create(name)
        with self._lock:
            player.games_played += 1
            player.rounds_played += rounds
            if won:
                player.games_won += 1
            if mode is GameMode.PVC:
                player.pvc_games += 1
                player.pvc_wins += int(won)
            else:
                player.pvp_games += 1
                player.pvp_wins += int(won)
            player.last_played = datetime.now()
        return player

    def record_game(self, match: Match, player1_name: str = DEFAULT_PLAYER1_NAME,
                    player2_name: str = DEFAULT_PLAYER2_NAME):
        """Credit a finished match to its named players.

        The computer in PVC has no profile, so only player 1 is updated there.
        """
        winner = match.get_game_winner()
        rounds = len(match.history)
        self.update_player_stats(player1_name, match.mode, winner is Winner.PLAYER1, rounds)
        if match.mode is GameMode.PVP:
            self.update_player_stats(player2_name, match.mode, winner is Winner.PLAYER2, rounds)

    def leaderboard(self) -> list[PlayerStats]:
        """Profiles by win rate, then games won, highest first."""
        with self._lock:
            players = list(self._players.values())
        return sorted(players, key=lambda p: (-round(p.win_rate, 2), -p.games_won, p.name))

    def recent_names(self, count: int = 10) -> list[str]:
        with self._lock:
            players = sorted(self._players.values(), key=lambda p: p.last_played, reverse=True)
        return [p.name for p in players[:count]]

    def clear(self):
        with self._lock:
            self._players.clear()

    def leaderboard_text(self) -> str:
        board = self.leaderboard()
        if not board:
            return "No players yet."
        lines = [
            "=== LEADERBOARD ===",
            f"  {'#':>3s}  {'Player':20s} {'Games':>5s} {'Won':>5s} {'Win %':>7s} "
            f"{'PvC W/L':>8s} {'PvP W/L':>8s}",
        ]
        for rank, p in enumerate(board, 1):
            pvc = f"{p.pvc_wins}/{p.pvc_games - p.pvc_wins}"
            pvp = f"{p.pvp_wins}/{p.pvp_games - p.pvp_wins}"
            lines.append(f"  {rank:>3d}  {p.name[:20]:20s} {p.games_played:>5d} {p.games_won:>5d} "
                         f"{p.win_rate:>6.1f}% {pvc:>8s} {pvp:>8s}")
        return "\n".join(lines) + "\n"

    def to_dict(self) -> dict:
        return {"leaderboard": [p.to_dict() for p in self.leaderboard()]}

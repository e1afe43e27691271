"""Statistics and pretty-printing for a played match."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Optional

from .engine import GameMode, Match, Player, RoundRecord
from .moves import Move, MOVES, Result, symbol


@dataclass(frozen=True)
class MatchStatistics:
    """Read-only view over the resolved rounds of one match."""
    mode: GameMode
    player1_score: int
    player2_score: int
    history: tuple[RoundRecord, ...] = field(default_factory=tuple)

    @classmethod
    def from_match(cls, match: Match) -> "MatchStatistics":
        return cls(
            mode=match.mode,
            player1_score=match.player1_score,
            player2_score=match.player2_score,
            history=tuple(match.history),
        )

    @property
    def total_rounds(self) -> int:
        return len(self.history)

    def _count(self, result: Result) -> int:
        return sum(1 for r in self.history if r.result is result)

    @property
    def player1_wins(self) -> int:
        return self._count(Result.WIN)

    @property
    def player2_wins(self) -> int:
        return self._count(Result.LOSE)

    @property
    def draws(self) -> int:
        return self._count(Result.DRAW)

    @property
    def voids(self) -> int:
        return self._count(Result.VOID)

    @property
    def walkovers(self) -> int:
        return sum(1 for r in self.history if r.is_walkover)

    @property
    def win_percentage(self) -> float:
        """Player 1's share of resolved rounds won."""
        return (self.player1_wins / self.total_rounds * 100) if self.total_rounds else 0.0

    @property
    def player2_win_percentage(self) -> float:
        return (self.player2_wins / self.total_rounds * 100) if self.total_rounds else 0.0

    def move_frequency(self, player: Player) -> dict[Move, int]:
        attr = "player1_move" if player is Player.ONE else "player2_move"
        counts = Counter(getattr(r, attr) for r in self.history)
        return {m: counts[m] for m in MOVES}

    @property
    def per_player_frequency(self) -> dict[Player, dict[Move, int]]:
        return {p: self.move_frequency(p) for p in Player}

    def most_common_move(self, player: Player) -> Optional[Move]:
        freq = self.move_frequency(player)
        if not any(freq.values()):
            return None
        return max(MOVES, key=lambda m: freq[m])

    @property
    def player_names(self) -> tuple[str, str]:
        if self.mode is GameMode.PVC:
            return "You", "Computer"
        return "Player 1", "Player 2"

    @property
    def summary_text(self) -> str:
        p1_name = "Your" if self.mode is GameMode.PVC else "Player 1"
        lines = [
            "Game Statistics:",
            f"Total Rounds: {self.total_rounds}",
            f"Final Score: {self.player1_score} - {self.player2_score}",
            f"{p1_name} Win Rate: {self.win_percentage:.1f}%",
        ]
        for player, name in zip(Player, self.player_names):
            freq = self.move_frequency(player)
            moves = ", ".join(f"{m.value} {freq[m]}" for m in MOVES)
            lines.append(f"{name} moves: {moves}")
        return "\n".join(lines) + "\n"

    def to_dict(self) -> dict:
        return {
            "mode": self.mode.value,
            "total_rounds": self.total_rounds,
            "player1_score": self.player1_score,
            "player2_score": self.player2_score,
            "player1_wins": self.player1_wins,
            "player2_wins": self.player2_wins,
            "draws": self.draws,
            "voids": self.voids,
            "win_percentage": round(self.win_percentage, 2),
            "per_player_frequency": {
                f"player{p.value}": {m.value: c for m, c in self.move_frequency(p).items()}
                for p in Player
            },
            "summary": self.summary_text,
        }


def get_statistics(match: Match) -> MatchStatistics:
    return MatchStatistics.from_match(match)


# ---------------------------------------------------------------------------
# Pretty-printing
# ---------------------------------------------------------------------------

def print_round(record: RoundRecord, match: Match):
    """Print one resolved round as a single line."""
    if record.is_void:
        outcome = "VOID (both players cheated)"
    elif record.player1_cheated or record.player2_cheated:
        cheater = "P1" if record.player1_cheated else "P2"
        outcome = f"{record.result.value.upper()} ({cheater} cheated)"
    else:
        outcome = record.result.value.upper()
    print(f"  Round {record.number}: {symbol(record.player1_move)}  vs  "
          f"{symbol(record.player2_move)}   {outcome:<12s} Score: {match.score_text}")


def print_match_summary(match: Match):
    """Print a detailed summary of a finished match."""
    stats = get_statistics(match)
    name_1, name_2 = stats.player_names
    most_1 = stats.most_common_move(Player.ONE)
    most_2 = stats.most_common_move(Player.TWO)

    print("=" * 60)
    print(f"  {name_1}  vs  {name_2}  ({match.mode.description})")
    print(f"  Rounds: {stats.total_rounds} of {match.total_rounds}")
    print("=" * 60)
    print(f"  {'':20s} {name_1:>10s} {name_2:>10s}")
    print(f"  {'Wins':20s} {stats.player1_wins:>10d} {stats.player2_wins:>10d}")
    print(f"  {'Draws':20s} {stats.draws:>10d} {stats.draws:>10d}")
    print(f"  {'Win %':20s} {stats.win_percentage:>9.1f}% {stats.player2_win_percentage:>9.1f}%")
    print(f"  {'Most Common Move':20s} {most_1.value if most_1 else 'N/A':>10s} "
          f"{most_2.value if most_2 else 'N/A':>10s}")
    if stats.voids:
        print(f"  {'Void rounds':20s} {stats.voids:>10d}")
    print(f"\n  ★ {match.winner_label()}  ({match.score_text})")
    print("=" * 60)

"""Batch simulation: a scripted bot plays PVC matches against the opponent AI.

Each match gets its own seeded RNGs derived from the master seed, so a
seeded run is fully reproducible.
"""

from dataclasses import dataclass, field
import random
from typing import Callable, Optional

from . import config
from .bots import Bot
from .engine import GameMode, Match, Winner
from .opponent import OpponentAI, ProfilePool
from .stats import MatchStatistics


def play_match(
    bot: Bot,
    rounds: int = config.DEFAULT_ROUNDS,
    seed: Optional[int] = None,
    opponent: Optional[OpponentAI] = None,
) -> Match:
    """Play one full PVC match with `bot` as player 1 and return it.

    Matches longer than ``MAX_ROUNDS`` are allowed here for benchmarking.
    """
    master_rng = random.Random(seed)
    bot_seed = master_rng.randint(0, 2**31)
    ai_seed = master_rng.randint(0, 2**31)

    bot.rng = random.Random(bot_seed)
    bot.reset()
    if opponent is None:
        opponent = OpponentAI(rng=random.Random(ai_seed))
    else:
        opponent.rng = random.Random(ai_seed)

    match = Match(
        GameMode.PVC, rounds, opponent=opponent,
        max_rounds=max(config.MAX_ROUNDS, rounds),
    )

    # Bot sees its own moves and the computer's, None where a move was missing
    my_history: list = []
    opp_history: list = []
    while match.has_more_rounds():
        round_num = match.start_new_round() - 1
        move = bot.choose(round_num, my_history, opp_history)
        if move is not None:
            match.submit_move(1, move)
        record = match.finish_round()
        my_history.append(record.player1_move)
        opp_history.append(record.player2_move)
    return match


@dataclass
class SimulationSummary:
    """Outcome of a batch of matches between one bot and the opponent AI."""
    bot_name: str
    rounds: int
    matches: list[MatchStatistics] = field(default_factory=list)

    def _match_count(self, winner: Winner) -> int:
        count = 0
        for m in self.matches:
            if m.player1_score > m.player2_score:
                outcome = Winner.PLAYER1
            elif m.player2_score > m.player1_score:
                outcome = Winner.PLAYER2
            else:
                outcome = Winner.TIE
            count += outcome is winner
        return count

    @property
    def bot_match_wins(self) -> int:
        return self._match_count(Winner.PLAYER1)

    @property
    def computer_match_wins(self) -> int:
        return self._match_count(Winner.PLAYER2)

    @property
    def tied_matches(self) -> int:
        return self._match_count(Winner.TIE)

    @property
    def total_rounds_played(self) -> int:
        return sum(m.total_rounds for m in self.matches)

    @property
    def computer_round_win_pct(self) -> float:
        total = self.total_rounds_played
        wins = sum(m.player2_wins for m in self.matches)
        return (wins / total * 100) if total else 0.0

    @property
    def bot_round_win_pct(self) -> float:
        total = self.total_rounds_played
        wins = sum(m.player1_wins for m in self.matches)
        return (wins / total * 100) if total else 0.0

    def to_dict(self) -> dict:
        return {
            "bot": self.bot_name,
            "rounds": self.rounds,
            "matches": len(self.matches),
            "bot_match_wins": self.bot_match_wins,
            "computer_match_wins": self.computer_match_wins,
            "tied_matches": self.tied_matches,
            "bot_round_win_pct": round(self.bot_round_win_pct, 2),
            "computer_round_win_pct": round(self.computer_round_win_pct, 2),
        }


def simulate_matches(
    bot: Bot,
    matches: int = 10,
    rounds: int = config.MAX_ROUNDS,
    seed: Optional[int] = None,
    pooled: bool = False,
    on_match_done: Optional[Callable[[int, int, MatchStatistics], None]] = None,
) -> SimulationSummary:
    """Run `matches` PVC matches of `rounds` rounds each.

    Args:
        pooled: If True the opponent keeps one profile of the bot across all
                matches instead of starting fresh every match.
        on_match_done: Optional callback(completed, total, stats) called
                       after each match finishes.
    """
    pool = ProfilePool() if pooled else None
    summary = SimulationSummary(bot_name=bot.name, rounds=rounds)

    for i in range(matches):
        match_seed = (seed * 1000 + i) if seed is not None else None
        opponent = pool.opponent_for(bot.name) if pool is not None else None
        match = play_match(bot, rounds=rounds, seed=match_seed, opponent=opponent)
        stats = MatchStatistics.from_match(match)
        summary.matches.append(stats)
        if on_match_done:
            on_match_done(i + 1, matches, stats)
    return summary

"""Scripted move sources that stand in for a human player.

Used by the simulator and the tests to drive player 1 through a PVC
match. A bot may return None to model a player who lets the input
window run out.
"""

from abc import ABC, abstractmethod
from collections import Counter
import random
from typing import Optional

from .moves import Move, MOVES, counter


class Bot(ABC):
    """Base class for scripted players."""

    def __init__(self):
        self.rng: random.Random = random.Random()
        self.reset()

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def choose(self, round_num: int, my_history: list, opp_history: list) -> Optional[Move]:
        ...

    def reset(self):
        """Reset any internal state between matches."""
        pass

    def __repr__(self):
        return f"<{self.name}>"


class AlwaysRock(Bot):
    """Always chooses Rock. The lifetime-frequency stages should punish it."""
    name = "Always Rock"

    def choose(self, round_num, my_history, opp_history):
        return Move.ROCK


class AlwaysPaper(Bot):
    name = "Always Paper"

    def choose(self, round_num, my_history, opp_history):
        return Move.PAPER


class AlwaysScissors(Bot):
    name = "Always Scissors"

    def choose(self, round_num, my_history, opp_history):
        return Move.SCISSORS


class PureRandom(Bot):
    """Uniform random play; nothing for the opponent to learn."""
    name = "Pure Random"

    def choose(self, round_num, my_history, opp_history):
        return self.rng.choice(MOVES)


class Cycle(Bot):
    """Rock → Paper → Scissors, repeated. Trips the progression detector."""
    name = "Cycle"

    def choose(self, round_num, my_history, opp_history):
        return MOVES[round_num % 3]


class Alternator(Bot):
    """Rock, Paper, Rock, Paper... Trips the A-B-A-B detector."""
    name = "Alternator"

    def choose(self, round_num, my_history, opp_history):
        return Move.ROCK if round_num % 2 == 0 else Move.PAPER


class FrequencyAnalyzer(Bot):
    """Counters the computer's most frequent move so far."""
    name = "Frequency Analyzer"

    def choose(self, round_num, my_history, opp_history):
        seen = [m for m in opp_history if m is not None]
        if not seen:
            return self.rng.choice(MOVES)
        return counter(Counter(seen).most_common(1)[0][0])


class Silent(Bot):
    """Never moves; every round is a walkover for the computer."""
    name = "Silent"

    def choose(self, round_num, my_history, opp_history):
        return None


ALL_BOT_CLASSES = [
    AlwaysRock,
    AlwaysPaper,
    AlwaysScissors,
    PureRandom,
    Cycle,
    Alternator,
    FrequencyAnalyzer,
    Silent,
]


def get_bot_by_name(name: str) -> Bot:
    """Get a single bot instance by name (case-insensitive)."""
    name_lower = name.lower()
    for cls in ALL_BOT_CLASSES:
        if cls.name.lower() == name_lower:
            return cls()
    available = ", ".join(cls.name for cls in ALL_BOT_CLASSES)
    raise ValueError(f"Unknown bot: '{name}'. Available: {available}")

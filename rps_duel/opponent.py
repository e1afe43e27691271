"""Adaptive computer opponent.

The opponent keeps two views of the human's play: a lifetime frequency
table and a short FIFO window of the most recent moves. Move selection
goes through three phases:

    * first round: uniform random
    * early game (fewer than ``EARLY_GAME_ROUNDS`` rounds played): mostly
      random, sometimes countering the lifetime favourite
    * strategic phase: a cascade of stages, each tried with its own
      independent random draw only when the previous one did not fire

Every random decision goes through ``self.rng`` so a seeded
``random.Random`` reproduces the whole branch sequence.
"""

from collections import Counter, deque
from dataclasses import dataclass, field
import logging
import random
import threading
from typing import Callable, Optional, Sequence

from . import config
from .moves import Move, MOVES, Result, compare, counter, next_in_cycle, random_move

logger = logging.getLogger(__name__)


def _empty_frequency() -> dict[Move, int]:
    return {m: 0 for m in MOVES}


def _most_frequent(counts) -> Move:
    """Most frequent move, ties going to the earliest of ROCK, PAPER, SCISSORS."""
    return max(MOVES, key=lambda m: counts[m])


@dataclass
class OpponentProfile:
    """What the opponent has learned about one human player."""
    frequency: dict[Move, int] = field(default_factory=_empty_frequency)
    recent: deque = field(default_factory=lambda: deque(maxlen=config.LEARNING_WINDOW))

    @property
    def moves_learned(self) -> int:
        return sum(self.frequency.values())

    def record(self, move: Move):
        self.frequency[move] += 1
        self.recent.append(move)

    def reset(self):
        self.frequency = _empty_frequency()
        self.recent.clear()

    def to_dict(self) -> dict:
        return {
            "frequency": {m.value: c for m, c in self.frequency.items()},
            "recent": [m.value for m in self.recent],
        }


class OpponentAI:
    """Stateful computer player for PVC matches."""

    name = "Adaptive Opponent"

    def __init__(self, rng: Optional[random.Random] = None,
                 profile: Optional[OpponentProfile] = None):
        self.rng = rng if rng is not None else random.Random()
        self.profile = profile if profile is not None else OpponentProfile()
        # (trigger probability, stage) pairs; a stage may return None to pass
        self._stages: list[tuple[float, Callable[[], Optional[Move]]]] = [
            (config.RECENT_COUNTER_PROB, self._counter_recent_favourite),
            (config.PATTERN_PROB, self._counter_pattern),
            (config.ANTI_FREQUENCY_PROB, self._least_beaten_move),
        ]

    @property
    def frequency(self) -> dict[Move, int]:
        return self.profile.frequency

    @property
    def recent_window(self) -> list[Move]:
        return list(self.profile.recent)

    def learn_from_round(self, player_move: Optional[Move],
                         computer_move: Optional[Move] = None,
                         result: Optional[Result] = None):
        """Update the profile with the human's move; missing moves teach nothing."""
        if player_move is None:
            return
        self.profile.record(player_move)

    def get_next_move(self, history: Sequence) -> Move:
        rounds_played = len(history)
        if rounds_played == 0:
            return random_move(self.rng)
        if rounds_played < config.EARLY_GAME_ROUNDS:
            return self._early_game_move()
        return self._strategic_move()

    # -- phases -------------------------------------------------------------

    def _early_game_move(self) -> Move:
        if self.rng.random() < config.EARLY_RANDOM_PROB:
            return random_move(self.rng)
        return counter(_most_frequent(self.profile.frequency))

    def _strategic_move(self) -> Move:
        for probability, stage in self._stages:
            if self.rng.random() < probability:
                move = stage()
                if move is not None:
                    logger.debug("Strategy %s chose %s", stage.__name__, move.value)
                    return move
        return random_move(self.rng)

    # -- stages -------------------------------------------------------------

    def _counter_recent_favourite(self) -> Move:
        if not self.profile.recent:
            return random_move(self.rng)
        return counter(_most_frequent(Counter(self.profile.recent)))

    def _counter_pattern(self) -> Optional[Move]:
        predicted = detect_pattern(list(self.profile.recent))
        if predicted is None:
            return None
        return counter(predicted)

    def _least_beaten_move(self) -> Move:
        """Move that the lifetime favourites would have beaten least often."""
        beaten = {
            candidate: sum(
                count for player_move, count in self.profile.frequency.items()
                if compare(player_move, candidate) is Result.WIN
            )
            for candidate in MOVES
        }
        return min(MOVES, key=lambda m: beaten[m])


def detect_pattern(recent: list[Move]) -> Optional[Move]:
    """Predict the next human move from an A-B-A-B or R-P-S run, if any."""
    if len(recent) < 3:
        return None

    if len(recent) >= 4:
        last, second, third, fourth = recent[-1], recent[-2], recent[-3], recent[-4]
        if last == third and second == fourth and last != second:
            return second

    first, second, last = recent[-3], recent[-2], recent[-1]
    if next_in_cycle(first) == second and next_in_cycle(second) == last:
        return next_in_cycle(last)
    return None


class ProfilePool:
    """Opponent profiles keyed by human player name.

    Lets a returning player face an opponent that remembers them. Profiles
    are only shared through the pool; a bare ``OpponentAI()`` always starts
    fresh.
    """

    def __init__(self):
        self._profiles: dict[str, OpponentProfile] = {}
        self._lock = threading.Lock()

    def __len__(self):
        return len(self._profiles)

    def __contains__(self, player_name: str):
        return player_name in self._profiles

    def profile_for(self, player_name: str) -> OpponentProfile:
        with self._lock:
            if player_name not in self._profiles:
                self._profiles[player_name] = OpponentProfile()
            return self._profiles[player_name]

    def opponent_for(self, player_name: str,
                     rng: Optional[random.Random] = None) -> OpponentAI:
        return OpponentAI(rng=rng, profile=self.profile_for(player_name))

    def forget(self, player_name: str):
        with self._lock:
            self._profiles.pop(player_name, None)

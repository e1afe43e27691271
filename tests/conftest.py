from __future__ import annotations

import pytest

from rps_duel.moves import MOVES


class ScriptedRandom:
    """Stand-in for random.Random that replays fixed draws.

    ``random()`` returns the queued floats in order; ``choice()`` returns the
    queued moves in order, or the first element once the queue is empty.
    """

    def __init__(self, draws=(), choices=()):
        self.draws = list(draws)
        self.choices = list(choices)
        self.random_calls = 0
        self.choice_calls = 0

    def random(self) -> float:
        self.random_calls += 1
        if not self.draws:
            raise AssertionError("ran out of scripted draws")
        return self.draws.pop(0)

    def choice(self, seq):
        self.choice_calls += 1
        if self.choices:
            pick = self.choices.pop(0)
            assert pick in seq
            return pick
        return seq[0]


@pytest.fixture()
def scripted():
    return ScriptedRandom


@pytest.fixture()
def all_moves():
    return list(MOVES)

import random

import pytest

from rps_duel.moves import (
    BEATEN_BY,
    BEATS,
    MOVES,
    Move,
    Result,
    compare,
    counter,
    next_in_cycle,
    opposite,
    parse_move,
    random_move,
    symbol,
)


def test_compare_examples():
    assert compare(Move.ROCK, Move.SCISSORS) is Result.WIN
    assert compare(Move.SCISSORS, Move.ROCK) is Result.LOSE
    assert compare(Move.ROCK, Move.ROCK) is Result.DRAW
    assert compare(Move.PAPER, Move.ROCK) is Result.WIN
    assert compare(Move.SCISSORS, Move.PAPER) is Result.WIN


@pytest.mark.parametrize("a", MOVES)
@pytest.mark.parametrize("b", MOVES)
def test_compare_is_antisymmetric(a, b):
    if a == b:
        assert compare(a, b) is Result.DRAW
    else:
        assert {compare(a, b), compare(b, a)} == {Result.WIN, Result.LOSE}
        assert compare(b, a) is opposite(compare(a, b))


def test_counter_beats_its_argument():
    assert counter(Move.ROCK) is Move.PAPER
    assert counter(Move.PAPER) is Move.SCISSORS
    assert counter(Move.SCISSORS) is Move.ROCK
    for m in MOVES:
        assert compare(counter(m), m) is Result.WIN
        assert BEATS[counter(m)] is m
        assert BEATEN_BY[m] is counter(m)


def test_next_in_cycle_wraps():
    assert next_in_cycle(Move.ROCK) is Move.PAPER
    assert next_in_cycle(Move.PAPER) is Move.SCISSORS
    assert next_in_cycle(Move.SCISSORS) is Move.ROCK


def test_random_move_reaches_every_move():
    rng = random.Random(7)
    seen = {random_move(rng) for _ in range(200)}
    assert seen == set(MOVES)


def test_random_move_is_reproducible():
    a = [random_move(random.Random(3)) for _ in range(5)]
    b = [random_move(random.Random(3)) for _ in range(5)]
    assert a == b


def test_parse_move_accepts_values_and_names():
    assert parse_move("rock") is Move.ROCK
    assert parse_move(" PAPER ") is Move.PAPER
    assert parse_move(Move.SCISSORS) is Move.SCISSORS
    with pytest.raises(ValueError, match="Unknown move"):
        parse_move("lizard")


def test_symbol_for_missing_move():
    assert symbol(None) == "?"
    assert symbol(Move.ROCK) == "✊"

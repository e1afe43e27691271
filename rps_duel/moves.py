"""Move values and the outcome rule for Rock-Paper-Scissors."""

from enum import Enum
import random
from typing import Optional


class Move(Enum):
    ROCK = "rock"
    PAPER = "paper"
    SCISSORS = "scissors"


class Result(Enum):
    """Round outcome, always from player 1's (or the stated) perspective.

    ``VOID`` is never produced by :func:`compare`; only cheat adjudication
    yields it.
    """
    WIN = "win"
    LOSE = "lose"
    DRAW = "draw"
    VOID = "void"


# Enumeration order, also the tie-break order everywhere
MOVES = [Move.ROCK, Move.PAPER, Move.SCISSORS]

# What each move beats
BEATS = {
    Move.ROCK: Move.SCISSORS,
    Move.SCISSORS: Move.PAPER,
    Move.PAPER: Move.ROCK,
}

# What beats each move
BEATEN_BY = {v: k for k, v in BEATS.items()}

# Pre-computed outcome table: (move_a, move_b) → result for A
_OUTCOME_TABLE = {
    (Move.ROCK, Move.ROCK): Result.DRAW,
    (Move.ROCK, Move.PAPER): Result.LOSE,
    (Move.ROCK, Move.SCISSORS): Result.WIN,
    (Move.PAPER, Move.ROCK): Result.WIN,
    (Move.PAPER, Move.PAPER): Result.DRAW,
    (Move.PAPER, Move.SCISSORS): Result.LOSE,
    (Move.SCISSORS, Move.ROCK): Result.LOSE,
    (Move.SCISSORS, Move.PAPER): Result.WIN,
    (Move.SCISSORS, Move.SCISSORS): Result.DRAW,
}

SYMBOLS = {
    Move.ROCK: "✊",
    Move.PAPER: "✋",
    Move.SCISSORS: "✌️",
}
UNKNOWN_SYMBOL = "?"


def compare(move_a: Move, move_b: Move) -> Result:
    """Return the result of ``move_a`` against ``move_b`` from A's side."""
    return _OUTCOME_TABLE[move_a, move_b]


def counter(move: Move) -> Move:
    """Return the move that beats `move`."""
    return BEATEN_BY[move]


def next_in_cycle(move: Move) -> Move:
    """Successor in the ROCK → PAPER → SCISSORS → ROCK ordering."""
    return MOVES[(MOVES.index(move) + 1) % 3]


def random_move(rng: random.Random) -> Move:
    return rng.choice(MOVES)


def opposite(result: Result) -> Result:
    """Flip a result to the other player's perspective."""
    if result is Result.WIN:
        return Result.LOSE
    if result is Result.LOSE:
        return Result.WIN
    return result


def parse_move(value) -> Move:
    """Accept a Move, its value ("rock") or its name ("ROCK"), case-insensitive."""
    if isinstance(value, Move):
        return value
    text = str(value).strip().lower()
    for move in MOVES:
        if move.value == text:
            return move
    available = ", ".join(m.value for m in MOVES)
    raise ValueError(f"Unknown move: '{value}'. Available: {available}")


def symbol(move: Optional[Move]) -> str:
    if move is None:
        return UNKNOWN_SYMBOL
    return SYMBOLS[move]

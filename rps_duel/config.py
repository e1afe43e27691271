"""Game configuration constants."""

from .moves import Move

# ---------------------------------------------------------------------------
# Match length
# ---------------------------------------------------------------------------

MIN_ROUNDS = 1
MAX_ROUNDS = 10
DEFAULT_ROUNDS = 3
ROUND_OPTIONS = (1, 3, 5, 7, 9)

# Seconds the orchestration layer keeps the input window open
COUNTDOWN_SECONDS = 3

# ---------------------------------------------------------------------------
# Opponent AI
# ---------------------------------------------------------------------------

LEARNING_WINDOW = 5
EARLY_GAME_ROUNDS = 3

# Early game: chance of a plain random move
EARLY_RANDOM_PROB = 0.7

# Strategic phase stage triggers, each applied to the branch left over by
# the previous stage (conditional, not a partition of 1)
RECENT_COUNTER_PROB = 0.4
PATTERN_PROB = 0.5
ANTI_FREQUENCY_PROB = 0.67

# ---------------------------------------------------------------------------
# Keyboard bindings
# ---------------------------------------------------------------------------

PLAYER1_KEYS = {
    "A": Move.ROCK,
    "S": Move.PAPER,
    "D": Move.SCISSORS,
}

PLAYER2_KEYS = {
    "J": Move.ROCK,
    "K": Move.PAPER,
    "L": Move.SCISSORS,
}

PVC_CONTROLS = "A=Rock, S=Paper, D=Scissors"
PVP_CONTROLS = "P1: A/S/D | P2: J/K/L"

# ---------------------------------------------------------------------------
# Web API
# ---------------------------------------------------------------------------

# Matches untouched for this long are dropped from the server store
MATCH_IDLE_SECONDS = 30 * 60


def is_valid_rounds(rounds, max_rounds: int = MAX_ROUNDS) -> bool:
    if isinstance(rounds, bool) or not isinstance(rounds, int):
        return False
    return MIN_ROUNDS <= rounds <= max_rounds

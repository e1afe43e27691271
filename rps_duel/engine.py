"""Match and round state machine for two-player Rock-Paper-Scissors.

A :class:`Match` owns exactly one active round at a time and moves through

    IDLE → ROUND_ACTIVE → RESOLVING → ROUND_COMPLETE → ROUND_ACTIVE ...
                                                   ↘ MATCH_COMPLETE

The driving layer (CLI, web server, UI) owns all timing: it opens a round,
feeds moves in while its input window is open and decides when to call
:meth:`Match.finish_round`. Calls made in the wrong phase are ignored.
"""

from dataclasses import dataclass
from enum import Enum
import logging
import random
import time
from typing import Optional

from . import config
from .moves import Move, Result, compare, parse_move
from .opponent import OpponentAI

logger = logging.getLogger(__name__)


class InvalidRoundsError(ValueError):
    """Requested match length is outside the allowed range."""


class GameMode(Enum):
    PVP = "pvp"
    PVC = "pvc"

    @property
    def description(self) -> str:
        return "Player vs Computer" if self is GameMode.PVC else "Player vs Player"

    @property
    def controls(self) -> str:
        return config.PVC_CONTROLS if self is GameMode.PVC else config.PVP_CONTROLS

    @classmethod
    def parse(cls, value) -> "GameMode":
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for mode in cls:
            if mode.value == text:
                return mode
        raise ValueError(f"Unknown game mode: '{value}'. Available: pvp, pvc")


class Player(Enum):
    ONE = 1
    TWO = 2

    @classmethod
    def parse(cls, value) -> "Player":
        if isinstance(value, cls):
            return value
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            raise ValueError(f"Unknown player: '{value}'. Available: 1, 2") from None


class Winner(Enum):
    PLAYER1 = "player1"
    PLAYER2 = "player2"
    TIE = "tie"

    def label(self, mode: GameMode) -> str:
        if self is Winner.TIE:
            return "It's a Tie!"
        if mode is GameMode.PVC:
            return "You Win!" if self is Winner.PLAYER1 else "Computer Wins!"
        return "Player 1 Wins!" if self is Winner.PLAYER1 else "Player 2 Wins!"


class MatchState(Enum):
    IDLE = "idle"
    ROUND_ACTIVE = "round_active"
    RESOLVING = "resolving"
    ROUND_COMPLETE = "round_complete"
    MATCH_COMPLETE = "match_complete"


@dataclass
class Round:
    """The round currently accepting input."""
    player1_move: Optional[Move] = None
    player2_move: Optional[Move] = None
    player1_cheated: bool = False
    player2_cheated: bool = False

    def move_of(self, player: Player) -> Optional[Move]:
        return self.player1_move if player is Player.ONE else self.player2_move

    def set_move(self, player: Player, move: Move):
        if player is Player.ONE:
            self.player1_move = move
        else:
            self.player2_move = move

    def flag_cheat(self, player: Player):
        if player is Player.ONE:
            self.player1_cheated = True
        else:
            self.player2_cheated = True


@dataclass(frozen=True)
class RoundRecord:
    """A resolved round, as kept in the match history."""
    number: int
    player1_move: Optional[Move]
    player2_move: Optional[Move]
    player1_cheated: bool
    player2_cheated: bool
    result: Result

    @property
    def is_void(self) -> bool:
        return self.result is Result.VOID

    @property
    def is_walkover(self) -> bool:
        """Decided without comparing moves because a move was missing."""
        if self.player1_cheated or self.player2_cheated:
            return False
        missing = (self.player1_move is None) + (self.player2_move is None)
        return missing == 1

    @property
    def winner(self) -> Optional[Player]:
        if self.result is Result.WIN:
            return Player.ONE
        if self.result is Result.LOSE:
            return Player.TWO
        return None

    def to_dict(self) -> dict:
        return {
            "round": self.number,
            "result": self.result.value,
            "player1_move": self.player1_move.value if self.player1_move else None,
            "player2_move": self.player2_move.value if self.player2_move else None,
            "player1_cheated": self.player1_cheated,
            "player2_cheated": self.player2_cheated,
        }


class Match:
    """One session of ``total_rounds`` rounds between two move sources."""

    def __init__(
        self,
        mode: GameMode,
        total_rounds: int = config.DEFAULT_ROUNDS,
        opponent: Optional[OpponentAI] = None,
        rng: Optional[random.Random] = None,
        max_rounds: int = config.MAX_ROUNDS,
    ):
        if not config.is_valid_rounds(total_rounds, max_rounds):
            raise InvalidRoundsError(
                f"Rounds must be between {config.MIN_ROUNDS} and {max_rounds}, "
                f"got {total_rounds!r}"
            )
        self.mode = GameMode.parse(mode)
        self.total_rounds = total_rounds
        self.current_round = 0
        self.player1_score = 0
        self.player2_score = 0
        self.history: list[RoundRecord] = []
        self.state = MatchState.IDLE
        self.round = Round()

        if self.mode is GameMode.PVC:
            self.opponent = opponent if opponent is not None else OpponentAI(rng=rng)
        else:
            self.opponent = None

        self.started_at: Optional[float] = None
        self.finished_at: Optional[float] = None

    # -- queries ------------------------------------------------------------

    def has_more_rounds(self) -> bool:
        return self.current_round < self.total_rounds

    @property
    def is_complete(self) -> bool:
        return self.state is MatchState.MATCH_COMPLETE

    @property
    def void_or_draw_count(self) -> int:
        return sum(1 for r in self.history if r.result in (Result.DRAW, Result.VOID))

    @property
    def score_text(self) -> str:
        return f"{self.player1_score} - {self.player2_score}"

    @property
    def duration_ms(self) -> int:
        if self.started_at is None:
            return 0
        end = self.finished_at if self.finished_at is not None else time.time()
        return int((end - self.started_at) * 1000)

    def get_game_winner(self) -> Winner:
        if self.player1_score > self.player2_score:
            return Winner.PLAYER1
        if self.player2_score > self.player1_score:
            return Winner.PLAYER2
        return Winner.TIE

    def winner_label(self) -> str:
        return self.get_game_winner().label(self.mode)

    # -- transitions --------------------------------------------------------

    def start_new_round(self) -> int:
        """Open the next round and return its 1-based index.

        Ignored (returns the current index) unless the match is idle or
        between rounds with rounds left to play.
        """
        if self.state not in (MatchState.IDLE, MatchState.ROUND_COMPLETE):
            return self.current_round
        if not self.has_more_rounds():
            return self.current_round
        if self.started_at is None:
            self.started_at = time.time()
        self.current_round += 1
        self.round = Round()
        self.state = MatchState.ROUND_ACTIVE
        return self.current_round

    def submit_move(self, player, move):
        """Store a player's move for the active round.

        A second submission by the same player in the same round keeps the
        first move and raises that player's cheat flag. Outside an active
        round the call is ignored.
        """
        if self.state is not MatchState.ROUND_ACTIVE:
            return
        player = Player.parse(player)
        move = parse_move(move)
        if self.round.move_of(player) is None:
            self.round.set_move(player, move)
        else:
            self.round.flag_cheat(player)

    def finish_round(self) -> Optional[RoundRecord]:
        """Resolve the active round; returns None if no round is active."""
        if self.state is not MatchState.ROUND_ACTIVE:
            return None
        self.state = MatchState.RESOLVING
        current = self.round

        if self.mode is GameMode.PVC and current.player2_move is None:
            current.player2_move = self.opponent.get_next_move(self.history)

        cheated = current.player1_cheated or current.player2_cheated
        if self.mode is GameMode.PVP and cheated:
            result = self._adjudicate_cheat(current)
        elif current.player1_move is None or current.player2_move is None:
            result = self._walkover(current)
        else:
            result = compare(current.player1_move, current.player2_move)

        if result is Result.WIN:
            self.player1_score += 1
        elif result is Result.LOSE:
            self.player2_score += 1

        record = RoundRecord(
            number=self.current_round,
            player1_move=current.player1_move,
            player2_move=current.player2_move,
            player1_cheated=current.player1_cheated,
            player2_cheated=current.player2_cheated,
            result=result,
        )
        self.history.append(record)

        if self.opponent is not None:
            self.opponent.learn_from_round(current.player1_move, current.player2_move, result)

        logger.debug(
            "Round %d: %s vs %s → %s (score %s)",
            record.number,
            record.player1_move.value if record.player1_move else None,
            record.player2_move.value if record.player2_move else None,
            result.value,
            self.score_text,
        )

        if self.has_more_rounds():
            self.state = MatchState.ROUND_COMPLETE
        else:
            self.state = MatchState.MATCH_COMPLETE
            self.finished_at = time.time()
        return record

    @staticmethod
    def _adjudicate_cheat(current: Round) -> Result:
        if current.player1_cheated and current.player2_cheated:
            return Result.VOID
        if current.player1_cheated:
            return Result.LOSE
        return Result.WIN

    @staticmethod
    def _walkover(current: Round) -> Result:
        if current.player1_move is None and current.player2_move is None:
            return Result.DRAW
        if current.player1_move is None:
            return Result.LOSE
        return Result.WIN

    def to_dict(self) -> dict:
        return {
            "mode": self.mode.value,
            "state": self.state.value,
            "total_rounds": self.total_rounds,
            "current_round": self.current_round,
            "player1_score": self.player1_score,
            "player2_score": self.player2_score,
            "has_more_rounds": self.has_more_rounds(),
            "winner": self.get_game_winner().value if self.is_complete else None,
            "history": [r.to_dict() for r in self.history],
        }


# ---------------------------------------------------------------------------
# Functional surface for the orchestration layer
# ---------------------------------------------------------------------------

def create_match(
    mode,
    total_rounds: int = config.DEFAULT_ROUNDS,
    rng: Optional[random.Random] = None,
    opponent: Optional[OpponentAI] = None,
) -> Match:
    """Build a fresh match. Raises InvalidRoundsError for a bad round count."""
    return Match(GameMode.parse(mode), total_rounds, opponent=opponent, rng=rng)


def start_new_round(match: Match) -> int:
    return match.start_new_round()


def submit_move(match: Match, player, move):
    match.submit_move(player, move)


def finish_round(match: Match) -> Optional[RoundRecord]:
    return match.finish_round()


def has_more_rounds(match: Match) -> bool:
    return match.has_more_rounds()


def get_game_winner(match: Match) -> Winner:
    return match.get_game_winner()

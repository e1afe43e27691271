"""Keyboard bindings and routing of key presses into a match."""

from typing import Optional

from . import config
from .engine import GameMode, Match, Player
from .moves import Move


def key_to_move(key: str, mode: GameMode) -> Optional[tuple[Player, Move]]:
    """Map a key to the (player, move) it stands for in `mode`, or None.

    In PVC only player 1's keys are live.
    """
    upper = key.strip().upper()
    if upper in config.PLAYER1_KEYS:
        return Player.ONE, config.PLAYER1_KEYS[upper]
    if mode is GameMode.PVP and upper in config.PLAYER2_KEYS:
        return Player.TWO, config.PLAYER2_KEYS[upper]
    return None


class KeyboardInput:
    """Feeds key presses for the active round into a match.

    Every recognised press is submitted, so a player pressing twice in
    one round trips the match's cheat detection.
    """

    def __init__(self, match: Match):
        self.match = match

    def press(self, key: str) -> Optional[tuple[Player, Move]]:
        mapped = key_to_move(key, self.match.mode)
        if mapped is not None:
            self.match.submit_move(*mapped)
        return mapped

    def feed(self, keys: str) -> list[tuple[Player, Move]]:
        """Press each character of `keys` in order; unknown keys are skipped."""
        accepted = []
        for key in keys:
            if key.isspace():
                continue
            mapped = self.press(key)
            if mapped is not None:
                accepted.append(mapped)
        return accepted

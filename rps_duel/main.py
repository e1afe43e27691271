"""CLI entry point for RPS Duel."""

import argparse
import logging
import random

from . import config
from .bots import ALL_BOT_CLASSES, get_bot_by_name
from .controls import KeyboardInput
from .engine import GameMode, InvalidRoundsError, create_match
from .history import MatchHistory, record_match
from .players import PlayerRegistry
from .simulate import simulate_matches
from .stats import print_match_summary, print_round


def list_bots():
    """Print all available scripted bots."""
    print("\nAvailable Bots:")
    print("-" * 40)
    for i, cls in enumerate(ALL_BOT_CLASSES, 1):
        print(f"  {i:>2d}. {cls.name}")
    print()


def cmd_play(args, input_fn=input, history=None, players=None):
    """Play a match in the terminal, one line of key presses per round."""
    mode = GameMode.parse(args.mode)
    rng = random.Random(args.seed) if args.seed is not None else None
    try:
        match = create_match(mode, args.rounds, rng=rng)
    except InvalidRoundsError as e:
        print(f"  ✗ {e}")
        return None

    print(f"\n🎮 {mode.description}  |  {args.rounds} rounds")
    print(f"  Controls: {mode.controls}")
    print("  Type your key(s) and press Enter. An empty line means no move.\n")

    keyboard = KeyboardInput(match)
    while match.has_more_rounds():
        round_num = match.start_new_round()
        line = input_fn(f"  Round {round_num} of {match.total_rounds} > ")
        keyboard.feed(line)
        record = match.finish_round()
        print_round(record, match)

    print()
    print_match_summary(match)

    if history is None:
        history = MatchHistory()
    if players is None:
        players = PlayerRegistry()
    record_match(match, history, players=players,
                 player1_name=args.name, player2_name=args.opponent_name)
    print(history.summary_text())
    print(players.leaderboard_text())
    return match


def cmd_simulate(args):
    """Run a scripted bot against the opponent AI."""
    bot = get_bot_by_name(args.bot)
    print(f"\n🤖 Simulation: {bot.name} vs Adaptive Opponent")
    print(f"  {args.matches} matches  |  {args.rounds} rounds each"
          + (f"  |  seed={args.seed}" if args.seed is not None else "")
          + ("  |  pooled profile" if args.pooled else ""))
    print()

    summary = simulate_matches(
        bot, matches=args.matches, rounds=args.rounds,
        seed=args.seed, pooled=args.pooled,
    )

    for i, m in enumerate(summary.matches, 1):
        if m.player1_score > m.player2_score:
            outcome = "BOT"
        elif m.player2_score > m.player1_score:
            outcome = "COMPUTER"
        else:
            outcome = "TIE"
        print(f"  Match {i:>3d}  →  {m.player1_score:>3d} - {m.player2_score:<3d}  "
              f"D:{m.draws:>3d}  ({outcome})")

    print("=" * 60)
    print(f"  {'':24s} {'Bot':>10s} {'Computer':>10s}")
    print(f"  {'Match wins':24s} {summary.bot_match_wins:>10d} {summary.computer_match_wins:>10d}")
    print(f"  {'Tied matches':24s} {summary.tied_matches:>10d}")
    print(f"  {'Round win %':24s} {summary.bot_round_win_pct:>9.1f}% "
          f"{summary.computer_round_win_pct:>9.1f}%")
    print("=" * 60)
    return summary


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rps_duel",
        description="🎮 Rock-Paper-Scissors against a friend or an adaptive computer",
    )
    parser.add_argument("--list", action="store_true", help="List all scripted bots")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command")

    play = subparsers.add_parser("play", help="Play a match in the terminal")
    play.add_argument("--mode", choices=["pvc", "pvp"], default="pvc", help="Game mode (default: pvc)")
    play.add_argument("--rounds", type=int, default=config.DEFAULT_ROUNDS,
                      help=f"Number of rounds, {config.MIN_ROUNDS}-{config.MAX_ROUNDS} "
                           f"(default: {config.DEFAULT_ROUNDS})")
    play.add_argument("--seed", type=int, default=None, help="RNG seed for the computer")
    play.add_argument("--name", default="Player 1", help="Player 1's name on the leaderboard")
    play.add_argument("--opponent-name", default="Player 2",
                      help="Player 2's name on the leaderboard (PVP only)")

    sim = subparsers.add_parser("simulate", help="Bot vs adaptive opponent")
    sim.add_argument("--bot", required=True, help="Name of the scripted bot")
    sim.add_argument("--matches", type=int, default=10, help="Number of matches (default: 10)")
    sim.add_argument("--rounds", type=int, default=config.MAX_ROUNDS,
                     help=f"Rounds per match (default: {config.MAX_ROUNDS})")
    sim.add_argument("--seed", type=int, default=None, help="RNG seed for reproducibility")
    sim.add_argument("--pooled", action="store_true",
                     help="Let the opponent remember the bot across matches")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.list:
        list_bots()
        return

    if args.command == "play":
        cmd_play(args)
    elif args.command == "simulate":
        cmd_simulate(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()

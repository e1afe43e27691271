from rps_duel.engine import Winner
from rps_duel.history import MatchHistory
from rps_duel.main import build_parser, cmd_play, cmd_simulate, main
from rps_duel.players import PlayerRegistry


def test_play_pvp_from_scripted_input(capsys):
    args = build_parser().parse_args(["play", "--mode", "pvp", "--rounds", "2"])
    lines = iter(["a l", "s s k"])
    history = MatchHistory()

    match = cmd_play(args, input_fn=lambda prompt: next(lines), history=history)

    assert match.is_complete
    # round 1: rock beats scissors; round 2: player 1 pressed twice
    assert (match.player1_score, match.player2_score) == (1, 1)
    assert match.get_game_winner() is Winner.TIE
    assert history.total_games == 1
    out = capsys.readouterr().out
    assert "It's a Tie!" in out


def test_play_rejects_bad_rounds(capsys):
    args = build_parser().parse_args(["play", "--rounds", "42"])
    assert cmd_play(args, input_fn=lambda prompt: "") is None
    assert "between" in capsys.readouterr().out


def test_play_pvc_with_empty_input_loses(capsys):
    args = build_parser().parse_args(["play", "--mode", "pvc", "--rounds", "1", "--seed", "3"])
    match = cmd_play(args, input_fn=lambda prompt: "")
    assert match.get_game_winner() is Winner.PLAYER2
    assert "Computer Wins!" in capsys.readouterr().out


def test_simulate_command(capsys):
    args = build_parser().parse_args(
        ["simulate", "--bot", "silent", "--matches", "2", "--rounds", "3", "--seed", "1"])
    summary = cmd_simulate(args)
    assert summary.computer_match_wins == 2
    assert "Match wins" in capsys.readouterr().out


def test_list_bots(capsys):
    main(["--list"])
    assert "Always Rock" in capsys.readouterr().out


def test_play_credits_named_players(capsys):
    args = build_parser().parse_args(
        ["play", "--mode", "pvp", "--rounds", "1", "--name", "ann", "--opponent-name", "bob"])
    players = PlayerRegistry()
    cmd_play(args, input_fn=lambda prompt: "a k", players=players)

    assert players.get("bob").games_won == 1
    assert players.get("ann").games_played == 1
    out = capsys.readouterr().out
    assert "LEADERBOARD" in out

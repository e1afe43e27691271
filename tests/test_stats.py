from rps_duel.engine import GameMode, Player, create_match
from rps_duel.moves import Move
from rps_duel.stats import MatchStatistics, get_statistics, print_match_summary


def _play(match, rounds):
    for moves in rounds:
        match.start_new_round()
        for player, move in moves:
            match.submit_move(player, move)
        match.finish_round()
    return match


def test_empty_match_has_zero_win_percentage():
    stats = get_statistics(create_match("pvp", 3))
    assert stats.total_rounds == 0
    assert stats.win_percentage == 0.0
    assert stats.most_common_move(Player.ONE) is None
    assert "Total Rounds: 0" in stats.summary_text


def test_pvp_statistics():
    match = _play(create_match(GameMode.PVP, 4), [
        [(1, Move.ROCK), (2, Move.SCISSORS)],
        [(1, Move.ROCK), (2, Move.PAPER)],
        [(1, Move.PAPER), (2, Move.PAPER)],
        [(1, Move.ROCK)],
    ])
    stats = get_statistics(match)

    assert stats.total_rounds == 4
    assert (stats.player1_wins, stats.player2_wins, stats.draws) == (2, 1, 1)
    assert stats.walkovers == 1
    assert stats.win_percentage == 50.0
    assert stats.player2_win_percentage == 25.0
    assert stats.move_frequency(Player.ONE) == {Move.ROCK: 3, Move.PAPER: 1, Move.SCISSORS: 0}
    assert stats.move_frequency(Player.TWO) == {Move.ROCK: 0, Move.PAPER: 2, Move.SCISSORS: 1}
    assert stats.most_common_move(Player.ONE) is Move.ROCK
    assert stats.per_player_frequency[Player.TWO][Move.PAPER] == 2

    summary = stats.summary_text
    assert "Total Rounds: 4" in summary
    assert "Final Score: 2 - 1" in summary
    assert "Player 1 Win Rate: 50.0%" in summary


def test_void_rounds_count_as_resolved():
    match = _play(create_match(GameMode.PVP, 2), [
        [(1, Move.ROCK), (1, Move.ROCK), (2, Move.PAPER), (2, Move.PAPER)],
        [(1, Move.ROCK), (2, Move.SCISSORS)],
    ])
    stats = get_statistics(match)
    assert stats.voids == 1
    assert stats.win_percentage == 50.0


def test_pvc_summary_speaks_to_the_human(scripted):
    match = create_match(GameMode.PVC, 1, rng=scripted(choices=[Move.ROCK]))
    _play(match, [[(1, Move.PAPER)]])
    stats = MatchStatistics.from_match(match)
    assert "Your Win Rate: 100.0%" in stats.summary_text
    assert stats.player_names == ("You", "Computer")


def test_statistics_are_a_snapshot():
    match = create_match(GameMode.PVP, 2)
    _play(match, [[(1, Move.ROCK), (2, Move.SCISSORS)]])
    stats = get_statistics(match)
    _play(match, [[(1, Move.ROCK), (2, Move.PAPER)]])
    assert stats.total_rounds == 1


def test_to_dict():
    match = _play(create_match(GameMode.PVP, 1), [[(1, Move.SCISSORS), (2, Move.PAPER)]])
    data = get_statistics(match).to_dict()
    assert data["win_percentage"] == 100.0
    assert data["per_player_frequency"]["player1"] == {"rock": 0, "paper": 0, "scissors": 1}
    assert data["per_player_frequency"]["player2"]["paper"] == 1
    assert data["summary"].startswith("Game Statistics:")


def test_print_match_summary(capsys):
    match = _play(create_match(GameMode.PVP, 1), [[(1, Move.SCISSORS), (2, Move.PAPER)]])
    print_match_summary(match)
    out = capsys.readouterr().out
    assert "Player 1 Wins!" in out
    assert "1 - 0" in out

from rps_duel.engine import GameMode, create_match
from rps_duel.moves import Move
from rps_duel.players import PlayerRegistry, PlayerStats


def _finished_pvp(p1_move, p2_move):
    match = create_match(GameMode.PVP, 1)
    match.start_new_round()
    match.submit_move(1, p1_move)
    match.submit_move(2, p2_move)
    match.finish_round()
    return match


def test_new_player_has_zero_rates():
    stats = PlayerStats(name="ann")
    assert stats.win_rate == 0.0
    assert stats.pvc_win_rate == 0.0
    assert stats.pvp_win_rate == 0.0


def test_update_tracks_each_mode_separately():
    players = PlayerRegistry()
    players.update_player_stats("ann", GameMode.PVC, won=True, rounds=3)
    players.update_player_stats("ann", "pvc", won=False, rounds=5)
    players.update_player_stats("ann", GameMode.PVP, won=True, rounds=1)

    ann = players.get("ann")
    assert ann.games_played == 3
    assert ann.games_won == 2
    assert ann.rounds_played == 9
    assert (ann.pvc_games, ann.pvc_wins) == (2, 1)
    assert (ann.pvp_games, ann.pvp_wins) == (1, 1)
    assert ann.pvc_win_rate == 50.0
    assert ann.pvp_win_rate == 100.0
    assert round(ann.win_rate, 1) == 66.7


def test_record_game_credits_both_pvp_players():
    players = PlayerRegistry()
    players.record_game(_finished_pvp(Move.ROCK, Move.PAPER), "ann", "bob")

    assert players.get("ann").games_won == 0
    assert players.get("bob").games_won == 1
    assert players.get("bob").rounds_played == 1


def test_computer_gets_no_profile():
    match = create_match(GameMode.PVC, 1)
    match.start_new_round()
    match.finish_round()

    players = PlayerRegistry()
    players.record_game(match, "ann", "Computer")
    assert "ann" in players
    assert "Computer" not in players
    assert players.get("ann").pvc_games == 1


def test_leaderboard_orders_by_win_rate_then_wins():
    players = PlayerRegistry()
    for won in (True, False):
        players.update_player_stats("half", GameMode.PVP, won, 1)
    for won in (True, True, False, False):
        players.update_player_stats("half-busy", GameMode.PVP, won, 1)
    players.update_player_stats("perfect", GameMode.PVC, True, 1)
    players.update_player_stats("winless", GameMode.PVC, False, 1)

    names = [p.name for p in players.leaderboard()]
    assert names == ["perfect", "half-busy", "half", "winless"]


def test_leaderboard_text_and_dict():
    players = PlayerRegistry()
    assert players.leaderboard_text() == "No players yet."

    players.update_player_stats("ann", GameMode.PVC, True, 3)
    text = players.leaderboard_text()
    assert "=== LEADERBOARD ===" in text
    assert "ann" in text and "100.0%" in text

    entry = players.to_dict()["leaderboard"][0]
    assert entry["name"] == "ann"
    assert entry["pvc"] == {"games": 1, "wins": 1, "win_pct": 100.0}


def test_recent_names_most_recent_first():
    players = PlayerRegistry()
    players.update_player_stats("old", GameMode.PVC, True, 1)
    players.update_player_stats("new", GameMode.PVC, True, 1)
    players.get("old").last_played = players.get("new").last_played.replace(year=2000)
    assert players.recent_names() == ["new", "old"]

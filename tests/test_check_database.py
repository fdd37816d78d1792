from check_database import main
from nothanks.database import DatabaseManager
from nothanks.persistence import DatabaseGameStore


def test_check_database_reports_healthy_game(tmp_path, make_game, capsys):
    db_path = str(tmp_path / "check.sqlite")
    DatabaseGameStore(DatabaseManager(db_path), "default").save_game_state(make_game())

    assert main(db_path) == 0
    out = capsys.readouterr().out
    assert "default: awaiting_reveal, 24 cards left" in out


def test_check_database_flags_broken_game(tmp_path, make_game, capsys):
    db_path = str(tmp_path / "check.sqlite")
    game = make_game()
    game.players[0].tokens += 1
    DatabaseGameStore(DatabaseManager(db_path), "default").save_game_state(game)

    assert main(db_path) == 1
    assert "Token conservation" in capsys.readouterr().out

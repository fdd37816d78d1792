import json

import pytest

from nothanks.errors import SnapshotError
from nothanks.snapshot import SCHEMA_VERSION, dump_state, dumps, load_state, loads


def test_snapshot_preserves_game_in_progress(engine, make_game):
    game = make_game(first_player=1)
    engine.reveal_top_card(game)
    engine.no_thanks(game)

    restored = loads(dumps(game))
    assert restored.players == game.players
    assert restored.deck == game.deck
    assert restored.current_card == game.current_card
    assert restored.pool == 1
    assert restored.active_player == 2
    assert restored.game_id == game.game_id
    assert restored.tokens_dealt == game.tokens_dealt
    assert restored.action_history == game.action_history
    assert restored.phase == game.phase
    assert restored.check_invariants() == []


def test_snapshot_is_tagged_with_schema_version(make_game):
    data = json.loads(dumps(make_game()))
    assert data['schema_version'] == SCHEMA_VERSION
    assert data['current_card'] is None


def test_snapshot_rejects_unknown_version(make_game):
    data = dump_state(make_game())
    data['schema_version'] = SCHEMA_VERSION + 1
    with pytest.raises(SnapshotError):
        load_state(data)
    del data['schema_version']
    with pytest.raises(SnapshotError):
        load_state(data)


def test_snapshot_rejects_malformed_payloads(make_game):
    data = dump_state(make_game())
    del data['deck']
    with pytest.raises(SnapshotError):
        load_state(data)
    with pytest.raises(SnapshotError):
        loads("{not json")
    with pytest.raises(SnapshotError):
        loads("[1, 2, 3]")

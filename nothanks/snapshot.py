"""
Versioned serialization of a `GameState`.

Snapshots are plain JSON objects tagged with a schema version so that stored
games written by an older server are either read correctly or rejected.
"""

import json
from typing import Any, Dict

from nothanks.errors import SnapshotError
from nothanks.game_state import GameState
from nothanks.player import Player

SCHEMA_VERSION = 1


def dump_state(state: GameState) -> Dict[str, Any]:
    return {
        'schema_version': SCHEMA_VERSION,
        'game_id': state.game_id,
        'started_at': state.started_at,
        'players': [p.to_dict() for p in state.players],
        'deck': list(state.deck),
        'current_card': state.current_card,
        'pool': state.pool,
        'active_player': state.active_player,
        'min_card': state.min_card,
        'max_card': state.max_card,
        'setup_removed': state.setup_removed,
        'tokens_dealt': state.tokens_dealt,
        'scores_revealed': state.scores_revealed,
        'action_history': list(state.action_history),
    }


def load_state(data: Dict[str, Any]) -> GameState:
    if not isinstance(data, dict):
        raise SnapshotError(f"Snapshot must be an object, got {type(data).__name__}")
    version = data.get('schema_version')
    if version != SCHEMA_VERSION:
        raise SnapshotError(f"Unsupported snapshot schema version {version!r} (expected {SCHEMA_VERSION})")

    try:
        current_card = data['current_card']
        return GameState(
            players=[Player.from_dict(p) for p in data['players']],
            deck=[int(c) for c in data['deck']],
            current_card=int(current_card) if current_card is not None else None,
            pool=int(data['pool']),
            active_player=int(data['active_player']),
            min_card=int(data['min_card']),
            max_card=int(data['max_card']),
            setup_removed=int(data['setup_removed']),
            tokens_dealt=int(data['tokens_dealt']),
            scores_revealed=bool(data.get('scores_revealed', False)),
            game_id=str(data['game_id']),
            started_at=float(data['started_at']),
            action_history=list(data.get('action_history', [])),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise SnapshotError(f"Malformed snapshot: {e}") from e


def dumps(state: GameState) -> str:
    return json.dumps(dump_state(state))


def loads(text: str) -> GameState:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SnapshotError(f"Snapshot is not valid JSON: {e}") from e
    return load_state(data)

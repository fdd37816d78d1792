import json

import pytest

from nothanks.healthcheck import HealthcheckService


def test_status_without_game(table, database_manager):
    status = HealthcheckService(table, db=database_manager).collect_status()
    assert status['status'] == 'ok'
    assert status['table']['phase'] == 'setup'
    assert status['database']['live_tables'] == 0


def test_status_reports_broken_invariants(table):
    table.new_game(["alice", "bob", "carol"])
    service = HealthcheckService(table)
    assert service.collect_status()['table']['issues'] == []

    state = table.current_state()
    state.pool = 5
    table.store.save_game_state(state)
    status = service.collect_status()
    assert status['status'] == 'warn'
    assert any("Token conservation" in issue for issue in status['table']['issues'])


@pytest.mark.asyncio
async def test_status_handler_returns_json(table):
    table.new_game(["alice", "bob", "carol"])
    response = await HealthcheckService(table).status_handler(None)
    assert response.status == 200
    body = json.loads(response.text)
    assert body['table']['deck_size'] == 24
    assert body['table']['players'] == ["alice", "bob", "carol"]

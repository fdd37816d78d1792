import pytest

from nothanks.commands import CommandProcessor, parse_start_args, resolve_first_player
from nothanks.errors import InvalidStartingPlayerError
from nothanks.game_state import Phase
from nothanks.ssh_server import TableServerState
from nothanks.ssh_session import TableSession

from conftest import FakeWriter


@pytest.fixture
def server_state(table, database_manager):
    return TableServerState(table, db=database_manager)


@pytest.fixture
def connect(server_state):
    def _connect(username):
        return TableSession(None, FakeWriter(), None, server_state=server_state,
                            username=username, start_reader=False)
    return _connect


async def run(session, cmd):
    session._stdout.clear()
    await CommandProcessor(session).process_command(cmd)
    return session._stdout.text


def test_parse_start_args():
    assert parse_start_args([]) == (False, None)
    assert parse_start_args(["shuffle"]) == (True, None)
    assert parse_start_args(["first", "bob", "shuffle"]) == (True, "bob")
    with pytest.raises(ValueError):
        parse_start_args(["first"])
    with pytest.raises(ValueError):
        parse_start_args(["fast"])


def test_resolve_first_player():
    names = ["alice", "bob", "carol"]
    assert resolve_first_player(None, names) is None
    assert resolve_first_player("carol", names) == 2
    assert resolve_first_player("1", names) == 0
    with pytest.raises(InvalidStartingPlayerError):
        resolve_first_player("4", names)
    with pytest.raises(InvalidStartingPlayerError):
        resolve_first_player("zed", names)


def test_session_welcome(connect):
    session = connect("alice")
    assert "Logged in as" in session._stdout.text
    assert "alice" in session._stdout.text


@pytest.mark.asyncio
async def test_seat_and_start(connect, server_state):
    alice, bob, carol = connect("alice"), connect("bob"), connect("carol")

    out = await run(alice, "seat")
    assert "Seat claimed" in out
    assert "already seated" in await run(alice, "seat")

    out = await run(alice, "start")
    assert "Unsupported player count 1" in out

    await run(bob, "seat")
    await run(carol, "seat")
    assert server_state.lobby == ["alice", "bob", "carol"]

    out = await run(alice, "start first bob")
    state = server_state.table.current_state()
    assert state.active.name == "bob"
    assert state.phase == Phase.AWAITING_REVEAL
    # Every connected session got the table painted
    assert "NO THANKS" in out
    assert "bob's turn" in carol._stdout.text


@pytest.mark.asyncio
async def test_turn_order_is_enforced(connect, server_state):
    sessions = {name: connect(name) for name in ("alice", "bob", "carol")}
    for session in sessions.values():
        await run(session, "seat")
    await run(sessions["alice"], "start first 1")

    await run(sessions["bob"], "reveal")
    assert server_state.table.current_state().current_card is not None

    out = await run(sessions["bob"], "take")
    assert "alice" in out and "turn" in out
    assert server_state.table.current_state().current_card is not None

    await run(sessions["alice"], "pass")
    state = server_state.table.current_state()
    assert state.active.name == "bob"
    assert state.pool == 1

    out = await run(sessions["bob"], "reveal")
    assert "still out" in out

    card = state.current_card
    await run(sessions["bob"], "take")
    state = server_state.table.current_state()
    assert state.players[1].hand == [card]
    assert state.players[1].tokens == 12


@pytest.mark.asyncio
async def test_spectator_cannot_play(connect):
    players = [connect(name) for name in ("alice", "bob", "carol")]
    for session in players:
        await run(session, "seat")
    await run(players[0], "start")

    dave = connect("dave")
    assert "not playing" in await run(dave, "reveal")
    assert "Take a seat first" in await run(dave, "start")


@pytest.mark.asyncio
async def test_commands_without_game(connect):
    alice = connect("alice")
    assert "No game in progress" in await run(alice, "take")
    assert "Seated (0/7)" in await run(alice, "look")
    assert "Unknown command" in await run(alice, "dance")
    assert "Commands" in await run(alice, "help")
    assert "No finished games" in await run(alice, "leaderboard")


@pytest.mark.asyncio
async def test_quit_leaves_the_lobby(connect, server_state, table):
    alice = connect("alice")
    await run(alice, "seat")
    await run(alice, "quit")
    assert server_state.lobby == []
    assert alice not in server_state.sessions
    assert alice._stdout.closed
    assert alice.on_table_event not in table._listeners

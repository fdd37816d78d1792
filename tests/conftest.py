import random
from typing import Callable, List, Optional

import pytest

from nothanks.database import DatabaseManager
from nothanks.game_engine import GameEngine
from nothanks.game_state import GameState
from nothanks.persistence import MemoryGameStore
from nothanks.table import Table

NAMES = ["alice", "bob", "carol", "dave"]


class FakeWriter:
    """Stand-in for an asyncssh stdout stream."""

    def __init__(self):
        self.messages: List[str] = []
        self.drained = 0
        self.closed = False

    def write(self, message):
        self.messages.append(message)

    async def drain(self):
        self.drained += 1

    def close(self):
        self.closed = True

    @property
    def text(self) -> str:
        return "".join(self.messages)

    def clear(self):
        self.messages.clear()


class EventRecorder:
    """Table listener that remembers every event it was sent."""

    def __init__(self):
        self.events = []

    def __call__(self, event, state):
        self.events.append((event, state))

    @property
    def names(self):
        return [event for event, _ in self.events]


@pytest.fixture
def engine() -> GameEngine:
    return GameEngine(random.Random(42))


@pytest.fixture
def make_game(engine) -> Callable[..., GameState]:
    """Factory for games with deterministic draws."""

    def _factory(names: Optional[List[str]] = None, first_player: int = 0, **kwargs) -> GameState:
        return engine.new_game(names or NAMES, first_player=first_player, **kwargs)

    return _factory


@pytest.fixture
def database_manager(tmp_path):
    """Provide an isolated DatabaseManager with a temporary SQLite file."""
    manager = DatabaseManager(str(tmp_path / "test_nothanks.sqlite"))
    yield manager
    manager.close()


@pytest.fixture
def table(engine) -> Table:
    return Table(MemoryGameStore(), engine=engine)


@pytest.fixture
def recorder() -> EventRecorder:
    return EventRecorder()

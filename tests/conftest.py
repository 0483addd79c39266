import os
import tempfile

os.environ.setdefault("CHAT_LOG_FILE", os.path.join(tempfile.gettempdir(), "chat_room_tests.log"))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from chat_room.server.main import create_app  # noqa: E402
from chat_room.server.message_log import MessageLog  # noqa: E402
from chat_room.server.presence import PresenceTracker  # noqa: E402
from chat_room.server.store import Store  # noqa: E402


class FakeClock:
    """Manually advanced replacement for ``time.time``."""

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(tmp_path):
    store = Store(f"sqlite:///{tmp_path / 'chat.db'}").connect()
    yield store
    store.close()


@pytest.fixture
def presence(store, clock):
    return PresenceTracker(store, clock=clock)


@pytest.fixture
def message_log(store, presence):
    return MessageLog(store, presence)


@pytest.fixture
def app(tmp_path, clock):
    return create_app(
        database_url=f"sqlite:///{tmp_path / 'api.db'}",
        sweep_interval=15,
        stale_after=10,
        clock=clock,
        start_sweeper=False,
    )


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client

import os
import random
import sys
import pytest

# Ensure the backend root (containing the `arena` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from arena import create_app, socketio
from arena.broadcast import Dispatcher
from arena.services.world.collectibles import CollectibleGenerator
from arena.services.world.movement import Bounds
from arena.services.world.session import SessionManager
from arena.services.world.store import WorldState
from config import Config


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret'
    RANDOM_SEED = 1234
    LOG_LEVEL = 'DEBUG'


class RecordingDispatcher(Dispatcher):
    """Keeps every delivery instead of sending it anywhere."""

    def __init__(self):
        super().__init__()
        self.sent = []

    def deliver(self, sid, event, payload):
        self.sent.append((sid, event, payload))

    def received_by(self, sid):
        return [(event, payload) for to, event, payload in self.sent if to == sid]

    def events(self, name):
        return [(to, payload) for to, event, payload in self.sent if event == name]

    def clear(self):
        self.sent = []


@pytest.fixture()
def dispatcher():
    return RecordingDispatcher()


@pytest.fixture()
def sessions(dispatcher):
    """A session manager over an empty world, with no transport."""
    rng = random.Random(42)
    bounds = Bounds()
    return SessionManager(WorldState(), CollectibleGenerator(bounds, rng=rng), dispatcher, bounds, rng=rng)


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def connect(flask_app):
    """Factory for Socket.IO test clients; all are disconnected on teardown."""
    opened = []

    def _connect():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        opened.append(test_client)
        return test_client

    yield _connect
    for test_client in opened:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except RuntimeError:
            pass

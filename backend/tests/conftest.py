import os
import sys
from collections import defaultdict

import pytest

# Ensure the backend root (containing the `chessroom` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from chessroom import create_app, socketio
from chessroom.services.session.coordinator import GameSession


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SOCKETIO_NAMESPACE = '/'
    CORS_ALLOWED_ORIGINS = None
    STARTING_FEN = None
    SEND_STATE_ON_JOIN = True
    NOTIFY_OUT_OF_TURN = False


class RecordingTransport:
    """In-memory stand-in for Socket.IO: one inbox per open connection."""

    def __init__(self):
        self.open_connections = []
        self.inbox = defaultdict(list)

    def open(self, connection_id):
        self.open_connections.append(connection_id)

    def close(self, connection_id):
        self.open_connections.remove(connection_id)

    def send(self, connection_id, event, payload=None):
        self.inbox[connection_id].append((event, payload))

    def broadcast(self, event, payload=None):
        for connection_id in self.open_connections:
            self.inbox[connection_id].append((event, payload))

    def events(self, connection_id):
        return [event for event, _ in self.inbox[connection_id]]

    def payloads(self, connection_id, event):
        return [payload for name, payload in self.inbox[connection_id] if name == event]

    def clear(self):
        self.inbox.clear()


@pytest.fixture()
def transport():
    return RecordingTransport()


@pytest.fixture()
def game(transport):
    return GameSession(transport=transport)


@pytest.fixture()
def join(game, transport):
    def _join(connection_id, session=None):
        session = session or game
        transport.open(connection_id)
        return session.on_connect(connection_id)
    return _join


@pytest.fixture()
def leave(game, transport):
    def _leave(connection_id, session=None):
        session = session or game
        transport.close(connection_id)
        return session.on_disconnect(connection_id)
    return _leave


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_factory(flask_app):
    clients = []

    def _connect():
        test_client = socketio.test_client(flask_app, namespace='/')
        clients.append(test_client)
        return test_client

    yield _connect
    for test_client in clients:
        try:
            if test_client.is_connected('/'):
                test_client.disconnect(namespace='/')
        except Exception:
            pass

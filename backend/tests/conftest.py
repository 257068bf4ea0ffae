import os
import sys
import pytest

# Ensure the backend root (containing the `rating_rooms` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from rating_rooms import create_app, socketio


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ALLOWED_ORIGINS = '*'
    SOCKETIO_NAMESPACE = '/'
    ROOM_CODE_LENGTH = 6
    ROOM_CODE_MAX_ATTEMPTS = 10
    LOG_LEVEL = 'DEBUG'


class RecordingBroadcaster:
    """Collects what a session would send, keyed the way clients see it."""

    def __init__(self):
        self.subscriptions = {}
        self.events = []

    def subscribe(self, connection_id, code):
        self.subscriptions.setdefault(code, set()).add(connection_id)

    def room_update(self, code, stats, to=None):
        self.events.append(('room_update', to or code, stats.to_dict(code)))

    def room_ended(self, code):
        self.events.append(('room_ended', code, {'code': code}))

    def close(self, code):
        self.subscriptions.pop(code, None)

    def named(self, name):
        return [payload for event, _, payload in self.events if event == name]


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def registry(flask_app):
    return flask_app.extensions['room_registry']


@pytest.fixture()
def connect(flask_app):
    """Factory for Socket.IO test clients; all are disconnected on teardown."""
    clients = []

    def _connect():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        clients.append(test_client)
        return test_client

    yield _connect
    for test_client in clients:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass


@pytest.fixture()
def broadcaster():
    return RecordingBroadcaster()


@pytest.fixture()
def make_registry(broadcaster):
    from rating_rooms.services.rooms import RoomRegistry

    def _make(**kwargs):
        return RoomRegistry(broadcaster, **kwargs)
    return _make

import os
import sys
import pytest

# Ensure the backend root (containing the `tictactoe` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from tictactoe import create_app, socketio


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ORIGINS = '*'
    PORT = 3001
    MAX_NAME_LENGTH = 32
    ROOM_IDLE_TTL_SEC = 0
    ROOM_SWEEP_INTERVAL_SEC = 30
    BCRYPT_LOG_ROUNDS = 4
    BCRYPT_HANDLE_LONG_PASSWORDS = True


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def router(flask_app):
    return flask_app.extensions['tictactoe']


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


def _connect(flask_app):
    test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
    # Drop the room-list sent on connect
    test_client.get_received()
    return test_client


@pytest.fixture()
def make_sio_client(flask_app):
    """Factory for connected Socket.IO test clients, disconnected on teardown."""
    created = []

    def _factory():
        test_client = _connect(flask_app)
        created.append(test_client)
        return test_client

    yield _factory
    for test_client in created:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass


@pytest.fixture()
def alice(make_sio_client):
    return make_sio_client()


@pytest.fixture()
def bob(make_sio_client):
    return make_sio_client()


import pytest

from ashakk.config import TestingConfig
from ashakk.server import create_app, socketio


@pytest.fixture()
def flask_app():
    application = create_app(TestingConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def registry(flask_app):
    return flask_app.extensions["ashakk.rooms"]


@pytest.fixture()
def make_sio_client(flask_app):
    """Factory for Socket.IO test clients; each one is a separate player."""
    clients = []

    def _make():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        clients.append(test_client)
        return test_client

    yield _make
    for test_client in clients:
        if test_client.is_connected():
            test_client.disconnect()

import pytest

from cnf_simulator.app import create_app
from cnf_simulator.state import new_record


@pytest.fixture
def environ():
    return {
        "PORT": "8080",
        "ENVIRONMENT": "staging",
        "KUBERNETES_NODE_NAME": "worker-1",
    }


@pytest.fixture
def record(environ):
    return new_record(environ)


@pytest.fixture
def app(record, environ):
    app = create_app(record, environ)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()

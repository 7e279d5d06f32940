from unittest.mock import Mock, patch

import pytest
import requests

from cnf_simulator import validation
from cnf_simulator.validation import ValidationError, validate_health, validate_status


def fake_response(status_code=200, payload=None):
    response = Mock()
    response.status_code = status_code
    if payload is None:
        response.json.side_effect = ValueError("no JSON")
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def routed_get(client):
    """Serve requests.get from the Flask test client."""
    def get(url, timeout=None):
        path = url.replace("http://cnf.test", "", 1)
        response = client.get(path)
        return fake_response(response.status_code, response.get_json())

    with patch("cnf_simulator.validation.requests.get", side_effect=get) as mock_get:
        yield mock_get


def test_validates_running_app(routed_get, capsys):
    assert validation.run("http://cnf.test/") == 0
    out = capsys.readouterr().out
    assert "✓ Health endpoint validation passed: healthy" in out
    assert "✓ Status endpoint validation passed: Simple-CNFSimulator" in out
    assert "All API endpoint validations passed!" in out
    assert [c.args[0] for c in routed_get.call_args_list] == [
        "http://cnf.test/health",
        "http://cnf.test/status",
    ]


@patch("cnf_simulator.validation.requests.get")
def test_unhealthy_status(mock_get):
    mock_get.return_value = fake_response(payload={"status": "degraded"})
    with pytest.raises(ValidationError, match="got 'degraded'"):
        validate_health("http://cnf.test")


@patch("cnf_simulator.validation.requests.get")
def test_bad_status_code(mock_get):
    mock_get.return_value = fake_response(503, {"status": "healthy"})
    with pytest.raises(ValidationError, match="status code 503"):
        validate_health("http://cnf.test")


@patch("cnf_simulator.validation.requests.get")
def test_unparsable_body(mock_get):
    mock_get.return_value = fake_response(200, None)
    with pytest.raises(ValidationError, match="failed to parse /status"):
        validate_status("http://cnf.test")


@patch("cnf_simulator.validation.requests.get")
def test_status_without_name(mock_get):
    mock_get.return_value = fake_response(payload={"id": "cnf-1"})
    with pytest.raises(ValidationError, match="missing name"):
        validate_status("http://cnf.test")


@patch("cnf_simulator.validation.requests.get")
def test_connection_error(mock_get, capsys):
    mock_get.side_effect = requests.ConnectionError("refused")
    assert validation.main(["--base-url", "http://cnf.test", "--timeout", "1"]) == 1
    out = capsys.readouterr().out
    assert "✗ Validation failed: failed to connect to /health endpoint" in out
    mock_get.assert_called_once_with("http://cnf.test/health", timeout=1.0)


@pytest.mark.parametrize("payload", [[], ["healthy"], "healthy", 1])
@patch("cnf_simulator.validation.requests.get")
def test_non_object_body(mock_get, payload):
    mock_get.return_value = fake_response(payload=payload)
    with pytest.raises(ValidationError, match="failed to parse /health response"):
        validate_health("http://cnf.test")

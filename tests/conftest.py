from unittest.mock import MagicMock, patch

import pytest
import requests


def make_response(body=None, status=200, invalid_json=False):
    response = MagicMock(spec=requests.Response)
    response.status_code = status
    response.ok = status < 400
    if invalid_json:
        response.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
    else:
        response.json.return_value = body
    return response


@pytest.fixture
def session_request():
    """Patches every HTTP call made through requests.Session."""
    with patch("requests.Session.request") as request:
        yield request


@pytest.fixture
def respond(session_request):
    """Makes the next HTTP call answer with the given body and status."""
    def _respond(body=None, status=200, invalid_json=False):
        session_request.return_value = make_response(body, status, invalid_json)
        return session_request
    return _respond

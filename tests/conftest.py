import json

import pytest

from phplist_client import PhpListRESTApiClient

API_URL = "https://example.com/lists/admin/?pi=restapi&page=call"

SUBSCRIBER = {"id": 33, "total": 4}
LISTS = [{"id": 20, "name": "list1"}, {"id": 20, "name": "list1"}]

SUCCESS = json.dumps({"status": "success", "data": SUBSCRIBER})
LISTS_SUCCESS = json.dumps({"status": "success", "data": LISTS})
ERROR = json.dumps({"status": "error"})


class StubTransport:
    """Replays queued response bodies and records every posted form."""

    def __init__(self, *bodies):
        self.bodies = list(bodies)
        self.calls = []

    def post(self, url, data):
        self.calls.append((url, dict(data)))
        return self.bodies.pop(0)

    @property
    def last_form(self):
        return self.calls[-1][1]


@pytest.fixture
def transport():
    return StubTransport(SUCCESS, ERROR)


@pytest.fixture
def lists_transport():
    return StubTransport(LISTS_SUCCESS, ERROR)


@pytest.fixture
def make_client():
    def _make(transport, secret=""):
        return PhpListRESTApiClient(API_URL, "admin", "pw", secret, transport=transport)
    return _make

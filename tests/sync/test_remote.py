import json

import requests

from src.hour_bank.hour_bank.core.enums import RemoteAction
from src.hour_bank.hour_bank.sync.remote import SheetsClient

URL = "https://script.example.com/macros/s/abc/exec"


class FakeResponse:
    def __init__(self, status_code=200, payload=None, bad_json=False):
        self.status_code = status_code
        self.ok = 200 <= status_code < 400
        self._payload = payload
        self._bad_json = bad_json

    def json(self):
        if self._bad_json:
            raise ValueError("not json")
        return self._payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append(("GET", url, kwargs))
        if self.error:
            raise self.error
        return self.response

    def post(self, url, **kwargs):
        self.calls.append(("POST", url, kwargs))
        if self.error:
            raise self.error
        return self.response


def test_fetch_returns_json_payload():
    session = FakeSession(FakeResponse(payload=[{"id": "e1"}]))
    client = SheetsClient(URL, session=session, timeout=3)

    assert client.fetch(RemoteAction.GET_EMPLOYEES) == [{"id": "e1"}]
    method, url, kwargs = session.calls[0]
    assert (method, url) == ("GET", URL)
    assert kwargs["params"] == {"action": "getEmployees"}
    assert kwargs["timeout"] == 3


def test_fetch_failures_mean_no_data():
    assert SheetsClient(URL, session=FakeSession(FakeResponse(500))).fetch(RemoteAction.GET_RECORDS) is None
    assert SheetsClient(URL, session=FakeSession(FakeResponse(bad_json=True))).fetch(RemoteAction.GET_RECORDS) is None
    session = FakeSession(error=requests.ConnectionError("offline"))
    assert SheetsClient(URL, session=session).fetch(RemoteAction.GET_RECORDS) is None


def test_unconfigured_client_does_nothing():
    session = FakeSession(FakeResponse(payload=[]))
    client = SheetsClient("not-a-url", session=session)

    assert not client.configured
    assert client.fetch(RemoteAction.GET_RECORDS) is None
    client.push(RemoteAction.SYNC_ROW, {"date": "2024-03-04"})
    assert session.calls == []


def test_push_sends_action_envelope_as_plain_text():
    session = FakeSession(FakeResponse())
    SheetsClient(URL, session=session).push(RemoteAction.DELETE_TRANSACTION, {"id": "t1"})

    method, url, kwargs = session.calls[0]
    assert method == "POST"
    assert kwargs["headers"]["Content-Type"] == "text/plain;charset=utf-8"
    assert json.loads(kwargs["data"].decode("utf-8")) == {"action": "deleteTransaction", "data": {"id": "t1"}}


def test_push_swallows_network_errors():
    session = FakeSession(error=requests.Timeout("slow"))
    SheetsClient(URL, session=session).push(RemoteAction.SYNC_ROW, {})
    assert len(session.calls) == 1

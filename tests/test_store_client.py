# tests/test_store_client.py
import json

import pytest
import requests

from app.record_store.errors import RecordNotFoundError, RecordStoreError
from app.record_store.store_client import RecordStoreClient


class StubSession:
    """Records requests and answers with a canned status/body."""

    def __init__(self, status_code=200, body=None, error=None):
        self.status_code = status_code
        self.body = body if body is not None else {}
        self.error = error
        self.requests = []

    def request(self, method, url, **kwargs):
        self.requests.append((method, url, kwargs))
        if self.error:
            raise self.error
        response = requests.Response()
        response.status_code = self.status_code
        response._content = json.dumps(self.body).encode()
        return response

    def close(self):
        pass


def test_list_passes_query_params():
    session = StubSession(body=[{"id": "p1"}])
    store = RecordStoreClient("http://store:3001/", session=session)

    assert store.list("prescriptions", {"doctorId": "doc1"}) == [{"id": "p1"}]
    method, url, kwargs = session.requests[0]
    assert (method, url) == ("GET", "http://store:3001/prescriptions")
    assert kwargs["params"] == {"doctorId": "doc1"}


def test_list_without_filters_sends_no_params():
    session = StubSession(body=[])
    RecordStoreClient("http://store:3001", session=session).list("prescriptions", {})

    assert session.requests[0][2]["params"] is None


def test_get_404_raises_not_found():
    store = RecordStoreClient("http://store:3001", session=StubSession(status_code=404))

    with pytest.raises(RecordNotFoundError):
        store.get("prescriptions", "missing")


def test_unexpected_status_raises_store_error():
    store = RecordStoreClient("http://store:3001", session=StubSession(status_code=503))

    with pytest.raises(RecordStoreError) as exc_info:
        store.create("prescriptions", {"notes": ""})
    assert exc_info.value.status_code == 503
    assert not isinstance(exc_info.value, RecordNotFoundError)


def test_transport_failure_raises_store_error():
    session = StubSession(error=requests.ConnectionError("refused"))
    store = RecordStoreClient("http://store:3001", session=session)

    with pytest.raises(RecordStoreError):
        store.delete("prescriptions", "p1")


def test_replace_uses_put_with_json_body():
    session = StubSession(body={"id": "p1", "notes": "x"})
    store = RecordStoreClient("http://store:3001", session=session)

    assert store.replace("prescriptions", "p1", {"notes": "x"}) == {"id": "p1", "notes": "x"}
    method, url, kwargs = session.requests[0]
    assert (method, url, kwargs["json"]) == ("PUT", "http://store:3001/prescriptions/p1", {"notes": "x"})

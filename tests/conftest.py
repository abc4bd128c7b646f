# tests/conftest.py
import copy
import uuid

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.prescription_client.gateway_client import PrescriptionGatewayClient
from app.prescription_client.notifications import Notifier
from app.record_store.errors import RecordNotFoundError, RecordStoreError
from app.record_store.store_client import get_record_store


class FakeRecordStore:
    """In-memory stand-in for the json-server Record Store."""

    def __init__(self):
        self.resources = {"prescriptions": {}, "appointments": {}}
        self.failing = False
        self.calls = []

    def _check(self, method, resource):
        self.calls.append((method, resource))
        if self.failing:
            raise RecordStoreError("connection refused to 10.0.0.5:3001 (internal)")

    def seed(self, resource, record):
        record = copy.deepcopy(record)
        record.setdefault("id", uuid.uuid4().hex[:8])
        self.resources[resource][record["id"]] = record
        return copy.deepcopy(record)

    def list(self, resource, params=None):
        self._check("list", resource)
        params = params or {}
        return [
            copy.deepcopy(record)
            for record in self.resources[resource].values()
            if all(str(record.get(key)) == str(value) for key, value in params.items())
        ]

    def get(self, resource, record_id):
        self._check("get", resource)
        if record_id not in self.resources[resource]:
            raise RecordNotFoundError(resource, record_id)
        return copy.deepcopy(self.resources[resource][record_id])

    def create(self, resource, data):
        self._check("create", resource)
        return self.seed(resource, data)

    def replace(self, resource, record_id, data):
        self._check("replace", resource)
        if record_id not in self.resources[resource]:
            raise RecordNotFoundError(resource, record_id)
        record = copy.deepcopy(data)
        record["id"] = record_id
        self.resources[resource][record_id] = record
        return copy.deepcopy(record)

    def delete(self, resource, record_id):
        self._check("delete", resource)
        if record_id not in self.resources[resource]:
            raise RecordNotFoundError(resource, record_id)
        del self.resources[resource][record_id]

    def close(self):
        pass


@pytest.fixture
def store():
    return FakeRecordStore()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_record_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def gateway(client):
    return PrescriptionGatewayClient(base_url="/api", session=client)


@pytest.fixture
def notifier():
    return Notifier()

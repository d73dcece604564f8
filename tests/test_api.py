import pytest
from fastapi.testclient import TestClient

import api.db as counter_db
import api.index as counter_api


class FakeCollection:
    def __init__(self, fail=False):
        self.docs = {}
        self.fail = fail

    def find_one_and_update(self, query, update, upsert=False, return_document=None):
        if self.fail:
            raise RuntimeError("connection refused")
        doc = self.docs.setdefault(query["_id"], {"_id": query["_id"]})
        for field, amount in update["$inc"].items():
            doc[field] = doc.get(field, 0) + amount
        return dict(doc)


@pytest.fixture
def client():
    return TestClient(counter_api.app)


def test_counter_increments(client, monkeypatch):
    counters = FakeCollection()
    monkeypatch.setattr(counter_api, "get_counter_collection", lambda: counters)

    first = client.get("/api/GetResumeCounter")
    second = client.get("/api/GetResumeCounter")

    assert first.status_code == 200
    assert first.json() == {"count": 1}
    assert second.json() == {"count": 2}
    assert counters.docs["resume"]["count"] == 2


def test_database_failure_is_500(client, monkeypatch):
    monkeypatch.setattr(counter_api, "get_counter_collection", lambda: FakeCollection(fail=True))
    response = client.get("/api/GetResumeCounter")
    assert response.status_code == 500


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_counter_collection_from_env(monkeypatch):
    # MongoClient connects lazily, no server needed
    monkeypatch.setattr(counter_db, "_client", None)
    monkeypatch.setenv("MONGODB_URI", "mongodb://localhost:27017/")
    monkeypatch.setenv("MONGODB_DATABASE", "counter_test")

    counters = counter_db.get_counter_collection()

    assert counters.name == "site_stats"
    assert counters.database.name == "counter_test"
    assert counter_db.get_db().client is counter_db._client
    counter_db._client.close()

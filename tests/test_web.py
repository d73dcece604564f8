import asyncio

import pytest
from fastapi.testclient import TestClient

import web.main as page_host
from src.widget.config import CounterSettings
from src.widget.visit_counter import CounterHTTPError, VisitCounterWidget


@pytest.fixture
def client(monkeypatch):
    settings = CounterSettings(
        environment="local",
        local_url="http://counter.test/api/GetResumeCounter",
        render_wait=0.2,
    )
    monkeypatch.setattr(page_host, "get_settings", lambda: settings)
    with TestClient(page_host.app) as test_client:
        yield test_client


def test_index_shows_count(client, monkeypatch):
    async def fake_fetch(self, session):
        assert self.endpoint_url == "http://counter.test/api/GetResumeCounter"
        return 42

    monkeypatch.setattr(VisitCounterWidget, "fetch_count", fake_fetch)
    response = client.get("/")

    assert response.status_code == 200
    assert '<span id="counter">42</span>' in response.text


def test_index_served_when_counter_fails(client, monkeypatch):
    async def failing_fetch(self, session):
        raise CounterHTTPError(503, self.endpoint_url)

    monkeypatch.setattr(VisitCounterWidget, "fetch_count", failing_fetch)
    response = client.get("/")

    assert response.status_code == 200
    assert '<span id="counter"></span>' in response.text


def test_favicon(client):
    assert client.get("/favicon.ico").status_code == 204


def test_index_served_when_counter_stalls(client, monkeypatch):
    async def stalled_fetch(self, session):
        await asyncio.sleep(3600)
        return 1

    monkeypatch.setattr(VisitCounterWidget, "fetch_count", stalled_fetch)
    response = client.get("/")

    assert response.status_code == 200
    assert '<span id="counter"></span>' in response.text

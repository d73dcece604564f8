"""Shared fixtures: a throwaway function endpoint served by aiohttp."""
from contextlib import asynccontextmanager

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from src.widget.config import get_settings

PAGE_HTML = '<html><body><p>Visitors: <span id="counter">-</span></p></body></html>'


@asynccontextmanager
async def _serve(handler):
    app = web.Application()
    app.router.add_get("/api/GetResumeCounter", handler)
    server = TestServer(app)
    await server.start_server()
    try:
        yield str(server.make_url("/api/GetResumeCounter"))
    finally:
        await server.close()


@pytest.fixture
def function_endpoint():
    """`async with function_endpoint(handler) as url:`"""
    return _serve


@pytest.fixture
def page_html():
    return PAGE_HTML


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()

# tests/conftest.py
from __future__ import annotations

import httpx
import pytest

from tests.mock_server import BASE_URL, mock_app
from typed_fetch import ClientConfig, HttpClient


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def transport() -> httpx.ASGITransport:
    return httpx.ASGITransport(app=mock_app)


@pytest.fixture
def client(transport: httpx.ASGITransport) -> HttpClient:
    return HttpClient(ClientConfig(url=BASE_URL), transport=transport)

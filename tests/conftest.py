"""
Shared fixtures: the FastAPI echo server mounted into httpx in-process.
"""

import httpx
import pytest

from latency_probe.echo_server import app


@pytest.fixture
def echo_transport() -> httpx.ASGITransport:
    return httpx.ASGITransport(app=app)

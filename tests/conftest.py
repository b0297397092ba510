"""Shared pytest fixtures for kong_admin tests."""

from __future__ import annotations

import os
from collections.abc import Generator

import pytest
import respx

from kong_admin import KongAdminClient, KongClientConfig

BASE_URL = "http://kong.test:8001"


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset environment variables for each test."""
    # Clear any KONG_ prefixed environment variables
    for key in list(os.environ.keys()):
        if key.startswith("KONG_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def capture_logs(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    """Fixture to capture log output."""
    import logging

    caplog.set_level(logging.DEBUG)
    return caplog


@pytest.fixture
def base_url() -> str:
    """Base URL of the mocked Admin API."""
    return BASE_URL


@pytest.fixture
def kong_mock(base_url: str) -> Generator[respx.MockRouter]:
    """respx router asserting nothing is called that was not mocked."""
    with respx.mock(base_url=base_url, assert_all_called=False) as router:
        yield router


@pytest.fixture
def client(base_url: str, kong_mock: respx.MockRouter) -> Generator[KongAdminClient]:
    """Client pointed at the mocked Admin API."""
    with KongAdminClient(KongClientConfig(base_url=base_url)) as kong_client:
        yield kong_client

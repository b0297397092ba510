"""Integration test fixtures running a DB-less Kong gateway with testcontainers."""

from __future__ import annotations

import os
from collections.abc import Generator
from pathlib import Path

import pytest
from testcontainers.core.container import DockerContainer
from testcontainers.core.wait_strategies import LogMessageWaitStrategy

from kong_admin import KongAdminClient, KongClientConfig

# ============================================================================
# Configuration Constants
# ============================================================================

KONG_IMAGE = os.environ.get("KONG_TEST_IMAGE", "kong:latest")

TEST_DATA_DIR = Path(__file__).parent


# ============================================================================
# Kong Container Class
# ============================================================================


class KongContainer(DockerContainer):
    """Kong gateway in DB-less mode, loaded from ``kong.yml``."""

    ADMIN_PORT = 8001

    def __init__(self, image: str = KONG_IMAGE, kong_config_path: Path | None = None) -> None:
        super().__init__(image)

        self.kong_config_path = kong_config_path or TEST_DATA_DIR / "kong.yml"

        self.with_env("KONG_DATABASE", "off")
        self.with_env("KONG_ADMIN_LISTEN", "0.0.0.0:8001")
        self.with_env("KONG_ADMIN_ACCESS_LOG", "/dev/stdout")
        self.with_env("KONG_ADMIN_ERROR_LOG", "/dev/stderr")
        self.with_env("KONG_DECLARATIVE_CONFIG", "/kong/kong.yml")
        self.with_volume_mapping(str(self.kong_config_path), "/kong/kong.yml", mode="ro")

        self.with_exposed_ports(self.ADMIN_PORT)

    def get_admin_url(self) -> str:
        """Get the Admin API URL with mapped port."""
        host = self.get_container_host_ip()
        port = self.get_exposed_port(self.ADMIN_PORT)
        return f"http://{host}:{port}"


# ============================================================================
# Pytest Fixtures
# ============================================================================


@pytest.fixture(scope="module")
def kong_container() -> Generator[KongContainer]:
    """Start Kong once per module."""
    container = KongContainer()
    container.waiting_for(LogMessageWaitStrategy("start worker processes").with_startup_timeout(60))

    with container:
        yield container


@pytest.fixture(scope="module")
def kong_admin_url(kong_container: KongContainer) -> str:
    """Get Kong Admin API URL."""
    return kong_container.get_admin_url()


@pytest.fixture(scope="module")
def kong_client(kong_admin_url: str) -> Generator[KongAdminClient]:
    """Create a client for the test gateway.

    Module-scoped to reuse connection across tests.
    """
    with KongAdminClient(KongClientConfig(base_url=kong_admin_url, timeout=30)) as client:
        yield client

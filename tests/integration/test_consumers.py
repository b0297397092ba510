"""Integration tests for consumers and credentials."""

from __future__ import annotations

import pytest

from kong_admin import KongAdminClient


@pytest.mark.integration
@pytest.mark.kong
class TestConsumers:
    """Test consumer lookups."""

    def test_get_by_username(self, kong_client: KongAdminClient) -> None:
        """get should resolve the username."""
        assert kong_client.consumers.get("alice").custom_id == "crm-1"

    def test_get_by_custom_id(self, kong_client: KongAdminClient) -> None:
        """get_by_custom_id should find the consumer."""
        assert kong_client.consumers.get_by_custom_id("crm-1").username == "alice"


@pytest.mark.integration
@pytest.mark.kong
class TestCredentials:
    """Test credential reads across kinds."""

    def test_basic_auth(self, kong_client: KongAdminClient) -> None:
        """basic-auth credentials should come back for the consumer."""
        creds, _ = kong_client.basic_auths.list_for_consumer("alice")

        assert [c.username for c in creds] == ["alice"]
        assert creds[0].password

    def test_key_auth_by_natural_key(self, kong_client: KongAdminClient) -> None:
        """A key-auth credential should be reachable by its key."""
        cred = kong_client.key_auths.get("alice", "alice-key")

        assert cred.key == "alice-key"
        assert kong_client.key_auths.get_by_id(cred.id or "").key == "alice-key"

    def test_acls(self, kong_client: KongAdminClient) -> None:
        """ACL groups should be listed across consumers."""
        assert [g.group for g in kong_client.acls.list_all()] == ["admins"]

    def test_missing_kind_is_empty(self, kong_client: KongAdminClient) -> None:
        """Listing a kind whose plugin is absent should yield nothing."""
        assert kong_client.mtls_auths.list_all() == []

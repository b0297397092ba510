"""Unit tests for schema-driven default filling."""

from __future__ import annotations

from typing import Any

import pytest

from kong_admin.defaults import fill_entity_defaults, fill_plugin_defaults
from kong_admin.exceptions import KongBadRequestError
from kong_admin.models import Consumer, Plugin, Route, Service, Target, Upstream


@pytest.fixture
def rate_limiting_schema() -> dict[str, Any]:
    """Trimmed full schema of the rate-limiting plugin."""
    return {
        "fields": [
            {"name": {"type": "string", "required": True}},
            {
                "protocols": {
                    "type": "set",
                    "default": ["grpc", "grpcs", "http", "https"],
                }
            },
            {"consumer": {"type": "foreign", "reference": "consumers"}},
            {
                "config": {
                    "type": "record",
                    "fields": [
                        {"minute": {"type": "number"}},
                        {"policy": {"type": "string", "default": "local"}},
                        {"fault_tolerant": {"type": "boolean", "default": True}},
                        {
                            "redis": {
                                "type": "record",
                                "fields": [
                                    {"host": {"type": "string"}},
                                    {"port": {"type": "integer", "default": 6379}},
                                ],
                            }
                        },
                    ],
                }
            },
        ]
    }


@pytest.fixture
def service_schema() -> dict[str, Any]:
    """Trimmed schema of the service entity."""
    return {
        "fields": [
            {"id": {"type": "string", "auto": True}},
            {"name": {"type": "string"}},
            {"retries": {"type": "integer", "default": 5}},
            {"protocol": {"type": "string", "default": "http"}},
            {"port": {"type": "integer", "default": 80}},
            {"connect_timeout": {"type": "integer", "default": 60000}},
            {"read_timeout": {"type": "integer", "default": 60000}},
            {"tls_verify": {"type": "boolean"}},
            {"enabled": {"type": "boolean", "default": True}},
        ]
    }


@pytest.fixture
def upstream_schema() -> dict[str, Any]:
    """Trimmed schema of the upstream entity with nested health checks."""
    return {
        "fields": [
            {"algorithm": {"type": "string", "default": "round-robin"}},
            {"slots": {"type": "integer", "default": 10000}},
            {
                "healthchecks": {
                    "type": "record",
                    "fields": [
                        {"threshold": {"type": "number", "default": 0}},
                        {
                            "active": {
                                "type": "record",
                                "fields": [
                                    {"timeout": {"type": "number", "default": 1}},
                                    {"http_path": {"type": "string", "default": "/"}},
                                ],
                            }
                        },
                    ],
                }
            },
        ]
    }


class TestFillPluginDefaults:
    """Tests for fill_plugin_defaults."""

    @pytest.mark.unit
    def test_fills_missing_config(self, rate_limiting_schema: dict[str, Any]) -> None:
        """Absent keys should take defaults; keys without one become None."""
        plugin = Plugin(name="rate-limiting", config={"minute": 5})

        filled = fill_plugin_defaults(plugin, rate_limiting_schema)

        assert filled.config == {
            "minute": 5,
            "policy": "local",
            "fault_tolerant": True,
            "redis": {"host": None, "port": 6379},
        }

    @pytest.mark.unit
    def test_set_values_kept(self, rate_limiting_schema: dict[str, Any]) -> None:
        """Configured values, including explicit ones, should be untouched."""
        plugin = Plugin(
            name="rate-limiting",
            config={"policy": "redis", "fault_tolerant": False},
            protocols=["http"],
            enabled=False,
        )

        filled = fill_plugin_defaults(plugin, rate_limiting_schema)

        assert filled.config is not None
        assert filled.config["policy"] == "redis"
        assert filled.config["fault_tolerant"] is False
        assert filled.protocols == ["http"]
        assert filled.enabled is False

    @pytest.mark.unit
    def test_protocols_and_enabled_defaults(self, rate_limiting_schema: dict[str, Any]) -> None:
        """Unset protocols should come from the schema; enabled defaults to True."""
        filled = fill_plugin_defaults(Plugin(name="rate-limiting"), rate_limiting_schema)

        assert filled.protocols == ["grpc", "grpcs", "http", "https"]
        assert filled.enabled is True

    @pytest.mark.unit
    def test_input_not_mutated(self, rate_limiting_schema: dict[str, Any]) -> None:
        """The caller's plugin and its config should stay as they were."""
        config = {"minute": 5}
        plugin = Plugin(name="rate-limiting", config=config)

        fill_plugin_defaults(plugin, rate_limiting_schema)

        assert plugin.config == {"minute": 5}
        assert config == {"minute": 5}
        assert plugin.enabled is None
        assert plugin.protocols is None

    @pytest.mark.unit
    def test_config_only_schema(self) -> None:
        """Legacy config-only schemas should fill the config directly."""
        schema = {"fields": [{"second": {"type": "number", "default": 1}}]}

        filled = fill_plugin_defaults(Plugin(name="legacy"), schema)

        assert filled.config == {"second": 1}
        assert filled.protocols is None

    @pytest.mark.unit
    def test_missing_schema_rejected(self) -> None:
        """A schema is required."""
        with pytest.raises(KongBadRequestError):
            fill_plugin_defaults(Plugin(name="x"), None)  # type: ignore[arg-type]


class TestFillEntityDefaults:
    """Tests for fill_entity_defaults."""

    @pytest.mark.unit
    def test_service_defaults(self, service_schema: dict[str, Any]) -> None:
        """Unset fields should take defaults, set ones should be kept."""
        service = Service(name="orders", host="orders.internal", port=8080)

        filled = fill_entity_defaults(service, service_schema)

        assert filled.port == 8080
        assert filled.protocol == "http"
        assert filled.retries == 5
        assert filled.connect_timeout == 60000
        assert filled.enabled is True
        assert filled.tls_verify is None
        assert filled.id is None
        assert service.retries is None

    @pytest.mark.unit
    def test_nested_records_merged(self, upstream_schema: dict[str, Any]) -> None:
        """Nested health check settings should be merged key by key."""
        upstream = Upstream(
            name="backend",
            healthchecks={"active": {"http_path": "/status"}},
        )

        filled = fill_entity_defaults(upstream, upstream_schema)

        assert filled.algorithm == "round-robin"
        assert filled.slots == 10000
        assert filled.healthchecks == {
            "threshold": 0,
            "active": {"timeout": 1, "http_path": "/status"},
        }

    @pytest.mark.unit
    def test_route_and_target_supported(self) -> None:
        """Routes and targets should be fillable too."""
        route_schema = {"fields": [{"strip_path": {"type": "boolean", "default": True}}]}
        target_schema = {"fields": [{"weight": {"type": "integer", "default": 100}}]}

        assert fill_entity_defaults(Route(name="r"), route_schema).strip_path is True
        assert fill_entity_defaults(Target(target="10.0.0.1:80"), target_schema).weight == 100

    @pytest.mark.unit
    def test_unsupported_entity_rejected(self, service_schema: dict[str, Any]) -> None:
        """Only services, routes, upstreams and targets are supported."""
        with pytest.raises(KongBadRequestError, match="unsupported entity"):
            fill_entity_defaults(
                Consumer(username="alice"),  # type: ignore[type-var]
                service_schema,
            )

    @pytest.mark.unit
    def test_missing_schema_rejected(self) -> None:
        """A schema is required."""
        with pytest.raises(KongBadRequestError, match="provided schema is None"):
            fill_entity_defaults(Service(name="s"), None)  # type: ignore[arg-type]

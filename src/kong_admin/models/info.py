"""Pydantic models for Kong node information (``GET /``)."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kong_admin.versioning import Version, version_from_info


class ProxyListener(BaseModel):
    """An L7 listener of the gateway (``proxy_listen``)."""

    model_config = ConfigDict(extra="allow")

    listener: str = ""
    ip: str = ""
    port: int = 0
    ssl: bool = False
    http2: bool = False
    proxy_protocol: bool = False
    deferred: bool = False
    bind: bool = False
    reuseport: bool = False


class StreamListener(BaseModel):
    """An L4 listener of the gateway (``stream_listen``)."""

    model_config = ConfigDict(extra="allow")

    listener: str = ""
    ip: str = ""
    port: int = 0
    udp: bool = False
    ssl: bool = False
    proxy_protocol: bool = False
    bind: bool = False
    reuseport: bool = False


class RuntimeConfiguration(BaseModel):
    """Subset of the node configuration exposed on the root endpoint.

    Attributes:
        database: Storage backend (``postgres``, ``off`` for DB-less).
        portal: Whether the Dev Portal is enabled.
        rbac: RBAC mode (``off``, ``on``, ``entity``, ``both``).
        proxy_listeners: Configured L7 listeners.
        stream_listeners: Configured L4 listeners.
    """

    model_config = ConfigDict(extra="allow")

    database: str | None = None
    portal: bool | None = None
    rbac: str | None = None
    proxy_listeners: list[ProxyListener] = Field(default_factory=list)
    stream_listeners: list[StreamListener] = Field(default_factory=list)

    @field_validator("proxy_listeners", "stream_listeners", mode="before")
    @classmethod
    def empty_object_as_list(cls, v: Any) -> Any:
        """Kong encodes an empty listener list as ``{}``."""
        if v is None or v == {}:
            return []
        return v

    @field_validator("portal", mode="before")
    @classmethod
    def coerce_portal(cls, v: Any) -> Any:
        """Older Kong versions report the portal flag as ``"on"``/``"off"``."""
        if isinstance(v, str):
            return v.strip().lower() in {"on", "true", "1"}
        return v


class Info(BaseModel):
    """Kong node information.

    Attributes:
        version: Reported gateway version string.
        hostname: Node hostname.
        node_id: Node UUID.
        configuration: Selected runtime configuration values.
        plugins: Plugin availability information.
    """

    model_config = ConfigDict(extra="allow")

    version: str | None = Field(default=None, description="Gateway version")
    hostname: str | None = Field(default=None, description="Node hostname")
    node_id: str | None = Field(default=None, description="Node ID")
    configuration: RuntimeConfiguration | None = Field(default=None)
    plugins: dict[str, Any] | None = Field(default=None)

    @property
    def is_enterprise(self) -> bool:
        """Return True when the node runs Kong Enterprise."""
        return "enterprise" in (self.version or "")

    @property
    def is_in_memory(self) -> bool:
        """Return True when the node runs DB-less."""
        return self.configuration is not None and self.configuration.database == "off"

    @property
    def is_rbac_enabled(self) -> bool:
        """Return True when RBAC is switched on."""
        return self.configuration is not None and self.configuration.rbac == "on"

    @property
    def is_portal_enabled(self) -> bool:
        """Return True when the Dev Portal is enabled."""
        return bool(self.configuration is not None and self.configuration.portal)

    def version_info(self) -> Version:
        """Parse the reported version string.

        Raises:
            ValueError: If the version string cannot be parsed.
        """
        return version_from_info(self.model_dump())

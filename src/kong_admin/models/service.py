"""Pydantic models for Kong Services.

A Service in Kong represents an external upstream API or microservice
that Kong proxies requests to. Services define the upstream connection
details including host, port, protocol, and timeout settings.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field, field_validator

from kong_admin.models.base import KongEntityBase, KongEntityReference


class Service(KongEntityBase):
    """Kong Service entity model.

    A Service can be defined either by its connection components (host,
    port, protocol, path) or by a single ``url`` shorthand that Kong expands.

    Attributes:
        name: Service name (unique identifier alternative to UUID).
        host: Hostname or IP of the upstream server.
        port: Port of the upstream server (1-65535).
        protocol: Protocol to use for upstream connection.
        path: Path prefix to prepend to requests.
        url: Full URL shorthand (protocol://host:port/path).
        retries: Number of retries on connection failure.
        connect_timeout: Connection timeout in milliseconds.
        write_timeout: Write timeout in milliseconds.
        read_timeout: Read timeout in milliseconds.
        tls_verify: Whether to verify upstream TLS certificate.
        tls_verify_depth: Maximum TLS certificate chain depth.
        ca_certificates: List of CA certificate IDs for TLS verification.
        client_certificate: Client certificate for mTLS.
        enabled: Whether the service is active.
    """

    _entity_name: ClassVar[str] = "service"

    name: str | None = Field(default=None, description="Service name (unique)")

    host: str | None = Field(default=None, description="Host of the upstream server")
    port: int | None = Field(default=None, ge=1, le=65535, description="Upstream server port")
    protocol: str | None = Field(default=None, description="Protocol to use")
    path: str | None = Field(default=None, description="Path prefix for requests")
    url: str | None = Field(default=None, description="Full URL shorthand")

    retries: int | None = Field(default=None, ge=0, description="Number of retries")
    connect_timeout: int | None = Field(default=None, ge=0, description="Connection timeout (ms)")
    write_timeout: int | None = Field(default=None, ge=0, description="Write timeout (ms)")
    read_timeout: int | None = Field(default=None, ge=0, description="Read timeout (ms)")

    tls_verify: bool | None = Field(default=None, description="Verify upstream TLS certificate")
    tls_verify_depth: int | None = Field(default=None, ge=0, description="TLS verify depth")
    ca_certificates: list[str] | None = Field(default=None, description="CA certificate IDs")
    client_certificate: KongEntityReference | None = Field(
        default=None, description="Client certificate for mTLS"
    )

    enabled: bool | None = Field(default=None, description="Whether service is active")

    @field_validator("protocol", mode="before")
    @classmethod
    def lowercase_protocol(cls, v: str | None) -> str | None:
        """Ensure protocol is lowercase."""
        if v is not None:
            return v.lower()
        return v

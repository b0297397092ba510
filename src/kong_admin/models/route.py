"""Pydantic models for Kong Routes.

A Route defines rules for matching client requests and forwarding them to
a Service.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import Field, field_validator

from kong_admin.models.base import KongEntityBase, KongEntityReference


class Route(KongEntityBase):
    """Kong Route entity model.

    Attributes:
        name: Route name (unique identifier alternative to UUID).
        service: Reference to the associated service.
        protocols: Accepted protocols (http, https, grpc, etc.).
        methods: HTTP methods to match (GET, POST, etc.).
        hosts: Host headers to match.
        paths: Path prefixes or regexes to match.
        headers: Headers to match.
        snis: SNIs for TLS route matching.
        sources: Source IP/port criteria for stream routes.
        destinations: Destination IP/port criteria for stream routes.
        expression: Expression router predicate (Kong 3.0+).
        priority: Priority for expression routes.
        https_redirect_status_code: Status code for HTTPS redirect.
        regex_priority: Priority for regex path matching.
        strip_path: Whether to strip matched path prefix.
        path_handling: Path handling version (v0 or v1).
        preserve_host: Whether to preserve original host header.
        request_buffering: Whether to buffer request body.
        response_buffering: Whether to buffer response body.
    """

    _entity_name: ClassVar[str] = "route"

    name: str | None = Field(default=None, description="Route name (unique)")
    service: KongEntityReference | None = Field(default=None, description="Associated service")

    protocols: list[str] | None = Field(default=None, description="Accepted protocols")
    methods: list[str] | None = Field(default=None, description="HTTP methods (GET, POST, etc.)")
    hosts: list[str] | None = Field(default=None, description="Host headers to match")
    paths: list[str] | None = Field(default=None, description="Path prefixes to match")
    headers: dict[str, list[str]] | None = Field(default=None, description="Headers to match")
    snis: list[str] | None = Field(default=None, description="SNIs for TLS routes")
    sources: list[dict[str, Any]] | None = Field(
        default=None, description="Source IPs/ports for stream routes"
    )
    destinations: list[dict[str, Any]] | None = Field(
        default=None, description="Destination IPs/ports for stream routes"
    )
    expression: str | None = Field(default=None, description="Expression router predicate")
    priority: int | None = Field(default=None, description="Expression route priority")

    https_redirect_status_code: int | None = Field(
        default=None, description="HTTP status for HTTPS redirect"
    )
    regex_priority: int | None = Field(default=None, description="Regex route priority")
    strip_path: bool | None = Field(default=None, description="Strip matched path prefix")
    path_handling: str | None = Field(default=None, description="Path handling version")
    preserve_host: bool | None = Field(default=None, description="Preserve host header")
    request_buffering: bool | None = Field(default=None, description="Buffer request body")
    response_buffering: bool | None = Field(default=None, description="Buffer response body")

    @field_validator("methods", mode="before")
    @classmethod
    def uppercase_methods(cls, v: list[str] | None) -> list[str] | None:
        """Ensure HTTP methods are uppercase."""
        if v is not None:
            return [m.upper() for m in v]
        return v

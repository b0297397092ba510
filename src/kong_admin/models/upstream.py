"""Pydantic models for Kong Upstreams and Targets.

An Upstream is a virtual hostname load-balancing over a pool of Targets
(host:port pairs with a weight).
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import Field

from kong_admin.models.base import KongEntityBase, KongEntityReference


class Upstream(KongEntityBase):
    """Kong Upstream entity model.

    Attributes:
        name: Upstream name, used as the virtual host in services.
        algorithm: Load-balancing algorithm.
        hash_on: Hashing input for consistent-hashing.
        hash_fallback: Fallback hashing input.
        hash_on_header: Header used when hashing on a header.
        slots: Number of slots in the balancer ring.
        healthchecks: Active/passive health check configuration.
        host_header: Host header to use when proxying.
        client_certificate: Client certificate for upstream mTLS.
        use_srv_name: Use the SRV record name as the upstream host.
    """

    _entity_name: ClassVar[str] = "upstream"

    name: str | None = Field(default=None, description="Upstream name")
    algorithm: str | None = Field(default=None, description="Load-balancing algorithm")
    hash_on: str | None = Field(default=None, description="Hash input")
    hash_fallback: str | None = Field(default=None, description="Fallback hash input")
    hash_on_header: str | None = Field(default=None, description="Header to hash on")
    hash_fallback_header: str | None = Field(default=None, description="Fallback header")
    hash_on_cookie: str | None = Field(default=None, description="Cookie to hash on")
    hash_on_cookie_path: str | None = Field(default=None, description="Cookie path")
    slots: int | None = Field(default=None, ge=10, le=65536, description="Balancer slots")
    healthchecks: dict[str, Any] | None = Field(default=None, description="Health checks")
    host_header: str | None = Field(default=None, description="Host header override")
    client_certificate: KongEntityReference | None = Field(
        default=None, description="Client certificate"
    )
    use_srv_name: bool | None = Field(default=None, description="Use SRV name as host")


class Target(KongEntityBase):
    """Kong Target entity model.

    Attributes:
        target: ``host:port`` of the backend.
        weight: Balancer weight (0 disables the target).
        upstream: Owning upstream.
    """

    _entity_name: ClassVar[str] = "target"

    target: str | None = Field(default=None, description="host:port of the backend")
    weight: int | None = Field(default=None, ge=0, le=65535, description="Balancer weight")
    upstream: KongEntityReference | None = Field(default=None, description="Owning upstream")
    created_at: float | None = Field(default=None, description="Creation time (fractional)")
    updated_at: float | None = Field(default=None, description="Update time (fractional)")


class UpstreamNodeHealth(Target):
    """Target as reported by ``/upstreams/{u}/health``.

    Attributes:
        health: Aggregated health (HEALTHY, UNHEALTHY, DNS_ERROR, HEALTHCHECKS_OFF).
        data: Per-address details reported by the balancer.
    """

    _entity_name: ClassVar[str] = "upstream_node_health"

    health: str | None = Field(default=None, description="Aggregated health")
    data: dict[str, Any] | None = Field(default=None, description="Balancer details")

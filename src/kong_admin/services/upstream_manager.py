"""Upstream and target managers.

This module provides the UpstreamManager class for Kong Upstream entities
and the TargetManager class for the targets nested under them.
"""

from __future__ import annotations

import builtins
from typing import TYPE_CHECKING

import structlog

from kong_admin.exceptions import KongBadRequestError
from kong_admin.models.upstream import Target, Upstream, UpstreamNodeHealth
from kong_admin.services.base import BaseEntityManager, join_path
from kong_admin.values import ensure_identifier

if TYPE_CHECKING:
    from kong_admin.client import KongAdminClient
    from kong_admin.context import RequestContext
    from kong_admin.listing import ListOptions

logger = structlog.get_logger()


class UpstreamManager(BaseEntityManager[Upstream]):
    """Manager for Kong Upstream entities.

    Example:
        >>> manager = UpstreamManager(client)
        >>> manager.create(Upstream(name="api-backend", algorithm="round-robin"))
        >>> health, _ = manager.get_health("api-backend")
    """

    _endpoint = "upstreams"
    _entity_name = "upstream"
    _model_class = Upstream

    def get_health(
        self,
        upstream_id_or_name: str,
        opts: ListOptions | None = None,
        *,
        ctx: RequestContext | None = None,
    ) -> tuple[builtins.list[UpstreamNodeHealth], ListOptions | None]:
        """Get one page of per-target health for an upstream.

        Args:
            upstream_id_or_name: Upstream ID or name.
            opts: Pagination options.
            ctx: Optional request context.

        Returns:
            Tuple of (target health records, options for the next page).
        """
        path = self._entity_path(upstream_id_or_name, "health")
        self._log.debug("getting_upstream_health", upstream=upstream_id_or_name)
        data, next_opts = self._client.list(path, opts, ctx=ctx)
        return [UpstreamNodeHealth.model_validate(item) for item in data], next_opts

    def get_health_all(
        self, upstream_id_or_name: str, *, ctx: RequestContext | None = None
    ) -> builtins.list[UpstreamNodeHealth]:
        """Get the health of every target of an upstream."""
        path = self._entity_path(upstream_id_or_name, "health")
        data = self._client.list_all(path, ctx=ctx)
        return [UpstreamNodeHealth.model_validate(item) for item in data]


class TargetManager:
    """Manager for the targets of an upstream.

    Targets only exist under ``/upstreams/{upstream}/targets``, so every
    operation takes the upstream ID or name first.

    Example:
        >>> targets = TargetManager(client)
        >>> targets.create("api-backend", Target(target="10.0.0.1:8080", weight=100))
        >>> targets.mark_unhealthy("api-backend", "10.0.0.1:8080")
    """

    _entity_name = "target"

    def __init__(self, client: KongAdminClient) -> None:
        self._client = client
        self._log = logger.bind(entity=self._entity_name)

    @staticmethod
    def _targets_path(upstream_id_or_name: str, *rest: str) -> str:
        upstream = ensure_identifier(upstream_id_or_name, "upstream ID or name")
        return join_path("upstreams", upstream, "targets", *rest)

    def create(
        self, upstream_id_or_name: str, target: Target, *, ctx: RequestContext | None = None
    ) -> Target:
        """Add a target to an upstream.

        Args:
            upstream_id_or_name: Upstream ID or name.
            target: Target with at least ``target`` (host:port).
            ctx: Optional request context.

        Returns:
            The created target.
        """
        if target is None:
            raise KongBadRequestError("target cannot be None")
        path = self._targets_path(upstream_id_or_name)
        self._log.info("adding_target", upstream=upstream_id_or_name, target=target.target)
        created = Target.model_validate(
            self._client.post(path, json=target.to_create_payload(), ctx=ctx)
        )
        self._log.info("added_target", upstream=upstream_id_or_name, id=created.id)
        return created

    def delete(
        self,
        upstream_id_or_name: str,
        target_id_or_address: str,
        *,
        ctx: RequestContext | None = None,
    ) -> None:
        """Remove a target from an upstream."""
        target = ensure_identifier(target_id_or_address, "target ID or address")
        path = self._targets_path(upstream_id_or_name, target)
        self._log.info("removing_target", upstream=upstream_id_or_name, target=target)
        self._client.delete(path, ctx=ctx)

    def list(
        self,
        upstream_id_or_name: str,
        opts: ListOptions | None = None,
        *,
        ctx: RequestContext | None = None,
    ) -> tuple[builtins.list[Target], ListOptions | None]:
        """List one page of an upstream's targets."""
        path = self._targets_path(upstream_id_or_name)
        data, next_opts = self._client.list(path, opts, ctx=ctx)
        return [Target.model_validate(item) for item in data], next_opts

    def list_all(
        self,
        upstream_id_or_name: str,
        opts: ListOptions | None = None,
        *,
        ctx: RequestContext | None = None,
    ) -> builtins.list[Target]:
        """List every target of an upstream."""
        path = self._targets_path(upstream_id_or_name)
        return [Target.model_validate(item) for item in self._client.list_all(path, opts, ctx=ctx)]

    def _set_health(
        self,
        upstream_id_or_name: str,
        target_id_or_address: str,
        status: str,
        ctx: RequestContext | None,
    ) -> None:
        target = ensure_identifier(target_id_or_address, "target ID or address")
        path = self._targets_path(upstream_id_or_name, target, status)
        self._log.info(
            "setting_target_health",
            upstream=upstream_id_or_name,
            target=target,
            status=status,
        )
        self._client.post(path, ctx=ctx)

    def mark_healthy(
        self,
        upstream_id_or_name: str,
        target_id_or_address: str,
        *,
        ctx: RequestContext | None = None,
    ) -> None:
        """Mark a target healthy on every node (``POST .../healthy``).

        Args:
            upstream_id_or_name: Upstream ID or name.
            target_id_or_address: Target ID or ``host:port``.
            ctx: Optional request context.
        """
        self._set_health(upstream_id_or_name, target_id_or_address, "healthy", ctx)

    def mark_unhealthy(
        self,
        upstream_id_or_name: str,
        target_id_or_address: str,
        *,
        ctx: RequestContext | None = None,
    ) -> None:
        """Mark a target unhealthy on every node (``POST .../unhealthy``)."""
        self._set_health(upstream_id_or_name, target_id_or_address, "unhealthy", ctx)

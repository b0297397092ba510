"""Route manager for Kong Routes.

This module provides the RouteManager class for managing Kong Route
entities through the Admin API.
"""

from __future__ import annotations

import builtins
from typing import TYPE_CHECKING

from kong_admin.exceptions import KongBadRequestError
from kong_admin.models.route import Route
from kong_admin.services.base import BaseEntityManager, join_path
from kong_admin.values import ensure_identifier

if TYPE_CHECKING:
    from kong_admin.context import RequestContext
    from kong_admin.listing import ListOptions


class RouteManager(BaseEntityManager[Route]):
    """Manager for Kong Route entities.

    Extends BaseEntityManager with service-scoped operations.

    Example:
        >>> manager = RouteManager(client)
        >>> route = manager.create_in_service(service.id, Route(paths=["/r"]))
        >>> route.service.id == service.id
        True
    """

    _endpoint = "routes"
    _entity_name = "route"
    _model_class = Route

    @staticmethod
    def _service_routes_path(service_id_or_name: str) -> str:
        service = ensure_identifier(service_id_or_name, "service ID or name")
        return join_path("services", service, "routes")

    def list_for_service(
        self,
        service_id_or_name: str,
        opts: ListOptions | None = None,
        *,
        ctx: RequestContext | None = None,
    ) -> tuple[builtins.list[Route], ListOptions | None]:
        """List one page of the routes attached to a service.

        Args:
            service_id_or_name: Service ID or name.
            opts: Pagination and tag filter.
            ctx: Optional request context.

        Returns:
            Tuple of (routes, options for the next page).
        """
        path = self._service_routes_path(service_id_or_name)
        return self._list_at(path, opts, ctx, {})

    def create_in_service(
        self,
        service_id_or_name: str,
        route: Route,
        *,
        ctx: RequestContext | None = None,
    ) -> Route:
        """Create a route under a service endpoint.

        Args:
            service_id_or_name: Service ID or name.
            route: Route entity to create.
            ctx: Optional request context.

        Returns:
            Created Route entity, referencing the service.
        """
        if route is None:
            raise KongBadRequestError("route cannot be None")
        path = self._service_routes_path(service_id_or_name)
        self._log.info("creating_service_route", service=service_id_or_name, route_name=route.name)
        created = self._parse(self._client.post(path, json=route.to_create_payload(), ctx=ctx))
        self._log.info("created_service_route", id=created.id, service=service_id_or_name)
        return created

"""Managers for the GraphQL plugins' entities.

This module provides:
- DegraphqlRouteManager: REST-to-GraphQL routes nested under a service
- GraphqlCostDecorationManager: Costs used by GraphQL rate limiting
"""

from __future__ import annotations

import builtins
from typing import TYPE_CHECKING

import structlog

from kong_admin.exceptions import KongBadRequestError
from kong_admin.models.graphql import DegraphqlRoute, GraphqlCostDecoration
from kong_admin.services.base import BaseEntityManager, join_path
from kong_admin.values import ensure_identifier

if TYPE_CHECKING:
    from kong_admin.client import KongAdminClient
    from kong_admin.context import RequestContext
    from kong_admin.listing import ListOptions

logger = structlog.get_logger()


class DegraphqlRouteManager:
    """Manager for DeGraphQL routes (``/services/{service}/degraphql/routes``).

    Every route belongs to a service, so each operation takes the service
    or reads it from the route's ``service`` reference.

    Example:
        >>> routes = DegraphqlRouteManager(client)
        >>> routes.create(DegraphqlRoute(
        ...     service={"name": "github"}, uri="/me", query="query { viewer { login } }"
        ... ))
        >>> routes.list_all("github")
    """

    def __init__(self, client: KongAdminClient) -> None:
        self._client = client
        self._log = logger.bind(entity="degraphql_route")

    @staticmethod
    def _routes_path(service_id_or_name: str | None, *rest: str) -> str:
        service = ensure_identifier(service_id_or_name, "service ID or name")
        return join_path("services", service, "degraphql", "routes", *rest)

    @staticmethod
    def _service_of(route: DegraphqlRoute) -> str:
        if route.service is None or not route.service.key():
            raise KongBadRequestError("cannot use a DeGraphQL route without a service")
        return route.service.key() or ""

    def create(
        self, route: DegraphqlRoute, *, ctx: RequestContext | None = None
    ) -> DegraphqlRoute:
        """Create a DeGraphQL route under its service.

        Raises:
            KongBadRequestError: If the route or its service is missing.
        """
        if route is None:
            raise KongBadRequestError("DeGraphQL route cannot be None")
        path = self._routes_path(self._service_of(route))
        self._log.info("creating_degraphql_route", uri=route.uri)
        response = self._client.post(path, json=route.to_create_payload(), ctx=ctx)
        return DegraphqlRoute.model_validate(response)

    def get(
        self, service_id_or_name: str, route_id: str, *, ctx: RequestContext | None = None
    ) -> DegraphqlRoute:
        """Get a DeGraphQL route of a service."""
        route_id = ensure_identifier(route_id, "DeGraphQL route ID")
        path = self._routes_path(service_id_or_name, route_id)
        return DegraphqlRoute.model_validate(self._client.get(path, ctx=ctx))

    def update(
        self, route: DegraphqlRoute, *, ctx: RequestContext | None = None
    ) -> DegraphqlRoute:
        """Patch a DeGraphQL route.

        Raises:
            KongBadRequestError: If the route has no ID or no service.
        """
        if route is None or not route.id:
            raise KongBadRequestError("cannot update a DeGraphQL route without an ID")
        path = self._routes_path(self._service_of(route), route.id)
        self._log.info("updating_degraphql_route", id=route.id)
        response = self._client.patch(path, json=route.to_update_payload(), ctx=ctx)
        return DegraphqlRoute.model_validate(response)

    def delete(
        self, service_id_or_name: str, route_id: str, *, ctx: RequestContext | None = None
    ) -> None:
        """Delete a DeGraphQL route of a service."""
        route_id = ensure_identifier(route_id, "DeGraphQL route ID")
        self._log.info("deleting_degraphql_route", id=route_id)
        self._client.delete(self._routes_path(service_id_or_name, route_id), ctx=ctx)

    def list(
        self,
        service_id_or_name: str,
        opts: ListOptions | None = None,
        *,
        ctx: RequestContext | None = None,
    ) -> tuple[builtins.list[DegraphqlRoute], ListOptions | None]:
        """List one page of a service's DeGraphQL routes."""
        data, next_opts = self._client.list(self._routes_path(service_id_or_name), opts, ctx=ctx)
        return [DegraphqlRoute.model_validate(item) for item in data], next_opts

    def list_all(
        self, service_id_or_name: str, *, ctx: RequestContext | None = None
    ) -> builtins.list[DegraphqlRoute]:
        """List every DeGraphQL route of a service."""
        data = self._client.list_all(self._routes_path(service_id_or_name), ctx=ctx)
        return [DegraphqlRoute.model_validate(item) for item in data]


class GraphqlCostDecorationManager(BaseEntityManager[GraphqlCostDecoration]):
    """Manager for GraphQL rate-limiting cost decorations.

    Decorations are addressed by ID only; Kong assigns the ID on creation.

    Example:
        >>> costs = GraphqlCostDecorationManager(client)
        >>> costs.create(GraphqlCostDecoration(type_path="Query.users", mul_arguments=["first"]))
    """

    _endpoint = "graphql-rate-limiting-advanced/costs"
    _entity_name = "graphql_cost_decoration"
    _model_class = GraphqlCostDecoration

    def create(
        self, entity: GraphqlCostDecoration, *, ctx: RequestContext | None = None
    ) -> GraphqlCostDecoration:
        """Create a cost decoration.

        Raises:
            KongBadRequestError: If the decoration already carries an ID.
        """
        if entity is not None and entity.id:
            raise KongBadRequestError("cannot specify an ID when creating a cost decoration")
        return self._create_at(self._endpoint, entity, ctx)

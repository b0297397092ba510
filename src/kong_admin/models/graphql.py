"""Pydantic models for the GraphQL plugins' entities.

DeGraphQL routes map a REST URI of a service to a GraphQL query; cost
decorations tell the GraphQL rate-limiting plugin how expensive each part
of a query is.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from kong_admin.models.base import KongEntityBase, KongEntityReference


class DegraphqlRoute(KongEntityBase):
    """Route from a URI to a GraphQL query on a service.

    Attributes:
        service: Service the route belongs to (by ID or name).
        methods: HTTP methods matched on the URI.
        uri: URI pattern, e.g. ``/users/:id``.
        query: GraphQL query sent upstream.
    """

    _entity_name: ClassVar[str] = "degraphql_route"

    service: KongEntityReference | None = Field(default=None, description="Owning service")
    methods: list[str] | None = Field(default=None, description="Matched HTTP methods")
    uri: str | None = Field(default=None, description="URI pattern")
    query: str | None = Field(default=None, description="GraphQL query")


class GraphqlCostDecoration(KongEntityBase):
    """Cost of a GraphQL type path for rate limiting.

    The cost of a node is ``(add_constant + sum(add_arguments)) *
    mul_constant * prod(mul_arguments)``.
    """

    _entity_name: ClassVar[str] = "graphql_cost_decoration"

    type_path: str | None = Field(default=None, description="Type path, e.g. Query.users")
    add_constant: float | None = Field(default=None, description="Constant added to the cost")
    add_arguments: list[str] | None = Field(default=None, description="Arguments added")
    mul_constant: float | None = Field(default=None, description="Constant multiplier")
    mul_arguments: list[str] | None = Field(default=None, description="Arguments multiplied")

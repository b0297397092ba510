"""Filter chain manager for Kong WebAssembly filter chains."""

from __future__ import annotations

import builtins
from typing import TYPE_CHECKING

from kong_admin.exceptions import KongBadRequestError
from kong_admin.models.filter_chain import FilterChain
from kong_admin.services.base import BaseEntityManager, join_path
from kong_admin.values import ensure_identifier

if TYPE_CHECKING:
    from kong_admin.context import RequestContext
    from kong_admin.listing import ListOptions

FILTER_CHAIN_PARENTS = ("services", "routes")


class FilterChainManager(BaseEntityManager[FilterChain]):
    """Manager for Kong filter chains.

    Filter chains live at ``/filter-chains`` and can be nested under a
    service or a route.

    Example:
        >>> chains = FilterChainManager(client)
        >>> chains.create_for("services", "my-api", FilterChain(filters=[Filter(name="auth")]))
    """

    _endpoint = "filter-chains"
    _entity_name = "filter_chain"
    _model_class = FilterChain

    def _parent_path(self, parent: str, parent_id_or_name: str, *rest: str) -> str:
        if parent not in FILTER_CHAIN_PARENTS:
            raise KongBadRequestError(
                f"filter chains cannot be nested under '{parent}' "
                f"(expected one of: {', '.join(FILTER_CHAIN_PARENTS)})"
            )
        parent_key = ensure_identifier(parent_id_or_name, f"{parent} ID or name")
        return join_path(parent, parent_key, self._endpoint, *rest)

    def create_for(
        self,
        parent: str,
        parent_id_or_name: str,
        chain: FilterChain,
        *,
        ctx: RequestContext | None = None,
    ) -> FilterChain:
        """Create a filter chain under a service or route (PUT when the chain has an ID)."""
        return self._create_at(self._parent_path(parent, parent_id_or_name), chain, ctx)

    def update_for(
        self,
        parent: str,
        parent_id_or_name: str,
        chain: FilterChain,
        *,
        ctx: RequestContext | None = None,
    ) -> FilterChain:
        """Patch a filter chain through its service or route.

        Raises:
            KongBadRequestError: If the chain carries no ID.
        """
        if chain is None or not chain.id:
            raise KongBadRequestError("cannot update a filter chain without an ID")
        path = self._parent_path(parent, parent_id_or_name, chain.id)
        self._log.info("updating_scoped_filter_chain", parent=parent, id=chain.id)
        return self._parse(self._client.patch(path, json=chain.to_update_payload(), ctx=ctx))

    def delete_for(
        self,
        parent: str,
        parent_id_or_name: str,
        chain_id: str,
        *,
        ctx: RequestContext | None = None,
    ) -> None:
        """Delete a filter chain through its service or route."""
        chain_id = ensure_identifier(chain_id, "filter chain ID")
        path = self._parent_path(parent, parent_id_or_name, chain_id)
        self._log.info("deleting_scoped_filter_chain", parent=parent, id=chain_id)
        self._client.delete(path, ctx=ctx)

    def list_all_for(
        self,
        parent: str,
        parent_id_or_name: str,
        *,
        ctx: RequestContext | None = None,
    ) -> builtins.list[FilterChain]:
        """List every filter chain attached to a service or route."""
        return self._list_all_at(self._parent_path(parent, parent_id_or_name), None, ctx, {})

    def list_for(
        self,
        parent: str,
        parent_id_or_name: str,
        opts: ListOptions | None = None,
        *,
        ctx: RequestContext | None = None,
    ) -> tuple[builtins.list[FilterChain], ListOptions | None]:
        """List one page of the filter chains attached to a service or route."""
        return self._list_at(self._parent_path(parent, parent_id_or_name), opts, ctx, {})

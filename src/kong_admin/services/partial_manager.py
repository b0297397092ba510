"""Partial manager for Kong Partials.

Partials are reusable configuration fragments (e.g. a shared Redis
configuration) linked into plugin configurations. Available from Kong 3.10.
"""

from __future__ import annotations

import builtins
from typing import TYPE_CHECKING, Any

from kong_admin.models.plugin import Partial, Plugin
from kong_admin.services.base import BaseEntityManager, join_path
from kong_admin.values import ensure_identifier

if TYPE_CHECKING:
    from kong_admin.context import RequestContext
    from kong_admin.listing import ListOptions


class PartialManager(BaseEntityManager[Partial]):
    """Manager for Kong Partial entities.

    Example:
        >>> partials = PartialManager(client)
        >>> redis = partials.create(Partial(name="shared-redis", type="redis-ee", config={}))
        >>> plugins, _ = partials.list_linked_plugins("shared-redis")
    """

    _endpoint = "partials"
    _entity_name = "partial"
    _model_class = Partial

    def list_linked_plugins(
        self,
        partial_id_or_name: str,
        opts: ListOptions | None = None,
        *,
        ctx: RequestContext | None = None,
    ) -> tuple[builtins.list[Plugin], ListOptions | None]:
        """List one page of the plugins linked to a partial.

        Args:
            partial_id_or_name: Partial ID or name.
            opts: Pagination options.
            ctx: Optional request context.

        Returns:
            Tuple of (linked plugins, options for the next page).
        """
        path = self._entity_path(partial_id_or_name, "links")
        self._log.debug("listing_partial_links", partial=partial_id_or_name)
        data, next_opts = self._client.list(path, opts, ctx=ctx)
        return [Plugin.model_validate(item) for item in data], next_opts

    def get_schema(
        self, partial_type: str, *, ctx: RequestContext | None = None
    ) -> dict[str, Any]:
        """Get the schema of a partial type (``/schemas/partials/{type}``)."""
        name = ensure_identifier(partial_type, "partial type")
        return self._client.get(join_path("schemas", "partials", name), ctx=ctx)

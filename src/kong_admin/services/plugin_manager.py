"""Plugin manager for Kong Plugins.

This module provides the PluginManager class for managing Kong Plugin
entities through the Admin API, globally or nested under a service, route,
consumer or consumer group.
"""

from __future__ import annotations

import builtins
from typing import TYPE_CHECKING, Any

from kong_admin.exceptions import KongBadRequestError
from kong_admin.models.plugin import Plugin
from kong_admin.services.base import BaseEntityManager, join_path
from kong_admin.services.schema_manager import validate_against_schema
from kong_admin.values import ensure_identifier

if TYPE_CHECKING:
    from kong_admin.context import RequestContext
    from kong_admin.listing import ListOptions

# Collections plugins can be nested under.
PLUGIN_PARENTS = ("services", "routes", "consumers", "consumer_groups")


class PluginManager(BaseEntityManager[Plugin]):
    """Manager for Kong Plugin entities.

    Extends BaseEntityManager with scoped create/update/delete/list
    operations, schema access and validation.

    Example:
        >>> manager = PluginManager(client)
        >>> plugin = manager.create_for(
        ...     "services", "my-api", Plugin(name="rate-limiting", config={"minute": 100})
        ... )
        >>> ok, message = manager.validate(Plugin(name="rate-limiting", config={"minute": -1}))
    """

    _endpoint = "plugins"
    _entity_name = "plugin"
    _model_class = Plugin

    def _parent_path(self, parent: str, parent_id_or_name: str, *rest: str) -> str:
        if parent not in PLUGIN_PARENTS:
            raise KongBadRequestError(
                f"plugins cannot be nested under '{parent}' "
                f"(expected one of: {', '.join(PLUGIN_PARENTS)})"
            )
        parent_key = ensure_identifier(parent_id_or_name, f"{parent} ID or name")
        return join_path(parent, parent_key, self._endpoint, *rest)

    def create_for(
        self,
        parent: str,
        parent_id_or_name: str,
        plugin: Plugin,
        *,
        ctx: RequestContext | None = None,
    ) -> Plugin:
        """Create a plugin scoped to a parent entity.

        Uses ``PUT <parent>/<id>/plugins/<plugin id>`` when the plugin
        carries an ID, otherwise POST.

        Args:
            parent: One of "services", "routes", "consumers", "consumer_groups".
            parent_id_or_name: Parent entity ID or name.
            plugin: Plugin to create.
            ctx: Optional request context.

        Returns:
            The created plugin.
        """
        return self._create_at(self._parent_path(parent, parent_id_or_name), plugin, ctx)

    def update_for(
        self,
        parent: str,
        parent_id_or_name: str,
        plugin: Plugin,
        *,
        ctx: RequestContext | None = None,
    ) -> Plugin:
        """Patch a plugin through its parent entity.

        Raises:
            KongBadRequestError: If the plugin carries no ID.
        """
        if plugin is None or not plugin.id:
            raise KongBadRequestError("cannot update a plugin without an ID")
        path = self._parent_path(parent, parent_id_or_name, plugin.id)
        self._log.info("updating_scoped_plugin", parent=parent, id=plugin.id)
        return self._parse(self._client.patch(path, json=plugin.to_update_payload(), ctx=ctx))

    def delete_for(
        self,
        parent: str,
        parent_id_or_name: str,
        plugin_id: str,
        *,
        ctx: RequestContext | None = None,
    ) -> None:
        """Delete a plugin through its parent entity."""
        plugin_id = ensure_identifier(plugin_id, "plugin ID")
        path = self._parent_path(parent, parent_id_or_name, plugin_id)
        self._log.info("deleting_scoped_plugin", parent=parent, id=plugin_id)
        self._client.delete(path, ctx=ctx)

    def list_for(
        self,
        parent: str,
        parent_id_or_name: str,
        opts: ListOptions | None = None,
        *,
        ctx: RequestContext | None = None,
    ) -> tuple[builtins.list[Plugin], ListOptions | None]:
        """List one page of the plugins scoped to a parent entity."""
        return self._list_at(self._parent_path(parent, parent_id_or_name), opts, ctx, {})

    def list_all_for(
        self,
        parent: str,
        parent_id_or_name: str,
        *,
        ctx: RequestContext | None = None,
    ) -> builtins.list[Plugin]:
        """List every plugin scoped to a parent entity."""
        return self._list_all_at(self._parent_path(parent, parent_id_or_name), None, ctx, {})

    def toggle(
        self, plugin_id: str, enabled: bool, *, ctx: RequestContext | None = None
    ) -> Plugin:
        """Enable or disable a plugin without touching its configuration."""
        path = self._entity_path(plugin_id)
        self._log.info("toggling_plugin", id=plugin_id, enabled=enabled)
        return self._parse(self._client.patch(path, json={"enabled": enabled}, ctx=ctx))

    def list_enabled(self, *, ctx: RequestContext | None = None) -> builtins.list[str]:
        """Return the names of the plugins enabled on the node."""
        response = self._client.get("plugins/enabled", ctx=ctx)
        enabled: builtins.list[str] = response.get("enabled_plugins") or []
        self._log.debug("listed_enabled_plugins", count=len(enabled))
        return enabled

    def get_schema(
        self, plugin_name: str, *, ctx: RequestContext | None = None
    ) -> dict[str, Any]:
        """Get the full schema of a plugin (``/schemas/plugins/{name}``).

        Args:
            plugin_name: Plugin name.
            ctx: Optional request context.

        Returns:
            Schema document with a ``fields`` list.
        """
        name = ensure_identifier(plugin_name, "plugin name")
        self._log.debug("getting_plugin_schema", plugin_name=name)
        return self._client.get(join_path("schemas", "plugins", name), ctx=ctx)

    def get_legacy_schema(
        self, plugin_name: str, *, ctx: RequestContext | None = None
    ) -> dict[str, Any]:
        """Get the config-only schema of a plugin (``/plugins/schema/{name}``).

        Older gateways only serve this endpoint; prefer :meth:`get_schema`.
        """
        name = ensure_identifier(plugin_name, "plugin name")
        return self._client.get(join_path(self._endpoint, "schema", name), ctx=ctx)

    def validate(self, plugin: Plugin, *, ctx: RequestContext | None = None) -> tuple[bool, str]:
        """Validate a plugin against its schema without storing it.

        Args:
            plugin: Plugin to validate.
            ctx: Optional request context.

        Returns:
            Tuple of (valid, message). A 400 from Kong yields False and
            Kong's message; any other failure is raised.
        """
        if plugin is None:
            raise KongBadRequestError("plugin cannot be None")
        return validate_against_schema(self._client, "plugins", plugin, ctx)

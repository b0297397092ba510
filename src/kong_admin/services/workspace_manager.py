"""Workspace manager for Kong Enterprise workspaces.

A client is bound to at most one workspace; this manager administers the
workspaces themselves and the entities shared into them. Workspace admin
endpoints are global, so use a client without a workspace for them.
"""

from __future__ import annotations

import builtins
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from kong_admin.exceptions import KongBadRequestError
from kong_admin.models.enterprise import Workspace, WorkspaceEntity
from kong_admin.services.base import BaseEntityManager
from kong_admin.values import dedupe

if TYPE_CHECKING:
    from kong_admin.context import RequestContext


def _entity_ids(entity_ids: Iterable[str]) -> str:
    ids = dedupe(i for i in entity_ids if i)
    if not ids:
        raise KongBadRequestError("at least one entity ID is required")
    return ",".join(ids)


class WorkspaceManager(BaseEntityManager[Workspace]):
    """Manager for Kong Enterprise Workspace entities.

    Example:
        >>> workspaces = WorkspaceManager(client)
        >>> workspaces.create(Workspace(name="team-a"))
        >>> workspaces.exists("team-a")
        True
        >>> workspaces.list_entities("team-a")
    """

    _endpoint = "workspaces"
    _entity_name = "workspace"
    _model_class = Workspace

    def list_entities(
        self, workspace_id_or_name: str, *, ctx: RequestContext | None = None
    ) -> builtins.list[WorkspaceEntity]:
        """List the entities that belong to a workspace.

        Args:
            workspace_id_or_name: Workspace ID or name.
            ctx: Optional request context.

        Returns:
            Entity membership records.
        """
        path = self._entity_path(workspace_id_or_name, "entities")
        self._log.debug("listing_workspace_entities", workspace=workspace_id_or_name)
        data = self._client.list_all(path, ctx=ctx)
        return [WorkspaceEntity.model_validate(item) for item in data]

    def add_entities(
        self,
        workspace_id_or_name: str,
        entity_ids: Iterable[str],
        *,
        ctx: RequestContext | None = None,
    ) -> builtins.list[dict[str, Any]]:
        """Share existing entities into a workspace.

        Args:
            workspace_id_or_name: Workspace ID or name.
            entity_ids: IDs of the entities to add.
            ctx: Optional request context.

        Returns:
            The entities Kong reports as added.
        """
        path = self._entity_path(workspace_id_or_name, "entities")
        body = {"entities": _entity_ids(entity_ids)}
        self._log.info("adding_workspace_entities", workspace=workspace_id_or_name)
        response = self._client.request("POST", path, body=body, target=list, ctx=ctx)
        return response.data or []

    def remove_entities(
        self,
        workspace_id_or_name: str,
        entity_ids: Iterable[str],
        *,
        ctx: RequestContext | None = None,
    ) -> None:
        """Remove entities from a workspace."""
        path = self._entity_path(workspace_id_or_name, "entities")
        body = {"entities": _entity_ids(entity_ids)}
        self._log.info("removing_workspace_entities", workspace=workspace_id_or_name)
        self._client.request("DELETE", path, body=body, target=None, ctx=ctx)

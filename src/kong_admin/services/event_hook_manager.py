"""Event hook manager for Kong Enterprise event hooks."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from kong_admin.models.enterprise import EventHook
from kong_admin.services.base import BaseEntityManager, join_path
from kong_admin.values import ensure_identifier

if TYPE_CHECKING:
    from kong_admin.context import RequestContext


class EventHookManager(BaseEntityManager[EventHook]):
    """Manager for Kong event hooks.

    Example:
        >>> hooks = EventHookManager(client)
        >>> hooks.create(EventHook(
        ...     source="crud", event="consumers", handler="webhook",
        ...     config={"url": "https://hooks.example.com/kong"},
        ... ))
        >>> hooks.list_sources()["crud"]
    """

    _endpoint = "event-hooks"
    _entity_name = "event_hook"
    _model_class = EventHook

    def list_sources(self, *, ctx: RequestContext | None = None) -> dict[str, Any]:
        """List the event sources and the events each emits.

        Returns:
            Mapping of source -> event -> event description (fields,
            signature, unique keys) as reported by Kong.
        """
        response = self._client.get(join_path(self._endpoint, "sources"), ctx=ctx)
        return response.get("data") or {}

    def list_source_events(
        self, source: str, *, ctx: RequestContext | None = None
    ) -> dict[str, Any]:
        """List the events a single source emits."""
        source = ensure_identifier(source, "event source")
        response = self._client.get(join_path(self._endpoint, "sources", source), ctx=ctx)
        return response.get("data") or {}

    def ping(self, hook_id: str, *, ctx: RequestContext | None = None) -> dict[str, Any]:
        """Ask a webhook handler to send a ping event to its URL."""
        path = self._entity_path(hook_id, "ping")
        self._log.info("pinging_event_hook", id=hook_id)
        return self._client.get(path, ctx=ctx)

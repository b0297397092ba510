"""Node information and tag lookups."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from kong_admin.exceptions import KongNotFoundError, KongServerError
from kong_admin.models.info import Info, ProxyListener, StreamListener

if TYPE_CHECKING:
    from kong_admin.client import KongAdminClient
    from kong_admin.context import RequestContext

logger = structlog.get_logger()


class InfoManager:
    """Read node metadata from the root endpoint.

    Example:
        >>> info = InfoManager(client).get()
        >>> info.is_enterprise, info.is_in_memory
        (False, False)
        >>> info.version_info() >= Version.parse("3.0.0")
        True
    """

    def __init__(self, client: KongAdminClient) -> None:
        self._client = client
        self._log = logger.bind(entity="info")

    def get(self, *, ctx: RequestContext | None = None) -> Info:
        """Get the node's version and selected configuration."""
        info = Info.model_validate(self._client.root(ctx=ctx))
        self._log.debug("got_node_info", version=info.version)
        return info

    def listeners(
        self, *, ctx: RequestContext | None = None
    ) -> tuple[list[ProxyListener], list[StreamListener]]:
        """Return the proxy (L7) and stream (L4) listeners the node serves."""
        configuration = self.get(ctx=ctx).configuration
        if configuration is None:
            return [], []
        return configuration.proxy_listeners, configuration.stream_listeners

    def is_config_ready(self, *, ctx: RequestContext | None = None) -> bool:
        """Return whether the node has loaded a configuration.

        Kong answers ``/config/ready`` with 200 once configured and 503
        before; any other failure is raised.
        """
        try:
            self._client.request("GET", "config/ready", target=None, ctx=ctx)
        except KongServerError as e:
            if e.status_code != 503:
                raise
            self._log.debug("config_not_ready")
            return False
        return True


class TagManager:
    """Tag lookups."""

    def __init__(self, client: KongAdminClient) -> None:
        self._client = client

    def exists(self, *, ctx: RequestContext | None = None) -> bool:
        """Return whether the node serves the ``/tags`` endpoint (``HEAD /tags``)."""
        try:
            response = self._client.head("tags", ctx=ctx)
        except KongNotFoundError:
            return False
        return response.status_code == 200

"""Consumer and consumer group managers.

This module provides the ConsumerManager and ConsumerGroupManager classes
for managing Kong consumers and (Enterprise) consumer groups through the
Admin API. Credentials are handled by the credential managers.
"""

from __future__ import annotations

import builtins
from typing import TYPE_CHECKING, Any

from kong_admin.exceptions import KongNotFoundError
from kong_admin.models.consumer import (
    Consumer,
    ConsumerGroup,
    ConsumerGroupMembers,
    ConsumerGroupRLA,
)
from kong_admin.models.plugin import Plugin
from kong_admin.services.base import BaseEntityManager, join_path
from kong_admin.values import deep_copy_config, ensure_identifier, require_value

if TYPE_CHECKING:
    from kong_admin.context import RequestContext
    from kong_admin.listing import ListOptions


class ConsumerManager(BaseEntityManager[Consumer]):
    """Manager for Kong Consumer entities.

    Example:
        >>> manager = ConsumerManager(client)
        >>> consumer = manager.create(Consumer(username="my-app"))
        >>> manager.get_by_custom_id("crm-1234")
    """

    _endpoint = "consumers"
    _entity_name = "consumer"
    _model_class = Consumer

    def get_by_custom_id(self, custom_id: str, *, ctx: RequestContext | None = None) -> Consumer:
        """Get a consumer by its custom_id.

        Args:
            custom_id: Custom identifier to look up.
            ctx: Optional request context.

        Returns:
            The matching consumer.

        Raises:
            KongBadRequestError: If custom_id is empty.
            KongNotFoundError: If no consumer has this custom_id.
        """
        custom_id = require_value(custom_id, "custom_id")
        self._log.debug("getting_consumer_by_custom_id", custom_id=custom_id)
        response = self._client.get(self._endpoint, params={"custom_id": custom_id}, ctx=ctx)
        data = response.get("data") or []
        if not data:
            raise KongNotFoundError(
                resource_type="consumer",
                resource_id=custom_id,
                endpoint=self._client.resolve_path(self._endpoint),
            )
        return self._parse(data[0])

    def list_plugins(
        self,
        consumer_id_or_name: str,
        opts: ListOptions | None = None,
        *,
        ctx: RequestContext | None = None,
    ) -> tuple[builtins.list[Plugin], ListOptions | None]:
        """List one page of the plugins scoped to a consumer.

        Args:
            consumer_id_or_name: Consumer ID or username.
            opts: Pagination and tag filter.
            ctx: Optional request context.

        Returns:
            Tuple of (plugins, options for the next page).
        """
        path = self._entity_path(consumer_id_or_name, "plugins")
        self._log.debug("listing_consumer_plugins", consumer=consumer_id_or_name)
        data, next_opts = self._client.list(path, opts, ctx=ctx)
        plugins = [Plugin.model_validate(item) for item in data]
        self._log.debug("listed_consumer_plugins", count=len(plugins))
        return plugins, next_opts


class ConsumerGroupManager(BaseEntityManager[ConsumerGroup]):
    """Manager for Kong Enterprise consumer groups.

    Extends BaseEntityManager with membership management and rate limit
    overrides.

    Example:
        >>> groups = ConsumerGroupManager(client)
        >>> groups.create(ConsumerGroup(name="gold"))
        >>> groups.add_consumer("gold", "alice")
        >>> [c.username for c in groups.list_consumers("gold")]
        ['alice']
    """

    _endpoint = "consumer_groups"
    _entity_name = "consumer_group"
    _model_class = ConsumerGroup

    def get_with_members(
        self, group_id_or_name: str, *, ctx: RequestContext | None = None
    ) -> ConsumerGroupMembers:
        """Get a consumer group together with its consumers and plugin overrides."""
        path = self._entity_path(group_id_or_name)
        self._log.debug("getting_consumer_group_members", group=group_id_or_name)
        return ConsumerGroupMembers.model_validate(self._client.get(path, ctx=ctx))

    def add_consumer(
        self,
        group_id_or_name: str,
        consumer_id_or_name: str,
        *,
        ctx: RequestContext | None = None,
    ) -> ConsumerGroupMembers:
        """Add a consumer to a group.

        Args:
            group_id_or_name: Consumer group ID or name.
            consumer_id_or_name: Consumer ID or username.
            ctx: Optional request context.

        Returns:
            The group with its updated membership.
        """
        consumer = ensure_identifier(consumer_id_or_name, "consumer ID or name")
        path = self._entity_path(group_id_or_name, "consumers")
        self._log.info("adding_group_consumer", group=group_id_or_name, consumer=consumer)
        response = self._client.post(path, json={"consumer": consumer}, ctx=ctx)
        self._log.info("added_group_consumer", group=group_id_or_name, consumer=consumer)
        return ConsumerGroupMembers.model_validate(response)

    def remove_consumer(
        self,
        group_id_or_name: str,
        consumer_id_or_name: str,
        *,
        ctx: RequestContext | None = None,
    ) -> None:
        """Remove a consumer from a group."""
        consumer = ensure_identifier(consumer_id_or_name, "consumer ID or name")
        path = self._entity_path(group_id_or_name, "consumers", consumer)
        self._log.info("removing_group_consumer", group=group_id_or_name, consumer=consumer)
        self._client.delete(path, ctx=ctx)

    def list_consumers(
        self, group_id_or_name: str, *, ctx: RequestContext | None = None
    ) -> builtins.list[Consumer]:
        """List the members of a consumer group."""
        path = self._entity_path(group_id_or_name, "consumers")
        members = ConsumerGroupMembers.model_validate(self._client.get(path, ctx=ctx))
        return members.consumers or []

    def update_rate_limiting_advanced(
        self,
        group_id_or_name: str,
        config: dict[str, Any],
        *,
        ctx: RequestContext | None = None,
    ) -> ConsumerGroupRLA:
        """Override rate-limiting-advanced settings for every member of a group.

        Args:
            group_id_or_name: Consumer group ID or name.
            config: Override configuration, e.g. ``{"limit": [10], "window_size": [60]}``.
            ctx: Optional request context.

        Returns:
            The stored override.
        """
        path = join_path(
            self._entity_path(group_id_or_name), "overrides", "plugins", "rate-limiting-advanced"
        )
        self._log.info("updating_group_rate_limit", group=group_id_or_name)
        response = self._client.put(path, json={"config": deep_copy_config(config)}, ctx=ctx)
        return ConsumerGroupRLA.model_validate(response)

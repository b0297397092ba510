"""Pydantic models for Kong Consumers and Consumer Groups.

A Consumer in Kong represents a user or application that consumes APIs.
Consumer groups bundle consumers so plugin settings (typically rate limits)
can be overridden for all members at once.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import Field

from kong_admin.models.base import KongEntityBase


class Consumer(KongEntityBase):
    """Kong Consumer entity model.

    Consumers are identified by a username or a custom_id (at least one is
    required by Kong on create).

    Attributes:
        username: Consumer username (unique).
        custom_id: Custom identifier (unique).
    """

    _entity_name: ClassVar[str] = "consumer"

    username: str | None = Field(default=None, description="Consumer username (unique)")
    custom_id: str | None = Field(default=None, description="Custom identifier (unique)")


class ConsumerGroup(KongEntityBase):
    """Kong Enterprise consumer group.

    Attributes:
        name: Group name (unique).
    """

    _entity_name: ClassVar[str] = "consumer_group"

    name: str | None = Field(default=None, description="Consumer group name (unique)")


class ConsumerGroupPlugin(KongEntityBase):
    """Plugin override attached to a consumer group."""

    _entity_name: ClassVar[str] = "consumer_group_plugin"

    name: str | None = Field(default=None, description="Plugin name")
    config: dict[str, Any] | None = Field(default=None, description="Override configuration")
    consumer_group: dict[str, Any] | None = Field(default=None, description="Owning group")


class ConsumerGroupMembers(KongEntityBase):
    """A consumer group together with its members and plugin overrides.

    This is the shape Kong returns from ``/consumer_groups/{group}`` detail
    endpoints and from membership changes.
    """

    _entity_name: ClassVar[str] = "consumer_group_members"

    consumer_group: ConsumerGroup | None = Field(default=None, description="The group")
    consumers: list[Consumer] | None = Field(default=None, description="Member consumers")
    plugins: list[ConsumerGroupPlugin] | None = Field(default=None, description="Overrides")


class ConsumerGroupRLA(KongEntityBase):
    """Rate-limiting-advanced override of a consumer group."""

    _entity_name: ClassVar[str] = "consumer_group_rla"

    consumer_group: str | None = Field(default=None, description="Group name or ID")
    config: dict[str, Any] | None = Field(default=None, description="Override configuration")
    plugin: str | None = Field(default=None, description="Plugin name")

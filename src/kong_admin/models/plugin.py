"""Pydantic models for Kong Plugins and Partials.

A Plugin adds behaviour to Kong and can be scoped globally or to any
combination of service, route, consumer and consumer group. A Partial is a
reusable configuration fragment that plugins link to by path.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from kong_admin.models.base import ConsumerReference, KongEntityBase, KongEntityReference


class PartialLink(BaseModel):
    """Link from a plugin to a partial.

    Attributes:
        id: Partial ID.
        name: Partial name.
        path: Config path the partial is spliced into.
    """

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    name: str | None = None
    path: str | None = None


class Plugin(KongEntityBase):
    """Kong Plugin entity model.

    Attributes:
        name: Plugin name (e.g., 'rate-limiting', 'key-auth').
        instance_name: Unique instance name for same-type plugins.
        service: Service scope (optional).
        route: Route scope (optional).
        consumer: Consumer scope (optional).
        consumer_group: Consumer group scope (optional, Enterprise).
        config: Plugin-specific configuration.
        protocols: Protocols to apply plugin on.
        enabled: Whether plugin is active.
        ordering: Plugin execution ordering (Kong 3.0+).
        partials: Partials linked into the configuration.
    """

    _entity_name: ClassVar[str] = "plugin"

    name: str | None = Field(default=None, description="Plugin name")
    instance_name: str | None = Field(
        default=None, description="Unique instance name for same-type plugins"
    )

    service: KongEntityReference | None = Field(default=None, description="Service scope")
    route: KongEntityReference | None = Field(default=None, description="Route scope")
    consumer: ConsumerReference | None = Field(default=None, description="Consumer scope")
    consumer_group: KongEntityReference | None = Field(
        default=None, description="Consumer group scope"
    )

    config: dict[str, Any] | None = Field(default=None, description="Plugin configuration")
    protocols: list[str] | None = Field(default=None, description="Protocols to apply plugin on")
    enabled: bool | None = Field(default=None, description="Whether plugin is active")
    ordering: dict[str, Any] | None = Field(default=None, description="Plugin execution ordering")
    partials: list[PartialLink] | None = Field(default=None, description="Linked partials")


class Partial(KongEntityBase):
    """Kong Partial entity model (Kong 3.10+).

    Attributes:
        name: Partial name (unique).
        type: Partial type, e.g. 'redis-ee'.
        config: Shared configuration.
    """

    _entity_name: ClassVar[str] = "partial"

    name: str | None = Field(default=None, description="Partial name")
    type: str | None = Field(default=None, description="Partial type")
    config: dict[str, Any] | None = Field(default=None, description="Shared configuration")

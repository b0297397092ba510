"""Pydantic models for Kong filter chains (WebAssembly filters)."""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field

from kong_admin.models.base import KongEntityBase, KongEntityReference


class Filter(BaseModel):
    """A single filter in a chain."""

    model_config = ConfigDict(extra="allow")

    name: str | None = None
    config: Any = None
    enabled: bool | None = None


class FilterChain(KongEntityBase):
    """Ordered sequence of filters attached to a service or route.

    Attributes:
        name: Chain name.
        enabled: Whether the chain runs.
        route: Route the chain is attached to.
        service: Service the chain is attached to.
        filters: Filters in execution order.
    """

    _entity_name: ClassVar[str] = "filter_chain"

    name: str | None = Field(default=None, description="Filter chain name")
    enabled: bool | None = Field(default=None, description="Whether the chain is active")
    route: KongEntityReference | None = Field(default=None, description="Attached route")
    service: KongEntityReference | None = Field(default=None, description="Attached service")
    filters: list[Filter] | None = Field(default=None, description="Filters in order")

"""Base models for Kong entities.

Every Kong entity is modelled as a record of optional fields: a field that was
never set stays ``None`` and is omitted from request payloads, so partial
updates and partial responses round-trip without inventing zero values.
Fields the SDK does not know about are kept as extras for the same reason.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

_SERVER_FIELDS = frozenset({"id", "created_at", "updated_at"})


class KongEntityBase(BaseModel):
    """Base class for all Kong entity models.

    Attributes:
        id: Unique identifier (UUID string).
        created_at: Unix timestamp of creation.
        updated_at: Unix timestamp of last update.
        tags: Entity tags for filtering and organization.
    """

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
    )

    id: str | None = Field(default=None, description="Unique identifier")
    created_at: int | None = Field(default=None, description="Unix timestamp of creation")
    updated_at: int | None = Field(default=None, description="Unix timestamp of last update")
    tags: list[str] | None = Field(default=None, description="Entity tags for filtering")

    _entity_name: ClassVar[str] = "entity"

    def to_payload(self, *, include_id: bool = False) -> dict[str, Any]:
        """Serialize the record for a request body.

        Unset (None) fields and server-managed timestamps are left out.

        Args:
            include_id: Keep the ``id`` field in the payload.

        Returns:
            JSON-ready dictionary.
        """
        exclude = set(_SERVER_FIELDS)
        if include_id:
            exclude.discard("id")
        return self.model_dump(mode="json", exclude=exclude, exclude_none=True)

    def to_create_payload(self) -> dict[str, Any]:
        """Payload for POST/PUT creates (no id, no timestamps)."""
        return self.to_payload()

    def to_update_payload(self) -> dict[str, Any]:
        """Payload for PATCH updates; only fields that are set are sent."""
        return self.to_payload()


class KongEntityReference(BaseModel):
    """Reference to another Kong entity (used for relationships).

    Kong uses this pattern to reference related entities, allowing
    specification by either ID or name.

    Attributes:
        id: Entity ID (UUID string).
        name: Entity name (alternative to ID).
    """

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    name: str | None = None

    @classmethod
    def from_id(cls, entity_id: str) -> KongEntityReference:
        """Create a reference from an entity ID."""
        return cls(id=entity_id)

    @classmethod
    def from_name(cls, name: str) -> KongEntityReference:
        """Create a reference from an entity name."""
        return cls(name=name)

    def key(self) -> str | None:
        """Return the name if set, else the ID."""
        return self.name or self.id


class ConsumerReference(BaseModel):
    """Reference to a consumer by ID or username."""

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    username: str | None = None

    @classmethod
    def from_id(cls, consumer_id: str) -> ConsumerReference:
        return cls(id=consumer_id)

    def key(self) -> str | None:
        """Return the username if set, else the ID."""
        return self.username or self.id


class PaginatedResponse(BaseModel):
    """Envelope of a single Kong list page.

    Attributes:
        data: Raw entity documents in server order.
        offset: Cursor for the next page; absent on the last page.
    """

    model_config = ConfigDict(extra="allow")

    data: list[dict[str, Any]] = Field(default_factory=list)
    offset: str | None = None

    @field_validator("data", mode="before")
    @classmethod
    def empty_object_as_list(cls, v: Any) -> Any:
        """Kong encodes an empty page as ``{}`` on some versions."""
        if v is None or v == {}:
            return []
        return v

    @property
    def has_more(self) -> bool:
        """Check if there are more results available."""
        return bool(self.offset)

"""Models for entities the SDK has no dedicated type for.

A custom entity is a free-form JSON object of a registered type, together
with the relations (parent IDs) needed to build its endpoint.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CustomEntityDefinition(BaseModel):
    """How to reach an entity type on the Admin API.

    Attributes:
        name: Entity type name, e.g. ``key-auth``.
        crud_path: Collection path; ``${relation}`` placeholders are filled
            from the entity's relations, e.g. ``/consumers/${consumer_id}/key-auth``.
        primary_key: Field of the object addressing a single entity.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    crud_path: str = Field(alias="crud")
    primary_key: str = "id"


class CustomEntity(BaseModel):
    """An object of a registered custom entity type.

    Attributes:
        type: Registered entity type name.
        data: The entity's JSON object.
        relations: Values for the ``${...}`` placeholders of the type's path.
    """

    type: str
    data: dict[str, Any] = Field(default_factory=dict)
    relations: dict[str, str] = Field(default_factory=dict)

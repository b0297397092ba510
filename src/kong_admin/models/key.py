"""Pydantic models for Kong Keys and Key Sets.

Keys hold JWK or PEM key material (used e.g. by OpenID Connect); key sets
group them.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import Field

from kong_admin.models.base import KongEntityBase, KongEntityReference


class KeySet(KongEntityBase):
    """Kong Key Set entity model."""

    _entity_name: ClassVar[str] = "key_set"

    name: str | None = Field(default=None, description="Key set name")


class Key(KongEntityBase):
    """Kong Key entity model.

    Attributes:
        name: Key name.
        kid: Key identifier matched against token headers.
        jwk: JSON Web Key as a string.
        pem: PEM public/private key pair.
        set: Owning key set.
    """

    _entity_name: ClassVar[str] = "key"

    name: str | None = Field(default=None, description="Key name")
    kid: str | None = Field(default=None, description="Key identifier")
    jwk: str | None = Field(default=None, description="JSON Web Key")
    pem: dict[str, Any] | None = Field(default=None, description="PEM key pair")
    set: KongEntityReference | None = Field(default=None, description="Owning key set")

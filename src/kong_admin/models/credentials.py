"""Pydantic models for consumer credentials.

Each credential kind hangs off a consumer and is driven through the shared
credential dispatcher; the models here only describe the typed shapes.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from kong_admin.models.base import ConsumerReference, KongEntityBase, KongEntityReference


class Credential(KongEntityBase):
    """Base model for consumer credentials.

    Attributes:
        consumer: The consumer owning the credential.
    """

    _entity_name: ClassVar[str] = "credential"

    consumer: ConsumerReference | None = Field(default=None, description="Owning consumer")


class KeyAuth(Credential):
    """key-auth credential. Kong generates ``key`` when it is omitted."""

    _entity_name: ClassVar[str] = "key-auth"

    key: str | None = Field(default=None, description="API key value")
    ttl: int | None = Field(default=None, ge=0, description="Time-to-live in seconds")


class BasicAuth(Credential):
    """basic-auth credential.

    Kong stores ``password`` hashed unless the write asks it to skip hashing.
    """

    _entity_name: ClassVar[str] = "basic-auth"

    username: str | None = Field(default=None, description="Basic auth username")
    password: str | None = Field(default=None, description="Password (hashed by Kong)")


class HMACAuth(Credential):
    """hmac-auth credential."""

    _entity_name: ClassVar[str] = "hmac-auth"

    username: str | None = Field(default=None, description="HMAC username")
    secret: str | None = Field(default=None, description="HMAC secret")


class JWTAuth(Credential):
    """jwt credential.

    Attributes:
        key: Value matched against the ``iss`` claim (generated when omitted).
        secret: HMAC secret (HS algorithms).
        rsa_public_key: Public key (RS/ES algorithms).
        algorithm: Signing algorithm.
    """

    _entity_name: ClassVar[str] = "jwt-auth"

    key: str | None = Field(default=None, description="Key matched against iss")
    secret: str | None = Field(default=None, description="HMAC secret")
    rsa_public_key: str | None = Field(default=None, description="RSA/EC public key")
    algorithm: str | None = Field(default=None, description="Signing algorithm")


class ACLGroup(Credential):
    """ACL group membership of a consumer."""

    _entity_name: ClassVar[str] = "acl"

    group: str | None = Field(default=None, description="ACL group name")


class OAuth2Credential(Credential):
    """oauth2 application credential."""

    _entity_name: ClassVar[str] = "oauth2"

    name: str | None = Field(default=None, description="Application name")
    client_id: str | None = Field(default=None, description="Client ID")
    client_secret: str | None = Field(default=None, description="Client secret")
    client_type: str | None = Field(default=None, description="confidential or public")
    hash_secret: bool | None = Field(default=None, description="Store the secret hashed")
    redirect_uris: list[str] | None = Field(default=None, description="Redirect URIs")


class MTLSAuth(Credential):
    """mtls-auth credential binding a certificate subject to a consumer."""

    _entity_name: ClassVar[str] = "mtls-auth"

    subject_name: str | None = Field(default=None, description="Certificate subject name")
    ca_certificate: KongEntityReference | None = Field(
        default=None, description="CA certificate that issued the client cert"
    )

"""Typed managers for consumer credentials.

Each manager binds the credential dispatcher to one kind and decodes the raw
responses into that kind's model.
"""

from __future__ import annotations

import builtins
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from kong_admin.exceptions import KongDecodeError
from kong_admin.models.credentials import (
    ACLGroup,
    BasicAuth,
    Credential,
    HMACAuth,
    JWTAuth,
    KeyAuth,
    MTLSAuth,
    OAuth2Credential,
)

if TYPE_CHECKING:
    from kong_admin.context import RequestContext
    from kong_admin.listing import ListOptions
    from kong_admin.services.credentials import CredentialDispatcher


class CredentialManager[C: Credential]:
    """Typed access to one credential kind.

    Class Attributes:
        _kind: Credential kind tag understood by the dispatcher.
        _model_class: Model the raw responses decode into.
    """

    _kind: str = ""
    _model_class: type[C]

    def __init__(self, dispatcher: CredentialDispatcher) -> None:
        self._dispatcher = dispatcher

    @property
    def kind(self) -> str:
        return self._kind

    def _decode(self, raw: bytes) -> C:
        try:
            return self._model_class.model_validate_json(raw)
        except ValidationError as e:
            raise KongDecodeError(
                message=f"Unexpected {self._kind} credential shape: {e.error_count()} error(s)",
                raw_body=raw,
            ) from e

    def _decode_many(self, items: builtins.list[dict[str, Any]]) -> builtins.list[C]:
        return [self._model_class.model_validate(item) for item in items]

    def create(
        self, consumer: str, credential: C, *, ctx: RequestContext | None = None
    ) -> C:
        """Create a credential for a consumer (PUT when the record has an ID)."""
        return self._decode(self._dispatcher.create(self._kind, consumer, credential, ctx=ctx))

    def get(self, consumer: str, identifier: str, *, ctx: RequestContext | None = None) -> C:
        """Get a consumer's credential by ID or natural key."""
        return self._decode(self._dispatcher.get(self._kind, consumer, identifier, ctx=ctx))

    def get_by_id(self, credential_id: str, *, ctx: RequestContext | None = None) -> C:
        """Get a credential by ID without knowing its consumer."""
        return self._decode(self._dispatcher.get_by_id(self._kind, credential_id, ctx=ctx))

    def update(
        self, consumer: str, credential: C, *, ctx: RequestContext | None = None
    ) -> C:
        """Partially update a credential; the record must carry its ID."""
        return self._decode(self._dispatcher.update(self._kind, consumer, credential, ctx=ctx))

    def delete(self, consumer: str, identifier: str, *, ctx: RequestContext | None = None) -> None:
        """Delete a consumer's credential."""
        self._dispatcher.delete(self._kind, consumer, identifier, ctx=ctx)

    def list(
        self, opts: ListOptions | None = None, *, ctx: RequestContext | None = None
    ) -> tuple[builtins.list[C], ListOptions | None]:
        """List one page of credentials across all consumers."""
        data, next_opts = self._dispatcher.list(self._kind, opts, ctx=ctx)
        return self._decode_many(data), next_opts

    def list_for_consumer(
        self,
        consumer: str,
        opts: ListOptions | None = None,
        *,
        ctx: RequestContext | None = None,
    ) -> tuple[builtins.list[C], ListOptions | None]:
        """List one page of a consumer's credentials."""
        data, next_opts = self._dispatcher.list_for_consumer(self._kind, consumer, opts, ctx=ctx)
        return self._decode_many(data), next_opts

    def list_all(
        self, opts: ListOptions | None = None, *, ctx: RequestContext | None = None
    ) -> builtins.list[C]:
        """List every credential of this kind (empty when the plugin is absent)."""
        return self._decode_many(self._dispatcher.list_all(self._kind, opts, ctx=ctx))


class BasicAuthManager(CredentialManager[BasicAuth]):
    """basic-auth credentials. Writes can skip password hashing."""

    _kind = "basic-auth"
    _model_class = BasicAuth

    def create(
        self,
        consumer: str,
        credential: BasicAuth,
        *,
        skip_hash: bool = False,
        ctx: RequestContext | None = None,
    ) -> BasicAuth:
        """Create a basic-auth credential.

        Args:
            consumer: Consumer username or ID.
            credential: Username and password.
            skip_hash: Store the password as given instead of hashing it.
            ctx: Optional request context.
        """
        raw = self._dispatcher.create(
            self._kind, consumer, credential, skip_hash=skip_hash, ctx=ctx
        )
        return self._decode(raw)

    def update(
        self,
        consumer: str,
        credential: BasicAuth,
        *,
        skip_hash: bool = False,
        ctx: RequestContext | None = None,
    ) -> BasicAuth:
        """Update a basic-auth credential, optionally without hashing the password."""
        raw = self._dispatcher.update(
            self._kind, consumer, credential, skip_hash=skip_hash, ctx=ctx
        )
        return self._decode(raw)


class KeyAuthManager(CredentialManager[KeyAuth]):
    _kind = "key-auth"
    _model_class = KeyAuth


class HMACAuthManager(CredentialManager[HMACAuth]):
    _kind = "hmac-auth"
    _model_class = HMACAuth


class JWTAuthManager(CredentialManager[JWTAuth]):
    _kind = "jwt-auth"
    _model_class = JWTAuth


class ACLManager(CredentialManager[ACLGroup]):
    _kind = "acl"
    _model_class = ACLGroup


class OAuth2Manager(CredentialManager[OAuth2Credential]):
    _kind = "oauth2"
    _model_class = OAuth2Credential


class MTLSAuthManager(CredentialManager[MTLSAuth]):
    _kind = "mtls-auth"
    _model_class = MTLSAuth

"""Table-driven credential dispatcher.

All seven consumer credential kinds share one set of endpoint rules, so a
single dispatcher serves them. It works on raw JSON bytes: each typed
credential manager owns its model and decodes the bytes itself, which keeps
server-side values (hashed passwords, generated keys) intact.
"""

from __future__ import annotations

import builtins
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

import structlog

from kong_admin.exceptions import KongBadRequestError
from kong_admin.listing import ListOptions
from kong_admin.models.base import KongEntityBase
from kong_admin.services.base import join_path
from kong_admin.values import ensure_identifier

if TYPE_CHECKING:
    from kong_admin.client import KongAdminClient
    from kong_admin.context import RequestContext

logger = structlog.get_logger()


@dataclass(frozen=True)
class CredentialKind:
    """Endpoint layout of one credential kind.

    Attributes:
        tag: Kind name, e.g. ``basic-auth``.
        segment: Path segment under ``/consumers/{consumer}``.
        top_level: Collection path for direct access by ID.
        supports_skip_hash: Whether writes accept ``skip_hash``.
    """

    tag: str
    segment: str
    top_level: str
    supports_skip_hash: bool = False


CREDENTIAL_KINDS: Mapping[str, CredentialKind] = MappingProxyType(
    {
        kind.tag: kind
        for kind in (
            CredentialKind("key-auth", "key-auth", "key-auths"),
            CredentialKind("basic-auth", "basic-auth", "basic-auths", supports_skip_hash=True),
            CredentialKind("hmac-auth", "hmac-auth", "hmac-auths"),
            CredentialKind("jwt-auth", "jwt", "jwts"),
            CredentialKind("acl", "acls", "acls"),
            CredentialKind("oauth2", "oauth2", "oauth2"),
            CredentialKind("mtls-auth", "mtls-auth", "mtls-auths"),
        )
    }
)


def credential_kind(tag: str) -> CredentialKind:
    """Look up a credential kind by tag.

    Raises:
        KongBadRequestError: If the kind is unknown.
    """
    try:
        return CREDENTIAL_KINDS[tag]
    except KeyError:
        raise KongBadRequestError(f"unknown credential type: {tag}") from None


def _credential_id(credential: Any) -> str | None:
    if isinstance(credential, KongEntityBase):
        return credential.id or None
    if isinstance(credential, Mapping):
        value = credential.get("id")
        return str(value) if value else None
    return None


def _credential_body(credential: Any) -> Any:
    if isinstance(credential, KongEntityBase):
        return credential.to_payload(include_id=True)
    return credential


class CredentialDispatcher:
    """Create, read, update, delete and list credentials of any kind.

    Example:
        >>> raw = dispatcher.create("basic-auth", "alice", {"username": "u", "password": "p"})
        >>> BasicAuth.model_validate_json(raw).password != "p"
        True
    """

    def __init__(self, client: KongAdminClient) -> None:
        self._client = client
        self._log = logger.bind(entity="credential")

    def _consumer_path(self, kind: CredentialKind, consumer: str | None, *rest: str) -> str:
        consumer = ensure_identifier(consumer, "consumer username or ID")
        return join_path("consumers", consumer, kind.segment, *rest)

    @staticmethod
    def _skip_hash_query(kind: CredentialKind, skip_hash: bool) -> dict[str, str] | None:
        if not skip_hash:
            return None
        if not kind.supports_skip_hash:
            raise KongBadRequestError(f"skip_hash is not supported for {kind.tag} credentials")
        return {"skip_hash": "true"}

    def create(
        self,
        kind: str,
        consumer: str | None,
        credential: Any,
        *,
        skip_hash: bool = False,
        ctx: RequestContext | None = None,
    ) -> bytes:
        """Create a credential under a consumer.

        With an ID on the record the credential is upserted with ``PUT``;
        without one it is POSTed and Kong assigns the ID.

        Args:
            kind: Credential kind tag.
            consumer: Consumer username or ID.
            credential: Credential model or mapping.
            skip_hash: Store the basic-auth password as given.
            ctx: Optional request context.

        Returns:
            Raw JSON of the stored credential.

        Raises:
            KongBadRequestError: On an empty consumer, unknown kind, missing
                record, or ``skip_hash`` for a kind other than basic-auth.
        """
        spec = credential_kind(kind)
        if credential is None:
            raise KongBadRequestError(f"{kind} credential cannot be None")
        query = self._skip_hash_query(spec, skip_hash)
        cred_id = _credential_id(credential)
        if cred_id:
            method = "PUT"
            path = self._consumer_path(spec, consumer, ensure_identifier(cred_id, "credential ID"))
        else:
            method = "POST"
            path = self._consumer_path(spec, consumer)
        self._log.info("creating_credential", kind=kind, consumer=consumer, method=method)
        response = self._client.request(
            method, path, query=query, body=_credential_body(credential), target=bytes, ctx=ctx
        )
        return response.data

    def get(
        self,
        kind: str,
        consumer: str | None,
        identifier: str | None,
        *,
        ctx: RequestContext | None = None,
    ) -> bytes:
        """Get a credential of a consumer by ID or natural key.

        The identifier is sent unchanged; Kong decides whether it is an ID or
        a natural key (api key, username, group name, ...).
        """
        spec = credential_kind(kind)
        identifier = ensure_identifier(identifier, "credential identifier")
        path = self._consumer_path(spec, consumer, identifier)
        self._log.debug("getting_credential", kind=kind, consumer=consumer)
        return self._client.request("GET", path, target=bytes, ctx=ctx).data

    def get_by_id(
        self,
        kind: str,
        identifier: str | None,
        *,
        ctx: RequestContext | None = None,
    ) -> bytes:
        """Get a credential through its top-level collection."""
        spec = credential_kind(kind)
        identifier = ensure_identifier(identifier, "credential identifier")
        path = join_path(spec.top_level, identifier)
        self._log.debug("getting_credential", kind=kind, id=identifier)
        return self._client.request("GET", path, target=bytes, ctx=ctx).data

    def update(
        self,
        kind: str,
        consumer: str | None,
        credential: Any,
        *,
        skip_hash: bool = False,
        ctx: RequestContext | None = None,
    ) -> bytes:
        """Partially update a credential (``PATCH``).

        Raises:
            KongBadRequestError: If the record carries no ID, or on the same
                conditions as :meth:`create`.
        """
        spec = credential_kind(kind)
        if credential is None:
            raise KongBadRequestError(f"{kind} credential cannot be None")
        consumer_path = self._consumer_path(spec, consumer)
        cred_id = _credential_id(credential)
        if not cred_id:
            raise KongBadRequestError("cannot update a credential without an ID")
        query = self._skip_hash_query(spec, skip_hash)
        path = join_path(consumer_path, ensure_identifier(cred_id, "credential ID"))
        self._log.info("updating_credential", kind=kind, consumer=consumer, id=cred_id)
        response = self._client.request(
            "PATCH", path, query=query, body=_credential_body(credential), target=bytes, ctx=ctx
        )
        return response.data

    def delete(
        self,
        kind: str,
        consumer: str | None,
        identifier: str | None,
        *,
        ctx: RequestContext | None = None,
    ) -> None:
        """Delete a credential of a consumer."""
        spec = credential_kind(kind)
        identifier = ensure_identifier(identifier, "credential identifier")
        path = self._consumer_path(spec, consumer, identifier)
        self._log.info("deleting_credential", kind=kind, consumer=consumer, id=identifier)
        self._client.request("DELETE", path, target=None, ctx=ctx)

    def list(
        self,
        kind: str,
        opts: ListOptions | None = None,
        *,
        ctx: RequestContext | None = None,
    ) -> tuple[builtins.list[dict[str, Any]], ListOptions | None]:
        """List one page of credentials of a kind across all consumers."""
        spec = credential_kind(kind)
        return self._client.list(spec.top_level, opts, ctx=ctx)

    def list_for_consumer(
        self,
        kind: str,
        consumer: str | None,
        opts: ListOptions | None = None,
        *,
        ctx: RequestContext | None = None,
    ) -> tuple[builtins.list[dict[str, Any]], ListOptions | None]:
        """List one page of a consumer's credentials of a kind."""
        spec = credential_kind(kind)
        return self._client.list(self._consumer_path(spec, consumer), opts, ctx=ctx)

    def list_all(
        self,
        kind: str,
        opts: ListOptions | None = None,
        *,
        ctx: RequestContext | None = None,
    ) -> builtins.list[dict[str, Any]]:
        """List every credential of a kind.

        A 404 counts as an empty collection since the endpoint disappears
        when the matching auth plugin is not installed.
        """
        spec = credential_kind(kind)
        return self._client.list_all(spec.top_level, opts, tolerate_not_found=True, ctx=ctx)

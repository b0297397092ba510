"""Vault manager for Kong Enterprise secret vaults.

Vaults let configuration reference secrets as ``{vault://<prefix>/<key>}``
instead of storing them in the database.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from kong_admin.exceptions import KongBadRequestError
from kong_admin.models.enterprise import Vault
from kong_admin.services.base import BaseEntityManager
from kong_admin.services.schema_manager import validate_against_schema

if TYPE_CHECKING:
    from kong_admin.context import RequestContext


class VaultManager(BaseEntityManager[Vault]):
    """Manager for Kong Vault entities.

    Vaults are addressed by ID or prefix.

    Example:
        >>> vaults = VaultManager(client)
        >>> vaults.create(Vault(name="env", prefix="my-env", config={"prefix": "SECRET_"}))
        >>> vaults.validate(Vault(name="env", prefix="bad prefix"))
        (False, 'schema violation (prefix: ...)')
    """

    _endpoint = "vaults"
    _entity_name = "vault"
    _model_class = Vault

    def validate(self, vault: Vault, *, ctx: RequestContext | None = None) -> tuple[bool, str]:
        """Validate a vault against its schema without storing it.

        Returns:
            Tuple of (valid, message); a 400 yields False and Kong's message.
        """
        if vault is None:
            raise KongBadRequestError("vault cannot be None")
        return validate_against_schema(self._client, "vaults", vault, ctx)

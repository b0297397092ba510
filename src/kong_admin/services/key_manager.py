"""Key managers for Kong cryptographic key entities.

This module provides managers for Kong key-related entities:
- KeySetManager: Named collections of keys
- KeyManager: Individual JWK or PEM keys
"""

from __future__ import annotations

import builtins
from typing import TYPE_CHECKING

from kong_admin.models.key import Key, KeySet
from kong_admin.services.base import BaseEntityManager

if TYPE_CHECKING:
    from kong_admin.context import RequestContext


class KeySetManager(BaseEntityManager[KeySet]):
    """Manager for Kong KeySet entities.

    Example:
        >>> manager = KeySetManager(client)
        >>> created = manager.create(KeySet(name="jwt-signing-keys"))
        >>> keys = manager.list_keys(created.id)
    """

    _endpoint = "key-sets"
    _entity_name = "key_set"
    _model_class = KeySet

    def list_keys(
        self, key_set_id_or_name: str, *, ctx: RequestContext | None = None
    ) -> builtins.list[Key]:
        """List every key in a key set.

        Args:
            key_set_id_or_name: KeySet ID or name.
            ctx: Optional request context.

        Returns:
            Keys belonging to the set.
        """
        path = self._entity_path(key_set_id_or_name, "keys")
        self._log.debug("listing_key_set_keys", key_set=key_set_id_or_name)
        keys = [Key.model_validate(item) for item in self._client.list_all(path, ctx=ctx)]
        self._log.debug("listed_key_set_keys", key_set=key_set_id_or_name, count=len(keys))
        return keys


class KeyManager(BaseEntityManager[Key]):
    """Manager for Kong Key entities.

    Example:
        >>> manager = KeyManager(client)
        >>> key = Key(kid="my-key-id", jwk='{"kty": "RSA", ...}', set={"name": "jwt-signing-keys"})
        >>> manager.create(key)
    """

    _endpoint = "keys"
    _entity_name = "key"
    _model_class = Key

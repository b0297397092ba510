"""Deterministic entity identifiers.

Declarative tooling can compute an entity's ID before it exists and then
upsert it with ``PUT /<entities>/<id>``. IDs are UUIDv5 values: each entity
kind gets its own namespace derived from a fixed root, and the name hashed
into it is the entity's natural key (optionally prefixed with a workspace).

Example:
    >>> fill_id(Service(name="some.service.name")).id
    'd9bee1f8-db6e-5a37-9281-fd4aca16dc00'
"""

from __future__ import annotations

import uuid
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from kong_admin.exceptions import KongBadRequestError
from kong_admin.models.base import KongEntityBase
from kong_admin.models.consumer import Consumer, ConsumerGroup
from kong_admin.models.enterprise import Vault
from kong_admin.models.plugin import Plugin
from kong_admin.models.route import Route
from kong_admin.models.service import Service

KONG_ENTITIES_NAMESPACE = uuid.UUID("fd02801f-0957-4a15-a55a-c8d9606f30b5")


def _namespace(plural: str) -> uuid.UUID:
    return uuid.uuid5(KONG_ENTITIES_NAMESPACE, plural)


def _required(value: str | None, what: str) -> str:
    if not value:
        raise KongBadRequestError(f"{what} is required to generate an ID")
    return value


def _plugin_key(plugin: Plugin) -> str:
    key = _required(plugin.name, "plugin name")
    scopes = (
        ("service", plugin.service),
        ("route", plugin.route),
        ("consumer", plugin.consumer),
        ("consumer_group", plugin.consumer_group),
    )
    for label, ref in scopes:
        if ref is None:
            continue
        ref_key = ref.key()
        if not ref_key:
            raise KongBadRequestError(f"plugin {label} reference needs a name or an ID")
        key += f":{label}/{ref_key}"
    return key


# entity class -> (namespace, natural key extractor)
_GENERATORS: Mapping[type[KongEntityBase], tuple[uuid.UUID, Callable[[Any], str]]]
_GENERATORS = MappingProxyType(
    {
        Service: (_namespace("services"), lambda e: _required(e.name, "service name")),
        Route: (_namespace("routes"), lambda e: _required(e.name, "route name")),
        Consumer: (_namespace("consumers"), lambda e: _required(e.username, "consumer username")),
        ConsumerGroup: (
            _namespace("consumergroups"),
            lambda e: _required(e.name, "consumer group name"),
        ),
        Vault: (_namespace("vaults"), lambda e: _required(e.prefix, "vault prefix")),
        Plugin: (_namespace("plugins"), _plugin_key),
    }
)


def _generator_for(entity: KongEntityBase) -> tuple[uuid.UUID, Callable[[Any], str]]:
    for cls in type(entity).__mro__:
        if cls in _GENERATORS:
            return _GENERATORS[cls]
    raise KongBadRequestError(
        f"unsupported entity type for ID generation: {type(entity).__name__}"
    )


def entity_key(entity: KongEntityBase, workspace: str | None = None) -> str:
    """Return the name hashed into the entity's UUID.

    Raises:
        KongBadRequestError: If the entity kind is unsupported or its natural
            key is missing.
    """
    _, key_of = _generator_for(entity)
    key = key_of(entity)
    if workspace:
        key = f"{workspace}/{key}"
    return key


def generate_id(entity: KongEntityBase, workspace: str | None = None) -> str:
    """Compute the deterministic ID of an entity, ignoring any ID it already has.

    Args:
        entity: Service, route, consumer, consumer group, vault, or plugin.
        workspace: Workspace name mixed into the key, if any.

    Returns:
        The UUID as a string.

    Raises:
        KongBadRequestError: If the entity kind is unsupported or its natural
            key is missing.
    """
    namespace, _ = _generator_for(entity)
    return str(uuid.uuid5(namespace, entity_key(entity, workspace)))


def fill_id[E: KongEntityBase](entity: E, workspace: str | None = None) -> E:
    """Return a copy of the entity with a deterministic ID filled in.

    An entity that already carries a non-empty ID is returned unchanged.
    The caller's record is never mutated.

    Raises:
        KongBadRequestError: If the entity kind is unsupported or its natural
            key is missing.
    """
    if entity.id:
        return entity
    return entity.model_copy(update={"id": generate_id(entity, workspace)})

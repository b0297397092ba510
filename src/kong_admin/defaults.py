"""Schema-driven default filling.

Kong fills unset fields with the defaults declared in the entity schema
when it stores an entity. Filling the same defaults locally lets callers
compare a desired entity with the stored one without spurious differences.

Schemas are the documents served by ``/schemas/{entity}`` and
``/schemas/plugins/{name}``: a ``fields`` list where each item is a
single-key mapping ``{field_name: {type, default, fields, ...}}``.

Example:
    >>> schema = client.plugins.get_schema("rate-limiting")
    >>> plugin = fill_plugin_defaults(Plugin(name="rate-limiting", config={"minute": 5}), schema)
    >>> plugin.enabled
    True
"""

from __future__ import annotations

import copy
from collections.abc import Iterator, Mapping
from typing import Any

import structlog

from kong_admin.exceptions import KongBadRequestError
from kong_admin.models.plugin import Plugin
from kong_admin.models.route import Route
from kong_admin.models.service import Service
from kong_admin.models.upstream import Target, Upstream
from kong_admin.values import deep_copy_config

logger = structlog.get_logger()

# Entities whose defaults can be filled from their schema.
FILLABLE_ENTITIES: tuple[type, ...] = (Service, Route, Upstream, Target)


def _schema_fields(schema: Mapping[str, Any]) -> Iterator[tuple[str, dict[str, Any]]]:
    for item in schema.get("fields") or []:
        for name, definition in item.items():
            yield name, definition or {}
            break


def _fill_config_record(schema: Mapping[str, Any], config: dict[str, Any]) -> dict[str, Any]:
    result = dict(config)
    for name, definition in _schema_fields(schema):
        if name in config:
            continue
        if definition.get("type") == "record":
            result[name] = _fill_config_record(definition, {})
        else:
            result[name] = copy.deepcopy(definition.get("default"))
    return result


def _config_schema(schema: Mapping[str, Any]) -> Mapping[str, Any]:
    """Return the ``config`` record of a full plugin schema.

    Legacy config-only schemas (``/plugins/schema/{name}``) are returned as is.
    """
    for name, definition in _schema_fields(schema):
        if name == "config":
            return definition
    return schema


def _default_protocols(schema: Mapping[str, Any]) -> list[str] | None:
    for name, definition in _schema_fields(schema):
        if name == "protocols" and "default" in definition:
            return list(definition["default"])
    return None


def _flatten_defaults(schema: Mapping[str, Any]) -> dict[str, Any]:
    defaults: dict[str, Any] = {}
    for name, definition in _schema_fields(schema):
        if definition.get("type") == "record":
            defaults[name] = _flatten_defaults(definition)
        else:
            defaults[name] = copy.deepcopy(definition.get("default"))
    return defaults


def _merge_missing(current: Any, defaults: Any) -> Any:
    """Merge defaults into a value, keeping everything already set."""
    if current is None:
        return defaults
    if isinstance(current, dict) and isinstance(defaults, dict):
        merged = dict(current)
        for key, value in defaults.items():
            merged[key] = _merge_missing(current.get(key), value)
        return merged
    return current


def fill_plugin_defaults(plugin: Plugin, schema: Mapping[str, Any]) -> Plugin:
    """Return a copy of a plugin with its schema defaults filled in.

    Config keys that are absent take the schema default; keys without a
    default become an explicit ``None``. Record fields are filled
    recursively. ``protocols`` takes the schema default when unset and
    ``enabled`` defaults to True.

    Args:
        plugin: Plugin to fill. It is not modified.
        schema: Plugin schema, full or config-only.

    Returns:
        A new Plugin with defaults applied.

    Raises:
        KongBadRequestError: If the plugin or schema is missing.
    """
    if plugin is None:
        raise KongBadRequestError("plugin cannot be None")
    if schema is None:
        raise KongBadRequestError(f"filling defaults for plugin '{plugin.name}': schema is None")

    config = deep_copy_config(plugin.config) or {}
    updates: dict[str, Any] = {"config": _fill_config_record(_config_schema(schema), config)}
    if plugin.protocols is None:
        updates["protocols"] = _default_protocols(schema)
    if plugin.enabled is None:
        updates["enabled"] = True

    logger.debug("filled_plugin_defaults", plugin_name=plugin.name)
    return plugin.model_copy(update=updates, deep=True)


def fill_entity_defaults[E: (Service, Route, Upstream, Target)](
    entity: E, schema: Mapping[str, Any]
) -> E:
    """Return a copy of a core entity with its schema defaults filled in.

    Only fields that are unset take a default; nested records such as
    upstream health checks are merged key by key.

    Args:
        entity: Service, Route, Upstream or Target. It is not modified.
        schema: Entity schema from ``/schemas/{entity}``.

    Returns:
        A new entity of the same type with defaults applied.

    Raises:
        KongBadRequestError: If the schema is missing or the entity type is
            not supported.
    """
    if not isinstance(entity, FILLABLE_ENTITIES):
        raise KongBadRequestError(f"unsupported entity: '{type(entity).__name__}'")
    if schema is None:
        raise KongBadRequestError(
            f"filling defaults for '{type(entity).__name__}': provided schema is None"
        )

    defaults = _flatten_defaults(schema)
    current = entity.model_dump(exclude_none=True)
    merged = dict(current)
    for name in type(entity).model_fields:
        default = defaults.get(name)
        if default is not None:
            merged[name] = _merge_missing(current.get(name), default)

    logger.debug("filled_entity_defaults", entity=entity._entity_name)
    return type(entity).model_validate(merged)

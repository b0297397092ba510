"""Custom entity manager for entity types without a dedicated manager.

Types are registered with a CRUD path template such as
``/consumers/${consumer_id}/key-auth``; the placeholders are filled from
each entity's relations. The credential types are registered by default.
"""

from __future__ import annotations

import builtins
from string import Template
from typing import TYPE_CHECKING, Any

import structlog

from kong_admin.exceptions import KongBadRequestError
from kong_admin.models.custom import CustomEntity, CustomEntityDefinition
from kong_admin.services.base import join_path
from kong_admin.values import ensure_identifier

if TYPE_CHECKING:
    from kong_admin.client import KongAdminClient
    from kong_admin.context import RequestContext
    from kong_admin.listing import ListOptions

logger = structlog.get_logger()

DEFAULT_DEFINITIONS = (
    CustomEntityDefinition(name="key-auth", crud="/consumers/${consumer_id}/key-auth"),
    CustomEntityDefinition(name="basic-auth", crud="/consumers/${consumer_id}/basic-auth"),
    CustomEntityDefinition(name="hmac-auth", crud="/consumers/${consumer_id}/hmac-auth"),
    CustomEntityDefinition(name="jwt", crud="/consumers/${consumer_id}/jwt"),
    CustomEntityDefinition(name="acl", crud="/consumers/${consumer_id}/acls"),
    CustomEntityDefinition(name="oauth2", crud="/consumers/${consumer_id}/oauth2"),
    CustomEntityDefinition(name="mtls-auth", crud="/consumers/${consumer_id}/mtls-auth"),
)


def render_path(template: str, relations: dict[str, str]) -> str:
    """Fill ``${relation}`` placeholders of a CRUD path.

    Raises:
        KongBadRequestError: If a placeholder has no relation or a relation
            value is not a single path segment.
    """
    for name, value in relations.items():
        ensure_identifier(value, f"relation '{name}'")
    try:
        path = Template(template).substitute(relations)
    except KeyError as e:
        raise KongBadRequestError(f"missing relation {e} for path '{template}'") from e
    except ValueError as e:
        raise KongBadRequestError(f"invalid path template '{template}': {e}") from e
    return path.lstrip("/")


class CustomEntityManager:
    """Manager for entities of registered custom types.

    Example:
        >>> custom = CustomEntityManager(client)
        >>> key = CustomEntity(type="key-auth", relations={"consumer_id": consumer.id})
        >>> created = custom.create(key)
        >>> custom.list_all(CustomEntity(type="key-auth", relations={"consumer_id": consumer.id}))
    """

    def __init__(self, client: KongAdminClient) -> None:
        self._client = client
        self._log = logger.bind(entity="custom_entity")
        self._registry: dict[str, CustomEntityDefinition] = {}
        for definition in DEFAULT_DEFINITIONS:
            self.register(definition)

    def register(self, definition: CustomEntityDefinition) -> None:
        """Register an entity type.

        Raises:
            KongBadRequestError: If the type is already registered.
        """
        if definition.name in self._registry:
            raise KongBadRequestError(f"entity type '{definition.name}' already registered")
        self._registry[definition.name] = definition

    def lookup(self, entity_type: str) -> CustomEntityDefinition | None:
        """Return the definition of a registered type, or None."""
        return self._registry.get(entity_type)

    def _definition(self, entity: CustomEntity) -> CustomEntityDefinition:
        if entity is None:
            raise KongBadRequestError("custom entity cannot be None")
        definition = self.lookup(entity.type)
        if definition is None:
            raise KongBadRequestError(f"entity '{entity.type}' not registered")
        return definition

    def _collection_path(self, entity: CustomEntity) -> str:
        return render_path(self._definition(entity).crud_path, entity.relations)

    def _item_path(self, entity: CustomEntity) -> str:
        definition = self._definition(entity)
        key = entity.data.get(definition.primary_key)
        if not isinstance(key, str):
            raise KongBadRequestError(
                f"custom entity '{entity.type}' needs a string '{definition.primary_key}'"
            )
        collection = render_path(definition.crud_path, entity.relations)
        return join_path(collection, ensure_identifier(key, definition.primary_key))

    def _with_data(self, entity: CustomEntity, data: dict[str, Any]) -> CustomEntity:
        return CustomEntity(type=entity.type, data=data, relations=dict(entity.relations))

    def get(self, entity: CustomEntity, *, ctx: RequestContext | None = None) -> CustomEntity:
        """Fetch an entity; its primary key and relations must be set."""
        return self._with_data(entity, self._client.get(self._item_path(entity), ctx=ctx))

    def create(self, entity: CustomEntity, *, ctx: RequestContext | None = None) -> CustomEntity:
        """Create an entity (PUT to its item path when the object carries an ``id``)."""
        if entity is not None and entity.data.get("id"):
            path = self._item_path(entity)
            self._log.info("creating_custom_entity", type=entity.type, path=path)
            response = self._client.put(path, json=entity.data, ctx=ctx)
        else:
            path = self._collection_path(entity)
            self._log.info("creating_custom_entity", type=entity.type, path=path)
            response = self._client.post(path, json=entity.data, ctx=ctx)
        return self._with_data(entity, response)

    def update(self, entity: CustomEntity, *, ctx: RequestContext | None = None) -> CustomEntity:
        """Patch an entity with its object."""
        path = self._item_path(entity)
        self._log.info("updating_custom_entity", type=entity.type, path=path)
        return self._with_data(entity, self._client.patch(path, json=entity.data, ctx=ctx))

    def delete(self, entity: CustomEntity, *, ctx: RequestContext | None = None) -> None:
        """Delete an entity; its primary key and relations must be set."""
        path = self._item_path(entity)
        self._log.info("deleting_custom_entity", type=entity.type, path=path)
        self._client.delete(path, ctx=ctx)

    def list(
        self,
        entity: CustomEntity,
        opts: ListOptions | None = None,
        *,
        ctx: RequestContext | None = None,
    ) -> tuple[builtins.list[CustomEntity], ListOptions | None]:
        """List one page of entities sharing the relations of ``entity``."""
        data, next_opts = self._client.list(self._collection_path(entity), opts, ctx=ctx)
        return [self._with_data(entity, item) for item in data], next_opts

    def list_all(
        self, entity: CustomEntity, *, ctx: RequestContext | None = None
    ) -> builtins.list[CustomEntity]:
        """List every entity sharing the relations of ``entity``."""
        data = self._client.list_all(self._collection_path(entity), ctx=ctx)
        return [self._with_data(entity, item) for item in data]

"""Base entity manager for Kong resources.

This module provides an abstract base class implementing the Repository
pattern for Kong entities. Every resource manager inherits from
BaseEntityManager and extends it with resource-specific operations.
"""

from __future__ import annotations

import builtins
from abc import ABC
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

import structlog

from kong_admin.exceptions import KongBadRequestError, KongNotFoundError
from kong_admin.listing import ListOptions
from kong_admin.models.base import KongEntityBase
from kong_admin.values import ensure_identifier

if TYPE_CHECKING:
    from kong_admin.client import KongAdminClient
    from kong_admin.context import RequestContext

logger = structlog.get_logger()


def join_path(*segments: str) -> str:
    """Join path segments with ``/``."""
    return "/".join(segments)


class BaseEntityManager[T: KongEntityBase](ABC):
    """Abstract base class for Kong entity managers.

    Provides standard CRUD and pagination operations that work with any
    Kong entity type. Subclasses define the endpoint, name, and model class.

    Type Parameters:
        T: The Pydantic model class for this entity type.

    Class Attributes:
        _endpoint: API endpoint path (e.g., "services", "routes").
        _entity_name: Human-readable entity name for logging.
        _model_class: Pydantic model class for deserializing responses.
        _tolerate_not_found: Whether list_all treats a 404 as an empty
            collection (endpoints that only exist when a feature is enabled).

    Example:
        >>> class ServiceManager(BaseEntityManager[Service]):
        ...     _endpoint = "services"
        ...     _entity_name = "service"
        ...     _model_class = Service
    """

    _endpoint: str = ""
    _entity_name: str = ""
    _model_class: type[T]
    _tolerate_not_found: bool = False

    def __init__(self, client: KongAdminClient) -> None:
        """Initialize the entity manager.

        Args:
            client: Kong Admin API client instance.
        """
        self._client = client
        self._log = logger.bind(entity=self._entity_name)

    @property
    def endpoint(self) -> str:
        """Return the API endpoint for this entity type."""
        return self._endpoint

    def _entity_path(self, id_or_name: str | None, *rest: str) -> str:
        """Build ``<endpoint>/<id_or_name>[/rest...]`` after validating the identifier."""
        what = f"{self._entity_name} ID or name"
        return join_path(self._endpoint, ensure_identifier(id_or_name, what), *rest)

    def _parse(self, data: dict[str, Any]) -> T:
        return self._model_class.model_validate(data)

    def _parse_many(self, items: Iterable[dict[str, Any]]) -> builtins.list[T]:
        return [self._model_class.model_validate(item) for item in items]

    def _list_at(
        self,
        path: str,
        opts: ListOptions | None,
        ctx: RequestContext | None,
        filters: dict[str, Any],
    ) -> tuple[builtins.list[T], ListOptions | None]:
        self._log.debug("listing_entities", path=path, **(opts or ListOptions()).to_query())
        data, next_opts = self._client.list(path, opts, params=filters or None, ctx=ctx)
        entities = self._parse_many(data)
        self._log.debug("listed_entities", count=len(entities), has_more=next_opts is not None)
        return entities, next_opts

    def _list_all_at(
        self,
        path: str,
        opts: ListOptions | None,
        ctx: RequestContext | None,
        filters: dict[str, Any],
    ) -> builtins.list[T]:
        data = self._client.list_all(
            path,
            opts,
            tolerate_not_found=self._tolerate_not_found,
            params=filters or None,
            ctx=ctx,
        )
        return self._parse_many(data)

    def _create_at(self, path: str, entity: T, ctx: RequestContext | None) -> T:
        if entity is None:
            raise KongBadRequestError(f"{self._entity_name} cannot be None")
        payload = entity.to_create_payload()
        self._log.info("creating_entity", path=path, id=entity.id)
        if entity.id:
            item_path = join_path(path, ensure_identifier(entity.id, f"{self._entity_name} ID"))
            response = self._client.put(item_path, json=payload, ctx=ctx)
        else:
            response = self._client.post(path, json=payload, ctx=ctx)
        created = self._parse(response)
        self._log.info("created_entity", id=created.id)
        return created

    def list(
        self,
        opts: ListOptions | None = None,
        *,
        ctx: RequestContext | None = None,
        **filters: Any,
    ) -> tuple[builtins.list[T], ListOptions | None]:
        """List one page of entities.

        Args:
            opts: Page size, cursor and tag filter.
            ctx: Optional request context.
            **filters: Additional entity-specific query parameters.

        Returns:
            Tuple of (entity models, options for the next page). The next
            options are None when there are no more results.

        Example:
            >>> services, next_opts = manager.list(ListOptions(size=10, tags=["prod"]))
            >>> while next_opts:
            ...     more, next_opts = manager.list(next_opts)
            ...     services.extend(more)
        """
        return self._list_at(self._endpoint, opts, ctx, filters)

    def list_all(
        self,
        opts: ListOptions | None = None,
        *,
        ctx: RequestContext | None = None,
        **filters: Any,
    ) -> builtins.list[T]:
        """List every entity, walking all pages.

        Args:
            opts: Starting options (page size and tag filter).
            ctx: Optional request context, checked between pages.
            **filters: Additional entity-specific query parameters.

        Returns:
            All entities in server order.
        """
        return self._list_all_at(self._endpoint, opts, ctx, filters)

    def get(self, id_or_name: str, *, ctx: RequestContext | None = None) -> T:
        """Get a single entity by ID or name.

        Args:
            id_or_name: Entity ID (UUID) or unique name.
            ctx: Optional request context.

        Returns:
            The entity model.

        Raises:
            KongBadRequestError: If the identifier is empty or contains '/'.
            KongNotFoundError: If entity doesn't exist.
        """
        path = self._entity_path(id_or_name)
        self._log.debug("getting_entity", id_or_name=id_or_name)
        entity = self._parse(self._client.get(path, ctx=ctx))
        self._log.debug("got_entity", id=entity.id)
        return entity

    def create(self, entity: T, *, ctx: RequestContext | None = None) -> T:
        """Create a new entity.

        When the record carries an ID the entity is upserted with
        ``PUT <endpoint>/<id>`` so the ID is kept; otherwise it is POSTed and
        Kong assigns one.

        Args:
            entity: Entity model with creation data.
            ctx: Optional request context.

        Returns:
            The created entity with server-assigned fields populated.

        Raises:
            KongValidationError: If validation fails.
            KongConflictError: If the natural key is already taken.
            KongDBLessWriteError: If Kong is in DB-less mode.
        """
        return self._create_at(self._endpoint, entity, ctx)

    def update(self, id_or_name: str, entity: T, *, ctx: RequestContext | None = None) -> T:
        """Update an existing entity (partial update).

        Uses PATCH semantics: only fields set on the record are sent.

        Args:
            id_or_name: Entity ID or name to update.
            entity: Entity model with fields to update.
            ctx: Optional request context.

        Returns:
            The updated entity.

        Raises:
            KongNotFoundError: If entity doesn't exist.
            KongValidationError: If validation fails.
        """
        path = self._entity_path(id_or_name)
        payload = entity.to_update_payload()
        self._log.info("updating_entity", id_or_name=id_or_name, fields=sorted(payload))
        updated = self._parse(self._client.patch(path, json=payload, ctx=ctx))
        self._log.info("updated_entity", id=updated.id)
        return updated

    def upsert(self, id_or_name: str, entity: T, *, ctx: RequestContext | None = None) -> T:
        """Create or replace an entity (``PUT``).

        Args:
            id_or_name: Entity ID or name for the upsert operation.
            entity: Entity model with complete data.
            ctx: Optional request context.

        Returns:
            The created or replaced entity.
        """
        path = self._entity_path(id_or_name)
        payload = entity.to_create_payload()
        self._log.info("upserting_entity", id_or_name=id_or_name)
        upserted = self._parse(self._client.put(path, json=payload, ctx=ctx))
        self._log.info("upserted_entity", id=upserted.id)
        return upserted

    def delete(self, id_or_name: str, *, ctx: RequestContext | None = None) -> None:
        """Delete an entity.

        Args:
            id_or_name: Entity ID or name to delete.
            ctx: Optional request context.

        Raises:
            KongNotFoundError: If entity doesn't exist.
        """
        path = self._entity_path(id_or_name)
        self._log.info("deleting_entity", id_or_name=id_or_name)
        self._client.delete(path, ctx=ctx)
        self._log.info("deleted_entity", id_or_name=id_or_name)

    def exists(self, id_or_name: str, *, ctx: RequestContext | None = None) -> bool:
        """Check if an entity exists.

        Args:
            id_or_name: Entity ID or name to check.
            ctx: Optional request context.

        Returns:
            True if entity exists, False otherwise.
        """
        try:
            self.get(id_or_name, ctx=ctx)
            return True
        except KongNotFoundError:
            return False

    def count(self, opts: ListOptions | None = None, *, ctx: RequestContext | None = None) -> int:
        """Count entities matching the filter criteria.

        Kong has no count endpoint, so this walks every page.

        Args:
            opts: Tag filter and page size.
            ctx: Optional request context.

        Returns:
            Total count of matching entities.
        """
        data = self._client.list_all(
            self._endpoint, opts, tolerate_not_found=self._tolerate_not_found, ctx=ctx
        )
        return len(data)

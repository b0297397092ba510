"""Entity schema access and validation.

Kong serves the schema of every entity type under ``/schemas/{entity}`` and
validates candidate records at ``/schemas/{entity}/validate`` without
storing them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from kong_admin.exceptions import KongValidationError
from kong_admin.models.base import KongEntityBase
from kong_admin.services.base import join_path
from kong_admin.values import ensure_identifier

if TYPE_CHECKING:
    from kong_admin.client import KongAdminClient
    from kong_admin.context import RequestContext

logger = structlog.get_logger()


def validate_against_schema(
    client: KongAdminClient,
    entity_type: str,
    entity: Any,
    ctx: RequestContext | None = None,
) -> tuple[bool, str]:
    """POST a record to ``/schemas/<entity_type>/validate``.

    Args:
        client: Admin API client.
        entity_type: Schema name, e.g. "plugins", "vaults", "services".
        entity: Record model or mapping to validate.
        ctx: Optional request context.

    Returns:
        Tuple of (valid, message). Kong answers 400 for an invalid record,
        which yields False and Kong's message.

    Raises:
        KongAPIError: For any failure other than a 400.
    """
    entity_type = ensure_identifier(entity_type, "entity type")
    body = entity.to_payload(include_id=True) if isinstance(entity, KongEntityBase) else entity
    path = join_path("schemas", entity_type, "validate")
    try:
        client.request("POST", path, body=body, target=None, ctx=ctx)
    except KongValidationError as e:
        logger.debug("schema_validation_failed", entity_type=entity_type, message=e.message)
        return False, e.message
    return True, ""


class SchemaManager:
    """Read entity schemas and validate arbitrary records.

    Example:
        >>> schemas = SchemaManager(client)
        >>> schemas.get("services")["fields"][0]
        {'id': {'type': 'string', 'uuid': True, 'auto': True}}
        >>> schemas.validate("services", {"host": "example.com"})
        (True, '')
    """

    def __init__(self, client: KongAdminClient) -> None:
        self._client = client
        self._log = logger.bind(entity="schema")

    def get(self, entity_type: str, *, ctx: RequestContext | None = None) -> dict[str, Any]:
        """Get the full schema of an entity type."""
        entity_type = ensure_identifier(entity_type, "entity type")
        self._log.debug("getting_schema", entity_type=entity_type)
        return self._client.get(join_path("schemas", entity_type), ctx=ctx)

    def validate(
        self, entity_type: str, entity: Any, *, ctx: RequestContext | None = None
    ) -> tuple[bool, str]:
        """Validate a record of any entity type. See :func:`validate_against_schema`."""
        return validate_against_schema(self._client, entity_type, entity, ctx)

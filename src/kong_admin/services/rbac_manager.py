"""RBAC managers for Kong Enterprise.

This module provides managers for RBAC roles, the users holding them and
the two kinds of permissions attached to roles:
- RBACRoleManager: Roles
- RBACUserManager: Users authenticated by an RBAC token
- RBACEndpointPermissionManager: Permissions on Admin API endpoints
- RBACEntityPermissionManager: Permissions on individual entities
"""

from __future__ import annotations

import builtins
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

import structlog

from kong_admin.exceptions import KongBadRequestError
from kong_admin.models.base import KongEntityBase
from kong_admin.models.enterprise import (
    RBACEndpointPermission,
    RBACEntityPermission,
    RBACRole,
    RBACUser,
)
from kong_admin.services.base import BaseEntityManager, join_path
from kong_admin.values import dedupe, ensure_identifier

if TYPE_CHECKING:
    from kong_admin.client import KongAdminClient
    from kong_admin.context import RequestContext

logger = structlog.get_logger()


def _roles_path(role_id_or_name: str | None, *rest: str) -> str:
    role = ensure_identifier(role_id_or_name, "role ID or name")
    return join_path("rbac", "roles", role, *rest)


def _role_key(permission: RBACEndpointPermission | RBACEntityPermission) -> str:
    if permission.role is None or not permission.role.key():
        raise KongBadRequestError("permission must reference a role by ID or name")
    return permission.role.key() or ""


class RBACRoleManager(BaseEntityManager[RBACRole]):
    """Manager for Kong RBAC roles.

    Example:
        >>> roles = RBACRoleManager(client)
        >>> roles.create(RBACRole(name="read-only", comment="Read access"))
    """

    _endpoint = "rbac/roles"
    _entity_name = "rbac_role"
    _model_class = RBACRole


def _role_names(roles: Iterable[str] | str) -> str:
    if isinstance(roles, str):
        roles = [roles]
    names = dedupe(r for r in roles if r)
    if not names:
        raise KongBadRequestError("at least one role is required")
    return ",".join(names)


class RoleHolderManager[T: KongEntityBase](BaseEntityManager[T]):
    """Base manager for entities roles are assigned to (RBAC users and admins).

    Roles are addressed by name or ID and sent to Kong as one
    comma-separated ``roles`` field.
    """

    def list_roles(
        self, id_or_name: str, *, ctx: RequestContext | None = None
    ) -> builtins.list[RBACRole]:
        """List the roles assigned to the entity."""
        response = self._client.get(self._entity_path(id_or_name, "roles"), ctx=ctx)
        return [RBACRole.model_validate(item) for item in response.get("roles") or []]

    def assign_roles(
        self,
        id_or_name: str,
        roles: Iterable[str] | str,
        *,
        ctx: RequestContext | None = None,
    ) -> builtins.list[RBACRole]:
        """Assign roles to the entity.

        Args:
            id_or_name: Entity ID or name.
            roles: Role names or IDs.
            ctx: Optional request context.

        Returns:
            The roles Kong reports after the assignment.

        Raises:
            KongBadRequestError: If no role is given.
        """
        path = self._entity_path(id_or_name, "roles")
        body = {"roles": _role_names(roles)}
        self._log.info("assigning_roles", id_or_name=id_or_name, roles=body["roles"])
        response = self._client.post(path, json=body, ctx=ctx)
        return [RBACRole.model_validate(item) for item in response.get("roles") or []]

    def revoke_roles(
        self,
        id_or_name: str,
        roles: Iterable[str] | str,
        *,
        ctx: RequestContext | None = None,
    ) -> None:
        """Revoke roles from the entity (``DELETE .../roles`` with a body)."""
        path = self._entity_path(id_or_name, "roles")
        body = {"roles": _role_names(roles)}
        self._log.info("revoking_roles", id_or_name=id_or_name, roles=body["roles"])
        self._client.request("DELETE", path, body=body, target=None, ctx=ctx)


class RBACUserManager(RoleHolderManager[RBACUser]):
    """Manager for Kong RBAC users.

    Example:
        >>> users = RBACUserManager(client)
        >>> users.create(RBACUser(name="ci-bot", user_token="s3cret"))
        >>> users.assign_roles("ci-bot", ["read-only"])
        >>> users.list_permissions("ci-bot")["endpoints"]
    """

    _endpoint = "rbac/users"
    _entity_name = "rbac_user"
    _model_class = RBACUser

    def list_permissions(
        self, user_id_or_name: str, *, ctx: RequestContext | None = None
    ) -> dict[str, Any]:
        """Get the effective permissions of a user.

        Returns:
            Mapping with ``endpoints`` (workspace -> endpoint -> actions) and
            ``entities`` (entity ID -> actions) as reported by Kong.
        """
        response = self._client.get(self._entity_path(user_id_or_name, "permissions"), ctx=ctx)
        return {
            "endpoints": response.get("endpoints") or {},
            "entities": response.get("entities") or {},
        }


class RBACEndpointPermissionManager:
    """Manager for endpoint permissions of RBAC roles.

    Permissions are keyed by (role, workspace, endpoint). Endpoints are
    Admin API path patterns such as ``/services/*`` and may contain slashes.

    Example:
        >>> perms = RBACEndpointPermissionManager(client)
        >>> perms.create(RBACEndpointPermission(
        ...     role={"id": role.id}, workspace="default", endpoint="/services", actions=["read"]
        ... ))
        >>> perms.get(role.id, "default", "/services")
    """

    def __init__(self, client: KongAdminClient) -> None:
        self._client = client
        self._log = logger.bind(entity="rbac_endpoint_permission")

    @staticmethod
    def _permission_path(role: str, workspace: str | None, endpoint: str | None) -> str:
        workspace = ensure_identifier(workspace, "workspace")
        if not endpoint:
            raise KongBadRequestError("endpoint cannot be empty")
        return _roles_path(role, "endpoints", workspace, endpoint.lstrip("/"))

    def create(
        self, permission: RBACEndpointPermission, *, ctx: RequestContext | None = None
    ) -> RBACEndpointPermission:
        """Grant a role access to an endpoint."""
        if permission is None:
            raise KongBadRequestError("endpoint permission cannot be None")
        path = _roles_path(_role_key(permission), "endpoints")
        self._log.info("creating_endpoint_permission", endpoint=permission.endpoint)
        response = self._client.post(path, json=permission.to_create_payload(), ctx=ctx)
        return RBACEndpointPermission.model_validate(response)

    def get(
        self,
        role_id_or_name: str,
        workspace: str,
        endpoint: str,
        *,
        ctx: RequestContext | None = None,
    ) -> RBACEndpointPermission:
        """Get a role's permission on an endpoint within a workspace."""
        path = self._permission_path(role_id_or_name, workspace, endpoint)
        return RBACEndpointPermission.model_validate(self._client.get(path, ctx=ctx))

    def update(
        self, permission: RBACEndpointPermission, *, ctx: RequestContext | None = None
    ) -> RBACEndpointPermission:
        """Update a permission identified by its role, workspace and endpoint.

        Raises:
            KongBadRequestError: If the role, workspace or endpoint is missing.
        """
        if permission is None:
            raise KongBadRequestError("endpoint permission cannot be None")
        path = self._permission_path(
            _role_key(permission), permission.workspace, permission.endpoint
        )
        self._log.info("updating_endpoint_permission", endpoint=permission.endpoint)
        response = self._client.patch(path, json=permission.to_update_payload(), ctx=ctx)
        return RBACEndpointPermission.model_validate(response)

    def delete(
        self,
        role_id_or_name: str,
        workspace: str,
        endpoint: str,
        *,
        ctx: RequestContext | None = None,
    ) -> None:
        """Revoke a role's permission on an endpoint."""
        path = self._permission_path(role_id_or_name, workspace, endpoint)
        self._log.info("deleting_endpoint_permission", endpoint=endpoint)
        self._client.delete(path, ctx=ctx)

    def list_all_for_role(
        self, role_id_or_name: str, *, ctx: RequestContext | None = None
    ) -> builtins.list[RBACEndpointPermission]:
        """List every endpoint permission of a role."""
        data = self._client.list_all(_roles_path(role_id_or_name, "endpoints"), ctx=ctx)
        return [RBACEndpointPermission.model_validate(item) for item in data]


class RBACEntityPermissionManager:
    """Manager for entity permissions of RBAC roles.

    Permissions are keyed by (role, entity ID).
    """

    def __init__(self, client: KongAdminClient) -> None:
        self._client = client
        self._log = logger.bind(entity="rbac_entity_permission")

    def create(
        self, permission: RBACEntityPermission, *, ctx: RequestContext | None = None
    ) -> RBACEntityPermission:
        """Grant a role access to an entity."""
        if permission is None:
            raise KongBadRequestError("entity permission cannot be None")
        path = _roles_path(_role_key(permission), "entities")
        self._log.info("creating_entity_permission", entity_id=permission.entity_id)
        response = self._client.post(path, json=permission.to_create_payload(), ctx=ctx)
        return RBACEntityPermission.model_validate(response)

    def get(
        self, role_id_or_name: str, entity_id: str, *, ctx: RequestContext | None = None
    ) -> RBACEntityPermission:
        """Get a role's permission on an entity."""
        entity_id = ensure_identifier(entity_id, "entity ID")
        path = _roles_path(role_id_or_name, "entities", entity_id)
        return RBACEntityPermission.model_validate(self._client.get(path, ctx=ctx))

    def update(
        self, permission: RBACEntityPermission, *, ctx: RequestContext | None = None
    ) -> RBACEntityPermission:
        """Update a permission identified by its role and entity ID."""
        if permission is None:
            raise KongBadRequestError("entity permission cannot be None")
        entity_id = ensure_identifier(permission.entity_id, "entity ID")
        path = _roles_path(_role_key(permission), "entities", entity_id)
        self._log.info("updating_entity_permission", entity_id=entity_id)
        response = self._client.patch(path, json=permission.to_update_payload(), ctx=ctx)
        return RBACEntityPermission.model_validate(response)

    def delete(
        self, role_id_or_name: str, entity_id: str, *, ctx: RequestContext | None = None
    ) -> None:
        """Revoke a role's permission on an entity."""
        entity_id = ensure_identifier(entity_id, "entity ID")
        self._log.info("deleting_entity_permission", entity_id=entity_id)
        self._client.delete(_roles_path(role_id_or_name, "entities", entity_id), ctx=ctx)

    def list_all_for_role(
        self, role_id_or_name: str, *, ctx: RequestContext | None = None
    ) -> builtins.list[RBACEntityPermission]:
        """List every entity permission of a role."""
        data = self._client.list_all(_roles_path(role_id_or_name, "entities"), ctx=ctx)
        return [RBACEntityPermission.model_validate(item) for item in data]

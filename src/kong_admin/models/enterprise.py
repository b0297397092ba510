"""Pydantic models for Kong Enterprise entities.

Covers workspaces, RBAC roles and permissions, vaults, licenses and the
Dev Portal developer entities.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import Field

from kong_admin.models.base import KongEntityBase, KongEntityReference


class Workspace(KongEntityBase):
    """Kong Enterprise workspace.

    Attributes:
        name: Unique workspace name.
        comment: Free-form description.
        config: Workspace settings (portal flags, etc.).
        meta: Additional metadata (color, thumbnail).
    """

    _entity_name: ClassVar[str] = "workspace"

    name: str | None = Field(default=None, description="Unique workspace name")
    comment: str | None = Field(default=None, description="Workspace description")
    config: dict[str, Any] | None = Field(default=None, description="Workspace configuration")
    meta: dict[str, Any] | None = Field(default=None, description="Additional metadata")


class WorkspaceEntity(KongEntityBase):
    """Entity membership record returned by ``/workspaces/{w}/entities``."""

    _entity_name: ClassVar[str] = "workspace_entity"

    workspace_id: str | None = Field(default=None, description="Workspace ID")
    workspace_name: str | None = Field(default=None, description="Workspace name")
    entity_id: str | None = Field(default=None, description="Entity ID")
    entity_type: str | None = Field(default=None, description="Entity table name")
    unique_field_name: str | None = Field(default=None, description="Unique field")
    unique_field_value: str | None = Field(default=None, description="Unique value")


class RBACRole(KongEntityBase):
    """RBAC role.

    Attributes:
        name: Unique role name.
        comment: Role description.
        is_default: Whether Kong created the role for a user.
    """

    _entity_name: ClassVar[str] = "rbac_role"

    name: str | None = Field(default=None, description="Unique role name")
    comment: str | None = Field(default=None, description="Role description")
    is_default: bool | None = Field(default=None, description="Default role flag")


class RBACEndpointPermission(KongEntityBase):
    """Permission of a role on an Admin API endpoint.

    Attributes:
        role: Role the permission belongs to.
        workspace: Workspace the endpoint is evaluated in (``*`` for all).
        endpoint: Endpoint pattern, e.g. ``/services/*``.
        actions: Allowed actions (read, create, update, delete).
        negative: Deny instead of allow.
    """

    _entity_name: ClassVar[str] = "rbac_endpoint_permission"

    role: KongEntityReference | None = Field(default=None, description="Owning role")
    workspace: str | None = Field(default=None, description="Workspace scope")
    endpoint: str | None = Field(default=None, description="Endpoint pattern")
    actions: list[str] | None = Field(default=None, description="Allowed actions")
    negative: bool | None = Field(default=None, description="Deny if true")
    comment: str | None = Field(default=None, description="Permission description")


class RBACEntityPermission(KongEntityBase):
    """Permission of a role on a single entity."""

    _entity_name: ClassVar[str] = "rbac_entity_permission"

    role: KongEntityReference | None = Field(default=None, description="Owning role")
    entity_id: str | None = Field(default=None, description="Entity ID (or '*')")
    entity_type: str | None = Field(default=None, description="Entity type")
    actions: list[str] | None = Field(default=None, description="Allowed actions")
    negative: bool | None = Field(default=None, description="Deny if true")
    comment: str | None = Field(default=None, description="Permission description")


class Vault(KongEntityBase):
    """Secret vault referenced from configuration as ``{vault://<prefix>/...}``.

    Attributes:
        name: Vault implementation (env, aws, gcp, hcv, azure).
        prefix: Unique reference prefix.
        description: Human-readable description.
        config: Implementation-specific settings.
    """

    _entity_name: ClassVar[str] = "vault"

    name: str | None = Field(default=None, description="Vault implementation")
    prefix: str | None = Field(default=None, description="Vault prefix for references")
    description: str | None = Field(default=None, description="Vault description")
    config: dict[str, Any] | None = Field(default=None, description="Vault configuration")


class License(KongEntityBase):
    """Kong Enterprise license document."""

    _entity_name: ClassVar[str] = "license"

    payload: str | None = Field(default=None, description="Signed license JSON")


class DeveloperRole(KongEntityBase):
    """Dev Portal developer role."""

    _entity_name: ClassVar[str] = "developer_role"

    name: str | None = Field(default=None, description="Role name")
    comment: str | None = Field(default=None, description="Role description")


class Developer(KongEntityBase):
    """Dev Portal developer.

    Attributes:
        email: Developer email (unique).
        password: Password, write-only.
        custom_id: External identifier.
        status: Approval status code.
        roles: Names of the developer's roles.
        meta: JSON-encoded metadata string.
        consumer: Consumer backing the developer.
    """

    _entity_name: ClassVar[str] = "developer"

    email: str | None = Field(default=None, description="Developer email")
    password: str | None = Field(default=None, description="Password (write-only)")
    custom_id: str | None = Field(default=None, description="External ID")
    status: int | None = Field(default=None, description="Approval status")
    roles: list[str] | None = Field(default=None, description="Role names")
    meta: str | None = Field(default=None, description="Metadata")
    rbac_user: KongEntityReference | None = Field(default=None, description="RBAC user")
    consumer: KongEntityReference | None = Field(default=None, description="Backing consumer")


class RBACUser(KongEntityBase):
    """RBAC user, authenticated by its user token.

    Attributes:
        name: Unique user name.
        comment: User description.
        enabled: Whether the user may authenticate.
        user_token: Token sent as ``Kong-Admin-Token`` (write-only).
        user_token_ident: Short identifier Kong derives from the token.
    """

    _entity_name: ClassVar[str] = "rbac_user"

    name: str | None = Field(default=None, description="Unique user name")
    comment: str | None = Field(default=None, description="User description")
    enabled: bool | None = Field(default=None, description="Whether the user is enabled")
    user_token: str | None = Field(default=None, description="User token (write-only)")
    user_token_ident: str | None = Field(default=None, description="Token identifier")


class Admin(KongEntityBase):
    """Kong Manager administrator.

    Attributes:
        email: Admin email (unique).
        username: Admin username (unique).
        custom_id: External identifier.
        password: Password, only sent when registering credentials.
        rbac_token_enabled: Whether the admin may use an RBAC token.
        status: Invitation status code.
        token: Registration token returned with a register URL.
    """

    _entity_name: ClassVar[str] = "admin"

    email: str | None = Field(default=None, description="Admin email")
    username: str | None = Field(default=None, description="Admin username")
    custom_id: str | None = Field(default=None, description="External ID")
    password: str | None = Field(default=None, description="Password (write-only)")
    rbac_token_enabled: bool | None = Field(default=None, description="RBAC token flag")
    status: int | None = Field(default=None, description="Invitation status")
    token: str | None = Field(default=None, description="Registration token")


class EventHook(KongEntityBase):
    """Event hook calling a handler when Kong emits an event.

    Attributes:
        source: Event source (e.g. ``crud``, ``dao:crud``, ``balancer``).
        event: Event within the source (e.g. ``consumers``); None for all.
        handler: Handler kind (``webhook``, ``webhook-custom``, ``log``, ``lambda``).
        on_change: Only fire when the entity actually changed.
        snooze: Seconds to suppress repeated events.
        config: Handler configuration (URL, headers, payload...).
    """

    _entity_name: ClassVar[str] = "event_hook"

    source: str | None = Field(default=None, description="Event source")
    event: str | None = Field(default=None, description="Event name")
    handler: str | None = Field(default=None, description="Handler kind")
    on_change: bool | None = Field(default=None, description="Fire on change only")
    snooze: int | None = Field(default=None, description="Seconds between repeated events")
    config: dict[str, Any] | None = Field(default=None, description="Handler configuration")

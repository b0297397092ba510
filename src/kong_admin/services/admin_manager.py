"""Admin manager for Kong Manager administrators.

Admins are invited by email, register their own credentials through a
registration token, and get roles assigned like RBAC users.
"""

from __future__ import annotations

import builtins
from typing import TYPE_CHECKING

from kong_admin.exceptions import KongBadRequestError
from kong_admin.models.enterprise import Admin, Workspace
from kong_admin.services.rbac_manager import RoleHolderManager

if TYPE_CHECKING:
    from kong_admin.context import RequestContext


class AdminManager(RoleHolderManager[Admin]):
    """Manager for Kong Manager admins.

    Example:
        >>> admins = AdminManager(client)
        >>> admin = admins.invite(Admin(email="ops@example.com", username="ops"))
        >>> admin = admins.generate_register_url(admin.id)
        >>> admin.password = "s3cret"
        >>> admins.register_credentials(admin)
    """

    _endpoint = "admins"
    _entity_name = "admin"
    _model_class = Admin

    def invite(
        self, admin: Admin, *, send_email: bool = True, ctx: RequestContext | None = None
    ) -> Admin:
        """Create an admin and email them an invitation.

        Args:
            admin: Admin with at least an email and a username.
            send_email: Ask Kong to send the invitation email.
            ctx: Optional request context.

        Returns:
            The created admin.
        """
        if admin is None:
            raise KongBadRequestError("admin cannot be None")
        self._log.info("inviting_admin", username=admin.username)
        response = self._client.post(
            self._endpoint,
            json=admin.to_create_payload(),
            params={"send_email": send_email},
            ctx=ctx,
        )
        return self._parse(response)

    def generate_register_url(
        self, admin_id_or_name: str, *, ctx: RequestContext | None = None
    ) -> Admin:
        """Fetch an admin together with a fresh registration token.

        Returns:
            The admin with ``token`` set from the registration URL.
        """
        path = self._entity_path(admin_id_or_name)
        response = self._client.get(path, params={"generate_register_url": True}, ctx=ctx)
        admin = self._parse(response.get("admin") or response)
        if response.get("token"):
            admin.token = response["token"]
        self._log.debug("generated_register_url", id=admin.id)
        return admin

    def register_credentials(self, admin: Admin, *, ctx: RequestContext | None = None) -> None:
        """Set an invited admin's password using their registration token.

        Raises:
            KongBadRequestError: If username, email, password or token is missing.
        """
        if admin is None:
            raise KongBadRequestError("admin cannot be None")
        body = {
            "username": admin.username,
            "email": admin.email,
            "password": admin.password,
            "token": admin.token,
        }
        missing = [field for field, value in body.items() if not value]
        if missing:
            raise KongBadRequestError(
                f"registering admin credentials requires: {', '.join(missing)}"
            )
        self._log.info("registering_admin_credentials", username=admin.username)
        self._client.request("POST", "admins/register", body=body, target=None, ctx=ctx)

    def list_workspaces(
        self, admin_id_or_name: str, *, ctx: RequestContext | None = None
    ) -> builtins.list[Workspace]:
        """List the workspaces an admin belongs to."""
        path = self._entity_path(admin_id_or_name, "workspaces")
        response = self._client.request("GET", path, target=list, ctx=ctx)
        return [Workspace.model_validate(item) for item in response.data or []]

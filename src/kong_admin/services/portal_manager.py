"""Dev Portal managers for Kong Enterprise.

This module provides managers for Dev Portal developers and developer
roles. The portal must be enabled in the workspace the client is bound to.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from kong_admin.exceptions import KongNotFoundError
from kong_admin.models.enterprise import Developer, DeveloperRole
from kong_admin.services.base import BaseEntityManager
from kong_admin.values import require_value

if TYPE_CHECKING:
    from kong_admin.context import RequestContext


class DeveloperManager(BaseEntityManager[Developer]):
    """Manager for Dev Portal developers.

    Developers are addressed by ID or email.

    Example:
        >>> developers = DeveloperManager(client)
        >>> developers.create(Developer(email="dev@example.com", password="s3cret", meta="{}"))
    """

    _endpoint = "developers"
    _entity_name = "developer"
    _model_class = Developer

    def get_by_custom_id(
        self, custom_id: str, *, ctx: RequestContext | None = None
    ) -> Developer:
        """Get a developer by custom_id.

        Raises:
            KongNotFoundError: If no developer has this custom_id.
        """
        custom_id = require_value(custom_id, "custom_id")
        response = self._client.get(self._endpoint, params={"custom_id": custom_id}, ctx=ctx)
        data = response.get("data") or []
        if not data:
            raise KongNotFoundError(
                resource_type="developer",
                resource_id=custom_id,
                endpoint=self._client.resolve_path(self._endpoint),
            )
        return self._parse(data[0])


class DeveloperRoleManager(BaseEntityManager[DeveloperRole]):
    """Manager for Dev Portal developer roles (``/developers/roles``)."""

    _endpoint = "developers/roles"
    _entity_name = "developer_role"
    _model_class = DeveloperRole

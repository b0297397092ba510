"""Service manager for Kong Services.

This module provides the ServiceManager class for managing Kong Service
entities through the Admin API.
"""

from __future__ import annotations

from kong_admin.models.service import Service
from kong_admin.services.base import BaseEntityManager


class ServiceManager(BaseEntityManager[Service]):
    """Manager for Kong Service entities.

    Example:
        >>> manager = ServiceManager(client)
        >>> created = manager.create(Service(name="foo", host="upstream", port=42, path="/p"))
        >>> manager.get("foo").host
        'upstream'
    """

    _endpoint = "services"
    _entity_name = "service"
    _model_class = Service

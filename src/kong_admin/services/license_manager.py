"""License manager for Kong Enterprise licenses."""

from __future__ import annotations

from kong_admin.models.enterprise import License
from kong_admin.services.base import BaseEntityManager


class LicenseManager(BaseEntityManager[License]):
    """Manager for Kong Enterprise License entities.

    Licenses are addressed by ID only.

    Example:
        >>> licenses = LicenseManager(client)
        >>> licenses.create(License(payload=license_json))
    """

    _endpoint = "licenses"
    _entity_name = "license"
    _model_class = License

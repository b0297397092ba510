"""Certificate, CA certificate and SNI managers.

This module provides managers for Kong TLS material: certificates with
their SNIs, and trusted CA certificates.
"""

from __future__ import annotations

import builtins
from typing import TYPE_CHECKING

from kong_admin.models.certificate import SNI, CACertificate, Certificate
from kong_admin.services.base import BaseEntityManager, join_path
from kong_admin.values import ensure_identifier

if TYPE_CHECKING:
    from kong_admin.context import RequestContext
    from kong_admin.listing import ListOptions


class CertificateManager(BaseEntityManager[Certificate]):
    """Manager for Kong Certificate entities."""

    _endpoint = "certificates"
    _entity_name = "certificate"
    _model_class = Certificate


class CACertificateManager(BaseEntityManager[CACertificate]):
    """Manager for Kong CA Certificate entities.

    Listing tolerates a 404 since older gateways do not expose the
    collection.
    """

    _endpoint = "ca_certificates"
    _entity_name = "ca_certificate"
    _model_class = CACertificate
    _tolerate_not_found = True


class SNIManager(BaseEntityManager[SNI]):
    """Manager for Kong SNI entities.

    Example:
        >>> snis, _ = SNIManager(client).list_for_certificate(cert.id)
    """

    _endpoint = "snis"
    _entity_name = "sni"
    _model_class = SNI

    def list_for_certificate(
        self,
        certificate_id: str,
        opts: ListOptions | None = None,
        *,
        ctx: RequestContext | None = None,
    ) -> tuple[builtins.list[SNI], ListOptions | None]:
        """List one page of the SNIs bound to a certificate.

        Args:
            certificate_id: Certificate ID.
            opts: Pagination and tag filter.
            ctx: Optional request context.

        Returns:
            Tuple of (SNIs, options for the next page).
        """
        certificate = ensure_identifier(certificate_id, "certificate ID")
        path = join_path("certificates", certificate, "snis")
        return self._list_at(path, opts, ctx, {})

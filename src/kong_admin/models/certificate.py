"""Pydantic models for Kong Certificates, CA Certificates, and SNIs."""

from __future__ import annotations

from typing import ClassVar

from pydantic import Field

from kong_admin.models.base import KongEntityBase, KongEntityReference


class Certificate(KongEntityBase):
    """Kong Certificate entity model (PEM certificate and key pair).

    Attributes:
        cert: PEM-encoded certificate.
        key: PEM-encoded private key.
        cert_alt: Alternate PEM certificate (e.g. ECDSA next to RSA).
        key_alt: Alternate PEM private key.
        snis: SNI names bound to this certificate (shorthand on create).
    """

    _entity_name: ClassVar[str] = "certificate"

    cert: str | None = Field(default=None, description="PEM certificate")
    key: str | None = Field(default=None, description="PEM private key")
    cert_alt: str | None = Field(default=None, description="Alternate PEM certificate")
    key_alt: str | None = Field(default=None, description="Alternate PEM private key")
    snis: list[str] | None = Field(default=None, description="Bound SNI names")


class CACertificate(KongEntityBase):
    """Trusted CA certificate used to verify clients or upstreams."""

    _entity_name: ClassVar[str] = "ca_certificate"

    cert: str | None = Field(default=None, description="PEM CA certificate")
    cert_digest: str | None = Field(default=None, description="SHA256 digest of the cert")


class SNI(KongEntityBase):
    """Server Name Indication bound to a certificate."""

    _entity_name: ClassVar[str] = "sni"

    name: str | None = Field(default=None, description="Server name")
    certificate: KongEntityReference | None = Field(default=None, description="Certificate")

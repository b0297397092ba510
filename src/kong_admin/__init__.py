"""Typed Python client for the Kong Gateway Admin API.

Example:
    >>> from kong_admin import KongAdminClient, KongClientConfig, Service
    >>> with KongAdminClient(KongClientConfig(base_url="http://localhost:8001")) as client:
    ...     service = client.services.create(Service(name="orders", url="http://orders:8080"))
    ...     services = client.services.list_all()
"""

from kong_admin.__version__ import __version__
from kong_admin.client import KongAdminClient, KongResponse
from kong_admin.config import KongAuthConfig, KongClientConfig
from kong_admin.context import RequestContext
from kong_admin.defaults import fill_entity_defaults, fill_plugin_defaults
from kong_admin.exceptions import (
    ErrorKind,
    KongAPIError,
    KongAuthError,
    KongBadRequestError,
    KongCancelledError,
    KongConflictError,
    KongConnectionError,
    KongDBLessWriteError,
    KongDecodeError,
    KongForbiddenError,
    KongNotFoundError,
    KongRateLimitError,
    KongServerError,
    KongValidationError,
    is_conflict,
    is_forbidden,
    is_not_found,
    is_transport_error,
    is_unauthorized,
)
from kong_admin.ids import KONG_ENTITIES_NAMESPACE, fill_id, generate_id
from kong_admin.listing import ListOptions
from kong_admin.models import (
    SNI,
    ACLGroup,
    Admin,
    BasicAuth,
    CACertificate,
    Certificate,
    Consumer,
    ConsumerGroup,
    CustomEntity,
    CustomEntityDefinition,
    DegraphqlRoute,
    Developer,
    DeveloperRole,
    EventHook,
    FilterChain,
    GraphqlCostDecoration,
    HMACAuth,
    Info,
    JWTAuth,
    Key,
    KeyAuth,
    KeySet,
    KongEntityReference,
    License,
    MTLSAuth,
    OAuth2Credential,
    Partial,
    Plugin,
    RBACEndpointPermission,
    RBACEntityPermission,
    RBACRole,
    RBACUser,
    Route,
    Service,
    Target,
    Upstream,
    Vault,
    Workspace,
)
from kong_admin.retry import transport_retry
from kong_admin.versioning import InvalidVersionError, Range, Version, parse_range

__all__ = [
    "KONG_ENTITIES_NAMESPACE",
    "SNI",
    "ACLGroup",
    "Admin",
    "BasicAuth",
    "CACertificate",
    "Certificate",
    "Consumer",
    "ConsumerGroup",
    "CustomEntity",
    "CustomEntityDefinition",
    "DegraphqlRoute",
    "Developer",
    "DeveloperRole",
    "ErrorKind",
    "EventHook",
    "FilterChain",
    "GraphqlCostDecoration",
    "HMACAuth",
    "Info",
    "InvalidVersionError",
    "JWTAuth",
    "Key",
    "KeyAuth",
    "KeySet",
    "KongAPIError",
    "KongAdminClient",
    "KongAuthConfig",
    "KongAuthError",
    "KongBadRequestError",
    "KongCancelledError",
    "KongClientConfig",
    "KongConflictError",
    "KongConnectionError",
    "KongDBLessWriteError",
    "KongDecodeError",
    "KongEntityReference",
    "KongForbiddenError",
    "KongNotFoundError",
    "KongRateLimitError",
    "KongResponse",
    "KongServerError",
    "KongValidationError",
    "License",
    "ListOptions",
    "MTLSAuth",
    "OAuth2Credential",
    "Partial",
    "Plugin",
    "RBACEndpointPermission",
    "RBACEntityPermission",
    "RBACRole",
    "RBACUser",
    "Range",
    "RequestContext",
    "Route",
    "Service",
    "Target",
    "Upstream",
    "Vault",
    "Version",
    "Workspace",
    "__version__",
    "fill_entity_defaults",
    "fill_id",
    "fill_plugin_defaults",
    "generate_id",
    "is_conflict",
    "is_forbidden",
    "is_not_found",
    "is_transport_error",
    "is_unauthorized",
    "parse_range",
    "transport_retry",
]

"""Kong Admin API resource managers.

This package contains one manager per Kong entity type. Managers use the
Repository pattern on top of :class:`kong_admin.client.KongAdminClient`;
every manager is attached to the client as an attribute.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from kong_admin.services.admin_manager import AdminManager
from kong_admin.services.base import BaseEntityManager
from kong_admin.services.certificate_manager import (
    CACertificateManager,
    CertificateManager,
    SNIManager,
)
from kong_admin.services.consumer_manager import ConsumerGroupManager, ConsumerManager
from kong_admin.services.credential_managers import (
    ACLManager,
    BasicAuthManager,
    CredentialManager,
    HMACAuthManager,
    JWTAuthManager,
    KeyAuthManager,
    MTLSAuthManager,
    OAuth2Manager,
)
from kong_admin.services.credentials import (
    CREDENTIAL_KINDS,
    CredentialDispatcher,
    CredentialKind,
)
from kong_admin.services.custom_entity_manager import CustomEntityManager
from kong_admin.services.event_hook_manager import EventHookManager
from kong_admin.services.filter_chain_manager import FilterChainManager
from kong_admin.services.graphql_manager import (
    DegraphqlRouteManager,
    GraphqlCostDecorationManager,
)
from kong_admin.services.info_manager import InfoManager, TagManager
from kong_admin.services.key_manager import KeyManager, KeySetManager
from kong_admin.services.license_manager import LicenseManager
from kong_admin.services.partial_manager import PartialManager
from kong_admin.services.plugin_manager import PluginManager
from kong_admin.services.portal_manager import DeveloperManager, DeveloperRoleManager
from kong_admin.services.rbac_manager import (
    RBACEndpointPermissionManager,
    RBACEntityPermissionManager,
    RBACRoleManager,
    RBACUserManager,
    RoleHolderManager,
)
from kong_admin.services.route_manager import RouteManager
from kong_admin.services.schema_manager import SchemaManager
from kong_admin.services.service_manager import ServiceManager
from kong_admin.services.upstream_manager import TargetManager, UpstreamManager
from kong_admin.services.vault_manager import VaultManager
from kong_admin.services.workspace_manager import WorkspaceManager

if TYPE_CHECKING:
    from kong_admin.client import KongAdminClient

# client attribute -> manager class
_MANAGERS = {
    "services": ServiceManager,
    "routes": RouteManager,
    "consumers": ConsumerManager,
    "consumer_groups": ConsumerGroupManager,
    "upstreams": UpstreamManager,
    "targets": TargetManager,
    "certificates": CertificateManager,
    "ca_certificates": CACertificateManager,
    "snis": SNIManager,
    "plugins": PluginManager,
    "partials": PartialManager,
    "filter_chains": FilterChainManager,
    "vaults": VaultManager,
    "keys": KeyManager,
    "key_sets": KeySetManager,
    "licenses": LicenseManager,
    "workspaces": WorkspaceManager,
    "rbac_roles": RBACRoleManager,
    "rbac_users": RBACUserManager,
    "admins": AdminManager,
    "rbac_endpoint_permissions": RBACEndpointPermissionManager,
    "rbac_entity_permissions": RBACEntityPermissionManager,
    "developers": DeveloperManager,
    "developer_roles": DeveloperRoleManager,
    "event_hooks": EventHookManager,
    "degraphql_routes": DegraphqlRouteManager,
    "graphql_cost_decorations": GraphqlCostDecorationManager,
    "custom_entities": CustomEntityManager,
    "tags": TagManager,
    "schemas": SchemaManager,
    "info": InfoManager,
}

_CREDENTIAL_MANAGERS = {
    "basic_auths": BasicAuthManager,
    "key_auths": KeyAuthManager,
    "hmac_auths": HMACAuthManager,
    "jwt_auths": JWTAuthManager,
    "acls": ACLManager,
    "oauth2_credentials": OAuth2Manager,
    "mtls_auths": MTLSAuthManager,
}


def attach_managers(client: KongAdminClient) -> None:
    """Attach one instance of every manager to the client."""
    for attr, manager_class in _MANAGERS.items():
        setattr(client, attr, manager_class(client))
    dispatcher = CredentialDispatcher(client)
    client.credentials = dispatcher
    for attr, credential_class in _CREDENTIAL_MANAGERS.items():
        setattr(client, attr, credential_class(dispatcher))


__all__ = [
    "CREDENTIAL_KINDS",
    "ACLManager",
    "AdminManager",
    "BaseEntityManager",
    "BasicAuthManager",
    "CACertificateManager",
    "CertificateManager",
    "ConsumerGroupManager",
    "ConsumerManager",
    "CredentialDispatcher",
    "CredentialKind",
    "CredentialManager",
    "CustomEntityManager",
    "DegraphqlRouteManager",
    "DeveloperManager",
    "DeveloperRoleManager",
    "EventHookManager",
    "FilterChainManager",
    "GraphqlCostDecorationManager",
    "HMACAuthManager",
    "InfoManager",
    "JWTAuthManager",
    "KeyAuthManager",
    "KeyManager",
    "KeySetManager",
    "LicenseManager",
    "MTLSAuthManager",
    "OAuth2Manager",
    "PartialManager",
    "PluginManager",
    "RBACEndpointPermissionManager",
    "RBACEntityPermissionManager",
    "RBACRoleManager",
    "RBACUserManager",
    "RoleHolderManager",
    "RouteManager",
    "SNIManager",
    "SchemaManager",
    "ServiceManager",
    "TagManager",
    "TargetManager",
    "UpstreamManager",
    "VaultManager",
    "WorkspaceManager",
    "attach_managers",
]

"""Kong API entity models.

This package contains Pydantic models for all Kong Admin API entities.
"""

from kong_admin.models.base import (
    ConsumerReference,
    KongEntityBase,
    KongEntityReference,
    PaginatedResponse,
)
from kong_admin.models.certificate import SNI, CACertificate, Certificate
from kong_admin.models.consumer import (
    Consumer,
    ConsumerGroup,
    ConsumerGroupMembers,
    ConsumerGroupPlugin,
    ConsumerGroupRLA,
)
from kong_admin.models.credentials import (
    ACLGroup,
    BasicAuth,
    Credential,
    HMACAuth,
    JWTAuth,
    KeyAuth,
    MTLSAuth,
    OAuth2Credential,
)
from kong_admin.models.custom import CustomEntity, CustomEntityDefinition
from kong_admin.models.enterprise import (
    Admin,
    Developer,
    DeveloperRole,
    EventHook,
    License,
    RBACEndpointPermission,
    RBACEntityPermission,
    RBACRole,
    RBACUser,
    Vault,
    Workspace,
    WorkspaceEntity,
)
from kong_admin.models.filter_chain import Filter, FilterChain
from kong_admin.models.graphql import DegraphqlRoute, GraphqlCostDecoration
from kong_admin.models.info import Info, ProxyListener, RuntimeConfiguration, StreamListener
from kong_admin.models.key import Key, KeySet
from kong_admin.models.plugin import Partial, PartialLink, Plugin
from kong_admin.models.route import Route
from kong_admin.models.service import Service
from kong_admin.models.upstream import Target, Upstream, UpstreamNodeHealth

__all__ = [
    # Credentials
    "ACLGroup",
    # Enterprise
    "Admin",
    "BasicAuth",
    # Certificates
    "CACertificate",
    "Certificate",
    # Consumers
    "Consumer",
    "ConsumerGroup",
    "ConsumerGroupMembers",
    "ConsumerGroupPlugin",
    "ConsumerGroupRLA",
    # Base
    "ConsumerReference",
    "Credential",
    # Custom entities
    "CustomEntity",
    "CustomEntityDefinition",
    # GraphQL
    "DegraphqlRoute",
    "Developer",
    "DeveloperRole",
    "EventHook",
    # Filter chains
    "Filter",
    "FilterChain",
    "GraphqlCostDecoration",
    "HMACAuth",
    # Node information
    "Info",
    "JWTAuth",
    "Key",
    "KeyAuth",
    "KeySet",
    "KongEntityBase",
    "KongEntityReference",
    "License",
    "MTLSAuth",
    "OAuth2Credential",
    "PaginatedResponse",
    # Plugins
    "Partial",
    "PartialLink",
    "Plugin",
    "ProxyListener",
    "RBACEndpointPermission",
    "RBACEntityPermission",
    "RBACRole",
    "RBACUser",
    # Core entities
    "Route",
    "RuntimeConfiguration",
    "SNI",
    "Service",
    "StreamListener",
    "Target",
    "Upstream",
    "UpstreamNodeHealth",
    "Vault",
    "Workspace",
    "WorkspaceEntity",
]

"""Kong Admin API client configuration models."""

from __future__ import annotations

import os
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from kong_admin.__version__ import __version__

DEFAULT_BASE_URL = "http://localhost:8001"
DEFAULT_USER_AGENT = f"kong-admin-client/{__version__}"
ADMIN_TOKEN_HEADER = "Kong-Admin-Token"

_TRUTHY = {"1", "true", "yes", "on"}


class KongAuthConfig(BaseModel):
    """Kong Admin API authentication configuration."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["none", "token"] = "none"
    token: str | None = None
    header_name: str = ADMIN_TOKEN_HEADER

    @model_validator(mode="after")
    def validate_token_present(self) -> KongAuthConfig:
        """Require a token value when token auth is selected."""
        if self.type == "token" and not self.token:
            raise ValueError("token auth requires a non-empty token")
        return self

    @classmethod
    def from_token(cls, token: str, header_name: str = ADMIN_TOKEN_HEADER) -> KongAuthConfig:
        """Build a shared-token configuration."""
        return cls(type="token", token=token, header_name=header_name)


class KongClientConfig(BaseModel):
    """Kong Admin API client configuration.

    The HTTP transport itself is not part of this model; pass a ready
    ``httpx.Client`` to :class:`~kong_admin.client.KongAdminClient` to
    customise TLS, proxies or to plug in a test double.
    """

    model_config = ConfigDict(extra="forbid")

    base_url: str
    workspace: str | None = None
    auth: KongAuthConfig = Field(default_factory=KongAuthConfig)
    headers: dict[str, str] = Field(default_factory=dict)
    user_agent: str = DEFAULT_USER_AGENT
    cookie_jar_disabled: bool = False
    debug: bool = False
    timeout: float | None = None
    verify_ssl: bool = True

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate base URL format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("workspace")
    @classmethod
    def validate_workspace(cls, v: str | None) -> str | None:
        """Normalise the workspace name; empty means unscoped."""
        if v is None:
            return None
        v = v.strip().strip("/")
        if not v:
            return None
        if "/" in v:
            raise ValueError("workspace must be a single path segment")
        return v

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float | None) -> float | None:
        """Validate timeout is positive."""
        if v is not None and v <= 0:
            raise ValueError("timeout must be positive")
        return v

    @classmethod
    def from_env(cls, base_config: dict[str, Any] | None = None) -> KongClientConfig:
        """Create configuration with environment variable overrides.

        Environment variables take precedence over base_config values.

        Supported environment variables:
            KONG_ADMIN_URL: Kong Admin API base URL
            KONG_ADMIN_TOKEN: Admin token sent as ``Kong-Admin-Token``
            KONG_WORKSPACE: Workspace every request is scoped to
            KONG_ADMIN_DEBUG: Log request/response dumps when truthy
            KONG_ADMIN_TLS_VERIFY: Set to a falsy value to skip TLS verification
        """
        config_dict = base_config.copy() if base_config else {}
        config_dict.setdefault("base_url", DEFAULT_BASE_URL)

        if base_url := os.environ.get("KONG_ADMIN_URL"):
            config_dict["base_url"] = base_url

        if token := os.environ.get("KONG_ADMIN_TOKEN"):
            auth = dict(config_dict.get("auth") or {})
            auth["type"] = "token"
            auth["token"] = token
            config_dict["auth"] = auth

        if workspace := os.environ.get("KONG_WORKSPACE"):
            config_dict["workspace"] = workspace

        if debug := os.environ.get("KONG_ADMIN_DEBUG"):
            config_dict["debug"] = debug.strip().lower() in _TRUTHY

        if verify := os.environ.get("KONG_ADMIN_TLS_VERIFY"):
            config_dict["verify_ssl"] = verify.strip().lower() in _TRUTHY

        return cls.model_validate(config_dict)

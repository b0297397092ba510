"""Kong Admin API HTTP client.

The client is the transport core every resource manager goes through: it
builds requests (workspace prefix, query encoding, JSON bodies, auth and
constant headers), executes them, decodes successful responses, and maps
failures onto the :mod:`kong_admin.exceptions` taxonomy. It also hosts the
cursor pagination engine.
"""

from __future__ import annotations

import builtins
import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx
import structlog
from pydantic import BaseModel, ValidationError

from kong_admin.config import KongClientConfig
from kong_admin.exceptions import (
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
)
from kong_admin.listing import LIST_ALL_PAGE_SIZE, ListOptions
from kong_admin.models.base import PaginatedResponse
from kong_admin.services import attach_managers

if TYPE_CHECKING:
    from kong_admin import services as svc
    from kong_admin.context import RequestContext

logger = structlog.get_logger()

REDACTED = "[REDACTED]"
# Phrases Kong uses when refusing writes on a DB-less node.
_DBLESS_MARKERS = ("read-only", "db-less", "not using a database")
_SECRET_HEADERS = {"authorization", "cookie", "set-cookie", "proxy-authorization"}
_SECRET_FIELDS = {
    "password",
    "secret",
    "client_secret",
    "key",
    "token",
    "private_key",
    "key_alt",
    "payload",
}


@dataclass(frozen=True)
class KongResponse:
    """Result of a successful Admin API call.

    Attributes:
        status_code: HTTP status (lets callers tell 200 from 201 or 204).
        headers: Response headers.
        content: Raw response body.
        data: Body decoded into the requested target (None when discarded).
    """

    status_code: int
    headers: httpx.Headers
    content: bytes
    data: Any = None


def _encode_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_query(query: Mapping[str, Any] | BaseModel | None) -> list[tuple[str, str]] | None:
    """Flatten a query mapping into form-encodable pairs.

    None values are dropped, booleans become ``true``/``false`` and list or
    tuple values repeat the key.
    """
    if query is None:
        return None
    if isinstance(query, ListOptions):
        query = query.to_query()
    elif isinstance(query, BaseModel):
        query = query.model_dump(mode="json", exclude_none=True)
    pairs: list[tuple[str, str]] = []
    for key, value in query.items():
        if value is None:
            continue
        if isinstance(value, list | tuple):
            pairs.extend((key, _encode_scalar(item)) for item in value if item is not None)
        else:
            pairs.append((key, _encode_scalar(value)))
    return pairs


def encode_body(body: Any) -> bytes:
    """Serialize a request body to JSON bytes.

    Pydantic records are dumped without unset fields; ``bytes`` and ``str``
    are sent as-is (pre-encoded JSON).

    Raises:
        KongBadRequestError: If the body is not JSON-serializable.
    """
    if isinstance(body, bytes):
        return body
    if isinstance(body, str):
        return body.encode()
    if isinstance(body, BaseModel):
        body = body.model_dump(mode="json", exclude_none=True)
    try:
        return json.dumps(body).encode()
    except (TypeError, ValueError) as e:
        raise KongBadRequestError(f"request body is not JSON-serializable: {e}") from e


def _redact(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: REDACTED if k in _SECRET_FIELDS else _redact(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_redact(v) for v in value]
    return value


def redact_body(content: bytes | None) -> Any:
    """Return a log-safe rendering of a JSON body."""
    if not content:
        return None
    try:
        return _redact(json.loads(content))
    except ValueError:
        return f"<{len(content)} bytes>"


class KongAdminClient:
    """HTTP client for the Kong Admin API.

    A client is bound to one base URL and at most one workspace; callers
    managing several workspaces hold one client per workspace. It is safe to
    share between threads as long as the underlying ``httpx.Client`` is.

    Every resource manager is available as an attribute, e.g.
    ``client.services``, ``client.routes`` or ``client.basic_auths``.

    Example:
        ```python
        from kong_admin import KongAdminClient, KongClientConfig
        from kong_admin.config import KongAuthConfig

        config = KongClientConfig(
            base_url="http://localhost:8001",
            auth=KongAuthConfig.from_token("my-admin-token"),
        )

        with KongAdminClient(config) as client:
            print(client.root()["version"])
            services = client.services.list_all()
        ```
    """

    services: svc.ServiceManager
    routes: svc.RouteManager
    consumers: svc.ConsumerManager
    consumer_groups: svc.ConsumerGroupManager
    upstreams: svc.UpstreamManager
    targets: svc.TargetManager
    certificates: svc.CertificateManager
    ca_certificates: svc.CACertificateManager
    snis: svc.SNIManager
    plugins: svc.PluginManager
    partials: svc.PartialManager
    filter_chains: svc.FilterChainManager
    vaults: svc.VaultManager
    keys: svc.KeyManager
    key_sets: svc.KeySetManager
    licenses: svc.LicenseManager
    workspaces: svc.WorkspaceManager
    rbac_roles: svc.RBACRoleManager
    rbac_users: svc.RBACUserManager
    admins: svc.AdminManager
    rbac_endpoint_permissions: svc.RBACEndpointPermissionManager
    rbac_entity_permissions: svc.RBACEntityPermissionManager
    developers: svc.DeveloperManager
    developer_roles: svc.DeveloperRoleManager
    event_hooks: svc.EventHookManager
    degraphql_routes: svc.DegraphqlRouteManager
    graphql_cost_decorations: svc.GraphqlCostDecorationManager
    custom_entities: svc.CustomEntityManager
    tags: svc.TagManager
    schemas: svc.SchemaManager
    info: svc.InfoManager
    credentials: svc.CredentialDispatcher
    basic_auths: svc.BasicAuthManager
    key_auths: svc.KeyAuthManager
    hmac_auths: svc.HMACAuthManager
    jwt_auths: svc.JWTAuthManager
    acls: svc.ACLManager
    oauth2_credentials: svc.OAuth2Manager
    mtls_auths: svc.MTLSAuthManager

    def __init__(
        self,
        config: KongClientConfig,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize Kong Admin API client.

        Args:
            config: Client settings (URL, workspace, auth, headers, ...).
            http_client: Pre-built ``httpx.Client`` to send requests with.
                When given, the caller keeps ownership and ``close()`` leaves
                it open.
        """
        self.config = config
        self._owns_http = http_client is None
        if http_client is None:
            http_client = httpx.Client(
                timeout=httpx.Timeout(config.timeout),
                verify=config.verify_ssl,
            )
        self._http = http_client
        self._constant_headers = dict(config.headers)
        attach_managers(self)

        logger.info(
            "Kong Admin API client initialized",
            base_url=config.base_url,
            workspace=config.workspace,
            auth_type=config.auth.type,
        )

    @classmethod
    def from_url(cls, base_url: str, **options: Any) -> KongAdminClient:
        """Build a client from a base URL and config keyword options."""
        http_client = options.pop("http_client", None)
        return cls(KongClientConfig(base_url=base_url, **options), http_client=http_client)

    @property
    def workspace(self) -> str | None:
        """Workspace every request is scoped to, if any."""
        return self.config.workspace

    @property
    def base_url(self) -> str:
        return self.config.base_url

    # Request construction

    def resolve_path(self, path: str) -> str:
        """Normalize a path and apply the workspace prefix.

        Raises:
            KongBadRequestError: If the path is empty.
        """
        if not path:
            raise KongBadRequestError("request path cannot be empty")
        path = f"/{path.lstrip('/')}"
        if self.config.workspace:
            path = f"/{self.config.workspace}{path}" if path != "/" else f"/{self.config.workspace}"
        return path

    def _headers(self) -> httpx.Headers:
        headers = httpx.Headers(
            {"Accept": "application/json", "User-Agent": self.config.user_agent}
        )
        for name, value in self._constant_headers.items():
            headers[name] = value
        auth = self.config.auth
        if auth.type == "token" and auth.token:
            headers[auth.header_name] = auth.token
        return headers

    def build_request(
        self,
        method: str,
        path: str,
        *,
        query: Mapping[str, Any] | BaseModel | None = None,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
        ctx: RequestContext | None = None,
    ) -> httpx.Request:
        """Build a request addressed at the configured base URL.

        Args:
            method: HTTP method.
            path: Endpoint path relative to the base URL (workspace prefix is
                added here, exactly once).
            query: Query parameters; None means no query string.
            body: Request body; None means no payload.
            headers: Per-request headers, overriding constant and auth headers.
            ctx: Request context whose deadline bounds the request timeout.

        Returns:
            The prepared ``httpx.Request``.

        Raises:
            KongBadRequestError: If the path is empty or the body cannot be encoded.
        """
        endpoint = self.resolve_path(path)
        merged = self._headers()
        content: bytes | None = None
        if body is not None:
            content = encode_body(body)
            merged["Content-Type"] = "application/json"
        if headers:
            for name, value in headers.items():
                merged[name] = value

        timeout: Any = httpx.USE_CLIENT_DEFAULT
        if ctx is not None and (remaining := ctx.remaining()) is not None:
            timeout = httpx.Timeout(remaining)

        return self._http.build_request(
            method.upper(),
            f"{self.config.base_url}{endpoint}",
            params=encode_query(query),
            content=content,
            headers=merged,
            timeout=timeout,
        )

    # Execution

    def send(
        self,
        request: httpx.Request,
        target: type[Any] | None = None,
        *,
        ctx: RequestContext | None = None,
    ) -> KongResponse:
        """Execute a request and decode or classify the response.

        Args:
            request: Request from :meth:`build_request`.
            target: What to decode a successful body into. A pydantic model
                class is validated, ``bytes`` returns the raw body, any other
                type returns the decoded JSON, and None discards the body.
            ctx: Request context checked before and after the round trip.

        Returns:
            The response with the decoded body in ``data``.

        Raises:
            KongConnectionError: If no response was received.
            KongCancelledError: If the context was cancelled or timed out.
            KongAPIError: For non-2xx statuses (see subclasses).
            KongDecodeError: If a successful body cannot be decoded.
        """
        endpoint = request.url.path
        log = logger.bind(method=request.method, endpoint=endpoint)

        if ctx is not None:
            ctx.check(endpoint)

        if self.config.debug:
            log.debug(
                "kong_request_dump",
                url=str(request.url),
                headers=self._safe_headers(request.headers),
                body=redact_body(request.content),
            )

        try:
            log.debug("kong_request")
            response = self._http.send(request)
        except httpx.TimeoutException as e:
            if ctx is not None and ctx.expired():
                log.warning("kong_request_deadline_exceeded")
                raise KongCancelledError("Request deadline exceeded", endpoint=endpoint) from e
            log.error("kong_request_timeout", error=str(e))
            raise KongConnectionError(
                message=f"Kong request timed out: {e}",
                endpoint=endpoint,
                original_error=e,
            ) from e
        except httpx.TransportError as e:
            log.error("kong_connection_error", error=str(e))
            raise KongConnectionError(
                message=f"Failed to connect to Kong: {e}",
                endpoint=endpoint,
                original_error=e,
            ) from e
        finally:
            if self.config.cookie_jar_disabled:
                self._http.cookies.clear()

        log.debug("kong_response", status=response.status_code)
        if self.config.debug:
            log.debug(
                "kong_response_dump",
                status=response.status_code,
                headers=self._safe_headers(response.headers),
                body=redact_body(response.content),
            )

        if ctx is not None:
            ctx.check(endpoint)

        self._raise_for_status(response, endpoint)
        return KongResponse(
            status_code=response.status_code,
            headers=response.headers,
            content=response.content,
            data=self._decode(response, target, endpoint),
        )

    def request(
        self,
        method: str,
        path: str,
        *,
        query: Mapping[str, Any] | BaseModel | None = None,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
        target: type[Any] | None = dict,
        ctx: RequestContext | None = None,
    ) -> KongResponse:
        """Build and send a request in one step.

        See :meth:`build_request` and :meth:`send` for the arguments.
        """
        request = self.build_request(
            method, path, query=query, body=body, headers=headers, ctx=ctx
        )
        return self.send(request, target, ctx=ctx)

    def _safe_headers(self, headers: httpx.Headers) -> dict[str, str]:
        secret = _SECRET_HEADERS | {self.config.auth.header_name.lower()}
        return {k: REDACTED if k.lower() in secret else v for k, v in headers.items()}

    @staticmethod
    def _decode(response: httpx.Response, target: type[Any] | None, endpoint: str) -> Any:
        if target is None:
            return None
        if target is bytes:
            return response.content
        if not response.content:
            return None
        try:
            payload = response.json()
        except ValueError as e:
            raise KongDecodeError(
                message=f"Failed to decode Kong response: {e}",
                status_code=response.status_code,
                endpoint=endpoint,
                raw_body=response.content,
            ) from e
        if isinstance(target, type) and issubclass(target, BaseModel):
            try:
                return target.model_validate(payload)
            except ValidationError as e:
                raise KongDecodeError(
                    message=f"Unexpected Kong response shape: {e.error_count()} error(s)",
                    status_code=response.status_code,
                    response_body=payload,
                    endpoint=endpoint,
                    raw_body=response.content,
                ) from e
        return payload

    @staticmethod
    def _raise_for_status(response: httpx.Response, endpoint: str) -> None:
        """Raise the exception matching a non-2xx response.

        Raises:
            KongValidationError: 400.
            KongAuthError: 401.
            KongForbiddenError: 403.
            KongNotFoundError: 404.
            KongDBLessWriteError: 405 from a DB-less node.
            KongConflictError: 409.
            KongRateLimitError: 429.
            KongServerError: 5xx.
            KongAPIError: Any other non-2xx status.
        """
        if response.is_success:
            return

        status = response.status_code
        raw = response.content
        body: Any = None
        if raw:
            try:
                body = response.json()
            except ValueError:
                body = None

        message = response.reason_phrase or f"HTTP {status}"
        details: Any = None
        if isinstance(body, dict):
            if isinstance(body.get("message"), str) and body["message"]:
                message = body["message"]
            details = body.get("details")
        common: dict[str, Any] = {
            "response_body": body,
            "endpoint": endpoint,
            "raw_body": raw,
        }

        if status == 400:
            fields = body.get("fields") if isinstance(body, dict) else None
            raise KongValidationError(
                message=message,
                validation_errors=fields if isinstance(fields, dict) else None,
                details=details,
                **common,
            )
        if status == 401:
            raise KongAuthError(message=message, details=details, **common)
        if status == 403:
            raise KongForbiddenError(message=message, details=details, **common)
        if status == 404:
            raise KongNotFoundError(message=message, details=details, **common)
        if status == 405 and any(s in message.lower() for s in _DBLESS_MARKERS):
            raise KongDBLessWriteError(message=message, **common)
        if status == 409:
            raise KongConflictError(message=message, details=details, **common)
        if status == 429:
            retry_after: int | None = None
            header = response.headers.get("Retry-After")
            if header and header.strip().isdigit():
                retry_after = int(header.strip())
            if details is None and retry_after is not None:
                details = {"retry_after": retry_after}
            raise KongRateLimitError(
                message=message, retry_after=retry_after, details=details, **common
            )
        if status >= 500:
            raise KongServerError(message=message, status_code=status, details=details, **common)
        raise KongAPIError(message=message, status_code=status, details=details, **common)

    # Verb helpers returning decoded JSON objects

    def get(
        self,
        endpoint: str,
        params: Mapping[str, Any] | None = None,
        *,
        ctx: RequestContext | None = None,
    ) -> dict[str, Any]:
        """GET request to Kong Admin API.

        Args:
            endpoint: API endpoint (e.g., "services", "routes/my-route").
            params: Query parameters.
            ctx: Optional request context.

        Returns:
            Parsed JSON response body.
        """
        data = self.request("GET", endpoint, query=params, ctx=ctx).data
        return data if data is not None else {}

    def post(
        self,
        endpoint: str,
        json: Any = None,
        params: Mapping[str, Any] | None = None,
        *,
        ctx: RequestContext | None = None,
    ) -> dict[str, Any]:
        """POST request to Kong Admin API.

        Args:
            endpoint: API endpoint.
            json: Request body.
            params: Query parameters.
            ctx: Optional request context.

        Returns:
            Parsed JSON response body (created resource).
        """
        data = self.request("POST", endpoint, query=params, body=json, ctx=ctx).data
        return data if data is not None else {}

    def put(
        self,
        endpoint: str,
        json: Any = None,
        params: Mapping[str, Any] | None = None,
        *,
        ctx: RequestContext | None = None,
    ) -> dict[str, Any]:
        """PUT request to Kong Admin API (create-or-replace)."""
        data = self.request("PUT", endpoint, query=params, body=json, ctx=ctx).data
        return data if data is not None else {}

    def patch(
        self,
        endpoint: str,
        json: Any = None,
        params: Mapping[str, Any] | None = None,
        *,
        ctx: RequestContext | None = None,
    ) -> dict[str, Any]:
        """PATCH request to Kong Admin API (partial update)."""
        data = self.request("PATCH", endpoint, query=params, body=json, ctx=ctx).data
        return data if data is not None else {}

    def delete(
        self,
        endpoint: str,
        params: Mapping[str, Any] | None = None,
        *,
        ctx: RequestContext | None = None,
    ) -> None:
        """DELETE request to Kong Admin API."""
        self.request("DELETE", endpoint, query=params, target=None, ctx=ctx)

    def head(self, endpoint: str, *, ctx: RequestContext | None = None) -> KongResponse:
        """HEAD request to Kong Admin API."""
        return self.request("HEAD", endpoint, target=None, ctx=ctx)

    # Pagination

    def list(
        self,
        endpoint: str,
        opts: ListOptions | None = None,
        *,
        params: Mapping[str, Any] | None = None,
        ctx: RequestContext | None = None,
    ) -> tuple[builtins.list[dict[str, Any]], ListOptions | None]:
        """Fetch one page of a collection.

        Args:
            endpoint: Collection path, e.g. "consumers".
            opts: Page size, cursor and tag filter; None means defaults.
            params: Extra query parameters (e.g. ``custom_id``).
            ctx: Optional request context.

        Returns:
            Tuple of (raw entity documents in server order, options for the
            next page). The next options are None on the last page and
            otherwise carry the input size and tag filter.
        """
        opts = opts or ListOptions()
        query: dict[str, Any] = dict(params or {})
        query.update(opts.to_query())
        response = self.request("GET", endpoint, query=query, target=PaginatedResponse, ctx=ctx)
        page: PaginatedResponse = response.data or PaginatedResponse()
        return page.data, opts.next_page(page.offset)

    def list_all(
        self,
        endpoint: str,
        opts: ListOptions | None = None,
        *,
        tolerate_not_found: bool = False,
        params: Mapping[str, Any] | None = None,
        ctx: RequestContext | None = None,
    ) -> builtins.list[dict[str, Any]]:
        """Walk every page of a collection.

        Args:
            endpoint: Collection path.
            opts: Starting options; None pages with ``LIST_ALL_PAGE_SIZE``.
            tolerate_not_found: Treat a 404 as the end of the collection and
                return what was collected so far (for endpoints that only
                exist when a feature or plugin is enabled).
            params: Extra query parameters sent with every page.
            ctx: Optional request context, checked before each page.

        Returns:
            All raw entity documents in server order.
        """
        page_opts: ListOptions | None = opts or ListOptions(size=LIST_ALL_PAGE_SIZE)
        log = logger.bind(endpoint=endpoint)
        items: builtins.list[dict[str, Any]] = []
        pages = 0
        while page_opts is not None:
            if ctx is not None:
                ctx.check(endpoint)
            try:
                page, page_opts = self.list(endpoint, page_opts, params=params, ctx=ctx)
            except KongNotFoundError:
                if not tolerate_not_found:
                    raise
                log.debug("list_all_not_found_tolerated", collected=len(items))
                break
            items.extend(page)
            pages += 1
        log.debug("listed_all", count=len(items), pages=pages)
        return items

    # Node-level endpoints

    def root(self, *, ctx: RequestContext | None = None) -> dict[str, Any]:
        """Get Kong node information (``GET /``).

        With a workspace bound, ``/<workspace>/kong`` is used since the bare
        root is not workspace aware.
        """
        return self.get("/kong" if self.config.workspace else "/", ctx=ctx)

    def status(self, *, ctx: RequestContext | None = None) -> dict[str, Any]:
        """Get Kong node status, including database reachability."""
        return self.get("status", ctx=ctx)

    def config_dump(self, *, ctx: RequestContext | None = None) -> str:
        """Return the declarative configuration of a DB-less node (``GET /config``)."""
        body = self.get("config", ctx=ctx)
        config = body.get("config")
        if not isinstance(config, str):
            raise KongDecodeError(
                message="Kong /config response carries no 'config' string",
                status_code=200,
                response_body=body,
                endpoint=self.resolve_path("config"),
            )
        return config

    def reload_declarative_config(
        self,
        config: Mapping[str, Any] | str | bytes,
        *,
        check_hash: bool = False,
        flatten_errors: bool = False,
        ctx: RequestContext | None = None,
    ) -> dict[str, Any]:
        """Load a declarative configuration into a DB-less node (``POST /config``).

        Args:
            config: Declarative config as a mapping or pre-encoded JSON/YAML text.
            check_hash: Skip the reload when the config hash is unchanged.
            flatten_errors: Ask Kong for a flat list of entity errors.
            ctx: Optional request context.

        Returns:
            Kong's response body.
        """
        params: dict[str, Any] = {}
        if check_hash:
            params["check_hash"] = 1
        if flatten_errors:
            params["flatten_errors"] = 1
        return self.post("config", json=config, params=params or None, ctx=ctx)

    def check_connection(self) -> bool:
        """Check if connection to Kong Admin API is working.

        Returns:
            True if the status endpoint answered, False otherwise.
        """
        try:
            self.status()
            return True
        except KongAPIError as e:
            logger.debug("Kong connection check failed", error=str(e))
            return False

    def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http:
            self._http.close()
        logger.debug("Kong client closed")

    def __enter__(self) -> KongAdminClient:
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

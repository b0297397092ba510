"""Unit tests for the Kong Admin API transport core."""

from __future__ import annotations

import json
from collections.abc import Generator

import httpx
import pytest
import respx
from pydantic import BaseModel

from kong_admin.client import KongAdminClient, encode_body, encode_query, redact_body
from kong_admin.config import KongAuthConfig, KongClientConfig
from kong_admin.context import RequestContext
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
from kong_admin.listing import ListOptions
from kong_admin.models import BasicAuth


@pytest.fixture
def ws_client(base_url: str, kong_mock: respx.MockRouter) -> Generator[KongAdminClient]:
    """Client scoped to the 'team-a' workspace."""
    config = KongClientConfig(base_url=base_url, workspace="team-a")
    with KongAdminClient(config) as kong_client:
        yield kong_client


class TestQueryAndBodyEncoding:
    """Tests for the request encoding helpers."""

    @pytest.mark.unit
    def test_encode_query(self) -> None:
        """Booleans, lists and None values should follow Kong's conventions."""
        pairs = encode_query({"enabled": True, "skip": False, "tags": ["a", "b"], "gone": None})

        assert pairs == [("enabled", "true"), ("skip", "false"), ("tags", "a"), ("tags", "b")]

    @pytest.mark.unit
    def test_encode_query_none(self) -> None:
        """No query means no query string."""
        assert encode_query(None) is None

    @pytest.mark.unit
    def test_encode_query_from_list_options(self) -> None:
        """ListOptions should be encoded through their own query form."""
        pairs = encode_query(ListOptions(size=2, tags=["x", "y"]))

        assert pairs == [("size", "2"), ("tags", "x/y")]

    @pytest.mark.unit
    def test_encode_body_model_skips_unset(self) -> None:
        """Pydantic bodies should not send unset fields."""

        class Body(BaseModel):
            name: str
            host: str | None = None

        assert json.loads(encode_body(Body(name="svc"))) == {"name": "svc"}

    @pytest.mark.unit
    def test_encode_body_passthrough(self) -> None:
        """Pre-encoded bodies should be sent as-is."""
        assert encode_body(b'{"a":1}') == b'{"a":1}'
        assert encode_body('{"a":1}') == b'{"a":1}'

    @pytest.mark.unit
    def test_encode_body_rejects_non_json(self) -> None:
        """Unserializable bodies should fail before any request."""
        with pytest.raises(KongBadRequestError):
            encode_body({"x": object()})

    @pytest.mark.unit
    def test_redact_body(self) -> None:
        """Secret fields should be masked at any depth."""
        body = json.dumps({"username": "u", "password": "p", "nested": [{"key": "k"}]}).encode()

        assert redact_body(body) == {
            "username": "u",
            "password": "[REDACTED]",
            "nested": [{"key": "[REDACTED]"}],
        }


class TestRequestConstruction:
    """Tests for build_request."""

    @pytest.mark.unit
    def test_workspace_prefix_applied_once(self, ws_client: KongAdminClient) -> None:
        """The workspace should prefix the path exactly once."""
        request = ws_client.build_request("GET", "/services")

        assert request.url.path == "/team-a/services"
        assert ws_client.resolve_path("services") == "/team-a/services"

    @pytest.mark.unit
    def test_no_workspace(self, client: KongAdminClient, base_url: str) -> None:
        """Without a workspace the path should be used as given."""
        request = client.build_request("get", "services", query={"size": 10})

        assert request.method == "GET"
        assert str(request.url) == f"{base_url}/services?size=10"

    @pytest.mark.unit
    def test_empty_path_rejected(self, client: KongAdminClient) -> None:
        """An empty path should be a client-side error."""
        with pytest.raises(KongBadRequestError):
            client.build_request("GET", "")

    @pytest.mark.unit
    def test_default_headers(self, client: KongAdminClient) -> None:
        """Accept and User-Agent should always be sent."""
        request = client.build_request("GET", "services")

        assert request.headers["Accept"] == "application/json"
        assert request.headers["User-Agent"].startswith("kong-admin-client/")
        assert "Content-Type" not in request.headers

    @pytest.mark.unit
    def test_body_sets_content_type(self, client: KongAdminClient) -> None:
        """A JSON body should be labelled as such."""
        request = client.build_request("POST", "services", body={"name": "svc"})

        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.content) == {"name": "svc"}

    @pytest.mark.unit
    def test_auth_and_constant_headers(self, base_url: str, kong_mock: respx.MockRouter) -> None:
        """Token and constant headers should be attached; per-call headers win."""
        config = KongClientConfig(
            base_url=base_url,
            auth=KongAuthConfig.from_token("s3cret"),
            headers={"X-Team": "platform", "X-Trace": "constant"},
        )
        with KongAdminClient(config) as kong_client:
            request = kong_client.build_request(
                "GET", "services", headers={"X-Trace": "per-call"}
            )

        assert request.headers["Kong-Admin-Token"] == "s3cret"
        assert request.headers["X-Team"] == "platform"
        assert request.headers["X-Trace"] == "per-call"

    @pytest.mark.unit
    def test_context_deadline_bounds_timeout(self, client: KongAdminClient) -> None:
        """The remaining context time should become the request timeout."""
        request = client.build_request("GET", "services", ctx=RequestContext(timeout=5))

        assert 0 < request.extensions["timeout"]["read"] <= 5


class TestWorkspaceScoping:
    """Tests for the workspace prefix on requests sent by managers."""

    @pytest.mark.unit
    def test_list_all_pages_keep_single_prefix(
        self, ws_client: KongAdminClient, kong_mock: respx.MockRouter
    ) -> None:
        """Every page request should carry the workspace prefix once."""
        route = kong_mock.get("/team-a/services").mock(
            side_effect=[
                httpx.Response(200, json={"data": [{"name": "a"}], "offset": "p2"}),
                httpx.Response(200, json={"data": [{"name": "b"}], "next": None}),
            ]
        )

        services = ws_client.services.list_all(ListOptions(size=1))

        assert [s.name for s in services] == ["a", "b"]
        assert route.call_count == 2
        paths = [call.request.url.path for call in route.calls]
        assert paths == ["/team-a/services", "/team-a/services"]
        assert route.calls[1].request.url.params["offset"] == "p2"

    @pytest.mark.unit
    def test_nested_credential_path_keeps_single_prefix(
        self, ws_client: KongAdminClient, kong_mock: respx.MockRouter
    ) -> None:
        """Credential requests nested under a consumer should be prefixed once."""
        route = kong_mock.post("/team-a/consumers/c/basic-auth").mock(
            return_value=httpx.Response(201, json={"id": "b-1", "username": "u"})
        )

        created = ws_client.basic_auths.create("c", BasicAuth(username="u", password="p"))

        assert created.id == "b-1"
        assert route.calls.last.request.url.path == "/team-a/consumers/c/basic-auth"


class TestQueryValues:
    """Tests for values sent in the query string."""

    @pytest.mark.unit
    def test_custom_id_with_slash_is_encoded(
        self, client: KongAdminClient, kong_mock: respx.MockRouter
    ) -> None:
        """A custom_id containing a slash is a valid query value."""
        route = kong_mock.get("/consumers").mock(
            return_value=httpx.Response(
                200, json={"data": [{"id": "c-1", "custom_id": "a/b"}], "next": None}
            )
        )

        consumer = client.consumers.get_by_custom_id("a/b")

        assert consumer.id == "c-1"
        request = route.calls.last.request
        assert request.url.query == b"custom_id=a%2Fb"
        assert request.url.params["custom_id"] == "a/b"


class TestResponseHandling:
    """Tests for send/request and response decoding."""

    @pytest.mark.unit
    def test_get_returns_json(self, client: KongAdminClient, kong_mock: respx.MockRouter) -> None:
        """GET should return the decoded body."""
        kong_mock.get("/services/svc").mock(
            return_value=httpx.Response(200, json={"id": "1", "name": "svc"})
        )

        assert client.get("services/svc") == {"id": "1", "name": "svc"}

    @pytest.mark.unit
    def test_request_exposes_status(
        self, client: KongAdminClient, kong_mock: respx.MockRouter
    ) -> None:
        """Callers should be able to tell 200 from 201."""
        kong_mock.post("/services").mock(return_value=httpx.Response(201, json={"id": "1"}))

        response = client.request("POST", "services", body={"name": "svc"})

        assert response.status_code == 201
        assert response.data == {"id": "1"}

    @pytest.mark.unit
    def test_target_bytes(self, client: KongAdminClient, kong_mock: respx.MockRouter) -> None:
        """target=bytes should return the raw body."""
        kong_mock.get("/raw").mock(return_value=httpx.Response(200, content=b'{"a": 1}'))

        assert client.request("GET", "raw", target=bytes).data == b'{"a": 1}'

    @pytest.mark.unit
    def test_target_model(self, client: KongAdminClient, kong_mock: respx.MockRouter) -> None:
        """A model target should be validated."""

        class Node(BaseModel):
            version: str

        kong_mock.get("/").mock(return_value=httpx.Response(200, json={"version": "3.4.1"}))

        assert client.request("GET", "/", target=Node).data == Node(version="3.4.1")

    @pytest.mark.unit
    def test_target_none_discards_body(
        self, client: KongAdminClient, kong_mock: respx.MockRouter
    ) -> None:
        """target=None should not decode anything."""
        kong_mock.get("/status").mock(return_value=httpx.Response(200, content=b"not json"))

        assert client.request("GET", "status", target=None).data is None

    @pytest.mark.unit
    def test_delete_no_content(self, client: KongAdminClient, kong_mock: respx.MockRouter) -> None:
        """DELETE should accept an empty 204."""
        route = kong_mock.delete("/services/svc").mock(return_value=httpx.Response(204))

        assert client.delete("services/svc") is None
        assert route.called

    @pytest.mark.unit
    def test_invalid_json_raises_decode_error(
        self, client: KongAdminClient, kong_mock: respx.MockRouter
    ) -> None:
        """A success status with an undecodable body should be a decode error."""
        kong_mock.get("/services").mock(return_value=httpx.Response(200, content=b"<html>"))

        with pytest.raises(KongDecodeError) as exc_info:
            client.get("services")

        assert exc_info.value.raw_body == b"<html>"
        assert exc_info.value.status_code == 200


class TestErrorMapping:
    """Non-2xx responses should map onto the exception taxonomy."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("status", "body", "error_class"),
        [
            (401, {"message": "Invalid credentials"}, KongAuthError),
            (403, {"message": "not allowed"}, KongForbiddenError),
            (404, {"message": "Not found"}, KongNotFoundError),
            (405, {"message": "Method not allowed"}, KongAPIError),
            (409, {"message": "UNIQUE violation detected"}, KongConflictError),
            (500, {"message": "An unexpected error occurred"}, KongServerError),
            (502, {"message": "bad gateway"}, KongServerError),
            (418, {"message": "teapot"}, KongAPIError),
        ],
    )
    def test_status_mapping(
        self,
        client: KongAdminClient,
        kong_mock: respx.MockRouter,
        status: int,
        body: dict[str, str],
        error_class: type[KongAPIError],
    ) -> None:
        """Each status should raise its exception with Kong's message."""
        kong_mock.get("/services").mock(return_value=httpx.Response(status, json=body))

        with pytest.raises(error_class) as exc_info:
            client.get("services")

        assert exc_info.value.status_code == status
        assert exc_info.value.message == body["message"]
        assert exc_info.value.endpoint == "/services"
        assert exc_info.value.response_body == body

    @pytest.mark.unit
    def test_validation_error_fields(
        self, client: KongAdminClient, kong_mock: respx.MockRouter
    ) -> None:
        """A 400 should expose Kong's field errors."""
        kong_mock.post("/services").mock(
            return_value=httpx.Response(
                400,
                json={
                    "message": "schema violation (host: required field missing)",
                    "fields": {"host": "required field missing"},
                },
            )
        )

        with pytest.raises(KongValidationError) as exc_info:
            client.post("services", json={"name": "svc"})

        assert exc_info.value.validation_errors == {"host": "required field missing"}
        assert str(exc_info.value).startswith('HTTP status 400 (message: "schema violation')

    @pytest.mark.unit
    def test_dbless_write_error(self, client: KongAdminClient, kong_mock: respx.MockRouter) -> None:
        """A 405 from a DB-less node should be recognised."""
        kong_mock.post("/services").mock(
            return_value=httpx.Response(
                405,
                json={"message": "cannot create 'services' entities when not using a database"},
            )
        )

        with pytest.raises(KongDBLessWriteError):
            client.post("services", json={"name": "svc"})

    @pytest.mark.unit
    def test_rate_limit_retry_after(
        self, client: KongAdminClient, kong_mock: respx.MockRouter
    ) -> None:
        """Retry-After should be surfaced on rate limit errors."""
        kong_mock.get("/services").mock(
            return_value=httpx.Response(
                429, json={"message": "API rate limit exceeded"}, headers={"Retry-After": "7"}
            )
        )

        with pytest.raises(KongRateLimitError) as exc_info:
            client.get("services")

        assert exc_info.value.retry_after == 7
        assert exc_info.value.details == {"retry_after": 7}

    @pytest.mark.unit
    def test_message_falls_back_to_reason(
        self, client: KongAdminClient, kong_mock: respx.MockRouter
    ) -> None:
        """Without a JSON message the HTTP reason phrase should be used."""
        kong_mock.get("/services").mock(return_value=httpx.Response(503, content=b"down"))

        with pytest.raises(KongServerError) as exc_info:
            client.get("services")

        assert exc_info.value.message == "Service Unavailable"
        assert exc_info.value.response_body is None
        assert exc_info.value.raw_body == b"down"

    @pytest.mark.unit
    def test_connection_error(self, client: KongAdminClient, kong_mock: respx.MockRouter) -> None:
        """Transport failures should raise KongConnectionError."""
        kong_mock.get("/services").mock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(KongConnectionError) as exc_info:
            client.get("services")

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.original_error, httpx.ConnectError)

    @pytest.mark.unit
    def test_timeout_error(self, client: KongAdminClient, kong_mock: respx.MockRouter) -> None:
        """Timeouts without a context deadline are transport errors."""
        kong_mock.get("/services").mock(side_effect=httpx.ReadTimeout("slow"))

        with pytest.raises(KongConnectionError) as exc_info:
            client.get("services")

        assert not isinstance(exc_info.value, KongCancelledError)

    @pytest.mark.unit
    def test_cancelled_context_sends_nothing(
        self, client: KongAdminClient, kong_mock: respx.MockRouter
    ) -> None:
        """A cancelled context should fail before dispatch."""
        route = kong_mock.get("/services").mock(return_value=httpx.Response(200, json={}))
        ctx = RequestContext()
        ctx.cancel()

        with pytest.raises(KongCancelledError):
            client.get("services", ctx=ctx)

        assert not route.called


class TestNodeEndpoints:
    """Tests for node-level helpers."""

    @pytest.mark.unit
    def test_root_with_workspace(
        self, ws_client: KongAdminClient, kong_mock: respx.MockRouter
    ) -> None:
        """With a workspace the root document comes from /<ws>/kong."""
        kong_mock.get("/team-a/kong").mock(
            return_value=httpx.Response(200, json={"version": "3.4.1.0-enterprise-edition"})
        )

        assert ws_client.root()["version"] == "3.4.1.0-enterprise-edition"

    @pytest.mark.unit
    def test_root_without_workspace(
        self, client: KongAdminClient, kong_mock: respx.MockRouter
    ) -> None:
        """Without a workspace the root document comes from /."""
        kong_mock.get("/").mock(return_value=httpx.Response(200, json={"version": "3.4.1"}))

        assert client.root()["version"] == "3.4.1"

    @pytest.mark.unit
    def test_config_dump(self, client: KongAdminClient, kong_mock: respx.MockRouter) -> None:
        """config_dump should return the declarative config string."""
        kong_mock.get("/config").mock(
            return_value=httpx.Response(200, json={"config": "_format_version: '3.0'\n"})
        )

        assert client.config_dump() == "_format_version: '3.0'\n"

    @pytest.mark.unit
    def test_reload_declarative_config(
        self, client: KongAdminClient, kong_mock: respx.MockRouter
    ) -> None:
        """Flags should be sent as query parameters."""
        route = kong_mock.post("/config").mock(return_value=httpx.Response(201, json={}))

        client.reload_declarative_config(
            {"_format_version": "3.0"}, check_hash=True, flatten_errors=True
        )

        request = route.calls.last.request
        assert request.url.params["check_hash"] == "1"
        assert request.url.params["flatten_errors"] == "1"
        assert json.loads(request.content) == {"_format_version": "3.0"}

    @pytest.mark.unit
    def test_check_connection(self, client: KongAdminClient, kong_mock: respx.MockRouter) -> None:
        """check_connection should report failures as False."""
        kong_mock.get("/status").mock(side_effect=httpx.ConnectError("refused"))

        assert client.check_connection() is False


class TestClientLifecycle:
    """Tests for client ownership of the HTTP transport."""

    @pytest.mark.unit
    def test_external_http_client_not_closed(self) -> None:
        """A caller-supplied httpx client should stay open."""
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"data": []}))
        http_client = httpx.Client(transport=transport)

        with KongAdminClient(
            KongClientConfig(base_url="http://kong"), http_client=http_client
        ) as kong_client:
            assert kong_client.get("services") == {"data": []}

        assert not http_client.is_closed
        http_client.close()

    @pytest.mark.unit
    def test_managers_attached(self, client: KongAdminClient) -> None:
        """Every resource manager should be reachable from the client."""
        assert client.services.endpoint == "services"
        assert client.routes.endpoint == "routes"
        assert client.basic_auths.kind == "basic-auth"
        assert client.credentials is not None

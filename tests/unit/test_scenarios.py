"""End-to-end scenarios against an in-memory fake Kong gateway.

The fake implements just enough of the Admin API for the scenarios:
services, routes nested under services, consumers with tag filtering and
cursor pagination, and basic-auth credentials with password hashing.
"""

from __future__ import annotations

import hashlib
import json
import uuid
from typing import Any

import httpx
import pytest
import respx

from kong_admin import (
    BasicAuth,
    Consumer,
    KongAdminClient,
    KongNotFoundError,
    ListOptions,
    Route,
    Service,
    fill_id,
)


class FakeKong:
    """In-memory Admin API keyed by collection name."""

    def __init__(self) -> None:
        self.collections: dict[str, list[dict[str, Any]]] = {
            "services": [],
            "routes": [],
            "consumers": [],
            "basic-auths": [],
        }
        self.requests: list[httpx.Request] = []

    @staticmethod
    def _json(status: int, body: Any) -> httpx.Response:
        return httpx.Response(status, json=body)

    @staticmethod
    def _not_found() -> httpx.Response:
        return httpx.Response(404, json={"message": "Not found"})

    def _find(self, collection: str, key: str, *natural: str) -> dict[str, Any] | None:
        for item in self.collections[collection]:
            if item["id"] == key or any(item.get(field) == key for field in natural):
                return item
        return None

    def _insert(
        self, collection: str, body: dict[str, Any], entity_id: str | None = None
    ) -> dict[str, Any]:
        item = dict(body)
        item["id"] = entity_id or item.get("id") or str(uuid.uuid4())
        item.setdefault("tags", None)
        self.collections[collection].append(item)
        return item

    def _page(self, collection: str, params: httpx.QueryParams) -> httpx.Response:
        items = self.collections[collection]
        if "custom_id" in params:
            items = [i for i in items if i.get("custom_id") == params["custom_id"]]
        if "tags" in params:
            raw = params["tags"]
            if "," in raw:
                wanted = raw.split(",")
                items = [i for i in items if all(t in (i.get("tags") or []) for t in wanted)]
            else:
                wanted = raw.split("/")
                items = [i for i in items if any(t in (i.get("tags") or []) for t in wanted)]
        size = int(params.get("size", 100))
        start = int(params.get("offset", 0))
        page = items[start : start + size]
        body: dict[str, Any] = {"data": page, "next": None}
        if start + size < len(items):
            body["offset"] = str(start + size)
            body["next"] = f"/{collection}?offset={start + size}"
        return self._json(200, body)

    @staticmethod
    def _hash(password: str, consumer_id: str) -> str:
        return hashlib.sha1((password + consumer_id).encode()).hexdigest()

    def _basic_auth(
        self, method: str, consumer: dict[str, Any], rest: list[str], request: httpx.Request
    ) -> httpx.Response:
        body = json.loads(request.content or b"{}")
        skip_hash = request.url.params.get("skip_hash") == "true"
        if body.get("password") and not skip_hash:
            body["password"] = self._hash(body["password"], consumer["id"])
        if method == "POST" and not rest:
            body["consumer"] = {"id": consumer["id"]}
            return self._json(201, self._insert("basic-auths", body))
        if method == "PATCH" and len(rest) == 1:
            cred = self._find("basic-auths", rest[0], "username")
            if cred is None:
                return self._not_found()
            cred.update(body)
            return self._json(200, cred)
        return httpx.Response(405, json={"message": "Method not allowed"})

    def handle(self, request: httpx.Request) -> httpx.Response:
        """Dispatch a request to the matching collection."""
        self.requests.append(request)
        method = request.method
        segments = [s for s in request.url.path.split("/") if s]
        collection, rest = segments[0], segments[1:]
        if collection not in self.collections:
            return self._not_found()

        if collection == "consumers" and len(rest) >= 2 and rest[1] == "basic-auth":
            consumer = self._find("consumers", rest[0], "username")
            if consumer is None:
                return self._not_found()
            return self._basic_auth(method, consumer, rest[2:], request)

        if collection == "services" and len(rest) == 2 and rest[1] == "routes":
            service = self._find("services", rest[0], "name")
            if service is None:
                return self._not_found()
            body = json.loads(request.content)
            body["service"] = {"id": service["id"]}
            return self._json(201, self._insert("routes", body))

        if not rest:
            if method == "GET":
                return self._page(collection, request.url.params)
            if method == "POST":
                return self._json(201, self._insert(collection, json.loads(request.content)))
        elif len(rest) == 1:
            if method == "GET":
                item = self._find(collection, rest[0], "name", "username")
                return self._json(200, item) if item else self._not_found()
            if method == "PUT":
                body = json.loads(request.content)
                return self._json(200, self._insert(collection, body, entity_id=rest[0]))
        return httpx.Response(405, json={"message": "Method not allowed"})


@pytest.fixture
def fake_kong(kong_mock: respx.MockRouter) -> FakeKong:
    """Route every Admin API request to an in-memory gateway."""
    fake = FakeKong()
    kong_mock.route().mock(side_effect=fake.handle)
    return fake


class TestServiceScenarios:
    """Service and route scenarios."""

    @pytest.mark.unit
    def test_create_service_then_route(self, client: KongAdminClient, fake_kong: FakeKong) -> None:
        """A route created in a service should reference that service."""
        service = client.services.create(Service(name="foo", host="u", port=42, path="/p"))

        assert service.id

        route = client.routes.create_in_service(service.id, Route(paths=["/r"]))

        assert route.service is not None
        assert route.service.id == service.id

    @pytest.mark.unit
    def test_deterministic_service_id(self, client: KongAdminClient, fake_kong: FakeKong) -> None:
        """A filled ID should be kept by creating with PUT."""
        service = fill_id(Service(name="some.service.name", host="u"))

        created = client.services.create(service)

        assert created.id == "d9bee1f8-db6e-5a37-9281-fd4aca16dc00"
        assert fake_kong.requests[-1].method == "PUT"
        assert fake_kong.requests[-1].url.path == "/services/d9bee1f8-db6e-5a37-9281-fd4aca16dc00"


class TestConsumerScenarios:
    """Consumer listing scenarios."""

    @pytest.mark.unit
    def test_list_pagination(self, client: KongAdminClient, fake_kong: FakeKong) -> None:
        """Pages of size one should walk every consumer."""
        for name in ("foo1", "foo2", "foo3"):
            client.consumers.create(Consumer(username=name))

        page, next_opts = client.consumers.list(ListOptions(size=1))
        assert len(page) == 1
        assert next_opts is not None

        usernames = [c.username for c in page]
        while next_opts is not None:
            page, next_opts = client.consumers.list(next_opts)
            usernames.extend(c.username for c in page)

        assert sorted(u or "" for u in usernames) == ["foo1", "foo2", "foo3"]

    @pytest.mark.unit
    def test_tags_and_or(self, client: KongAdminClient, fake_kong: FakeKong) -> None:
        """OR should match every consumer, AND only the exact pairs."""
        pairs = [
            ["t1", "t2"],
            ["t2", "t3"],
            ["t1", "t3"],
            ["t1", "t2"],
            ["t2", "t3"],
            ["t1", "t3"],
        ]
        for index, tags in enumerate(pairs):
            client.consumers.create(Consumer(username=f"user{index}", tags=tags))

        any_tag = client.consumers.list_all(ListOptions(tags=["t1", "t2"]))
        all_tags = client.consumers.list_all(ListOptions(tags=["t1", "t2"], match_all_tags=True))

        assert len(any_tag) == 6
        assert len(all_tags) == 2

    @pytest.mark.unit
    def test_list_all_walks_pages(self, client: KongAdminClient, fake_kong: FakeKong) -> None:
        """list_all should issue one request per page and keep server order."""
        for index in range(5):
            client.consumers.create(Consumer(username=f"c{index}"))
        fake_kong.requests.clear()

        consumers = client.consumers.list_all(ListOptions(size=2))

        assert [c.username for c in consumers] == ["c0", "c1", "c2", "c3", "c4"]
        assert len(fake_kong.requests) == 3


class TestCredentialScenarios:
    """Credential scenarios."""

    @pytest.mark.unit
    def test_create_then_update_skip_hash(
        self, client: KongAdminClient, fake_kong: FakeKong
    ) -> None:
        """Passwords are hashed unless skip_hash is set."""
        client.consumers.create(Consumer(username="foo"))

        cred = client.basic_auths.create("foo", BasicAuth(username="u", password="p"))

        assert cred.password != "p"

        cred.password = "p2"
        updated = client.basic_auths.update("foo", cred, skip_hash=True)

        assert updated.password == "p2"

    @pytest.mark.unit
    def test_not_found_tolerance(self, client: KongAdminClient, fake_kong: FakeKong) -> None:
        """A missing credential collection is empty only when tolerated."""
        assert client.mtls_auths.list_all() == []

        with pytest.raises(KongNotFoundError):
            client.list_all("mtls-auths")

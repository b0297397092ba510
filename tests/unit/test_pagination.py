"""Unit tests for the cursor pagination engine."""

from __future__ import annotations

import httpx
import pytest
import respx

from kong_admin.client import KongAdminClient
from kong_admin.context import RequestContext
from kong_admin.exceptions import KongCancelledError, KongNotFoundError
from kong_admin.listing import LIST_ALL_PAGE_SIZE, ListOptions


def _page(names: list[str], offset: str | None = None) -> httpx.Response:
    body: dict[str, object] = {"data": [{"name": n} for n in names], "next": None}
    if offset:
        body["offset"] = offset
    return httpx.Response(200, json=body)


class TestList:
    """Tests for single page listing."""

    @pytest.mark.unit
    def test_list_returns_next_options(
        self, client: KongAdminClient, kong_mock: respx.MockRouter
    ) -> None:
        """A page with an offset should yield options for the next page."""
        route = kong_mock.get("/consumers").mock(return_value=_page(["a"], offset="c2"))

        items, next_opts = client.list("consumers", ListOptions(size=1, tags=["t"]))

        assert items == [{"name": "a"}]
        assert next_opts == ListOptions(size=1, tags=["t"], offset="c2")
        params = route.calls.last.request.url.params
        assert params["size"] == "1"
        assert params["tags"] == "t"
        assert "offset" not in params

    @pytest.mark.unit
    def test_last_page(self, client: KongAdminClient, kong_mock: respx.MockRouter) -> None:
        """No offset means no next page."""
        kong_mock.get("/consumers").mock(return_value=_page(["a", "b"]))

        items, next_opts = client.list("consumers")

        assert len(items) == 2
        assert next_opts is None

    @pytest.mark.unit
    def test_empty_object_data(self, client: KongAdminClient, kong_mock: respx.MockRouter) -> None:
        """Kong's '{}' encoding of an empty page should mean no items."""
        kong_mock.get("/consumers").mock(return_value=httpx.Response(200, json={"data": {}}))

        items, next_opts = client.list("consumers")

        assert items == []
        assert next_opts is None

    @pytest.mark.unit
    def test_extra_params(self, client: KongAdminClient, kong_mock: respx.MockRouter) -> None:
        """Extra filters should be sent alongside the list options."""
        route = kong_mock.get("/consumers").mock(return_value=_page([]))

        client.list("consumers", params={"custom_id": "crm-1"})

        assert route.calls.last.request.url.params["custom_id"] == "crm-1"


class TestListAll:
    """Tests for list-all walks."""

    @pytest.mark.unit
    def test_walks_all_pages(self, client: KongAdminClient, kong_mock: respx.MockRouter) -> None:
        """Pages should be concatenated in server order."""
        route = kong_mock.get("/services").mock(
            side_effect=[_page(["a", "b"], offset="p2"), _page(["c"], offset="p3"), _page([])]
        )

        items = client.list_all("services")

        assert [i["name"] for i in items] == ["a", "b", "c"]
        assert route.call_count == 3
        first, second, third = (call.request.url.params for call in route.calls)
        assert first["size"] == str(LIST_ALL_PAGE_SIZE)
        assert "offset" not in first
        assert second["offset"] == "p2"
        assert third["offset"] == "p3"

    @pytest.mark.unit
    def test_keeps_caller_size(self, client: KongAdminClient, kong_mock: respx.MockRouter) -> None:
        """A caller-supplied page size should be used for every page."""
        route = kong_mock.get("/services").mock(
            side_effect=[_page(["a"], offset="p2"), _page(["b"])]
        )

        client.list_all("services", ListOptions(size=1))

        assert all(call.request.url.params["size"] == "1" for call in route.calls)

    @pytest.mark.unit
    def test_not_found_raises_by_default(
        self, client: KongAdminClient, kong_mock: respx.MockRouter
    ) -> None:
        """A 404 should propagate unless tolerated."""
        kong_mock.get("/key-auths").mock(return_value=httpx.Response(404, json={"message": "x"}))

        with pytest.raises(KongNotFoundError):
            client.list_all("key-auths")

    @pytest.mark.unit
    def test_not_found_tolerated(
        self, client: KongAdminClient, kong_mock: respx.MockRouter
    ) -> None:
        """A tolerated 404 should end the walk with what was collected."""
        kong_mock.get("/key-auths").mock(return_value=httpx.Response(404, json={"message": "x"}))

        assert client.list_all("key-auths", tolerate_not_found=True) == []

    @pytest.mark.unit
    def test_cancelled_between_pages(
        self, client: KongAdminClient, kong_mock: respx.MockRouter
    ) -> None:
        """Cancellation should be observed before the next page."""
        ctx = RequestContext()

        def first_page(request: httpx.Request) -> httpx.Response:
            ctx.cancel()
            return _page(["a"], offset="p2")

        route = kong_mock.get("/services").mock(side_effect=first_page)

        with pytest.raises(KongCancelledError):
            client.list_all("services", ctx=ctx)

        assert route.call_count == 1

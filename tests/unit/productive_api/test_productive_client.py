"""
Unit Tests for the Productive API Client

Uses httpx.MockTransport, so no request leaves the process.
"""

from __future__ import annotations

import json

import httpx
import pytest

from src.productive_api.client import (
    ProductiveApi,
    ProductiveApiError,
    build_document,
    build_query_params,
    extract_error_message,
)
from src.productive_api.config import ProductiveConfig


def _api(handler, **kwargs) -> ProductiveApi:
    return ProductiveApi(
        api_token="token-123",
        organization_id="42",
        base_url="https://api.test/api/v2",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


class TestBuildQueryParams:
    """Tests for list option encoding."""

    def test_pagination_sort_include_and_filters(self) -> None:
        params = build_query_params(
            page=2,
            per_page=50,
            sort="-date",
            include=["person", "service"],
            filter={"person_id": "7", "after": "2024-01-01"},
        )

        assert params == {
            "page[number]": "2",
            "page[size]": "50",
            "sort": "-date",
            "include": "person,service",
            "filter[person_id]": "7",
            "filter[after]": "2024-01-01",
        }

    def test_skips_empty_values(self) -> None:
        params = build_query_params(filter={"a": None, "b": "", "c": 0})

        assert params == {"filter[c]": "0"}

    def test_no_options(self) -> None:
        assert build_query_params() == {}


class TestBuildDocument:
    """Tests for JSON:API request documents."""

    def test_splits_attributes_and_relationships(self) -> None:
        document = build_document(
            "time_entries",
            {"time": 60, "date": "2024-01-15", "person_id": 500, "service_id": "9", "note": None},
        )

        data = document["data"]
        assert data["type"] == "time_entries"
        assert data["attributes"] == {"time": 60, "date": "2024-01-15"}
        assert data["relationships"] == {
            "person": {"data": {"type": "people", "id": "500"}},
            "service": {"data": {"type": "services", "id": "9"}},
        }
        assert "id" not in data

    def test_update_document_carries_id(self) -> None:
        document = build_document("tasks", {"title": "New"}, resource_id=12)

        assert document["data"]["id"] == "12"
        assert "relationships" not in document["data"]


class TestExtractErrorMessage:
    def test_uses_first_error_detail(self) -> None:
        response = httpx.Response(
            422, json={"errors": [{"detail": "time is invalid"}, {"detail": "other"}]}
        )
        assert extract_error_message(response) == "time is invalid"

    def test_falls_back_to_status(self) -> None:
        response = httpx.Response(500, text="boom")
        assert extract_error_message(response) == "API request failed: 500 Internal Server Error"


class TestProductiveApiConstruction:
    def test_missing_token_fails_fast(self) -> None:
        with pytest.raises(ProductiveApiError, match="API token not configured"):
            ProductiveApi(api_token=None, organization_id="42")

    def test_missing_org_fails_fast(self) -> None:
        with pytest.raises(ProductiveApiError, match="Organization ID not configured"):
            ProductiveApi(api_token="t", organization_id="")

    def test_from_config(self) -> None:
        config = ProductiveConfig(api_token="t", org_id="99", base_url="https://x.test/")
        api = ProductiveApi.from_config(config)

        assert api.organization_id == "99"


class TestProductiveApiRequests:
    """Tests for request/response handling."""

    async def test_list_sends_headers_and_params(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={
                    "data": [{"id": 1, "type": "people", "attributes": {"first_name": "Jane"}}],
                    "meta": {"current_page": 1, "total_pages": 3, "total_count": 25},
                },
            )

        async with _api(handler) as api:
            response = await api.get_people(page=1, per_page=10, filter={"email": "j@x.io"})

        request = seen[0]
        assert request.url.path == "/api/v2/people"
        assert request.url.params["filter[email]"] == "j@x.io"
        assert request.url.params["page[size]"] == "10"
        assert request.headers["X-Auth-Token"] == "token-123"
        assert request.headers["X-Organization-Id"] == "42"
        assert request.headers["Accept"] == "application/vnd.api+json"

        assert response.items()[0].id == "1"
        assert response.meta.total_pages == 3

    async def test_bookings_listed_with_draft_filter(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"data": [{"id": 5, "type": "bookings"}]})

        async with _api(handler) as api:
            response = await api.get_bookings(filter={"person_id": "7", "with_draft": "true"})

        assert seen[0].url.path == "/api/v2/bookings"
        assert seen[0].url.params["filter[with_draft]"] == "true"
        assert response.items()[0].type == "bookings"

    async def test_create_posts_document(self) -> None:
        bodies: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            assert request.method == "POST"
            return httpx.Response(
                201, json={"data": {"id": "5", "type": "companies", "attributes": {"name": "Acme"}}}
            )

        async with _api(handler) as api:
            response = await api.create_company({"name": "Acme"})

        assert bodies[0] == {"data": {"type": "companies", "attributes": {"name": "Acme"}}}
        assert response.item().attr("name") == "Acme"

    async def test_update_patches_resource(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "PATCH"
            assert request.url.path == "/api/v2/tasks/12"
            body = json.loads(request.content)
            assert body["data"]["id"] == "12"
            return httpx.Response(200, json={"data": {"id": "12", "type": "tasks"}})

        async with _api(handler) as api:
            response = await api.update_task("12", {"title": "Renamed"})

        assert response.item().id == "12"

    async def test_delete_returns_none_on_204(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "DELETE"
            return httpx.Response(204)

        async with _api(handler) as api:
            assert await api.delete_time_entry("3") is None

    async def test_error_response_raises_api_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"errors": [{"detail": "Record not found"}]})

        async with _api(handler) as api:
            with pytest.raises(ProductiveApiError) as exc_info:
                await api.get_project("999")

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Record not found"
        assert exc_info.value.to_dict()["status_code"] == 404

    async def test_get_retries_transport_errors(self) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            if calls == 1:
                raise httpx.ConnectError("refused", request=request)
            return httpx.Response(200, json={"data": []})

        async with _api(handler, retry_max_attempts=2) as api:
            response = await api.get_services()

        assert calls == 2
        assert response.items() == []

    async def test_writes_are_not_retried(self) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            raise httpx.ConnectError("refused", request=request)

        async with _api(handler, retry_max_attempts=3) as api:
            with pytest.raises(httpx.ConnectError):
                await api.create_time_entry({"time": 60})

        assert calls == 1

    async def test_get_retries_unavailable_response(self) -> None:
        responses = [
            httpx.Response(503, headers={"Retry-After": "0"}, json={"errors": []}),
            httpx.Response(200, json={"data": []}),
        ]

        def handler(request: httpx.Request) -> httpx.Response:
            return responses.pop(0)

        async with _api(handler, retry_max_attempts=2) as api:
            response = await api.get_people()

        assert responses == []
        assert response.items() == []

    async def test_unavailable_reported_after_last_attempt(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503, headers={"Retry-After": "0"}, json={"errors": []})

        async with _api(handler, retry_max_attempts=2) as api:
            with pytest.raises(ProductiveApiError) as exc_info:
                await api.get_people()

        assert exc_info.value.status_code == 503

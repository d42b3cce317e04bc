"""
Productive API Client

Async JSON:API client for the Productive.io REST API.

Features:
- Retry with backoff: GET requests retried on transport errors and 502-504
- Tracing: one span per request
- Connection pooling: a single lazily-created httpx.AsyncClient
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from src.common.resilience import RetryConfig, retry_with_backoff
from src.common.telemetry import get_tracer
from src.productive_api.config import DEFAULT_BASE_URL, ProductiveConfig
from src.productive_api.models import ApiResponse

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

JSON_API_CONTENT_TYPE = "application/vnd.api+json"

# Foreign-key fields sent as JSON:API relationships: field -> (relationship, type)
RELATIONSHIP_FIELDS: dict[str, tuple[str, str]] = {
    "person_id": ("person", "people"),
    "service_id": ("service", "services"),
    "task_id": ("task", "tasks"),
    "company_id": ("company", "companies"),
    "project_id": ("project", "projects"),
    "task_list_id": ("task_list", "task_lists"),
    "assignee_id": ("assignee", "people"),
    "responsible_id": ("responsible", "people"),
    "workflow_status_id": ("workflow_status", "workflow_statuses"),
    "deal_status_id": ("deal_status", "deal_statuses"),
    "pipeline_id": ("pipeline", "pipelines"),
}


class ProductiveApiError(Exception):
    """Error returned by the Productive API or raised for an unusable response."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_text: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_text = response_text

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "ProductiveApiError",
            "message": self.message,
            "status_code": self.status_code,
        }


def build_query_params(
    *,
    page: int | None = None,
    per_page: int | None = None,
    sort: str | None = None,
    include: list[str] | None = None,
    filter: Mapping[str, Any] | None = None,
) -> dict[str, str]:
    """Encode list options as Productive query parameters."""
    params: dict[str, str] = {}
    if page is not None:
        params["page[number]"] = str(page)
    if per_page is not None:
        params["page[size]"] = str(per_page)
    if sort:
        params["sort"] = sort
    if include:
        params["include"] = ",".join(include)
    for key, value in (filter or {}).items():
        if value is None or value == "":
            continue
        params[f"filter[{key}]"] = str(value)
    return params


def build_document(
    resource_type: str,
    fields: Mapping[str, Any],
    resource_id: str | None = None,
) -> dict[str, Any]:
    """
    Build a JSON:API request document.

    Fields listed in RELATIONSHIP_FIELDS become relationships; everything
    else is an attribute. None values are omitted.
    """
    attributes: dict[str, Any] = {}
    relationships: dict[str, Any] = {}
    for key, value in fields.items():
        if value is None:
            continue
        if key in RELATIONSHIP_FIELDS:
            name, related_type = RELATIONSHIP_FIELDS[key]
            relationships[name] = {"data": {"type": related_type, "id": str(value)}}
        else:
            attributes[key] = value

    data: dict[str, Any] = {"type": resource_type, "attributes": attributes}
    if resource_id is not None:
        data["id"] = str(resource_id)
    if relationships:
        data["relationships"] = relationships
    return {"data": data}


def extract_error_message(response: httpx.Response) -> str:
    """First JSON:API error detail, or a generic status message."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        errors = body.get("errors")
        if isinstance(errors, list) and errors:
            first = errors[0]
            if isinstance(first, dict) and first.get("detail"):
                return str(first["detail"])
    return f"API request failed: {response.status_code} {response.reason_phrase}"


class ProductiveApi:
    """
    Client for the Productive.io REST API.

    One method per endpoint used by the executors. List methods accept
    page/per_page/filter/sort/include and return the parsed ApiResponse.
    """

    def __init__(
        self,
        api_token: str | None,
        organization_id: str | None,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 30.0,
        retry_max_attempts: int = 3,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the API client.

        Args:
            api_token: Productive API token
            organization_id: Organization the token belongs to
            base_url: Base URL of the API
            timeout_seconds: Timeout for API calls
            retry_max_attempts: Maximum attempts for GET requests
            transport: Optional httpx transport (tests use httpx.MockTransport)

        Raises:
            ProductiveApiError: If the token or organization id is missing
        """
        if not api_token:
            raise ProductiveApiError(
                "API token not configured. Set PRODUCTIVE_API_TOKEN or pass --token"
            )
        if not organization_id:
            raise ProductiveApiError(
                "Organization ID not configured. Set PRODUCTIVE_ORG_ID or pass --org-id"
            )

        self._api_token = api_token
        self._organization_id = str(organization_id)
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._transport = transport

        self._retry_config = RetryConfig(
            max_attempts=max(1, retry_max_attempts),
            base_delay=0.5,
            max_delay=5.0,
        )

        # HTTP client (created lazily)
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_config(
        cls,
        config: ProductiveConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> ProductiveApi:
        """Create a client from ProductiveConfig."""
        return cls(
            api_token=config.api_token,
            organization_id=config.org_id,
            base_url=config.base_url,
            timeout_seconds=config.timeout_seconds,
            retry_max_attempts=config.retry_max_attempts,
            transport=transport,
        )

    @property
    def organization_id(self) -> str:
        return self._organization_id

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            headers = {
                "Content-Type": JSON_API_CONTENT_TYPE,
                "Accept": JSON_API_CONTENT_TYPE,
                "X-Auth-Token": self._api_token,
                "X-Organization-Id": self._organization_id,
            }

            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=headers,
                timeout=httpx.Timeout(self._timeout_seconds),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> ProductiveApi:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def _send(
        self,
        method: str,
        path: str,
        params: dict[str, str] | None,
        json: dict[str, Any] | None,
    ) -> httpx.Response:
        client = await self._get_client()
        return await client.request(method, path, params=params, json=json)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        with tracer.start_as_current_span("productive.api.request") as span:
            span.set_attribute("http.method", method)
            span.set_attribute("productive.path", path)
            logger.debug(f"Productive API {method} {path} params={params}")

            if method == "GET":
                response = await retry_with_backoff(
                    self._send,
                    method,
                    path,
                    params,
                    json,
                    config=self._retry_config,
                )
            else:
                response = await self._send(method, path, params, json)

            span.set_attribute("http.status_code", response.status_code)

            if not response.is_success:
                message = extract_error_message(response)
                logger.warning(f"Productive API {method} {path} failed: {message}")
                raise ProductiveApiError(
                    message,
                    status_code=response.status_code,
                    response_text=response.text,
                )

            if response.status_code == 204 or not response.content:
                return None
            return response.json()

    async def _list(
        self,
        path: str,
        *,
        page: int | None = None,
        per_page: int | None = None,
        filter: Mapping[str, Any] | None = None,
        sort: str | None = None,
        include: list[str] | None = None,
    ) -> ApiResponse:
        params = build_query_params(
            page=page, per_page=per_page, sort=sort, include=include, filter=filter
        )
        body = await self._request("GET", path, params=params)
        return ApiResponse.model_validate(body or {})

    async def _get(
        self, path: str, resource_id: str, include: list[str] | None = None
    ) -> ApiResponse:
        params = build_query_params(include=include)
        body = await self._request("GET", f"{path}/{resource_id}", params=params)
        return ApiResponse.model_validate(body or {})

    async def _create(
        self, path: str, resource_type: str, fields: Mapping[str, Any]
    ) -> ApiResponse:
        body = await self._request("POST", path, json=build_document(resource_type, fields))
        return ApiResponse.model_validate(body or {})

    async def _update(
        self, path: str, resource_type: str, resource_id: str, fields: Mapping[str, Any]
    ) -> ApiResponse:
        document = build_document(resource_type, fields, resource_id=resource_id)
        body = await self._request("PATCH", f"{path}/{resource_id}", json=document)
        return ApiResponse.model_validate(body or {})

    # People

    async def get_people(self, **options: Any) -> ApiResponse:
        return await self._list("/people", **options)

    async def get_person(self, person_id: str, include: list[str] | None = None) -> ApiResponse:
        return await self._get("/people", person_id, include)

    # Companies

    async def get_companies(self, **options: Any) -> ApiResponse:
        return await self._list("/companies", **options)

    async def get_company(
        self, company_id: str, include: list[str] | None = None
    ) -> ApiResponse:
        return await self._get("/companies", company_id, include)

    async def create_company(self, fields: Mapping[str, Any]) -> ApiResponse:
        return await self._create("/companies", "companies", fields)

    async def update_company(self, company_id: str, fields: Mapping[str, Any]) -> ApiResponse:
        return await self._update("/companies", "companies", company_id, fields)

    # Projects

    async def get_projects(self, **options: Any) -> ApiResponse:
        return await self._list("/projects", **options)

    async def get_project(
        self, project_id: str, include: list[str] | None = None
    ) -> ApiResponse:
        return await self._get("/projects", project_id, include)

    # Services

    async def get_services(self, **options: Any) -> ApiResponse:
        return await self._list("/services", **options)

    # Deals

    async def get_deals(self, **options: Any) -> ApiResponse:
        return await self._list("/deals", **options)

    async def get_deal(self, deal_id: str, include: list[str] | None = None) -> ApiResponse:
        return await self._get("/deals", deal_id, include)

    async def create_deal(self, fields: Mapping[str, Any]) -> ApiResponse:
        return await self._create("/deals", "deals", fields)

    async def update_deal(self, deal_id: str, fields: Mapping[str, Any]) -> ApiResponse:
        return await self._update("/deals", "deals", deal_id, fields)

    # Tasks

    async def get_tasks(self, **options: Any) -> ApiResponse:
        return await self._list("/tasks", **options)

    async def get_task(self, task_id: str, include: list[str] | None = None) -> ApiResponse:
        return await self._get("/tasks", task_id, include)

    async def create_task(self, fields: Mapping[str, Any]) -> ApiResponse:
        return await self._create("/tasks", "tasks", fields)

    async def update_task(self, task_id: str, fields: Mapping[str, Any]) -> ApiResponse:
        return await self._update("/tasks", "tasks", task_id, fields)

    # Time entries

    async def get_time_entries(self, **options: Any) -> ApiResponse:
        return await self._list("/time_entries", **options)

    async def get_time_entry(
        self, entry_id: str, include: list[str] | None = None
    ) -> ApiResponse:
        return await self._get("/time_entries", entry_id, include)

    async def create_time_entry(self, fields: Mapping[str, Any]) -> ApiResponse:
        return await self._create("/time_entries", "time_entries", fields)

    async def update_time_entry(self, entry_id: str, fields: Mapping[str, Any]) -> ApiResponse:
        return await self._update("/time_entries", "time_entries", entry_id, fields)

    async def delete_time_entry(self, entry_id: str) -> None:
        await self._request("DELETE", f"/time_entries/{entry_id}")

    # Bookings

    async def get_bookings(self, **options: Any) -> ApiResponse:
        return await self._list("/bookings", **options)

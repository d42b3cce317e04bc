"""
MCP Tool Definitions and Handlers for Productive

Exposes a single consolidated `productive` tool. Arguments pick a resource
and an action; the remaining arguments are mapped onto the options of the
matching executor.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any, get_args, get_type_hints

from src.common.telemetry import get_tracer
from src.mcp_servers.productive.context import HandlerContext
from src.productive_api.client import ProductiveApi, ProductiveApiError
from src.productive_core.context import ExecutorContext, from_handler_context
from src.productive_core.executors import (
    CreateCompanyOptions,
    CreateDealOptions,
    CreateTaskOptions,
    CreateTimeEntryOptions,
    DeleteTimeEntryOptions,
    ExecutorResult,
    ExecutorValidationError,
    GetCompanyOptions,
    GetDealOptions,
    GetPersonOptions,
    GetProjectOptions,
    GetTaskOptions,
    GetTimeEntryOptions,
    ListBookingsOptions,
    ListCompaniesOptions,
    ListDealsOptions,
    ListPeopleOptions,
    ListProjectsOptions,
    ListServicesOptions,
    ListTasksOptions,
    ListTimeEntriesOptions,
    ResolveOptions,
    UpdateCompanyOptions,
    UpdateDealOptions,
    UpdateTaskOptions,
    UpdateTimeEntryOptions,
    create_company,
    create_deal,
    create_task,
    create_time_entry,
    delete_time_entry,
    get_company,
    get_deal,
    get_person,
    get_project,
    get_task,
    get_time_entry,
    list_bookings,
    list_companies,
    list_deals,
    list_people,
    list_projects,
    list_services,
    list_tasks,
    list_time_entries,
    resolve_identifier,
    update_company,
    update_deal,
    update_task,
    update_time_entry,
)
from src.productive_core.resolution import ResolveError, ResolverCache, ResourceType

logger = logging.getLogger(__name__)
tracer = get_tracer(__name__)

TOOL_NAME = "productive"

# Smaller than the CLI default to keep tool results compact
DEFAULT_PER_PAGE = 20

RESOURCES = (
    "people",
    "companies",
    "projects",
    "services",
    "deals",
    "tasks",
    "time",
    "bookings",
)
ACTIONS = ("list", "get", "create", "update", "delete", "resolve")

# Resource to the type searched by its resolve action
RESOLVE_TYPES: dict[str, ResourceType] = {
    "people": ResourceType.PERSON,
    "companies": ResourceType.COMPANY,
    "projects": ResourceType.PROJECT,
    "services": ResourceType.SERVICE,
    "deals": ResourceType.DEAL,
}

Executor = Callable[[Any, ExecutorContext], Awaitable[ExecutorResult[Any]]]

OPERATIONS: dict[tuple[str, str], tuple[type, Executor]] = {
    ("people", "list"): (ListPeopleOptions, list_people),
    ("people", "get"): (GetPersonOptions, get_person),
    ("companies", "list"): (ListCompaniesOptions, list_companies),
    ("companies", "get"): (GetCompanyOptions, get_company),
    ("companies", "create"): (CreateCompanyOptions, create_company),
    ("companies", "update"): (UpdateCompanyOptions, update_company),
    ("projects", "list"): (ListProjectsOptions, list_projects),
    ("projects", "get"): (GetProjectOptions, get_project),
    ("services", "list"): (ListServicesOptions, list_services),
    ("deals", "list"): (ListDealsOptions, list_deals),
    ("deals", "get"): (GetDealOptions, get_deal),
    ("deals", "create"): (CreateDealOptions, create_deal),
    ("deals", "update"): (UpdateDealOptions, update_deal),
    ("tasks", "list"): (ListTasksOptions, list_tasks),
    ("tasks", "get"): (GetTaskOptions, get_task),
    ("tasks", "create"): (CreateTaskOptions, create_task),
    ("tasks", "update"): (UpdateTaskOptions, update_task),
    ("time", "list"): (ListTimeEntriesOptions, list_time_entries),
    ("time", "get"): (GetTimeEntryOptions, get_time_entry),
    ("time", "create"): (CreateTimeEntryOptions, create_time_entry),
    ("time", "update"): (UpdateTimeEntryOptions, update_time_entry),
    ("time", "delete"): (DeleteTimeEntryOptions, delete_time_entry),
    ("bookings", "list"): (ListBookingsOptions, list_bookings),
}

ID_ACTIONS = frozenset({"get", "update", "delete"})

# Errors reported to the agent as tool results rather than protocol errors
TOOL_ERRORS = (ResolveError, ExecutorValidationError, ProductiveApiError)


# =============================================================================
# Tool Definitions (MCP Schema)
# =============================================================================

TOOL_DEFINITIONS = [
    {
        "name": TOOL_NAME,
        "description": (
            "Read and write Productive.io data. Pick a resource and an action. "
            "Identifier arguments accept numeric IDs or human-friendly values: "
            "emails and names for people, names for companies and services, "
            "PRJ-123 project numbers and D-123 deal numbers. Use action "
            "'resolve' with a query to look up IDs without doing anything else."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "resource": {
                    "type": "string",
                    "enum": list(RESOURCES),
                    "description": "Resource to operate on",
                },
                "action": {
                    "type": "string",
                    "enum": list(ACTIONS),
                    "description": "Operation to perform",
                },
                "id": {
                    "type": "string",
                    "description": "Resource identifier for get, update and delete",
                },
                "filter": {
                    "type": "object",
                    "additionalProperties": {"type": "string"},
                    "description": "Raw API filters, e.g. {\"after\": \"2024-01-01\"}",
                },
                "page": {"type": "integer", "minimum": 1, "description": "Page number"},
                "per_page": {
                    "type": "integer",
                    "minimum": 1,
                    "maximum": 200,
                    "description": f"Page size (default {DEFAULT_PER_PAGE})",
                },
                "query": {"type": "string", "description": "Search text for resolve"},
                "type": {
                    "type": "string",
                    "enum": [t.value for t in ResourceType],
                    "description": "Resource type for resolve (detected when omitted)",
                },
                "first": {
                    "type": "boolean",
                    "description": "Return only the best match for resolve",
                },
                "person_id": {"type": "string"},
                "project_id": {"type": "string"},
                "company_id": {"type": "string"},
                "service_id": {"type": "string"},
                "task_id": {"type": "string"},
                "deal_id": {"type": "string"},
                "event_id": {"type": "string"},
                "assignee_id": {"type": "string"},
                "responsible_id": {"type": "string"},
                "task_list_id": {"type": "string"},
                "status": {"type": "string"},
                "name": {"type": "string"},
                "title": {"type": "string"},
                "description": {"type": "string"},
                "date": {"type": "string", "description": "YYYY-MM-DD"},
                "due_date": {"type": "string", "description": "YYYY-MM-DD"},
                "after": {"type": "string", "description": "YYYY-MM-DD"},
                "before": {"type": "string", "description": "YYYY-MM-DD"},
                "draft": {
                    "type": "boolean",
                    "description": "Bookings: only drafts (true) or only confirmed (false)",
                },
                "time": {"type": "integer", "description": "Duration in minutes"},
                "note": {"type": "string"},
            },
            "required": ["resource", "action"],
        },
    },
]


# =============================================================================
# Response Models
# =============================================================================


@dataclass(frozen=True)
class ToolCallResult:
    """Outcome of a tool call; `is_error` marks agent-correctable failures."""

    payload: dict[str, Any]
    is_error: bool = False

    @property
    def text(self) -> str:
        return json.dumps(self.payload, indent=2, default=str)

    def to_content(self) -> dict[str, Any]:
        """MCP tools/call result body."""
        return {
            "content": [{"type": "text", "text": self.text}],
            "isError": self.is_error,
        }


def _string_filter(filter: Any) -> dict[str, str]:
    if filter is None:
        return {}
    if not isinstance(filter, Mapping):
        raise ExecutorValidationError("filter must be an object of key/value pairs", "filter")
    return {str(key): str(value) for key, value in filter.items() if value is not None}


def _coerce_scalar(name: str, value: Any, hint: Any) -> Any:
    """Coerce JSON scalars sent as strings to the field's int or bool type."""
    accepted = get_args(hint) or (hint,)
    if bool in accepted:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in ("true", "false"):
            return value.strip().lower() == "true"
        raise ExecutorValidationError(f"{name} must be a boolean", name)
    if int in accepted:
        if isinstance(value, bool):
            raise ExecutorValidationError(f"{name} must be an integer", name)
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                pass
        raise ExecutorValidationError(f"{name} must be an integer", name)
    return value


def build_options(options_type: type, arguments: Mapping[str, Any]) -> Any:
    """
    Map tool arguments onto an executor options dataclass.

    Unknown arguments are ignored. Integer ids are passed on as strings,
    int and bool options are coerced from their string forms, `filter`
    feeds `additional_filters` and list options default to DEFAULT_PER_PAGE.

    Raises:
        ExecutorValidationError: If an int or bool option cannot be coerced
    """
    hints = get_type_hints(options_type)
    names = {f.name for f in dataclasses.fields(options_type)}
    values = {
        key: value
        for key, value in arguments.items()
        if key in names and key != "additional_filters" and value is not None
    }
    for key, value in values.items():
        if (key == "id" or key.endswith("_id")) and isinstance(value, int):
            values[key] = str(value)
        else:
            values[key] = _coerce_scalar(key, value, hints[key])
    if "additional_filters" in names:
        values["additional_filters"] = _string_filter(arguments.get("filter"))
    if "per_page" in names:
        values.setdefault("per_page", DEFAULT_PER_PAGE)
    return options_type(**values)


def format_result(result: ExecutorResult[Any]) -> dict[str, Any]:
    """Executor result as a tool payload, resolutions under `_resolved`."""
    payload = result.to_dict()
    if "resolved" in payload:
        payload["_resolved"] = payload.pop("resolved")
    return payload


# =============================================================================
# Tool Handlers
# =============================================================================


class ToolHandlers:
    """
    Handlers for MCP tool invocations.

    Builds a HandlerContext per call and routes to the core executors. The
    resolver cache is shared by every call handled by this instance.
    """

    def __init__(
        self,
        api: ProductiveApi,
        resolver_cache: ResolverCache | None = None,
        *,
        organization_id: str,
        user_id: str | None = None,
        resolution_enabled: bool = True,
        strict: bool = False,
    ):
        self._api = api
        self._resolver_cache = resolver_cache
        self._organization_id = organization_id
        self._user_id = user_id
        self._resolution_enabled = resolution_enabled
        self._strict = strict

    def handler_context(self) -> HandlerContext:
        return HandlerContext(
            api=self._api,
            organization_id=self._organization_id,
            user_id=self._user_id,
            resolver_cache=self._resolver_cache,
            resolution_enabled=self._resolution_enabled,
            strict=self._strict,
        )

    async def handle_tool_call(
        self,
        tool_name: str,
        arguments: dict[str, Any],
    ) -> ToolCallResult:
        """
        Route a tool call to the matching executor.

        Args:
            tool_name: Name of the tool to invoke
            arguments: Tool arguments

        Returns:
            ToolCallResult; resolution, validation and API errors are
            returned with is_error set

        Raises:
            ValueError: If the tool is unknown
        """
        if tool_name != TOOL_NAME:
            raise ValueError(f"Unknown tool: {tool_name}")

        resource = arguments.get("resource")
        action = arguments.get("action")

        with tracer.start_as_current_span("mcp.productive") as span:
            span.set_attribute("tool.resource", str(resource))
            span.set_attribute("tool.action", str(action))
            handler = self.handler_context()
            for key, value in handler.to_span_attributes().items():
                span.set_attribute(key, value)

            try:
                result = await self._dispatch(resource, action, arguments, handler)
            except TOOL_ERRORS as e:
                logger.info(f"productive {resource}/{action} failed: {e}")
                span.set_attribute("tool.error", type(e).__name__)
                return ToolCallResult(payload=e.to_dict(), is_error=True)

            span.set_attribute("tool.success", True)
            return ToolCallResult(payload=format_result(result))

    async def _dispatch(
        self,
        resource: Any,
        action: Any,
        arguments: Mapping[str, Any],
        handler: HandlerContext,
    ) -> ExecutorResult[Any]:
        if resource not in RESOURCES:
            raise ExecutorValidationError(
                f"Unknown resource: {resource}. Valid resources are: {', '.join(RESOURCES)}",
                "resource",
            )

        ctx = from_handler_context(handler)

        if action == "resolve":
            options = build_options(ResolveOptions, arguments)
            if options.type is None and resource in RESOLVE_TYPES:
                options.type = RESOLVE_TYPES[resource].value
            return await resolve_identifier(options, ctx)

        operation = OPERATIONS.get((resource, action))
        if operation is None:
            valid = [a for (r, a) in OPERATIONS if r == resource] + ["resolve"]
            raise ExecutorValidationError(
                f'Invalid action "{action}" for {resource}. Valid actions are: {", ".join(valid)}',
                "action",
            )
        if action in ID_ACTIONS and not arguments.get("id"):
            raise ExecutorValidationError(f"id is required for {action} action", "id")

        options_type, executor = operation
        return await executor(build_options(options_type, arguments), ctx)

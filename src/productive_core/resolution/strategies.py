"""
Search Strategies

One remote search per resource type, keyed by ResourceType. Adding a
resource type means adding one entry to SEARCH_STRATEGIES.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping

from src.productive_api.client import ProductiveApi
from src.productive_api.models import (
    Company,
    Deal,
    JsonApiResource,
    Person,
    Project,
    Service,
)
from src.productive_core.resolution.classifier import (
    is_deal_number,
    is_email,
    is_project_number,
)
from src.productive_core.resolution.protocols import (
    ResourceType,
    SearchMatch,
    SearchStrategy,
)

QUERY_PAGE_SIZE = 10
SERVICE_PAGE_SIZE = 200


def normalize_project_number(value: str) -> str:
    """P-123 -> PRJ-123. Other values are upper-cased."""
    upper = value.strip().upper()
    if upper.startswith("P-"):
        return "PRJ-" + upper[2:]
    return upper


def normalize_deal_number(value: str) -> str:
    """DEAL-123 -> D-123. Other values are upper-cased."""
    upper = value.strip().upper()
    if upper.startswith("DEAL-"):
        return "D-" + upper[5:]
    return upper


def _matches(
    resources: list[JsonApiResource],
    to_label: Callable[[JsonApiResource], str],
    query: str,
    exact: bool = False,
) -> list[SearchMatch]:
    needle = query.strip().lower()
    matches = []
    for resource in resources:
        label = to_label(resource)
        matches.append(
            SearchMatch(id=resource.id, label=label, exact=exact or label.lower() == needle)
        )
    return matches


def _person_label(resource: JsonApiResource) -> str:
    return Person.from_resource(resource).label


def _company_label(resource: JsonApiResource) -> str:
    return Company.from_resource(resource).label


def _project_label(resource: JsonApiResource) -> str:
    return Project.from_resource(resource).label


def _deal_label(resource: JsonApiResource) -> str:
    return Deal.from_resource(resource).label


async def search_people(
    api: ProductiveApi, query: str, scope: Mapping[str, str] | None = None
) -> list[SearchMatch]:
    if is_email(query.strip()):
        response = await api.get_people(filter={"email": query.strip()}, per_page=1)
        return _matches(response.items(), _person_label, query, exact=True)

    response = await api.get_people(filter={"query": query}, per_page=QUERY_PAGE_SIZE)
    return _matches(response.items(), _person_label, query)


async def search_companies(
    api: ProductiveApi, query: str, scope: Mapping[str, str] | None = None
) -> list[SearchMatch]:
    response = await api.get_companies(filter={"query": query}, per_page=QUERY_PAGE_SIZE)
    return _matches(response.items(), _company_label, query)


async def search_projects(
    api: ProductiveApi, query: str, scope: Mapping[str, str] | None = None
) -> list[SearchMatch]:
    if is_project_number(query.strip()):
        raw = query.strip()
        normalized = normalize_project_number(raw)
        response = await api.get_projects(filter={"project_number": normalized}, per_page=1)
        items = response.items()
        if not items and normalized != raw:
            response = await api.get_projects(filter={"project_number": raw}, per_page=1)
            items = response.items()
        return _matches(items, _project_label, query, exact=True)

    response = await api.get_projects(filter={"query": query}, per_page=QUERY_PAGE_SIZE)
    return _matches(response.items(), _project_label, query)


async def search_deals(
    api: ProductiveApi, query: str, scope: Mapping[str, str] | None = None
) -> list[SearchMatch]:
    if is_deal_number(query.strip()):
        raw = query.strip()
        normalized = normalize_deal_number(raw)
        response = await api.get_deals(filter={"deal_number": normalized}, per_page=1)
        items = response.items()
        if not items and normalized != raw:
            response = await api.get_deals(filter={"deal_number": raw}, per_page=1)
            items = response.items()
        return _matches(items, _deal_label, query, exact=True)

    response = await api.get_deals(filter={"query": query}, per_page=QUERY_PAGE_SIZE)
    return _matches(response.items(), _deal_label, query)


async def search_services(
    api: ProductiveApi, query: str, scope: Mapping[str, str] | None = None
) -> list[SearchMatch]:
    """
    Services have no query filter, so list them (optionally within a project)
    and match names by case-insensitive substring. Matches keep the listing
    order; `exact` marks names equal to the query.
    """
    filter: dict[str, str] = {}
    if scope and scope.get("project_id"):
        filter["project_id"] = str(scope["project_id"])

    response = await api.get_services(filter=filter, per_page=SERVICE_PAGE_SIZE)
    needle = query.strip().lower()

    matches = []
    for resource in response.items():
        name = Service.from_resource(resource).name or ""
        if needle in name.lower():
            matches.append(SearchMatch(id=resource.id, label=name, exact=name.lower() == needle))

    return matches


SEARCH_STRATEGIES: dict[ResourceType, SearchStrategy] = {
    ResourceType.PERSON: search_people,
    ResourceType.COMPANY: search_companies,
    ResourceType.PROJECT: search_projects,
    ResourceType.DEAL: search_deals,
    ResourceType.SERVICE: search_services,
}

"""Unit tests for the per-type search strategies."""

from __future__ import annotations

from src.productive_core.resolution import ResourceType
from src.productive_core.resolution.strategies import (
    QUERY_PAGE_SIZE,
    SEARCH_STRATEGIES,
    SERVICE_PAGE_SIZE,
    normalize_deal_number,
    normalize_project_number,
    search_companies,
    search_deals,
    search_people,
    search_projects,
    search_services,
)


class TestNormalization:
    def test_project_number(self) -> None:
        assert normalize_project_number("p-12") == "PRJ-12"
        assert normalize_project_number("PRJ-12") == "PRJ-12"

    def test_deal_number(self) -> None:
        assert normalize_deal_number("deal-3") == "D-3"
        assert normalize_deal_number("D-3") == "D-3"


class TestSearchStrategies:
    """Each strategy issues the documented request and maps results to matches."""

    def test_table_covers_every_type(self) -> None:
        assert set(SEARCH_STRATEGIES) == set(ResourceType)

    async def test_people_by_email(self, api, make_response) -> None:
        api.get_people.return_value = make_response(
            "people", {"id": 7, "first_name": "Jane", "last_name": "Doe"}
        )

        matches = await search_people(api, "jane@example.com")

        api.get_people.assert_awaited_once_with(
            filter={"email": "jane@example.com"}, per_page=1
        )
        assert [(m.id, m.label, m.exact) for m in matches] == [("7", "Jane Doe", True)]

    async def test_people_by_name(self, api, make_response) -> None:
        api.get_people.return_value = make_response(
            "people",
            {"id": 1, "first_name": "Jane", "last_name": "Doe"},
            {"id": 2, "first_name": "Jane", "last_name": "Doering"},
        )

        matches = await search_people(api, "jane doe")

        api.get_people.assert_awaited_once_with(
            filter={"query": "jane doe"}, per_page=QUERY_PAGE_SIZE
        )
        assert [m.exact for m in matches] == [True, False]

    async def test_companies(self, api, make_response) -> None:
        api.get_companies.return_value = make_response("companies", {"id": 3, "name": "Acme"})

        matches = await search_companies(api, "acme")

        assert matches[0].id == "3"
        assert matches[0].exact is True

    async def test_project_number_normalized(self, api, make_response) -> None:
        api.get_projects.return_value = make_response(
            "projects", {"id": 10, "name": "Website", "project_number": "PRJ-123"}
        )

        matches = await search_projects(api, "p-123")

        api.get_projects.assert_awaited_once_with(
            filter={"project_number": "PRJ-123"}, per_page=1
        )
        assert matches[0].exact is True

    async def test_project_number_falls_back_to_raw(self, api, make_response) -> None:
        api.get_projects.side_effect = [
            make_response("projects"),
            make_response("projects", {"id": 11, "name": "Legacy"}),
        ]

        matches = await search_projects(api, "p-9")

        assert api.get_projects.await_count == 2
        assert api.get_projects.await_args.kwargs["filter"] == {"project_number": "p-9"}
        assert matches[0].id == "11"

    async def test_deal_number(self, api, make_response) -> None:
        api.get_deals.return_value = make_response("deals", {"id": 4, "name": "Retainer"})

        matches = await search_deals(api, "DEAL-4")

        api.get_deals.assert_awaited_once_with(filter={"deal_number": "D-4"}, per_page=1)
        assert matches[0].label == "Retainer"

    async def test_deal_name_query(self, api, make_response) -> None:
        await search_deals(api, "Retainer")

        api.get_deals.assert_awaited_once_with(
            filter={"query": "Retainer"}, per_page=QUERY_PAGE_SIZE
        )

    async def test_services_substring_in_listing_order(self, api, make_response) -> None:
        api.get_services.return_value = make_response(
            "services",
            {"id": 1, "name": "Development - Backend"},
            {"id": 2, "name": "Design"},
            {"id": 3, "name": "Development"},
            {"id": 4, "name": None},
        )

        matches = await search_services(api, "development", {"project_id": "10"})

        api.get_services.assert_awaited_once_with(
            filter={"project_id": "10"}, per_page=SERVICE_PAGE_SIZE
        )
        assert [(m.id, m.exact) for m in matches] == [("1", False), ("3", True)]

    async def test_services_unscoped(self, api) -> None:
        assert await search_services(api, "anything") == []

        api.get_services.assert_awaited_once_with(filter={}, per_page=SERVICE_PAGE_SIZE)

"""
Unit Tests for the Executors

Executors run against a mocked ProductiveApi. Resolution uses either the
NoopResolver (create_test_context) or a ResourceResolver over table-driven
search strategies.
"""

from __future__ import annotations

import datetime

import pytest

from src.productive_core.context import create_test_context
from src.productive_core.executors import (
    CreateDealOptions,
    CreateTaskOptions,
    CreateTimeEntryOptions,
    DeleteTimeEntryOptions,
    ExecutorValidationError,
    GetDealOptions,
    GetPersonOptions,
    ListBookingsOptions,
    ListCompaniesOptions,
    ListPeopleOptions,
    ListServicesOptions,
    ListTasksOptions,
    ListTimeEntriesOptions,
    ResolveOptions,
    UpdateCompanyOptions,
    UpdateDealOptions,
    UpdateTaskOptions,
    UpdateTimeEntryOptions,
    build_booking_filters,
    build_company_filters,
    build_people_filters,
    build_services_filters,
    build_task_filters,
    build_time_entry_filters,
    create_deal,
    create_task,
    create_time_entry,
    delete_time_entry,
    get_deal,
    get_person,
    list_bookings,
    list_tasks,
    list_time_entries,
    resolve_identifier,
    update_company,
    update_deal,
    update_task,
    update_time_entry,
)
from src.productive_core.resolution import (
    ResolveError,
    ResourceResolver,
    ResourceType,
    SearchMatch,
)


def _table_search(table: dict[str, str]):
    async def search(api, query, scope=None):
        if query in table:
            return [SearchMatch(table[query], f"label:{query}", exact=True)]
        return []

    return search


@pytest.fixture
def resolving_ctx(api):
    """ExecutorContext whose resolver knows a fixed set of identifiers."""
    resolver = ResourceResolver(
        api,
        namespace="42",
        strategies={
            ResourceType.PERSON: _table_search({"jane@example.com": "7"}),
            ResourceType.PROJECT: _table_search({"PRJ-1": "10"}),
            ResourceType.COMPANY: _table_search({"Acme": "3"}),
            ResourceType.DEAL: _table_search({"D-5": "50"}),
            ResourceType.SERVICE: _table_search({"Development": "55"}),
        },
    )
    return create_test_context(api, resolver=resolver, user_id="500")


class TestFilterBuilders:
    def test_time_entry_filters(self) -> None:
        options = ListTimeEntriesOptions(
            person_id="jane@example.com",
            after="2024-01-01",
            status="Approved",
            billing_type="non_billable",
            additional_filters={"custom": "x"},
        )

        assert build_time_entry_filters(options) == {
            "custom": "x",
            "after": "2024-01-01",
            "person_id": "jane@example.com",
            "status": "1",
            "billing_type_id": "3",
        }

    def test_unknown_enum_word_dropped(self) -> None:
        assert "status" not in build_time_entry_filters(ListTimeEntriesOptions(status="bogus"))

    def test_task_filters_default_open_status(self) -> None:
        assert build_task_filters(ListTasksOptions())["status"] == "1"

    def test_task_filters_overdue_and_dates(self) -> None:
        options = ListTasksOptions(overdue=True, due_before="2024-02-01", status="done")
        filter = build_task_filters(options)

        assert filter["overdue_status"] == "2"
        assert filter["due_date_before"] == "2024-02-01"
        assert filter["status"] == "2"

    def test_people_role_maps_to_role_id(self) -> None:
        options = ListPeopleOptions(role="3", person_type="contact")

        assert build_people_filters(options) == {"role_id": "3", "person_type": "2"}

    def test_services_time_tracking(self) -> None:
        assert build_services_filters(ListServicesOptions(time_tracking=False)) == {
            "time_tracking_enabled": "false"
        }

    def test_company_archived_flag(self) -> None:
        assert build_company_filters(ListCompaniesOptions(query="ac", archived=True)) == {
            "query": "ac",
            "archived": "true",
        }

    def test_booking_filters_include_drafts_by_default(self) -> None:
        options = ListBookingsOptions(person_id="jane@example.com", after="2024-06-01")

        assert build_booking_filters(options) == {
            "person_id": "jane@example.com",
            "after": "2024-06-01",
            "with_draft": "true",
        }

    def test_booking_draft_flag_replaces_with_draft(self) -> None:
        assert build_booking_filters(ListBookingsOptions(draft=False)) == {"draft": "false"}
        assert build_booking_filters(ListBookingsOptions(draft=True)) == {"draft": "true"}

    def test_booking_raw_draft_filter_kept(self) -> None:
        options = ListBookingsOptions(additional_filters={"draft": "true", "event_id": "4"})

        assert build_booking_filters(options) == {"draft": "true", "event_id": "4"}


class TestListExecutors:
    async def test_list_resolves_filters_and_reports(self, api, make_response, resolving_ctx) -> None:
        api.get_time_entries.return_value = make_response(
            "time_entries", {"id": 1, "date": "2024-01-15", "time": 60}, meta={"total_count": 1}
        )

        result = await list_time_entries(
            ListTimeEntriesOptions(person_id="jane@example.com"), resolving_ctx
        )

        kwargs = api.get_time_entries.await_args.kwargs
        assert kwargs["filter"] == {"person_id": "7"}
        assert kwargs["per_page"] == 100
        assert result.data[0].time == 60
        assert result.meta.total_count == 1
        assert result.resolved["person_id"].id == "7"

    async def test_list_without_resolution_reports_nothing(self, api) -> None:
        result = await list_time_entries(ListTimeEntriesOptions(person_id="500"), create_test_context(api))

        assert result.resolved is None
        assert "resolved" not in result.to_dict()

    async def test_list_tasks_default_include(self, api) -> None:
        await list_tasks(ListTasksOptions(), create_test_context(api))

        assert api.get_tasks.await_args.kwargs["include"] == ["project", "assignee", "workflow_status"]

    async def test_resolution_failure_stops_before_request(self, api, resolving_ctx) -> None:
        with pytest.raises(ResolveError):
            await list_time_entries(ListTimeEntriesOptions(person_id="ghost"), resolving_ctx)

        api.get_time_entries.assert_not_awaited()

    async def test_list_bookings_resolves_every_identifier(
        self, api, make_response, resolving_ctx
    ) -> None:
        api.get_bookings.return_value = make_response(
            "bookings",
            {
                "id": 1,
                "started_on": "2024-06-03",
                "ended_on": "2024-06-07",
                "time": 240,
                "booking_method_id": 1,
                "draft": True,
                "relationships": {"person": {"data": {"type": "people", "id": "7"}}},
            },
        )

        result = await list_bookings(
            ListBookingsOptions(
                person_id="jane@example.com",
                project_id="PRJ-1",
                company_id="Acme",
                service_id="Development",
            ),
            resolving_ctx,
        )

        assert api.get_bookings.await_args.kwargs["filter"] == {
            "person_id": "7",
            "project_id": "10",
            "company_id": "3",
            "service_id": "55",
            "with_draft": "true",
        }
        assert set(result.resolved) == {"person_id", "project_id", "company_id", "service_id"}
        booking = result.data[0]
        assert booking.time == 240
        assert booking.draft is True
        assert booking.person_id == "7"


class TestGetExecutors:
    async def test_get_person_by_email(self, api, make_response, resolving_ctx) -> None:
        api.get_person.return_value = make_response("people", {"id": 7, "first_name": "Jane"})

        result = await get_person(GetPersonOptions(id="jane@example.com"), resolving_ctx)

        api.get_person.assert_awaited_once_with("7")
        assert result.resolved["id"].query == "jane@example.com"

    async def test_get_deal_by_number(self, api, make_response, resolving_ctx) -> None:
        api.get_deal.return_value = make_response("deals", {"id": 50, "name": "Retainer"})

        result = await get_deal(GetDealOptions(id="D-5"), resolving_ctx)

        assert api.get_deal.await_args.args[0] == "50"
        assert result.data.name == "Retainer"


class TestCreateTimeEntry:
    async def test_defaults_person_date_and_note(self, api, make_response) -> None:
        api.create_time_entry.return_value = make_response("time_entries", {"id": 1, "time": 60})
        ctx = create_test_context(api, user_id="500")

        await create_time_entry(CreateTimeEntryOptions(service_id="9", time=60), ctx)

        fields = api.create_time_entry.await_args.args[0]
        assert fields == {
            "person_id": "500",
            "service_id": "9",
            "time": 60,
            "date": datetime.date.today().isoformat(),
            "note": "",
        }

    async def test_requires_person_without_configured_user(self, api) -> None:
        with pytest.raises(ExecutorValidationError) as exc_info:
            await create_time_entry(
                CreateTimeEntryOptions(service_id="9", time=60), create_test_context(api)
            )

        assert exc_info.value.field == "person_id"
        api.create_time_entry.assert_not_awaited()

    @pytest.mark.parametrize(
        ("options", "field"),
        [
            (CreateTimeEntryOptions(time=60), "service_id"),
            (CreateTimeEntryOptions(service_id="9"), "time"),
            (CreateTimeEntryOptions(service_id="9", time=0), "time"),
        ],
    )
    async def test_validation(self, api, options, field) -> None:
        with pytest.raises(ExecutorValidationError) as exc_info:
            await create_time_entry(options, create_test_context(api, user_id="500"))

        assert exc_info.value.field == field

    async def test_service_resolved_within_project(self, api, make_response, resolving_ctx) -> None:
        api.create_time_entry.return_value = make_response("time_entries", {"id": 1})

        result = await create_time_entry(
            CreateTimeEntryOptions(
                service_id="Development",
                project_id="PRJ-1",
                person_id="jane@example.com",
                time=30,
                date="2024-01-15",
            ),
            resolving_ctx,
        )

        fields = api.create_time_entry.await_args.args[0]
        assert fields["person_id"] == "7"
        assert fields["service_id"] == "55"
        assert "project_id" not in fields
        assert set(result.resolved) == {"person_id", "project_id", "service_id"}


class TestUpdateExecutors:
    @pytest.mark.parametrize(
        ("executor", "options"),
        [
            (update_time_entry, UpdateTimeEntryOptions(id="1")),
            (update_task, UpdateTaskOptions(id="1")),
            (update_deal, UpdateDealOptions(id="1")),
            (update_company, UpdateCompanyOptions(id="1")),
        ],
    )
    async def test_no_op_update_rejected_before_request(self, api, executor, options) -> None:
        with pytest.raises(ExecutorValidationError) as exc_info:
            await executor(options, create_test_context(api))

        assert exc_info.value.field == "options"
        assert "No updates specified" in exc_info.value.message

    async def test_update_requires_id(self, api) -> None:
        with pytest.raises(ExecutorValidationError) as exc_info:
            await update_task(UpdateTaskOptions(title="x"), create_test_context(api))

        assert exc_info.value.field == "id"

    async def test_update_task_resolves_assignee(self, api, make_response, resolving_ctx) -> None:
        api.update_task.return_value = make_response("tasks", {"id": 1, "title": "T"})

        result = await update_task(
            UpdateTaskOptions(id="1", assignee_id="jane@example.com"), resolving_ctx
        )

        api.update_task.assert_awaited_once_with("1", {"assignee_id": "7"})
        assert result.resolved["assignee_id"].id == "7"

    async def test_update_deal_resolves_id(self, api, make_response, resolving_ctx) -> None:
        api.update_deal.return_value = make_response("deals", {"id": 50})

        await update_deal(UpdateDealOptions(id="D-5", name="Renamed"), resolving_ctx)

        api.update_deal.assert_awaited_once_with("50", {"name": "Renamed"})


class TestCreateExecutors:
    async def test_create_task_requires_fields(self, api) -> None:
        with pytest.raises(ExecutorValidationError) as exc_info:
            await create_task(CreateTaskOptions(title="T", project_id="1"), create_test_context(api))

        assert exc_info.value.field == "task_list_id"

    async def test_create_deal_resolves_company(self, api, make_response, resolving_ctx) -> None:
        api.create_deal.return_value = make_response("deals", {"id": 60, "name": "New"})

        result = await create_deal(CreateDealOptions(name="New", company_id="Acme"), resolving_ctx)

        assert api.create_deal.await_args.args[0] == {"name": "New", "company_id": "3"}
        assert result.resolved["company_id"].label == "label:Acme"


class TestDeleteTimeEntry:
    async def test_delete(self, api) -> None:
        result = await delete_time_entry(DeleteTimeEntryOptions(id="9"), create_test_context(api))

        api.delete_time_entry.assert_awaited_once_with("9")
        assert result.data == {"id": "9", "deleted": True}


class TestResolveIdentifier:
    async def test_returns_candidates(self, resolving_ctx) -> None:
        result = await resolve_identifier(ResolveOptions(query="jane@example.com"), resolving_ctx)

        assert [m.id for m in result.data] == ["7"]
        assert result.to_dict()["data"] == [
            {"id": "7", "label": "label:jane@example.com", "exact": True}
        ]

    async def test_requires_query(self, resolving_ctx) -> None:
        with pytest.raises(ExecutorValidationError):
            await resolve_identifier(ResolveOptions(query=" "), resolving_ctx)

    async def test_numeric_query_echoed_without_type(self, resolving_ctx) -> None:
        result = await resolve_identifier(ResolveOptions(query="12345"), resolving_ctx)

        assert result.to_dict()["data"] == [{"id": "12345", "label": "12345", "exact": True}]

    async def test_project_scope_resolved(self, resolving_ctx) -> None:
        result = await resolve_identifier(
            ResolveOptions(query="Development", type="service", project_id="PRJ-1"),
            resolving_ctx,
        )

        assert result.data[0].id == "55"
        assert result.resolved["project_id"].id == "10"

"""
Executors

Async business operations `(options, ctx) -> ExecutorResult`, one per
resource action. Executors resolve identifiers and call the API; they never
render output.
"""

from src.productive_core.executors.bookings import (
    ListBookingsOptions,
    build_booking_filters,
    list_bookings,
)
from src.productive_core.executors.companies import (
    CreateCompanyOptions,
    GetCompanyOptions,
    ListCompaniesOptions,
    UpdateCompanyOptions,
    build_company_filters,
    create_company,
    get_company,
    list_companies,
    update_company,
)
from src.productive_core.executors.deals import (
    CreateDealOptions,
    GetDealOptions,
    ListDealsOptions,
    UpdateDealOptions,
    build_deal_filters,
    create_deal,
    get_deal,
    list_deals,
    update_deal,
)
from src.productive_core.executors.errors import ExecutorValidationError
from src.productive_core.executors.people import (
    GetPersonOptions,
    ListPeopleOptions,
    build_people_filters,
    get_person,
    list_people,
)
from src.productive_core.executors.projects import (
    GetProjectOptions,
    ListProjectsOptions,
    build_project_filters,
    get_project,
    list_projects,
)
from src.productive_core.executors.resolve import ResolveOptions, resolve_identifier
from src.productive_core.executors.services import (
    ListServicesOptions,
    build_services_filters,
    list_services,
)
from src.productive_core.executors.tasks import (
    CreateTaskOptions,
    GetTaskOptions,
    ListTasksOptions,
    UpdateTaskOptions,
    build_task_filters,
    create_task,
    get_task,
    list_tasks,
    update_task,
)
from src.productive_core.executors.time_entries import (
    CreateTimeEntryOptions,
    DeleteTimeEntryOptions,
    GetTimeEntryOptions,
    ListTimeEntriesOptions,
    UpdateTimeEntryOptions,
    build_time_entry_filters,
    create_time_entry,
    delete_time_entry,
    get_time_entry,
    list_time_entries,
    update_time_entry,
)
from src.productive_core.executors.types import ExecutorResult, PaginationOptions

__all__ = [
    "ExecutorResult",
    "ExecutorValidationError",
    "PaginationOptions",
    # People
    "GetPersonOptions",
    "ListPeopleOptions",
    "build_people_filters",
    "get_person",
    "list_people",
    # Companies
    "CreateCompanyOptions",
    "GetCompanyOptions",
    "ListCompaniesOptions",
    "UpdateCompanyOptions",
    "build_company_filters",
    "create_company",
    "get_company",
    "list_companies",
    "update_company",
    # Projects
    "GetProjectOptions",
    "ListProjectsOptions",
    "build_project_filters",
    "get_project",
    "list_projects",
    # Resolve
    "ResolveOptions",
    "resolve_identifier",
    # Services
    "ListServicesOptions",
    "build_services_filters",
    "list_services",
    # Deals
    "CreateDealOptions",
    "GetDealOptions",
    "ListDealsOptions",
    "UpdateDealOptions",
    "build_deal_filters",
    "create_deal",
    "get_deal",
    "list_deals",
    "update_deal",
    # Tasks
    "CreateTaskOptions",
    "GetTaskOptions",
    "ListTasksOptions",
    "UpdateTaskOptions",
    "build_task_filters",
    "create_task",
    "get_task",
    "list_tasks",
    "update_task",
    # Time entries
    "CreateTimeEntryOptions",
    "DeleteTimeEntryOptions",
    "GetTimeEntryOptions",
    "ListTimeEntriesOptions",
    "UpdateTimeEntryOptions",
    "build_time_entry_filters",
    "create_time_entry",
    "delete_time_entry",
    "get_time_entry",
    "list_time_entries",
    "update_time_entry",
    # Bookings
    "ListBookingsOptions",
    "build_booking_filters",
    "list_bookings",
]

"""
Productive API Models

Pydantic models for JSON:API documents and the typed resource records
built from them.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator


class JsonApiResource(BaseModel):
    """A single JSON:API resource object."""

    model_config = ConfigDict(extra="ignore")

    id: str
    type: str
    attributes: dict[str, Any] = Field(default_factory=dict)
    relationships: dict[str, Any] = Field(default_factory=dict)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str:
        return str(value)

    def attr(self, name: str, default: Any = None) -> Any:
        """Attribute value, or `default` when missing or null."""
        value = self.attributes.get(name)
        return default if value is None else value

    def related_id(self, name: str) -> str | None:
        """ID of a to-one relationship, if present."""
        relationship = self.relationships.get(name) or {}
        data = relationship.get("data") if isinstance(relationship, dict) else None
        if isinstance(data, dict) and data.get("id") is not None:
            return str(data["id"])
        return None


class PaginationMeta(BaseModel):
    """Pagination block of a list response. Unknown keys are preserved."""

    model_config = ConfigDict(extra="allow")

    current_page: int | None = None
    total_pages: int | None = None
    total_count: int | None = None
    page_size: int | None = None


class ApiResponse(BaseModel):
    """A JSON:API response document."""

    model_config = ConfigDict(extra="ignore")

    data: JsonApiResource | list[JsonApiResource] | None = None
    meta: PaginationMeta = Field(default_factory=PaginationMeta)
    included: list[JsonApiResource] = Field(default_factory=list)

    @field_validator("meta", mode="before")
    @classmethod
    def _default_meta(cls, value: Any) -> Any:
        return value or {}

    @field_validator("included", mode="before")
    @classmethod
    def _default_included(cls, value: Any) -> Any:
        return value or []

    def items(self) -> list[JsonApiResource]:
        """Primary data as a list (empty when absent)."""
        if self.data is None:
            return []
        if isinstance(self.data, list):
            return self.data
        return [self.data]

    def item(self) -> JsonApiResource:
        """Primary data of a single-resource response."""
        items = self.items()
        if not items:
            raise ValueError("Response contains no resource")
        return items[0]


class ProductiveRecord(BaseModel):
    """Base for typed records. Subclasses map attributes in from_resource()."""

    model_config = ConfigDict(frozen=True)

    resource_type: ClassVar[str] = ""

    id: str

    @property
    def label(self) -> str:
        return self.id

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> ProductiveRecord:
        raise NotImplementedError

    def to_row(self) -> dict[str, Any]:
        """Flat dict used by the csv and table renderers."""
        return self.model_dump()


class Person(ProductiveRecord):
    resource_type: ClassVar[str] = "people"

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    title: str | None = None
    archived: bool = False

    @property
    def label(self) -> str:
        name = " ".join(part for part in (self.first_name, self.last_name) if part)
        return name or self.email or self.id

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> Person:
        return cls(
            id=resource.id,
            first_name=resource.attr("first_name"),
            last_name=resource.attr("last_name"),
            email=resource.attr("email"),
            title=resource.attr("title"),
            archived=resource.attr("archived_at") is not None,
        )


class Company(ProductiveRecord):
    resource_type: ClassVar[str] = "companies"

    name: str | None = None
    billing_name: str | None = None
    company_code: str | None = None
    vat: str | None = None
    default_currency: str | None = None
    domain: str | None = None
    due_days: int | None = None
    archived: bool = False

    @property
    def label(self) -> str:
        return self.name or self.id

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> Company:
        return cls(
            id=resource.id,
            name=resource.attr("name"),
            billing_name=resource.attr("billing_name"),
            company_code=resource.attr("company_code"),
            vat=resource.attr("vat"),
            default_currency=resource.attr("default_currency"),
            domain=resource.attr("domain"),
            due_days=resource.attr("due_days"),
            archived=resource.attr("archived_at") is not None,
        )


class Project(ProductiveRecord):
    resource_type: ClassVar[str] = "projects"

    name: str | None = None
    project_number: str | None = None
    project_type_id: int | None = None
    archived: bool = False
    company_id: str | None = None
    project_manager_id: str | None = None

    @property
    def label(self) -> str:
        return self.name or self.project_number or self.id

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> Project:
        number = resource.attr("project_number")
        return cls(
            id=resource.id,
            name=resource.attr("name"),
            project_number=str(number) if number is not None else None,
            project_type_id=resource.attr("project_type_id"),
            archived=resource.attr("archived_at") is not None,
            company_id=resource.related_id("company"),
            project_manager_id=resource.related_id("project_manager"),
        )


class Service(ProductiveRecord):
    resource_type: ClassVar[str] = "services"

    name: str | None = None
    billing_type_id: int | None = None
    budgeted_time: int | None = None
    worked_time: int | None = None
    time_tracking_enabled: bool | None = None
    deal_id: str | None = None

    @property
    def label(self) -> str:
        return self.name or self.id

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> Service:
        return cls(
            id=resource.id,
            name=resource.attr("name"),
            billing_type_id=resource.attr("billing_type_id"),
            budgeted_time=resource.attr("budgeted_time"),
            worked_time=resource.attr("worked_time"),
            time_tracking_enabled=resource.attr("time_tracking_enabled"),
            deal_id=resource.related_id("deal"),
        )


class Deal(ProductiveRecord):
    resource_type: ClassVar[str] = "deals"

    name: str | None = None
    number: str | None = None
    date: str | None = None
    end_date: str | None = None
    budget: bool = False
    company_id: str | None = None
    responsible_id: str | None = None
    deal_status_id: str | None = None

    @property
    def label(self) -> str:
        return self.name or self.number or self.id

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> Deal:
        number = resource.attr("number")
        return cls(
            id=resource.id,
            name=resource.attr("name"),
            number=str(number) if number is not None else None,
            date=resource.attr("date"),
            end_date=resource.attr("end_date"),
            budget=bool(resource.attr("budget", False)),
            company_id=resource.related_id("company"),
            responsible_id=resource.related_id("responsible"),
            deal_status_id=resource.related_id("deal_status"),
        )


class Task(ProductiveRecord):
    resource_type: ClassVar[str] = "tasks"

    title: str | None = None
    description: str | None = None
    task_number: str | None = None
    due_date: str | None = None
    start_date: str | None = None
    closed: bool = False
    initial_estimate: int | None = None
    project_id: str | None = None
    assignee_id: str | None = None
    workflow_status_id: str | None = None

    @property
    def label(self) -> str:
        return self.title or self.id

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> Task:
        number = resource.attr("task_number")
        return cls(
            id=resource.id,
            title=resource.attr("title"),
            description=resource.attr("description"),
            task_number=str(number) if number is not None else None,
            due_date=resource.attr("due_date"),
            start_date=resource.attr("start_date"),
            closed=bool(resource.attr("closed", False)),
            initial_estimate=resource.attr("initial_estimate"),
            project_id=resource.related_id("project"),
            assignee_id=resource.related_id("assignee"),
            workflow_status_id=resource.related_id("workflow_status"),
        )


class TimeEntry(ProductiveRecord):
    resource_type: ClassVar[str] = "time_entries"

    date: str | None = None
    time: int = 0  # minutes
    billable_time: int | None = None
    note: str | None = None
    approved: bool = False
    person_id: str | None = None
    service_id: str | None = None
    task_id: str | None = None

    @property
    def label(self) -> str:
        hours, minutes = divmod(self.time, 60)
        return f"{self.date or '?'} {hours}h{minutes:02d}m"

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> TimeEntry:
        return cls(
            id=resource.id,
            date=resource.attr("date"),
            time=int(resource.attr("time", 0)),
            billable_time=resource.attr("billable_time"),
            note=resource.attr("note"),
            approved=bool(resource.attr("approved", False)),
            person_id=resource.related_id("person"),
            service_id=resource.related_id("service"),
            task_id=resource.related_id("task"),
        )


BOOKING_METHODS = {1: "per_day", 2: "percentage", 3: "total_hours"}


class Booking(ProductiveRecord):
    resource_type: ClassVar[str] = "bookings"

    started_on: str | None = None
    ended_on: str | None = None
    time: int | None = None  # minutes per day
    total_time: int | None = None  # minutes
    percentage: int | None = None
    booking_method: str = "per_day"
    draft: bool = False
    note: str | None = None
    person_id: str | None = None
    service_id: str | None = None
    event_id: str | None = None

    @property
    def label(self) -> str:
        return f"{self.started_on or '?'}..{self.ended_on or '?'}"

    @classmethod
    def from_resource(cls, resource: JsonApiResource) -> Booking:
        return cls(
            id=resource.id,
            started_on=resource.attr("started_on"),
            ended_on=resource.attr("ended_on"),
            time=resource.attr("time"),
            total_time=resource.attr("total_time"),
            percentage=resource.attr("percentage"),
            booking_method=BOOKING_METHODS.get(
                int(resource.attr("booking_method_id", 1)), "unknown"
            ),
            draft=bool(resource.attr("draft", False)),
            note=resource.attr("note"),
            person_id=resource.related_id("person"),
            service_id=resource.related_id("service"),
            event_id=resource.related_id("event"),
        )


RECORD_TYPES: dict[str, type[ProductiveRecord]] = {
    record.resource_type: record
    for record in (Person, Company, Project, Service, Deal, Task, TimeEntry, Booking)
}


def to_record(resource: JsonApiResource) -> ProductiveRecord | JsonApiResource:
    """Typed record for a known resource type, the raw resource otherwise."""
    record_type = RECORD_TYPES.get(resource.type)
    if record_type is None:
        return resource
    return record_type.from_resource(resource)

"""Filter key to resource type mappings."""

from __future__ import annotations

from src.productive_core.resolution.protocols import ResourceType

DEFAULT_FILTER_TYPE_MAPPING: dict[str, ResourceType] = {
    "person_id": ResourceType.PERSON,
    "assignee_id": ResourceType.PERSON,
    "creator_id": ResourceType.PERSON,
    "responsible_id": ResourceType.PERSON,
    "project_id": ResourceType.PROJECT,
    "company_id": ResourceType.COMPANY,
    "deal_id": ResourceType.DEAL,
    "service_id": ResourceType.SERVICE,
}

# Filter keys whose resolution is scoped by another key of the same filter map:
# key -> scoping filter key
SCOPED_FILTER_KEYS: dict[str, str] = {
    "service_id": "project_id",
}

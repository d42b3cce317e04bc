"""
Productive.io API Client

Async JSON:API client, configuration and typed resource records.
"""

from src.productive_api.client import ProductiveApi, ProductiveApiError
from src.productive_api.config import ProductiveConfig, load_config
from src.productive_api.models import (
    ApiResponse,
    Booking,
    Company,
    Deal,
    JsonApiResource,
    PaginationMeta,
    Person,
    Project,
    Service,
    Task,
    TimeEntry,
)

__all__ = [
    "ProductiveApi",
    "ProductiveApiError",
    "ProductiveConfig",
    "load_config",
    "ApiResponse",
    "JsonApiResource",
    "PaginationMeta",
    "Person",
    "Company",
    "Project",
    "Service",
    "Deal",
    "Task",
    "TimeEntry",
    "Booking",
]

"""
Pytest configuration for unit tests.

Disables telemetry, isolates tests from a developer's Productive
credentials and provides a ProductiveApi double.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import pytest

from src.productive_api.client import ProductiveApi
from src.productive_api.models import ApiResponse


def pytest_configure(config):
    """Disable telemetry for unit tests."""
    # get_tracer() then hands out no-op tracers and no exporter is started
    os.environ["PRODUCTIVE_TELEMETRY_ENABLED"] = "false"


@pytest.fixture(autouse=True)
def _isolate_productive_env(monkeypatch, tmp_path):
    """Drop PRODUCTIVE_* variables and run from an empty directory (no .env)."""
    for key in list(os.environ):
        if key.startswith("PRODUCTIVE_") and key != "PRODUCTIVE_TELEMETRY_ENABLED":
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


def _response(resource_type: str, *items: dict[str, Any], meta: dict | None = None) -> ApiResponse:
    data = []
    for item in items:
        attributes = dict(item)
        resource_id = attributes.pop("id")
        relationships = attributes.pop("relationships", {})
        data.append(
            {
                "id": str(resource_id),
                "type": resource_type,
                "attributes": attributes,
                "relationships": relationships,
            }
        )
    return ApiResponse.model_validate({"data": data, "meta": meta or {}})


@pytest.fixture
def make_response() -> Callable[..., ApiResponse]:
    """make_response("people", {"id": 1, "first_name": "Jane"}) -> ApiResponse."""
    return _response


@pytest.fixture
def api() -> MagicMock:
    """ProductiveApi double; every endpoint method is an AsyncMock returning no data."""
    mock = MagicMock(spec=ProductiveApi)
    mock.organization_id = "42"
    empty = ApiResponse.model_validate({"data": []})
    for name in dir(ProductiveApi):
        if name.startswith(("get_", "create_", "update_", "delete_")):
            getattr(mock, name).return_value = empty
    return mock

"""Option types shared by resource commands."""

from __future__ import annotations

from typing import Annotated

import typer

PageOption = Annotated[int, typer.Option("--page", "-p", help="Page number", min=1)]
SizeOption = Annotated[
    int, typer.Option("--size", "-s", help="Results per page", min=1, max=200)
]
SortOption = Annotated[
    str | None, typer.Option("--sort", help="Sort field (prefix with - for descending)")
]
FilterOption = Annotated[
    list[str] | None,
    typer.Option("--filter", help="Raw API filter as key=value (repeatable)"),
]


def parse_filters(values: list[str] | None) -> dict[str, str]:
    """Parse repeated key=value options into a filter map."""
    filters: dict[str, str] = {}
    for item in values or []:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise typer.BadParameter(f"Expected key=value, got '{item}'", param_hint="--filter")
        filters[key.strip()] = value.strip()
    return filters

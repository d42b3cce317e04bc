"""
Identifier Classifier

Decides whether a string is already a canonical numeric ID, and detects
the resource type implied by well-known identifier formats.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from src.productive_core.resolution.protocols import ResourceType

# ASCII digits only; str.isdigit() would accept other Unicode digits
NUMERIC_ID_PATTERN = re.compile(r"[0-9]+")
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PROJECT_NUMBER_PATTERN = re.compile(r"(PRJ|P)-[0-9]+", re.IGNORECASE)
DEAL_NUMBER_PATTERN = re.compile(r"(DEAL|D)-[0-9]+", re.IGNORECASE)


@dataclass(frozen=True)
class DetectionResult:
    """Resource type inferred from an identifier's format."""

    type: ResourceType
    pattern: str  # "email", "project_number" or "deal_number"


def is_numeric_id(value: str) -> bool:
    """True iff `value` is a non-empty string of ASCII digits."""
    return isinstance(value, str) and NUMERIC_ID_PATTERN.fullmatch(value) is not None


def needs_resolution(value: str) -> bool:
    return not is_numeric_id(value)


def is_email(value: str) -> bool:
    return EMAIL_PATTERN.fullmatch(value) is not None


def is_project_number(value: str) -> bool:
    return PROJECT_NUMBER_PATTERN.fullmatch(value) is not None


def is_deal_number(value: str) -> bool:
    return DEAL_NUMBER_PATTERN.fullmatch(value) is not None


def detect_resource_type(query: str) -> DetectionResult | None:
    """
    Infer the resource type from the identifier's format.

    Args:
        query: Identifier as supplied by the caller

    Returns:
        DetectionResult, or None for numeric IDs and free text
    """
    value = query.strip()
    if not value or is_numeric_id(value):
        return None
    if is_email(value):
        return DetectionResult(ResourceType.PERSON, "email")
    if is_project_number(value):
        return DetectionResult(ResourceType.PROJECT, "project_number")
    if is_deal_number(value):
        return DetectionResult(ResourceType.DEAL, "deal_number")
    return None

"""
Resolution Errors
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Any

from src.productive_core.resolution.protocols import ResourceType, SearchMatch


class ResolveErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    AMBIGUOUS = "ambiguous"
    UNKNOWN_TYPE = "unknown_type"


class ResolveError(Exception):
    """
    A human-friendly identifier could not be turned into a single ID.

    Transport errors are never wrapped in this type.
    """

    def __init__(
        self,
        message: str,
        *,
        kind: ResolveErrorKind,
        query: str,
        type: ResourceType | None = None,
        suggestions: Sequence[SearchMatch] = (),
    ):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.query = query
        self.type = type
        self.suggestions = tuple(suggestions)

    @classmethod
    def not_found(cls, query: str, type: ResourceType) -> ResolveError:
        return cls(
            f'Could not find {type.value} matching "{query}"',
            kind=ResolveErrorKind.NOT_FOUND,
            query=query,
            type=type,
        )

    @classmethod
    def ambiguous(
        cls, query: str, type: ResourceType, matches: Sequence[SearchMatch]
    ) -> ResolveError:
        return cls(
            f'Multiple {type.value} matches for "{query}" ({len(matches)} found). '
            "Use a more specific query or the numeric ID.",
            kind=ResolveErrorKind.AMBIGUOUS,
            query=query,
            type=type,
            suggestions=matches,
        )

    @classmethod
    def unknown_type(cls, query: str) -> ResolveError:
        return cls(
            f'Cannot determine resource type for "{query}". Specify a type.',
            kind=ResolveErrorKind.UNKNOWN_TYPE,
            query=query,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "ResolveError",
            "kind": self.kind.value,
            "message": self.message,
            "query": self.query,
            "type": self.type.value if self.type else None,
            "suggestions": [match.to_dict() for match in self.suggestions],
        }

"""GraphQL types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ErrorLocation:
    """Error location in a GraphQL document."""

    line: int
    column: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ErrorLocation:
        return cls(line=int(data.get("line", 0)), column=int(data.get("column", 0)))


@dataclass(frozen=True)
class GraphQlError:
    """An error reported by the GraphQL service.

    ``locations`` points into the query document, ``path`` identifies the
    response field the error belongs to and ``extensions`` holds service
    defined metadata such as an error code.
    """

    message: str
    locations: list[ErrorLocation] | None = None
    path: list[str | int] | None = None
    extensions: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GraphQlError:
        raw_locations = data.get("locations")
        return cls(
            message=str(data.get("message", "")),
            locations=(
                [ErrorLocation.from_dict(loc) for loc in raw_locations]
                if raw_locations is not None
                else None
            ),
            path=data.get("path"),
            extensions=data.get("extensions"),
        )

    def __str__(self) -> str:
        return f"graphql: {self.message}"


@dataclass
class GraphQlResponse(Generic[T]):
    """GraphQL response envelope."""

    data: T | None = None
    errors: list[GraphQlError] | None = None

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

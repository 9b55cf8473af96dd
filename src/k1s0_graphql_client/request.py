"""GraphQL request model."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class GraphQlRequest:
    """A single GraphQL query or mutation.

    The query text is sent as-is; the service is responsible for validating it.
    ``variables`` stays ``None`` until the first variable is set.

    Args:
        query: GraphQL operation text.
        variables: Variables applied in order through :meth:`set_variable`.
        headers: Headers applied in order through :meth:`set_header`.
    """

    def __init__(
        self,
        query: str,
        *,
        variables: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self._query = query
        self._variables: dict[str, Any] | None = None
        self._headers: list[tuple[str, str]] = []
        for key, value in (variables or {}).items():
            self.set_variable(key, value)
        for name, header_value in (headers or {}).items():
            self.set_header(name, header_value)

    @property
    def query(self) -> str:
        return self._query

    @property
    def variables(self) -> dict[str, Any] | None:
        return self._variables

    @property
    def headers(self) -> list[tuple[str, str]]:
        """Request headers as ordered ``(name, value)`` pairs."""
        return self._headers

    def set_variable(self, key: str, value: Any) -> None:
        if self._variables is None:
            self._variables = {}
        self._variables[key] = value

    def set_header(self, key: str, value: str) -> None:
        """Replace every value of header ``key`` with ``value``."""
        lowered = key.lower()
        self._headers = [(name, v) for name, v in self._headers if name.lower() != lowered]
        self._headers.append((key, value))

    def add_header(self, key: str, value: str) -> None:
        """Append another value for header ``key``."""
        self._headers.append((key, value))

    def __repr__(self) -> str:
        return f"GraphQlRequest(query={self._query!r}, variables={self._variables!r})"

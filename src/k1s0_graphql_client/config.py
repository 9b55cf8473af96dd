"""GraphQL client configuration."""

from __future__ import annotations

from dataclasses import dataclass

import httpx


@dataclass(frozen=True)
class GraphQlClientConfig:
    """Configuration for :class:`HttpGraphQlClient`.

    ``transport`` is used as-is and never closed by the client. When it is
    omitted a new ``httpx.AsyncClient`` with ``timeout_seconds`` is opened for
    each request. ``close_connection`` asks the server to close the connection
    once the response has been read.
    """

    endpoint: str
    transport: httpx.AsyncClient | None = None
    close_connection: bool = False
    timeout_seconds: float = 10.0

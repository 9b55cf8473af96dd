"""GraphQL client abstraction."""

from __future__ import annotations

import asyncio
import json
from abc import ABC, abstractmethod
from typing import Any, TypeVar

from .codec import decode_request, decode_response, encode_request
from .exceptions import (
    CancellationError,
    DecodingError,
    GraphQlClientError,
    GraphQlErrors,
    NonSuccessStatusError,
)
from .request import GraphQlRequest
from .types import GraphQlError

T = TypeVar("T")

HTTP_OK = 200


class GraphQlClient(ABC):
    """Abstract GraphQL client."""

    @abstractmethod
    async def run(
        self,
        request: GraphQlRequest,
        result_type: type[T] | None = None,
        *,
        cancel: asyncio.Event | None = None,
    ) -> T | None:
        """Execute ``request`` and return its ``data`` decoded into ``result_type``.

        Args:
            request: The operation to send.
            result_type: Type the response ``data`` is decoded into. Pass
                ``None`` to skip decoding the payload.
            cancel: Setting this event aborts the call with
                :class:`CancellationError`.

        Raises:
            GraphQlErrors: If the service reported errors.
            GraphQlClientError: For cancellation, encoding, transport, read
                and decoding failures.
        """
        ...


def check_cancelled(cancel: asyncio.Event | None) -> None:
    if cancel is not None and cancel.is_set():
        raise CancellationError("request cancelled before it was sent")


def interpret_response(status_code: int, body: bytes, result_type: Any = None) -> Any:
    """Turn a raw status and body into the decoded payload or an exception.

    A body that cannot be decoded is reported by status when the status is not
    200, and by the decoding failure otherwise.
    """
    try:
        response = decode_response(body, result_type)
    except DecodingError as e:
        if status_code != HTTP_OK:
            raise NonSuccessStatusError(status_code, cause=e) from e
        raise

    if response.has_errors:
        raise GraphQlErrors(response.errors or [], data=response.data)

    return response.data


class InMemoryGraphQlClient(GraphQlClient):
    """In-memory GraphQL client for testing.

    Canned envelopes are keyed by query text and go through the same decoding
    as a real HTTP response.
    """

    def __init__(self) -> None:
        self._responses: dict[str, dict[str, Any]] = {}
        self.requests: list[GraphQlRequest] = []

    def set_response(
        self,
        query: str,
        data: Any = None,
        errors: list[GraphQlError] | None = None,
    ) -> None:
        envelope: dict[str, Any] = {}
        if data is not None:
            envelope["data"] = data
        if errors is not None:
            envelope["errors"] = [
                {
                    "message": e.message,
                    "locations": (
                        [{"line": loc.line, "column": loc.column} for loc in e.locations]
                        if e.locations is not None
                        else None
                    ),
                    "path": e.path,
                    "extensions": e.extensions,
                }
                for e in errors
            ]
        self._responses[query] = envelope

    async def run(
        self,
        request: GraphQlRequest,
        result_type: type[T] | None = None,
        *,
        cancel: asyncio.Event | None = None,
    ) -> T | None:
        check_cancelled(cancel)
        received = decode_request(encode_request(request))
        self.requests.append(received)

        if received.query not in self._responses:
            raise GraphQlClientError(
                f"Operation not found: {received.query}",
                GraphQlClientError.Code.OPERATION_NOT_FOUND,
            )
        body = json.dumps(self._responses[received.query]).encode("utf-8")
        return interpret_response(HTTP_OK, body, result_type)

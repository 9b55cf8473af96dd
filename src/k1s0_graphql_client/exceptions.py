"""graphql_client exceptions."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from enum import Enum, auto
from typing import Any

from .types import GraphQlError


class GraphQlClientError(Exception):
    """GraphQL client error."""

    class Code(Enum):
        CANCELLED = auto()
        ENCODING = auto()
        TRANSPORT = auto()
        READ = auto()
        NON_SUCCESS_STATUS = auto()
        DECODING = auto()
        SERVICE = auto()
        OPERATION_NOT_FOUND = auto()

    def __init__(
        self,
        message: str,
        code: GraphQlClientError.Code,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause


class CancellationError(GraphQlClientError):
    """The caller cancelled the request before or while it was sent."""

    def __init__(self, message: str = "request cancelled") -> None:
        super().__init__(message, GraphQlClientError.Code.CANCELLED)


class EncodingError(GraphQlClientError):
    """The request could not be serialized to JSON."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"encode body: {cause}", GraphQlClientError.Code.ENCODING, cause)


class TransportError(GraphQlClientError):
    """The HTTP call itself failed."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(
            str(cause) or type(cause).__name__,
            GraphQlClientError.Code.TRANSPORT,
            cause,
        )


class ResponseReadError(GraphQlClientError):
    """The response body could not be read."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"reading body: {cause}", GraphQlClientError.Code.READ, cause)


class NonSuccessStatusError(GraphQlClientError):
    """The server answered with a non-200 status and an undecodable body."""

    def __init__(self, status_code: int, cause: BaseException | None = None) -> None:
        self.status_code = status_code
        super().__init__(
            f"graphql: server returned a non-200 status code: {status_code}",
            GraphQlClientError.Code.NON_SUCCESS_STATUS,
            cause,
        )


class DecodingError(GraphQlClientError):
    """The response body is not a well-formed envelope."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"decoding response: {cause}", GraphQlClientError.Code.DECODING, cause)


class GraphQlErrors(GraphQlClientError, Sequence[GraphQlError]):
    """Errors returned by the GraphQL service.

    ``data`` holds whatever payload was decoded alongside the errors.
    """

    def __init__(self, errors: Sequence[GraphQlError], data: Any = None) -> None:
        self.errors: tuple[GraphQlError, ...] = tuple(errors)
        self.data = data
        super().__init__(self._render(), GraphQlClientError.Code.SERVICE)

    def _render(self) -> str:
        if not self.errors:
            return "no errors"
        return "graphql: " + "; ".join(e.message for e in self.errors)

    def __getitem__(self, index: Any) -> Any:
        return self.errors[index]

    def __len__(self) -> int:
        return len(self.errors)

    def __iter__(self) -> Iterator[GraphQlError]:
        return iter(self.errors)

"""k1s0 GraphQL client library."""

from .client import GraphQlClient, InMemoryGraphQlClient
from .codec import decode_request, decode_response, encode_request
from .config import GraphQlClientConfig
from .exceptions import (
    CancellationError,
    DecodingError,
    EncodingError,
    GraphQlClientError,
    GraphQlErrors,
    NonSuccessStatusError,
    ResponseReadError,
    TransportError,
)
from .http_client import HttpGraphQlClient
from .request import GraphQlRequest
from .types import ErrorLocation, GraphQlError, GraphQlResponse

__all__ = [
    "CancellationError",
    "DecodingError",
    "EncodingError",
    "ErrorLocation",
    "GraphQlClient",
    "GraphQlClientConfig",
    "GraphQlClientError",
    "GraphQlError",
    "GraphQlErrors",
    "GraphQlRequest",
    "GraphQlResponse",
    "HttpGraphQlClient",
    "InMemoryGraphQlClient",
    "NonSuccessStatusError",
    "ResponseReadError",
    "TransportError",
    "decode_request",
    "decode_response",
    "encode_request",
]

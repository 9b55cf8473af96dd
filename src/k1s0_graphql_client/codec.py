"""JSON wire format for GraphQL requests and response envelopes."""

from __future__ import annotations

import dataclasses
import functools
import json
import types
import typing
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from .exceptions import DecodingError, EncodingError
from .request import GraphQlRequest
from .types import GraphQlError, GraphQlResponse

_SEQUENCE_ORIGINS = (list, set, frozenset, tuple, Sequence)


def encode_request(request: GraphQlRequest) -> bytes:
    """Serialize ``request`` into a ``{"query", "variables"}`` JSON body.

    Raises:
        EncodingError: If a variable value cannot be represented as JSON.
    """
    payload = {"query": request.query, "variables": request.variables}
    try:
        return json.dumps(payload, allow_nan=False, default=to_jsonable_python).encode("utf-8")
    except (TypeError, ValueError, PydanticSerializationError) as e:
        raise EncodingError(e) from e


def decode_request(body: bytes) -> GraphQlRequest:
    """Parse a body produced by :func:`encode_request` back into a request."""
    try:
        payload = json.loads(body)
    except ValueError as e:
        raise DecodingError(e) from e
    if not isinstance(payload, dict) or not isinstance(payload.get("query"), str):
        raise DecodingError(ValueError("request body must be an object with a string query"))
    variables = payload.get("variables")
    if variables is not None and not isinstance(variables, dict):
        raise DecodingError(ValueError("request variables must be an object"))
    request = GraphQlRequest(payload["query"])
    for key, value in (variables or {}).items():
        request.set_variable(key, value)
    return request


def decode_response(body: bytes, result_type: Any = None) -> GraphQlResponse[Any]:
    """Parse a response envelope.

    Args:
        body: Raw response body.
        result_type: Type the ``data`` member is validated into. When ``None``
            the payload is parsed but discarded.

    Returns:
        The decoded envelope. ``errors`` keeps the order sent by the service.

    Raises:
        DecodingError: If the body is not a well-formed envelope or ``data``
            does not fit ``result_type``.
    """
    try:
        envelope = json.loads(body)
    except ValueError as e:
        raise DecodingError(e) from e
    if envelope is None:
        return GraphQlResponse()
    if not isinstance(envelope, dict):
        raise DecodingError(
            ValueError(f"response envelope must be an object, got {type(envelope).__name__}")
        )

    errors = _decode_errors(envelope.get("errors"))

    data = None
    raw_data = envelope.get("data")
    if result_type is not None and raw_data is not None:
        try:
            data = _type_adapter(result_type).validate_json(
                json.dumps(_match_keys(raw_data, result_type)), strict=True
            )
        except ValidationError as e:
            raise DecodingError(e) from e

    return GraphQlResponse(data=data, errors=errors)


def _decode_errors(raw: Any) -> list[GraphQlError] | None:
    if raw is None:
        return None
    if not isinstance(raw, list) or not all(isinstance(item, dict) for item in raw):
        raise DecodingError(ValueError("errors must be a list of objects"))
    try:
        return [GraphQlError.from_dict(item) for item in raw]
    except (TypeError, ValueError, AttributeError) as e:
        raise DecodingError(e) from e


def _match_keys(value: Any, target: Any) -> Any:
    """Rename object keys to the declared field names of ``target``.

    An exact key match wins; otherwise keys are matched ignoring case.
    """
    origin = typing.get_origin(target)
    args = typing.get_args(target)

    if origin is typing.Annotated:
        return _match_keys(value, args[0])
    if origin is typing.Union or origin is types.UnionType:
        members = [a for a in args if a is not type(None)]
        return _match_keys(value, members[0]) if len(members) == 1 else value

    if isinstance(value, list):
        if origin in _SEQUENCE_ORIGINS and args:
            if origin is tuple and not (len(args) == 2 and args[1] is Ellipsis):
                return value
            return [_match_keys(item, args[0]) for item in value]
        return value

    if not isinstance(value, dict):
        return value

    if origin is dict and len(args) == 2:
        return {k: _match_keys(v, args[1]) for k, v in value.items()}

    fields = _field_types(target)
    if not fields:
        return value
    by_lower = {name.lower(): name for name in fields}
    matched: dict[str, Any] = {}
    for key, item in value.items():
        name = key if key in fields else by_lower.get(key.lower(), key)
        if name != key and name in value:
            continue
        matched[name] = _match_keys(item, fields[name]) if name in fields else item
    return matched


def _field_types(target: Any) -> dict[str, Any]:
    if not isinstance(target, type):
        return {}
    if issubclass(target, BaseModel):
        return {
            (info.alias or name): info.annotation for name, info in target.model_fields.items()
        }
    if dataclasses.is_dataclass(target):
        try:
            hints = typing.get_type_hints(target)
        except (NameError, TypeError):
            hints = {}
        return {f.name: hints.get(f.name, Any) for f in dataclasses.fields(target)}
    return {}


@functools.lru_cache(maxsize=256)
def _type_adapter(result_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(result_type)

"""Envelope codec tests."""

import json
import uuid
from dataclasses import dataclass

import pytest
from pydantic import BaseModel

from k1s0_graphql_client import (
    DecodingError,
    EncodingError,
    ErrorLocation,
    GraphQlRequest,
    decode_request,
    decode_response,
    encode_request,
)
from k1s0_graphql_client.codec import _type_adapter


@dataclass
class FieldResult:
    Test: str


@dataclass
class Viewer:
    login: str


@dataclass
class ViewerResult:
    viewer: Viewer


@dataclass
class CountResult:
    count: int


class User(BaseModel):
    id: str
    name: str


class UserResult(BaseModel):
    user: User | None = None


def test_encode_without_variables() -> None:
    body = encode_request(GraphQlRequest("query { test }"))
    assert json.loads(body) == {"query": "query { test }", "variables": None}


def test_encode_with_variables() -> None:
    request = GraphQlRequest("query($id: ID!) { user(id: $id) { name } }")
    request.set_variable("id", "123")
    request.set_variable("tags", ["a", "b"])
    assert json.loads(encode_request(request)) == {
        "query": "query($id: ID!) { user(id: $id) { name } }",
        "variables": {"id": "123", "tags": ["a", "b"]},
    }


def test_encode_converts_uuid() -> None:
    ident = uuid.UUID("12345678-1234-5678-1234-567812345678")
    request = GraphQlRequest("", variables={"id": ident})
    assert json.loads(encode_request(request))["variables"] == {"id": str(ident)}


def test_encode_cyclic_variable_fails() -> None:
    loop: dict = {}
    loop["self"] = loop
    request = GraphQlRequest("", variables={"loop": loop})
    with pytest.raises(EncodingError) as exc_info:
        encode_request(request)
    assert str(exc_info.value).startswith("encode body: ")


def test_encode_unknown_type_fails() -> None:
    request = GraphQlRequest("", variables={"thing": object()})
    with pytest.raises(EncodingError):
        encode_request(request)


def test_encode_nan_fails() -> None:
    request = GraphQlRequest("", variables={"value": float("nan")})
    with pytest.raises(EncodingError):
        encode_request(request)


def test_request_round_trip() -> None:
    request = GraphQlRequest(
        "mutation($input: Input!) { save(input: $input) { id } }",
        variables={"input": {"name": "x", "count": 3, "active": False, "note": None}},
    )
    decoded = decode_request(encode_request(request))
    assert decoded.query == request.query
    assert decoded.variables == request.variables


def test_request_round_trip_without_variables() -> None:
    decoded = decode_request(encode_request(GraphQlRequest("{ ping }")))
    assert decoded.query == "{ ping }"
    assert decoded.variables is None


def test_decode_request_rejects_non_object() -> None:
    with pytest.raises(DecodingError):
        decode_request(b"[]")


def test_decode_empty_body() -> None:
    with pytest.raises(DecodingError) as exc_info:
        decode_response(b"", FieldResult)
    assert str(exc_info.value) == "decoding response: Expecting value: line 1 column 1 (char 0)"


def test_decode_data_matches_field_case_insensitively() -> None:
    response = decode_response(b'{"data":{"test":"value in response"}}', FieldResult)
    assert response.data == FieldResult(Test="value in response")
    assert response.has_errors is False


def test_decode_nested_data() -> None:
    response = decode_response(b'{"data":{"Viewer":{"LOGIN":"octo"}}}', ViewerResult)
    assert response.data == ViewerResult(viewer=Viewer(login="octo"))


def test_decode_list_data() -> None:
    response = decode_response(b'{"data":[{"Login":"a"},{"login":"b"}]}', list[Viewer])
    assert response.data == [Viewer(login="a"), Viewer(login="b")]


def test_decode_into_pydantic_model() -> None:
    body = b'{"data":{"user":{"id":"1","name":"test"}}}'
    response = decode_response(body, UserResult)
    assert response.data is not None
    assert response.data.user == User(id="1", name="test")


def test_decode_without_result_type_discards_data() -> None:
    response = decode_response(b'{"data":{"test":"value"}}')
    assert response.data is None
    assert response.errors is None


def test_decode_empty_envelope() -> None:
    response = decode_response(b"{}", FieldResult)
    assert response.data is None
    assert response.errors is None
    assert response.has_errors is False


def test_decode_null_envelope() -> None:
    response = decode_response(b"null", FieldResult)
    assert response.data is None
    assert response.has_errors is False


def test_decode_errors_preserve_order_and_fields() -> None:
    body = json.dumps(
        {
            "errors": [
                {
                    "message": "first",
                    "locations": [{"line": 1, "column": 5}],
                    "path": ["users", 0, "name"],
                    "extensions": {"code": "NOT_FOUND"},
                },
                {"message": "second"},
            ]
        }
    ).encode()
    response = decode_response(body)
    assert response.errors is not None
    assert [e.message for e in response.errors] == ["first", "second"]
    first = response.errors[0]
    assert first.locations == [ErrorLocation(line=1, column=5)]
    assert first.path == ["users", 0, "name"]
    assert first.extensions == {"code": "NOT_FOUND"}
    assert response.errors[1].locations is None


def test_decode_partial_data_with_errors() -> None:
    body = b'{"data":{"test":"partial"},"errors":[{"message":"boom"}]}'
    response = decode_response(body, FieldResult)
    assert response.data == FieldResult(Test="partial")
    assert response.has_errors is True


def test_decode_non_object_envelope() -> None:
    with pytest.raises(DecodingError):
        decode_response(b"[1, 2]")


def test_decode_malformed_errors() -> None:
    with pytest.raises(DecodingError):
        decode_response(b'{"errors":"oops"}')


def test_decode_data_type_mismatch() -> None:
    with pytest.raises(DecodingError):
        decode_response(b'{"data":{"count":"many"}}', CountResult)


def test_decode_rejects_numeric_string_for_int_field() -> None:
    with pytest.raises(DecodingError):
        decode_response(b'{"data":{"count":"5"}}', CountResult)


def test_decode_int_field() -> None:
    response = decode_response(b'{"data":{"Count":5}}', CountResult)
    assert response.data == CountResult(count=5)


def test_type_adapter_is_reused() -> None:
    assert _type_adapter(CountResult) is _type_adapter(CountResult)

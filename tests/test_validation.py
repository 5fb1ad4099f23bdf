"""
test_validation.py - 请求模型解析与错误映射
"""

import pytest

from todo_api.todo.errors import (
    ErrorCodes,
    InvalidBodyError,
    InvalidParameterError,
    MissingParameterError,
)
from todo_api.todo.schemas import CreateRequest, DeleteRequest, UpdateRequest
from todo_api.todo.validation import parse_request


class TestParseBody:
    def test_empty_body_reports_missing_field(self):
        with pytest.raises(MissingParameterError):
            parse_request(CreateRequest, b"")
        with pytest.raises(MissingParameterError):
            parse_request(CreateRequest, b"  \n")

    def test_json_object(self):
        body = parse_request(CreateRequest, b'{"message": "hi"}')

        assert body == CreateRequest(message="hi")

    def test_extra_fields_ignored(self):
        body = parse_request(DeleteRequest, b'{"id": "1", "message": "unused"}')

        assert body.id == "1"

    def test_invalid_json(self):
        with pytest.raises(InvalidBodyError) as exc_info:
            parse_request(CreateRequest, b"{not json")
        assert exc_info.value.code == ErrorCodes.INVALID_BODY
        assert exc_info.value.message == "Invalid request body: not valid JSON."

    def test_non_object_json(self):
        with pytest.raises(InvalidBodyError) as exc_info:
            parse_request(CreateRequest, b'["message"]')
        assert exc_info.value.message == "Invalid request body: expected a JSON object."


class TestFieldErrors:
    def test_all_present(self):
        body = parse_request(UpdateRequest, b'{"message": "m", "id": "1"}')

        assert (body.id, body.message) == ("1", "m")

    def test_missing_field_message(self):
        with pytest.raises(MissingParameterError) as exc_info:
            parse_request(UpdateRequest, b'{"id": "1"}')

        err = exc_info.value
        assert str(err) == "Missing request body parameter: message."
        assert err.to_dict() == {
            "code": ErrorCodes.MISSING_PARAMETER,
            "error": "Missing request body parameter: message.",
            "field": "message",
        }

    def test_first_missing_field_reported(self):
        with pytest.raises(MissingParameterError) as exc_info:
            parse_request(UpdateRequest, b"{}")
        assert exc_info.value.context["field"] == "message"

    def test_missing_checked_before_type(self):
        """一个字段类型错误、另一个缺失时，报缺失"""
        with pytest.raises(MissingParameterError) as exc_info:
            parse_request(UpdateRequest, b'{"message": 1}')
        assert exc_info.value.context["field"] == "id"

    def test_non_string_value(self):
        with pytest.raises(InvalidParameterError) as exc_info:
            parse_request(DeleteRequest, b'{"id": 42}')
        assert exc_info.value.status_code == 400
        assert exc_info.value.context["field"] == "id"

    def test_null_value_is_invalid(self):
        with pytest.raises(InvalidParameterError):
            parse_request(CreateRequest, b'{"message": null}')

    def test_empty_string_is_present(self):
        assert parse_request(CreateRequest, b'{"message": ""}').message == ""

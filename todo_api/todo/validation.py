"""
请求体解析：pydantic 请求模型校验 + 错误映射

ValidationError 中的第一条 missing 优先于类型错误，
与“按字段顺序报告第一个缺失字段”的约定一致。
"""

from typing import TypeVar

from pydantic import BaseModel, ValidationError

from todo_api.todo.errors import (
    InvalidBodyError,
    InvalidParameterError,
    MissingParameterError,
    TodoApiError,
)

RequestModel = TypeVar("RequestModel", bound=BaseModel)

_BODY_ERROR_TYPES = {"json_invalid", "json_type", "model_type", "model_attributes_type"}


def parse_request(model: type[RequestModel], raw: bytes) -> RequestModel:
    """用请求模型解析原始 body，空 body 视为 {}"""
    try:
        return model.model_validate_json(raw.strip() or b"{}")
    except ValidationError as e:
        raise _to_api_error(e) from e


def _to_api_error(exc: ValidationError) -> TodoApiError:
    errors = exc.errors()

    for err in errors:
        if err["type"] in _BODY_ERROR_TYPES:
            reason = "not valid JSON" if err["type"] == "json_invalid" else "expected a JSON object"
            return InvalidBodyError(reason)

    for err in errors:
        if err["type"] == "missing":
            return MissingParameterError(str(err["loc"][0]))

    first = errors[0]
    if not first["loc"]:
        return InvalidBodyError(first["msg"])
    return InvalidParameterError(str(first["loc"][0]))

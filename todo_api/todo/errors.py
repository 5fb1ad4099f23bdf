"""
Todo 接口错误定义

校验失败一律在访问 Redis 之前抛出；Redis 自身的异常不在此处包装，直接向上传播。
"""

from typing import Any


class ErrorCodes:
    """错误码常量"""

    MISSING_PARAMETER = "MISSING_PARAMETER"
    INVALID_PARAMETER = "INVALID_PARAMETER"
    INVALID_BODY = "INVALID_BODY"
    STORE_ERROR = "STORE_ERROR"


class TodoApiError(Exception):
    """
    请求级错误基类，由 main 中注册的异常处理器渲染为 JSON。

    Usage:
        raise TodoApiError(ErrorCodes.INVALID_BODY, "...", status_code=400)
    """

    def __init__(self, code: str, message: str, *, status_code: int = 400, **context: Any) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code
        self.context = context
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """响应体 / 日志序列化"""
        return {"code": self.code, "error": self.message, **self.context}


class MissingParameterError(TodoApiError):
    """请求体缺少必填字段"""

    def __init__(self, field: str) -> None:
        super().__init__(
            ErrorCodes.MISSING_PARAMETER,
            f"Missing request body parameter: {field}.",
            field=field,
        )


class InvalidParameterError(TodoApiError):
    """字段存在但类型不对"""

    def __init__(self, field: str, expected: str = "string") -> None:
        super().__init__(
            ErrorCodes.INVALID_PARAMETER,
            f"Request body parameter {field} must be a {expected}.",
            field=field,
        )


class InvalidBodyError(TodoApiError):
    """请求体不是合法的 JSON 对象"""

    def __init__(self, reason: str) -> None:
        super().__init__(ErrorCodes.INVALID_BODY, f"Invalid request body: {reason}.")

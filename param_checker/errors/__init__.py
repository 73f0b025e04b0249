"""param_checker - 异常体系.

两类异常:
- ``SchemaError``: 声明期抛出,表示路由的参数声明写错了,属于编程错误;
- ``ValidationError``: 请求期抛出,表示客户端传入的某个参数不合法.

二者共享 ``AppError`` 基类,由 ``ExceptionMetadata`` 描述分类、严重度与默认状态码.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from werkzeug.exceptions import HTTPException

from param_checker.constants import HttpStatus
from param_checker.constants.system_constants import ErrorCategory, ErrorMessages, ErrorSeverity

SCHEMA_ERROR_PREFIX = "param_checker"


@dataclass(frozen=True, slots=True)
class ExceptionMetadata:
    """异常类级别的元信息."""

    status_code: int
    category: ErrorCategory
    severity: ErrorSeverity
    default_message_key: str


class AppError(Exception):
    """param_checker 异常基类.

    Args:
        message: 错误文案,为空时按 ``message_key`` 查 ``ErrorMessages``.
        message_key: 文案键,默认取元信息中的键.
        extra: 写入结构化日志的附加字段.
        status_code: 覆盖元信息中的 HTTP 状态码.

    """

    metadata = ExceptionMetadata(
        status_code=HttpStatus.INTERNAL_SERVER_ERROR,
        category=ErrorCategory.SYSTEM,
        severity=ErrorSeverity.HIGH,
        default_message_key="INTERNAL_ERROR",
    )

    def __init__(
        self,
        message: str | None = None,
        *,
        message_key: str | None = None,
        extra: Mapping[str, object] | None = None,
        status_code: int | None = None,
    ) -> None:
        self.message_key = message_key or self.metadata.default_message_key
        self.message = message or getattr(ErrorMessages, self.message_key, ErrorMessages.INTERNAL_ERROR)
        self.extra = dict(extra or {})
        self.status_code = int(status_code or self.metadata.status_code)
        super().__init__(self.message)

    @property
    def severity(self) -> ErrorSeverity:
        return self.metadata.severity

    @property
    def category(self) -> ErrorCategory:
        return self.metadata.category

    @property
    def recoverable(self) -> bool:
        """请求期错误可由客户端修正后重试,声明期错误不可恢复."""
        return self.severity in (ErrorSeverity.LOW, ErrorSeverity.MEDIUM)


class SchemaError(AppError):
    """参数声明非法.

    在 ``ParamScope.required/optional`` 或扩展登记路由时立即抛出,
    应让应用启动失败;请求处理期间不会出现,也不注册错误处理器.

    Attributes:
        param: 出错的参数名.
        option: 出错的选项键(如 ``"regexp"``),缺失或未知类型时为 ``"type"``.
        detail: 不带前缀的错误描述.

    """

    metadata = ExceptionMetadata(
        status_code=HttpStatus.INTERNAL_SERVER_ERROR,
        category=ErrorCategory.SYSTEM,
        severity=ErrorSeverity.CRITICAL,
        default_message_key="SCHEMA_ERROR",
    )

    def __init__(self, param: str, detail: str, *, option: str | None = None) -> None:
        self.param = param
        self.option = option
        self.detail = detail
        super().__init__(f"{SCHEMA_ERROR_PREFIX}: {detail}", extra={"param": param, "option": option})


class ValidationError(AppError):
    """请求参数未通过类型转换或约束校验.

    Attributes:
        reason: 失败原因(见 ``ValidationReasons``).
        param: 第一个失败的参数名.
        options: 该参数声明时的选项(只读).

    """

    metadata = ExceptionMetadata(
        status_code=HttpStatus.BAD_REQUEST,
        category=ErrorCategory.VALIDATION,
        severity=ErrorSeverity.LOW,
        default_message_key="VALIDATION_ERROR",
    )

    def __init__(
        self,
        reason: str,
        *,
        param: str | None = None,
        options: Mapping[str, object] | None = None,
    ) -> None:
        self.reason = reason
        self.param = param
        self.options: Mapping[str, object] = MappingProxyType(dict(options or {}))
        super().__init__(reason, extra={"param": param, "reason": reason})

    def __str__(self) -> str:
        return self.reason if self.param is None else f"{self.param}: {self.reason}"


def map_exception_to_status(error: Exception, default: int = HttpStatus.INTERNAL_SERVER_ERROR) -> int:
    """返回异常对应的 HTTP 状态码,无法识别时返回 ``default``."""
    if isinstance(error, AppError):
        return error.status_code
    if isinstance(error, HTTPException) and error.code is not None:
        return int(error.code)
    return default


__all__ = [
    "SCHEMA_ERROR_PREFIX",
    "AppError",
    "ExceptionMetadata",
    "SchemaError",
    "ValidationError",
    "map_exception_to_status",
]

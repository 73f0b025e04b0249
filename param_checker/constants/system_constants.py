"""param_checker - 系统常量定义.

统一管理错误分类、严重度与错误文案,避免魔法字符串散落在各模块中.
"""

from enum import Enum


class ErrorCategory(Enum):
    """错误分类枚举."""

    VALIDATION = "validation"
    SYSTEM = "system"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """错误严重程度枚举."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorMessages:
    """错误消息常量."""

    INTERNAL_ERROR = "服务器内部错误"
    VALIDATION_ERROR = "参数校验失败"
    SCHEMA_ERROR = "参数声明非法"


class ValidationReasons:
    """请求期校验失败原因.

    原因文案对客户端可见,保持英文短语以便调用方按字符串匹配.
    """

    NOT_FOUND = "field not found"
    TYPE_EXPECTED = "{type} expected"
    WRONG_FORMAT = "wrong format"
    UUID_EXPECTED = "uuid expected"
    NOT_IN_RANGE = "not in {range!r}"
    GREATER_THAN = "greater than {max}"
    SMALLER_THAN = "smaller than {min}"
    FILE_EXPECTED = "File expected"
    INVALID_ENUMERATION = "invalid enumeration member"


__all__ = [
    "ErrorCategory",
    "ErrorMessages",
    "ErrorSeverity",
    "ValidationReasons",
]

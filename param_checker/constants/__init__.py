"""常量模块.

集中管理参数类型、HTTP 方法、错误分类与错误文案等常量.
"""

from http import HTTPStatus as HttpStatus

from .field_types import (
    DEFAULT_DELIMITER,
    DEFAULT_SEPARATOR,
    SUPPORTED_OPTIONS,
    TYPE_ALIASES,
    FieldMode,
    FieldType,
    Presence,
)
from .http_methods import HttpMethod
from .system_constants import ErrorCategory, ErrorMessages, ErrorSeverity, ValidationReasons

__all__ = [
    "DEFAULT_DELIMITER",
    "DEFAULT_SEPARATOR",
    "SUPPORTED_OPTIONS",
    "TYPE_ALIASES",
    "ErrorCategory",
    "ErrorMessages",
    "ErrorSeverity",
    "FieldMode",
    "FieldType",
    "HttpMethod",
    "HttpStatus",
    "Presence",
    "ValidationReasons",
]

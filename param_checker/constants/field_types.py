"""参数声明相关的枚举与选项常量."""

from __future__ import annotations

import uuid
from datetime import date, datetime, time
from enum import Enum

from werkzeug.datastructures import FileStorage


class FieldType(str, Enum):
    """参数语义类型(封闭集合).

    Boolean 与 Uuid 为伪类型,宿主语言没有一一对应的原生类型.
    """

    INTEGER = "Integer"
    FLOAT = "Float"
    STRING = "String"
    BOOLEAN = "Boolean"
    UUID = "Uuid"
    DATE = "Date"
    TIME = "Time"
    DATETIME = "DateTime"
    ARRAY = "Array"
    HASH = "Hash"
    FILE = "File"

    def __str__(self) -> str:
        return self.value


class FieldMode(str, Enum):
    """参数是否必填."""

    REQUIRED = "required"
    OPTIONAL = "optional"

    def __str__(self) -> str:
        return self.value


class Presence(Enum):
    """原始输入中某个键的存在形态."""

    ABSENT = "absent"
    NULL = "null"
    VALUE = "value"


# 宿主类型 -> 语义类型
TYPE_ALIASES: dict[object, FieldType] = {
    int: FieldType.INTEGER,
    float: FieldType.FLOAT,
    str: FieldType.STRING,
    bool: FieldType.BOOLEAN,
    uuid.UUID: FieldType.UUID,
    datetime: FieldType.DATETIME,
    date: FieldType.DATE,
    time: FieldType.TIME,
    list: FieldType.ARRAY,
    dict: FieldType.HASH,
    FileStorage: FieldType.FILE,
}

SUPPORTED_OPTIONS: tuple[str, ...] = (
    "type",
    "default",
    "values",
    "min",
    "max",
    "range",
    "regexp",
    "delimiter",
    "separator",
)

COLLECTION_TYPES: frozenset[FieldType] = frozenset({FieldType.ARRAY, FieldType.HASH})
NON_SCALAR_TYPES: frozenset[FieldType] = frozenset({FieldType.FILE, FieldType.ARRAY, FieldType.HASH})
NUMERIC_TYPES: frozenset[FieldType] = frozenset({FieldType.INTEGER, FieldType.FLOAT})

DEFAULT_DELIMITER = ","
DEFAULT_SEPARATOR = ":"


__all__ = [
    "COLLECTION_TYPES",
    "DEFAULT_DELIMITER",
    "DEFAULT_SEPARATOR",
    "NON_SCALAR_TYPES",
    "NUMERIC_TYPES",
    "SUPPORTED_OPTIONS",
    "TYPE_ALIASES",
    "FieldMode",
    "FieldType",
    "Presence",
]

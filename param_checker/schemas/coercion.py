"""请求期类型转换.

说明:
- 每个语义类型一个转换函数,统一通过 ``coerce`` 分发.
- 已经是目标类型的值原样返回(幂等).
- 任何转换失败(含解析过程中的内部异常)都会被归一为 ``"<Type> expected"``.
"""

from __future__ import annotations

import math
import re
import uuid
from collections.abc import Callable, Mapping, Sequence
from datetime import date, datetime, time

from werkzeug.datastructures import FileStorage

from param_checker.constants.field_types import DEFAULT_DELIMITER, DEFAULT_SEPARATOR, FieldType
from param_checker.constants.system_constants import ValidationReasons
from param_checker.errors import ValidationError
from param_checker.schemas.fields import ArrayFieldSpec, FieldSpec, HashFieldSpec

_FALSE_PATTERN = re.compile(r"(false|f|no|n|0)$", re.IGNORECASE)
_TRUE_PATTERN = re.compile(r"(true|t|yes|y|1)$", re.IGNORECASE)

# fromisoformat 失败后的兜底格式
_DATETIME_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %H:%M",
    "%Y%m%dT%H%M%S",
)
_DATE_FORMATS: tuple[str, ...] = ("%Y/%m/%d", "%Y%m%d", "%d %b %Y", "%b %d %Y")
_TIME_FORMATS: tuple[str, ...] = ("%H:%M:%S", "%H:%M", "%H%M%S", "%I:%M %p", "%I:%M:%S %p")

Coercer = Callable[[object, FieldSpec], object]


class CoercionError(ValueError):
    """转换失败的内部信号,由 ``coerce`` 统一包装为 ValidationError."""


def _require_text(value: object) -> str:
    if isinstance(value, (bytes, bytearray)):
        return value.decode()
    if not isinstance(value, str):
        raise CoercionError(f"cannot parse {type(value).__name__}")
    return value.strip()


def _coerce_integer(value: object, _spec: FieldSpec) -> int:
    if isinstance(value, bool):
        raise CoercionError("bool is not an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise CoercionError("float is not integral")
        return int(value)
    return int(_require_text(value), 10)


def _coerce_float(value: object, _spec: FieldSpec) -> float:
    if isinstance(value, bool):
        raise CoercionError("bool is not a float")
    if isinstance(value, (int, float)):
        result = float(value)
    else:
        result = float(_require_text(value))
    if not math.isfinite(result):
        raise CoercionError("non-finite float")
    return result


def _coerce_string(value: object, _spec: FieldSpec) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return value.decode()
    if isinstance(value, (Mapping, list, FileStorage)):
        raise CoercionError("structured value is not a string")
    return str(value)


def _coerce_uuid(value: object, spec: FieldSpec) -> str:
    if isinstance(value, uuid.UUID):
        return value.hex
    return _coerce_string(value, spec)


def _coerce_boolean(value: object, _spec: FieldSpec) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (Mapping, list, FileStorage)):
        raise CoercionError("structured value is not a boolean")
    text = value.decode() if isinstance(value, (bytes, bytearray)) else str(value)
    if _FALSE_PATTERN.search(text):
        return False
    if _TRUE_PATTERN.search(text):
        return True
    raise CoercionError(f"cannot coerce {text!r} to Boolean")


def _parse_with_formats(text: str, formats: Sequence[str]) -> datetime:
    for fmt in formats:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    raise CoercionError(f"unrecognized timestamp {text!r}")


def _parse_datetime(text: str) -> datetime:
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return _parse_with_formats(text, _DATETIME_FORMATS)


def _coerce_datetime(value: object, _spec: FieldSpec) -> datetime:
    if isinstance(value, datetime):
        return value
    return _parse_datetime(_require_text(value))


def _coerce_date(value: object, _spec: FieldSpec) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = _require_text(value)
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return _parse_datetime(text).date()
    except CoercionError:
        return _parse_with_formats(text, _DATE_FORMATS).date()


def _coerce_time(value: object, _spec: FieldSpec) -> time:
    if isinstance(value, time):
        return value
    text = _require_text(value)
    try:
        return time.fromisoformat(text)
    except ValueError:
        pass
    try:
        return _parse_datetime(text).timetz()
    except CoercionError:
        return _parse_with_formats(text, _TIME_FORMATS).time()


def _split(text: str, delimiter: str | re.Pattern[str]) -> list[str]:
    parts = delimiter.split(text) if isinstance(delimiter, re.Pattern) else text.split(delimiter)
    # 末尾的空片段不保留,"a,b," 与 "a,b" 等价
    while parts and parts[-1] == "":
        parts.pop()
    return parts


def _coerce_array(value: object, spec: FieldSpec) -> list[object] | list[str]:
    if isinstance(value, list):
        return value
    if isinstance(value, tuple):
        return list(value)
    delimiter = spec.delimiter if isinstance(spec, ArrayFieldSpec) else DEFAULT_DELIMITER
    return _split(_require_text(value), delimiter)


def _coerce_hash(value: object, spec: FieldSpec) -> dict[str, object]:
    if isinstance(value, dict):
        return value
    if isinstance(value, Mapping):
        return dict(value)
    delimiter = spec.delimiter if isinstance(spec, ArrayFieldSpec) else DEFAULT_DELIMITER
    separator = spec.separator if isinstance(spec, HashFieldSpec) else DEFAULT_SEPARATOR
    result: dict[str, object] = {}
    for segment in _split(_require_text(value), delimiter):
        key, found, item = segment.partition(separator)
        result[key] = item if found else None
    return result


def _coerce_file(value: object, _spec: FieldSpec) -> object:
    if isinstance(value, FileStorage):
        return value
    if isinstance(value, Mapping) and "tempfile" in value:
        return value
    raise CoercionError("upload handle expected")


COERCERS: dict[FieldType, Coercer] = {
    FieldType.INTEGER: _coerce_integer,
    FieldType.FLOAT: _coerce_float,
    FieldType.STRING: _coerce_string,
    FieldType.UUID: _coerce_uuid,
    FieldType.BOOLEAN: _coerce_boolean,
    FieldType.DATE: _coerce_date,
    FieldType.TIME: _coerce_time,
    FieldType.DATETIME: _coerce_datetime,
    FieldType.ARRAY: _coerce_array,
    FieldType.HASH: _coerce_hash,
    FieldType.FILE: _coerce_file,
}


def coerce(value: object, spec: FieldSpec) -> object:
    """把原始值转换为声明的语义类型.

    Args:
        value: 原始输入值(非 None).
        spec: 已编译的参数声明.

    Returns:
        转换后的值.

    Raises:
        ValidationError: 转换失败时抛出,原因为 ``"<Type> expected"``.

    """
    coercer = COERCERS[spec.field_type]
    try:
        return coercer(value, spec)
    except (ValueError, TypeError, OverflowError, UnicodeDecodeError, AttributeError) as exc:
        reason = ValidationReasons.TYPE_EXPECTED.format(type=spec.field_type)
        raise ValidationError(reason, param=spec.name, options=spec.options) from exc


__all__ = ["COERCERS", "CoercionError", "coerce"]

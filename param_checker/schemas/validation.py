"""请求期校验引擎.

按声明顺序逐个处理参数: 存在性判定 -> 类型转换 -> 约束校验 -> 原地回写.
遇到第一个失败的参数即抛出 ``ValidationError``,调用方应视为整个请求被拒绝.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, MutableMapping

from param_checker.constants.field_types import FieldType, Presence
from param_checker.constants.system_constants import ValidationReasons
from param_checker.errors import ValidationError
from param_checker.schemas.coercion import coerce
from param_checker.schemas.fields import FieldSpec, IntegerFieldSpec, NumberFieldSpec, ScalarFieldSpec, StringFieldSpec

_UUID_PATTERN = re.compile(r"\A[a-f0-9]{32}\Z")


def detect_presence(payload: MutableMapping[str, object], name: str) -> Presence:
    """区分键缺失、键存在但为 None、键存在且有值三种情况."""
    if name not in payload:
        return Presence.ABSENT
    if payload[name] is None:
        return Presence.NULL
    return Presence.VALUE


def _reject(spec: FieldSpec, reason: str) -> ValidationError:
    return ValidationError(reason, param=spec.name, options=spec.options)


def _check_file(spec: FieldSpec, value: object) -> None:
    handle = value.get("tempfile") if isinstance(value, Mapping) else getattr(value, "stream", None)
    if not callable(getattr(handle, "read", None)):
        raise _reject(spec, ValidationReasons.FILE_EXPECTED)


def _check_number(spec: NumberFieldSpec, value: float) -> None:
    if isinstance(spec, IntegerFieldSpec) and spec.range is not None and value not in spec.range:
        raise _reject(spec, ValidationReasons.NOT_IN_RANGE.format(range=spec.range))
    if spec.max is not None and value > spec.max:
        raise _reject(spec, ValidationReasons.GREATER_THAN.format(max=spec.max))
    if spec.min is not None and value < spec.min:
        raise _reject(spec, ValidationReasons.SMALLER_THAN.format(min=spec.min))


def check_constraints(spec: FieldSpec, value: object) -> None:
    """对已转换的值执行约束校验.

    Raises:
        ValidationError: 任一约束不满足时抛出.

    """
    if isinstance(spec, StringFieldSpec):
        if spec.regexp is not None and not spec.regexp.search(value):
            raise _reject(spec, ValidationReasons.WRONG_FORMAT)
    elif spec.field_type is FieldType.UUID:
        if not _UUID_PATTERN.match(value):
            raise _reject(spec, ValidationReasons.UUID_EXPECTED)
    elif isinstance(spec, NumberFieldSpec):
        _check_number(spec, value)
    elif spec.field_type is FieldType.FILE:
        _check_file(spec, value)

    if isinstance(spec, ScalarFieldSpec) and spec.values is not None and value not in spec.values:
        raise _reject(spec, ValidationReasons.INVALID_ENUMERATION)


def validate_field(spec: FieldSpec, payload: MutableMapping[str, object]) -> None:
    """校验单个参数并把结果写回 ``payload``."""
    presence = detect_presence(payload, spec.name)
    if presence is not Presence.VALUE:
        if spec.required:
            raise _reject(spec, ValidationReasons.NOT_FOUND)
        if spec.has_default:
            # 默认值按声明原样使用,不再转换与校验
            payload[spec.name] = spec.resolve_default()
        return

    value = coerce(payload[spec.name], spec)
    check_constraints(spec, value)
    payload[spec.name] = value


def validate(
    fields: Iterable[FieldSpec],
    payload: MutableMapping[str, object],
) -> MutableMapping[str, object]:
    """按声明顺序校验 ``payload`` 并原地替换为类型化的值.

    Args:
        fields: 已编译的参数声明序列.
        payload: 宿主框架提供的可变、以字符串为键的原始输入.

    Returns:
        同一个 ``payload`` 对象,声明过的键已替换为转换后的值,其余键保持不变.

    Raises:
        ValidationError: 第一个未通过的参数.

    """
    for spec in fields:
        validate_field(spec, payload)
    return payload


__all__ = ["check_constraints", "detect_presence", "validate", "validate_field"]

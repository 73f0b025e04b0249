"""已编译的参数声明(按类型族划分的不可变变体).

每个变体只携带该类型合法的约束字段,非法组合在结构上无法表达.
``options`` 保留声明时的原始选项(只读),用于校验失败时的错误归属.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Final

from param_checker.constants.field_types import DEFAULT_DELIMITER, DEFAULT_SEPARATOR, FieldMode, FieldType


class _NoDefault:
    """未声明默认值的哨兵."""

    _instance: _NoDefault | None = None

    def __new__(cls) -> _NoDefault:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_DEFAULT"

    def __bool__(self) -> bool:
        return False


NO_DEFAULT: Final = _NoDefault()

DefaultValue = object | Callable[[], object]


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """所有参数声明的公共部分."""

    name: str
    mode: FieldMode
    field_type: FieldType
    options: Mapping[str, object]

    @property
    def required(self) -> bool:
        return self.mode is FieldMode.REQUIRED

    @property
    def has_default(self) -> bool:
        return False

    def resolve_default(self) -> object:
        """返回缺省值;可调用的默认值每次求值."""
        return NO_DEFAULT


@dataclass(frozen=True, slots=True)
class ScalarFieldSpec(FieldSpec):
    """标量类型(Boolean/Uuid/Date/Time/DateTime 直接使用,其他标量类型继承).

    标量类型允许 ``default`` 与 ``values``.
    """

    default: DefaultValue = NO_DEFAULT
    values: tuple[object, ...] | None = None

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT

    def resolve_default(self) -> object:
        if callable(self.default):
            return self.default()
        return self.default


@dataclass(frozen=True, slots=True)
class NumberFieldSpec(ScalarFieldSpec):
    """Integer / Float."""

    min: int | float | None = None
    max: int | float | None = None


@dataclass(frozen=True, slots=True)
class IntegerFieldSpec(NumberFieldSpec):
    range: range | None = None


@dataclass(frozen=True, slots=True)
class StringFieldSpec(ScalarFieldSpec):
    regexp: re.Pattern[str] | None = None


@dataclass(frozen=True, slots=True)
class ArrayFieldSpec(FieldSpec):
    delimiter: str | re.Pattern[str] = DEFAULT_DELIMITER


@dataclass(frozen=True, slots=True)
class HashFieldSpec(ArrayFieldSpec):
    separator: str = DEFAULT_SEPARATOR


@dataclass(frozen=True, slots=True)
class FileFieldSpec(FieldSpec):
    """上传文件,无任何约束选项."""


# 每种语义类型对应的声明变体
SPEC_CLASSES: dict[FieldType, type[FieldSpec]] = {
    FieldType.INTEGER: IntegerFieldSpec,
    FieldType.FLOAT: NumberFieldSpec,
    FieldType.STRING: StringFieldSpec,
    FieldType.BOOLEAN: ScalarFieldSpec,
    FieldType.UUID: ScalarFieldSpec,
    FieldType.DATE: ScalarFieldSpec,
    FieldType.TIME: ScalarFieldSpec,
    FieldType.DATETIME: ScalarFieldSpec,
    FieldType.ARRAY: ArrayFieldSpec,
    FieldType.HASH: HashFieldSpec,
    FieldType.FILE: FileFieldSpec,
}


__all__ = [
    "NO_DEFAULT",
    "SPEC_CLASSES",
    "ArrayFieldSpec",
    "FieldSpec",
    "FileFieldSpec",
    "HashFieldSpec",
    "IntegerFieldSpec",
    "NumberFieldSpec",
    "ScalarFieldSpec",
    "StringFieldSpec",
]

"""参数声明编译.

在路由注册阶段校验单个参数的选项组合,合法时产出不可变的 ``FieldSpec`` 变体,
否则抛出 ``SchemaError``. 校验规则按选项逐项检查,与选项书写顺序无关.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping, Sequence
from datetime import date, datetime, time
from types import MappingProxyType

from param_checker.constants.field_types import (
    COLLECTION_TYPES,
    NON_SCALAR_TYPES,
    NUMERIC_TYPES,
    SUPPORTED_OPTIONS,
    TYPE_ALIASES,
    FieldMode,
    FieldType,
)
from param_checker.errors import SchemaError
from param_checker.schemas.fields import SPEC_CLASSES, FieldSpec


def resolve_field_type(raw: object) -> FieldType | None:
    """把 ``type`` 选项解析为语义类型,无法识别时返回 None."""
    if isinstance(raw, FieldType):
        return raw
    if isinstance(raw, str):
        try:
            return FieldType(raw)
        except ValueError:
            return None
    try:
        return TYPE_ALIASES.get(raw)
    except TypeError:
        # 不可哈希的对象不可能是类型别名
        return None


def value_matches_type(field_type: FieldType, value: object) -> bool:
    """判断声明期的字面量是否已经是目标类型(只检查,不做转换)."""
    if field_type is FieldType.BOOLEAN:
        return value is True or value is False
    if field_type is FieldType.UUID:
        return isinstance(value, str)
    if isinstance(value, bool):
        # bool 是 int 的子类,数值类型不接受布尔字面量
        return False
    checks: dict[FieldType, Callable[[object], bool]] = {
        FieldType.INTEGER: lambda v: isinstance(v, int),
        FieldType.FLOAT: lambda v: isinstance(v, (int, float)),
        FieldType.STRING: lambda v: isinstance(v, str),
        FieldType.DATE: lambda v: isinstance(v, date),
        FieldType.TIME: lambda v: isinstance(v, time),
        FieldType.DATETIME: lambda v: isinstance(v, datetime),
        FieldType.ARRAY: lambda v: isinstance(v, list),
        FieldType.HASH: lambda v: isinstance(v, Mapping),
        FieldType.FILE: lambda _v: False,
    }
    return checks[field_type](value)


class FieldSpecCompiler:
    """单个参数声明的合法性检查器."""

    def compile(self, mode: FieldMode, name: object, options: Mapping[str, object]) -> FieldSpec:
        """校验 ``(mode, name, options)`` 并返回编译后的声明.

        Args:
            mode: 必填或可选.
            name: 参数名,统一转为字符串.
            options: 声明选项.

        Returns:
            FieldSpec: 与类型对应的不可变声明变体.

        Raises:
            SchemaError: 选项组合非法时抛出.

        """
        param = str(name)
        if "type" not in options or options["type"] is None:
            raise SchemaError(param, f"{param}: missing option :type", option="type")

        field_type = resolve_field_type(options["type"])
        if field_type is None:
            raise SchemaError(param, f"{param}: unsupported :type {options['type']!r}", option="type")

        prefix = f"{param}({field_type})"
        values: dict[str, object] = {}
        for key, value in options.items():
            if key not in SUPPORTED_OPTIONS:
                raise SchemaError(param, f"{prefix}: unsupported option :{key}", option=key)
            if key == "type":
                continue
            checker = getattr(self, f"_check_{key}")
            values[key] = checker(prefix, param, mode, field_type, value)

        spec_cls = SPEC_CLASSES[field_type]
        return spec_cls(
            name=param,
            mode=mode,
            field_type=field_type,
            options=MappingProxyType(dict(options)),
            **values,
        )

    @staticmethod
    def _fail(param: str, message: str, option: str) -> SchemaError:
        return SchemaError(param, message, option=option)

    def _check_default(self, prefix: str, param: str, mode: FieldMode, field_type: FieldType, value: object) -> object:
        if mode is FieldMode.REQUIRED:
            raise self._fail(param, f"{prefix}: :default can be used only with optional params", "default")
        if field_type in NON_SCALAR_TYPES:
            raise self._fail(param, f"{prefix}: :default cannot be used with :type File, Array or Hash", "default")
        if callable(value):
            return value
        if not value_matches_type(field_type, value):
            raise self._fail(param, f"{prefix}: :default must be {field_type}", "default")
        return value

    def _check_values(
        self,
        prefix: str,
        param: str,
        _mode: FieldMode,
        field_type: FieldType,
        value: object,
    ) -> tuple[object, ...]:
        if field_type in NON_SCALAR_TYPES:
            raise self._fail(param, f"{prefix}: :values cannot be used with :type File, Array or Hash", "values")
        if not isinstance(value, Sequence) or isinstance(value, (str, bytes, bytearray)) or not value:
            raise self._fail(param, f"{prefix}: :values must be a non-empty sequence", "values")
        for member in value:
            if not value_matches_type(field_type, member):
                raise self._fail(param, f"{prefix}: values in :values must be {field_type}", "values")
        return tuple(value)

    def _check_min(self, prefix: str, param: str, _mode: FieldMode, field_type: FieldType, value: object) -> object:
        return self._check_bound("min", prefix, param, field_type, value)

    def _check_max(self, prefix: str, param: str, _mode: FieldMode, field_type: FieldType, value: object) -> object:
        return self._check_bound("max", prefix, param, field_type, value)

    def _check_bound(self, key: str, prefix: str, param: str, field_type: FieldType, value: object) -> object:
        if field_type not in NUMERIC_TYPES:
            raise self._fail(param, f"{prefix}: :{key} can be used only with :type Integer and Float", key)
        if not value_matches_type(field_type, value):
            raise self._fail(param, f"{prefix}: :{key} must be {field_type}", key)
        return value

    def _check_range(self, prefix: str, param: str, _mode: FieldMode, field_type: FieldType, value: object) -> range:
        if field_type is not FieldType.INTEGER:
            raise self._fail(param, f"{prefix}: :range can be used only with :type Integer", "range")
        if not isinstance(value, range):
            raise self._fail(param, f"{prefix}: :range must be a range of Integer", "range")
        return value

    def _check_regexp(
        self,
        prefix: str,
        param: str,
        _mode: FieldMode,
        field_type: FieldType,
        value: object,
    ) -> re.Pattern[str]:
        if field_type is not FieldType.STRING:
            raise self._fail(param, f"{prefix}: :regexp can be used only with :type String", "regexp")
        if not isinstance(value, re.Pattern) or not isinstance(value.pattern, str):
            raise self._fail(param, f"{prefix}: :regexp must be a compiled pattern", "regexp")
        return value

    def _check_delimiter(self, prefix: str, param: str, _mode: FieldMode, field_type: FieldType, value: object) -> object:
        if field_type not in COLLECTION_TYPES:
            raise self._fail(param, f"{prefix}: :delimiter can be used only with :type Array and Hash", "delimiter")
        if not (isinstance(value, str) and value) and not isinstance(value, re.Pattern):
            raise self._fail(param, f"{prefix}: :delimiter must be a non-empty string or pattern", "delimiter")
        return value

    def _check_separator(self, prefix: str, param: str, _mode: FieldMode, field_type: FieldType, value: object) -> str:
        if field_type is not FieldType.HASH:
            raise self._fail(param, f"{prefix}: :separator can be used only with :type Hash", "separator")
        if not isinstance(value, str) or not value:
            raise self._fail(param, f"{prefix}: :separator must be a non-empty string", "separator")
        return value


_compiler = FieldSpecCompiler()


def compile_field(mode: FieldMode, name: object, options: Mapping[str, object]) -> FieldSpec:
    """使用共享的编译器实例编译单个参数声明."""
    return _compiler.compile(mode, name, options)


__all__ = [
    "FieldSpecCompiler",
    "compile_field",
    "resolve_field_type",
    "value_matches_type",
]

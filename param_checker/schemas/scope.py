"""参数声明的构建器与编译产物.

用法::

    scope = ParamScope()
    scope.required("name", type=str)
    scope.optional("author", type=str, default="unknown")
    schema = scope.build()
    schema.validate({"name": "Dune"})
"""

from __future__ import annotations

from collections.abc import Iterator, MutableMapping
from dataclasses import dataclass

from param_checker.constants.field_types import FieldMode
from param_checker.schemas.compiler import compile_field
from param_checker.schemas.fields import FieldSpec
from param_checker.schemas.validation import validate
from param_checker.utils.structlog_config import get_logger


@dataclass(frozen=True, slots=True)
class CompiledSchema:
    """一个路由的全部参数声明(有序、不可变、可在并发请求间共享)."""

    fields: tuple[FieldSpec, ...]

    def __iter__(self) -> Iterator[FieldSpec]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.fields)

    def validate(self, payload: MutableMapping[str, object]) -> MutableMapping[str, object]:
        """原地校验并转换 ``payload``,失败时抛出 ValidationError."""
        return validate(self.fields, payload)


class ParamScope:
    """按调用顺序累积参数声明的构建器.

    每次 ``required``/``optional`` 调用都会立即编译,非法声明直接抛出 SchemaError.
    """

    def __init__(self) -> None:
        self._fields: list[FieldSpec] = []

    def required(self, name: object, **options: object) -> ParamScope:
        return self._add(FieldMode.REQUIRED, name, options)

    def optional(self, name: object, **options: object) -> ParamScope:
        return self._add(FieldMode.OPTIONAL, name, options)

    @property
    def params(self) -> tuple[FieldSpec, ...]:
        """已声明的参数(只读快照)."""
        return tuple(self._fields)

    def build(self) -> CompiledSchema:
        """冻结当前声明,生成 CompiledSchema."""
        return CompiledSchema(fields=tuple(self._fields))

    def validate(self, payload: MutableMapping[str, object]) -> MutableMapping[str, object]:
        """构建并立即校验,便于脚本与测试使用."""
        return self.build().validate(payload)

    def _add(self, mode: FieldMode, name: object, options: dict[str, object]) -> ParamScope:
        spec = compile_field(mode, name, options)
        self._fields.append(spec)
        get_logger("param_checker.schemas").debug(
            "注册参数声明",
            param=spec.name,
            mode=str(spec.mode),
            type=str(spec.field_type),
        )
        return self


__all__ = ["CompiledSchema", "ParamScope"]

"""参数声明的编译、类型转换与校验."""

from param_checker.schemas.compiler import FieldSpecCompiler, compile_field
from param_checker.schemas.fields import NO_DEFAULT, FieldSpec
from param_checker.schemas.scope import CompiledSchema, ParamScope
from param_checker.schemas.validation import validate

__all__ = [
    "NO_DEFAULT",
    "CompiledSchema",
    "FieldSpec",
    "FieldSpecCompiler",
    "ParamScope",
    "compile_field",
    "validate",
]

"""param_checker - Flask 请求参数的声明式类型转换与校验.

在路由注册时声明参数(名称、必填/可选、语义类型与约束),
请求到达时按声明转换并校验原始参数,失败时抛出结构化的 ValidationError.
"""

from param_checker.constants.field_types import FieldMode, FieldType
from param_checker.errors import SchemaError, ValidationError
from param_checker.infra.flask_extension import ParamChecker, current_params
from param_checker.schemas.scope import CompiledSchema, ParamScope
from param_checker.settings import APP_VERSION, Settings

__version__ = APP_VERSION

# 伪类型的便捷别名
Boolean = FieldType.BOOLEAN
UUID = FieldType.UUID
File = FieldType.FILE

__all__ = [
    "UUID",
    "Boolean",
    "CompiledSchema",
    "FieldMode",
    "FieldType",
    "File",
    "ParamChecker",
    "ParamScope",
    "SchemaError",
    "Settings",
    "ValidationError",
    "__version__",
    "current_params",
]

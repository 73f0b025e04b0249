"""Flask 集成: 在视图执行前按声明校验请求参数.

两种挂载方式:
- ``@checker.params(scope)`` 直接装饰视图函数;
- ``checker.register("endpoint", scope)`` 通过全局 ``before_request`` 钩子按 endpoint 匹配.

只有请求方法位于允许列表(默认 ``POST``)时才会执行校验.校验通过后,
类型化的参数保存在 ``flask.g`` 上,视图通过 ``current_params()`` 读取.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from functools import wraps
from typing import ParamSpec, TypeVar

from flask import Flask, current_app, g, jsonify, request
from flask.typing import ResponseReturnValue

from param_checker.constants.http_methods import HttpMethod
from param_checker.errors import SchemaError, ValidationError
from param_checker.schemas.scope import CompiledSchema, ParamScope
from param_checker.settings import Settings
from param_checker.utils.request_payload import RawInput, build_raw_input
from param_checker.utils.response_utils import unified_error_response
from param_checker.utils.structlog_config import configure_structlog, get_logger

P = ParamSpec("P")
R = TypeVar("R")

EXTENSION_NAME = "param_checker"
_G_PARAMS_KEY = "param_checker_params"

SchemaSource = ParamScope | CompiledSchema


def _as_schema(source: SchemaSource) -> CompiledSchema:
    if isinstance(source, CompiledSchema):
        return source
    if isinstance(source, ParamScope):
        return source.build()
    raise TypeError(f"需要 ParamScope 或 CompiledSchema, 实际为 {type(source).__name__}")


def _normalize_methods(methods: Iterable[str] | None) -> frozenset[str] | None:
    if methods is None:
        return None
    normalized = frozenset(HttpMethod.normalize(method) for method in methods)
    invalid = sorted(method for method in normalized if not HttpMethod.is_valid(method))
    if not normalized or invalid:
        raise SchemaError(EXTENSION_NAME, f"invalid methods {sorted(normalized)!r}", option="methods")
    return normalized


def _configured_methods() -> frozenset[str]:
    configured = current_app.config.get("PARAM_CHECKER_METHODS", HttpMethod.DEFAULT_CHECKED)
    if isinstance(configured, str):
        configured = configured.split(",")
    return frozenset(HttpMethod.normalize(method) for method in configured if method.strip())


def current_params() -> RawInput | None:
    """返回当前请求已校验的参数;未执行校验时返回 None."""
    return g.get(_G_PARAMS_KEY)


class ParamChecker:
    """请求参数校验的 Flask 扩展.

    Example:
        >>> checker = ParamChecker(app)
        >>> scope = ParamScope().required("name", type=str)
        >>> @app.post("/books")
        ... @checker.params(scope)
        ... def create_book():
        ...     return current_params()

    """

    def __init__(self, app: Flask | None = None, *, settings: Settings | None = None) -> None:
        self.settings = settings
        self._endpoints: dict[str, tuple[CompiledSchema, frozenset[str] | None]] = {}
        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        """写入默认配置、配置日志并注册钩子与错误处理器."""
        settings = self.settings or Settings.load()
        for key, value in settings.to_flask_config().items():
            app.config.setdefault(key, value)
        configure_structlog(app)

        app.extensions[EXTENSION_NAME] = self
        app.before_request(self._check_registered_endpoint)
        app.register_error_handler(ValidationError, self._handle_validation_error)

    def params(
        self,
        schema: SchemaSource,
        *,
        methods: Iterable[str] | None = None,
    ) -> Callable[[Callable[P, R]], Callable[P, R]]:
        """装饰视图函数,在视图执行前校验参数."""
        compiled = _as_schema(schema)
        allowed = _normalize_methods(methods)

        def decorator(view: Callable[P, R]) -> Callable[P, R]:
            @wraps(view)
            def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
                self.check_request(compiled, allowed)
                return view(*args, **kwargs)

            return wrapper

        return decorator

    def register(
        self,
        endpoint: str,
        schema: SchemaSource,
        *,
        methods: Iterable[str] | None = None,
    ) -> CompiledSchema:
        """按 endpoint 名称登记参数声明,由全局 before_request 钩子执行校验."""
        compiled = _as_schema(schema)
        self._endpoints[endpoint] = (compiled, _normalize_methods(methods))
        get_logger("param_checker.infra").debug(
            "登记 endpoint 参数校验",
            target_endpoint=endpoint,
            params=list(compiled.names),
        )
        return compiled

    def check_request(self, schema: CompiledSchema, methods: frozenset[str] | None = None) -> RawInput | None:
        """对当前请求执行校验,方法不在允许列表时跳过并返回 None."""
        allowed = methods or _configured_methods()
        if request.method not in allowed:
            return None

        raw_input = build_raw_input(request)
        schema.validate(raw_input)
        setattr(g, _G_PARAMS_KEY, raw_input)
        return raw_input

    def _check_registered_endpoint(self) -> None:
        registered = self._endpoints.get(request.endpoint or "")
        if registered is None:
            return
        schema, methods = registered
        self.check_request(schema, methods)

    def _handle_validation_error(self, error: ValidationError) -> ResponseReturnValue:
        status_code = int(current_app.config.get("PARAM_CHECKER_ERROR_STATUS_CODE", error.status_code))
        get_logger("param_checker.infra").info("参数校验失败", **error.extra, status_code=status_code)
        payload, status = unified_error_response(error, status_code=status_code)
        return jsonify(payload), status


__all__ = ["EXTENSION_NAME", "ParamChecker", "current_params"]

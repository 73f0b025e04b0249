"""param_checker 的结构化日志配置与辅助函数."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, cast

import structlog
from flask import Flask, has_request_context, request

from param_checker.settings import APP_VERSION

if TYPE_CHECKING:
    from structlog.typing import BindableLogger, EventDict, Processor


class StructlogConfig:
    """structlog 配置核心类.

    负责组装处理器链并在需要时根据 Flask 配置调整日志级别与输出格式.
    宿主应用已自行配置 structlog 时不做任何改动,扩展的日志沿用宿主的处理器链.

    Attributes:
        json_output: 是否输出 JSON(否则使用控制台渲染).
        level: 标准库 logging 的级别名称.

    Example:
        >>> config = StructlogConfig()
        >>> config.configure()
        >>> logger = get_logger("param_checker.schemas")

    """

    def __init__(self) -> None:
        self.json_output = False
        self.level = "INFO"
        self._processors: list[Processor] | None = None

    @property
    def configured(self) -> bool:
        """当前全局 structlog 配置是否由本实例安装."""
        return self._processors is not None and structlog.get_config()["processors"] is self._processors

    def configure(self, app: Flask | None = None) -> None:
        """初始化 structlog 处理器(幂等).

        只在 structlog 尚未配置,或当前配置由本实例安装时生效;
        传入 app 时按其配置重新应用级别与渲染方式.

        Args:
            app: Flask 应用实例,可选.

        """
        if app is not None:
            self.level = str(app.config.get("PARAM_CHECKER_LOG_LEVEL", self.level)).upper()
            self.json_output = bool(app.config.get("PARAM_CHECKER_LOG_JSON", self.json_output))

        if structlog.is_configured() and (not self.configured or app is None):
            return

        processors: list[Processor] = [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            self._add_request_context,
            self._add_global_context,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            self._get_renderer(),
        ]
        structlog.configure(
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(
                logging.getLevelNamesMapping().get(self.level, logging.INFO),
            ),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(),
            cache_logger_on_first_use=False,
        )
        self._processors = processors

    def _get_renderer(self) -> Processor:
        if self.json_output:
            return structlog.processors.JSONRenderer()
        return cast("Processor", structlog.dev.ConsoleRenderer(colors=False))

    @staticmethod
    def _add_request_context(
        _logger: BindableLogger,
        _method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        """向事件字典写入请求上下文(method/path/endpoint)."""
        if has_request_context():
            event_dict.setdefault("method", request.method)
            event_dict.setdefault("path", request.path)
            event_dict.setdefault("endpoint", request.endpoint)
        return event_dict

    @staticmethod
    def _add_global_context(
        _logger: BindableLogger,
        _method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        event_dict.setdefault("component", "param_checker")
        event_dict.setdefault("version", APP_VERSION)
        return event_dict


structlog_config = StructlogConfig()


def get_logger(name: str) -> BindableLogger:
    """获取结构化日志记录器.

    Args:
        name: 日志记录器名称,通常使用模块名.

    Returns:
        惰性的 structlog 日志记录器,名称传给 logger 工厂.

    Example:
        >>> logger = get_logger("param_checker.infra")
        >>> logger.info("参数校验失败", param="name", reason="field not found")

    """
    structlog_config.configure()
    return structlog.get_logger(name)


def configure_structlog(app: Flask) -> None:
    """按 Flask 应用配置重新配置 structlog."""
    structlog_config.configure(app)


__all__ = ["StructlogConfig", "configure_structlog", "get_logger", "structlog_config"]

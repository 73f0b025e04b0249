"""param_checker - 统一配置读取与校验.

说明:
- Settings 使用 `pydantic-settings` 的 `BaseSettings` 从环境变量与本地 `.env`(可选)读取配置,
  环境变量统一使用 ``PARAM_CHECKER_`` 前缀.
- Flask 扩展只消费 Settings 转换出的 ``app.config`` 键,应用自身的配置优先.
"""

from __future__ import annotations

import json
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from param_checker.constants.http_methods import HttpMethod

PROJECT_ROOT = Path.cwd()
DOTENV_PATH = PROJECT_ROOT / ".env"

APP_VERSION = "0.3.0"
DEFAULT_ENVIRONMENT = "development"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_ERROR_STATUS_CODE = 400

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _parse_csv(raw: str) -> tuple[str, ...]:
    parts = [item.strip() for item in raw.split(",")]
    return tuple(item for item in parts if item)


class Settings(BaseSettings):
    """参数校验扩展的运行时设置集合."""

    model_config = SettingsConfigDict(
        env_prefix="PARAM_CHECKER_",
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
        str_strip_whitespace=True,
        # methods 使用逗号分隔(兼容 JSON 数组),关闭自动 JSON 解码,交由 validator 解析
        enable_decoding=False,
    )

    environment: str = Field(default=DEFAULT_ENVIRONMENT)
    methods: tuple[str, ...] = Field(default=HttpMethod.DEFAULT_CHECKED)
    error_status_code: int = Field(default=DEFAULT_ERROR_STATUS_CODE)
    log_level: str = Field(default=DEFAULT_LOG_LEVEL)
    log_json: bool = Field(default=False)

    @field_validator("methods", mode="before")
    @classmethod
    def _parse_methods(cls, value: object) -> object:
        if value is None:
            return None
        if isinstance(value, str):
            raw = value.strip()
            if raw.startswith("["):
                parsed = json.loads(raw)
                if not isinstance(parsed, list):
                    raise ValueError("must be a JSON array or a comma-separated string")
                value = parsed
            else:
                return tuple(HttpMethod.normalize(item) for item in _parse_csv(raw))
        if isinstance(value, (list, tuple, set)):
            return tuple(HttpMethod.normalize(str(item)) for item in value if str(item).strip())
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.upper()

    @property
    def is_production(self) -> bool:
        """当前是否为生产环境."""
        return self.environment.strip().lower() == "production"

    def to_flask_config(self) -> dict[str, object]:
        """生成扩展读取的 ``PARAM_CHECKER_*`` app.config 键."""
        return {
            "PARAM_CHECKER_METHODS": self.methods,
            "PARAM_CHECKER_ERROR_STATUS_CODE": self.error_status_code,
            "PARAM_CHECKER_LOG_LEVEL": self.log_level,
            "PARAM_CHECKER_LOG_JSON": self.log_json,
        }

    @classmethod
    def load(cls) -> Settings:
        """读取 ``.env``(存在时)与 ``PARAM_CHECKER_*`` 环境变量."""
        load_dotenv(dotenv_path=DOTENV_PATH if DOTENV_PATH.exists() else None, override=False)
        return cls()

    @model_validator(mode="after")
    def _validate(self) -> Settings:
        """校验方法列表、错误状态码与日志级别,全部问题合并为一个 ValueError."""
        errors: list[str] = []
        invalid_methods = [method for method in self.methods if not HttpMethod.is_valid(method)]
        checks: list[tuple[str, bool]] = [
            ("PARAM_CHECKER_METHODS 不能为空", not self.methods),
            (f"PARAM_CHECKER_METHODS 包含非法方法: {', '.join(invalid_methods)}", bool(invalid_methods)),
            (
                "PARAM_CHECKER_ERROR_STATUS_CODE 必须为 4xx 状态码",
                not 400 <= self.error_status_code < 500,
            ),
            (f"PARAM_CHECKER_LOG_LEVEL 仅支持 {'/'.join(_LOG_LEVELS)}", self.log_level not in _LOG_LEVELS),
        ]
        for message, condition in checks:
            if condition:
                errors.append(message)

        if errors:
            joined = "; ".join(errors)
            raise ValueError(f"配置校验失败: {joined}")
        return self


__all__ = ["APP_VERSION", "Settings"]

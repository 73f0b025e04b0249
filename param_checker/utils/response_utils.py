"""统一错误响应工具.

把 ``ValidationError`` 转换为统一的 JSON 错误载荷,避免在视图层散落 JSON 拼装逻辑.
"""

from __future__ import annotations

from datetime import UTC, datetime

from param_checker.errors import AppError, ValidationError, map_exception_to_status


def unified_error_response(
    error: AppError,
    *,
    status_code: int | None = None,
) -> tuple[dict[str, object], int]:
    """生成统一的错误响应载荷.

    Args:
        error: 异常对象.
        status_code: HTTP 状态码,可选,默认根据异常类型自动映射.

    Returns:
        包含两个元素的元组:
        - 错误响应载荷字典
        - HTTP 状态码

    """
    payload: dict[str, object] = {
        "success": False,
        "error": True,
        "message": str(error),
        "message_key": error.message_key,
        "category": error.category.value,
        "timestamp": datetime.now(UTC).isoformat(),
    }
    if isinstance(error, ValidationError):
        payload["param"] = error.param
        payload["reason"] = error.reason
    return payload, status_code or map_exception_to_status(error)


__all__ = ["unified_error_response"]

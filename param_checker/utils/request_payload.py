"""请求原始参数的提取与合并.

目标:
- 把 path 参数、query、form、JSON 对象体与上传文件合并为一个可变的、以字符串为键的 dict.
- 统一处理 Werkzeug MultiDict(多值键取最后一个值)与普通 Mapping.
- 只做最小的规范化(去除 NUL 字符),不做类型转换与业务校验.

注意:
- 合并优先级从低到高: view_args < query < form < JSON < files.
- 文件名为空的上传 part(未选择文件)不计入结果,由校验层按缺失处理.
- 类型转换与约束校验交由 schema 层完成.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, cast

from flask import Request
from werkzeug.datastructures import FileStorage

RawInput = dict[str, object]

_STRING_LIKE_TYPES = (str, bytes, bytearray)


def build_raw_input(req: Request) -> RawInput:
    """从 Flask 请求中提取待校验的原始参数.

    Args:
        req: 当前请求对象.

    Returns:
        合并后的原始参数 dict,每次调用都返回新的对象.

    """
    raw: RawInput = {}
    raw.update(_parse_mapping(req.view_args or {}))
    raw.update(_parse_multidict(req.args))
    raw.update(_parse_multidict(req.form))
    body = req.get_json(silent=True) if req.is_json else None
    if isinstance(body, Mapping):
        raw.update(_parse_mapping(body))
    raw.update(_parse_files(req.files))
    return raw


def _parse_multidict(payload: object) -> RawInput:
    multi_dict = cast(Any, payload)
    sanitized: RawInput = {}
    for key in list(multi_dict.keys()):
        values = list(multi_dict.getlist(key) or [])
        if not values:
            sanitized[key] = None
            continue
        sanitized[key] = _sanitize_scalar_value(values[-1])
    return sanitized


def _parse_mapping(payload: Mapping[str, object]) -> RawInput:
    return {str(key): _sanitize_value(value) for key, value in payload.items()}


def _parse_files(files: object) -> RawInput:
    multi_dict = cast(Any, files)
    parsed: RawInput = {}
    for key in list(multi_dict.keys()):
        # 未选择文件时浏览器仍会提交一个空文件名的 part,视为缺失
        uploads = [item for item in multi_dict.getlist(key) if isinstance(item, FileStorage) and item.filename]
        if uploads:
            parsed[key] = uploads[-1]
    return parsed


def _sanitize_value(value: object) -> object:
    # JSON 中的数组与对象保持原结构,交由 Array/Hash 转换直接透传
    if isinstance(value, Sequence) and not isinstance(value, _STRING_LIKE_TYPES):
        return [_sanitize_scalar_value(item) for item in value]
    if isinstance(value, Mapping):
        return {str(key): _sanitize_scalar_value(item) for key, item in value.items()}
    return _sanitize_scalar_value(value)


def _sanitize_scalar_value(value: object) -> object:
    if isinstance(value, (bytes, bytearray)):
        return _strip_nul(value.decode(errors="ignore"))
    if isinstance(value, str):
        return _strip_nul(value)
    return value


def _strip_nul(value: str) -> str:
    return value.replace("\x00", "")


__all__ = ["RawInput", "build_raw_input"]

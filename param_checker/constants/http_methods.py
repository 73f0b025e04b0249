"""HTTP方法常量.

定义标准的HTTP请求方法,避免魔法字符串.
"""

from typing import ClassVar


class HttpMethod:
    """HTTP方法常量(RFC 7231)."""

    GET: ClassVar[str] = "GET"
    POST: ClassVar[str] = "POST"
    PUT: ClassVar[str] = "PUT"
    PATCH: ClassVar[str] = "PATCH"
    DELETE: ClassVar[str] = "DELETE"
    HEAD: ClassVar[str] = "HEAD"
    OPTIONS: ClassVar[str] = "OPTIONS"

    ALL: ClassVar[tuple[str, ...]] = (GET, POST, PUT, PATCH, DELETE, HEAD, OPTIONS)

    # 参数校验默认只挂在写入方法上
    DEFAULT_CHECKED: ClassVar[tuple[str, ...]] = (POST,)

    @classmethod
    def normalize(cls, method: str) -> str:
        """规范化方法名(去空白并转大写)."""
        return method.strip().upper()

    @classmethod
    def is_valid(cls, method: str) -> bool:
        """判断HTTP方法是否有效.

        Args:
            method: HTTP方法字符串

        Returns:
            bool: 是否为有效方法

        """
        return cls.normalize(method) in cls.ALL

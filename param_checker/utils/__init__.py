"""通用工具: 日志、请求参数提取与统一响应."""

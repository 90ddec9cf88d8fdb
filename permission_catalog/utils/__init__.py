"""工具模块.

包含日志、响应封套与路由安全执行等通用辅助函数.

主要工具:
- structlog_config: 结构化日志配置
- response_utils: 统一成功/错误响应
- route_safety: 视图层异常捕获与日志
"""

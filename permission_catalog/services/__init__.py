"""服务层模块..

提供权限目录的业务逻辑服务, 不解析请求、不构造 Response.

主要模块:
- permission_taxonomy: 权限分类引擎(去重、分类、命名、建树、筛选、统计)
- permission_browser: 展开与勾选状态辅助
- permission_audit: 原始权限目录一致性检查
- health: 健康检查
"""

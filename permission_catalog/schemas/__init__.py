"""Pydantic schemas.

集中维护 payload 与配置文件的 schema, 用于:
- 类型转换与默认值
- 业务字段校验(输出中文错误文案)
- 将外部输入收敛为稳定的领域类型
"""

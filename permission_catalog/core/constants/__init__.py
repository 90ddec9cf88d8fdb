"""领域常量模块.

- permission_taxonomy: 权限分类的默认静态配置表
"""

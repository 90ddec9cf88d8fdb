"""健康检查 Service.

职责:
- 提供进程级探活, 不依赖外部基础设施
- 不做 Response
"""

from __future__ import annotations

import time

from permission_catalog.settings import APP_VERSION

_STARTED_AT = time.time()


def check_ping() -> dict[str, str]:
    """Ping 探活."""
    return {"status": "ok"}


def get_basic_health(*, version: str = APP_VERSION) -> dict[str, object]:
    """获取基础健康状态."""
    now = time.time()
    return {
        "status": "healthy",
        "timestamp": now,
        "version": version,
        "uptime_seconds": round(now - _STARTED_AT, 3),
    }

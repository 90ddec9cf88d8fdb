"""服务读写的 HTTP 头名称."""


class HttpHeaders:
    """HTTP 头常量."""

    # 请求关联 ID, 入站时采纳, 出站时回写
    X_REQUEST_ID = "X-Request-ID"

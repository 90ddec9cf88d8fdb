"""健康检查服务."""

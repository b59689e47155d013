from icon_server.middleware.access_log_middleware import AccessLogMiddleware
from icon_server.middleware.performance_middleware import PerformanceMiddleware
from icon_server.middleware.security_middleware import SecurityMiddleware

__all__ = ["AccessLogMiddleware", "PerformanceMiddleware", "SecurityMiddleware"]

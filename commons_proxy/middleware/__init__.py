from commons_proxy.middleware.request_logging import RequestLoggingMiddleware
from commons_proxy.middleware.security_headers import SecurityHeadersMiddleware

__all__ = ["RequestLoggingMiddleware", "SecurityHeadersMiddleware"]

from .app import create_app
from .middleware import CORRELATION_HEADER, CorrelationIdMiddleware
from .routes import router

__all__ = ["CORRELATION_HEADER", "CorrelationIdMiddleware", "create_app", "router"]

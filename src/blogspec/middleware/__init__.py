from .logging import LoggingMiddleware
from .pipeline import build_pipeline

__all__ = ["LoggingMiddleware", "build_pipeline"]

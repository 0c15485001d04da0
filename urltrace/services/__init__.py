"""Services for urltrace."""

from .tracer import TraceResult, URLTracer, parse_target


__all__ = ["TraceResult", "URLTracer", "parse_target"]

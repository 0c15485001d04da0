"""HTTP transport layer for urltrace."""

from .transport import RedirectLoggingTransport


__all__ = ["RedirectLoggingTransport"]

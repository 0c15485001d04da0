"""Custom exceptions for urltrace."""


class URLTraceError(Exception):
    """Base exception for all urltrace errors."""

    pass


class InvalidTargetError(URLTraceError, ValueError):
    """Raised when a command-line URL cannot be turned into a request URL."""

    def __init__(self, target: str, reason: str) -> None:
        self.target = target
        self.reason = reason
        super().__init__(f'parse "{target}": {reason}')


class ConfigurationError(URLTraceError):
    """Raised when settings cannot be built from the given options."""

    pass

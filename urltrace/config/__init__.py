"""Configuration module for urltrace."""

from .http import HTTPSettings
from .logging import LoggingSettings
from .settings import ConfigurationError, Settings, TraceSettings, build_settings


__all__ = [
    "ConfigurationError",
    "HTTPSettings",
    "LoggingSettings",
    "Settings",
    "TraceSettings",
    "build_settings",
]

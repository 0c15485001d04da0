from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from urltrace.exceptions import ConfigurationError

from .http import HTTPSettings
from .logging import LoggingSettings


__all__ = ["Settings", "TraceSettings", "ConfigurationError", "build_settings"]


DEFAULT_TIMEOUT = 10
DEFAULT_MAX_REDIRECTS = 10


class TraceSettings(BaseModel):
    """What a trace does: how long to wait and how to report each hop."""

    model_config = ConfigDict(frozen=True)

    timeout: int = Field(
        default=DEFAULT_TIMEOUT,
        ge=0,
        description="Request timeout in seconds. 0 disables the timeout",
    )

    full_url: bool = Field(
        default=False,
        description="Log the full request URL instead of the host portion",
    )

    max_redirects: int = Field(
        default=DEFAULT_MAX_REDIRECTS,
        ge=0,
        description="Maximum number of redirects followed per URL",
    )


class Settings(BaseModel):
    """
    Configuration for a urltrace run.

    Built once from the parsed command line and read-only afterwards. The same
    instance is handed to the client factory, the transport and the tracer.
    """

    model_config = ConfigDict(frozen=True)

    trace: TraceSettings = Field(
        default_factory=TraceSettings,
        description="Trace configuration",
    )

    http: HTTPSettings = Field(
        default_factory=HTTPSettings,
        description="HTTP client configuration settings",
    )

    logging: LoggingSettings = Field(
        default_factory=LoggingSettings,
        description="Logging configuration",
    )


def build_settings(
    *,
    trace: dict[str, Any] | None = None,
    http: dict[str, Any] | None = None,
    logging: dict[str, Any] | None = None,
) -> Settings:
    """Build validated settings from per-section overrides.

    Sections left as ``None`` keep their defaults.

    Raises:
        ConfigurationError: If any value fails validation
    """
    sections: dict[str, Any] = {}
    if trace is not None:
        sections["trace"] = trace
    if http is not None:
        sections["http"] = http
    if logging is not None:
        sections["logging"] = logging

    try:
        return Settings.model_validate(sections)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e

"""HTTP client configuration settings."""

from pydantic import BaseModel, ConfigDict, Field

from urltrace._version import __version__


class HTTPSettings(BaseModel):
    """HTTP client configuration settings.

    Controls the request-level behavior of the shared client that every
    traced URL goes through.
    """

    model_config = ConfigDict(frozen=True)

    user_agent: str = Field(
        default=f"urltrace/{__version__}",
        description="User-Agent header sent with every request",
    )

    verify: bool = Field(
        default=True,
        description="Verify TLS certificates of HTTPS targets",
    )

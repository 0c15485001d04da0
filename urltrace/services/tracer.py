"""Redirect tracing of command-line URLs.

The tracer owns nothing but a reference to the shared client. Per-hop output
comes from the client's transport; the tracer only reports what goes wrong
before or during a request and keeps going with the next URL.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass

import httpx

from urltrace.core.logging import get_logger
from urltrace.exceptions import InvalidTargetError


logger = get_logger(__name__)

DEFAULT_SCHEME = "http"

# Only a leading scheme counts, not one inside the path or query
SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")


@dataclass(frozen=True)
class TraceResult:
    """Outcome of tracing one command-line URL."""

    target: str
    url: str | None = None
    status_code: int | None = None
    final_url: str | None = None
    redirects: int = 0
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_target(target: str) -> httpx.URL:
    """Parse a command-line URL into a request URL.

    Inputs without a scheme are treated as ``http``.

    Raises:
        InvalidTargetError: If the input cannot name an HTTP resource
    """
    candidate = target.strip()
    if not candidate:
        raise InvalidTargetError(target, "empty URL")

    for char in candidate:
        if char.isspace():
            raise InvalidTargetError(target, f"invalid character {char!r} in URL")

    if not SCHEME_RE.match(candidate):
        if candidate.startswith("//"):
            candidate = f"{DEFAULT_SCHEME}:{candidate}"
        else:
            candidate = f"{DEFAULT_SCHEME}://{candidate}"

    try:
        url = httpx.URL(candidate)
    except httpx.InvalidURL as e:
        raise InvalidTargetError(target, str(e)) from e

    if not url.host:
        raise InvalidTargetError(target, "missing host")

    return url


class URLTracer:
    """Issues one GET per URL through a shared, redirect-following client."""

    def __init__(self, client: httpx.Client) -> None:
        self.client = client

    def trace(self, target: str) -> TraceResult:
        """Trace a single command-line URL.

        Errors are logged and returned in the result, never raised.
        """
        try:
            url = parse_target(target)
        except InvalidTargetError as e:
            logger.error("error parsing URL: %s.", e)
            return TraceResult(target=target, error=e)

        try:
            response = self.client.get(url)
        except httpx.RemoteProtocolError as e:
            # The server closed the connection without sending a response
            logger.error("site could not be reached. %s", e)
            return TraceResult(target=target, url=str(url), error=e)
        except httpx.HTTPError as e:
            logger.error("error when searching for URL: %s", e)
            return TraceResult(target=target, url=str(url), error=e)

        result = TraceResult(
            target=target,
            url=str(url),
            status_code=response.status_code,
            final_url=str(response.url),
            redirects=len(response.history),
        )
        logger.debug(
            "trace_complete",
            target=target,
            status_code=result.status_code,
            redirects=result.redirects,
        )
        return result

    def trace_all(self, targets: Iterable[str]) -> list[TraceResult]:
        """Trace each URL in order, continuing past failures."""
        return [self.trace(target) for target in targets]

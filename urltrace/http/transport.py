"""HTTPX transport wrapper that logs every round trip of a redirect chain."""

from types import TracebackType

import httpx

from urltrace.core.logging import get_logger


logger = get_logger(__name__)


class RedirectLoggingTransport(httpx.BaseTransport):
    """Wraps an HTTPX transport to log the status and URL of each round trip.

    httpx follows redirects above the transport, so the client calls
    :meth:`handle_request` once per hop. Logging here is what makes the
    intermediate hops of a chain visible.

    Failed round trips are not logged at this layer: the exception propagates
    unchanged and is reported by whoever issued the request.
    """

    def __init__(
        self,
        wrapped_transport: httpx.BaseTransport | None = None,
        full_url: bool = False,
    ) -> None:
        self.wrapped = wrapped_transport or httpx.HTTPTransport()
        self.full_url = full_url

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        """Forward the request to the wrapped transport and log the outcome."""
        response = self.wrapped.handle_request(request)

        if self.full_url:
            logger.info(
                f"Status: {response.status_code}, Full URL: {request.url}",
                status_code=response.status_code,
                url=str(request.url),
            )
        else:
            host = describe_host(request.url)
            logger.info(
                f"Status: {response.status_code}, Base URL: {host}",
                status_code=response.status_code,
                host=host,
            )

        return response

    def close(self) -> None:
        """Close the transport."""
        self.wrapped.close()

    def __enter__(self) -> "RedirectLoggingTransport":
        """Enter context."""
        self.wrapped.__enter__()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None = None,
        exc_val: BaseException | None = None,
        exc_tb: TracebackType | None = None,
    ) -> None:
        """Exit context."""
        self.wrapped.__exit__(exc_type, exc_val, exc_tb)


def describe_host(url: httpx.URL) -> str:
    """Return the host of ``url`` with its port when one was given explicitly."""
    return url.netloc.decode("ascii")

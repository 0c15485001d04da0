"""HTTP client construction for urltrace.

One client is built per run and shared by every traced URL. Its transport is
always a :class:`RedirectLoggingTransport`, so each redirect hop passes
through the logging wrapper.
"""

import os
from collections.abc import Generator
from contextlib import contextmanager

import httpx

from urltrace.config.settings import Settings
from urltrace.core.logging import get_logger
from urltrace.http.transport import RedirectLoggingTransport


logger = get_logger(__name__)


class HTTPClientFactory:
    """Factory for the traced HTTP client."""

    @staticmethod
    def create_timeout(seconds: int) -> httpx.Timeout:
        """Turn the configured whole-second timeout into an httpx timeout.

        ``0`` disables the timeout entirely.
        """
        if seconds == 0:
            return httpx.Timeout(None)
        return httpx.Timeout(float(seconds))

    @staticmethod
    def create_transport(
        settings: Settings,
        wrapped_transport: httpx.BaseTransport | None = None,
    ) -> RedirectLoggingTransport:
        """Create the logging transport around ``wrapped_transport``.

        Args:
            settings: Run settings
            wrapped_transport: Transport doing the actual I/O. Defaults to an
                ``httpx.HTTPTransport`` honoring the proxy environment

        Returns:
            Configured RedirectLoggingTransport
        """
        if wrapped_transport is None:
            wrapped_transport = httpx.HTTPTransport(
                verify=settings.http.verify,
                proxy=_get_proxy_url(),
            )
        return RedirectLoggingTransport(
            wrapped_transport,
            full_url=settings.trace.full_url,
        )

    @staticmethod
    def create_client(
        settings: Settings,
        wrapped_transport: httpx.BaseTransport | None = None,
    ) -> httpx.Client:
        """Create the shared client used for every traced URL.

        Args:
            settings: Run settings
            wrapped_transport: Optional transport doing the actual I/O

        Returns:
            Configured httpx.Client following redirects
        """
        transport = HTTPClientFactory.create_transport(settings, wrapped_transport)

        logger.info(
            "creating HTTP client with %d second timeout", settings.trace.timeout
        )
        logger.debug(
            "http_client_created",
            timeout=settings.trace.timeout,
            full_url=settings.trace.full_url,
            max_redirects=settings.trace.max_redirects,
            verify=settings.http.verify,
        )

        # Proxies are handled by the wrapped transport; letting httpx mount
        # its own proxy transports from the environment would bypass logging.
        return httpx.Client(
            transport=transport,
            timeout=HTTPClientFactory.create_timeout(settings.trace.timeout),
            follow_redirects=True,
            max_redirects=settings.trace.max_redirects,
            headers={"User-Agent": settings.http.user_agent},
            trust_env=False,
        )

    @staticmethod
    @contextmanager
    def managed_client(
        settings: Settings,
        wrapped_transport: httpx.BaseTransport | None = None,
    ) -> Generator[httpx.Client, None, None]:
        """Create a client that is closed when the block exits.

        Example:
            with HTTPClientFactory.managed_client(settings) as client:
                client.get("http://example.com")
        """
        client = HTTPClientFactory.create_client(settings, wrapped_transport)
        try:
            yield client
        finally:
            client.close()
            logger.debug("http_client_closed")


def _get_proxy_url() -> str | None:
    """Get proxy URL from environment variables.

    Returns:
        str or None: Proxy URL if any proxy is set
    """
    https_proxy = os.environ.get("HTTPS_PROXY") or os.environ.get("https_proxy")
    all_proxy = os.environ.get("ALL_PROXY") or os.environ.get("all_proxy")
    http_proxy = os.environ.get("HTTP_PROXY") or os.environ.get("http_proxy")

    proxy_url = https_proxy or all_proxy or http_proxy

    if proxy_url:
        logger.debug("proxy_configured", proxy_url=proxy_url)

    return proxy_url

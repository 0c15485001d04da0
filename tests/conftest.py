"""Shared test fixtures and configuration for urltrace tests.

Network access is replaced by ``httpx.MockTransport`` serving a small table
of routes, so redirect chains are deterministic. The real logging pipeline is
installed for every test; assertions on log events use
``structlog.testing.capture_logs``.
"""

from collections.abc import Callable, Generator

import httpx
import pytest

from urltrace.config.settings import Settings, build_settings
from urltrace.core.logging import setup_logging


# A route answers with a status code and an optional Location header
Route = tuple[int, str | None]
RouteTable = dict[str, Route]

PROXY_ENV_VARS = (
    "HTTPS_PROXY",
    "https_proxy",
    "HTTP_PROXY",
    "http_proxy",
    "ALL_PROXY",
    "all_proxy",
)


def pytest_configure(config: pytest.Config) -> None:
    """Install the application logging pipeline for the whole run."""
    setup_logging(json_logs=False, log_level_name="DEBUG")


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Point logging back at the real stderr after tests that redirect it."""
    yield
    setup_logging(json_logs=False, log_level_name="DEBUG")


@pytest.fixture(autouse=True)
def no_proxy_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep proxy settings of the host out of the tests."""
    for name in PROXY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def route_key(url: httpx.URL) -> str:
    """Normalize a URL to the form used as a key in route tables."""
    return f"{url.scheme}://{url.netloc.decode('ascii')}{url.raw_path.decode('ascii')}"


def build_mock_transport(
    routes: RouteTable,
    seen: list[httpx.Request] | None = None,
) -> httpx.MockTransport:
    """Create a transport serving ``routes``; unknown URLs answer 404.

    Every handled request is appended to ``seen`` when given.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        status_code, location = routes.get(route_key(request.url), (404, None))
        headers = {"Location": location} if location else {}
        return httpx.Response(status_code, headers=headers, text="ok")

    return httpx.MockTransport(handler)


@pytest.fixture
def mock_transport_factory() -> Callable[..., httpx.MockTransport]:
    """Factory building mock transports from route tables."""
    return build_mock_transport


@pytest.fixture
def redirect_once_routes() -> RouteTable:
    """One 302 hop followed by a 200 on the same host."""
    return {
        "http://example.com/redirect-once": (302, "http://example.com/final"),
        "http://example.com/final": (200, None),
    }


@pytest.fixture
def settings() -> Settings:
    """Default settings."""
    return build_settings()


@pytest.fixture
def full_url_settings() -> Settings:
    """Settings with full URL logging enabled."""
    return build_settings(trace={"full_url": True})


def status_events(logs: list[dict]) -> list[str]:
    """Return the per-hop status lines from captured log events."""
    return [
        entry["event"]
        for entry in logs
        if isinstance(entry.get("event"), str) and entry["event"].startswith("Status:")
    ]


@pytest.fixture
def status_lines() -> Callable[[list[dict]], list[str]]:
    """Expose :func:`status_events` to tests."""
    return status_events

"""Tests for the traced HTTP client factory."""

import httpx
import pytest
from structlog.testing import capture_logs

from urltrace.config.settings import build_settings
from urltrace.core.http_client import HTTPClientFactory, _get_proxy_url
from urltrace.http.transport import RedirectLoggingTransport


class TestCreateTimeout:
    def test_whole_seconds_apply_to_every_phase(self):
        timeout = HTTPClientFactory.create_timeout(7)

        assert timeout == httpx.Timeout(7.0)
        assert timeout.connect == timeout.read == timeout.write == timeout.pool == 7.0

    def test_zero_disables_timeout(self):
        timeout = HTTPClientFactory.create_timeout(0)

        assert timeout.connect is None
        assert timeout.read is None
        assert timeout.write is None
        assert timeout.pool is None


class TestCreateClient:
    def test_client_uses_logging_transport_around_delegate(self, settings):
        delegate = httpx.MockTransport(lambda request: httpx.Response(200))

        client = HTTPClientFactory.create_client(settings, delegate)

        assert isinstance(client._transport, RedirectLoggingTransport)
        assert client._transport.wrapped is delegate

    def test_client_follows_redirects_within_budget(self):
        settings = build_settings(trace={"timeout": 4, "max_redirects": 3})

        client = HTTPClientFactory.create_client(
            settings, httpx.MockTransport(lambda request: httpx.Response(200))
        )

        assert client.follow_redirects is True
        assert client.max_redirects == 3
        assert client.timeout == httpx.Timeout(4.0)
        assert client.headers["User-Agent"] == settings.http.user_agent

    def test_full_url_setting_reaches_transport(self, full_url_settings):
        transport = HTTPClientFactory.create_transport(
            full_url_settings, httpx.MockTransport(lambda request: httpx.Response(200))
        )

        assert transport.full_url is True

    def test_default_delegate_is_http_transport(self, settings):
        transport = HTTPClientFactory.create_transport(settings)
        try:
            assert isinstance(transport.wrapped, httpx.HTTPTransport)
        finally:
            transport.close()

    def test_logs_timeout_on_creation(self, settings):
        with capture_logs() as logs:
            HTTPClientFactory.create_client(
                settings, httpx.MockTransport(lambda request: httpx.Response(200))
            )

        assert logs[0]["event"] == "creating HTTP client with %d second timeout"
        assert logs[0]["positional_args"] == (10,)
        assert logs[0]["log_level"] == "info"

    def test_managed_client_is_closed_on_exit(self, settings):
        with HTTPClientFactory.managed_client(
            settings, httpx.MockTransport(lambda request: httpx.Response(200))
        ) as client:
            assert not client.is_closed

        assert client.is_closed


class TestProxyUrl:
    def test_no_proxy_configured(self):
        assert _get_proxy_url() is None

    def test_https_proxy_takes_precedence(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("HTTP_PROXY", "http://http-proxy:3128")
        monkeypatch.setenv("HTTPS_PROXY", "http://https-proxy:3128")

        assert _get_proxy_url() == "http://https-proxy:3128"

    def test_http_proxy_used_alone(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("http_proxy", "http://proxy.local:8080")

        assert _get_proxy_url() == "http://proxy.local:8080"

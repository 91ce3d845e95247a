"""Testes dos LinkLaunchers (memória, browser, HTTP) e da factory."""

from __future__ import annotations

import logging
import threading
import webbrowser

import httpx
import pytest

from taskgate_partner.application.session_controller import SessionController
from taskgate_partner.domain.protocols import LaunchResult
from taskgate_partner.infra.launcher_browser import WebBrowserLinkLauncher
from taskgate_partner.infra.launcher_factory import create_link_launcher
from taskgate_partner.infra.launcher_http import HttpLinkLauncher, _sanitize_url
from taskgate_partner.infra.launcher_memory import InMemoryLinkLauncher

CALLBACK = "https://partner.example.com/cb?status=open&session_id=abc123"


class TestInMemoryLinkLauncher:
    def test_records_urls(self) -> None:
        launcher = InMemoryLinkLauncher()
        result = launcher.open("taskgate://partner-ready?session_id=s")

        assert result == LaunchResult(url="taskgate://partner-ready?session_id=s", dispatched=True)
        assert launcher.opened == ["taskgate://partner-ready?session_id=s"]
        assert launcher.last_url == "taskgate://partner-ready?session_id=s"

    def test_forced_failure(self) -> None:
        launcher = InMemoryLinkLauncher(fail_with="boom")
        result = launcher.open("taskgate://x")

        assert result.dispatched is False
        assert result.error == "boom"
        assert launcher.opened == []

    def test_clear(self) -> None:
        launcher = InMemoryLinkLauncher()
        launcher.open("taskgate://x")
        launcher.clear()
        assert launcher.last_url is None


class TestWebBrowserLinkLauncher:
    def test_opens_with_platform_handler(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[str] = []

        def fake_open(url: str, new: int = 0, autoraise: bool = True) -> bool:
            calls.append(url)
            return True

        monkeypatch.setattr(webbrowser, "open", fake_open)
        with WebBrowserLinkLauncher() as launcher:
            result = launcher.open("taskgate://partner-ready?session_id=s")
            launcher.flush(timeout=5)

        assert result.dispatched is True
        assert calls == ["taskgate://partner-ready?session_id=s"]

    def test_no_handler_is_logged(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        monkeypatch.setattr(webbrowser, "open", lambda url, new=0, autoraise=True: False)

        with caplog.at_level(logging.WARNING):
            with WebBrowserLinkLauncher() as launcher:
                result = launcher.open("taskgate://x")
                launcher.flush(timeout=5)

        assert result.dispatched is True
        records = [r for r in caplog.records if r.message == "Cannot open URL"]
        assert records[0].error == "no_handler"  # type: ignore[attr-defined]
        assert records[0].scheme == "taskgate"  # type: ignore[attr-defined]

    def test_browser_error_is_logged(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        def broken(url: str, new: int = 0, autoraise: bool = True) -> bool:
            raise webbrowser.Error("could not locate runnable browser")

        monkeypatch.setattr(webbrowser, "open", broken)
        with caplog.at_level(logging.WARNING):
            with WebBrowserLinkLauncher() as launcher:
                launcher.open("taskgate://x")
                launcher.flush(timeout=5)

        records = [r for r in caplog.records if r.message == "Cannot open URL"]
        assert records[0].error == "Error"  # type: ignore[attr-defined]

    def test_open_does_not_wait_for_browser_process(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Browsers de console bloqueiam até o processo sair; open() não espera."""
        release = threading.Event()
        started = threading.Event()

        def waiting_open(url: str, new: int = 0, autoraise: bool = True) -> bool:
            started.set()
            release.wait(timeout=5)
            return True

        monkeypatch.setattr(webbrowser, "open", waiting_open)
        with WebBrowserLinkLauncher() as launcher:
            controller = SessionController(launcher)
            controller.parse_incoming(
                "https://example.com/taskgate?task_id=t&callback_url=https://cb.com&session_id=s"
            )

            result = controller.signal_ready()

            assert result is not None and result.dispatched is True
            assert not release.is_set()
            assert started.wait(timeout=5)
            release.set()
            launcher.flush(timeout=5)


class TestHttpLinkLauncher:
    def test_fires_get(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(204)

        client = httpx.Client(transport=httpx.MockTransport(handler))
        with HttpLinkLauncher(client=client) as launcher:
            result = launcher.open(CALLBACK)
            launcher.flush(timeout=5)

        assert result.dispatched is True
        assert len(seen) == 1
        assert seen[0].method == "GET"
        assert seen[0].url.params["session_id"] == "abc123"

    def test_http_error_status_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(500)))

        with caplog.at_level(logging.WARNING):
            with HttpLinkLauncher(client=client) as launcher:
                result = launcher.open(CALLBACK)
                launcher.flush(timeout=5)

        assert result.dispatched is True
        records = [r for r in caplog.records if r.message == "Failed to open URL"]
        assert len(records) == 1
        assert records[0].status_code == 500  # type: ignore[attr-defined]
        assert "session_id" not in records[0].url  # type: ignore[attr-defined]

    def test_connection_error_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        client = httpx.Client(transport=httpx.MockTransport(handler))
        with caplog.at_level(logging.WARNING):
            with HttpLinkLauncher(client=client) as launcher:
                launcher.open(CALLBACK)
                launcher.flush(timeout=5)

        records = [r for r in caplog.records if r.message == "Failed to open URL"]
        assert records[0].error == "ConnectError"  # type: ignore[attr-defined]

    def test_rejects_custom_scheme(self) -> None:
        with HttpLinkLauncher() as launcher:
            result = launcher.open("taskgate://partner-ready?session_id=s")

        assert result.dispatched is False
        assert result.error == "unsupported scheme: taskgate"

    def test_sanitize_url_drops_query(self) -> None:
        assert _sanitize_url(CALLBACK) == "https://partner.example.com/cb"


class TestCreateLinkLauncher:
    def test_memory(self) -> None:
        assert isinstance(create_link_launcher("memory"), InMemoryLinkLauncher)

    def test_browser(self) -> None:
        launcher = create_link_launcher("BROWSER")
        try:
            assert isinstance(launcher, WebBrowserLinkLauncher)
        finally:
            launcher.close()  # type: ignore[attr-defined]

    def test_http(self) -> None:
        launcher = create_link_launcher("http", http_timeout_seconds=3.0)
        try:
            assert isinstance(launcher, HttpLinkLauncher)
        finally:
            launcher.close()  # type: ignore[attr-defined]

    def test_unknown_backend(self) -> None:
        with pytest.raises(ValueError, match="Unknown link launcher backend"):
            create_link_launcher("carrier-pigeon")

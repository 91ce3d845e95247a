"""LinkLauncher via facilidade de abertura de URLs da plataforma.

`webbrowser.open` pode aguardar o processo do browser (browsers de console),
então a abertura roda num worker dedicado e falhas só aparecem no log.
"""

from __future__ import annotations

import logging
import webbrowser
from concurrent.futures import Future, ThreadPoolExecutor

from taskgate_partner.domain.protocols.link_launcher import LaunchResult, LinkLauncher
from taskgate_partner.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)


def _scheme(url: str) -> str:
    return url.split(":", 1)[0]


class WebBrowserLinkLauncher(LinkLauncher):
    """Entrega a URL ao handler registrado no sistema (scheme handler/browser)."""

    def __init__(self, new: int = 0, autoraise: bool = True) -> None:
        self._new = new
        self._autoraise = autoraise
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="taskgate-browser-launcher"
        )
        self._pending: set[Future[bool]] = set()

    def open(self, url: str) -> LaunchResult:
        future = self._executor.submit(self._open, url)
        self._pending.add(future)
        future.add_done_callback(self._pending.discard)
        return LaunchResult(url=url, dispatched=True)

    def _open(self, url: str) -> bool:
        try:
            accepted = webbrowser.open(url, new=self._new, autoraise=self._autoraise)
        except webbrowser.Error as exc:
            logger.warning(
                "Cannot open URL",
                extra={"error": type(exc).__name__, "scheme": _scheme(url)},
            )
            return False

        if not accepted:
            logger.warning(
                "Cannot open URL",
                extra={"error": "no_handler", "scheme": _scheme(url)},
            )
        return accepted

    def flush(self, timeout: float | None = None) -> None:
        """Aguarda as aberturas em andamento (útil em shutdown e testes)."""
        for future in list(self._pending):
            future.result(timeout=timeout)

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    def __enter__(self) -> WebBrowserLinkLauncher:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

"""LinkLauncher HTTP para callbacks hospedados em servidores web.

Responsabilidades:
- Disparar GET na URL outbound sem bloquear o chamador
- Registrar falhas em log (sem retry, sem propagar erro)
- Recusar schemes não-HTTP com LaunchResult de falha

Conforme regras_e_padroes.md:
- Nunca logar query strings (carregam session_id/task_id)
- Sempre usar timeout
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from urllib.parse import urlsplit

import httpx

from taskgate_partner.domain.protocols.link_launcher import LaunchResult, LinkLauncher
from taskgate_partner.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)

_HTTP_SCHEMES = frozenset({"http", "https"})


def _sanitize_url(url: str) -> str:
    """Remove query e fragmento da URL para logging seguro."""
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}{parts.path}"


class HttpLinkLauncher(LinkLauncher):
    """Abre URLs http(s) com um GET fire-and-forget em worker dedicado.

    Uso típico:
        launcher = HttpLinkLauncher(timeout_seconds=5.0)
        launcher.open("https://partner.example.com/callback?status=open")
        launcher.close()
    """

    def __init__(
        self,
        timeout_seconds: float = 10.0,
        client: httpx.Client | None = None,
        max_workers: int = 2,
    ) -> None:
        self._client = client or httpx.Client(timeout=httpx.Timeout(timeout_seconds))
        self._owns_client = client is None
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="taskgate-http-launcher"
        )
        self._pending: set[Future[None]] = set()

    def open(self, url: str) -> LaunchResult:
        scheme = urlsplit(url).scheme.lower()
        if scheme not in _HTTP_SCHEMES:
            logger.warning(
                "Cannot open URL over HTTP",
                extra={"scheme": scheme, "reason": "unsupported_scheme"},
            )
            return LaunchResult(url=url, dispatched=False, error=f"unsupported scheme: {scheme}")

        future = self._executor.submit(self._get, url)
        self._pending.add(future)
        future.add_done_callback(self._pending.discard)
        return LaunchResult(url=url, dispatched=True)

    def _get(self, url: str) -> None:
        safe_url = _sanitize_url(url)
        try:
            response = self._client.get(url)
        except httpx.HTTPError as exc:
            logger.warning(
                "Failed to open URL",
                extra={"url": safe_url, "error": type(exc).__name__},
            )
            return

        if response.is_success or response.is_redirect:
            logger.debug(
                "URL opened over HTTP",
                extra={"url": safe_url, "status_code": response.status_code},
            )
            return

        logger.warning(
            "Failed to open URL",
            extra={"url": safe_url, "status_code": response.status_code},
        )

    def flush(self, timeout: float | None = None) -> None:
        """Aguarda os GETs em andamento (útil em shutdown e testes)."""
        for future in list(self._pending):
            future.result(timeout=timeout)

    def close(self) -> None:
        """Encerra o worker e o cliente httpx (se criado aqui)."""
        self._executor.shutdown(wait=True)
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> HttpLinkLauncher:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

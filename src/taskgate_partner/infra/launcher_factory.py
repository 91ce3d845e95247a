"""Factory para LinkLauncher: criação por backend.

Conforme regras_e_padroes.md (factory pattern, injeção de dependência).
"""

from __future__ import annotations

import logging

import httpx

from taskgate_partner.domain.protocols.link_launcher import LinkLauncher
from taskgate_partner.infra.launcher_browser import WebBrowserLinkLauncher
from taskgate_partner.infra.launcher_http import HttpLinkLauncher
from taskgate_partner.infra.launcher_memory import InMemoryLinkLauncher
from taskgate_partner.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)


def create_link_launcher(
    backend: str,
    http_timeout_seconds: float = 10.0,
    http_client: httpx.Client | None = None,
) -> LinkLauncher:
    """Factory para LinkLauncher.

    Args:
        backend: "memory", "browser" ou "http"
        http_timeout_seconds: Timeout do GET (backend="http")
        http_client: Cliente httpx opcional (backend="http")

    Returns:
        LinkLauncher configurado

    Raises:
        ValueError: Se backend inválido
    """
    backend = backend.lower()

    if backend == "memory":
        logger.warning("Using in-memory link launcher (dev only)")
        return InMemoryLinkLauncher()

    if backend == "browser":
        logger.info("Using platform browser link launcher")
        return WebBrowserLinkLauncher()

    if backend == "http":
        logger.info(
            "Using HTTP link launcher",
            extra={"timeout_seconds": http_timeout_seconds},
        )
        return HttpLinkLauncher(timeout_seconds=http_timeout_seconds, client=http_client)

    msg = f"Unknown link launcher backend: {backend}"
    raise ValueError(msg)

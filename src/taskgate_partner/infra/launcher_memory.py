"""LinkLauncher em memória (apenas dev/testes)."""

from __future__ import annotations

import logging

from taskgate_partner.domain.protocols.link_launcher import LaunchResult, LinkLauncher
from taskgate_partner.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)


class InMemoryLinkLauncher(LinkLauncher):
    """Registra as URLs em vez de abri-las (não usar em produção).

    `fail_with` força todas as aberturas a falharem com a mensagem dada.
    """

    def __init__(self, fail_with: str | None = None) -> None:
        self.opened: list[str] = []
        self.fail_with = fail_with

    def open(self, url: str) -> LaunchResult:
        if self.fail_with:
            logger.debug("URL rejected (in-memory)", extra={"reason": self.fail_with})
            return LaunchResult(url=url, dispatched=False, error=self.fail_with)

        self.opened.append(url)
        logger.debug("URL recorded (in-memory)", extra={"opened_count": len(self.opened)})
        return LaunchResult(url=url, dispatched=True)

    @property
    def last_url(self) -> str | None:
        return self.opened[-1] if self.opened else None

    def clear(self) -> None:
        self.opened.clear()

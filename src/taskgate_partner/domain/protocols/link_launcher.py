"""Contrato da capacidade de abrir URLs (plataforma do host)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class LaunchResult:
    """Resultado da tentativa de abrir uma URL.

    `dispatched=True` significa apenas que a plataforma aceitou o pedido;
    o resultado final (fire-and-forget) nunca é aguardado.
    """

    url: str
    dispatched: bool
    error: str | None = None


class LinkLauncher(ABC):
    """Contrato mínimo: tentar abrir a URL informada, sem bloquear."""

    @abstractmethod
    def open(self, url: str) -> LaunchResult: ...

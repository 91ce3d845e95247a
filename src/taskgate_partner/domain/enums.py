"""Enums de domínio para o fluxo de redirecionamento TaskGate."""

from __future__ import annotations

from enum import StrEnum


class CompletionStatus(StrEnum):
    """Desfecho da micro-tarefa reportado ao TaskGate.

    O valor de cada membro é exatamente a string enviada no parâmetro
    `status` da URL de callback.
    """

    OPENED = "open"
    """Usuário concluiu a tarefa e vai abrir o app bloqueado."""

    STAYED_FOCUSED = "focus"
    """Usuário concluiu a tarefa e preferiu manter o foco."""

    CANCELLED = "cancelled"
    """Usuário abandonou a tarefa."""

    @property
    def wire_value(self) -> str:
        """String usada no parâmetro `status` do callback."""
        return self.value


class ParseResult(StrEnum):
    """Classificação de um deep link inbound."""

    ACCEPTED = "accepted"
    UNRECOGNIZED = "unrecognized"
    MALFORMED = "malformed"

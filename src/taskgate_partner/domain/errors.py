"""Erros de domínio.

O ciclo de vida da sessão nunca lança estes erros para o host; eles só
aparecem na composição (factories/configuração).
"""

from __future__ import annotations


class TaskGateConfigError(ValueError):
    """Configuração inválida detectada ao montar o controller."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = errors

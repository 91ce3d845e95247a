"""Contexto de sessão para correlação de logs."""

from __future__ import annotations

import contextlib
from collections.abc import Generator
from contextvars import ContextVar

_session_id: ContextVar[str] = ContextVar("session_id", default="")


def get_session_id() -> str:
    """Retorna o session_id corrente (ou vazio)."""

    return _session_id.get()


def mask_session_id(session_id: str | None) -> str:
    """Trunca o session_id para logging (nunca logar o valor completo)."""

    if not session_id:
        return ""
    if len(session_id) <= 4:
        return session_id
    return session_id[:4] + "..."


@contextlib.contextmanager
def bound_session(session_id: str | None) -> Generator[None, None, None]:
    """Associa o session_id aos logs emitidos dentro do bloco."""

    token = _session_id.set(mask_session_id(session_id))
    try:
        yield
    finally:
        _session_id.reset(token)

"""Geradores de identificadores."""

from __future__ import annotations

import uuid

DEFAULT_SESSION_ID_LENGTH = 8


def new_session_id(length: int = DEFAULT_SESSION_ID_LENGTH) -> str:
    """Gera um session_id curto, aleatório e não sequencial.

    Regra: prefixo hex minúsculo de um UUID4 (sem hífens).
    """

    if length < 1 or length > 32:
        msg = f"session id length must be between 1 and 32, got {length}"
        raise ValueError(msg)
    return uuid.uuid4().hex[:length]

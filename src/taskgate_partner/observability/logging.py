"""Configuração de logging estruturado (JSON)."""

from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter

from taskgate_partner.observability.context import get_session_id, mask_session_id

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(session_id)s] %(message)s"
_URL_FIELDS = ("url", "callback_url")


def _strip_query(url: str) -> str:
    return url.split("?", 1)[0].split("#", 1)[0]


class SessionContextFilter(logging.Filter):
    """Insere session_id e service no record de log.

    Também sanitiza extras: session_id explícito é truncado e campos de URL
    perdem query/fragmento (carregam session_id e task_id).
    """

    def __init__(self, service_name: str) -> None:
        super().__init__()
        self._service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        explicit = getattr(record, "session_id", None)
        record.session_id = mask_session_id(explicit) if explicit else get_session_id()
        for attr in _URL_FIELDS:
            value = getattr(record, attr, None)
            if isinstance(value, str):
                setattr(record, attr, _strip_query(value))
        record.service = self._service_name
        return True


def configure_logging(level: str, service_name: str, log_format: str = "json") -> None:
    """Configura logging (JSON por padrão) com campos padrão do serviço."""

    if log_format == "text":
        formatter: logging.Formatter = logging.Formatter(_TEXT_FORMAT)
    else:
        formatter = JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s %(session_id)s %(service)s",
            rename_fields={"levelname": "level", "name": "logger"},
        )

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(SessionContextFilter(service_name))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]


def get_logger(name: str) -> logging.Logger:
    """Retorna logger simples; o filtro injeta service/session_id."""

    return logging.getLogger(name)


def log_dispatch_failure(
    logger: logging.Logger,
    signal: str,
    reason: str | None = None,
) -> None:
    """Log observável de falha ao despachar sinal outbound (sem retry).

    Args:
        logger: Logger instance
        signal: Nome do sinal (ex: "ready", "completion")
        reason: Razão da falha (ex: "browser_unavailable"), sem URL completa

    Exemplo:
        log_dispatch_failure(logger, "completion", reason="unsupported_scheme")
    """
    extra: dict[str, object] = {
        "dispatch_failed": True,
        "signal": signal,
    }
    if reason:
        extra["reason"] = reason

    logger.warning(
        f"Dispatch failed for {signal} signal",
        extra=extra,
    )

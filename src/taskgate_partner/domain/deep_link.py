"""Codec de deep links TaskGate (inbound e outbound).

Funções puras, sem side effects:
- parse_task_request: URL inbound → TaskInfo (ou motivo da recusa)
- build_ready_url: sinal "partner-ready"
- build_completion_url: callback_url + status/provider/session/task
"""

from __future__ import annotations

from collections.abc import Callable
from urllib.parse import SplitResult, quote, unquote, urlencode, urlsplit, urlunsplit

from taskgate_partner.domain.enums import CompletionStatus, ParseResult
from taskgate_partner.domain.models import RESERVED_PARAMS, TaskInfo
from taskgate_partner.utils.ids import new_session_id

DEFAULT_PATH_MARKER = "taskgate"
DEFAULT_READY_SCHEME = "taskgate"
DEFAULT_READY_HOST = "partner-ready"


def _query_params(parts: SplitResult) -> dict[str, str]:
    # RFC 3986: "+" é literal (não vira espaço); chaves repetidas, o último valor prevalece
    params: dict[str, str] = {}
    for item in parts.query.split("&"):
        if not item:
            continue
        name, _, value = item.partition("=")
        params[unquote(name)] = unquote(value)
    return params


def _encode(params: list[tuple[str, str]]) -> str:
    return urlencode(params, quote_via=quote)


def parse_task_request(
    url: object,
    *,
    path_marker: str = DEFAULT_PATH_MARKER,
    session_id_factory: Callable[[], str] = new_session_id,
) -> tuple[ParseResult, TaskInfo | None, str]:
    """Interpreta um deep link inbound.

    Retorna:
    - (ACCEPTED, task, ""): pedido válido
    - (UNRECOGNIZED, None, motivo): caminho sem o marcador
    - (MALFORMED, None, motivo): marcador presente, campos obrigatórios ausentes

    Nunca lança exceção; apenas valida.
    """
    try:
        parts = urlsplit(str(url))
    except ValueError as exc:
        return ParseResult.UNRECOGNIZED, None, f"Invalid URL: {exc}"

    if path_marker not in parts.path:
        return ParseResult.UNRECOGNIZED, None, f"Path does not contain {path_marker!r}"

    params = _query_params(parts)
    task_id = params.get("task_id")
    callback_url = params.get("callback_url")

    missing = [
        name
        for name, value in (("task_id", task_id), ("callback_url", callback_url))
        if not value
    ]
    if missing:
        return (
            ParseResult.MALFORMED,
            None,
            f"Missing required parameters: {', '.join(missing)}",
        )

    task = TaskInfo(
        task_id=task_id,
        session_id=params.get("session_id") or session_id_factory(),
        callback_url=callback_url,
        app_name=params.get("app_name") or None,
        extra_params={k: v for k, v in params.items() if k not in RESERVED_PARAMS},
    )
    return ParseResult.ACCEPTED, task, ""


def build_ready_url(
    session_id: str,
    provider_id: str | None,
    *,
    scheme: str = DEFAULT_READY_SCHEME,
    host: str = DEFAULT_READY_HOST,
) -> str:
    """Monta o sinal de ready (`taskgate://partner-ready?...`)."""
    params = [("session_id", session_id)]
    if provider_id:
        params.append(("provider_id", provider_id))
    return urlunsplit((scheme, host, "", _encode(params), ""))


def build_completion_url(
    callback_url: str,
    status: CompletionStatus,
    *,
    provider_id: str | None = None,
    session_id: str | None = None,
    task_id: str | None = None,
) -> str:
    """Acrescenta o desfecho à query existente do callback_url.

    Raises:
        ValueError: se callback_url não puder ser interpretada como URL
    """
    parts = urlsplit(callback_url)
    params = [("status", status.wire_value)]

    if provider_id:
        params.append(("provider_id", provider_id))
    if session_id:
        params.append(("session_id", session_id))
    if task_id:
        params.append(("task_id", task_id))

    # A query original segue intacta; apenas acrescenta os novos parâmetros
    query = "&".join(filter(None, [parts.query, _encode(params)]))
    return parts._replace(query=query).geturl()

"""Controller do ciclo de vida da sessão TaskGate.

Fluxo: deep link inbound → parse → tarefa pendente → ready do host →
entrega única aos observers → report de desfecho → sinal outbound → reset.

Contrato:
- Nenhuma operação do ciclo de vida lança exceção para o host
- Falhas viram `False` (parse) ou no-op com log (ready/report)
- Mutação de estado serializada por um único lock por instância
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from taskgate_partner.domain.deep_link import (
    DEFAULT_PATH_MARKER,
    DEFAULT_READY_HOST,
    DEFAULT_READY_SCHEME,
    build_completion_url,
    build_ready_url,
    parse_task_request,
)
from taskgate_partner.domain.enums import CompletionStatus, ParseResult
from taskgate_partner.domain.models import Session, TaskInfo
from taskgate_partner.domain.protocols import (
    LaunchResult,
    LinkLauncher,
    TaskCallback,
    TaskObserver,
)
from taskgate_partner.observability.context import bound_session
from taskgate_partner.observability.logging import get_logger, log_dispatch_failure
from taskgate_partner.utils.ids import new_session_id

logger: logging.Logger = get_logger(__name__)


class SessionController:
    """Dono exclusivo do estado Session/PendingTask de um parceiro.

    Uso típico:
        controller = SessionController(launcher)
        controller.configure("provider_123")
        controller.add_observer(my_observer)

        if controller.parse_incoming(url):
            ...  # montar a UI da tarefa
        controller.signal_ready()
        controller.report_completion(CompletionStatus.OPENED)
    """

    def __init__(
        self,
        launcher: LinkLauncher,
        *,
        path_marker: str = DEFAULT_PATH_MARKER,
        ready_scheme: str = DEFAULT_READY_SCHEME,
        ready_host: str = DEFAULT_READY_HOST,
        session_id_factory: Callable[[], str] = new_session_id,
    ) -> None:
        self._launcher = launcher
        self._path_marker = path_marker
        self._ready_scheme = ready_scheme
        self._ready_host = ready_host
        self._session_id_factory = session_id_factory

        self._lock = threading.RLock()
        self._provider_id: str | None = None
        # (sessão, tarefa pendente): sempre substituídos juntos numa única atribuição
        self._state: tuple[Session | None, TaskInfo | None] = (None, None)
        self._observers: list[TaskObserver] = []
        self._on_task_received: TaskCallback | None = None

    # ------------------------------------------------------------------
    # Configuração e observers
    # ------------------------------------------------------------------

    def configure(self, provider_id: str) -> None:
        """Define o provider_id incluído nos sinais outbound."""
        with self._lock:
            self._provider_id = provider_id
        logger.info("TaskGate partner configured", extra={"provider_id": provider_id})

    @property
    def provider_id(self) -> str | None:
        return self._provider_id

    def add_observer(self, observer: TaskObserver) -> None:
        """Registra observer (invocado na ordem de registro)."""
        with self._lock:
            if observer not in self._observers:
                self._observers.append(observer)

    def remove_observer(self, observer: TaskObserver) -> None:
        with self._lock:
            if observer in self._observers:
                self._observers.remove(observer)

    @property
    def on_task_received(self) -> TaskCallback | None:
        """Callback único, chamado depois de todos os observers."""
        return self._on_task_received

    @on_task_received.setter
    def on_task_received(self, callback: TaskCallback | None) -> None:
        with self._lock:
            self._on_task_received = callback

    # ------------------------------------------------------------------
    # Acessores (somente leitura)
    # ------------------------------------------------------------------

    @property
    def has_active_session(self) -> bool:
        return self._state[0] is not None

    @property
    def current_task(self) -> str | None:
        session = self._state[0]
        return session.task_id if session else None

    @property
    def current_session(self) -> str | None:
        session = self._state[0]
        return session.session_id if session else None

    @property
    def pending_task(self) -> TaskInfo | None:
        return self._state[1]

    # ------------------------------------------------------------------
    # Ciclo de vida
    # ------------------------------------------------------------------

    def parse_incoming(self, url: object) -> bool:
        """Trata um deep link inbound.

        Returns:
            True se o link foi reconhecido e a tarefa ficou pendente.
        """
        result, task, reason = parse_task_request(
            url,
            path_marker=self._path_marker,
            session_id_factory=self._session_id_factory,
        )

        if result is ParseResult.UNRECOGNIZED:
            logger.debug("Deep link not handled", extra={"reason": reason})
            return False

        if result is ParseResult.MALFORMED or task is None:
            logger.warning("Malformed TaskGate request", extra={"reason": reason})
            return False

        with self._lock:
            replaced = self._state[0]
            self._state = (Session.from_task(task), task)

        with bound_session(task.session_id):
            if replaced is not None:
                logger.info(
                    "Previous session replaced",
                    extra={"previous_task_id": replaced.task_id},
                )
            logger.info(
                "Task request stored, waiting for signal_ready()",
                extra={
                    "task_id": task.task_id,
                    "app_name": task.app_name,
                    "extra_params_count": len(task.extra_params),
                },
            )
        return True

    def signal_ready(self) -> LaunchResult | None:
        """Host pronto: entrega a tarefa pendente e avisa o TaskGate.

        Returns:
            Resultado da abertura do sinal de ready, ou None sem sessão ativa.
        """
        with self._lock:
            session, task = self._state
            if session is None:
                logger.warning("No active session, cannot signal ready")
                return None

            with bound_session(session.session_id):
                self._state = (session, None)
                if task is not None:
                    self._deliver(task)
                else:
                    logger.info("No pending task to deliver")

                url = build_ready_url(
                    session.session_id,
                    self._provider_id,
                    scheme=self._ready_scheme,
                    host=self._ready_host,
                )
                logger.info("Notifying TaskGate: partner ready")
                return self._dispatch("ready", url)

    def report_completion(self, status: CompletionStatus) -> LaunchResult | None:
        """Reporta o desfecho ao callback_url e encerra a sessão.

        A sessão é sempre limpa, mesmo quando o despacho é pulado ou falha.
        """
        status = CompletionStatus(status)
        with self._lock:
            session = self._state[0]
            try:
                if session is None:
                    logger.warning("No callback URL, cannot report completion")
                    return None

                with bound_session(session.session_id):
                    return self._report(session, status)
            finally:
                self._clear_session()

    def cancel_task(self) -> LaunchResult | None:
        """Cancela a tarefa corrente (equivale a report CANCELLED)."""
        return self.report_completion(CompletionStatus.CANCELLED)

    # ------------------------------------------------------------------
    # Internos
    # ------------------------------------------------------------------

    def _report(self, session: Session, status: CompletionStatus) -> LaunchResult | None:
        logger.info("Reporting completion", extra={"status": status.wire_value})
        try:
            url = build_completion_url(
                session.callback_url,
                status,
                provider_id=self._provider_id,
                session_id=session.session_id,
                task_id=session.task_id,
            )
        except ValueError as exc:
            logger.warning(
                "Invalid callback URL, completion not dispatched",
                extra={"error": str(exc)},
            )
            return None
        return self._dispatch("completion", url)

    def _deliver(self, task: TaskInfo) -> None:
        logger.info("Delivering task to observers", extra={"task_id": task.task_id})

        for observer in list(self._observers):
            try:
                observer.on_task_received(self, task)
            except Exception:
                logger.exception(
                    "Task observer failed",
                    extra={"observer": type(observer).__name__, "hook": "on_task_received"},
                )
            try:
                observer.on_task_requested(self, task.task_id, dict(task.extra_params))
            except Exception:
                logger.exception(
                    "Task observer failed",
                    extra={"observer": type(observer).__name__, "hook": "on_task_requested"},
                )

        callback = self._on_task_received
        if callback is not None:
            try:
                callback(task)
            except Exception:
                logger.exception("on_task_received callback failed")

    def _dispatch(self, signal: str, url: str) -> LaunchResult:
        try:
            result = self._launcher.open(url)
        except Exception as exc:
            logger.exception("Link launcher raised", extra={"signal": signal})
            result = LaunchResult(url=url, dispatched=False, error=type(exc).__name__)

        if not result.dispatched:
            log_dispatch_failure(logger, signal, reason=result.error)
        return result

    def _clear_session(self) -> None:
        self._state = (None, None)

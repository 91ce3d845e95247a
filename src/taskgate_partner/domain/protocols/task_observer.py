"""Contrato para observers de tarefas entregues."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from taskgate_partner.application.session_controller import SessionController
    from taskgate_partner.domain.models import TaskInfo

TaskCallback = Callable[["TaskInfo"], None]


class TaskObserver(ABC):
    """Recebe a tarefa pendente quando o host sinaliza ready."""

    @abstractmethod
    def on_task_received(self, controller: SessionController, task: TaskInfo) -> None: ...

    def on_task_requested(
        self,
        controller: SessionController,
        task_id: str,
        params: dict[str, str],
    ) -> None:
        """Hook opcional: apenas o id da tarefa e os parâmetros extras."""
        return None

"""Modelos de domínio (sessão e tarefa recebida)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# Parâmetros reconhecidos; nunca entram em extra_params
RESERVED_PARAMS: frozenset[str] = frozenset(
    {"task_id", "callback_url", "session_id", "app_name"}
)


class TaskInfo(BaseModel):
    """Tarefa recebida do TaskGate, entregue aos observers no ready."""

    model_config = ConfigDict(frozen=True)

    task_id: str
    session_id: str
    callback_url: str
    app_name: str | None = None
    extra_params: dict[str, str] = Field(default_factory=dict)


class Session(BaseModel):
    """Identificadores da sessão de redirecionamento ativa."""

    model_config = ConfigDict(frozen=True)

    task_id: str
    session_id: str
    callback_url: str
    app_name: str | None = None

    @classmethod
    def from_task(cls, task: TaskInfo) -> Session:
        return cls(
            task_id=task.task_id,
            session_id=task.session_id,
            callback_url=task.callback_url,
            app_name=task.app_name,
        )

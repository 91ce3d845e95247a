"""Re-exports dos Protocolos de domínio para uso por Application."""

from __future__ import annotations

from taskgate_partner.domain.protocols.link_launcher import LaunchResult, LinkLauncher
from taskgate_partner.domain.protocols.task_observer import TaskCallback, TaskObserver

__all__ = [
    "LaunchResult",
    "LinkLauncher",
    "TaskCallback",
    "TaskObserver",
]

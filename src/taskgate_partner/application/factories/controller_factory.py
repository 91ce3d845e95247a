"""Factory do SessionController (composition root do host).

Substitui o singleton global: o host cria e mantém a instância.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import TYPE_CHECKING

from taskgate_partner.application.session_controller import SessionController
from taskgate_partner.domain.errors import TaskGateConfigError
from taskgate_partner.infra.launcher_factory import create_link_launcher
from taskgate_partner.observability.logging import get_logger
from taskgate_partner.utils.ids import new_session_id

if TYPE_CHECKING:
    from taskgate_partner.config.settings import Settings
    from taskgate_partner.domain.protocols import LinkLauncher

logger: logging.Logger = get_logger(__name__)


def create_session_controller(
    settings: Settings | None = None,
    launcher: LinkLauncher | None = None,
) -> SessionController:
    """Cria SessionController configurado a partir de Settings.

    Args:
        settings: Configurações. Se None, usa get_settings()
        launcher: LinkLauncher injetado. Se None, criado pelo backend configurado

    Returns:
        SessionController pronto (já configurado se houver provider_id)

    Raises:
        TaskGateConfigError: Se a configuração for inválida
    """
    if settings is None:
        from taskgate_partner.config.settings import get_settings

        settings = get_settings()

    # Com launcher injetado, o backend configurado não é usado
    if launcher is None:
        errors = settings.validation_errors()
    else:
        errors = settings.validate_deep_link_config()
    if errors:
        logger.error("Invalid TaskGate configuration", extra={"errors": errors})
        raise TaskGateConfigError(errors)

    if launcher is None:
        launcher = create_link_launcher(
            settings.launcher_backend,
            http_timeout_seconds=settings.http_launcher_timeout_seconds,
        )

    controller = SessionController(
        launcher,
        path_marker=settings.path_marker,
        ready_scheme=settings.ready_scheme,
        ready_host=settings.ready_host,
        session_id_factory=partial(new_session_id, settings.session_id_length),
    )
    if settings.provider_id:
        controller.configure(settings.provider_id)

    logger.info(
        "Session controller created",
        extra={
            "launcher": type(launcher).__name__,
            "environment": settings.environment,
        },
    )
    return controller

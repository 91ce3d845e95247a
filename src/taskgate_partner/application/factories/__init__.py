"""Factories da camada de aplicação."""

from taskgate_partner.application.factories.controller_factory import (
    create_session_controller,
)

__all__ = ["create_session_controller"]

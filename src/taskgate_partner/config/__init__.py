"""Configurações centralizadas do taskgate_partner.

Uso típico:
    from taskgate_partner.config import get_settings
"""

from taskgate_partner.config.settings import LAUNCHER_BACKENDS, Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "LAUNCHER_BACKENDS",
]

"""Implementações de infraestrutura (abertura de URLs outbound)."""

from taskgate_partner.infra.launcher_browser import WebBrowserLinkLauncher
from taskgate_partner.infra.launcher_factory import create_link_launcher
from taskgate_partner.infra.launcher_http import HttpLinkLauncher
from taskgate_partner.infra.launcher_memory import InMemoryLinkLauncher

__all__ = [
    "HttpLinkLauncher",
    "InMemoryLinkLauncher",
    "WebBrowserLinkLauncher",
    "create_link_launcher",
]

from __future__ import annotations

import pytest

from taskgate_partner.application.session_controller import SessionController
from taskgate_partner.config.settings import get_settings
from taskgate_partner.infra.launcher_memory import InMemoryLinkLauncher


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def launcher() -> InMemoryLinkLauncher:
    return InMemoryLinkLauncher()


@pytest.fixture()
def controller(launcher: InMemoryLinkLauncher) -> SessionController:
    sdk = SessionController(launcher)
    sdk.configure("test_provider")
    return sdk

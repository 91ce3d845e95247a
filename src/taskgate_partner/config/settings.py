"""Configurações da integração via variáveis de ambiente.

Todas as variáveis usam o prefixo TASKGATE_ (ex.: TASKGATE_PROVIDER_ID).
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from taskgate_partner.domain.deep_link import (
    DEFAULT_PATH_MARKER,
    DEFAULT_READY_HOST,
    DEFAULT_READY_SCHEME,
)
from taskgate_partner.utils.ids import DEFAULT_SESSION_ID_LENGTH

LAUNCHER_BACKENDS: frozenset[str] = frozenset({"memory", "browser", "http"})


class Settings(BaseSettings):
    """Configurações lidas do ambiente.

    Comentários em PT-BR são obrigatórios por diretriz do projeto.
    """

    model_config = SettingsConfigDict(
        env_prefix="TASKGATE_",
        case_sensitive=False,
    )

    # Aplicação
    service_name: str = "taskgate_partner"
    version: str = "0.1.0"
    environment: str = "development"
    log_level: str = "INFO"
    log_format: str = "json"  # json | text

    # Parceiro
    provider_id: str | None = None  # Atribuído pelo TaskGate

    # Deep links
    path_marker: str = DEFAULT_PATH_MARKER  # Segmento que identifica pedidos inbound
    ready_scheme: str = DEFAULT_READY_SCHEME
    ready_host: str = DEFAULT_READY_HOST
    session_id_length: int = DEFAULT_SESSION_ID_LENGTH  # Ids gerados localmente

    # Abertura de URLs outbound
    launcher_backend: str = "memory"  # memory | browser | http
    http_launcher_timeout_seconds: float = 10.0

    def validate_launcher_config(self) -> list[str]:
        """Valida backend e parâmetros do launcher.

        Em produção, memory é proibido (nenhum sinal sairia do processo).
        Retorna lista de erros (vazia = OK).
        """
        errors: list[str] = []
        backend = self.launcher_backend.lower()
        if backend not in LAUNCHER_BACKENDS:
            errors.append(
                f"TASKGATE_LAUNCHER_BACKEND inválido: {self.launcher_backend} "
                f"(esperado: {', '.join(sorted(LAUNCHER_BACKENDS))})"
            )
        elif backend == "memory" and self.is_production:
            errors.append("TASKGATE_LAUNCHER_BACKEND=memory não é permitido em produção")

        if self.http_launcher_timeout_seconds <= 0:
            errors.append("TASKGATE_HTTP_LAUNCHER_TIMEOUT_SECONDS deve ser positivo")
        return errors

    def validate_deep_link_config(self) -> list[str]:
        """Valida marcador, endpoint de ready e tamanho dos ids gerados."""
        errors: list[str] = []
        if not self.path_marker:
            errors.append("TASKGATE_PATH_MARKER não pode ser vazio")
        if not self.ready_scheme or not self.ready_host:
            errors.append("TASKGATE_READY_SCHEME e TASKGATE_READY_HOST são obrigatórios")
        if not 8 <= self.session_id_length <= 32:
            errors.append("TASKGATE_SESSION_ID_LENGTH deve estar entre 8 e 32")
        return errors

    def validation_errors(self) -> list[str]:
        """Agrega todas as validações."""
        return self.validate_launcher_config() + self.validate_deep_link_config()

    @property
    def is_production(self) -> bool:
        """True se ambiente é produção."""
        return self.environment.lower() in ("production", "prod")

    @property
    def is_staging(self) -> bool:
        """True se ambiente é staging."""
        return self.environment.lower() in ("staging", "stage")

    @property
    def is_development(self) -> bool:
        """True se ambiente é desenvolvimento."""
        return self.environment.lower() in ("development", "dev", "local")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Retorna uma instância cacheada de Settings.

    A cache garante que mesmo múltiplas injeções não criam novos objetos.
    """
    return Settings()

"""Bootstrap da aplicação: inicialização e wiring.

Este módulo é o composition root: configura logging, valida settings e
conecta implementações concretas aos protocolos.

Uso:
    from app.bootstrap import initialize_app, get_inbound_use_case

    # Na inicialização do serviço
    initialize_app()

    # Obter dependências (singletons)
    use_case = get_inbound_use_case()
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from app.observability import get_correlation_id
from config.logging import configure_logging
from config.logging.config import VALID_LOG_LEVELS
from config.settings import (
    get_auto_reply_settings,
    get_base_settings,
    get_contact_cache_settings,
    get_downstream_settings,
    get_evolution_settings,
    get_firestore_settings,
)

if TYPE_CHECKING:
    from app.protocols import ContactDirectoryProtocol, GatewayClientProtocol
    from app.use_cases.evolution import ProcessInboundEventUseCase, SendTextMessageUseCase

DEFAULT_LOG_LEVEL = "INFO"
STRICT_VALIDATION_ENVS = {"staging", "production"}

logger = logging.getLogger(__name__)


def initialize_app() -> None:
    """Configura logging JSON com correlation_id. Chamar uma vez no boot.

    LOG_LEVEL inválido não derruba o import: usa INFO e o erro aparece
    depois em validate_runtime_settings.
    """
    base = get_base_settings()
    level = base.log_level if base.log_level in VALID_LOG_LEVELS else DEFAULT_LOG_LEVEL

    configure_logging(
        level=level,
        service_name=base.service_name,
        correlation_id_getter=get_correlation_id,
    )


def validate_runtime_settings() -> None:
    """Valida settings obrigatórias no startup.

    Em `staging`/`production` falha rápido para impedir boot inválido.
    Em `development` mantém alerta sem bloquear execução local.
    """
    base = get_base_settings()
    environment = base.environment
    strict_mode = environment in STRICT_VALIDATION_ENVS
    errors: list[str] = []

    errors.extend(f"base: {error}" for error in base.validate())
    errors.extend(f"evolution: {error}" for error in get_evolution_settings().validate())
    errors.extend(f"auto_reply: {error}" for error in get_auto_reply_settings().validate())
    errors.extend(
        f"contact_cache: {error}" for error in get_contact_cache_settings().validate()
    )

    downstream = get_downstream_settings()
    errors.extend(f"downstream: {error}" for error in downstream.validate(base))
    if downstream.ticket_store_backend == "firestore":
        errors.extend(
            f"firestore: {error}"
            for error in get_firestore_settings().validate(base.gcp_project)
        )

    if not errors:
        logger.info(
            "settings_validated",
            extra={"component": "bootstrap", "result": "ok", "environment": environment},
        )
        return

    logger.warning(
        "settings_validation_failed",
        extra={
            "component": "bootstrap",
            "result": "failed",
            "environment": environment,
            "error_count": len(errors),
            "errors": errors,
        },
    )
    if strict_mode:
        details = "\n".join(f"- {error}" for error in errors)
        raise RuntimeError(f"Configuração inválida para {environment}:\n{details}")


# ──────────────────────────────────────────────────────────────────────────────
# Getters (lazy initialization com cache)
# ──────────────────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def get_contact_directory() -> ContactDirectoryProtocol:
    """Obtém o diretório de contatos do processo (singleton)."""
    from app.bootstrap.dependencies import create_contact_directory

    return create_contact_directory()


@lru_cache(maxsize=1)
def get_gateway_client() -> GatewayClientProtocol:
    """Obtém o cliente da Evolution API (singleton)."""
    from app.bootstrap.dependencies import create_gateway_client

    return create_gateway_client()


@lru_cache(maxsize=1)
def get_inbound_use_case() -> ProcessInboundEventUseCase:
    """Obtém o use case inbound ligado ao diretório e gateway singletons."""
    from app.bootstrap.dependencies import create_inbound_use_case

    return create_inbound_use_case(get_contact_directory(), get_gateway_client())


@lru_cache(maxsize=1)
def get_send_text_use_case() -> SendTextMessageUseCase:
    """Obtém o use case de envio manual (singleton)."""
    from app.bootstrap.dependencies import create_send_text_use_case

    return create_send_text_use_case(get_gateway_client())


def reset_dependencies() -> None:
    """Descarta singletons (testes e reconfiguração)."""
    for getter in (
        get_contact_directory,
        get_gateway_client,
        get_inbound_use_case,
        get_send_text_use_case,
    ):
        getter.cache_clear()

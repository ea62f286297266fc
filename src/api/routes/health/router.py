"""Endpoints de health check (liveness e readiness)."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.bootstrap import get_contact_directory
from app.protocols import ContactDirectoryProtocol
from config.settings import (
    get_base_settings,
    get_downstream_settings,
    get_evolution_settings,
    get_firestore_settings,
)

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    cache_size: int
    version: str = "1.0.0"


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    """Resultado de checagem de dependência."""

    status: Literal["ok", "degraded", "failed", "skipped"]
    latency_ms: float | None = None
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "latency_ms": self.latency_ms,
            "error": self.error,
        }


@router.get("/health", response_model=HealthResponse)
async def health_check(
    directory: ContactDirectoryProtocol = Depends(get_contact_directory),
) -> HealthResponse:
    """Liveness probe: serviço rodando e tamanho atual do diretório."""
    return HealthResponse(
        status="healthy",
        service=get_base_settings().service_name,
        timestamp=datetime.now(UTC).isoformat(),
        cache_size=directory.size,
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness probe: checa apenas os backends configurados."""
    downstream = get_downstream_settings()
    redis_check, firestore_check = await asyncio.gather(
        _check_redis(
            getattr(request.app.state, "redis_client", None),
            required=downstream.notification_sink_backend == "redis",
        ),
        _check_firestore(
            getattr(request.app.state, "firestore_client", None),
            required=downstream.ticket_store_backend == "firestore",
        ),
    )
    gateway_check = _check_gateway_config()

    ready = all(
        check.status in {"ok", "degraded", "skipped"}
        for check in (redis_check, firestore_check, gateway_check)
    )
    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {
            "redis": redis_check.as_dict(),
            "firestore": firestore_check.as_dict(),
            "evolution": gateway_check.as_dict(),
        },
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)


def _check_gateway_config() -> DependencyCheck:
    errors = get_evolution_settings().validate()
    if errors:
        return DependencyCheck(status="degraded", error="not_configured")
    return DependencyCheck(status="ok")


async def _check_redis(redis_client: Any | None, *, required: bool) -> DependencyCheck:
    if not required:
        return DependencyCheck(status="skipped")
    if redis_client is None:
        return DependencyCheck(status="failed", error="not_configured")
    started_at = time.perf_counter()
    try:
        await asyncio.wait_for(redis_client.ping(), timeout=2.0)
    except TimeoutError:
        return DependencyCheck(status="failed", error="timeout")
    except Exception as exc:
        logger.warning("readiness_redis_check_failed", extra={"error_type": type(exc).__name__})
        return DependencyCheck(status="failed", error=type(exc).__name__)
    latency_ms = (time.perf_counter() - started_at) * 1000
    return DependencyCheck(status="ok", latency_ms=round(latency_ms, 2))


async def _check_firestore(firestore_client: Any | None, *, required: bool) -> DependencyCheck:
    if not required:
        return DependencyCheck(status="skipped")
    if firestore_client is None:
        return DependencyCheck(status="failed", error="not_configured")
    started_at = time.perf_counter()
    try:
        exists = await asyncio.wait_for(
            asyncio.to_thread(_read_firestore_health_doc, firestore_client),
            timeout=3.0,
        )
    except TimeoutError:
        return DependencyCheck(status="failed", error="timeout")
    except Exception as exc:
        logger.warning(
            "readiness_firestore_check_failed", extra={"error_type": type(exc).__name__}
        )
        return DependencyCheck(status="failed", error=type(exc).__name__)
    latency_ms = (time.perf_counter() - started_at) * 1000
    status = "ok" if exists else "degraded"
    return DependencyCheck(status=status, latency_ms=round(latency_ms, 2))


def _read_firestore_health_doc(firestore_client: Any) -> bool:
    collection = get_firestore_settings().health_collection
    doc = firestore_client.collection(collection).document("check").get()
    return bool(getattr(doc, "exists", False))

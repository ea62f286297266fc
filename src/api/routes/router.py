"""Montagem do router raiz.

Health e readiness ficam na raiz (`/health`, `/ready`) para os probes do
Cloud Run; o webhook da Evolution e os endpoints operacionais de cache
ficam sob `/webhook`.
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.evolution.router import router as evolution_router
from api.routes.health.router import router as health_router

_MOUNTS: tuple[tuple[APIRouter, str, str], ...] = (
    (health_router, "", "health"),
    (evolution_router, "/webhook", "evolution"),
)


def create_api_router() -> APIRouter:
    """Router com todos os sub-routers da API montados."""
    api_router = APIRouter()
    for sub_router, prefix, tag in _MOUNTS:
        api_router.include_router(sub_router, prefix=prefix, tags=[tag])
    return api_router

"""Adapters HTTP de entrada.

Rotas só validam o request e delegam aos use cases; `create_api_router`
monta tudo para o app FastAPI.
"""

from __future__ import annotations

from api.routes.router import create_api_router

__all__ = ["create_api_router"]

"""Agregador de rotas: registra todos os routers.

Uso:
    from api.routes import create_api_router

    app = FastAPI()
    app.include_router(create_api_router())
"""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.crm.router import router as crm_router
from api.routes.dispatch.router import router as dispatch_router
from api.routes.health.router import router as health_router

API_PREFIX = "/api/v1"


def create_api_router() -> APIRouter:
    """Cria router principal com todos os sub-routers registrados."""
    api_router = APIRouter()

    # Health checks (sem prefixo para /health e /ready na raiz)
    api_router.include_router(health_router, tags=["health"])

    api_router.include_router(dispatch_router, prefix=f"{API_PREFIX}/templates", tags=["dispatch"])
    api_router.include_router(crm_router, prefix=f"{API_PREFIX}/crm", tags=["crm"])

    return api_router

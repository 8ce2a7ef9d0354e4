"""API v1 - Versioned routers.

Uso:
    from routers.v1 import v1_router
    app.include_router(v1_router, prefix="/v1")
"""

from fastapi import APIRouter

from ..play import router as play_router
from ..quizzes import router as quizzes_router

# Router principal v1 que agrupa todos os sub-routers
v1_router = APIRouter()

v1_router.include_router(quizzes_router)
v1_router.include_router(play_router)

__all__ = ["v1_router"]

"""
Quiz Studio Server

FastAPI server with:
- Quiz builder (CRUD, publicacao, respostas, rascunho por IA)
- Link publico de jogo (sessoes em memoria, captura de lead)
- Persistencia de quizzes e respostas no AgentFS
- Rate limiting, CORS, identificacao do dono
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

import app_state
from config import get_config
from quiz.exceptions import QuizError
from routers import play_router, quizzes_router
from routers.v1 import v1_router
from utils.logger import configure_logging
from utils.rate_limiter import get_limiter

config = get_config()
configure_logging(config.log_level)
logger = logging.getLogger(__name__)


# =============================================================================
# FASTAPI APP
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage app lifecycle."""
    logger.info(f"Iniciando Quiz Studio ({config.environment})")
    await app_state.init_quiz_engine()
    yield
    await app_state.shutdown_state()


app = FastAPI(
    title="Quiz Studio",
    description="Quizzes de marketing com pontuacao por faixas e captura de leads",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Rate limiter
limiter = get_limiter()
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(QuizError)
async def quiz_error_handler(request: Request, exc: QuizError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# =============================================================================
# HEALTH ENDPOINTS
# =============================================================================


@app.get("/")
async def root():
    """Health check."""
    return {
        "status": "ok",
        "message": "Quiz Studio v1",
        "auth_enabled": config.auth_enabled,
    }


@app.get("/health")
async def health_check():
    """Detailed health check."""
    engine = app_state.get_quiz_engine()
    return {
        "status": "healthy",
        "environment": config.environment,
        "play_sessions": engine.sessions.get_stats(),
        "storage": {"backend": "agentfs", "id": config.agentfs_id},
        "ai_drafts": app_state.get_llm_factory().is_configured,
        "security": {
            "auth_enabled": config.auth_enabled,
            "rate_limiter": "slowapi",
        },
    }


# =============================================================================
# ROUTERS
# =============================================================================

app.include_router(quizzes_router)
app.include_router(play_router)
app.include_router(v1_router, prefix="/v1")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8001)

# =============================================================================
# CONFIGURACAO DO QUIZ STUDIO
# =============================================================================
# Valores padrao sobrescritos por variaveis de ambiente (.env carregado via
# python-dotenv). Use get_config() em vez de instanciar diretamente.
# =============================================================================

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv


def _env_bool(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]


@dataclass
class QuizStudioConfig:
    """Configuracao do servico."""

    environment: str = "development"
    log_level: str = "INFO"
    auth_enabled: bool = True

    # Jogo publico
    advance_delay: float = 0.4  # atraso visual antes de avancar (segundos)
    play_session_ttl: float = 3600.0
    play_session_max: int = 10_000
    rate_limit_play: str = "60/minute"

    # CORS
    cors_origins: list[str] = field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))

    # Persistencia (AgentFS)
    agentfs_id: str = "quiz-studio"

    # Rascunhos por IA
    anthropic_api_key: str | None = None
    draft_model: str | None = None
    draft_max_questions: int = 20

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @classmethod
    def from_env(cls) -> "QuizStudioConfig":
        """Le a configuracao das variaveis de ambiente."""
        return cls(
            environment=os.getenv("ENVIRONMENT", "development"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            auth_enabled=_env_bool("AUTH_ENABLED", True),
            advance_delay=float(os.getenv("QUIZ_ADVANCE_DELAY", "0.4")),
            play_session_ttl=float(os.getenv("PLAY_SESSION_TTL", "3600")),
            play_session_max=int(os.getenv("PLAY_SESSION_MAX", "10000")),
            rate_limit_play=os.getenv("RATE_LIMIT_PLAY", "60/minute"),
            cors_origins=_env_list("CORS_ORIGINS", DEFAULT_CORS_ORIGINS),
            agentfs_id=os.getenv("QUIZ_AGENTFS_ID", "quiz-studio"),
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY") or None,
            draft_model=os.getenv("QUIZ_DRAFT_MODEL") or None,
            draft_max_questions=int(os.getenv("QUIZ_DRAFT_MAX_QUESTIONS", "20")),
        )


_config: QuizStudioConfig | None = None


def get_config() -> QuizStudioConfig:
    """Retorna a configuracao (carregada uma vez)."""
    global _config
    if _config is None:
        load_dotenv()
        _config = QuizStudioConfig.from_env()
    return _config


def reload_config() -> QuizStudioConfig:
    """Relê .env e variaveis de ambiente."""
    global _config
    load_dotenv(override=True)
    _config = QuizStudioConfig.from_env()
    return _config

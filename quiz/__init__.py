"""Quiz Module - Quizzes de marketing com pontuacao por faixas.

Arquitetura:
- models/: Enums, Schemas Pydantic, PlaySession
- engine/: QuizEngine, QuizPlayer, QuizScoringEngine, validacao, parser de rascunhos
- llm/: LLMClientFactory (rascunhos gerados por IA)
- storage/: QuizStore, ResponseStore, PlaySessionCache (KV do AgentFS)
- prompts/: Templates de prompts
"""

from .engine import QuizEngine, QuizPlayer, QuizScoringEngine
from .exceptions import (
    ConfigurationError,
    InvalidTransitionError,
    OwnershipError,
    QuizError,
    QuizNotFoundError,
)
from .llm import LLMClientFactory
from .models import PlayStep, QuizDefinition, QuizOption, QuizQuestion, ResultBucket
from .storage import PlaySessionCache, QuizStore, ResponseStore

__all__ = [
    # Models
    "PlayStep",
    "QuizOption",
    "QuizQuestion",
    "ResultBucket",
    "QuizDefinition",
    # Engines
    "QuizEngine",
    "QuizPlayer",
    "QuizScoringEngine",
    # Errors
    "QuizError",
    "ConfigurationError",
    "InvalidTransitionError",
    "QuizNotFoundError",
    "OwnershipError",
    # LLM
    "LLMClientFactory",
    # Storage
    "QuizStore",
    "ResponseStore",
    "PlaySessionCache",
]

"""Quiz Storage - Stores de definicoes e respostas (AgentFS) e sessoes de jogo."""

from .quiz_store import QuizStore
from .response_store import ResponseStore
from .session_cache import PlaySessionCache

__all__ = ["QuizStore", "ResponseStore", "PlaySessionCache"]

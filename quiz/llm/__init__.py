"""Quiz LLM - Geracao de rascunhos via Anthropic."""

from .factory import LLMClientFactory, QuizDraftGenerator

__all__ = ["LLMClientFactory", "QuizDraftGenerator"]

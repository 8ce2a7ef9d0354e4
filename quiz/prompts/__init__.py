"""Quiz Prompts - Templates de geracao de rascunho."""

from .templates import (
    DEFAULT_DRAFT_QUESTIONS,
    MAX_DRAFT_QUESTIONS,
    QUIZ_DRAFT_PROMPT,
    QUIZ_SYSTEM_PROMPT,
    clamp_question_count,
    format_draft_prompt,
)

__all__ = [
    "QUIZ_SYSTEM_PROMPT",
    "QUIZ_DRAFT_PROMPT",
    "DEFAULT_DRAFT_QUESTIONS",
    "MAX_DRAFT_QUESTIONS",
    "clamp_question_count",
    "format_draft_prompt",
]

"""Quiz Models - Enums, Schemas e estado de jogo."""

from .enums import PLAYABLE_QUESTION_TYPES, PlayStep, QuestionType, QuizStatus
from .schemas import (
    CamelModel,
    LeadFields,
    LeadRequest,
    PlayView,
    PublicQuestionView,
    PublicQuizView,
    QuizDefinition,
    QuizDefinitionInput,
    QuizDraft,
    QuizDraftRequest,
    QuizOption,
    QuizQuestion,
    QuizResponse,
    QuizSettings,
    ResultBucket,
    ScoreOutcome,
    SelectedAnswer,
    SelectOptionRequest,
    ValidationReport,
)
from .state import PlaySession

__all__ = [
    # Base
    "CamelModel",
    # Enums
    "QuestionType",
    "PlayStep",
    "QuizStatus",
    "PLAYABLE_QUESTION_TYPES",
    # Definicao
    "QuizOption",
    "QuizQuestion",
    "ResultBucket",
    "LeadFields",
    "QuizSettings",
    "QuizDefinition",
    # Respostas
    "SelectedAnswer",
    "QuizResponse",
    "ScoreOutcome",
    # Requests
    "QuizDefinitionInput",
    "SelectOptionRequest",
    "LeadRequest",
    "QuizDraftRequest",
    # Views
    "PublicQuestionView",
    "PublicQuizView",
    "PlayView",
    "QuizDraft",
    "ValidationReport",
    # State
    "PlaySession",
]

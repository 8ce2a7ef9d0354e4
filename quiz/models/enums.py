"""Quiz Enums - Tipos de pergunta, etapas de jogo e status."""

from enum import Enum


class QuestionType(str, Enum):
    """Variantes de pergunta suportadas pelo schema."""

    SINGLE = "single"  # Unica variante jogavel
    MULTIPLE = "multiple"  # Reservado
    IMAGE_CHOICE = "image_choice"  # Reservado


class PlayStep(str, Enum):
    """Etapas da sessao de jogo publica."""

    PLAYING = "playing"
    LEAD_CAPTURE = "lead"
    RESULT = "result"


class QuizStatus(str, Enum):
    """Status de publicacao do quiz."""

    DRAFT = "draft"
    PUBLISHED = "published"


# Variantes que o motor de jogo sabe pontuar
PLAYABLE_QUESTION_TYPES = frozenset({QuestionType.SINGLE})

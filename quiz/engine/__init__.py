"""Quiz Engines - Logica de negocios."""

from .draft_parser import parse_generated_quiz, strip_code_fences
from .play_engine import QuizPlayer, calculate_progress
from .quiz_engine import QuizEngine
from .scoring_engine import QuizScoringEngine
from .validation import ensure_playable, validate_definition

__all__ = [
    "QuizEngine",
    "QuizScoringEngine",
    "QuizPlayer",
    "calculate_progress",
    "validate_definition",
    "ensure_playable",
    "parse_generated_quiz",
    "strip_code_fences",
]

"""Routers module for Quiz Studio."""

from .play import router as play_router
from .quizzes import router as quizzes_router

__all__ = [
    "play_router",
    "quizzes_router",
]

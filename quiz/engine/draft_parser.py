"""Quiz Draft Parser - Normaliza a saida JSON da IA em um rascunho de quiz."""

import json
import logging
import math
import re
from typing import Any

from ..exceptions import DraftGenerationError
from ..models.schemas import QuizDraft, QuizOption, QuizQuestion, ResultBucket

logger = logging.getLogger(__name__)

_FENCE_START = re.compile(r"^```(?:json)?\s*\n?")
_FENCE_END = re.compile(r"\n?```\s*$")


def strip_code_fences(raw_text: str) -> str:
    """Remove blocos ```json ... ``` que o modelo insiste em devolver."""
    text = raw_text.strip()
    if text.startswith("```"):
        text = _FENCE_END.sub("", _FENCE_START.sub("", text))
    return text.strip()


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return isinstance(value, int) or math.isfinite(value)


def _parse_question(data: Any) -> QuizQuestion | None:
    if not isinstance(data, dict):
        return None
    title = data.get("title")
    options = data.get("options")
    if not isinstance(title, str) or not isinstance(options, list) or len(options) < 2:
        return None

    parsed_options = [
        QuizOption(
            text=option["text"],
            points=int(option["points"]) if _is_number(option.get("points")) else 0,
        )
        for option in options
        if isinstance(option, dict) and isinstance(option.get("text"), str)
    ]
    return QuizQuestion(text=title, options=parsed_options)


def _parse_result(data: Any) -> ResultBucket | None:
    if not isinstance(data, dict):
        return None
    if not isinstance(data.get("title"), str) or not isinstance(data.get("description"), str):
        return None
    return ResultBucket(
        title=data["title"],
        description=data["description"],
        score_min=int(data["scoreMin"]) if _is_number(data.get("scoreMin")) else 0,
        score_max=int(data["scoreMax"]) if _is_number(data.get("scoreMax")) else 0,
    )


def parse_generated_quiz(raw_text: str | None) -> QuizDraft:
    """Converte a resposta da IA em perguntas e resultados com IDs novos.

    Aceita o formato objeto ``{"questions": [...], "results": [...]}`` e o
    formato legado (lista de perguntas sem resultados).

    Args:
        raw_text: Texto cru devolvido pelo modelo

    Returns:
        QuizDraft pronto para revisao no builder

    Raises:
        DraftGenerationError: resposta vazia, JSON invalido ou nenhuma pergunta valida
    """
    if not raw_text or len(raw_text.strip()) < 10:
        raise DraftGenerationError("A IA não conseguiu gerar o quiz. Tente novamente.")

    clean_json = strip_code_fences(raw_text)
    try:
        raw = json.loads(clean_json)
    except json.JSONDecodeError:
        logger.error(f"Erro ao parsear JSON da IA: {clean_json[:200]}")
        raise DraftGenerationError("A IA retornou um formato inválido. Tente novamente.")

    if isinstance(raw, list):
        raw = {"questions": raw, "results": []}
    if not isinstance(raw, dict):
        raise DraftGenerationError("A IA retornou um formato inválido. Tente novamente.")

    raw_questions = raw.get("questions")
    if not isinstance(raw_questions, list) or not raw_questions:
        raise DraftGenerationError("A IA não gerou perguntas válidas. Tente novamente.")

    questions = [q for q in (_parse_question(item) for item in raw_questions) if q]
    if not questions:
        raise DraftGenerationError("Nenhuma pergunta válida foi gerada. Tente novamente.")

    raw_results = raw.get("results")
    if not isinstance(raw_results, list):
        raw_results = []
    results = [r for r in (_parse_result(item) for item in raw_results) if r]

    logger.info(f"Rascunho gerado: {len(questions)} perguntas + {len(results)} resultados")
    return QuizDraft(questions=questions, results=results)

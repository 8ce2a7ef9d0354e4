"""Quiz builder endpoints - CRUD, publicacao, respostas e rascunho por IA."""

from fastapi import APIRouter, Depends, HTTPException

import app_state
from config import get_config
from quiz.engine import QuizEngine
from quiz.models import (
    CamelModel,
    QuizDefinition,
    QuizDefinitionInput,
    QuizDraft,
    QuizDraftRequest,
    QuizResponse,
    QuizStatus,
    ValidationReport,
)
from utils.auth import get_current_user
from utils.logger import get_logger

router = APIRouter(prefix="/quizzes", tags=["Quizzes"])
logger = get_logger("quizzes")


# =============================================================================
# MODELS
# =============================================================================


class QuizSaveResponse(CamelModel):
    """Quiz gravado + avisos de configuracao (faixas sobrepostas, lacunas)."""

    quiz: QuizDefinition
    warnings: list[str]


class DeleteQuizResponse(CamelModel):
    quiz_id: str
    responses_removed: int


def get_engine() -> QuizEngine:
    return app_state.get_quiz_engine()


def _save_response(definition: QuizDefinition, report: ValidationReport) -> QuizSaveResponse:
    return QuizSaveResponse(quiz=definition, warnings=report.warnings)


# =============================================================================
# ENDPOINTS
# =============================================================================


@router.get("", response_model=list[QuizDefinition])
async def list_quizzes(
    owner_id: str = Depends(get_current_user),
    engine: QuizEngine = Depends(get_engine),
):
    """Lista os quizzes do usuario (mais recentes primeiro)."""
    return await engine.list_quizzes(owner_id)


@router.post("", response_model=QuizSaveResponse, status_code=201)
async def create_quiz(
    payload: QuizDefinitionInput,
    owner_id: str = Depends(get_current_user),
    engine: QuizEngine = Depends(get_engine),
):
    """Cria um quiz como rascunho.

    - Valida perguntas, opcoes e resultados
    - Gera slug unico a partir do titulo
    - Retorna avisos de faixas sobrepostas ou com lacunas
    """
    definition, report = await engine.create_quiz(owner_id, payload)
    return _save_response(definition, report)


@router.post("/draft", response_model=QuizDraft)
async def generate_draft(
    request: QuizDraftRequest,
    _owner_id: str = Depends(get_current_user),
):
    """Gera perguntas e resultados com IA para o builder revisar.

    O rascunho nao e gravado: o builder edita e depois cria o quiz.
    """
    factory = app_state.get_llm_factory()
    if not factory.is_configured:
        raise HTTPException(status_code=503, detail="Geração por IA indisponível no momento")

    generator = factory.create_draft_generator(max_questions=get_config().draft_max_questions)
    return await generator.generate(request.title, request.description, request.quantity)


@router.get("/{quiz_id}", response_model=QuizDefinition)
async def get_quiz(
    quiz_id: str,
    owner_id: str = Depends(get_current_user),
    engine: QuizEngine = Depends(get_engine),
):
    """Definicao completa (com pontos) para edicao."""
    return await engine.get_quiz(owner_id, quiz_id)


@router.put("/{quiz_id}", response_model=QuizSaveResponse)
async def update_quiz(
    quiz_id: str,
    payload: QuizDefinitionInput,
    owner_id: str = Depends(get_current_user),
    engine: QuizEngine = Depends(get_engine),
):
    """Atualiza o quiz. Sessoes em andamento mantem a versao antiga."""
    definition, report = await engine.update_quiz(owner_id, quiz_id, payload)
    return _save_response(definition, report)


@router.post("/{quiz_id}/publish", response_model=QuizDefinition)
async def publish_quiz(
    quiz_id: str,
    owner_id: str = Depends(get_current_user),
    engine: QuizEngine = Depends(get_engine),
):
    definition = await engine.set_status(owner_id, quiz_id, QuizStatus.PUBLISHED)
    logger.info(f"Quiz publicado: {quiz_id}")
    return definition


@router.post("/{quiz_id}/unpublish", response_model=QuizDefinition)
async def unpublish_quiz(
    quiz_id: str,
    owner_id: str = Depends(get_current_user),
    engine: QuizEngine = Depends(get_engine),
):
    return await engine.set_status(owner_id, quiz_id, QuizStatus.DRAFT)


@router.delete("/{quiz_id}", response_model=DeleteQuizResponse)
async def delete_quiz(
    quiz_id: str,
    owner_id: str = Depends(get_current_user),
    engine: QuizEngine = Depends(get_engine),
):
    """Exclui o quiz, suas respostas e sessoes abertas."""
    removed = await engine.delete_quiz(owner_id, quiz_id)
    logger.info(f"Quiz excluido: {quiz_id} ({removed} respostas)")
    return DeleteQuizResponse(quiz_id=quiz_id, responses_removed=removed)


@router.get("/{quiz_id}/responses", response_model=list[QuizResponse])
async def list_responses(
    quiz_id: str,
    owner_id: str = Depends(get_current_user),
    engine: QuizEngine = Depends(get_engine),
):
    """Respostas finalizadas (pontuacao, resultado, lead)."""
    return await engine.list_responses(owner_id, quiz_id)

"""Public play endpoints - link publico do quiz (anonimo, com rate limit)."""

from fastapi import APIRouter, Depends, Request

import app_state
from quiz.engine import QuizEngine
from quiz.models import LeadRequest, PlayView, PublicQuizView, SelectOptionRequest
from utils.auth import get_optional_user
from utils.logger import get_logger
from utils.rate_limiter import limiter, play_rate_limit

router = APIRouter(prefix="/play", tags=["Play"])
logger = get_logger("play")


def get_engine() -> QuizEngine:
    return app_state.get_quiz_engine()


@router.get("/quiz/{quiz_ref}", response_model=PublicQuizView)
@limiter.limit(play_rate_limit)
async def get_public_quiz(
    request: Request,
    quiz_ref: str,
    viewer_id: str | None = Depends(get_optional_user),
    engine: QuizEngine = Depends(get_engine),
):
    """Quiz publicado por ID ou slug (sem pontos das opcoes)."""
    definition = await engine.load_for_play(quiz_ref, viewer_id)
    return PublicQuizView.from_definition(definition)


@router.post("/{quiz_ref}/start", response_model=PlayView, status_code=201)
@limiter.limit(play_rate_limit)
async def start_play(
    request: Request,
    quiz_ref: str,
    viewer_id: str | None = Depends(get_optional_user),
    engine: QuizEngine = Depends(get_engine),
):
    """Abre uma sessao de jogo na primeira pergunta."""
    player = await engine.start_play(quiz_ref, viewer_id)
    logger.info(f"Sessao {player.session.play_id} iniciada (quiz {player.definition.id})")
    return player.view()


@router.get("/session/{play_id}", response_model=PlayView)
@limiter.limit(play_rate_limit)
async def get_play_session(
    request: Request,
    play_id: str,
    engine: QuizEngine = Depends(get_engine),
):
    player = await engine.get_player(play_id)
    return player.view()


@router.post("/session/{play_id}/select", response_model=PlayView)
@limiter.limit(play_rate_limit)
async def select_option(
    request: Request,
    play_id: str,
    body: SelectOptionRequest,
    engine: QuizEngine = Depends(get_engine),
):
    """Seleciona uma opcao da pergunta atual.

    Com ``advance=true`` (padrao) a sessao avanca apos o atraso visual.
    """
    player = await engine.get_player(play_id)
    if body.advance:
        await player.answer(body.question_id, body.option_id)
    else:
        await player.select_option(body.question_id, body.option_id)
    return player.view()


@router.post("/session/{play_id}/advance", response_model=PlayView)
@limiter.limit(play_rate_limit)
async def advance(
    request: Request,
    play_id: str,
    engine: QuizEngine = Depends(get_engine),
):
    player = await engine.get_player(play_id)
    await player.advance()
    return player.view()


@router.post("/session/{play_id}/lead", response_model=PlayView)
@limiter.limit(play_rate_limit)
async def submit_lead(
    request: Request,
    play_id: str,
    body: LeadRequest,
    engine: QuizEngine = Depends(get_engine),
):
    """Envia o e-mail do lead e revela o resultado."""
    player = await engine.get_player(play_id)
    await player.submit_lead(body.email)
    return player.view()

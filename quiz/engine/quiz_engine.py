"""Quiz Engine - Orquestra definicoes, sessoes de jogo e respostas."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from ..exceptions import ConfigurationError, OwnershipError, QuizNotFoundError
from ..models.enums import QuizStatus
from ..models.schemas import QuizDefinition, QuizDefinitionInput, QuizResponse, ValidationReport
from ..slug import generate_slug
from .play_engine import DEFAULT_ADVANCE_DELAY, QuizPlayer
from .scoring_engine import QuizScoringEngine
from .validation import validate_definition

if TYPE_CHECKING:
    from ..storage.quiz_store import QuizStore
    from ..storage.response_store import ResponseStore
    from ..storage.session_cache import PlaySessionCache

logger = logging.getLogger(__name__)


class QuizEngine:
    """Camada de acesso aos stores de quiz.

    - Builder (dono autenticado): criar, editar, publicar, excluir, listar respostas
    - Jogo publico (anonimo): carregar definicao publicada, iniciar e recuperar sessoes
    - Finalizacao: grava a resposta em background e incrementa o contador do quiz

    Example:
        >>> engine = QuizEngine(quiz_store, response_store, sessions)
        >>> definition, report = await engine.create_quiz("user-1", payload)
        >>> player = await engine.start_play(definition.id)
    """

    def __init__(
        self,
        store: QuizStore,
        responses: ResponseStore,
        sessions: PlaySessionCache,
        scoring: QuizScoringEngine | None = None,
        advance_delay: float = DEFAULT_ADVANCE_DELAY,
    ):
        self.store = store
        self.responses = responses
        self.sessions = sessions
        self.scoring = scoring or QuizScoringEngine()
        self.advance_delay = advance_delay
        self.pending_writes: set[asyncio.Task] = set()

    # =========================================================================
    # BUILDER
    # =========================================================================

    def _validate(self, payload: QuizDefinitionInput) -> ValidationReport:
        report = validate_definition(payload)
        if not report.is_valid:
            raise ConfigurationError(
                report.errors[0],
                details={"errors": report.errors, "warnings": report.warnings},
            )
        return report

    async def _load_owned(self, owner_id: str, quiz_id: str) -> QuizDefinition:
        existing = await self.store.load(quiz_id)
        if existing is None:
            raise QuizNotFoundError("Quiz não encontrado", details={"quiz_id": quiz_id})
        if existing.owner_id != owner_id:
            raise OwnershipError(
                "Você não tem permissão para alterar este quiz",
                details={"quiz_id": quiz_id},
            )
        return existing

    async def create_quiz(
        self, owner_id: str, payload: QuizDefinitionInput
    ) -> tuple[QuizDefinition, ValidationReport]:
        """Valida e grava um quiz novo como rascunho.

        Raises:
            ConfigurationError: definicao invalida
        """
        report = self._validate(payload)
        definition = QuizDefinition(
            owner_id=owner_id,
            title=payload.title,
            description=payload.description or None,
            slug=generate_slug(payload.title),
            status=QuizStatus.DRAFT,
            questions=payload.questions,
            results=payload.results,
            settings=payload.settings,
        )
        await self.store.save(definition)
        logger.info(f"Quiz criado: {definition.id} (dono {owner_id})")
        return definition, report

    async def update_quiz(
        self, owner_id: str, quiz_id: str, payload: QuizDefinitionInput
    ) -> tuple[QuizDefinition, ValidationReport]:
        """Substitui titulo, perguntas, resultados e configuracoes.

        Sessoes ja iniciadas continuam com a definicao carregada no inicio.

        Raises:
            QuizNotFoundError, OwnershipError, ConfigurationError
        """
        existing = await self._load_owned(owner_id, quiz_id)
        report = self._validate(payload)
        updated = existing.model_copy(
            update={
                "title": payload.title,
                "description": payload.description or None,
                "questions": payload.questions,
                "results": payload.results,
                "settings": payload.settings,
            }
        )
        return await self.store.update(quiz_id, updated), report

    async def set_status(self, owner_id: str, quiz_id: str, status: QuizStatus) -> QuizDefinition:
        """Publica ou volta o quiz para rascunho."""
        existing = await self._load_owned(owner_id, quiz_id)
        return await self.store.update(quiz_id, existing.model_copy(update={"status": status}))

    async def delete_quiz(self, owner_id: str, quiz_id: str) -> int:
        """Remove respostas, sessoes abertas e o quiz.

        Returns:
            Quantidade de respostas removidas
        """
        await self._load_owned(owner_id, quiz_id)
        await self.sessions.purge_quiz(quiz_id)
        await self.flush_writes()
        removed = await self.responses.delete_for_quiz(quiz_id)
        await self.store.delete(quiz_id)
        return removed

    async def get_quiz(self, owner_id: str, quiz_id: str) -> QuizDefinition:
        """Definicao completa para o dono editar."""
        return await self._load_owned(owner_id, quiz_id)

    async def list_quizzes(self, owner_id: str) -> list[QuizDefinition]:
        return await self.store.list_by_owner(owner_id)

    async def list_responses(self, owner_id: str, quiz_id: str) -> list[QuizResponse]:
        await self._load_owned(owner_id, quiz_id)
        await self.flush_writes()
        return await self.responses.list_for_quiz(quiz_id)

    # =========================================================================
    # JOGO PUBLICO
    # =========================================================================

    async def load_for_play(
        self, quiz_ref: str, viewer_id: str | None = None
    ) -> QuizDefinition:
        """Carrega a definicao por ID ou slug para o link publico.

        Rascunhos so ficam visiveis para o dono (preview).

        Raises:
            QuizNotFoundError: inexistente ou nao publicado
        """
        definition = await self.store.load(quiz_ref) or await self.store.get_by_slug(quiz_ref)
        if definition is None:
            raise QuizNotFoundError("Quiz não encontrado", details={"quiz": quiz_ref})

        if not definition.is_published and (
            viewer_id is None or viewer_id != definition.owner_id
        ):
            raise QuizNotFoundError("Quiz não encontrado", details={"quiz": quiz_ref})

        return definition

    async def start_play(self, quiz_ref: str, viewer_id: str | None = None) -> QuizPlayer:
        """Carrega a definicao uma vez e abre uma sessao nova.

        Raises:
            QuizNotFoundError: quiz inexistente
            ConfigurationError: definicao nao jogavel
        """
        definition = await self.load_for_play(quiz_ref, viewer_id)
        player = QuizPlayer.start(
            definition,
            scoring=self.scoring,
            recorder=self.record_response,
            advance_delay=self.advance_delay,
            background=self.pending_writes,
        )
        await self.sessions.put(player)
        return player

    async def get_player(self, play_id: str) -> QuizPlayer:
        """Recupera sessao aberta.

        Raises:
            QuizNotFoundError: sessao inexistente ou expirada
        """
        player = await self.sessions.get(play_id)
        if player is None:
            raise QuizNotFoundError("Sessão de quiz não encontrada", details={"play_id": play_id})
        return player

    async def flush_writes(self) -> None:
        """Aguarda as gravacoes de resposta ainda em andamento."""
        if self.pending_writes:
            await asyncio.gather(*list(self.pending_writes))

    async def record_response(self, response: QuizResponse) -> QuizResponse:
        """Grava a resposta final e atualiza o contador do quiz.

        Raises:
            PersistenceError: falha ao gravar (tratada pelo QuizPlayer)
        """
        saved = await self.responses.record(response)
        try:
            await self.store.increment_responses(response.quiz_id)
        except Exception as e:
            logger.error(f"Erro ao atualizar contador do quiz {response.quiz_id}: {e}")
        return saved

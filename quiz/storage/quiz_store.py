"""Quiz Store - Persistencia de definicoes de quiz no KV do AgentFS."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..models.schemas import QuizDefinition, utc_now

if TYPE_CHECKING:
    from agentfs_sdk import AgentFS

logger = logging.getLogger(__name__)


class QuizStore:
    """Store de definicoes de quiz.

    Estrutura de chaves:
        - quiz:{quiz_id} -> Definicao completa (JSON camelCase)
        - quiz-slug:{slug} -> quiz_id
        - owner:{owner_id}:quizzes -> Lista de quiz_ids do dono

    O store nao verifica autenticacao nem dono: isso e feito pela camada
    de acesso (router).

    Example:
        >>> store = QuizStore(agentfs)
        >>> await store.save(definition)
        >>> loaded = await store.load(definition.id)
    """

    KEY_PREFIX = "quiz"
    SLUG_PREFIX = "quiz-slug"
    OWNER_PREFIX = "owner"

    def __init__(self, agentfs: AgentFS):
        self.agentfs = agentfs

    def _quiz_key(self, quiz_id: str) -> str:
        return f"{self.KEY_PREFIX}:{quiz_id}"

    def _slug_key(self, slug: str) -> str:
        return f"{self.SLUG_PREFIX}:{slug}"

    def _owner_key(self, owner_id: str) -> str:
        return f"{self.OWNER_PREFIX}:{owner_id}:quizzes"

    async def _write(self, definition: QuizDefinition) -> None:
        data = definition.model_dump(mode="json", by_alias=True)
        await self.agentfs.kv.set(self._quiz_key(definition.id), data)

    async def load(self, quiz_id: str) -> QuizDefinition | None:
        """Carrega definicao.

        Args:
            quiz_id: ID do quiz

        Returns:
            QuizDefinition se encontrada, None caso contrario
        """
        data = await self.agentfs.kv.get(self._quiz_key(quiz_id))
        if not data:
            logger.debug(f"Quiz não encontrado: {quiz_id}")
            return None
        return QuizDefinition.model_validate(data)

    async def get_by_slug(self, slug: str) -> QuizDefinition | None:
        """Resolve o link publico (slug) para a definicao."""
        quiz_id = await self.agentfs.kv.get(self._slug_key(slug))
        if not quiz_id:
            return None
        return await self.load(quiz_id)

    async def save(self, definition: QuizDefinition) -> QuizDefinition:
        """Grava uma definicao nova e indexa slug e dono."""
        await self._write(definition)

        if definition.slug:
            await self.agentfs.kv.set(self._slug_key(definition.slug), definition.id)

        if definition.owner_id:
            owner_key = self._owner_key(definition.owner_id)
            quiz_ids = await self.agentfs.kv.get(owner_key) or []
            if definition.id not in quiz_ids:
                quiz_ids.append(definition.id)
                await self.agentfs.kv.set(owner_key, quiz_ids)

        logger.info(f"Quiz salvo: {definition.id}")
        return definition

    async def update(self, quiz_id: str, definition: QuizDefinition) -> QuizDefinition:
        """Substitui a definicao existente.

        Raises:
            ValueError: quiz inexistente
        """
        existing = await self.load(quiz_id)
        if existing is None:
            raise ValueError(f"Quiz {quiz_id} não encontrado")

        updated = definition.model_copy(update={"id": quiz_id, "updated_at": utc_now()})
        await self._write(updated)

        if existing.slug and existing.slug != updated.slug:
            await self.agentfs.kv.delete(self._slug_key(existing.slug))
        if updated.slug:
            await self.agentfs.kv.set(self._slug_key(updated.slug), quiz_id)

        logger.info(f"Quiz atualizado: {quiz_id}")
        return updated

    async def delete(self, quiz_id: str) -> None:
        """Remove definicao e indices."""
        existing = await self.load(quiz_id)
        await self.agentfs.kv.delete(self._quiz_key(quiz_id))
        if existing is None:
            return

        if existing.slug:
            await self.agentfs.kv.delete(self._slug_key(existing.slug))
        if existing.owner_id:
            owner_key = self._owner_key(existing.owner_id)
            quiz_ids = await self.agentfs.kv.get(owner_key) or []
            await self.agentfs.kv.set(owner_key, [qid for qid in quiz_ids if qid != quiz_id])

        logger.info(f"Quiz deletado: {quiz_id}")

    async def list_by_owner(self, owner_id: str) -> list[QuizDefinition]:
        """Lista quizzes de um dono, mais recentes primeiro."""
        quiz_ids = await self.agentfs.kv.get(self._owner_key(owner_id)) or []
        quizzes = []
        for quiz_id in quiz_ids:
            definition = await self.load(quiz_id)
            if definition:
                quizzes.append(definition)
        return sorted(quizzes, key=lambda q: q.created_at, reverse=True)

    async def increment_responses(self, quiz_id: str) -> int:
        """Incrementa o contador de respostas do quiz.

        Returns:
            Novo total (0 se o quiz nao existe mais)
        """
        existing = await self.load(quiz_id)
        if existing is None:
            return 0
        updated = existing.model_copy(update={"total_responses": existing.total_responses + 1})
        await self._write(updated)
        return updated.total_responses

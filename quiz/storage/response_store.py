"""Response Store - Registros de sessoes concluidas (leads)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..exceptions import PersistenceError
from ..models.schemas import QuizResponse

if TYPE_CHECKING:
    from agentfs_sdk import AgentFS

logger = logging.getLogger(__name__)


class ResponseStore:
    """Store de QuizResponse.

    Estrutura de chaves:
        - quiz-response:{quiz_id}:{response_id} -> Registro (JSON camelCase)
    """

    KEY_PREFIX = "quiz-response"

    def __init__(self, agentfs: AgentFS):
        self.agentfs = agentfs

    def _response_key(self, quiz_id: str, response_id: str) -> str:
        return f"{self.KEY_PREFIX}:{quiz_id}:{response_id}"

    def _quiz_prefix(self, quiz_id: str) -> str:
        return f"{self.KEY_PREFIX}:{quiz_id}:"

    async def record(self, response: QuizResponse) -> QuizResponse:
        """Grava uma resposta concluida.

        Raises:
            PersistenceError: falha no backend
        """
        key = self._response_key(response.quiz_id, response.id)
        try:
            await self.agentfs.kv.set(key, response.model_dump(mode="json", by_alias=True))
        except Exception as e:
            raise PersistenceError(
                "Erro ao salvar resposta do quiz",
                details={"quiz_id": response.quiz_id, "error": str(e)},
            ) from e

        logger.debug(f"Resposta salva: {response.id} (quiz {response.quiz_id})")
        return response

    async def _keys_for_quiz(self, quiz_id: str) -> list[str]:
        entries = await self.agentfs.kv.list(prefix=self._quiz_prefix(quiz_id))
        return [entry.get("key", "") if isinstance(entry, dict) else str(entry) for entry in entries]

    async def list_for_quiz(self, quiz_id: str) -> list[QuizResponse]:
        """Lista respostas de um quiz, mais recentes primeiro."""
        responses = []
        for key in await self._keys_for_quiz(quiz_id):
            data = await self.agentfs.kv.get(key)
            if data:
                responses.append(QuizResponse.model_validate(data))
        return sorted(responses, key=lambda r: r.created_at, reverse=True)

    async def count_for_quiz(self, quiz_id: str) -> int:
        return len(await self._keys_for_quiz(quiz_id))

    async def delete_for_quiz(self, quiz_id: str) -> int:
        """Remove todas as respostas de um quiz.

        Returns:
            Quantidade removida
        """
        keys = await self._keys_for_quiz(quiz_id)
        for key in keys:
            await self.agentfs.kv.delete(key)
        logger.info(f"{len(keys)} respostas removidas do quiz {quiz_id}")
        return len(keys)

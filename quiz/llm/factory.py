"""LLM Client Factory - Cliente Anthropic para geracao de rascunhos de quiz."""

import logging

from anthropic import AsyncAnthropic

from ..engine.draft_parser import parse_generated_quiz
from ..exceptions import DraftGenerationError
from ..models.schemas import QuizDraft
from ..prompts import QUIZ_SYSTEM_PROMPT, clamp_question_count, format_draft_prompt

logger = logging.getLogger(__name__)


class LLMClientFactory:
    """Factory para criar clientes LLM com configuracao consistente.

    Example:
        >>> factory = LLMClientFactory(api_key="sk-...")
        >>> generator = factory.create_draft_generator()
        >>> draft = await generator.generate("Qual seu perfil de marketing?")
    """

    DEFAULT_MODEL = "claude-3-5-haiku-latest"  # Rapido e economico

    def __init__(self, api_key: str | None, model: str | None = None):
        self.api_key = api_key
        self.model = model or self.DEFAULT_MODEL

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def create_client(self) -> AsyncAnthropic:
        """Cria cliente assincrono da Anthropic.

        Raises:
            DraftGenerationError: sem chave de API configurada
        """
        if not self.api_key:
            raise DraftGenerationError("Chave da API de IA não configurada.")
        return AsyncAnthropic(api_key=self.api_key)

    def create_draft_generator(self, max_questions: int = 20) -> "QuizDraftGenerator":
        return QuizDraftGenerator(self.create_client(), model=self.model, max_questions=max_questions)


class QuizDraftGenerator:
    """Gera rascunhos de quiz (perguntas ponderadas + faixas de resultado)."""

    def __init__(self, client: AsyncAnthropic, model: str, max_questions: int = 20):
        self.client = client
        self.model = model
        self.max_questions = max_questions

    async def complete(self, prompt: str) -> str:
        """Envia o prompt e concatena os blocos de texto da resposta."""
        response = await self.client.messages.create(
            model=self.model,
            max_tokens=4096,
            system=QUIZ_SYSTEM_PROMPT,
            messages=[{"role": "user", "content": prompt}],
        )
        return "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )

    async def generate(
        self, title: str, description: str | None = None, quantity: int | None = None
    ) -> QuizDraft:
        """Gera e normaliza um rascunho.

        Args:
            title: Tema do quiz
            description: Contexto adicional
            quantity: Perguntas desejadas (limitado a 1..max_questions)

        Returns:
            QuizDraft com IDs novos

        Raises:
            DraftGenerationError: resposta inutilizavel
        """
        num_questions = clamp_question_count(quantity, self.max_questions)
        prompt = format_draft_prompt(title, description, num_questions)

        logger.info(f"Gerando rascunho de quiz para: {title}")
        raw_text = await self.complete(prompt)
        return parse_generated_quiz(raw_text)

"""Quiz Play Engine - Maquina de estados do jogo publico.

Fluxo:
    PLAYING --(ultima resposta, sem captura)--> RESULT
    PLAYING --(ultima resposta, com captura)--> LEAD_CAPTURE --(email)--> RESULT

Nao existe transicao para tras; RESULT e terminal.
"""

import asyncio
import logging
import math
import uuid
from collections.abc import Awaitable, Callable

from ..exceptions import InvalidTransitionError, QuizNotFoundError
from ..models.enums import PlayStep
from ..models.schemas import (
    PlayView,
    PublicQuestionView,
    QuizDefinition,
    QuizQuestion,
    QuizResponse,
    ScoreOutcome,
    SelectedAnswer,
)
from ..models.state import PlaySession
from .scoring_engine import QuizScoringEngine
from .validation import ensure_playable

logger = logging.getLogger(__name__)

ResponseRecorder = Callable[[QuizResponse], Awaitable[object]]

DEFAULT_ADVANCE_DELAY = 0.4  # segundos para a selecao renderizar antes de avancar


def calculate_progress(answered: int, total: int, finished: bool = False) -> int:
    """Percentual de progresso (arredondamento half-up, 100 no resultado)."""
    if finished:
        return 100
    if total <= 0:
        return 0
    return min(100, math.floor(100 * answered / total + 0.5))


class QuizPlayer:
    """Conduz uma PlaySession sobre uma QuizDefinition.

    Cada evento (selecao, avanco, lead) roda ate o fim antes do proximo ser
    aceito. A gravacao da resposta final e a unica operacao de I/O: roda em
    background e sua falha nunca impede o jogador de ver o resultado.

    Example:
        >>> player = QuizPlayer.start(definition, recorder=store.record)
        >>> await player.answer(question.id, option.id)
        >>> player.step
        <PlayStep.PLAYING: 'playing'>
    """

    def __init__(
        self,
        definition: QuizDefinition,
        session: PlaySession,
        scoring: QuizScoringEngine | None = None,
        recorder: ResponseRecorder | None = None,
        advance_delay: float = DEFAULT_ADVANCE_DELAY,
        background: set[asyncio.Task] | None = None,
    ):
        self.definition = definition
        self.session = session
        self.scoring = scoring or QuizScoringEngine()
        self.recorder = recorder
        self.advance_delay = advance_delay
        self.background = background
        self._lock = asyncio.Lock()
        self._record_task: asyncio.Task | None = None

    @classmethod
    def start(
        cls,
        definition: QuizDefinition,
        play_id: str | None = None,
        **kwargs,
    ) -> "QuizPlayer":
        """Cria uma sessao nova na primeira pergunta.

        Raises:
            ConfigurationError: definicao nao jogavel (fail closed)
        """
        ensure_playable(definition)
        session = PlaySession(play_id=play_id or str(uuid.uuid4()), quiz_id=definition.id)
        logger.info(f"[Play {session.play_id}] Iniciado quiz {definition.id}")
        return cls(definition, session, **kwargs)

    # -------------------------------------------------------------------------
    # Leitura
    # -------------------------------------------------------------------------

    @property
    def step(self) -> PlayStep:
        return self.session.step

    @property
    def last_index(self) -> int:
        return self.definition.question_count - 1

    @property
    def current_question(self) -> QuizQuestion | None:
        if self.session.step != PlayStep.PLAYING:
            return None
        return self.definition.questions[self.session.current_index]

    @property
    def current_score(self) -> int:
        return self.scoring.total_score(self.session.answers)

    @property
    def progress(self) -> int:
        return calculate_progress(
            self.session.answered_count,
            self.definition.question_count,
            finished=self.session.is_finished,
        )

    @property
    def outcome(self) -> ScoreOutcome | None:
        return self.session.outcome

    def view(self) -> PlayView:
        """Snapshot da sessao para o cliente."""
        question = self.current_question
        settings = self.definition.settings
        return PlayView(
            play_id=self.session.play_id,
            quiz_id=self.definition.id,
            step=self.session.step,
            current_index=self.session.current_index,
            total_questions=self.definition.question_count,
            progress=self.progress,
            show_progress_bar=settings.show_progress_bar,
            question=PublicQuestionView.from_question(question) if question else None,
            selected_option_id=self.session.selected_option_for(question.id) if question else None,
            lead_form_title=(
                settings.lead_form_title
                if self.session.step == PlayStep.LEAD_CAPTURE
                else None
            ),
            outcome=self.session.outcome,
        )

    # -------------------------------------------------------------------------
    # Eventos
    # -------------------------------------------------------------------------

    def _require_step(self, expected: PlayStep, event: str) -> None:
        if self.session.step != expected:
            raise InvalidTransitionError(
                f"Evento '{event}' inválido na etapa '{self.session.step.value}'",
                details={"play_id": self.session.play_id, "step": self.session.step.value},
            )

    def _select(self, question_id: str, option_id: str) -> SelectedAnswer:
        self._require_step(PlayStep.PLAYING, "select_option")

        question = self.current_question
        if question is None or question.id != question_id:
            raise InvalidTransitionError(
                "Só é possível responder a pergunta atual",
                details={
                    "play_id": self.session.play_id,
                    "question_id": question_id,
                    "current_index": self.session.current_index,
                },
            )

        option = question.get_option(option_id)
        if option is None:
            raise QuizNotFoundError(
                f"Opção {option_id} não encontrada na pergunta {question_id}",
                details={"question_id": question_id, "option_id": option_id},
            )

        self.session.record_answer(question_id, option.id, option.points)
        logger.debug(
            f"[Play {self.session.play_id}] Pergunta {self.session.current_index + 1}: "
            f"opção {option.id} ({option.points} pts)"
        )
        return self.session.answers[question_id]

    async def _advance(self) -> PlayStep:
        self._require_step(PlayStep.PLAYING, "advance")

        question = self.definition.questions[self.session.current_index]
        if question.id not in self.session.answers:
            raise InvalidTransitionError(
                "Responda a pergunta atual antes de avançar",
                details={"play_id": self.session.play_id, "question_id": question.id},
            )

        if self.session.current_index < self.last_index:
            self.session.current_index += 1
            return self.session.step

        if self.definition.settings.collect_lead_before_result:
            self.session.step = PlayStep.LEAD_CAPTURE
            logger.debug(f"[Play {self.session.play_id}] Aguardando captura de lead")
            return self.session.step

        await self._finalize()
        return self.session.step

    async def select_option(self, question_id: str, option_id: str) -> SelectedAnswer:
        """Seleciona (ou troca) a alternativa da pergunta atual sem avancar.

        Os pontos vem da definicao, nunca do cliente.

        Raises:
            InvalidTransitionError: fora de PLAYING ou pergunta diferente da atual
            QuizNotFoundError: alternativa inexistente
        """
        async with self._lock:
            return self._select(question_id, option_id)

    async def advance(self) -> PlayStep:
        """Avanca para a proxima pergunta, para a captura ou para o resultado."""
        async with self._lock:
            return await self._advance()

    async def answer(self, question_id: str, option_id: str) -> PlayStep:
        """Seleciona, espera o atraso visual e avanca (fluxo padrao do jogador)."""
        async with self._lock:
            self._select(question_id, option_id)
            if self.advance_delay > 0:
                await asyncio.sleep(self.advance_delay)
            return await self._advance()

    async def submit_lead(self, email: str) -> ScoreOutcome:
        """Recebe o email da captura e revela o resultado.

        A resposta e gravada em background; use ``wait_recorded()`` para
        aguardar a escrita.
        """
        async with self._lock:
            self._require_step(PlayStep.LEAD_CAPTURE, "submit_lead")
            return await self._finalize(lead_email=email)

    # -------------------------------------------------------------------------
    # Finalizacao
    # -------------------------------------------------------------------------

    def build_response(self, outcome: ScoreOutcome, lead_email: str | None) -> QuizResponse:
        result = outcome.result
        return QuizResponse(
            quiz_id=self.definition.id,
            answers=dict(self.session.answers),
            result_id=result.id if result else None,
            result_title=result.title if result else None,
            score=outcome.score,
            lead_email=lead_email or None,
            completed=True,
        )

    async def _finalize(self, lead_email: str | None = None) -> ScoreOutcome:
        outcome = self.scoring.score(self.session.answers, self.definition.results)

        # Transicao otimista: o resultado aparece independente da gravacao
        self.session.outcome = outcome
        self.session.lead_email = lead_email or None
        self.session.step = PlayStep.RESULT

        response = self.build_response(outcome, lead_email)
        logger.info(
            f"[Play {self.session.play_id}] Finalizado: score={outcome.score} "
            f"resultado={response.result_title or '-'}"
        )

        if self.recorder is not None:
            # Nao bloqueia o resultado; a task fica referenciada ate terminar
            self._record_task = asyncio.create_task(self._record(response))
            if self.background is not None:
                self.background.add(self._record_task)
                self._record_task.add_done_callback(self.background.discard)

        return outcome

    async def _record(self, response: QuizResponse) -> None:
        try:
            await self.recorder(response)
        except Exception as e:
            logger.error(
                f"[Play {self.session.play_id}] Erro ao salvar resposta do quiz "
                f"{self.definition.id}: {e}"
            )

    async def wait_recorded(self) -> None:
        """Aguarda a gravacao da resposta final (se houver uma em andamento)."""
        if self._record_task is not None:
            await self._record_task

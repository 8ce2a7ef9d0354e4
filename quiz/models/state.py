"""Quiz State - Estado efemero de uma sessao de jogo."""

from dataclasses import dataclass, field
from typing import Any

from .enums import PlayStep
from .schemas import ScoreOutcome, SelectedAnswer


@dataclass
class PlaySession:
    """Travessia de um jogador por uma definicao de quiz.

    Vive apenas em memoria enquanto o jogador esta com o link aberto;
    nunca e persistida no meio do jogo.

    Attributes:
        play_id: ID da sessao (entregue ao cliente)
        quiz_id: Quiz sendo jogado
        answers: question_id -> alternativa escolhida (ordem de insercao = ordem de resposta)
        current_index: Cursor 0-based na lista de perguntas
        step: Etapa atual (playing, lead, result)
        outcome: Resultado final, preenchido na finalizacao
        lead_email: Email informado na captura (se houver)
    """

    play_id: str
    quiz_id: str
    answers: dict[str, SelectedAnswer] = field(default_factory=dict)
    current_index: int = 0
    step: PlayStep = PlayStep.PLAYING
    outcome: ScoreOutcome | None = None
    lead_email: str | None = None

    @property
    def answered_count(self) -> int:
        return len(self.answers)

    @property
    def is_finished(self) -> bool:
        return self.step == PlayStep.RESULT

    def record_answer(self, question_id: str, option_id: str, points: int) -> None:
        """Grava (ou substitui) a resposta de uma pergunta."""
        self.answers[question_id] = SelectedAnswer(option_id=option_id, points=points)

    def selected_option_for(self, question_id: str) -> str | None:
        answer = self.answers.get(question_id)
        return answer.option_id if answer else None

    def to_dict(self) -> dict[str, Any]:
        """Converte para dicionario (debug/logs)."""
        return {
            "play_id": self.play_id,
            "quiz_id": self.quiz_id,
            "answers": {k: v.model_dump() for k, v in self.answers.items()},
            "current_index": self.current_index,
            "step": self.step.value,
            "outcome": self.outcome.model_dump() if self.outcome else None,
            "lead_email": self.lead_email,
        }

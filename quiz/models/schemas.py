"""Quiz Schemas - Modelos Pydantic da definicao de quiz e request/response.

O formato JSON segue o schema original do builder (camelCase:
``scoreMin``, ``collectLeadBeforeResult``...). O codigo Python usa
snake_case via aliases.
"""

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .enums import PlayStep, QuestionType, QuizStatus

DEFAULT_LEAD_FORM_TITLE = "Quase lá! Informe seu email para ver o resultado"
DEFAULT_PRIMARY_COLOR = "#06b6d4"
DEFAULT_CTA_TEXT = "Saiba Mais"

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


def new_id() -> str:
    """Gera ID opaco para perguntas, opcoes, resultados e registros."""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    """Base com aliases camelCase para o wire format."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenCamelModel(CamelModel):
    """Base imutavel para a definicao publicada."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# =============================================================================
# DEFINICAO DO QUIZ
# =============================================================================


class QuizOption(FrozenCamelModel):
    """Alternativa com peso em pontos."""

    id: str = Field(default_factory=new_id, description="ID da alternativa")
    text: str = Field(..., description="Texto da alternativa")
    points: int = Field(default=0, description="Pontos somados quando escolhida")
    image_url: str | None = Field(default=None, description="Imagem (perguntas image_choice)")
    next_question_id: str | None = Field(
        default=None, description="Reservado para ramificacao (sem efeito no jogo)"
    )


class QuizQuestion(FrozenCamelModel):
    """Pergunta de escolha ponderada."""

    id: str = Field(default_factory=new_id, description="ID da pergunta")
    text: str = Field(..., description="Enunciado")
    type: QuestionType = Field(default=QuestionType.SINGLE, description="Variante da pergunta")
    options: list[QuizOption] = Field(default_factory=list, description="Alternativas (>= 2)")

    def get_option(self, option_id: str) -> QuizOption | None:
        return next((o for o in self.options if o.id == option_id), None)


class ResultBucket(FrozenCamelModel):
    """Faixa de pontuacao com texto de resultado e call-to-action."""

    id: str = Field(default_factory=new_id, description="ID do resultado")
    title: str = Field(..., description="Titulo exibido")
    description: str = Field(default="", description="Descricao exibida")
    image_url: str | None = None
    score_min: int = Field(default=0, description="Limite inferior (inclusivo)")
    score_max: int = Field(default=0, description="Limite superior (inclusivo)")
    cta_text: str = Field(default=DEFAULT_CTA_TEXT, description="Texto do botao")
    cta_url: str | None = Field(default=None, description="Link do botao (opcional)")

    def contains(self, score: int) -> bool:
        return self.score_min <= score <= self.score_max


class LeadFields(FrozenCamelModel):
    """Campos coletados no formulario de lead."""

    name: bool = False
    email: bool = True
    phone: bool = False


class QuizSettings(FrozenCamelModel):
    """Configuracoes de jogo e aparencia."""

    collect_lead_before_result: bool = True
    lead_fields: LeadFields = Field(default_factory=LeadFields)
    lead_form_title: str = DEFAULT_LEAD_FORM_TITLE
    show_progress_bar: bool = True
    timer_per_question: int | None = Field(default=None, description="Reservado (sem efeito)")
    webhook_url: str | None = Field(default=None, description="Reservado (sem efeito)")
    primary_color: str = Field(
        default=DEFAULT_PRIMARY_COLOR, pattern=r"^#[0-9a-fA-F]{3,8}$", description="Cor hex"
    )
    background_image: str | None = None


class QuizDefinition(FrozenCamelModel):
    """Definicao completa do quiz (imutavel; alteracoes geram copia)."""

    id: str = Field(default_factory=new_id)
    owner_id: str | None = Field(default=None, description="Usuario dono do quiz")
    title: str
    description: str | None = None
    slug: str | None = None
    status: QuizStatus = QuizStatus.DRAFT
    questions: list[QuizQuestion] = Field(default_factory=list)
    results: list[ResultBucket] = Field(default_factory=list)
    settings: QuizSettings = Field(default_factory=QuizSettings)
    total_responses: int = 0
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def question_count(self) -> int:
        return len(self.questions)

    @property
    def is_published(self) -> bool:
        return self.status == QuizStatus.PUBLISHED

    def get_question(self, question_id: str) -> QuizQuestion | None:
        return next((q for q in self.questions if q.id == question_id), None)


# =============================================================================
# RESPOSTAS
# =============================================================================


class SelectedAnswer(CamelModel):
    """Alternativa escolhida para uma pergunta."""

    option_id: str
    points: int


class QuizResponse(CamelModel):
    """Registro persistido de uma sessao concluida."""

    id: str = Field(default_factory=new_id)
    quiz_id: str
    answers: dict[str, SelectedAnswer] = Field(default_factory=dict)
    result_id: str | None = None
    result_title: str | None = None
    score: int = 0
    lead_name: str | None = None
    lead_email: str | None = None
    lead_phone: str | None = None
    completed: bool = True
    created_at: datetime = Field(default_factory=utc_now)


class ScoreOutcome(CamelModel):
    """Pontuacao final e resultado casado (None = nenhum resultado configurado)."""

    score: int
    result: ResultBucket | None = None

    @property
    def has_result(self) -> bool:
        return self.result is not None


# =============================================================================
# REQUESTS
# =============================================================================


class QuizDefinitionInput(CamelModel):
    """Payload de criacao/edicao enviado pelo builder."""

    title: str = Field(..., min_length=1, description="Titulo do quiz")
    description: str | None = None
    questions: list[QuizQuestion] = Field(default_factory=list)
    results: list[ResultBucket] = Field(default_factory=list)
    settings: QuizSettings = Field(default_factory=QuizSettings)


class SelectOptionRequest(CamelModel):
    """Selecao de alternativa na pergunta atual."""

    question_id: str
    option_id: str
    advance: bool = Field(default=True, description="Avancar apos o atraso visual")


class LeadRequest(CamelModel):
    """Email informado na etapa de captura."""

    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=320)


class QuizDraftRequest(CamelModel):
    """Pedido de rascunho gerado por IA."""

    title: str = Field(..., min_length=2, description="Tema do quiz")
    description: str | None = None
    quantity: int = Field(default=5, description="Numero de perguntas (limitado a 1-20)")


# =============================================================================
# RESPONSES / VIEWS
# =============================================================================


class PublicOptionView(CamelModel):
    """Alternativa exibida ao jogador (sem pontos)."""

    id: str
    text: str
    image_url: str | None = None


class PublicQuestionView(CamelModel):
    id: str
    text: str
    type: QuestionType
    options: list[PublicOptionView]

    @classmethod
    def from_question(cls, question: QuizQuestion) -> "PublicQuestionView":
        return cls(
            id=question.id,
            text=question.text,
            type=question.type,
            options=[
                PublicOptionView(id=o.id, text=o.text, image_url=o.image_url)
                for o in question.options
            ],
        )


class PublicQuizView(CamelModel):
    """Quiz como exibido no link publico."""

    id: str
    title: str
    description: str | None = None
    slug: str | None = None
    total_questions: int
    settings: QuizSettings
    questions: list[PublicQuestionView]

    @classmethod
    def from_definition(cls, definition: QuizDefinition) -> "PublicQuizView":
        return cls(
            id=definition.id,
            title=definition.title,
            description=definition.description,
            slug=definition.slug,
            total_questions=definition.question_count,
            settings=definition.settings,
            questions=[PublicQuestionView.from_question(q) for q in definition.questions],
        )


class PlayView(CamelModel):
    """Estado da sessao de jogo para renderizacao."""

    play_id: str
    quiz_id: str
    step: PlayStep
    current_index: int
    total_questions: int
    progress: int
    show_progress_bar: bool
    question: PublicQuestionView | None = None
    selected_option_id: str | None = None
    lead_form_title: str | None = None
    outcome: ScoreOutcome | None = None


class QuizDraft(CamelModel):
    """Rascunho (perguntas + resultados) para o builder revisar."""

    questions: list[QuizQuestion]
    results: list[ResultBucket]


class ValidationReport(CamelModel):
    """Resultado da validacao de uma definicao."""

    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

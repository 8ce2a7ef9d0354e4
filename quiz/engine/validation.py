"""Quiz Validation - Regras de definicao verificadas no save e no inicio do jogo."""

import logging
from collections import Counter

from ..exceptions import ConfigurationError
from ..models.enums import PLAYABLE_QUESTION_TYPES
from ..models.schemas import QuizDefinition, QuizDefinitionInput, ValidationReport

logger = logging.getLogger(__name__)

MIN_OPTIONS_PER_QUESTION = 2


def _score_domain(definition: QuizDefinition | QuizDefinitionInput) -> tuple[int, int]:
    low = sum(min((o.points for o in q.options), default=0) for q in definition.questions)
    high = sum(max((o.points for o in q.options), default=0) for q in definition.questions)
    return low, high


def _range_warnings(definition: QuizDefinition | QuizDefinitionInput) -> list[str]:
    """Sobreposicoes e lacunas das faixas de resultado.

    Nao sao erros: o casamento continua "primeira faixa vence" e o score
    sem faixa cai no ultimo resultado.
    """
    warnings: list[str] = []
    results = definition.results
    if not results:
        return warnings

    for bucket in results:
        if bucket.score_min > bucket.score_max:
            warnings.append(
                f"Resultado '{bucket.title}' tem scoreMin ({bucket.score_min}) "
                f"maior que scoreMax ({bucket.score_max})"
            )

    for i, first in enumerate(results):
        for second in results[i + 1 :]:
            if first.score_min <= second.score_max and second.score_min <= first.score_max:
                warnings.append(
                    f"Resultados '{first.title}' e '{second.title}' se sobrepoem; "
                    f"'{first.title}' tem prioridade"
                )

    low, high = _score_domain(definition)
    intervals = sorted(
        (b.score_min, b.score_max) for b in results if b.score_min <= b.score_max
    )
    cursor = low
    for start, end in intervals:
        if end < cursor:
            continue
        if start > cursor:
            gap_end = min(start - 1, high)
            warnings.append(
                f"Pontuacoes {cursor}-{gap_end} nao tem resultado (usarao o ultimo resultado)"
            )
        cursor = max(cursor, end + 1)
        if cursor > high:
            break
    if cursor <= high:
        warnings.append(
            f"Pontuacoes {cursor}-{high} nao tem resultado (usarao o ultimo resultado)"
        )

    return warnings


def validate_definition(definition: QuizDefinition | QuizDefinitionInput) -> ValidationReport:
    """Valida uma definicao de quiz antes de salvar.

    Args:
        definition: Definicao completa ou payload do builder

    Returns:
        ValidationReport com erros (bloqueiam o save) e avisos
    """
    errors: list[str] = []

    if not definition.title or not definition.title.strip():
        errors.append("Informe o título do quiz")

    if not definition.questions:
        errors.append("O quiz precisa ter pelo menos 1 pergunta")

    question_ids = Counter(q.id for q in definition.questions)
    for question_id, count in question_ids.items():
        if count > 1:
            errors.append(f"ID de pergunta duplicado: {question_id}")

    for position, question in enumerate(definition.questions, start=1):
        if not question.text.strip():
            errors.append(f"Pergunta {position}: todas as perguntas precisam ter um título")
        if question.type not in PLAYABLE_QUESTION_TYPES:
            errors.append(f"Pergunta {position}: tipo '{question.type.value}' não suportado")
        if len(question.options) < MIN_OPTIONS_PER_QUESTION:
            errors.append(f"Pergunta {position}: cada pergunta precisa ter pelo menos 2 opções")
        if any(not option.text.strip() for option in question.options):
            errors.append(f"Pergunta {position}: todas as opções precisam ter um texto")
        option_ids = Counter(o.id for o in question.options)
        if any(count > 1 for count in option_ids.values()):
            errors.append(f"Pergunta {position}: IDs de opção duplicados")

    for position, bucket in enumerate(definition.results, start=1):
        if not bucket.title.strip():
            errors.append(f"Resultado {position}: todos os resultados precisam ter um título")

    report = ValidationReport(errors=errors, warnings=_range_warnings(definition))
    if report.warnings:
        logger.debug(f"Avisos de faixa no quiz '{definition.title}': {report.warnings}")
    return report


def ensure_playable(definition: QuizDefinition) -> None:
    """Recusa iniciar o jogo com uma definicao malformada.

    Raises:
        ConfigurationError: sem perguntas, pergunta com menos de 2 opcoes
            ou variante de pergunta que o motor nao sabe pontuar
    """
    if not definition.questions:
        raise ConfigurationError(
            "Quiz sem perguntas não pode ser jogado",
            details={"quiz_id": definition.id},
        )

    for question in definition.questions:
        if question.type not in PLAYABLE_QUESTION_TYPES:
            raise ConfigurationError(
                f"Tipo de pergunta não suportado: {question.type.value}",
                details={"quiz_id": definition.id, "question_id": question.id},
            )
        if len(question.options) < MIN_OPTIONS_PER_QUESTION:
            raise ConfigurationError(
                "Pergunta com menos de 2 opções",
                details={"quiz_id": definition.id, "question_id": question.id},
            )

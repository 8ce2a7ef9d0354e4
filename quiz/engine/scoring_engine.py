"""Quiz Scoring Engine - Motor de pontuacao e casamento de resultado."""

from collections.abc import Mapping, Sequence

from ..models.schemas import QuizDefinition, ResultBucket, ScoreOutcome, SelectedAnswer


class QuizScoringEngine:
    """Motor de pontuacao para quizzes de escolha ponderada.

    Cada pergunta contribui com os pontos da alternativa escolhida. Como as
    respostas sao indexadas pelo ID da pergunta, escolher outra alternativa
    substitui a contribuicao anterior em vez de somar.

    Casamento de resultado:
        - Primeira faixa (na ordem da lista) com score_min <= score <= score_max
        - Nenhuma faixa contem o score: ultima faixa da lista (catch-all)
        - Lista vazia: sem resultado configurado (apenas o score bruto)

    Example:
        >>> engine = QuizScoringEngine()
        >>> outcome = engine.score(session.answers, definition.results)
        >>> print(outcome.score, outcome.result.title if outcome.result else "-")
    """

    def total_score(self, answers: Mapping[str, SelectedAnswer]) -> int:
        """Soma os pontos de todas as respostas gravadas.

        Args:
            answers: question_id -> alternativa escolhida

        Returns:
            Pontuacao total
        """
        return sum(answer.points for answer in answers.values())

    def match_result(
        self, score: int, results: Sequence[ResultBucket]
    ) -> ResultBucket | None:
        """Seleciona a faixa de resultado para um score.

        Faixas sobrepostas nao sao tratadas como erro: vence a primeira.

        Args:
            score: Pontuacao total
            results: Faixas na ordem em que foram configuradas

        Returns:
            Faixa casada, ultima faixa como fallback, ou None se nao houver faixas
        """
        if not results:
            return None

        for bucket in results:
            if bucket.contains(score):
                return bucket

        return results[-1]

    def score(
        self,
        answers: Mapping[str, SelectedAnswer],
        results: Sequence[ResultBucket],
    ) -> ScoreOutcome:
        """Calcula pontuacao e resultado casado de uma vez."""
        total = self.total_score(answers)
        return ScoreOutcome(score=total, result=self.match_result(total, results))

    def max_score(self, definition: QuizDefinition) -> int:
        """Maior pontuacao atingivel (melhor alternativa de cada pergunta)."""
        return sum(max((o.points for o in q.options), default=0) for q in definition.questions)

    def min_score(self, definition: QuizDefinition) -> int:
        """Menor pontuacao atingivel (pior alternativa de cada pergunta)."""
        return sum(min((o.points for o in q.options), default=0) for q in definition.questions)

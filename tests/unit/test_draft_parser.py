# =============================================================================
# TESTES - Rascunhos gerados por IA
# =============================================================================
# Parser da resposta JSON, prompts e gerador (cliente Anthropic mockado)
# =============================================================================

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

VALID_DRAFT = {
    "questions": [
        {
            "title": "Qual canal você mais usa?",
            "type": "single",
            "options": [
                {"text": "Instagram", "points": 10},
                {"text": "E-mail", "points": 5},
                {"text": "Nenhum", "points": 0},
            ],
        },
        {
            "title": "Quanto você investe em anúncios?",
            "options": [{"text": "Muito", "points": 10}, {"text": "Nada"}],
        },
    ],
    "results": [
        {"title": "Iniciante", "description": "Comece pelo básico", "scoreMin": 0, "scoreMax": 10},
        {"title": "Expert", "description": "Você domina", "scoreMin": 11, "scoreMax": 20},
    ],
}


class TestStripCodeFences:
    """Testes para remocao de blocos markdown."""

    def test_json_fence(self):
        """Verifica remocao de ```json."""
        from quiz.engine import strip_code_fences

        assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_plain_fence(self):
        """Verifica remocao de ``` simples."""
        from quiz.engine import strip_code_fences

        assert strip_code_fences('```\n[1, 2]\n```') == "[1, 2]"

    def test_no_fence(self):
        """Verifica texto sem bloco inalterado."""
        from quiz.engine import strip_code_fences

        assert strip_code_fences('  {"a": 1}  ') == '{"a": 1}'


class TestParseGeneratedQuiz:
    """Testes para parse_generated_quiz."""

    def test_valid_object(self):
        """Verifica parse do formato objeto."""
        from quiz.engine import parse_generated_quiz

        draft = parse_generated_quiz(json.dumps(VALID_DRAFT))

        assert len(draft.questions) == 2
        assert draft.questions[0].text == "Qual canal você mais usa?"
        assert [o.points for o in draft.questions[0].options] == [10, 5, 0]
        assert draft.questions[1].options[1].points == 0
        assert draft.results[1].score_min == 11
        assert draft.results[1].score_max == 20

    def test_fresh_ids(self):
        """Verifica IDs novos e unicos."""
        from quiz.engine import parse_generated_quiz

        draft = parse_generated_quiz(json.dumps(VALID_DRAFT))
        ids = [q.id for q in draft.questions] + [o.id for q in draft.questions for o in q.options]

        assert len(ids) == len(set(ids))

    def test_fenced_response(self):
        """Verifica parse de resposta dentro de bloco markdown."""
        from quiz.engine import parse_generated_quiz

        draft = parse_generated_quiz(f"```json\n{json.dumps(VALID_DRAFT)}\n```")

        assert len(draft.questions) == 2

    def test_legacy_array(self):
        """Verifica formato legado (lista de perguntas, sem resultados)."""
        from quiz.engine import parse_generated_quiz

        draft = parse_generated_quiz(json.dumps(VALID_DRAFT["questions"]))

        assert len(draft.questions) == 2
        assert draft.results == []

    def test_skips_invalid_questions(self):
        """Verifica descarte de perguntas malformadas."""
        from quiz.engine import parse_generated_quiz

        payload = {
            "questions": [
                {"title": "Só uma opção", "options": [{"text": "A"}]},
                {"options": [{"text": "A"}, {"text": "B"}]},
                VALID_DRAFT["questions"][0],
            ]
        }
        draft = parse_generated_quiz(json.dumps(payload))

        assert len(draft.questions) == 1
        assert draft.results == []

    def test_boolean_points_ignored(self):
        """Verifica que booleano nao vira ponto."""
        from quiz.engine import parse_generated_quiz

        payload = {
            "questions": [
                {"title": "Pergunta", "options": [{"text": "A", "points": True}, {"text": "B", "points": 2}]}
            ]
        }
        draft = parse_generated_quiz(json.dumps(payload))

        assert [o.points for o in draft.questions[0].options] == [0, 2]

    def test_non_finite_numbers_ignored(self):
        """Verifica que NaN e Infinity viram zero em vez de erro."""
        from quiz.engine import parse_generated_quiz

        raw = (
            '{"questions": [{"title": "Pergunta", "options": ['
            '{"text": "A", "points": NaN}, {"text": "B", "points": Infinity}]}],'
            ' "results": [{"title": "Faixa", "description": "Texto",'
            ' "scoreMin": -Infinity, "scoreMax": 10}]}'
        )

        draft = parse_generated_quiz(raw)

        assert [o.points for o in draft.questions[0].options] == [0, 0]
        assert draft.results[0].score_min == 0
        assert draft.results[0].score_max == 10

    def test_skips_invalid_results(self):
        """Verifica descarte de resultados sem descricao."""
        from quiz.engine import parse_generated_quiz

        payload = {**VALID_DRAFT, "results": [{"title": "Sem descrição"}, VALID_DRAFT["results"][0]]}
        draft = parse_generated_quiz(json.dumps(payload))

        assert [r.title for r in draft.results] == ["Iniciante"]

    @pytest.mark.parametrize(
        "raw,message",
        [
            ("", "não conseguiu gerar"),
            ("curto", "não conseguiu gerar"),
            ("isto não é json nenhum", "formato inválido"),
            ('{"questions": []}', "não gerou perguntas válidas"),
            ('{"results": [1, 2, 3]}', "não gerou perguntas válidas"),
            ('{"questions": [{"title": "x"}]}', "Nenhuma pergunta válida"),
            ('"apenas uma string"', "formato inválido"),
        ],
    )
    def test_errors(self, raw, message):
        """Verifica DraftGenerationError para respostas inutilizaveis."""
        from quiz.engine import parse_generated_quiz
        from quiz.exceptions import DraftGenerationError

        with pytest.raises(DraftGenerationError) as exc_info:
            parse_generated_quiz(raw)

        assert message in exc_info.value.message


class TestPromptTemplates:
    """Testes para templates de prompt."""

    @pytest.mark.parametrize("quantity,expected", [(None, 5), (0, 5), (-3, 1), (7, 7), (50, 20)])
    def test_clamp_question_count(self, quantity, expected):
        """Verifica limite de perguntas."""
        from quiz.prompts import clamp_question_count

        assert clamp_question_count(quantity) == expected

    def test_format_draft_prompt(self):
        """Verifica interpolacao do tema e quantidade."""
        from quiz.prompts import format_draft_prompt

        prompt = format_draft_prompt("Marketing Digital", "Para pequenas empresas", 4)

        assert "Marketing Digital" in prompt
        assert "Para pequenas empresas" in prompt
        assert "4" in prompt


class TestQuizDraftGenerator:
    """Testes para o gerador (cliente Anthropic mockado)."""

    def _client(self, text):
        client = MagicMock()
        client.messages.create = AsyncMock(
            return_value=MagicMock(content=[MagicMock(type="text", text=text)])
        )
        return client

    @pytest.mark.asyncio
    async def test_generate(self):
        """Verifica geracao de rascunho a partir da resposta do modelo."""
        from quiz.llm import QuizDraftGenerator

        client = self._client(json.dumps(VALID_DRAFT))
        generator = QuizDraftGenerator(client, model="claude-test")

        draft = await generator.generate("Marketing", quantity=2)

        assert len(draft.questions) == 2
        kwargs = client.messages.create.await_args.kwargs
        assert kwargs["model"] == "claude-test"
        assert "Marketing" in kwargs["messages"][0]["content"]

    @pytest.mark.asyncio
    async def test_generate_invalid_output(self):
        """Verifica erro quando o modelo devolve texto livre."""
        from quiz.exceptions import DraftGenerationError
        from quiz.llm import QuizDraftGenerator

        generator = QuizDraftGenerator(self._client("Desculpe, não posso ajudar."), model="m")

        with pytest.raises(DraftGenerationError):
            await generator.generate("Marketing")

    def test_factory_without_key(self):
        """Verifica erro ao criar cliente sem chave."""
        from quiz.exceptions import DraftGenerationError
        from quiz.llm import LLMClientFactory

        factory = LLMClientFactory(api_key=None)

        assert factory.is_configured is False
        with pytest.raises(DraftGenerationError):
            factory.create_client()

    def test_factory_default_model(self):
        """Verifica modelo padrao."""
        from quiz.llm import LLMClientFactory

        factory = LLMClientFactory(api_key="sk-test")

        assert factory.is_configured is True
        assert factory.model == LLMClientFactory.DEFAULT_MODEL

# =============================================================================
# CONFTEST - Fixtures compartilhadas para todos os testes
# =============================================================================
# Definicoes de exemplo, AgentFS mockado e cliente FastAPI isolado
# =============================================================================

import json
from unittest.mock import AsyncMock, MagicMock

import pytest


# =============================================================================
# FIXTURES DE DEFINICAO
# =============================================================================


def make_question(question_id: str, text: str, points=(10, 5, 3, 0)):
    """Pergunta single com uma opcao por valor de pontos."""
    from quiz.models import QuizOption, QuizQuestion

    return QuizQuestion(
        id=question_id,
        text=text,
        options=[
            QuizOption(id=f"{question_id}-o{i}", text=f"Opção {i}", points=value)
            for i, value in enumerate(points)
        ],
    )


def make_definition(
    num_questions: int = 3,
    collect_lead: bool = True,
    results=None,
    **overrides,
):
    """QuizDefinition publicada com perguntas {10,5,3,0}."""
    from quiz.models import QuizDefinition, QuizSettings, QuizStatus, ResultBucket

    if results is None:
        results = [
            ResultBucket(id="r-low", title="Iniciante", score_min=0, score_max=20),
            ResultBucket(id="r-high", title="Especialista", score_min=21, score_max=50),
        ]

    data = {
        "id": "quiz-1",
        "owner_id": "owner-1",
        "title": "Qual seu perfil de marketing?",
        "slug": "qual-seu-perfil-de-marketing-ab12c",
        "status": QuizStatus.PUBLISHED,
        "questions": [make_question(f"q{i}", f"Pergunta {i}") for i in range(1, num_questions + 1)],
        "results": results,
        "settings": QuizSettings(collect_lead_before_result=collect_lead),
    }
    data.update(overrides)
    return QuizDefinition(**data)


@pytest.fixture
def sample_definition():
    """3 perguntas, faixas 0-20 e 21-50, captura de lead ativa."""
    return make_definition()


@pytest.fixture
def no_lead_definition():
    """3 perguntas sem captura de lead."""
    return make_definition(collect_lead=False)


@pytest.fixture
def sample_payload():
    """Payload do builder (camelCase) para criar um quiz."""
    return {
        "title": "Qual é o seu Perfil de Marketing?",
        "description": "Descubra em 3 perguntas",
        "questions": [
            {
                "id": f"q{i}",
                "text": f"Pergunta {i}",
                "type": "single",
                "options": [
                    {"id": f"q{i}-o{j}", "text": f"Opção {j}", "points": points}
                    for j, points in enumerate((10, 5, 3, 0))
                ],
            }
            for i in range(1, 4)
        ],
        "results": [
            {"id": "r-low", "title": "Iniciante", "description": "", "scoreMin": 0, "scoreMax": 20},
            {"id": "r-high", "title": "Especialista", "description": "", "scoreMin": 21, "scoreMax": 50},
        ],
        "settings": {"collectLeadBeforeResult": True},
    }


# =============================================================================
# FIXTURES DE STORAGE
# =============================================================================


@pytest.fixture
def mock_agentfs():
    """Mock do AgentFS com KV em dicionario (valores serializados em JSON)."""
    mock = MagicMock()
    _storage = {}

    async def mock_get(key):
        raw = _storage.get(key)
        return json.loads(raw) if raw is not None else None

    async def mock_set(key, value):
        _storage[key] = json.dumps(value)

    async def mock_delete(key):
        _storage.pop(key, None)

    async def mock_list(prefix=""):
        return [{"key": k, "value": json.loads(v)} for k, v in _storage.items() if k.startswith(prefix)]

    mock.kv = AsyncMock()
    mock.kv.get = mock_get
    mock.kv.set = mock_set
    mock.kv.delete = mock_delete
    mock.kv.list = mock_list
    mock._storage = _storage

    mock.close = AsyncMock()

    return mock


@pytest.fixture
def quiz_store(mock_agentfs):
    from quiz.storage import QuizStore

    return QuizStore(mock_agentfs)


@pytest.fixture
def response_store(mock_agentfs):
    from quiz.storage import ResponseStore

    return ResponseStore(mock_agentfs)


@pytest.fixture
def session_cache():
    from quiz.storage import PlaySessionCache

    return PlaySessionCache(max_size=100, default_ttl=60)


@pytest.fixture
def quiz_engine(quiz_store, response_store, session_cache):
    """QuizEngine sem atraso visual."""
    from quiz.engine import QuizEngine

    return QuizEngine(quiz_store, response_store, session_cache, advance_delay=0)


@pytest.fixture
def recorder():
    """Recorder mockado que registra as respostas recebidas."""
    return AsyncMock(return_value=None)


@pytest.fixture
def failing_recorder():
    """Recorder que sempre falha ao gravar."""
    from quiz.exceptions import PersistenceError

    return AsyncMock(side_effect=PersistenceError("Erro ao salvar resposta do quiz"))


# =============================================================================
# FIXTURES DO FASTAPI
# =============================================================================


@pytest.fixture
def client(mock_agentfs):
    """Cliente de teste FastAPI com estado limpo sobre o AgentFS mockado."""
    from fastapi.testclient import TestClient

    import app_state
    from server import app
    from utils.rate_limiter import get_limiter

    app_state.reset_state(mock_agentfs)
    get_limiter().reset()
    with TestClient(app) as test_client:
        yield test_client
    app_state.reset_state()


@pytest.fixture
def owner_headers():
    return {"X-User-Id": "owner-1"}


@pytest.fixture
def other_headers():
    return {"X-User-Id": "intruso"}


@pytest.fixture
def definition_factory():
    """Acesso a make_definition nos testes."""
    return make_definition

# =============================================================================
# CONFTEST - Pytest Fixtures Globais
# =============================================================================
# Ambiente de teste sem dependencias externas (KV em memoria, IA mockada)
# =============================================================================

import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

# Adicionar root ao path
sys.path.insert(0, str(Path(__file__).parent))


# =============================================================================
# FIXTURES DE AMBIENTE
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_env():
    """Configura variáveis de ambiente para testes."""
    env_vars = {
        "ENVIRONMENT": "test",
        "LOG_LEVEL": "ERROR",
        "AUTH_ENABLED": "false",
        "QUIZ_ADVANCE_DELAY": "0",
        "RATE_LIMIT_PLAY": "1000/minute",
        "ANTHROPIC_API_KEY": "test-key-123",
    }
    with patch.dict(os.environ, env_vars):
        from config import reload_config

        reload_config()
        yield


@pytest.fixture
def capture_logs(caplog):
    """Captura logs durante testes."""
    import logging

    caplog.set_level(logging.DEBUG)
    return caplog

"""Rate limiting (slowapi) para as rotas publicas."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from config import get_config

limiter = Limiter(key_func=get_remote_address)


def get_limiter() -> Limiter:
    return limiter


def play_rate_limit() -> str:
    """Limite das rotas de jogo (lido a cada request)."""
    return get_config().rate_limit_play

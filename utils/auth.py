"""Identificacao do usuario nas rotas do builder.

A autenticacao real (sessao, OAuth) acontece no gateway; ele encaminha o
usuario autenticado no header ``X-User-Id``. Com ``AUTH_ENABLED=false`` um
dono fixo de desenvolvimento e usado quando o header nao vem.
"""

import re

from fastapi import Header, HTTPException

from config import get_config

DEV_OWNER_ID = "dev-user"

_USER_ID_PATTERN = re.compile(r"^[a-zA-Z0-9\-_@.]{1,128}$")


def _validate_user_id(user_id: str) -> str:
    if not _USER_ID_PATTERN.match(user_id):
        raise HTTPException(status_code=401, detail="Identificação de usuário inválida")
    return user_id


async def get_current_user(x_user_id: str | None = Header(default=None)) -> str:
    """Dono autenticado (obrigatorio para criar, editar e excluir)."""
    if x_user_id:
        return _validate_user_id(x_user_id)
    if not get_config().auth_enabled:
        return DEV_OWNER_ID
    raise HTTPException(status_code=401, detail="Você precisa estar logado.")


async def get_optional_user(x_user_id: str | None = Header(default=None)) -> str | None:
    """Usuario opcional (jogo publico; dono pode ver preview de rascunho)."""
    if x_user_id:
        return _validate_user_id(x_user_id)
    return None

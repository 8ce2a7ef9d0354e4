"""Core module - shared state and helper functions."""

from __future__ import annotations

import logging
from typing import Optional

from agentfs_sdk import AgentFS, AgentFSOptions

from config import get_config
from quiz.engine import QuizEngine
from quiz.llm import LLMClientFactory
from quiz.storage import PlaySessionCache, QuizStore, ResponseStore

logger = logging.getLogger(__name__)

# =============================================================================
# GLOBAL INSTANCES
# =============================================================================

agentfs: Optional[AgentFS] = None
quiz_engine: Optional[QuizEngine] = None
llm_factory: Optional[LLMClientFactory] = None


def _build_engine(afs: AgentFS) -> QuizEngine:
    config = get_config()
    sessions = PlaySessionCache(
        max_size=config.play_session_max,
        default_ttl=config.play_session_ttl,
    )
    return QuizEngine(
        QuizStore(afs),
        ResponseStore(afs),
        sessions,
        advance_delay=config.advance_delay,
    )


async def get_agentfs() -> AgentFS:
    """Get AgentFS instance (aberto no primeiro uso)."""
    global agentfs

    if agentfs is None:
        agentfs_id = get_config().agentfs_id
        agentfs = await AgentFS.open(AgentFSOptions(id=agentfs_id))
        logger.info(f"AgentFS aberto: {agentfs_id}")

    return agentfs


async def init_quiz_engine() -> QuizEngine:
    """Cria o QuizEngine sobre o AgentFS (chamado no startup)."""
    global quiz_engine

    if quiz_engine is None:
        quiz_engine = _build_engine(await get_agentfs())
        logger.info("QuizEngine inicializado")

    return quiz_engine


def get_quiz_engine() -> QuizEngine:
    """Get QuizEngine instance.

    Raises:
        RuntimeError: startup ainda nao executado
    """
    if quiz_engine is None:
        raise RuntimeError("QuizEngine não inicializado; chame init_quiz_engine() no startup")
    return quiz_engine


def get_llm_factory() -> LLMClientFactory:
    """Get LLMClientFactory instance."""
    global llm_factory

    if llm_factory is None:
        config = get_config()
        llm_factory = LLMClientFactory(config.anthropic_api_key, model=config.draft_model)

    return llm_factory


async def shutdown_state() -> None:
    """Aguarda gravacoes pendentes, descarta sessoes e fecha o AgentFS."""
    global agentfs, quiz_engine

    if quiz_engine is not None:
        await quiz_engine.flush_writes()
        await quiz_engine.sessions.clear()
        logger.info("Sessoes de jogo descartadas")

    if agentfs is not None:
        await agentfs.close()
        logger.info("AgentFS fechado")

    agentfs = None
    quiz_engine = None


def reset_state(afs: Optional[AgentFS] = None) -> Optional[QuizEngine]:
    """Descarta engine e fabrica de LLM.

    Args:
        afs: AgentFS ja aberto a usar; sem ele o proximo startup abre um novo
    """
    global agentfs, quiz_engine, llm_factory

    agentfs = afs
    quiz_engine = _build_engine(afs) if afs is not None else None
    llm_factory = None
    return quiz_engine

"""Logging configuration helpers."""

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Configura o logging da aplicacao e retorna o logger raiz do servico."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
    return logging.getLogger("quiz_studio")


def get_logger(name: str) -> logging.Logger:
    """Logger nomeado sob o namespace do servico."""
    return logging.getLogger(f"quiz_studio.{name}")

"""Quiz Exceptions - Hierarquia de erros do dominio de quiz."""

from typing import Any


class QuizError(Exception):
    """Erro base do modulo de quiz.

    Args:
        message: Mensagem legivel (exibida ao cliente da API)
        details: Contexto adicional para logs e respostas de erro
    """

    status_code = 400

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {"detail": self.message, "details": self.details}


class ConfigurationError(QuizError):
    """Definicao de quiz invalida (sem perguntas, opcoes insuficientes, tipo nao suportado)."""

    status_code = 422


class InvalidTransitionError(QuizError):
    """Evento recebido em um estado que nao o aceita."""

    status_code = 409


class QuizNotFoundError(QuizError):
    """Quiz ou sessao de jogo inexistente."""

    status_code = 404


class OwnershipError(QuizError):
    """Usuario autenticado nao e dono do quiz."""

    status_code = 403


class PersistenceError(QuizError):
    """Falha ao gravar um registro no store externo."""

    status_code = 502


class DraftGenerationError(QuizError):
    """A IA retornou um rascunho de quiz inutilizavel."""

    status_code = 422

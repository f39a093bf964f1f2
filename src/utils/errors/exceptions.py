"""Taxonomia de erros do bridge CRM → WhatsApp.

Cada erro carrega o status HTTP e um código estável usados pelas rotas
para montar o envelope de resposta.
"""

from __future__ import annotations


class BridgeError(Exception):
    """Base para erros tratados pelo bridge."""

    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(BridgeError):
    """Entrada malformada ou campo obrigatório ausente (culpa do chamador)."""

    status_code = 400
    error_code = "VALIDATION_ERROR"


class NotFoundError(BridgeError):
    """Entidade/canal referenciado não existe no CRM."""

    status_code = 404
    error_code = "NOT_FOUND"


class ConfigurationError(BridgeError):
    """Credencial ou URL não resolvível (culpa do operador)."""

    status_code = 500
    error_code = "CONFIGURATION_ERROR"


class InternalError(BridgeError):
    """Falha inesperada."""

    status_code = 500
    error_code = "INTERNAL_ERROR"


class ProviderError(BridgeError):
    """Provedor de mensagens rejeitou ou falhou a chamada."""

    status_code = 502
    error_code = "PROVIDER_ERROR"


_BY_STATUS: dict[int, type[BridgeError]] = {
    400: ValidationError,
    404: NotFoundError,
    502: ProviderError,
}


def error_for_status(status_code: int, message: str) -> BridgeError:
    """Retorna o erro da taxonomia correspondente a um status HTTP.

    Status sem mapeamento explícito viram InternalError.
    """
    error_cls = _BY_STATUS.get(status_code, InternalError)
    return error_cls(message)


def innermost_message(exc: BaseException) -> str:
    """Mensagem da exceção mais interna da cadeia (__cause__/__context__)."""
    current = exc
    seen: set[int] = {id(current)}
    while True:
        nested = current.__cause__ or current.__context__
        if nested is None or id(nested) in seen:
            break
        seen.add(id(nested))
        current = nested
    return str(current) or type(current).__name__

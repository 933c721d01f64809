"""
Exceções de domínio da aplicação.
Projeto: Gestor de Notas Fiscais

Define as exceções específicas do domínio para uma gestão
centralizada dos erros (convertidas em respostas HTTP em app.main).

NOTA: BusinessValidationError é distinta de pydantic.ValidationError.
- pydantic.ValidationError: erros de formato/tipo no input (FastAPI → 422)
- BusinessValidationError: violações das regras de negócio (handler próprio → 422)
"""

from typing import Any, Dict, Optional

__all__ = [
    "AppException",
    "NotFoundError",
    "DuplicateError",
    "BusinessValidationError",
    "LinkExpiredError",
]

class AppException(Exception):
    """
    Exceção base da aplicação.

    Attributes:
        status_code: HTTP status code a devolver ao cliente
        error_code: Identificador único do erro para o frontend
        detail: Mensagem legível para o utilizador
        extra: Dados adicionais para o frontend
    """

    status_code: int = 500
    error_code: str = "INTERNAL_SERVER_ERROR"

    def __init__(
        self,
        detail: str,
        error_code: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.detail = detail
        self.error_code = error_code if error_code is not None else self.error_code
        self.extra = extra
        self.status_code = self.__class__.status_code
        super().__init__(detail)

class NotFoundError(AppException):
    """Recurso inexistente."""

    status_code: int = 404
    error_code: str = "RESOURCE_NOT_FOUND"

    def __init__(
        self,
        detail: str = "Recurso não encontrado",
        error_code: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(detail, error_code, extra)

class DuplicateError(AppException):
    """
    Tentativa de criar um recurso duplicado.

    Usada para violações de unicidade (ex. email já registado).
    """

    status_code: int = 409
    error_code: str = "DUPLICATE_RESOURCE"

    def __init__(
        self,
        detail: str = "Recurso já existente",
        error_code: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(detail, error_code, extra)

class BusinessValidationError(ValueError, AppException):
    """
    Violação das regras de negócio.

    Herda de ValueError para poder ser lançada dentro de validadores Pydantic.

    Exemplos:
        - "Por favor, selecione as datas inicial e final"
        - "A data inicial não pode ser posterior à data final"
        - "Mês de referência inválido"
    """

    status_code: int = 422
    error_code: str = "BUSINESS_VALIDATION_ERROR"

    def __init__(
        self,
        detail: str = "Validação de dados falhou",
        error_code: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        # Chama AppException.__init__ diretamente para evitar ValueError.__init__
        AppException.__init__(self, detail, error_code, extra)


class LinkExpiredError(AppException):
    """
    Link partilhado existente mas expirado.

    Só é lançada na camada HTTP: o serviço de partilha devolve
    um estado (LinkState.EXPIRED) e não uma exceção.
    """

    status_code: int = 410
    error_code: str = "LINK_EXPIRED"

    def __init__(
        self,
        detail: str = "Este relatório expirou",
        error_code: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(detail, error_code, extra)

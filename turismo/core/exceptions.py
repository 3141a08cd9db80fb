"""
Global exception handling for the application.
Every flow failure is an AppError subclass; the handler renders them as
Problem-Details-like JSON bodies.
"""

from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
import structlog

logger = structlog.get_logger(__name__)


class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class EntityNotFoundException(AppError):
    """Resource not found error."""
    def __init__(self, message: str = "Recurso não encontrado", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_404_NOT_FOUND, details)


class ForbiddenException(AppError):
    """Authorization failure error."""
    def __init__(self, message: str = "Apenas administradores podem acessar este recurso", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_403_FORBIDDEN, details)


class AuthRequiredError(AppError):
    """A gated action was attempted without a session."""
    def __init__(self, message: str = "Você precisa estar logado para continuar", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED, details)


class AuthError(AppError):
    """Login or register was rejected by the remote API."""
    def __init__(self, message: str = "Email ou senha incorretos", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED, details)


class SessionLoadingError(AppError):
    """The persisted credential is still being verified."""
    def __init__(self, message: str = "Sessão ainda está sendo carregada", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_503_SERVICE_UNAVAILABLE, details)


class InvalidDateRangeError(AppError):
    def __init__(self, message: str = "A data de check-out deve ser posterior à data de check-in", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_422_UNPROCESSABLE_ENTITY, details)


class InvalidGuestCountError(AppError):
    def __init__(self, message: str = "Número de hóspedes inválido", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_422_UNPROCESSABLE_ENTITY, details)


class InvalidRatingError(AppError):
    def __init__(self, message: str = "A avaliação deve ser um número inteiro entre 1 e 5", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_422_UNPROCESSABLE_ENTITY, details)


class SubmissionInProgressError(AppError):
    """A form already has a request in flight."""
    def __init__(self, message: str = "Já existe uma reserva sendo enviada", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_409_CONFLICT, details)


class RemoteAPIError(AppError):
    """The remote REST API answered with a non-2xx status.

    `message` is the response body verbatim; `remote_status` keeps the
    status code the backend returned.
    """
    def __init__(
        self,
        message: str = "Erro na requisição",
        remote_status: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.remote_status = remote_status
        super().__init__(message, status.HTTP_502_BAD_GATEWAY, details)


class SubmissionError(RemoteAPIError):
    """Reservation create call failed or was rejected server-side."""


class NetworkError(RemoteAPIError):
    """The remote API could not be reached."""
    def __init__(self, message: str = "Não foi possível conectar ao servidor", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, None, details)
        self.status_code = status.HTTP_503_SERVICE_UNAVAILABLE


class RequestTimeoutError(NetworkError):
    def __init__(self, message: str = "O servidor demorou demais para responder", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.status_code = status.HTTP_504_GATEWAY_TIMEOUT


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all uncaught exceptions globally."""

    if isinstance(exc, AppError):
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": {
                    "code": exc.__class__.__name__,
                    "message": exc.message,
                    "details": exc.details,
                    "path": request.url.path,
                }
            },
        )

    logger.exception("Unexpected error occurred", path=request.url.path)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "InternalServerError",
                "message": "Ocorreu um erro inesperado. Tente novamente mais tarde.",
                "path": request.url.path,
            }
        },
    )

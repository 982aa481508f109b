"""Exception handlers mapping domain errors to HTTP responses."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import structlog

from zkredit.domain.exceptions import (
    ConfigurationError,
    DomainException,
    DuplicateEventError,
    LedgerTimeoutError,
    PaymentExecutionError,
    ProofInsufficientError,
    ProofProviderError,
    ProofTimeoutError,
    ValidationError,
    WorkerNotFoundException,
)
from .request_context import get_request_id

logger = structlog.get_logger(__name__)

# Most specific class wins: Starlette resolves handlers along the MRO.
STATUS_CODES = {
    ValidationError: 400,
    ProofInsufficientError: 422,
    WorkerNotFoundException: 404,
    DuplicateEventError: 409,
    ConfigurationError: 500,
    PaymentExecutionError: 502,
    LedgerTimeoutError: 504,
    ProofProviderError: 503,
    ProofTimeoutError: 504,
}

# Upstream failures get a generic client message; details stay in the logs.
UPSTREAM_MESSAGES = {
    ConfigurationError: "Service is not configured to process this request.",
    PaymentExecutionError: "Payment could not be settled. Please try again later.",
    LedgerTimeoutError: "Payment settlement timed out. Please try again.",
    ProofProviderError: "Proof service unavailable. Please try again later.",
    ProofTimeoutError: "Proof generation timed out. Please try again.",
}


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": code,
            "message": message,
            "request_id": get_request_id(),
        },
    )


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Maps domain exceptions to appropriate HTTP responses.
    """

    async def domain_error_handler(request: Request, exc: DomainException) -> JSONResponse:
        exc_type = type(exc)
        status_code = next(
            (STATUS_CODES[cls] for cls in exc_type.__mro__ if cls in STATUS_CODES),
            400,
        )
        client_message = next(
            (UPSTREAM_MESSAGES[cls] for cls in exc_type.__mro__ if cls in UPSTREAM_MESSAGES),
            None,
        )

        if status_code >= 500:
            logger.error(
                "domain_exception",
                code=exc.code,
                message=exc.message,
                status_code=status_code,
            )
        else:
            logger.warning("domain_exception", code=exc.code, message=exc.message)

        return _error_response(status_code, exc.code, client_message or exc.message)

    for exc_class in (*STATUS_CODES, DomainException):
        app.add_exception_handler(exc_class, domain_error_handler)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return _error_response(500, "INTERNAL_ERROR", "An unexpected error occurred.")

"""Error handling middleware and exception handlers."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import structlog

from installment_billing.domain.exceptions import (
    DomainException,
    ExchangeRateAPIException,
    InvalidPaymentRequestException,
    InvalidPlanRequestException,
    InvalidStatusTransitionException,
    PaymentNotFoundException,
    PlanNotFoundException,
    ReminderNotFoundException,
    UnsupportedCurrencyException,
)
from .request_context import get_request_id

logger = structlog.get_logger(__name__)


def _error_response(status_code: int, exc: DomainException, message: str | None = None) -> JSONResponse:
    body = exc.to_dict(get_request_id())
    if message is not None:
        body["message"] = message
    return JSONResponse(status_code=status_code, content=body)


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Maps domain exceptions to appropriate HTTP responses.
    """

    @app.exception_handler(PlanNotFoundException)
    @app.exception_handler(PaymentNotFoundException)
    @app.exception_handler(ReminderNotFoundException)
    async def not_found_handler(request: Request, exc: DomainException) -> JSONResponse:
        return _error_response(404, exc)

    @app.exception_handler(InvalidPlanRequestException)
    @app.exception_handler(InvalidPaymentRequestException)
    @app.exception_handler(UnsupportedCurrencyException)
    async def invalid_request_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        logger.info(
            "invalid_request",
            request_id=get_request_id(),
            code=exc.code,
            message=exc.message,
        )
        return _error_response(400, exc)

    @app.exception_handler(InvalidStatusTransitionException)
    async def invalid_transition_handler(
        request: Request,
        exc: InvalidStatusTransitionException,
    ) -> JSONResponse:
        logger.info(
            "invalid_status_transition",
            request_id=get_request_id(),
            current=exc.current,
            requested=exc.requested,
        )
        return _error_response(409, exc)

    @app.exception_handler(ExchangeRateAPIException)
    async def exchange_rate_error_handler(
        request: Request,
        exc: ExchangeRateAPIException,
    ) -> JSONResponse:
        """Upstream rate failures; the previous rates remain in use."""
        logger.error(
            "exchange_rate_api_error",
            request_id=get_request_id(),
            message=exc.message,
            status_code=exc.status_code,
        )
        return _error_response(
            503,
            exc,
            "Exchange rates are temporarily unavailable. Previous rates remain in effect.",
        )

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle generic domain exceptions."""
        logger.warning(
            "domain_exception",
            request_id=get_request_id(),
            code=exc.code,
            message=exc.message,
        )
        return _error_response(400, exc)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unhandled_exception",
            request_id=get_request_id(),
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "INTERNAL_ERROR",
                "message": "An unexpected error occurred.",
                "request_id": get_request_id(),
            },
        )

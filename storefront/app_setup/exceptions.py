"""
Gestionnaires d'exceptions utilisés par la factory.
- CheckoutError et dérivées -> JSON {detail, reason[, fields]} avec un code HTTP stable.
- HTTPException -> corps JSON FastAPI standard.
"""
import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from storefront.payments.errors import (
    CheckoutBusyError,
    CheckoutError,
    InvalidTransitionError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 422),
    (CheckoutBusyError, 409),
    (InvalidTransitionError, 409),
)

def status_for(exc: CheckoutError) -> int:
    for cls, code in _STATUS_BY_ERROR:
        if isinstance(exc, cls):
            return code
    return 400

def register_exception_handlers(app: FastAPI) -> None:
    """
    Enregistre les handlers applicatifs.
    - Validation locale: 422 avec le détail par champ, la tentative reste rejouable.
    - Tentative en cours / transition interdite: 409.
    """
    @app.exception_handler(CheckoutError)
    async def checkout_error_handler(request: Request, exc: CheckoutError):
        status_code = status_for(exc)
        content = {"detail": exc.message or exc.reason, "reason": exc.reason}
        if isinstance(exc, ValidationError):
            content["fields"] = exc.fields
        logger.info("checkout.error path=%s status=%s reason=%s", request.url.path, status_code, exc.reason)
        return JSONResponse(status_code=status_code, content=content)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=getattr(exc, "headers", None))

import logging

from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import IntegrityError

from shared.core.exceptions import InventoryError
from shared.core.schemas import JsonOutResult
from shared.utils.app_status_code import AppStatusCode

logger = logging.getLogger(__name__)


def _failure(message: str, status_code: str, http_status: int, data=None) -> JSONResponse:
    wrapped = JsonOutResult(
        success=False,
        data=data,
        error=message,
        message=message,
        status_code=status_code,
    ).model_dump(mode="json")
    return JSONResponse(content=wrapped, status_code=http_status)


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(InventoryError)
    async def inventory_exception_handler(request: Request, exc: InventoryError):
        logger.warning("%s %s rejected: %s", request.method,
                       request.url.path, exc.message)
        return _failure(exc.message, exc.status_code, exc.http_status,
                        data=jsonable_encoder(exc.details) or None)

    @app.exception_handler(IntegrityError)
    async def integrity_exception_handler(request: Request, exc: IntegrityError):
        logger.warning("%s %s integrity error: %s", request.method,
                       request.url.path, exc.orig)
        return _failure("Operation conflicts with existing data",
                        AppStatusCode.CONFLICT, 400)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        # error_response() already built the envelope
        if isinstance(exc.detail, dict) and "success" in exc.detail:
            return JSONResponse(content=exc.detail, status_code=exc.status_code,
                                headers=getattr(exc, "headers", None))
        return _failure(str(exc.detail), AppStatusCode.OPERATION_FAILED,
                        exc.status_code or 400)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return _failure("Invalid request: " + "; ".join(
            f"{'.'.join(str(p) for p in err.get('loc', []))}: {err.get('msg')}"
            for err in exc.errors()
        ), AppStatusCode.INVALID_INPUT, 422)

    # Catch all unhandled exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s",
                         request.method, request.url.path)
        return _failure("Internal server error",
                        AppStatusCode.OPERATION_FAILED, 500)

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class PrintShopError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Bad request."

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidOrder(PrintShopError):
    message = "Missing order details."


class InvalidStatus(PrintShopError):
    message = "Invalid status provided."


class MissingUpload(PrintShopError):
    message = "No file uploaded."


class UploadTooLarge(PrintShopError):
    status_code = 413
    message = "File is too large."


class AdminRequired(PrintShopError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Admin login required."


class OrderNotFound(PrintShopError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Order not found."


def _failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "message": message})


def setup_error_handlers(app: FastAPI) -> None:

    @app.exception_handler(PrintShopError)
    async def print_shop_error_handler(request: Request, exc: PrintShopError):
        return _failure(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
        return _failure(status.HTTP_400_BAD_REQUEST, "Invalid request.")

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
        return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    @app.exception_handler(OSError)
    async def storage_error_handler(request: Request, exc: OSError):
        logger.error("Storage error on %s %s", request.method, request.url.path, exc_info=exc)
        return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

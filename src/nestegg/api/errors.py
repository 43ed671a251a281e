"""Exception handlers mapping the NestEgg error taxonomy onto HTTP responses."""

from __future__ import annotations

from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from nestegg.core.exceptions import (
    InternalError,
    InvalidInputError,
    NestEggError,
    NotFoundError,
    field_errors,
)

STATUS_BY_KIND = {
    NotFoundError.kind: HTTPStatus.NOT_FOUND,
    InvalidInputError.kind: HTTPStatus.BAD_REQUEST,
    InternalError.kind: HTTPStatus.INTERNAL_SERVER_ERROR,
}


def error_body(exc: NestEggError) -> dict:
    body: dict = {"kind": exc.kind, "message": str(exc)}
    if isinstance(exc, InvalidInputError):
        body["details"] = [e.to_dict() for e in exc.errors]
    return {"error": body}


async def _handle_nestegg_error(request: Request, exc: NestEggError) -> JSONResponse:
    status = STATUS_BY_KIND.get(exc.kind, HTTPStatus.INTERNAL_SERVER_ERROR)
    if status == HTTPStatus.INTERNAL_SERVER_ERROR:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(error_body(exc), status_code=status)


async def _handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Convert FastAPI body/query validation failures into invalid_input errors."""
    error = InvalidInputError(field_errors(exc.errors()))
    return JSONResponse(error_body(error), status_code=HTTPStatus.BAD_REQUEST)


async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    error = InternalError(str(exc) or exc.__class__.__name__)
    return JSONResponse(error_body(error), status_code=HTTPStatus.INTERNAL_SERVER_ERROR)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(NestEggError, _handle_nestegg_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
    app.add_exception_handler(Exception, _handle_unexpected)

"""
Error taxonomy shared by the storage layer, the chat flows and the HTTP router.

Every error carries the HTTP status it maps to, so the router only needs one
exception handler to shape the `{message, errors?}` body the client expects.
"""

from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException


class PersonaChatError(Exception):
    """Base class for every error surfaced to API clients."""

    status_code = 500

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class ValidationError(PersonaChatError):
    """Malformed or missing required input."""

    status_code = 400


class NotFoundError(PersonaChatError):
    """A referenced persona or session does not exist."""

    status_code = 404


class GeneratorUnavailable(PersonaChatError):
    """The language-model service failed, timed out or returned nothing."""

    status_code = 503


class InternalError(PersonaChatError):
    status_code = 500


async def persona_chat_error_handler(request: Request, exc: PersonaChatError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report Pydantic body/param failures as 400 with per-field detail."""
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]
    body = ValidationError("Invalid request data", errors=jsonable_encoder(errors)).to_body()
    return JSONResponse(status_code=400, content=body)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unknown routes and methods answer with the same body shape as every other error."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"unhandled_error | method={request.method} path={request.url.path} | {exc}")
    return JSONResponse(status_code=500, content=InternalError("Internal server error").to_body())


def register_error_handlers(app: FastAPI) -> None:
    """Attach the handlers mapping the taxonomy above to HTTP responses."""
    app.add_exception_handler(PersonaChatError, persona_chat_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

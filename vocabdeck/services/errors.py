"""Translation of VocabDeck errors into JSON HTTP responses.

Every error body has the shape ``{"message": "..."}``.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from vocabdeck.core import VocabDeckError, get_logger

logger = get_logger("services.errors")


def _message_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message}, headers=headers)


async def vocabdeck_error_handler(request: Request, exc: VocabDeckError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
    return _message_response(exc.status_code, exc.message, headers=headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies are client errors like any other invalid input: 400, not FastAPI's default 422."""
    fields = sorted(
        {
            ".".join(str(part) for part in error["loc"] if part != "body")
            for error in exc.errors()
            if error.get("type") != "json_invalid"  # located by byte offset, not by field
        }
    )
    fields = [field for field in fields if field]
    message = f"invalid request body: {', '.join(fields)}" if fields else "invalid request body"
    return _message_response(status.HTTP_400_BAD_REQUEST, message)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _message_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(VocabDeckError, vocabdeck_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

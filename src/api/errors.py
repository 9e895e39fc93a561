"""Error envelope and exception handlers for the PantryChef API.

Every error response has the shape ``{"error": <message>, "code": <code>}``
(plus ``details`` for request validation), so clients can tell "no matches"
(200 with an empty ``meals`` list) apart from a bad request or an upstream
outage.
"""

from typing import Any, Optional

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.models.errors import RecipeNotFoundError, SearchValidationError, UpstreamUnavailableError
from src.models.models import ErrorResponse
from src.utils.logger import logger

UPSTREAM_FAILURE_MESSAGE = "Failed to perform advanced search."


def error_response(*, status_code: int, code: str, message: str, details: Optional[Any] = None) -> JSONResponse:
    payload = ErrorResponse(error=message, code=code, details=details)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(payload, exclude_none=True))


async def search_validation_error_handler(_req: Request, exc: SearchValidationError) -> JSONResponse:
    return error_response(status_code=400, code="validation_error", message=str(exc))


async def request_validation_error_handler(_req: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(
        status_code=400,
        code="invalid_request",
        message="Invalid search criteria.",
        details={"errors": jsonable_encoder(exc.errors())},
    )


async def upstream_error_handler(req: Request, exc: UpstreamUnavailableError) -> JSONResponse:
    # Upstream detail stays in the logs; callers get a generic "try again" message
    logger.error(f"{req.method} {req.url.path} failed upstream: {exc}")
    return error_response(status_code=502, code="upstream_unavailable", message=UPSTREAM_FAILURE_MESSAGE)


async def not_found_error_handler(_req: Request, exc: RecipeNotFoundError) -> JSONResponse:
    return error_response(status_code=404, code="not_found", message="Recipe not found.")


async def unhandled_error_handler(req: Request, exc: Exception) -> JSONResponse:
    logger.error(f"{req.method} {req.url.path} failed: {exc}", exc_info=exc)
    return error_response(status_code=500, code="internal", message="Internal server error.")

"""Problem+JSON utilities and global exception handlers.

Every error leaves the service as an RFC 7807 `application/problem+json`
body carrying a stable `code`. Domain exceptions from `logic/` are mapped
here so route handlers can simply let them propagate.
"""

from __future__ import annotations

from typing import Any, Dict, Optional
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from feedback_forms.logic.errors import (
    AiGatewayError,
    RequestInFlightError,
    StoredDataCorruptError,
    SubmissionValidationError,
)

PROBLEM_MEDIA_TYPE = "application/problem+json"

logger = logging.getLogger(__name__)


def problem(status: int, title: str, detail: str = "", code: Optional[str] = None, **extra: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {"title": title, "status": status}
    if detail:
        body["detail"] = detail
    if code:
        body["code"] = code
    body.update(extra)
    return body


def problem_response(body: Dict[str, Any]) -> JSONResponse:
    return JSONResponse(body, status_code=int(body.get("status", 500)), media_type=PROBLEM_MEDIA_TYPE)


def form_not_found(form_id: str) -> JSONResponse:
    return problem_response(problem(404, "Form not found", f"no form with id {form_id}", "FORM_NOT_FOUND"))


async def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:  # noqa: D401
    status = int(getattr(exc, "status_code", 500) or 500)
    if isinstance(exc.detail, dict):
        body = {"status": status, **exc.detail}
    else:
        body = problem(status, "Error", str(exc.detail or ""))
    headers = {str(k): str(v) for k, v in (exc.headers or {}).items()}
    return JSONResponse(body, status_code=status, media_type=PROBLEM_MEDIA_TYPE, headers=headers or None)


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:  # noqa: D401
    errors = [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")}
        for e in exc.errors()
    ]
    return problem_response(problem(422, "Invalid Request", "Request validation failed", "REQUEST_INVALID", errors=errors))


async def handle_submission_error(request: Request, exc: SubmissionValidationError) -> JSONResponse:
    return problem_response(
        problem(
            422,
            "Submission rejected",
            str(exc),
            "SUBMISSION_INVALID",
            missing=exc.missing,
            unknown=exc.unknown,
        )
    )


async def handle_in_flight(request: Request, exc: RequestInFlightError) -> JSONResponse:
    return problem_response(problem(409, "Conflict", str(exc), "REQUEST_IN_FLIGHT"))


async def handle_ai_gateway_error(request: Request, exc: AiGatewayError) -> JSONResponse:
    return problem_response(problem(502, "AI service failure", str(exc), exc.code))


async def handle_storage_corrupt(request: Request, exc: StoredDataCorruptError) -> JSONResponse:
    logger.error("storage_corrupt key=%s", exc.key)
    return problem_response(problem(500, "Storage corrupt", str(exc), "STORAGE_CORRUPT"))


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:  # noqa: D401
    logger.error("unexpected_error path=%s", request.url.path, exc_info=exc)
    return problem_response(problem(500, "Internal Server Error"))


def register_problem_handlers(app: FastAPI) -> None:
    app.add_exception_handler(HTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(SubmissionValidationError, handle_submission_error)
    app.add_exception_handler(RequestInFlightError, handle_in_flight)
    app.add_exception_handler(AiGatewayError, handle_ai_gateway_error)
    app.add_exception_handler(StoredDataCorruptError, handle_storage_corrupt)
    app.add_exception_handler(Exception, handle_unexpected_error)


__all__ = [
    "PROBLEM_MEDIA_TYPE",
    "problem",
    "problem_response",
    "form_not_found",
    "register_problem_handlers",
]

"""Error taxonomy for the survey service and the HTTP mapping for it.

Per-entry problems in a submission are never errors (they are filtered out
during normalization); only whole-payload and store failures surface here.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class SurveyError(Exception):
    status_code = 500
    public_message = "Request failed."

    def __init__(self, detail: str = "", public_message: str | None = None):
        super().__init__(detail)
        if public_message is not None:
            self.public_message = public_message


class InvalidSubmission(SurveyError):
    """The submitted payload is not a non-empty list of answers."""
    status_code = 400
    public_message = "Responses must be a non-empty array."


class PersistenceFailure(SurveyError):
    """A store or transaction failure; nothing from the operation was committed."""
    status_code = 500
    public_message = "Failed to save responses."


class NotAuthenticated(SurveyError):
    status_code = 401
    public_message = "Not authenticated."


async def survey_error_handler(request: Request, exc: SurveyError) -> JSONResponse:
    # Internal detail stays in the log, never in the body.
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.public_message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SurveyError, survey_error_handler)

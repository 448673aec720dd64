"""Domain exceptions raised by the services and their HTTP mapping."""

from __future__ import annotations

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class FanFlowError(Exception):
    """Base exception for FanFlow services."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(FanFlowError):
    """Malformed or missing input that the request schema did not catch."""

    status_code = status.HTTP_400_BAD_REQUEST


class AuthorizationError(FanFlowError):
    """Caller lacks the role required for the operation."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(FanFlowError):
    """Referenced post or user does not exist."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, kind: str, identifier: object):
        super().__init__(f"{kind} not found")
        self.kind = kind
        self.identifier = identifier


class ConflictError(FanFlowError):
    """Request conflicts with the current state."""

    status_code = status.HTTP_409_CONFLICT


async def fanflow_exception_handler(request: Request, exc: FanFlowError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

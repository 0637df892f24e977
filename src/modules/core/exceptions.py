"""Global DRF exception handler.

Domain exceptions are translated by the views that call the services;
this handler covers everything else that escapes a view: framework errors
(authentication, permissions, parsing, throttling), Pydantic DTO
validation failures and unexpected exceptions.  Every response leaves in
the standard error envelope.
"""

from __future__ import annotations

from typing import Any, Dict, List

import structlog
from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from pydantic import ValidationError as PydanticValidationError
from rest_framework import exceptions
from rest_framework.views import exception_handler as drf_exception_handler

from modules.core.responses import ErrorCode, error_response, errors

logger = structlog.get_logger(__name__)

_PASSTHROUGH_HEADERS = ("WWW-Authenticate", "Retry-After", "Allow")


def pydantic_error_details(exc: PydanticValidationError) -> List[Dict[str, Any]]:
    """Flatten Pydantic errors into ``[{"field", "message"}]``."""
    return [
        {
            "field": ".".join(str(part) for part in err["loc"]) or "__root__",
            "message": err["msg"],
        }
        for err in exc.errors(include_url=False, include_context=False)
    ]


def _code_for(exc: exceptions.APIException) -> str:
    if isinstance(exc, (exceptions.NotAuthenticated, exceptions.AuthenticationFailed)):
        return ErrorCode.UNAUTHORIZED
    if isinstance(exc, exceptions.PermissionDenied):
        return ErrorCode.FORBIDDEN
    if isinstance(exc, exceptions.NotFound):
        return ErrorCode.NOT_FOUND
    if isinstance(exc, exceptions.Throttled):
        return ErrorCode.RATE_LIMITED
    if isinstance(exc, exceptions.MethodNotAllowed):
        return ErrorCode.METHOD_NOT_ALLOWED
    return ErrorCode.BAD_REQUEST


def _message_for(exc: exceptions.APIException) -> str:
    detail = exc.detail
    if isinstance(detail, dict):
        detail = detail.get("detail", exc.default_detail)
    if isinstance(detail, list):
        detail = detail[0] if detail else exc.default_detail
    return str(detail)


def api_exception_handler(exc: Exception, context: Dict[str, Any]):
    if isinstance(exc, PydanticValidationError):
        return errors.validation_error(pydantic_error_details(exc))

    if isinstance(exc, exceptions.ValidationError):
        return errors.validation_error(exc.detail)

    if isinstance(exc, Http404):
        exc = exceptions.NotFound()
    elif isinstance(exc, DjangoPermissionDenied):
        exc = exceptions.PermissionDenied()

    response = drf_exception_handler(exc, context)
    if response is None:
        view = context.get("view")
        logger.exception(
            "unhandled_exception",
            view=type(view).__name__ if view else None,
            error=str(exc),
        )
        return errors.server_error("An unexpected error occurred")

    headers = {
        name: response[name] for name in _PASSTHROUGH_HEADERS if name in response
    }
    return error_response(
        _code_for(exc),
        _message_for(exc),
        status=response.status_code,
        headers=headers or None,
    )

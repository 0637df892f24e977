"""JSON envelope helpers shared by every admin view.

Success:  ``{"success": true, "data": ...[, "meta": {...}]}``
Failure:  ``{"success": false, "error": {"code", "message"[, "details"]}}``
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from rest_framework import status as http
from rest_framework.response import Response


class ErrorCode:
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    BAD_REQUEST = "BAD_REQUEST"
    CONFLICT = "CONFLICT"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    RATE_LIMITED = "RATE_LIMITED"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    SERVER_ERROR = "SERVER_ERROR"


def success(data: Any, status: int = http.HTTP_200_OK) -> Response:
    return Response({"success": True, "data": data}, status=status)


def success_with_meta(
    data: Any, meta: Dict[str, Any], status: int = http.HTTP_200_OK
) -> Response:
    return Response({"success": True, "data": data, "meta": meta}, status=status)


def error_body(code: str, message: str, details: Any = None) -> Dict[str, Any]:
    error: Dict[str, Any] = {"code": code, "message": message}
    if details is not None:
        error["details"] = details
    return {"success": False, "error": error}


def error_response(
    code: str,
    message: str,
    status: int = http.HTTP_400_BAD_REQUEST,
    details: Any = None,
    headers: Optional[Dict[str, str]] = None,
) -> Response:
    return Response(error_body(code, message, details), status=status, headers=headers)


class errors:
    """Shorthands for the error taxonomy."""

    @staticmethod
    def unauthorized(message: str = "Unauthorized") -> Response:
        return error_response(
            ErrorCode.UNAUTHORIZED, message, http.HTTP_401_UNAUTHORIZED
        )

    @staticmethod
    def forbidden(message: str = "Forbidden") -> Response:
        return error_response(ErrorCode.FORBIDDEN, message, http.HTTP_403_FORBIDDEN)

    @staticmethod
    def not_found(resource: str = "Resource") -> Response:
        return error_response(
            ErrorCode.NOT_FOUND, f"{resource} not found", http.HTTP_404_NOT_FOUND
        )

    @staticmethod
    def bad_request(message: str, details: Any = None) -> Response:
        return error_response(
            ErrorCode.BAD_REQUEST, message, http.HTTP_400_BAD_REQUEST, details
        )

    @staticmethod
    def conflict(message: str) -> Response:
        return error_response(ErrorCode.CONFLICT, message, http.HTTP_409_CONFLICT)

    @staticmethod
    def validation_error(details: Any) -> Response:
        return error_response(
            ErrorCode.VALIDATION_ERROR,
            "Validation failed",
            http.HTTP_422_UNPROCESSABLE_ENTITY,
            details,
        )

    @staticmethod
    def server_error(message: str = "Internal server error") -> Response:
        return error_response(
            ErrorCode.SERVER_ERROR, message, http.HTTP_500_INTERNAL_SERVER_ERROR
        )

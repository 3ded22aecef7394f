"""DRF exception handler producing the standard error body.

Every error response has the shape::

    {"type": "client_error", "errors": [{"code": ..., "detail": ..., "attr": ...}]}

Domain errors are mapped by their ``kind``; DRF's own exceptions
(validation, authentication, throttling) are reshaped into the same body.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from modules.core.exceptions import DomainError, ErrorKind

logger = structlog.get_logger(__name__)

KIND_STATUS = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorKind.FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _body(error_type: str, errors: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {"type": error_type, "errors": errors}


def _flatten(detail: Any, attr: Optional[str] = None) -> List[Dict[str, Any]]:
    if isinstance(detail, dict):
        errors: List[Dict[str, Any]] = []
        for key, value in detail.items():
            nested = key if attr is None else f"{attr}.{key}"
            errors.extend(_flatten(value, None if key == "detail" else nested))
        return errors
    if isinstance(detail, list):
        errors = []
        for item in detail:
            errors.extend(_flatten(item, attr))
        return errors
    return [
        {
            "code": getattr(detail, "code", "error"),
            "detail": str(detail),
            "attr": attr,
        }
    ]


def api_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    if isinstance(exc, DomainError):
        http_status = KIND_STATUS[exc.kind]
        error_type = (
            "server_error" if exc.kind == ErrorKind.FAILURE else "client_error"
        )
        logger.info(
            "api.domain_error",
            code=exc.code,
            kind=str(exc.kind),
            status_code=http_status,
        )
        return Response(
            _body(error_type, [{"code": exc.code, "detail": exc.message, "attr": None}]),
            status=http_status,
        )

    if isinstance(exc, PydanticValidationError):
        errors = [
            {
                "code": "invalid",
                "detail": error["msg"],
                "attr": ".".join(str(part) for part in error["loc"]) or None,
            }
            for error in exc.errors()
        ]
        return Response(
            _body("validation_error", errors), status=status.HTTP_400_BAD_REQUEST
        )

    response = drf_exception_handler(exc, context)
    if response is None:
        return None

    error_type = "client_error"
    if response.status_code == status.HTTP_400_BAD_REQUEST:
        error_type = "validation_error"
    elif response.status_code >= 500:
        error_type = "server_error"

    detail = exc.detail if isinstance(exc, APIException) else response.data
    response.data = _body(error_type, _flatten(detail))
    return response

"""Shared domain exceptions and the standardized API error format.

Every business or storage failure raised by the service layer derives
from ``DomainError``.  Each carries a machine-readable ``code`` and
exposes its structured cause through ``as_errors()``; ``http_status`` is
the response status the DRF exception handler uses for it.

All error responses share one body::

    {"type": "client_error", "errors": [{"code": ..., "detail": ..., "attr": ...}]}
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler


class DomainError(Exception):
    """Base class for errors raised by the service layer."""

    code = "domain_error"
    http_status = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    def as_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "detail": self.detail, "attr": None}

    def as_errors(self) -> List[Dict[str, Any]]:
        return [self.as_dict()]


class DomainValidationError(DomainError):
    """The request is malformed (empty items, duplicate products, ...)."""

    code = "validation_error"

    def __init__(
        self,
        detail: str,
        attr: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
    ) -> None:
        super().__init__(detail)
        self.attr = attr
        self.errors = errors or [
            {"code": self.code, "detail": detail, "attr": attr}
        ]

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError) -> DomainValidationError:
        errors = [
            {
                "code": cls.code,
                "detail": error["msg"],
                "attr": ".".join(str(part) for part in error["loc"]) or None,
            }
            for error in exc.errors()
        ]
        first = errors[0] if errors else {"detail": str(exc), "attr": None}
        return cls(first["detail"], attr=first["attr"], errors=errors)

    def as_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "detail": self.detail, "attr": self.attr}

    def as_errors(self) -> List[Dict[str, Any]]:
        return list(self.errors)


class NotFound(DomainError):
    """A referenced entity does not exist."""

    code = "not_found"
    http_status = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, id: Any) -> None:
        super().__init__(f"{entity.capitalize()} {id} not found.")
        self.entity = entity
        self.id = id

    def as_dict(self) -> Dict[str, Any]:
        data = super().as_dict()
        data.update(entity=self.entity, id=self.id)
        return data


class StorageError(DomainError):
    """The transaction or the storage transport failed.

    The attempt has been rolled back in full; no retry is performed.
    """

    code = "storage_error"
    http_status = status.HTTP_503_SERVICE_UNAVAILABLE


# ---------------------------------------------------------------------------
# DRF integration
# ---------------------------------------------------------------------------


def error_body(errors: List[Dict[str, Any]], server: bool = False) -> Dict[str, Any]:
    return {
        "type": "server_error" if server else "client_error",
        "errors": errors,
    }


def _flatten_drf_errors(detail: Any, attr: Optional[str] = None) -> List[Dict[str, Any]]:
    """Flatten nested DRF ``ErrorDetail`` structures into a list of errors."""
    if isinstance(detail, dict):
        flat = []
        for key, value in detail.items():
            name = key if attr is None else f"{attr}.{key}"
            if key == "non_field_errors":
                name = attr
            flat.extend(_flatten_drf_errors(value, name))
        return flat
    if isinstance(detail, list):
        flat = []
        for index, value in enumerate(detail):
            # Lists of dicts come from nested ``many=True`` serializers.
            name = f"{attr}.{index}" if isinstance(value, dict) and attr else attr
            flat.extend(_flatten_drf_errors(value, name))
        return flat
    return [
        {
            "code": getattr(detail, "code", "invalid"),
            "detail": str(detail),
            "attr": attr,
        }
    ]


def exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    """DRF ``EXCEPTION_HANDLER`` producing the standardized error body.

    Domain errors map to their ``http_status``; DRF errors keep the
    status DRF assigns.  Anything else is left to Django (500).
    """
    if isinstance(exc, DomainError):
        return Response(
            error_body(exc.as_errors(), server=exc.http_status >= 500),
            status=exc.http_status,
        )

    response = drf_exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, DRFValidationError):
        errors = _flatten_drf_errors(exc.detail)
    else:
        errors = [
            {
                "code": getattr(exc, "default_code", "error"),
                "detail": str(getattr(exc, "detail", exc)),
                "attr": None,
            }
        ]

    response.data = error_body(errors, server=response.status_code >= 500)
    return response

"""
core/exceptions.py
------------------
Domain error taxonomy.

Services raise these; main.py maps them to HTTP responses through global
exception handlers, so route functions never build error responses by hand.

  InvalidTenantError  → 400  missing / malformed tenant context (caller bug)
  NotFoundError       → 404  record absent OR owned by another tenant
  ConflictError       → 409  compound uniqueness violated
  ValidationError     → 422  payload fails the entity schema
  UnscopedQueryError  → 500  a query reached the ORM without a tenant clause

None of these are retried by the service layer.
"""

from typing import Any, Dict, List, Optional

FieldErrors = List[Dict[str, Any]]


class AppError(Exception):
    status_code: int = 500

    def __init__(self, message: str, errors: Optional[FieldErrors] = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors: FieldErrors = list(errors or [])

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class InvalidTenantError(AppError):
    status_code = 400


class NotFoundError(AppError):
    status_code = 404


class ConflictError(AppError):
    status_code = 409


class ValidationError(AppError):
    status_code = 422


class UnscopedQueryError(AppError):
    """Programming error: never surfaced to clients with its details."""


def field_errors_from_pydantic(errors: List[Dict[str, Any]]) -> FieldErrors:
    """Flatten pydantic's error list into {field, message, type} entries."""
    flattened = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        flattened.append(
            {
                "field": ".".join(loc) or None,
                "message": err.get("msg", "Invalid value"),
                "type": err.get("type", "value_error"),
            }
        )
    return flattened

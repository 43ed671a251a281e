"""NestEgg exception hierarchy.

Every error carries a machine-readable ``kind`` that the API layer maps to an
HTTP status and returns alongside the human-readable message.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Literal

from pydantic import ValidationError

FieldErrorReason = Literal["missing_field", "invalid_enum", "out_of_range", "invalid_type"]

# pydantic error types grouped by the reason we report to callers
_MISSING_TYPES = {"missing"}
_ENUM_TYPES = {"enum", "literal_error"}
_RANGE_TYPES = {
    "greater_than",
    "greater_than_equal",
    "less_than",
    "less_than_equal",
    "string_too_short",
    "value_error",
}


@dataclass(frozen=True)
class FieldError:
    """A single rejected input field."""

    field: str
    reason: FieldErrorReason
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "reason": self.reason, "message": self.message}


class NestEggError(Exception):
    """Base exception for all NestEgg errors."""

    kind = "internal_error"


class NotFoundError(NestEggError):
    """No record exists for the requested user id."""

    kind = "not_found"

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__(f"No contribution data found for user {user_id!r}")


class InvalidInputError(NestEggError):
    """Input was missing, malformed, or out of range."""

    kind = "invalid_input"

    def __init__(self, errors: Iterable[FieldError], message: str | None = None) -> None:
        self.errors = list(errors)
        if message is None:
            message = "; ".join(f"{e.field}: {e.message}" for e in self.errors) or "Invalid input"
        super().__init__(message)

    @classmethod
    def from_validation_error(cls, exc: ValidationError) -> "InvalidInputError":
        return cls(field_errors(exc.errors()))


class InternalError(NestEggError):
    """Unexpected failure while handling a request."""

    kind = "internal_error"


class StoreError(InternalError):
    """Policy store backend operation failed."""


def _field_name(loc: tuple[Any, ...]) -> str:
    # FastAPI prefixes request errors with the source ("body", "query", "path")
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return ".".join(parts)


def _reason(error_type: str) -> FieldErrorReason:
    if error_type in _MISSING_TYPES:
        return "missing_field"
    if error_type in _ENUM_TYPES:
        return "invalid_enum"
    if error_type in _RANGE_TYPES:
        return "out_of_range"
    return "invalid_type"


def field_errors(errors: Iterable[dict[str, Any]]) -> list[FieldError]:
    """Translate pydantic error dicts into FieldErrors."""
    out: list[FieldError] = []
    for err in errors:
        message = str(err.get("msg", "invalid value"))
        # "Value error, <message>" -> "<message>"
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        out.append(
            FieldError(
                field=_field_name(tuple(err.get("loc", ()))),
                reason=_reason(str(err.get("type", ""))),
                message=message,
            )
        )
    return out

"""
Card data errors.

Every public constructor in card_schema either returns a valid, immutable
object or raises one of these. Pydantic's ValidationError is translated at
the boundary so callers only deal with one taxonomy:

- MissingFieldError: a required payload field is absent
- InvalidEnumValueError: a discriminant or enum value is outside its closed set
- InvalidFormatError: a string does not match its mini-language, or a value
  has the wrong type
- InvariantViolationError: a cross-field or numeric rule does not hold
- CardRuleValidationError: one or more rules in a rule list are invalid
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError
from pydantic.alias_generators import to_snake
from pydantic_core import PydanticCustomError


class CardDataError(ValueError):
    """Base class for all card data validation errors."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: list[dict[str, Any]] | None = None,
    ):
        self.field = field
        self.details = details or []
        super().__init__(message)


class MissingFieldError(CardDataError):
    """A field required by the discriminant is missing."""


class InvalidEnumValueError(CardDataError):
    """A value is not a member of its closed enumeration."""


class InvalidFormatError(CardDataError):
    """A value does not have the expected format or type."""


class InvariantViolationError(CardDataError):
    """A construction-time invariant does not hold."""


class CardRuleValidationError(CardDataError):
    """Raised when a rule list fails validation. Lists every offending rule."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(
            f"Card rule validation failed with {len(errors)} error(s): " + "; ".join(errors),
            field="card_rules",
        )


# Custom pydantic error types raised from validators
MISSING_VALUE = "missing_value"
INVALID_ENUM_VALUE = "invalid_enum_value"
INVALID_FORMAT = "invalid_format"
INVARIANT_VIOLATION = "invariant_violation"


def missing_error(message: str) -> PydanticCustomError:
    """Build a pydantic error that translates to MissingFieldError."""
    return PydanticCustomError(MISSING_VALUE, message)


def invariant_error(message: str) -> PydanticCustomError:
    """Build a pydantic error that translates to InvariantViolationError."""
    return PydanticCustomError(INVARIANT_VIOLATION, message)


def format_error(message: str) -> PydanticCustomError:
    """Build a pydantic error that translates to InvalidFormatError."""
    return PydanticCustomError(INVALID_FORMAT, message)


def enum_error(message: str) -> PydanticCustomError:
    """Build a pydantic error that translates to InvalidEnumValueError."""
    return PydanticCustomError(INVALID_ENUM_VALUE, message)


_ERROR_CLASSES: dict[str, type[CardDataError]] = {
    # Missing
    "missing": MissingFieldError,
    "union_tag_not_found": MissingFieldError,
    MISSING_VALUE: MissingFieldError,
    # Enum
    "enum": InvalidEnumValueError,
    "literal_error": InvalidEnumValueError,
    "union_tag_invalid": InvalidEnumValueError,
    INVALID_ENUM_VALUE: InvalidEnumValueError,
    # Format
    "string_pattern_mismatch": InvalidFormatError,
    INVALID_FORMAT: InvalidFormatError,
    # Invariants
    INVARIANT_VIOLATION: InvariantViolationError,
    "value_error": InvariantViolationError,
    "assertion_error": InvariantViolationError,
    "extra_forbidden": InvariantViolationError,
    "greater_than": InvariantViolationError,
    "greater_than_equal": InvariantViolationError,
    "less_than": InvariantViolationError,
    "less_than_equal": InvariantViolationError,
    "too_short": InvariantViolationError,
    "string_too_short": InvariantViolationError,
}


_ERROR_CODES: tuple[tuple[type[CardDataError], str], ...] = (
    (MissingFieldError, MISSING_VALUE),
    (InvalidEnumValueError, INVALID_ENUM_VALUE),
    (InvalidFormatError, INVALID_FORMAT),
)


def _format_loc(loc: tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc)


def _join(prefix: str, path: str) -> str:
    return ".".join(part for part in (prefix, path) if part)


def _field_name(path: str) -> str | None:
    """Python name of the offending field: the last non-index part of a dotted path."""
    names = [part for part in path.split(".") if part and not part.isdigit()]
    return to_snake(names[-1]) if names else None


def _error_code(error: CardDataError) -> str:
    for error_class, code in _ERROR_CODES:
        if isinstance(error, error_class):
            return code
    return INVARIANT_VIOLATION


def _flatten(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    One detail per leaf error.

    Nested models raise CardDataError from their own constructor, which
    pydantic reports as a `value_error` wrapping it. Those are unwrapped so
    the inner error's kind and field survive, prefixed with the outer path.
    """
    details = []
    for err in errors:
        path = _format_loc(err["loc"])
        inner = (err.get("ctx") or {}).get("error")
        if isinstance(inner, CardDataError):
            if inner.details:
                details.extend(
                    dict(detail, field=_join(path, detail["field"])) for detail in inner.details
                )
            else:
                details.append({
                    "field": _join(path, inner.field or ""),
                    "type": _error_code(inner),
                    "message": str(inner),
                })
            continue
        details.append({"field": path, "type": err["type"], "message": err["msg"]})
    return details


def translate_validation_error(exc: ValidationError, model_name: str) -> CardDataError:
    """
    Convert a pydantic ValidationError into the card data taxonomy.

    The class is chosen from the first reported error and `field` names the
    field it concerns by its Python name. Every error is kept in `details`
    (with its full dotted wire path) and in the message.
    Type and parsing errors not listed above count as format errors.
    """
    details = _flatten(exc.errors())
    first = details[0]
    error_class = _ERROR_CLASSES.get(first["type"], InvalidFormatError)
    summary = "; ".join(
        f"{detail['field'] or '<root>'}: {detail['message']}" for detail in details
    )
    return error_class(
        f"Invalid {model_name}: {summary}",
        field=_field_name(first["field"]),
        details=details,
    )

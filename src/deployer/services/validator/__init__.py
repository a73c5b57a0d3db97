from .core import (
    FIELD_VALIDATORS,
    NOT_A_VALID_URL,
    NOT_RESPONDING,
    is_url,
    returns_200_response,
    validate_field,
    validate_url,
)

__all__ = [
    "FIELD_VALIDATORS",
    "NOT_A_VALID_URL",
    "NOT_RESPONDING",
    "is_url",
    "returns_200_response",
    "validate_field",
    "validate_url",
]

"""
Validation result models for demographic validation.

This module provides data structures for the failures accumulated while
validating an authentication request.
"""
from dataclasses import dataclass, field
from typing import Optional, List


@dataclass(frozen=True)
class FieldValidationError:
    """A single validation failure."""

    field: Optional[str]
    """Field identifier ("pii") or None for object-level rejections."""

    code: str
    """Fixed error code."""

    message: str
    """Formatted message naming the offending attribute."""

    def to_dict(self) -> dict:
        return {"field": self.field, "errorCode": self.code, "message": self.message}


@dataclass
class ValidationResult:
    """Ordered collection of validation failures.

    Every applicable rule contributes; an empty collection means the
    request passed.
    """

    errors: List[FieldValidationError] = field(default_factory=list)

    def add(self, field_name: Optional[str], code: str, message: str) -> None:
        self.errors.append(FieldValidationError(field_name, code, message))

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def codes(self) -> List[str]:
        return [error.code for error in self.errors]

    def __len__(self) -> int:
        return len(self.errors)

"""
Field-level validation result.

Validation routines build and return a ValidationResult instead of mutating
shared request state. Errors accumulate per field; callers decide when to
stop and raise.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ValidationResult:
    errors: dict[str, list[str]] = field(default_factory=dict)

    def add(self, field_name: str, message: str) -> "ValidationResult":
        self.errors.setdefault(field_name, []).append(message)
        return self

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        for field_name, messages in other.errors.items():
            for message in messages:
                self.add(field_name, message)
        return self

    def has_error(self, field_name: str) -> bool:
        return bool(self.errors.get(field_name))

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def as_dict(self) -> dict[str, list[str]]:
        return {name: list(messages) for name, messages in self.errors.items()}

    def raise_if_invalid(self, entity: str, candidate: Any = None) -> None:
        """Raise ValidationFailedError carrying every accumulated error."""
        if not self.is_valid:
            from eventdesk.core.errors import ValidationFailedError

            raise ValidationFailedError(entity=entity, errors=self, candidate=candidate)


def check_positive(result: ValidationResult, field_name: str, value: int | None, message: str) -> bool:
    """Add `message` under `field_name` unless value is a positive integer."""
    if value is None or value <= 0:
        result.add(field_name, message)
        return False
    return True

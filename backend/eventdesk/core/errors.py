"""Domain errors raised by services and mapped to HTTP responses by the API layer."""

from enum import Enum
from typing import Any

from eventdesk.core.validation import ValidationResult


class ErrorCode(Enum):
    """Domain error codes."""

    MALFORMED_INPUT = "MALFORMED_INPUT"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    NOT_FOUND = "NOT_FOUND"
    DEPENDENCY_CONFLICT = "DEPENDENCY_CONFLICT"
    CONCURRENCY_CONFLICT = "CONCURRENCY_CONFLICT"


class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode = ErrorCode.VALIDATION_FAILED

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class MalformedInputError(DomainError):
    """Raised for a missing or non-positive key before any storage access."""

    code = ErrorCode.MALFORMED_INPUT

    def __init__(self, entity: str, message: str) -> None:
        super().__init__(message)
        self.entity = entity


class ValidationFailedError(DomainError):
    """Raised when one or more field rules fail.

    Carries every accumulated violation and the candidate that was rejected,
    so a caller can re-display the input.
    """

    code = ErrorCode.VALIDATION_FAILED

    def __init__(self, entity: str, errors: ValidationResult, candidate: Any = None) -> None:
        super().__init__(f"{entity.capitalize()} validation failed")
        self.entity = entity
        self.errors = errors
        self.candidate = candidate


class DependencyConflictError(DomainError):
    """Raised when a delete is blocked by tickets that still reference the row."""

    code = ErrorCode.DEPENDENCY_CONFLICT

    def __init__(self, entity: str, key: int, errors: ValidationResult) -> None:
        super().__init__(f"Cannot delete {entity} {key} while tickets reference it")
        self.entity = entity
        self.key = key
        self.errors = errors


class NotFoundError(DomainError):
    """Raised when a valid key has no matching row or route and body keys differ."""

    code = ErrorCode.NOT_FOUND

    def __init__(self, entity: str, key: Any) -> None:
        super().__init__(f"{entity.capitalize()} {key} not found")
        self.entity = entity
        self.key = key


class ConcurrencyConflictError(DomainError):
    """Raised when a commit fails because the row changed since it was read.

    Not retried: the caller gets the failure as-is.
    """

    code = ErrorCode.CONCURRENCY_CONFLICT

    def __init__(self, entity: str, key: Any) -> None:
        super().__init__(f"{entity.capitalize()} {key} was modified concurrently")
        self.entity = entity
        self.key = key

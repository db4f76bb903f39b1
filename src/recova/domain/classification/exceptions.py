"""Classification domain exceptions.

These exceptions inherit from the shared DomainException base class. Only
rule validation surfaces them to callers; the engine itself converts
failures into a default classification.
"""

from typing import Any, Optional
from uuid import UUID

from recova.domain.shared.exceptions import (
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)


class ClassificationError(DomainException):
    """Base exception for classification domain errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CLASSIFICATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class InvalidRuleError(ValidationError):
    """Raised when a classification rule definition is inconsistent."""

    def __init__(self, message: str, rule_name: Optional[str] = None) -> None:
        details = {"rule_name": rule_name} if rule_name else None
        super().__init__(
            message=message,
            code=ErrorCode.INVALID_RULE,
            details=details,
        )


class RuleNotFoundError(EntityNotFoundError):
    """Raised when a classification rule cannot be found."""

    def __init__(self, rule_id: UUID) -> None:
        super().__init__(
            message=f"Classification rule not found: {rule_id}",
            code=ErrorCode.RULE_NOT_FOUND,
            details={"rule_id": str(rule_id)},
        )


class RuleSourceUnavailableError(ClassificationError):
    """Raised when candidate rules cannot be loaded from the rule store."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            message=f"Classification rules could not be loaded: {reason}",
            code=ErrorCode.RULE_SOURCE_UNAVAILABLE,
            details={"reason": reason},
        )

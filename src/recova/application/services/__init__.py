"""Application layer services."""

from recova.application.services.recoverability_service import (
    RecoverabilityService,
)

__all__ = [
    "RecoverabilityService",
]

"""SQLAlchemy repository implementations organized by bounded context."""

from recova.infrastructure.persistence.sqlalchemy.repositories.classification import (
    ClassificationRuleRepositorySQLAlchemy,
)

__all__ = [
    "ClassificationRuleRepositorySQLAlchemy",
]

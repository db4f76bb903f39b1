"""SQLAlchemy models for persistence layer."""

from recova.infrastructure.persistence.sqlalchemy.models.base import Base
from recova.infrastructure.persistence.sqlalchemy.models.classification import (
    ClassificationRuleModel,
)

__all__ = [
    "Base",
    "ClassificationRuleModel",
]

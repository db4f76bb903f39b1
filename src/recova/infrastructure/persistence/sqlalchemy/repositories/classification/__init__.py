"""Classification domain repositories."""

from recova.infrastructure.persistence.sqlalchemy.repositories.classification.classification_rule_repository import (  # NOQA: E501
    ClassificationRuleRepositorySQLAlchemy,
)

__all__ = [
    "ClassificationRuleRepositorySQLAlchemy",
]

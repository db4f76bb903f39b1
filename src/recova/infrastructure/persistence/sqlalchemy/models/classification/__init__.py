"""Classification domain SQLAlchemy models."""

from recova.infrastructure.persistence.sqlalchemy.models.classification.classification_rule_model import (  # NOQA: E501
    ClassificationRuleModel,
)

__all__ = [
    "ClassificationRuleModel",
]

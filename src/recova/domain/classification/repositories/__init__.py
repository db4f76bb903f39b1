"""Classification domain repository interfaces."""

from recova.domain.classification.repositories.classification_rule_repository import (  # NOQA: E501
    TOP_PERFORMING_MIN_MATCHES,
    ClassificationRuleRepository,
)

__all__ = [
    "TOP_PERFORMING_MIN_MATCHES",
    "ClassificationRuleRepository",
]

"""Classification domain value objects."""

from recova.domain.classification.value_objects.classification_result import (
    Alternative,
    ClassificationResult,
    EngineStatistics,
    RuleMatch,
)
from recova.domain.classification.value_objects.classification_rule import (
    ClassificationRule,
    split_keywords,
)
from recova.domain.classification.value_objects.recoverable_category import (
    DEFAULT_CATEGORY,
    VATRecoverableCategory,
)
from recova.domain.classification.value_objects.review_policy import ReviewPolicy
from recova.domain.classification.value_objects.rule_scope import (
    RuleScope,
    ScopeContext,
)

__all__ = [
    # Categories
    "DEFAULT_CATEGORY",
    "VATRecoverableCategory",
    # Rules
    "ClassificationRule",
    "ReviewPolicy",
    "RuleScope",
    "ScopeContext",
    "split_keywords",
    # Results
    "Alternative",
    "ClassificationResult",
    "EngineStatistics",
    "RuleMatch",
]

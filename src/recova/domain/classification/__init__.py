"""Classification domain: rules, scoring and feedback."""

from recova.domain.classification.exceptions import (
    ClassificationError,
    InvalidRuleError,
    RuleNotFoundError,
    RuleSourceUnavailableError,
)
from recova.domain.classification.repositories import ClassificationRuleRepository
from recova.domain.classification.services import (
    ClassificationEngine,
    FeedbackRecorder,
    PatternCache,
    PatternField,
    RuleScorer,
    TextNormalizer,
)
from recova.domain.classification.value_objects import (
    DEFAULT_CATEGORY,
    Alternative,
    ClassificationResult,
    ClassificationRule,
    EngineStatistics,
    ReviewPolicy,
    RuleMatch,
    RuleScope,
    ScopeContext,
    VATRecoverableCategory,
)

__all__ = [
    # Exceptions
    "ClassificationError",
    "InvalidRuleError",
    "RuleNotFoundError",
    "RuleSourceUnavailableError",
    # Repositories
    "ClassificationRuleRepository",
    # Services
    "ClassificationEngine",
    "FeedbackRecorder",
    "PatternCache",
    "PatternField",
    "RuleScorer",
    "TextNormalizer",
    # Value Objects
    "DEFAULT_CATEGORY",
    "Alternative",
    "ClassificationResult",
    "ClassificationRule",
    "EngineStatistics",
    "ReviewPolicy",
    "RuleMatch",
    "RuleScope",
    "ScopeContext",
    "VATRecoverableCategory",
]

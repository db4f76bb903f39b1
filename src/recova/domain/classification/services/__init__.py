"""Classification domain services."""

from recova.domain.classification.services.classification_engine import (
    ClassificationEngine,
)
from recova.domain.classification.services.feedback_recorder import (
    FeedbackRecorder,
)
from recova.domain.classification.services.pattern_cache import (
    PatternCache,
    PatternField,
)
from recova.domain.classification.services.rule_scorer import RuleScorer
from recova.domain.classification.services.text_normalizer import (
    SYNONYMS,
    TextNormalizer,
)

__all__ = [
    # Engine
    "ClassificationEngine",
    "FeedbackRecorder",
    # Building blocks
    "PatternCache",
    "PatternField",
    "RuleScorer",
    "SYNONYMS",
    "TextNormalizer",
]

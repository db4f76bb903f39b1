"""Classification result value objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional
from uuid import UUID

from recova.domain.classification.value_objects.classification_rule import (
    ClassificationRule,
)
from recova.domain.classification.value_objects.recoverable_category import (
    VATRecoverableCategory,
)

MAX_CONFIDENCE_PERCENT = 100


@dataclass
class RuleMatch:
    """Outcome of scoring one rule that satisfied all of its predicates."""

    rule: ClassificationRule
    base_score: int
    priority_bonus: int
    matched_criteria: list[str] = field(default_factory=list)

    @property
    def total_score(self) -> int:
        return self.base_score + self.priority_bonus


@dataclass(frozen=True)
class Alternative:
    """A runner-up category whose score came close to the winner's."""

    category: VATRecoverableCategory
    confidence: int
    reason: Optional[str]
    rule_id: Optional[UUID] = None


@dataclass
class ClassificationResult:
    """Result of classifying one transaction.

    ``confidence`` is the raw additive score of the winning rule and may
    exceed 100; ``confidence_percent`` is the clamped value for display.
    """

    category: VATRecoverableCategory
    confidence: int
    applied_rule: Optional[ClassificationRule]
    reason: str
    alternatives: list[Alternative] = field(default_factory=list)
    matched_criteria: list[str] = field(default_factory=list)
    execution_time_ns: int = 0

    @property
    def is_default(self) -> bool:
        return self.applied_rule is None

    @property
    def applied_rule_id(self) -> Optional[UUID]:
        return self.applied_rule.id if self.applied_rule else None

    @property
    def confidence_percent(self) -> int:
        return max(0, min(self.confidence, MAX_CONFIDENCE_PERCENT))

    @property
    def execution_time_micros(self) -> float:
        return self.execution_time_ns / 1000.0

    @property
    def has_alternatives(self) -> bool:
        return bool(self.alternatives)


@dataclass(frozen=True)
class EngineStatistics:
    """Diagnostics snapshot of the rule set and the engine caches."""

    total_rules: int
    active_rules: int
    total_matches: int
    total_corrections: int
    average_accuracy: float
    rules_needing_review: int
    cache_size: int

    def as_dict(self) -> dict[str, int | float]:
        return {
            "total_rules": self.total_rules,
            "active_rules": self.active_rules,
            "total_matches": self.total_matches,
            "total_corrections": self.total_corrections,
            "average_accuracy": self.average_accuracy,
            "rules_needing_review": self.rules_needing_review,
            "cache_size": self.cache_size,
        }

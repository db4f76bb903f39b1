"""Thresholds that decide when a rule must be reviewed by an operator."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from recova.domain.classification.value_objects.classification_rule import (
        ClassificationRule,
    )


@dataclass(frozen=True)
class ReviewPolicy:
    """A rule needs review once it has been corrected too often, or once it
    has enough history and its accuracy fell below the floor."""

    correction_threshold: int = 5
    min_matches: int = 20
    accuracy_floor: Decimal = Decimal("70")

    def requires_review(self, rule: ClassificationRule) -> bool:
        if rule.correction_count >= self.correction_threshold:
            return True
        return (
            rule.match_count >= self.min_matches
            and rule.accuracy_rate < self.accuracy_floor
        )

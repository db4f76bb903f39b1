"""Scores a single classification rule against a transaction."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from recova.domain.classification.services.pattern_cache import (
    PatternCache,
    PatternField,
)
from recova.domain.classification.services.text_normalizer import TextNormalizer
from recova.domain.classification.value_objects import (
    ClassificationRule,
    RuleMatch,
)

logger = logging.getLogger(__name__)

ACCOUNT_POINTS = 20
DESCRIPTION_POINTS = 30
REQUIRED_KEYWORDS_POINTS = 25
NO_EXCLUDED_KEYWORDS_POINTS = 10
MAX_PRIORITY_BONUS = 100

_HUNDRED = Decimal("100")


class RuleScorer:
    """Decides whether a rule applies and how strongly.

    Every declared predicate must hold; the first failing one disqualifies
    the rule (``evaluate`` returns None, never a zero score). Excluded
    keywords are a veto, not a penalty.

    Scoring:
    - account pattern +20, description pattern +30, required keywords +25,
      no excluded keyword present +10
    - the sum is scaled by the rule's confidence, then by its accuracy rate
    - a priority bonus of ``100 - priority`` is added unscaled
    """

    def __init__(self, normalizer: TextNormalizer, pattern_cache: PatternCache):
        self._normalizer = normalizer
        self._pattern_cache = pattern_cache

    def evaluate(  # NOQA: PLR0911
        self,
        rule: ClassificationRule,
        account_code: Optional[str],
        normalized_description: str,
        expanded_description: str,
    ) -> Optional[RuleMatch]:
        if not rule.has_predicates:
            # Would otherwise match every transaction
            logger.debug("Rule '%s' declares no predicates, skipped", rule.name)
            return None

        score = 0
        criteria: list[str] = []

        if rule.account_pattern:
            pattern = self._pattern_cache.compiled_pattern(
                (rule.id, PatternField.ACCOUNT),
                rule.account_pattern,
            )
            if pattern is None or not pattern.search(account_code or ""):
                return None
            score += ACCOUNT_POINTS
            criteria.append(f"Account matched: {rule.account_pattern}")

        if rule.description_pattern:
            pattern = self._pattern_cache.compiled_pattern(
                (rule.id, PatternField.DESCRIPTION),
                rule.description_pattern,
            )
            if pattern is None or not pattern.search(expanded_description):
                return None
            score += DESCRIPTION_POINTS
            criteria.append("Description matched by pattern")

        required = rule.required_keyword_list
        if required:
            if not self._normalizer.contains_all_keywords(expanded_description, *required):
                return None
            score += REQUIRED_KEYWORDS_POINTS
            criteria.append(f"Required keywords present: {', '.join(required)}")

        excluded = rule.excluded_keyword_list
        if excluded:
            if self._normalizer.contains_excluded_keyword(expanded_description, *excluded):
                return None
            score += NO_EXCLUDED_KEYWORDS_POINTS
            criteria.append("No excluded keyword present")

        base_score = self._scale(score, Decimal(rule.confidence))
        base_score = self._scale(base_score, rule.accuracy_rate)
        priority_bonus = max(0, MAX_PRIORITY_BONUS - rule.priority)

        logger.debug(
            "Rule '%s' matched '%s': base=%d bonus=%d",
            rule.name,
            normalized_description,
            base_score,
            priority_bonus,
        )
        return RuleMatch(
            rule=rule,
            base_score=base_score,
            priority_bonus=priority_bonus,
            matched_criteria=criteria,
        )

    @staticmethod
    def _scale(score: int, percentage: Decimal) -> int:
        return int(Decimal(score) * percentage / _HUNDRED)

"""Records operator corrections against the rule that produced a result."""

from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from recova.domain.classification.repositories import ClassificationRuleRepository
from recova.domain.classification.value_objects import (
    ClassificationRule,
    ReviewPolicy,
    VATRecoverableCategory,
)

logger = logging.getLogger(__name__)


class FeedbackRecorder:
    """Lowers a rule's accuracy each time an operator overrides its verdict.

    Rules crossing the review policy are flagged ``needs_review``; they are
    never disabled automatically.
    """

    def __init__(
        self,
        rule_repository: ClassificationRuleRepository,
        review_policy: Optional[ReviewPolicy] = None,
    ):
        self._rule_repository = rule_repository
        self._review_policy = review_policy or ReviewPolicy()

    async def record_correction(
        self,
        previous_category: VATRecoverableCategory,
        new_category: VATRecoverableCategory,
        rule_id: Optional[UUID],
        transaction_id: Optional[UUID] = None,
    ) -> Optional[ClassificationRule]:
        if rule_id is None:
            # Default category was applied, no rule to penalize
            return None

        try:
            rule = await self._rule_repository.find_by_id(rule_id)
        except Exception as e:
            logger.warning("Could not load rule %s for correction: %s", rule_id, str(e))
            return None

        if rule is None:
            logger.warning("Correction for unknown rule %s ignored", rule_id)
            return None

        rule.record_correction(self._review_policy)
        try:
            await self._rule_repository.save(rule)
        except Exception as e:
            logger.warning(
                "Could not persist correction for rule '%s': %s",
                rule.name,
                str(e),
            )

        logger.warning(
            "Correction recorded - rule: %s - transaction: %s - old: %s - new: %s"
            " - accuracy: %s%%",
            rule.name,
            transaction_id,
            previous_category.display_name,
            new_category.display_name,
            rule.accuracy_rate,
        )
        if rule.needs_review:
            logger.warning(
                "Rule '%s' needs review (accuracy: %s%%, corrections: %d)",
                rule.name,
                rule.accuracy_rate,
                rule.correction_count,
            )
        return rule

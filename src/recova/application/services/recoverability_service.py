"""Application service for VAT recoverability detection.

Wraps the classification engine and the feedback recorder behind the use
cases the accounting side needs: detecting a category, computing the
recoverable share of a VAT amount and recording operator corrections.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from recova.application.dependencies import get_pattern_cache, get_text_normalizer
from recova.domain.classification.exceptions import RuleNotFoundError
from recova.domain.classification.repositories import TOP_PERFORMING_MIN_MATCHES
from recova.domain.classification.services import (
    ClassificationEngine,
    FeedbackRecorder,
)
from recova.domain.classification.value_objects import (
    ClassificationResult,
    ClassificationRule,
    EngineStatistics,
    ScopeContext,
    VATRecoverableCategory,
)
from recova.infrastructure.persistence.sqlalchemy.repositories import (
    ClassificationRuleRepositorySQLAlchemy,
)
from recova_config.settings import Settings, get_settings

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from recova.domain.classification.repositories import (
        ClassificationRuleRepository,
    )

logger = logging.getLogger(__name__)


class RecoverabilityService:
    """Application service for VAT recoverability use cases."""

    def __init__(
        self,
        rule_repository: ClassificationRuleRepository,
        engine: ClassificationEngine,
        feedback_recorder: FeedbackRecorder,
    ):
        self._rule_repo = rule_repository
        self._engine = engine
        self._feedback_recorder = feedback_recorder

    @classmethod
    def from_session(
        cls,
        session: AsyncSession,
        settings: Optional[Settings] = None,
    ) -> RecoverabilityService:
        settings = settings or get_settings()
        review_policy = settings.review_policy()
        rule_repository = ClassificationRuleRepositorySQLAlchemy(session)

        engine = ClassificationEngine(
            rule_repository=rule_repository,
            normalizer=get_text_normalizer(settings.normalization_cache_size),
            pattern_cache=get_pattern_cache(),
            review_policy=review_policy,
            alternative_ratio=settings.alternative_ratio,
            max_alternatives=settings.max_alternatives,
        )
        return cls(
            rule_repository=rule_repository,
            engine=engine,
            feedback_recorder=FeedbackRecorder(rule_repository, review_policy),
        )

    async def detect_with_details(
        self,
        scope: ScopeContext,
        account_code: Optional[str],
        description: Optional[str],
    ) -> ClassificationResult:
        return await self._engine.classify(scope, account_code, description)

    async def detect_category(
        self,
        account_code: Optional[str],
        description: Optional[str],
    ) -> VATRecoverableCategory:
        """Return only the category, using GLOBAL rules."""
        result = await self._engine.classify_global(account_code, description)
        return result.category

    async def recoverable_amount(
        self,
        scope: ScopeContext,
        account_code: Optional[str],
        description: Optional[str],
        total_vat: Optional[Decimal],
    ) -> tuple[VATRecoverableCategory, Decimal]:
        """
        Classify a transaction and compute its recoverable VAT.

        Parameters
        ----------
        scope
            Caller's tenant/cabinet/company context
        account_code
            Ledger account number of the expense
        description
            Free-text transaction label
        total_vat
            VAT amount charged on the transaction

        Returns
        -------
        Detected category and the recoverable amount rounded to cents
        """
        result = await self._engine.classify(scope, account_code, description)
        return result.category, result.category.recoverable_amount(total_vat)

    async def correct_category(  # NOQA: PLR0913
        self,
        account_code: Optional[str],
        description: Optional[str],
        new_category: VATRecoverableCategory,
        scope: Optional[ScopeContext] = None,
        transaction_id: Optional[UUID] = None,
    ) -> VATRecoverableCategory:
        """
        Record an operator override of a detected category.

        The transaction is classified again to find the rule responsible
        for the previous verdict; that rule is then penalized.

        Returns
        -------
        The category that was detected before the correction
        """
        scope = scope or ScopeContext.global_only()
        result = await self._engine.classify(scope, account_code, description)
        previous_category = result.category

        if previous_category == new_category:
            logger.debug(
                "Correction to %s matches the detected category, ignored",
                new_category.name,
            )
            return previous_category

        await self._feedback_recorder.record_correction(
            previous_category=previous_category,
            new_category=new_category,
            rule_id=result.applied_rule_id,
            transaction_id=transaction_id,
        )
        return previous_category

    async def get_rule(self, rule_id: UUID) -> ClassificationRule:
        rule = await self._rule_repo.find_by_id(rule_id)
        if rule is None:
            raise RuleNotFoundError(rule_id)
        return rule

    async def top_performing_rules(
        self,
        min_matches: int = TOP_PERFORMING_MIN_MATCHES,
    ) -> list[ClassificationRule]:
        """Return well-used active rules, most accurate first."""
        return await self._rule_repo.find_top_performing(min_matches)

    async def statistics(self) -> EngineStatistics:
        return await self._engine.statistics()

    def invalidate_rule_cache(self) -> None:
        self._engine.invalidate_cache()

"""SQLAlchemy implementation of ClassificationRuleRepository."""

from __future__ import annotations

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import and_, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from recova.domain.classification.exceptions import RuleSourceUnavailableError
from recova.domain.classification.repositories import (
    TOP_PERFORMING_MIN_MATCHES,
    ClassificationRuleRepository,
)
from recova.domain.classification.value_objects import (
    ClassificationRule,
    ReviewPolicy,
    RuleScope,
    ScopeContext,
)
from recova.domain.shared.time import ensure_tz_aware
from recova.infrastructure.persistence.sqlalchemy.models.classification import (
    ClassificationRuleModel,
)

logger = logging.getLogger(__name__)


class ClassificationRuleRepositorySQLAlchemy(ClassificationRuleRepository):
    """SQLAlchemy implementation of ClassificationRuleRepository.

    Resolves rule visibility in SQL: GLOBAL rules plus the TENANT, CABINET
    and COMPANY rules whose scope id matches the caller's context.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def save(self, rule: ClassificationRule) -> None:
        stmt = select(ClassificationRuleModel).where(
            ClassificationRuleModel.id == rule.id,
        )
        result = await self._session.execute(stmt)
        existing = result.scalar_one_or_none()

        if existing:
            self._copy_to_model(rule, existing)
        else:
            model = ClassificationRuleModel(id=rule.id, created_at=rule.created_at)
            self._copy_to_model(rule, model)
            self._session.add(model)

        await self._session.flush()

    async def find_by_id(self, rule_id: UUID) -> Optional[ClassificationRule]:
        stmt = select(ClassificationRuleModel).where(
            ClassificationRuleModel.id == rule_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return None

        return self._model_to_domain(model)

    async def find_applicable_for_context(
        self,
        scope: ScopeContext,
    ) -> List[ClassificationRule]:
        visibility = [ClassificationRuleModel.scope_type == RuleScope.GLOBAL]
        for scope_type, scope_id in scope.visible_scope_ids().items():
            visibility.append(
                and_(
                    ClassificationRuleModel.scope_type == scope_type,
                    ClassificationRuleModel.scope_id == scope_id,
                ),
            )

        stmt = (
            select(ClassificationRuleModel)
            .where(
                ClassificationRuleModel.is_active == True,  # NOQA: E712
                or_(*visibility),
            )
            .order_by(ClassificationRuleModel.priority.asc())
        )
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            raise RuleSourceUnavailableError(str(e)) from e
        models = result.scalars().all()

        logger.debug("Loaded %d rules for scope %s", len(models), scope)
        return [self._model_to_domain(model) for model in models]

    async def find_all(self) -> List[ClassificationRule]:
        stmt = select(ClassificationRuleModel).order_by(
            ClassificationRuleModel.priority.asc(),
        )
        result = await self._session.execute(stmt)
        models = result.scalars().all()

        return [self._model_to_domain(model) for model in models]

    async def count_active(self) -> int:
        stmt = select(func.count(ClassificationRuleModel.id)).where(
            ClassificationRuleModel.is_active == True,  # NOQA: E712
        )
        result = await self._session.execute(stmt)
        return int(result.scalar_one())

    async def find_needing_review(
        self,
        policy: ReviewPolicy,
    ) -> List[ClassificationRule]:
        stmt = (
            select(ClassificationRuleModel)
            .where(
                ClassificationRuleModel.is_active == True,  # NOQA: E712
                or_(
                    ClassificationRuleModel.needs_review == True,  # NOQA: E712
                    ClassificationRuleModel.correction_count
                    >= policy.correction_threshold,
                    and_(
                        ClassificationRuleModel.match_count >= policy.min_matches,
                        ClassificationRuleModel.accuracy_rate < policy.accuracy_floor,
                    ),
                ),
            )
            .order_by(ClassificationRuleModel.accuracy_rate.asc())
        )
        result = await self._session.execute(stmt)
        models = result.scalars().all()

        return [self._model_to_domain(model) for model in models]

    async def find_top_performing(
        self,
        min_matches: int = TOP_PERFORMING_MIN_MATCHES,
    ) -> List[ClassificationRule]:
        stmt = (
            select(ClassificationRuleModel)
            .where(
                ClassificationRuleModel.is_active == True,  # NOQA: E712
                ClassificationRuleModel.match_count >= min_matches,
            )
            .order_by(
                ClassificationRuleModel.accuracy_rate.desc(),
                ClassificationRuleModel.match_count.desc(),
            )
        )
        result = await self._session.execute(stmt)
        models = result.scalars().all()

        return [self._model_to_domain(model) for model in models]

    async def delete(self, rule_id: UUID) -> bool:
        stmt = select(ClassificationRuleModel).where(
            ClassificationRuleModel.id == rule_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            return False

        await self._session.delete(model)
        await self._session.flush()
        return True

    @staticmethod
    def _copy_to_model(
        rule: ClassificationRule,
        model: ClassificationRuleModel,
    ) -> None:
        model.name = rule.name
        model.description = rule.description
        model.reason = rule.reason
        model.legal_reference = rule.legal_reference
        model.rule_type = rule.rule_type
        model.scope_type = rule.scope
        model.scope_id = rule.scope_id
        model.account_pattern = rule.account_pattern
        model.description_pattern = rule.description_pattern
        model.required_keywords = rule.required_keywords
        model.excluded_keywords = rule.excluded_keywords
        model.category = rule.category
        model.priority = rule.priority
        model.confidence = rule.confidence
        model.is_active = rule.is_active
        model.match_count = rule.match_count
        model.correction_count = rule.correction_count
        model.accuracy_rate = rule.accuracy_rate
        model.needs_review = rule.needs_review
        model.last_used_at = rule.last_used_at
        model.updated_at = rule.updated_at

    @staticmethod
    def _model_to_domain(model: ClassificationRuleModel) -> ClassificationRule:
        rule = ClassificationRule.__new__(ClassificationRule)
        rule._id = model.id
        rule._name = model.name
        rule._category = model.category
        rule._priority = model.priority
        rule._reason = model.reason
        rule._account_pattern = model.account_pattern
        rule._description_pattern = model.description_pattern
        rule._required_keywords = model.required_keywords
        rule._excluded_keywords = model.excluded_keywords
        rule._confidence = model.confidence
        rule._scope = model.scope_type
        rule._scope_id = model.scope_id
        rule._description = model.description
        rule._legal_reference = model.legal_reference
        rule._rule_type = model.rule_type
        rule._is_active = model.is_active
        rule._match_count = model.match_count
        rule._correction_count = model.correction_count
        rule._accuracy_rate = model.accuracy_rate
        rule._needs_review = model.needs_review
        rule._last_used_at = (
            ensure_tz_aware(model.last_used_at) if model.last_used_at else None
        )
        rule._created_at = ensure_tz_aware(model.created_at)
        rule._updated_at = ensure_tz_aware(model.updated_at)

        return rule

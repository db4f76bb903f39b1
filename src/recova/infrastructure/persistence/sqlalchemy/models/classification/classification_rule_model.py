"""SQLAlchemy model for the ClassificationRule value object."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from sqlalchemy import Boolean, DateTime, Index, Integer, Numeric, String, Text
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from recova.domain.classification.value_objects import (
    RuleScope,
    VATRecoverableCategory,
)
from recova.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)


class ClassificationRuleModel(Base, TimestampMixin):
    """
    SQLAlchemy model for persisting ClassificationRule value objects.

    Stores the rules used to detect VAT recoverability, together with
    their usage counters and derived accuracy rate.
    """

    __tablename__ = "recoverability_rules"

    __table_args__ = (
        Index("ix_recov_rule_scope", "scope_type", "scope_id"),
        Index("ix_recov_rule_active_priority", "is_active", "priority"),
    )

    # Primary key
    id: Mapped[UUID] = mapped_column(primary_key=True)

    # Identity
    name: Mapped[str] = mapped_column(String(200))
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    legal_reference: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    rule_type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # Visibility
    scope_type: Mapped[RuleScope] = mapped_column(
        SQLEnum(RuleScope),
        default=RuleScope.GLOBAL,
    )
    scope_id: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # Predicates
    account_pattern: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    description_pattern: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
    )
    required_keywords: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
    )
    excluded_keywords: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
    )

    # Outcome and weighting
    category: Mapped[VATRecoverableCategory] = mapped_column(
        SQLEnum(VATRecoverableCategory),
        index=True,
    )
    priority: Mapped[int] = mapped_column(Integer, index=True)
    confidence: Mapped[int] = mapped_column(Integer, default=100)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)

    # Usage statistics
    match_count: Mapped[int] = mapped_column(Integer, default=0)
    correction_count: Mapped[int] = mapped_column(Integer, default=0)
    accuracy_rate: Mapped[Decimal] = mapped_column(
        Numeric(5, 2),
        default=Decimal("100"),
    )
    needs_review: Mapped[bool] = mapped_column(Boolean, default=False)
    last_used_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def __repr__(self) -> str:
        return (
            f"<ClassificationRuleModel(id={self.id}, "
            f"name={self.name[:30]}, "
            f"category={self.category.name})>"
        )

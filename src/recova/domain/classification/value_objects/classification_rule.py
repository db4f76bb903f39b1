"""Classification rule value object."""

from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from recova.domain.classification.exceptions import InvalidRuleError
from recova.domain.classification.value_objects.recoverable_category import (
    VATRecoverableCategory,
)
from recova.domain.classification.value_objects.rule_scope import RuleScope
from recova.domain.shared.text import canonicalize
from recova.domain.shared.time import utc_now

if TYPE_CHECKING:
    from recova.domain.classification.value_objects.review_policy import (
        ReviewPolicy,
    )

MIN_PRIORITY = 1
MAX_PRIORITY = 100
MAX_CONFIDENCE = 100
ACCURATE_THRESHOLD = Decimal("80")

_HUNDRED = Decimal("100")
_ZERO = Decimal("0")
_CENTS = Decimal("0.01")


def split_keywords(raw: Optional[str]) -> list[str]:
    """Split a comma-separated keyword list.

    Entries with nothing left after canonicalization (``"?"``, ``"-"``) are
    dropped: they could never be matched against normalized text.
    """
    if not raw:
        return []
    return [kw.strip() for kw in raw.split(",") if canonicalize(kw)]


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value.strip()


class ClassificationRule:
    """Rule assigning a VAT recoverability category to matching transactions.

    A rule carries up to four independent predicates (account pattern,
    description pattern, required keywords, excluded keywords). Usage
    counters feed back into its accuracy rate.
    """

    def __init__(  # NOQA: PLR0913
        self,
        name: str,
        category: VATRecoverableCategory,
        priority: int,
        reason: Optional[str] = None,
        account_pattern: Optional[str] = None,
        description_pattern: Optional[str] = None,
        required_keywords: Optional[str] = None,
        excluded_keywords: Optional[str] = None,
        confidence: int = 100,
        scope: RuleScope = RuleScope.GLOBAL,
        scope_id: Optional[str] = None,
        description: Optional[str] = None,
        legal_reference: Optional[str] = None,
        rule_type: Optional[str] = None,
        is_active: bool = True,
    ):
        self._id = uuid4()
        self._name = name.strip()
        self._category = category
        self._priority = priority
        self._reason = reason
        self._account_pattern = _blank_to_none(account_pattern)
        self._description_pattern = _blank_to_none(description_pattern)
        self._required_keywords = _blank_to_none(required_keywords)
        self._excluded_keywords = _blank_to_none(excluded_keywords)
        self._confidence = confidence
        self._scope = scope
        self._scope_id = scope_id
        self._description = description
        self._legal_reference = legal_reference
        self._rule_type = rule_type
        self._is_active = is_active
        self._match_count = 0
        self._correction_count = 0
        self._accuracy_rate = _HUNDRED
        self._needs_review = False
        self._last_used_at: Optional[datetime] = None
        self._created_at = utc_now()
        self._updated_at = utc_now()

        self._validate()

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def category(self) -> VATRecoverableCategory:
        return self._category

    @property
    def priority(self) -> int:
        return self._priority

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    @property
    def account_pattern(self) -> Optional[str]:
        return self._account_pattern

    @property
    def description_pattern(self) -> Optional[str]:
        return self._description_pattern

    @property
    def required_keywords(self) -> Optional[str]:
        return self._required_keywords

    @property
    def excluded_keywords(self) -> Optional[str]:
        return self._excluded_keywords

    @property
    def confidence(self) -> int:
        return self._confidence

    @property
    def scope(self) -> RuleScope:
        return self._scope

    @property
    def scope_id(self) -> Optional[str]:
        return self._scope_id

    @property
    def description(self) -> Optional[str]:
        return self._description

    @property
    def legal_reference(self) -> Optional[str]:
        return self._legal_reference

    @property
    def rule_type(self) -> Optional[str]:
        return self._rule_type

    @property
    def is_active(self) -> bool:
        return self._is_active

    @property
    def match_count(self) -> int:
        return self._match_count

    @property
    def correction_count(self) -> int:
        return self._correction_count

    @property
    def accuracy_rate(self) -> Decimal:
        return self._accuracy_rate

    @property
    def needs_review(self) -> bool:
        return self._needs_review

    @property
    def last_used_at(self) -> Optional[datetime]:
        return self._last_used_at

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def required_keyword_list(self) -> list[str]:
        return split_keywords(self._required_keywords)

    @property
    def excluded_keyword_list(self) -> list[str]:
        return split_keywords(self._excluded_keywords)

    @property
    def has_predicates(self) -> bool:
        return any(
            (
                self._account_pattern,
                self._description_pattern,
                self.required_keyword_list,
                self.excluded_keyword_list,
            ),
        )

    @property
    def is_accurate(self) -> bool:
        return self._accuracy_rate >= ACCURATE_THRESHOLD

    def _validate(self) -> None:
        if not self._name:
            msg = "Rule name cannot be empty"
            raise InvalidRuleError(msg)

        if not MIN_PRIORITY <= self._priority <= MAX_PRIORITY:
            msg = (
                f"Priority must be between {MIN_PRIORITY} and {MAX_PRIORITY}, "
                f"got {self._priority}"
            )
            raise InvalidRuleError(msg, rule_name=self._name)

        if not 0 <= self._confidence <= MAX_CONFIDENCE:
            msg = (
                f"Confidence must be between 0 and {MAX_CONFIDENCE}, "
                f"got {self._confidence}"
            )
            raise InvalidRuleError(msg, rule_name=self._name)

        if self._scope == RuleScope.GLOBAL and self._scope_id:
            msg = "Global rules cannot carry a scope id"
            raise InvalidRuleError(msg, rule_name=self._name)

        if self._scope != RuleScope.GLOBAL and not self._scope_id:
            msg = f"{self._scope.value} rules require a scope id"
            raise InvalidRuleError(msg, rule_name=self._name)

    def record_match(self) -> None:
        self._match_count += 1
        self._last_used_at = utc_now()
        self._updated_at = utc_now()
        self._recalculate_accuracy()

    def record_correction(self, policy: ReviewPolicy) -> None:
        """Count an operator override and re-evaluate the review flag.

        The flag is sticky: once raised it stays until the rule is edited.
        """
        self._correction_count += 1
        self._updated_at = utc_now()
        self._recalculate_accuracy()
        if policy.requires_review(self):
            self._needs_review = True

    def _recalculate_accuracy(self) -> None:
        if self._match_count == 0:
            self._accuracy_rate = _HUNDRED
            return

        correct = Decimal(self._match_count - self._correction_count)
        rate = (correct * _HUNDRED / Decimal(self._match_count)).quantize(
            _CENTS,
            rounding=ROUND_HALF_UP,
        )
        self._accuracy_rate = min(max(rate, _ZERO), _HUNDRED)

    def deactivate(self) -> None:
        self._is_active = False
        self._updated_at = utc_now()

    def activate(self) -> None:
        self._is_active = True
        self._updated_at = utc_now()

    def __eq__(self, other) -> bool:
        if not isinstance(other, ClassificationRule):
            return False
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __str__(self) -> str:
        status = "ACTIVE" if self._is_active else "INACTIVE"
        return (
            f"ClassificationRule[{status}]: '{self._name}' -> "
            f"{self._category.name} "
            f"(priority={self._priority}, matches={self._match_count}, "
            f"accuracy={self._accuracy_rate}%)"
        )

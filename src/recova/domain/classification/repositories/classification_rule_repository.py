"""Repository interface for classification rules.

The engine reads candidate rules through this port and persists usage
counters back through it. Scope resolution lives behind
``find_applicable_for_context``; the engine never filters by scope itself.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from recova.domain.classification.value_objects import (
    ClassificationRule,
    ReviewPolicy,
    ScopeContext,
)

TOP_PERFORMING_MIN_MATCHES = 10


class ClassificationRuleRepository(ABC):
    """Repository interface for persisting and retrieving classification rules."""

    @abstractmethod
    async def save(self, rule: ClassificationRule) -> None:
        """
        Save a classification rule, including its usage counters.

        Parameters
        ----------
        rule
            Classification rule to save
        """

    @abstractmethod
    async def find_by_id(self, rule_id: UUID) -> Optional[ClassificationRule]:
        """
        Find a classification rule by ID.

        Parameters
        ----------
        rule_id
            Rule ID to search for

        Returns
        -------
        Classification rule if found, None otherwise
        """

    @abstractmethod
    async def find_applicable_for_context(
        self,
        scope: ScopeContext,
    ) -> List[ClassificationRule]:
        """
        Find the active rules visible from the given scope.

        Parameters
        ----------
        scope
            Caller's position in the tenancy hierarchy

        Returns
        -------
        GLOBAL rules plus the TENANT, CABINET and COMPANY rules matching
        the scope (may be empty, order not guaranteed)
        """

    @abstractmethod
    async def find_all(self) -> List[ClassificationRule]:
        """
        Find all classification rules (active and inactive).

        Returns
        -------
        List of all rules (may be empty)
        """

    @abstractmethod
    async def count_active(self) -> int:
        """
        Count active classification rules.

        Returns
        -------
        Number of active rules
        """

    @abstractmethod
    async def find_needing_review(
        self,
        policy: ReviewPolicy,
    ) -> List[ClassificationRule]:
        """
        Find active rules flagged for review or failing the review policy.

        Parameters
        ----------
        policy
            Thresholds deciding when a rule needs review

        Returns
        -------
        List of rules ordered by accuracy rate, worst first (may be empty)
        """

    @abstractmethod
    async def find_top_performing(
        self,
        min_matches: int = TOP_PERFORMING_MIN_MATCHES,
    ) -> List[ClassificationRule]:
        """
        Find active rules with enough usage, best accuracy first.

        Parameters
        ----------
        min_matches
            Minimum number of matches a rule needs to be ranked

        Returns
        -------
        List of rules ordered by accuracy rate then match count, both
        descending (may be empty)
        """

    @abstractmethod
    async def delete(self, rule_id: UUID) -> bool:
        """
        Delete a classification rule.

        Parameters
        ----------
        rule_id
            Rule ID to delete

        Returns
        -------
        True if deleted, False if not found
        """

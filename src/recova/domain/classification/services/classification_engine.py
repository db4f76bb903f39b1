"""Rule-based VAT recoverability classification.

Classification Strategy:
1. Normalize and expand the description once
2. Load the rules visible from the caller's scope
3. Score every rule, rank the matches, keep close runners-up
4. Fall back to the default category when nothing matches or anything fails
"""

from __future__ import annotations

import logging
import time
from typing import Optional

from recova.domain.classification.repositories import ClassificationRuleRepository
from recova.domain.classification.services.pattern_cache import PatternCache
from recova.domain.classification.services.rule_scorer import RuleScorer
from recova.domain.classification.services.text_normalizer import TextNormalizer
from recova.domain.classification.value_objects import (
    DEFAULT_CATEGORY,
    Alternative,
    ClassificationResult,
    ClassificationRule,
    EngineStatistics,
    ReviewPolicy,
    RuleMatch,
    ScopeContext,
)

logger = logging.getLogger(__name__)

DEFAULT_ALTERNATIVE_RATIO = 0.7
DEFAULT_MAX_ALTERNATIVES = 2
NO_MATCH_CONFIDENCE = 100
FAILURE_CONFIDENCE = 0

NO_MATCH_REASON = "No specific rule matched - default category"
FAILURE_REASON = "Classification failed - default category applied"


class ClassificationEngine:
    """Classifies transactions into VAT recoverability categories.

    ``classify`` never raises: rule-store failures and unexpected errors
    degrade to the default category so callers on a best-effort path are
    never aborted.
    """

    def __init__(  # NOQA: PLR0913
        self,
        rule_repository: ClassificationRuleRepository,
        normalizer: TextNormalizer,
        pattern_cache: PatternCache,
        review_policy: Optional[ReviewPolicy] = None,
        alternative_ratio: float = DEFAULT_ALTERNATIVE_RATIO,
        max_alternatives: int = DEFAULT_MAX_ALTERNATIVES,
    ):
        self._rule_repository = rule_repository
        self._normalizer = normalizer
        self._pattern_cache = pattern_cache
        self._scorer = RuleScorer(normalizer, pattern_cache)
        self._review_policy = review_policy or ReviewPolicy()
        self._alternative_ratio = alternative_ratio
        self._max_alternatives = max_alternatives

    async def classify(
        self,
        scope: ScopeContext,
        account_code: Optional[str],
        description: Optional[str],
    ) -> ClassificationResult:
        started = time.perf_counter_ns()

        try:
            matches = await self._collect_matches(scope, account_code, description)
        except Exception:
            logger.exception(
                "Classification failed for account %s (scope=%s)",
                account_code,
                scope,
            )
            return ClassificationResult(
                category=DEFAULT_CATEGORY,
                confidence=FAILURE_CONFIDENCE,
                applied_rule=None,
                reason=FAILURE_REASON,
                execution_time_ns=time.perf_counter_ns() - started,
            )

        if not matches:
            logger.debug(
                "Default category %s applied (no rule matched)",
                DEFAULT_CATEGORY.name,
            )
            return ClassificationResult(
                category=DEFAULT_CATEGORY,
                confidence=NO_MATCH_CONFIDENCE,
                applied_rule=None,
                reason=NO_MATCH_REASON,
                execution_time_ns=time.perf_counter_ns() - started,
            )

        best, alternatives = self._rank(matches)
        applied_rule = best.rule
        await self._record_match(applied_rule)

        result = ClassificationResult(
            category=applied_rule.category,
            confidence=best.total_score,
            applied_rule=applied_rule,
            reason=applied_rule.reason or applied_rule.name,
            alternatives=alternatives,
            matched_criteria=list(best.matched_criteria),
            execution_time_ns=time.perf_counter_ns() - started,
        )

        logger.debug(
            "Rule applied: %s - category: %s - confidence: %d - %.1f us",
            applied_rule.name,
            applied_rule.category.name,
            result.confidence,
            result.execution_time_micros,
        )
        if alternatives:
            logger.debug(
                "Possible alternatives: %s",
                ", ".join(f"{a.category.name} ({a.confidence})" for a in alternatives),
            )
        return result

    async def classify_global(
        self,
        account_code: Optional[str],
        description: Optional[str],
    ) -> ClassificationResult:
        """Classify against GLOBAL rules only."""
        return await self.classify(ScopeContext.global_only(), account_code, description)

    def invalidate_cache(self) -> None:
        """Drop every compiled pattern.

        Must be called by rule administration after any rule create, update
        or delete.
        """
        self._pattern_cache.invalidate_all()
        logger.info("Classification rule cache invalidated")

    async def statistics(self) -> EngineStatistics:
        rules = await self._rule_repository.find_all()
        needing_review = await self._rule_repository.find_needing_review(
            self._review_policy,
        )
        active = await self._rule_repository.count_active()

        used = [rule.accuracy_rate for rule in rules if rule.match_count > 0]
        average = round(float(sum(used) / len(used)), 2) if used else 0.0

        return EngineStatistics(
            total_rules=len(rules),
            active_rules=active,
            total_matches=sum(rule.match_count for rule in rules),
            total_corrections=sum(rule.correction_count for rule in rules),
            average_accuracy=average,
            rules_needing_review=len(needing_review),
            cache_size=len(self._pattern_cache),
        )

    async def _collect_matches(
        self,
        scope: ScopeContext,
        account_code: Optional[str],
        description: Optional[str],
    ) -> list[RuleMatch]:
        normalized = self._normalizer.normalize(description)
        expanded = self._normalizer.expand(description)

        rules = await self._rule_repository.find_applicable_for_context(scope)
        logger.debug(
            "Classifying account %s - '%s' against %d rules (scope=%s)",
            account_code,
            normalized,
            len(rules),
            scope,
        )

        matches: list[RuleMatch] = []
        for rule in rules:
            match = self._evaluate_safely(rule, account_code, normalized, expanded)
            if match is not None:
                matches.append(match)
        return matches

    def _evaluate_safely(
        self,
        rule: ClassificationRule,
        account_code: Optional[str],
        normalized: str,
        expanded: str,
    ) -> Optional[RuleMatch]:
        try:
            return self._scorer.evaluate(rule, account_code, normalized, expanded)
        except Exception:
            # One broken rule must not abort the batch
            logger.exception("Rule '%s' could not be evaluated, skipped", rule.name)
            return None

    def _rank(self, matches: list[RuleMatch]) -> tuple[RuleMatch, list[Alternative]]:
        # sorted() is stable: candidate order breaks ties
        ranked = sorted(matches, key=lambda m: m.total_score, reverse=True)
        best = ranked[0]
        threshold = best.total_score * self._alternative_ratio

        alternatives = [
            Alternative(
                category=m.rule.category,
                confidence=m.total_score,
                reason=m.rule.reason,
                rule_id=m.rule.id,
            )
            for m in ranked[1 : 1 + self._max_alternatives]
            if m.total_score >= threshold
        ]
        return best, alternatives

    async def _record_match(self, rule: ClassificationRule) -> None:
        rule.record_match()
        try:
            await self._rule_repository.save(rule)
        except Exception as e:
            # Counters are approximate; classification does not depend on them
            logger.warning(
                "Could not persist match count for rule '%s': %s",
                rule.name,
                str(e),
            )

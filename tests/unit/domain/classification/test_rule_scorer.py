"""Tests for the RuleScorer."""

import pytest

from recova.domain.classification.services import (
    PatternCache,
    RuleScorer,
    TextNormalizer,
)
from recova.domain.classification.value_objects import (
    ClassificationRule,
    ReviewPolicy,
    VATRecoverableCategory,
)


def create_test_rule(**overrides) -> ClassificationRule:
    """Create a test classification rule with default values."""
    defaults = {
        "name": "Test rule",
        "category": VATRecoverableCategory.NON_RECOVERABLE_FUEL_VP,
        "priority": 100,
        "confidence": 100,
    }
    defaults.update(overrides)
    return ClassificationRule(**defaults)


@pytest.fixture
def normalizer() -> TextNormalizer:
    return TextNormalizer()


@pytest.fixture
def scorer(normalizer) -> RuleScorer:
    return RuleScorer(normalizer, PatternCache())


def evaluate(scorer, normalizer, rule, account_code, description):
    return scorer.evaluate(
        rule,
        account_code,
        normalizer.normalize(description),
        normalizer.expand(description),
    )


class TestRuleScorer:
    """Test cases for RuleScorer.evaluate."""

    def test_description_pattern_with_confidence_and_priority(
        self,
        scorer,
        normalizer,
    ):
        """Test a fuel rule on a fuel purchase (30 * 90% + 90 bonus)."""
        rule = create_test_rule(
            description_pattern="carburant|essence|gasoil",
            confidence=90,
            priority=10,
        )

        match = evaluate(
            scorer,
            normalizer,
            rule,
            "6251",
            "Achat essence véhicule direction",
        )

        assert match is not None
        assert match.base_score == 27
        assert match.priority_bonus == 90
        assert match.total_score == 117
        assert match.matched_criteria == ["Description matched by pattern"]

    def test_account_pattern(self, scorer, normalizer):
        """Test that a matching account earns 20 points."""
        rule = create_test_rule(account_pattern="^6251", priority=50)

        match = evaluate(scorer, normalizer, rule, "625100", "Anything")

        assert match is not None
        assert match.base_score == 20
        assert match.total_score == 70
        assert match.matched_criteria == ["Account matched: ^6251"]

    def test_account_mismatch_disqualifies(self, scorer, normalizer):
        """Test that a failed account pattern rejects the rule."""
        rule = create_test_rule(
            account_pattern="^6251",
            description_pattern="essence",
        )

        assert evaluate(scorer, normalizer, rule, "6061", "Achat essence") is None

    def test_missing_account_is_empty_string(self, scorer, normalizer):
        """Test that a None account never matches a non-empty pattern."""
        rule = create_test_rule(account_pattern="^6251")

        assert evaluate(scorer, normalizer, rule, None, "Achat essence") is None

    def test_all_predicates(self, scorer, normalizer):
        """Test the full 85 point score when every predicate holds."""
        rule = create_test_rule(
            account_pattern="^6251",
            description_pattern="essence",
            required_keywords="vehicule,direction",
            excluded_keywords="utilitaire",
        )

        match = evaluate(
            scorer,
            normalizer,
            rule,
            "6251",
            "Achat essence véhicule direction",
        )

        assert match is not None
        assert match.base_score == 85
        assert match.priority_bonus == 0
        assert len(match.matched_criteria) == 4

    def test_required_keywords_missing(self, scorer, normalizer):
        """Test that every required keyword must be present."""
        rule = create_test_rule(required_keywords="vehicule,golf")

        assert evaluate(scorer, normalizer, rule, "6251", "Achat vehicule") is None

    def test_excluded_keyword_is_a_veto(self, scorer, normalizer):
        """Test that an excluded keyword rejects an otherwise perfect match."""
        rule = create_test_rule(
            description_pattern="carburant",
            excluded_keywords="utilitaire",
        )

        match = evaluate(scorer, normalizer, rule, "6251", "Carburant camionnette")

        assert match is None

    def test_only_excluded_keywords(self, scorer, normalizer):
        """Test a rule whose only predicate is the excluded list."""
        rule = create_test_rule(excluded_keywords="golf", priority=80)

        match = evaluate(scorer, normalizer, rule, "6251", "Fournitures bureau")

        assert match is not None
        assert match.base_score == 10
        assert match.total_score == 30

    def test_rule_without_predicates_never_matches(self, scorer, normalizer):
        """Test that an empty rule does not match everything."""
        rule = create_test_rule()

        assert evaluate(scorer, normalizer, rule, "6251", "Achat essence") is None

    def test_punctuation_only_excluded_keyword_never_matches(
        self,
        scorer,
        normalizer,
    ):
        """Test that an excluded list of bare punctuation is not a predicate."""
        rule = create_test_rule(excluded_keywords="?", priority=1)

        match = evaluate(scorer, normalizer, rule, "6251", "anything at all")

        assert match is None

    def test_punctuation_only_required_keyword_is_ignored(
        self,
        scorer,
        normalizer,
    ):
        """Test that a bare punctuation keyword neither scores nor disqualifies."""
        rule = create_test_rule(
            description_pattern="essence",
            required_keywords="?",
        )

        match = evaluate(scorer, normalizer, rule, "6251", "Achat essence")

        assert match is not None
        assert match.base_score == 30

    def test_invalid_pattern_never_matches(self, scorer, normalizer):
        """Test that a malformed pattern makes the rule inapplicable."""
        rule = create_test_rule(description_pattern="[")

        assert evaluate(scorer, normalizer, rule, "6251", "[") is None

    def test_score_scaled_by_accuracy(self, scorer, normalizer):
        """Test that confidence then accuracy scale with truncation."""
        rule = create_test_rule(
            description_pattern="essence",
            confidence=50,
            priority=50,
        )
        policy = ReviewPolicy()
        for _ in range(10):
            rule.record_match()
        for _ in range(3):
            rule.record_correction(policy)

        match = evaluate(scorer, normalizer, rule, "6251", "Achat essence")

        # 30 * 50% = 15, 15 * 70% = 10.5 truncated to 10
        assert match is not None
        assert match.base_score == 10
        assert match.total_score == 60

    def test_description_matched_through_synonyms(self, scorer, normalizer):
        """Test that the pattern runs against the expanded description."""
        rule = create_test_rule(description_pattern=r"\bvehicule\b")

        match = evaluate(scorer, normalizer, rule, "6251", "Location voiture")

        assert match is not None
        assert match.base_score == 30

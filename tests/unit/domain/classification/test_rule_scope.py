"""Tests for RuleScope and ScopeContext."""

from uuid import uuid4

from recova.domain.classification.value_objects import RuleScope, ScopeContext


class TestScopeContext:
    """Test cases for ScopeContext."""

    def test_global_only(self):
        """Test that the global context sees no scoped rules."""
        scope = ScopeContext.global_only()

        assert scope.is_global_only
        assert scope.visible_scope_ids() == {}

    def test_company_id_is_exposed_as_string(self):
        """Test that the company UUID is compared as text."""
        company_id = uuid4()
        scope = ScopeContext(company_id=company_id)

        assert not scope.is_global_only
        assert scope.visible_scope_ids() == {RuleScope.COMPANY: str(company_id)}

    def test_full_hierarchy(self):
        """Test a context with tenant, cabinet and company."""
        company_id = uuid4()
        scope = ScopeContext(
            company_id=company_id,
            tenant_id="tenant-1",
            cabinet_id="cabinet-7",
        )

        assert scope.visible_scope_ids() == {
            RuleScope.TENANT: "tenant-1",
            RuleScope.CABINET: "cabinet-7",
            RuleScope.COMPANY: str(company_id),
        }

    def test_is_hashable_value(self):
        """Test that equal contexts compare equal."""
        company_id = uuid4()

        assert ScopeContext(company_id=company_id) == ScopeContext(
            company_id=company_id,
        )
        assert len({ScopeContext(), ScopeContext.global_only()}) == 1

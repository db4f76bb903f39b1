"""Rule visibility scopes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional
from uuid import UUID


class RuleScope(Enum):
    """Which part of the tenancy hierarchy a rule belongs to."""

    GLOBAL = "global"
    TENANT = "tenant"
    CABINET = "cabinet"
    COMPANY = "company"


@dataclass(frozen=True)
class ScopeContext:
    """Identifies the caller's position in the tenancy hierarchy.

    GLOBAL rules are always visible. TENANT, CABINET and COMPANY rules are
    visible when their scope id equals the matching attribute here.
    """

    company_id: Optional[UUID] = None
    tenant_id: Optional[str] = None
    cabinet_id: Optional[str] = None

    @classmethod
    def global_only(cls) -> ScopeContext:
        return cls()

    @property
    def is_global_only(self) -> bool:
        return (
            self.company_id is None
            and self.tenant_id is None
            and self.cabinet_id is None
        )

    def visible_scope_ids(self) -> dict[RuleScope, str]:
        """Return the scope id the caller can see for each non-global scope."""
        visible: dict[RuleScope, str] = {}
        if self.tenant_id:
            visible[RuleScope.TENANT] = self.tenant_id
        if self.cabinet_id:
            visible[RuleScope.CABINET] = self.cabinet_id
        if self.company_id is not None:
            visible[RuleScope.COMPANY] = str(self.company_id)
        return visible

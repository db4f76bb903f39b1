"""VAT recoverability categories."""

from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Optional

_HUNDRED = Decimal("100")
_CENTS = Decimal("0.01")


class VATRecoverableCategory(Enum):
    """Closed set of VAT recoverability categories.

    Each member carries its display name, the recoverable share of the VAT
    (in percent) and a short explanation.
    """

    FULLY_RECOVERABLE = (
        "Totalement récupérable",
        Decimal("100"),
        "TVA intégralement déductible (achats professionnels normaux)",
    )
    RECOVERABLE_80_PERCENT = (
        "Récupérable à 80%",
        Decimal("80"),
        "TVA partiellement déductible (carburant VU selon réglementation)",
    )
    NON_RECOVERABLE_TOURISM_VEHICLE = (
        "Non récupérable - Véhicule de tourisme",
        Decimal("0"),
        "TVA sur véhicules de tourisme (VP < 9 places)",
    )
    NON_RECOVERABLE_FUEL_VP = (
        "Non récupérable - Carburant VP",
        Decimal("0"),
        "TVA sur carburant pour véhicules de tourisme",
    )
    NON_RECOVERABLE_REPRESENTATION = (
        "Non récupérable - Représentation",
        Decimal("0"),
        "TVA sur frais de représentation (restaurants, hôtels non justifiés)",
    )
    NON_RECOVERABLE_LUXURY = (
        "Non récupérable - Dépenses de luxe",
        Decimal("0"),
        "TVA sur dépenses somptuaires et de luxe",
    )
    NON_RECOVERABLE_PERSONAL = (
        "Non récupérable - Services personnels",
        Decimal("0"),
        "TVA sur services à usage personnel (non professionnel)",
    )

    def __init__(
        self,
        display_name: str,
        recoverable_percentage: Decimal,
        explanation: str,
    ):
        self.display_name = display_name
        self.recoverable_percentage = recoverable_percentage
        self.explanation = explanation

    @property
    def is_fully_recoverable(self) -> bool:
        return self.recoverable_percentage == _HUNDRED

    @property
    def is_partially_recoverable(self) -> bool:
        return Decimal("0") < self.recoverable_percentage < _HUNDRED

    @property
    def is_non_recoverable(self) -> bool:
        return self.recoverable_percentage == Decimal("0")

    def recoverable_amount(self, total_vat: Optional[Decimal]) -> Decimal:
        if total_vat is None:
            return Decimal("0.00")
        amount = Decimal(total_vat) * self.recoverable_percentage / _HUNDRED
        return amount.quantize(_CENTS, rounding=ROUND_HALF_UP)

    def non_recoverable_amount(self, total_vat: Optional[Decimal]) -> Decimal:
        if total_vat is None:
            return Decimal("0.00")
        return Decimal(total_vat) - self.recoverable_amount(total_vat)

    def __str__(self) -> str:
        return self.display_name


DEFAULT_CATEGORY = VATRecoverableCategory.FULLY_RECOVERABLE

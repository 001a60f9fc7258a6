"""
Earnings Ledger — running total of realized sale proceeds.

INVARIANT: The total only increases. Refunds are not modeled.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from cardkeeper.models.failure import ValidationFailedError


class SaleSource(str, Enum):
    """What was sold."""

    CARD = "card"
    BINDER = "binder"
    DECK = "deck"


@dataclass(frozen=True, slots=True)
class SaleRecord:
    """One realized sale."""

    source: SaleSource
    name: str
    amount: Decimal


@dataclass
class EarningsLedger:
    """Append-only record of sales and their running total."""

    total: Decimal = Decimal("0.00")
    sales: list[SaleRecord] = field(default_factory=list)

    def record(self, amount: Decimal, source: SaleSource, name: str) -> SaleRecord:
        """
        Add sale proceeds to the ledger.

        Raises:
            ValidationFailedError: If the amount is negative
        """
        if amount < 0:
            raise ValidationFailedError(
                "Sale proceeds cannot be negative",
                detail=f"{source.value} '{name}': {amount}",
            )
        sale = SaleRecord(source=source, name=name, amount=amount)
        self.sales.append(sale)
        self.total += amount
        return sale

    def total_for(self, source: SaleSource) -> Decimal:
        return sum(
            (sale.amount for sale in self.sales if sale.source == source),
            Decimal("0.00"),
        )

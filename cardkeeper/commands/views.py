"""
Result payloads returned inside command envelopes.

These are read-only snapshots: building one never mutates the inventory.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from cardkeeper.config import settings
from cardkeeper.models.binder import Binder
from cardkeeper.models.card import Card
from cardkeeper.models.deck import Deck
from cardkeeper.models.earnings import EarningsLedger, SaleRecord


def format_money(amount: Decimal) -> str:
    """Render an amount for display, e.g. $12.50."""
    return f"{settings.currency_symbol}{amount:.2f}"


class CardSummary(BaseModel):
    """A card as shown to the user."""

    name: str
    rarity: str
    variation: str
    base_value: Decimal
    value: Decimal
    count: int
    display_value: str

    @classmethod
    def from_card(cls, card: Card) -> "CardSummary":
        return cls(
            name=card.name,
            rarity=card.rarity.value,
            variation=card.variation.value,
            base_value=card.base_value,
            value=card.value,
            count=card.count,
            display_value=format_money(card.value),
        )


class ContainerSummary(BaseModel):
    """A binder or deck and its contents."""

    name: str
    kind: str
    sellable: bool
    capacity: int
    card_count: int
    current_value: Decimal | None = Field(
        default=None,
        description="Real value of the contents (sellable containers only)",
    )
    custom_price: Decimal | None = Field(
        default=None,
        description="Collector-set sale price (luxury binders only)",
    )
    cards: list[CardSummary] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.card_count == 0

    @classmethod
    def from_binder(cls, binder: Binder) -> "ContainerSummary":
        return cls(
            name=binder.name,
            kind=binder.kind.value,
            sellable=binder.is_sellable,
            capacity=binder.capacity,
            card_count=len(binder),
            current_value=binder.current_value() if binder.is_sellable else None,
            custom_price=binder.custom_price,
            cards=[CardSummary.from_card(card) for card in binder.sorted_view()],
        )

    @classmethod
    def from_deck(cls, deck: Deck) -> "ContainerSummary":
        return cls(
            name=deck.name,
            kind="sellable_deck" if deck.sellable else "deck",
            sellable=deck.is_sellable,
            capacity=deck.capacity,
            card_count=len(deck),
            current_value=deck.current_value() if deck.is_sellable else None,
            cards=[CardSummary.from_card(card) for card in deck.sorted_view()],
        )


class TradeOutcome(BaseModel):
    """Result of a trade attempt."""

    completed: bool
    needs_confirmation: bool
    binder: str
    outgoing: str
    incoming: str


class DeletionReceipt(BaseModel):
    """A deleted binder or deck and how many cards went back to the collection."""

    container: str
    name: str
    returned_cards: int


class SaleReceipt(BaseModel):
    """A realized sale and the earnings total after it."""

    source: str
    name: str
    amount: Decimal
    display_amount: str
    total_earnings: Decimal

    @classmethod
    def from_record(cls, record: SaleRecord, total: Decimal) -> "SaleReceipt":
        return cls(
            source=record.source.value,
            name=record.name,
            amount=record.amount,
            display_amount=format_money(record.amount),
            total_earnings=total,
        )


class EarningsSummary(BaseModel):
    """Collector earnings to date."""

    total: Decimal
    display_total: str
    sales: int

    @classmethod
    def from_ledger(cls, ledger: EarningsLedger) -> "EarningsSummary":
        return cls(
            total=ledger.total,
            display_total=format_money(ledger.total),
            sales=len(ledger.sales),
        )

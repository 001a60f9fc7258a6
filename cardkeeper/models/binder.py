"""
Binders — capacity-limited containers for trading and selling.

The five binder kinds are one data type tagged by BinderKind. Acceptance
policy and sale terms are looked up by tag, never by subclass.

INVARIANT: A full binder reports rejection (False) before any policy
check. A policy violation is an error; a full binder is not.

INVARIANT: Every card inside a binder is a single physical unit.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from cardkeeper.models.card import Card, Rarity, Variation, normalize_name, round_money
from cardkeeper.models.failure import (
    EmptyStateError,
    NotFoundError,
    NotSellableError,
    ValidationFailedError,
)

BINDER_CAPACITY = 20

HANDLING_RATE = Decimal("0.10")


class BinderKind(str, Enum):
    """Closed set of binder variants."""

    NON_CURATED = "non_curated"
    PAUPER = "pauper"
    RARES = "rares"
    LUXURY = "luxury"
    COLLECTOR = "collector"


@dataclass(frozen=True, slots=True)
class SaleTerms:
    """
    How a sellable binder is priced.

    Attributes:
        fee_rate: Surcharge added on top of the sale base
        honors_custom_price: Whether a collector-set price can raise the base
    """

    fee_rate: Decimal
    honors_custom_price: bool = False


SALE_TERMS: dict[BinderKind, SaleTerms] = {
    BinderKind.PAUPER: SaleTerms(fee_rate=Decimal("0")),
    BinderKind.RARES: SaleTerms(fee_rate=HANDLING_RATE),
    BinderKind.LUXURY: SaleTerms(fee_rate=HANDLING_RATE, honors_custom_price=True),
}

_HIGH_RARITIES = frozenset({Rarity.RARE, Rarity.LEGENDARY})


def policy_violation(kind: BinderKind, card: Card) -> str | None:
    """
    Check a card against a binder kind's acceptance policy.

    Returns:
        None if the card is accepted, otherwise the reason it is not
    """
    match kind:
        case BinderKind.NON_CURATED:
            return None
        case BinderKind.PAUPER:
            if card.rarity in _HIGH_RARITIES:
                return f"rarity {card.rarity.value} is not allowed in a pauper binder"
        case BinderKind.RARES:
            if card.rarity not in _HIGH_RARITIES:
                return f"rarity {card.rarity.value} is not allowed in a rares binder"
        case BinderKind.LUXURY:
            if card.variation == Variation.NORMAL:
                return "normal variation is not allowed in a luxury binder"
        case BinderKind.COLLECTOR:
            if card.rarity not in _HIGH_RARITIES or card.variation == Variation.NORMAL:
                return (
                    f"[{card.rarity.value}, {card.variation.value}] is not allowed "
                    "in a collector binder"
                )
    return None


@dataclass
class Binder:
    """
    A named binder holding up to BINDER_CAPACITY physical units.

    Attributes:
        name: Display name (registry lookup is case-insensitive)
        kind: Variant tag selecting acceptance policy and sale terms
        cards: Units in insertion order
        custom_price: Luxury-only price override, None when unset
    """

    name: str
    kind: BinderKind = BinderKind.NON_CURATED
    cards: list[Card] = field(default_factory=list)
    custom_price: Decimal | None = None

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationFailedError("Binder name cannot be empty")
        self.name = self.name.strip()
        self.kind = BinderKind(self.kind)

    def __len__(self) -> int:
        return len(self.cards)

    @property
    def capacity(self) -> int:
        return BINDER_CAPACITY

    @property
    def sale_terms(self) -> SaleTerms | None:
        return SALE_TERMS.get(self.kind)

    @property
    def is_sellable(self) -> bool:
        return self.sale_terms is not None

    def is_full(self) -> bool:
        return len(self.cards) >= BINDER_CAPACITY

    def is_empty(self) -> bool:
        return not self.cards

    def find_by_name(self, name: str) -> Card | None:
        key = normalize_name(name)
        for card in self.cards:
            if card.key == key:
                return card
        return None

    def try_add(self, card: Card) -> bool:
        """
        Place a unit in the binder.

        Returns:
            True if added, False if the binder is full

        Raises:
            ValidationFailedError: If this binder kind never accepts the card
        """
        if self.is_full():
            return False
        reason = policy_violation(self.kind, card)
        if reason is not None:
            raise ValidationFailedError(
                f"Card '{card.name}' is not allowed in binder '{self.name}'",
                detail=reason,
            )
        self.cards.append(card)
        return True

    def remove_by_name(self, name: str) -> Card:
        """
        Remove and return the first unit with this name.

        Raises:
            EmptyStateError: If the binder holds no cards
            NotFoundError: If no unit has this name
        """
        if not self.cards:
            raise EmptyStateError(f"Binder '{self.name}' is empty")
        key = normalize_name(name)
        for index, card in enumerate(self.cards):
            if card.key == key:
                return self.cards.pop(index)
        raise NotFoundError("card", name.strip(), where=f"binder '{self.name}'")

    def remove_all(self) -> list[Card]:
        """Drain the binder, returning every unit."""
        cards = list(self.cards)
        self.cards.clear()
        return cards

    def sorted_view(self) -> list[Card]:
        return sorted(self.cards, key=lambda card: card.name)

    def real_value(self) -> Decimal:
        """Sum of unit values, before fees or custom price."""
        return sum((card.value for card in self.cards), Decimal("0.00"))

    def current_value(self) -> Decimal:
        """Real value of a sellable binder."""
        self._require_sale_terms()
        return self.real_value()

    def set_custom_price(self, price: Decimal) -> None:
        """
        Set the Luxury sale price. The price is a floor override, never a discount.

        Raises:
            ValidationFailedError: If this is not a luxury binder or the price
                is below the binder's current value
        """
        terms = self._require_sale_terms()
        if not terms.honors_custom_price:
            raise ValidationFailedError(
                f"Binder '{self.name}' does not support custom prices",
                detail=f"kind={self.kind.value}",
            )
        floor = self.real_value()
        if price < floor:
            raise ValidationFailedError(
                f"Custom price cannot be below total real value ({floor})",
                detail=f"price={price}",
            )
        self.custom_price = price

    def sale_price(self) -> Decimal:
        """Proceeds a sale would realize right now, fee included."""
        terms = self._require_sale_terms()
        base = self.real_value()
        if terms.honors_custom_price and self.custom_price is not None:
            base = max(base, self.custom_price)
        return round_money(base * (1 + terms.fee_rate))

    def sell(self) -> Decimal:
        """Liquidate the binder: compute proceeds, then empty it."""
        proceeds = self.sale_price()
        self.cards.clear()
        self.custom_price = None
        return proceeds

    def _require_sale_terms(self) -> SaleTerms:
        terms = self.sale_terms
        if terms is None:
            raise NotSellableError("binder", self.name)
        return terms

"""
Decks — small, duplicate-free containers for play or sale.

INVARIANT: A deck never holds two units with the same name.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from cardkeeper.models.card import Card, normalize_name
from cardkeeper.models.failure import (
    EmptyStateError,
    NotFoundError,
    NotSellableError,
    ValidationFailedError,
)

DECK_CAPACITY = 10


@dataclass
class Deck:
    """
    A named deck holding up to DECK_CAPACITY distinct cards.

    Attributes:
        name: Display name (registry lookup is case-insensitive)
        sellable: Whether the deck can be sold (no fee is charged)
        cards: Units in insertion order
    """

    name: str
    sellable: bool = False
    cards: list[Card] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationFailedError("Deck name cannot be empty")
        self.name = self.name.strip()

    def __len__(self) -> int:
        return len(self.cards)

    @property
    def capacity(self) -> int:
        return DECK_CAPACITY

    @property
    def is_sellable(self) -> bool:
        return self.sellable

    def is_full(self) -> bool:
        return len(self.cards) >= DECK_CAPACITY

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
        Place a unit in the deck.

        Returns:
            True if added; False if the deck is full or already holds this card

        Raises:
            ValidationFailedError: If a different card with the same name is present
        """
        if self.is_full():
            return False
        existing = self.find_by_name(card.name)
        if existing is not None:
            if existing == card:
                return False
            raise ValidationFailedError(
                f"A different card named '{card.name}' is already in deck '{self.name}'",
                detail=(
                    f"existing={existing.rarity.value}/{existing.variation.value}, "
                    f"incoming={card.rarity.value}/{card.variation.value}"
                ),
            )
        self.cards.append(card)
        return True

    def holds(self, card: Card) -> bool:
        """Whether a unit identical to `card` is already in the deck."""
        existing = self.find_by_name(card.name)
        return existing is not None and existing == card

    def remove_by_name(self, name: str) -> Card:
        """
        Remove and return the unit with this name.

        Raises:
            EmptyStateError: If the deck holds no cards
            NotFoundError: If no unit has this name
        """
        if not self.cards:
            raise EmptyStateError(f"Deck '{self.name}' is empty")
        key = normalize_name(name)
        for index, card in enumerate(self.cards):
            if card.key == key:
                return self.cards.pop(index)
        raise NotFoundError("card", name.strip(), where=f"deck '{self.name}'")

    def remove_all(self) -> list[Card]:
        cards = list(self.cards)
        self.cards.clear()
        return cards

    def sorted_view(self) -> list[Card]:
        return sorted(self.cards, key=lambda card: card.name)

    def current_value(self) -> Decimal:
        """Sum of unit values of a sellable deck."""
        self._require_sellable()
        return sum((card.value for card in self.cards), Decimal("0.00"))

    def sell(self) -> Decimal:
        """Liquidate the deck at its current value (no fee) and empty it."""
        proceeds = self.current_value()
        self.cards.clear()
        return proceeds

    def _require_sellable(self) -> None:
        if not self.sellable:
            raise NotSellableError("deck", self.name)

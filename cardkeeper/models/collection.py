"""
Card Collection — the ledger of loose cards.

INVARIANT: At most one ledger entry per card name. Names are globally
unique once their rarity and variation are fixed.

INVARIANT: Entries are never deleted. An entry at count 0 still
remembers the card's attributes.
"""

from decimal import Decimal

from cardkeeper.models.card import Card, normalize_name
from cardkeeper.models.failure import EmptyStateError, NotFoundError, ValidationFailedError


class CardCollection:
    """
    Pool of owned cards that are not in any binder or deck.

    Cards are keyed by normalized name. Units leaving the collection
    are fresh count=1 copies; units coming back merge into the entry.
    """

    def __init__(self) -> None:
        self._entries: dict[str, Card] = {}

    def __contains__(self, name: str) -> bool:
        return normalize_name(name) in self._entries

    def __len__(self) -> int:
        """Number of ledger entries, including zero-count ones."""
        return len(self._entries)

    def add(self, card: Card) -> Card:
        """
        Add a card to the collection.

        A new name becomes a ledger entry as-is. An identical card
        increments the existing entry by one.

        Returns:
            The ledger entry now holding the card

        Raises:
            ValidationFailedError: If the name exists with a different
                rarity or variation
        """
        existing = self._entries.get(card.key)
        if existing is None:
            self._entries[card.key] = card
            return card
        if existing != card:
            raise ValidationFailedError(
                f"Card '{card.name}' has different attributes and cannot be merged",
                detail=(
                    f"existing={existing.rarity.value}/{existing.variation.value}, "
                    f"incoming={card.rarity.value}/{card.variation.value}"
                ),
                suggestion="Card names are unique; use the existing rarity and variation.",
            )
        existing.increment()
        return existing

    def find_by_name(self, name: str) -> Card | None:
        """Case-insensitive lookup. Returns None if the card was never added."""
        return self._entries.get(normalize_name(name))

    def get(self, name: str) -> Card:
        """Like find_by_name, but absence is an error."""
        card = self.find_by_name(name)
        if card is None:
            raise NotFoundError("card", name.strip(), where="collection")
        return card

    def remove_one(self, name: str) -> Card:
        """
        Take one physical copy out of the collection.

        Returns:
            A new Card with count=1, ready to be placed in a container

        Raises:
            NotFoundError: If no entry has this name
            EmptyStateError: If the entry has no copies left
        """
        entry = self._require_copies(name)
        unit = entry.unit_copy()
        entry.decrement()
        return unit

    def sell_one(self, name: str) -> Decimal:
        """Sell one copy and return its value."""
        entry = self._require_copies(name)
        entry.decrement()
        return entry.value

    def card_value(self, name: str) -> Decimal:
        return self.get(name).value

    def increment(self, name: str) -> None:
        self.get(name).increment()

    def decrement(self, name: str) -> None:
        """
        Remove one copy without producing a unit.

        Raises:
            NotFoundError: If no entry has this name
            EmptyStateError: If the count is already zero
        """
        entry = self.get(name)
        if entry.count == 0:
            raise EmptyStateError(f"Card '{entry.name}' count is already zero")
        entry.decrement()

    def sorted_view(self) -> list[Card]:
        """Entries sorted by name. The list is a copy; entries are not."""
        return sorted(self._entries.values(), key=lambda card: card.name)

    def total_cards(self) -> int:
        """Total physical copies across all entries."""
        return sum(card.count for card in self._entries.values())

    def unique_cards(self) -> int:
        """Number of entries holding at least one copy."""
        return sum(1 for card in self._entries.values() if card.count > 0)

    def _require_copies(self, name: str) -> Card:
        entry = self.get(name)
        if entry.count == 0:
            raise EmptyStateError(
                f"No copies left of card '{entry.name}'",
                detail="count=0",
            )
        return entry

"""Deck registry."""

import logging
from decimal import Decimal

from cardkeeper.models.card import Card, normalize_name
from cardkeeper.models.deck import Deck
from cardkeeper.models.failure import AlreadyExistsError, NotFoundError

logger = logging.getLogger(__name__)


class DeckManager:
    """Name-keyed registry of decks."""

    def __init__(self) -> None:
        self._decks: dict[str, Deck] = {}

    def __contains__(self, name: str) -> bool:
        return normalize_name(name) in self._decks

    def __len__(self) -> int:
        return len(self._decks)

    def get(self, name: str) -> Deck:
        deck = self._decks.get(normalize_name(name))
        if deck is None:
            raise NotFoundError("deck", name.strip())
        return deck

    def create(self, name: str, sellable: bool = False) -> Deck:
        """
        Register a new deck.

        Raises:
            AlreadyExistsError: If a deck with this name exists
            ValidationFailedError: If the name is blank
        """
        deck = Deck(name=name, sellable=sellable)
        key = normalize_name(deck.name)
        if key in self._decks:
            raise AlreadyExistsError("deck", deck.name)
        self._decks[key] = deck
        logger.info("Created %s deck '%s'", "sellable" if sellable else "playing", deck.name)
        return deck

    def delete(self, name: str) -> list[Card]:
        """Unregister a deck, returning the cards it held."""
        deck = self.get(name)
        cards = deck.remove_all()
        del self._decks[normalize_name(deck.name)]
        logger.info("Deleted deck '%s' (%d cards released)", deck.name, len(cards))
        return cards

    def sell(self, name: str) -> Decimal:
        """
        Sell a deck and unregister it.

        Raises:
            NotFoundError: If the deck does not exist
            NotSellableError: If the deck is not sellable
        """
        deck = self.get(name)
        proceeds = deck.sell()
        del self._decks[normalize_name(deck.name)]
        logger.info("Sold deck '%s' for %s", deck.name, proceeds)
        return proceeds

    def move_card_in(self, name: str, card: Card) -> bool:
        return self.get(name).try_add(card)

    def move_card_out(self, name: str, card_name: str) -> Card:
        return self.get(name).remove_by_name(card_name)

    def names(self) -> list[str]:
        """Deck names in creation order."""
        return [deck.name for deck in self._decks.values()]

    def is_empty(self, name: str) -> bool:
        return self.get(name).is_empty()

    def is_sellable(self, name: str) -> bool:
        return self.get(name).is_sellable

    def current_value(self, name: str) -> Decimal:
        return self.get(name).current_value()

    def sorted_view(self, name: str) -> list[Card]:
        return self.get(name).sorted_view()

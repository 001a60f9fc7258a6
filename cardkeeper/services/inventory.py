"""
Inventory System — the single entry point for the presentation layer.

Owns the card collection, both registries and the earnings ledger, and
implements every move between them.

INVARIANT: Moves are all-or-nothing. Each mutating step registers its
compensation on an ExitStack; if a later step fails the compensations
run in reverse before the error propagates. A failed move never loses
or duplicates a card.
"""

import logging
from contextlib import ExitStack
from decimal import Decimal

from cardkeeper.models.binder import BinderKind
from cardkeeper.models.card import Card, to_money
from cardkeeper.models.collection import CardCollection
from cardkeeper.models.earnings import EarningsLedger, SaleRecord, SaleSource
from cardkeeper.models.failure import (
    CapacityExceededError,
    DuplicateCardError,
    NotTradableError,
)
from cardkeeper.services.binder_manager import BinderManager
from cardkeeper.services.deck_manager import DeckManager

logger = logging.getLogger(__name__)

# Trades whose values differ by at least this much need explicit confirmation
TRADE_CONFIRMATION_THRESHOLD = Decimal("1.00")


class InventorySystem:
    """Facade over the collection, binders, decks and earnings."""

    def __init__(self) -> None:
        self._collection = CardCollection()
        self._binders = BinderManager()
        self._decks = DeckManager()
        self._earnings = EarningsLedger()

    @property
    def collection(self) -> CardCollection:
        return self._collection

    @property
    def binders(self) -> BinderManager:
        return self._binders

    @property
    def decks(self) -> DeckManager:
        return self._decks

    @property
    def earnings(self) -> EarningsLedger:
        return self._earnings

    @property
    def collector_earnings(self) -> Decimal:
        """Total proceeds realized from every sale so far."""
        return self._earnings.total

    # =========================================================================
    # COLLECTION
    # =========================================================================

    def add_card(self, card: Card) -> Card:
        """Add a card to the collection, returning its ledger entry."""
        return self._collection.add(card)

    def find_card(self, name: str) -> Card | None:
        return self._collection.find_by_name(name)

    def increment_card(self, name: str) -> None:
        self._collection.increment(name)

    def decrement_card(self, name: str) -> None:
        self._collection.decrement(name)

    def card_value(self, name: str) -> Decimal:
        return self._collection.card_value(name)

    def collection_view(self) -> list[Card]:
        return self._collection.sorted_view()

    def sell_card(self, name: str) -> SaleRecord:
        """Sell one loose copy of a card."""
        entry = self._collection.get(name)
        proceeds = self._collection.sell_one(name)
        logger.info("Sold one copy of '%s' for %s", entry.name, proceeds)
        return self._earnings.record(proceeds, SaleSource.CARD, entry.name)

    # =========================================================================
    # BINDERS
    # =========================================================================

    def create_binder(self, name: str, kind: BinderKind = BinderKind.NON_CURATED) -> None:
        self._binders.create(name, kind)

    def delete_binder(self, name: str) -> int:
        """
        Delete a binder. Every card it held returns to the collection.

        Returns:
            Number of cards returned
        """
        cards = self._binders.delete(name)
        self._return_all(cards)
        return len(cards)

    def add_to_binder(self, binder_name: str, card_name: str) -> Card:
        """
        Move one copy of a card from the collection into a binder.

        Returns:
            The unit now in the binder

        Raises:
            NotFoundError: If the binder or card does not exist
            EmptyStateError: If no loose copies of the card remain
            ValidationFailedError: If the binder kind rejects the card
            CapacityExceededError: If the binder is full
        """
        binder = self._binders.get(binder_name)
        with ExitStack() as undo:
            unit = self._collection.remove_one(card_name)
            undo.callback(self._restore_to_collection, unit, f"binder '{binder.name}'")
            if not self._binders.move_card_in(binder.name, unit):
                raise CapacityExceededError("binder", binder.name, binder.capacity)
            undo.pop_all()
        logger.debug("Moved '%s' into binder '%s'", unit.name, binder.name)
        return unit

    def remove_from_binder(self, binder_name: str, card_name: str) -> Card:
        """Move a card from a binder back to the collection."""
        unit = self._binders.move_card_out(binder_name, card_name)
        return self._collection.add(unit)

    def trade_card(
        self,
        binder_name: str,
        outgoing_name: str,
        incoming_card: Card,
        force: bool = False,
    ) -> bool:
        """
        Swap a card in a trade binder for a card offered by someone else.

        Lopsided trades (value difference of TRADE_CONFIRMATION_THRESHOLD or
        more) are not carried out unless `force` is set; the call returns
        False and leaves the inventory as it was so the caller can ask for
        confirmation and retry with force=True.

        Returns:
            True if the trade completed, False if it needs confirmation

        Raises:
            NotTradableError: If the binder is a sellable kind
            NotFoundError / EmptyStateError: If the outgoing card is not there
            ValidationFailedError: If the incoming card conflicts with the
                collection or is rejected by the binder. A rejected incoming
                card is left in the collection; the outgoing card goes back.
        """
        binder = self._binders.get(binder_name)
        if binder.is_sellable:
            raise NotTradableError(binder.name)

        incoming = incoming_card.unit_copy()
        with ExitStack() as undo:
            outgoing = self._binders.move_card_out(binder.name, outgoing_name)
            undo.callback(binder.try_add, outgoing)

            with ExitStack() as undo_receipt:
                self._collection.add(incoming)
                undo_receipt.callback(self._collection.remove_one, incoming.name)

                difference = abs(incoming.value - outgoing.value)
                if difference >= TRADE_CONFIRMATION_THRESHOLD and not force:
                    logger.info(
                        "Trade of '%s' for '%s' in binder '%s' needs confirmation "
                        "(difference %s)",
                        outgoing.name,
                        incoming.name,
                        binder.name,
                        difference,
                    )
                    # Leaving both blocks unwinds the swap
                    return False
                # Once confirmed, the incoming card stays in the collection
                # even if the binder refuses it below
                undo_receipt.pop_all()

            unit = self._collection.remove_one(incoming.name)
            undo.callback(self._restore_to_collection, unit, f"trade in binder '{binder.name}'")
            if not self._binders.move_card_in(binder.name, unit):
                raise CapacityExceededError("binder", binder.name, binder.capacity)
            undo.pop_all()

        logger.info(
            "Traded '%s' for '%s' in binder '%s'", outgoing.name, incoming.name, binder.name
        )
        return True

    def sell_binder(self, name: str) -> SaleRecord:
        binder_name = self._binders.get(name).name
        proceeds = self._binders.sell(binder_name)
        return self._earnings.record(proceeds, SaleSource.BINDER, binder_name)

    def set_binder_price(self, name: str, price: Decimal | int | float | str) -> None:
        self._binders.set_custom_price(name, to_money(price))

    def binder_custom_price(self, name: str) -> Decimal | None:
        return self._binders.custom_price(name)

    def binder_names(self) -> list[str]:
        return self._binders.names()

    def binder_kind(self, name: str) -> BinderKind:
        return self._binders.kind_of(name)

    def is_binder_empty(self, name: str) -> bool:
        return self._binders.is_empty(name)

    def is_binder_sellable(self, name: str) -> bool:
        return self._binders.is_sellable(name)

    def binder_value(self, name: str) -> Decimal:
        return self._binders.current_value(name)

    def binder_view(self, name: str) -> list[Card]:
        return self._binders.sorted_view(name)

    # =========================================================================
    # DECKS
    # =========================================================================

    def create_deck(self, name: str, sellable: bool = False) -> None:
        self._decks.create(name, sellable)

    def delete_deck(self, name: str) -> int:
        """Delete a deck. Every card it held returns to the collection."""
        cards = self._decks.delete(name)
        self._return_all(cards)
        return len(cards)

    def add_to_deck(self, deck_name: str, card_name: str) -> Card:
        """
        Move one copy of a card from the collection into a deck.

        Raises:
            NotFoundError: If the deck or card does not exist
            EmptyStateError: If no loose copies of the card remain
            CapacityExceededError: If the deck is full
            DuplicateCardError: If the deck already holds this card
            ValidationFailedError: If a different card with the same name is in the deck
        """
        deck = self._decks.get(deck_name)
        with ExitStack() as undo:
            unit = self._collection.remove_one(card_name)
            undo.callback(self._restore_to_collection, unit, f"deck '{deck.name}'")
            if not self._decks.move_card_in(deck.name, unit):
                if deck.is_full():
                    raise CapacityExceededError("deck", deck.name, deck.capacity)
                raise DuplicateCardError(deck.name, unit.name)
            undo.pop_all()
        logger.debug("Moved '%s' into deck '%s'", unit.name, deck.name)
        return unit

    def remove_from_deck(self, deck_name: str, card_name: str) -> Card:
        """Move a card from a deck back to the collection."""
        unit = self._decks.move_card_out(deck_name, card_name)
        return self._collection.add(unit)

    def sell_deck(self, name: str) -> SaleRecord:
        deck_name = self._decks.get(name).name
        proceeds = self._decks.sell(deck_name)
        return self._earnings.record(proceeds, SaleSource.DECK, deck_name)

    def deck_names(self) -> list[str]:
        return self._decks.names()

    def is_deck_empty(self, name: str) -> bool:
        return self._decks.is_empty(name)

    def is_deck_sellable(self, name: str) -> bool:
        return self._decks.is_sellable(name)

    def deck_value(self, name: str) -> Decimal:
        return self._decks.current_value(name)

    def deck_view(self, name: str) -> list[Card]:
        return self._decks.sorted_view(name)

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _restore_to_collection(self, unit: Card, target: str) -> None:
        logger.warning("Rolling back move of '%s' into %s", unit.name, target)
        self._collection.add(unit)

    def _return_all(self, cards: list[Card]) -> None:
        for card in cards:
            self._collection.add(card)

"""
Binder registry.

Binders are keyed by normalized name, so "Trades" and " trades " are the
same binder. A sold binder is unregistered; its cards are gone with it.
"""

import logging
from decimal import Decimal

from cardkeeper.models.binder import Binder, BinderKind
from cardkeeper.models.card import Card, normalize_name
from cardkeeper.models.failure import AlreadyExistsError, NotFoundError, ValidationFailedError

logger = logging.getLogger(__name__)


class BinderManager:
    """Name-keyed registry of binders."""

    def __init__(self) -> None:
        self._binders: dict[str, Binder] = {}

    def __contains__(self, name: str) -> bool:
        return normalize_name(name) in self._binders

    def __len__(self) -> int:
        return len(self._binders)

    def get(self, name: str) -> Binder:
        binder = self._binders.get(normalize_name(name))
        if binder is None:
            raise NotFoundError("binder", name.strip())
        return binder

    def create(self, name: str, kind: BinderKind = BinderKind.NON_CURATED) -> Binder:
        """
        Register a new binder of the given kind.

        Raises:
            AlreadyExistsError: If a binder with this name exists
            ValidationFailedError: If the name is blank
        """
        binder = Binder(name=name, kind=kind)
        key = normalize_name(binder.name)
        if key in self._binders:
            raise AlreadyExistsError("binder", binder.name)
        self._binders[key] = binder
        logger.info("Created %s binder '%s'", binder.kind.value, binder.name)
        return binder

    def delete(self, name: str) -> list[Card]:
        """Unregister a binder, returning the cards it held."""
        binder = self.get(name)
        cards = binder.remove_all()
        del self._binders[normalize_name(binder.name)]
        logger.info("Deleted binder '%s' (%d cards released)", binder.name, len(cards))
        return cards

    def sell(self, name: str) -> Decimal:
        """
        Sell a binder and unregister it.

        Raises:
            NotFoundError: If the binder does not exist
            NotSellableError: If the binder kind cannot be sold
        """
        binder = self.get(name)
        proceeds = binder.sell()
        del self._binders[normalize_name(binder.name)]
        logger.info("Sold binder '%s' for %s", binder.name, proceeds)
        return proceeds

    def move_card_in(self, name: str, card: Card) -> bool:
        return self.get(name).try_add(card)

    def move_card_out(self, name: str, card_name: str) -> Card:
        return self.get(name).remove_by_name(card_name)

    def names(self) -> list[str]:
        """Binder names in creation order."""
        return [binder.name for binder in self._binders.values()]

    def kind_of(self, name: str) -> BinderKind:
        return self.get(name).kind

    def is_empty(self, name: str) -> bool:
        return self.get(name).is_empty()

    def is_sellable(self, name: str) -> bool:
        return self.get(name).is_sellable

    def current_value(self, name: str) -> Decimal:
        return self.get(name).current_value()

    def set_custom_price(self, name: str, price: Decimal) -> None:
        binder = self.get(name)
        binder.set_custom_price(price)
        logger.info("Set custom price of binder '%s' to %s", binder.name, price)

    def custom_price(self, name: str) -> Decimal | None:
        """
        Custom price of a luxury binder, None if never set.

        Raises:
            ValidationFailedError: If the binder is not a luxury binder
        """
        binder = self.get(name)
        if binder.kind != BinderKind.LUXURY:
            raise ValidationFailedError(f"Binder '{binder.name}' is not a luxury binder")
        return binder.custom_price

    def sorted_view(self, name: str) -> list[Card]:
        return self.get(name).sorted_view()

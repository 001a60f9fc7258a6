"""
CardKeeper services.

Registries for binders and decks, and the inventory facade that moves
cards between them and the collection.
"""

from cardkeeper.services.binder_manager import BinderManager
from cardkeeper.services.deck_manager import DeckManager
from cardkeeper.services.inventory import TRADE_CONFIRMATION_THRESHOLD, InventorySystem

__all__ = [
    "BinderManager",
    "DeckManager",
    "InventorySystem",
    "TRADE_CONFIRMATION_THRESHOLD",
]

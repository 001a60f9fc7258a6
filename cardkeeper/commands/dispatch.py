"""
Command definitions for the presentation layer.

A menu, prompt loop or any other front end drives the inventory through
named commands. Every command returns a finalized ApiResponse: domain
errors become known failures or refusals, anything else becomes the
fixed unknown failure.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

from cardkeeper.commands.views import (
    CardSummary,
    ContainerSummary,
    DeletionReceipt,
    EarningsSummary,
    SaleReceipt,
    TradeOutcome,
)
from cardkeeper.models.binder import BinderKind
from cardkeeper.models.card import Card, Rarity, Variation
from cardkeeper.models.earnings import SaleRecord
from cardkeeper.models.failure import (
    ApiResponse,
    KnownError,
    RefusalError,
    ValidationFailedError,
    create_failure,
    create_success,
    create_unknown_failure,
)
from cardkeeper.services.inventory import InventorySystem

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


@dataclass
class CommandDefinition:
    """Definition of an inventory command."""

    name: str
    description: str
    parameters: dict[str, Any]


def _params(properties: dict[str, dict[str, Any]], required: list[str]) -> dict[str, Any]:
    return {"type": "object", "properties": properties, "required": required}


_NAME = {"type": "string", "description": "Card name"}
_BINDER = {"type": "string", "description": "Binder name"}
_DECK = {"type": "string", "description": "Deck name"}
_CARD_PROPERTIES: dict[str, dict[str, Any]] = {
    "name": _NAME,
    "rarity": {"type": "string", "enum": [r.value for r in Rarity]},
    "variation": {"type": "string", "enum": [v.value for v in Variation]},
    "base_value": {"type": "string", "description": "Decimal amount, e.g. '4.50'"},
}

COMMAND_DEFINITIONS: list[CommandDefinition] = [
    # Collection
    CommandDefinition(
        name="add_card",
        description="Add a card to the collection (merges with an identical card).",
        parameters=_params(
            {**_CARD_PROPERTIES, "count": {"type": "integer", "default": 1}},
            ["name", "rarity", "variation", "base_value"],
        ),
    ),
    CommandDefinition(
        name="find_card",
        description="Look up a card in the collection by name.",
        parameters=_params({"name": _NAME}, ["name"]),
    ),
    CommandDefinition(
        name="increment_card",
        description="Increase a card's count by one.",
        parameters=_params({"name": _NAME}, ["name"]),
    ),
    CommandDefinition(
        name="decrement_card",
        description="Decrease a card's count by one.",
        parameters=_params({"name": _NAME}, ["name"]),
    ),
    CommandDefinition(
        name="sell_card",
        description="Sell one loose copy of a card.",
        parameters=_params({"name": _NAME}, ["name"]),
    ),
    CommandDefinition(
        name="view_collection",
        description="List the collection sorted by name.",
        parameters=_params({}, []),
    ),
    # Binders
    CommandDefinition(
        name="create_binder",
        description="Create a binder of the given kind.",
        parameters=_params(
            {
                "name": _BINDER,
                "kind": {
                    "type": "string",
                    "enum": [k.value for k in BinderKind],
                    "default": BinderKind.NON_CURATED.value,
                },
            },
            ["name"],
        ),
    ),
    CommandDefinition(
        name="delete_binder",
        description="Delete a binder, returning its cards to the collection.",
        parameters=_params({"name": _BINDER}, ["name"]),
    ),
    CommandDefinition(
        name="add_to_binder",
        description="Move one copy of a card from the collection into a binder.",
        parameters=_params({"binder": _BINDER, "card": _NAME}, ["binder", "card"]),
    ),
    CommandDefinition(
        name="remove_from_binder",
        description="Move a card from a binder back to the collection.",
        parameters=_params({"binder": _BINDER, "card": _NAME}, ["binder", "card"]),
    ),
    CommandDefinition(
        name="trade_card",
        description="Trade a card out of a binder for an incoming card.",
        parameters=_params(
            {
                "binder": _BINDER,
                "outgoing": _NAME,
                "incoming": {"type": "object", "properties": _CARD_PROPERTIES},
                "force": {"type": "boolean", "default": False},
            },
            ["binder", "outgoing", "incoming"],
        ),
    ),
    CommandDefinition(
        name="set_binder_price",
        description="Set the sale price of a luxury binder.",
        parameters=_params(
            {"name": _BINDER, "price": {"type": "string", "description": "Decimal amount"}},
            ["name", "price"],
        ),
    ),
    CommandDefinition(
        name="sell_binder",
        description="Sell a sellable binder.",
        parameters=_params({"name": _BINDER}, ["name"]),
    ),
    CommandDefinition(
        name="view_binder",
        description="Show a binder and its cards.",
        parameters=_params({"name": _BINDER}, ["name"]),
    ),
    CommandDefinition(
        name="list_binders",
        description="List binder names.",
        parameters=_params({}, []),
    ),
    # Decks
    CommandDefinition(
        name="create_deck",
        description="Create a deck.",
        parameters=_params(
            {"name": _DECK, "sellable": {"type": "boolean", "default": False}},
            ["name"],
        ),
    ),
    CommandDefinition(
        name="delete_deck",
        description="Delete a deck, returning its cards to the collection.",
        parameters=_params({"name": _DECK}, ["name"]),
    ),
    CommandDefinition(
        name="add_to_deck",
        description="Move one copy of a card from the collection into a deck.",
        parameters=_params({"deck": _DECK, "card": _NAME}, ["deck", "card"]),
    ),
    CommandDefinition(
        name="remove_from_deck",
        description="Move a card from a deck back to the collection.",
        parameters=_params({"deck": _DECK, "card": _NAME}, ["deck", "card"]),
    ),
    CommandDefinition(
        name="sell_deck",
        description="Sell a sellable deck.",
        parameters=_params({"name": _DECK}, ["name"]),
    ),
    CommandDefinition(
        name="view_deck",
        description="Show a deck and its cards.",
        parameters=_params({"name": _DECK}, ["name"]),
    ),
    CommandDefinition(
        name="list_decks",
        description="List deck names.",
        parameters=_params({}, []),
    ),
    # Earnings
    CommandDefinition(
        name="get_earnings",
        description="Show total earnings from sales.",
        parameters=_params({}, []),
    ),
]

COMMAND_NAMES = frozenset(command.name for command in COMMAND_DEFINITIONS)


def _parse_enum(enum_cls: type[E], value: Any, label: str) -> E:
    try:
        return enum_cls(value)
    except ValueError as e:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationFailedError(
            f"Unknown {label} '{value}'",
            suggestion=f"Use one of: {allowed}",
        ) from e


def _card_from_arguments(arguments: dict[str, Any]) -> Card:
    return Card(
        name=arguments["name"],
        rarity=_parse_enum(Rarity, arguments["rarity"], "rarity"),
        variation=_parse_enum(Variation, arguments["variation"], "variation"),
        base_value=arguments["base_value"],
        count=arguments.get("count", 1),
    )


def _receipt(inventory: InventorySystem, record: SaleRecord) -> SaleReceipt:
    return SaleReceipt.from_record(record, inventory.collector_earnings)


def _run(inventory: InventorySystem, command_name: str, arguments: dict[str, Any]) -> Any:
    if command_name == "add_card":
        entry = inventory.add_card(_card_from_arguments(arguments))
        return CardSummary.from_card(entry)
    elif command_name == "find_card":
        card = inventory.find_card(arguments["name"])
        return CardSummary.from_card(card) if card is not None else None
    elif command_name == "increment_card":
        inventory.increment_card(arguments["name"])
        return CardSummary.from_card(inventory.collection.get(arguments["name"]))
    elif command_name == "decrement_card":
        inventory.decrement_card(arguments["name"])
        return CardSummary.from_card(inventory.collection.get(arguments["name"]))
    elif command_name == "sell_card":
        return _receipt(inventory, inventory.sell_card(arguments["name"]))
    elif command_name == "view_collection":
        return [CardSummary.from_card(card) for card in inventory.collection_view()]
    elif command_name == "create_binder":
        kind = _parse_enum(
            BinderKind, arguments.get("kind", BinderKind.NON_CURATED.value), "binder kind"
        )
        inventory.create_binder(arguments["name"], kind)
        return ContainerSummary.from_binder(inventory.binders.get(arguments["name"]))
    elif command_name == "delete_binder":
        name = inventory.binders.get(arguments["name"]).name
        return DeletionReceipt(
            container="binder", name=name, returned_cards=inventory.delete_binder(name)
        )
    elif command_name == "add_to_binder":
        unit = inventory.add_to_binder(arguments["binder"], arguments["card"])
        return CardSummary.from_card(unit)
    elif command_name == "remove_from_binder":
        entry = inventory.remove_from_binder(arguments["binder"], arguments["card"])
        return CardSummary.from_card(entry)
    elif command_name == "trade_card":
        incoming = _card_from_arguments(arguments["incoming"])
        completed = inventory.trade_card(
            arguments["binder"],
            arguments["outgoing"],
            incoming,
            force=arguments.get("force", False),
        )
        return TradeOutcome(
            completed=completed,
            needs_confirmation=not completed,
            binder=arguments["binder"],
            outgoing=arguments["outgoing"],
            incoming=incoming.name,
        )
    elif command_name == "set_binder_price":
        inventory.set_binder_price(arguments["name"], arguments["price"])
        return ContainerSummary.from_binder(inventory.binders.get(arguments["name"]))
    elif command_name == "sell_binder":
        return _receipt(inventory, inventory.sell_binder(arguments["name"]))
    elif command_name == "view_binder":
        return ContainerSummary.from_binder(inventory.binders.get(arguments["name"]))
    elif command_name == "list_binders":
        return inventory.binder_names()
    elif command_name == "create_deck":
        inventory.create_deck(arguments["name"], sellable=arguments.get("sellable", False))
        return ContainerSummary.from_deck(inventory.decks.get(arguments["name"]))
    elif command_name == "delete_deck":
        name = inventory.decks.get(arguments["name"]).name
        return DeletionReceipt(
            container="deck", name=name, returned_cards=inventory.delete_deck(name)
        )
    elif command_name == "add_to_deck":
        unit = inventory.add_to_deck(arguments["deck"], arguments["card"])
        return CardSummary.from_card(unit)
    elif command_name == "remove_from_deck":
        entry = inventory.remove_from_deck(arguments["deck"], arguments["card"])
        return CardSummary.from_card(entry)
    elif command_name == "sell_deck":
        return _receipt(inventory, inventory.sell_deck(arguments["name"]))
    elif command_name == "view_deck":
        return ContainerSummary.from_deck(inventory.decks.get(arguments["name"]))
    elif command_name == "list_decks":
        return inventory.deck_names()
    elif command_name == "get_earnings":
        return EarningsSummary.from_ledger(inventory.earnings)
    raise ValueError(f"Unknown command: {command_name}")


def execute_command(
    inventory: InventorySystem,
    command_name: str,
    arguments: dict[str, Any] | None = None,
) -> ApiResponse[Any]:
    """
    Execute an inventory command by name.

    Args:
        inventory: The session's inventory
        command_name: Name of a command in COMMAND_DEFINITIONS
        arguments: Command arguments

    Returns:
        A finalized response envelope

    Raises:
        ValueError: If the command name is unknown
    """
    if command_name not in COMMAND_NAMES:
        raise ValueError(f"Unknown command: {command_name}")

    try:
        data = _run(inventory, command_name, arguments or {})
    except (KnownError, RefusalError) as e:
        logger.info("Command %s failed: %s", command_name, e.message)
        return create_failure(e)
    except KeyError as e:
        return create_failure(
            ValidationFailedError(
                f"Missing argument {e} for command '{command_name}'",
                suggestion="Check the command's required parameters.",
            )
        )
    except Exception as e:
        logger.exception("Command execution error for %s", command_name)
        return create_unknown_failure(e)

    return create_success(data)

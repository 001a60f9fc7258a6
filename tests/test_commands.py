"""Tests for command definitions and dispatch."""

from decimal import Decimal
from typing import Any

import pytest

from cardkeeper.commands.dispatch import COMMAND_DEFINITIONS, COMMAND_NAMES, execute_command
from cardkeeper.commands.views import (
    CardSummary,
    ContainerSummary,
    DeletionReceipt,
    EarningsSummary,
    SaleReceipt,
    TradeOutcome,
    format_money,
)
from cardkeeper.models.failure import FailureKind, OutcomeType, is_finalized
from cardkeeper.services.inventory import InventorySystem


def _add(inventory: InventorySystem, name: str, **overrides: Any) -> None:
    arguments = {
        "name": name,
        "rarity": "common",
        "variation": "normal",
        "base_value": "1.00",
        **overrides,
    }
    response = execute_command(inventory, "add_card", arguments)
    assert response.ok


class TestCommandDefinitions:
    def test_all_commands_have_required_fields(self) -> None:
        """All command definitions have name, description, and parameters."""
        for command in COMMAND_DEFINITIONS:
            assert command.name
            assert command.description
            assert command.parameters["type"] == "object"
            assert "properties" in command.parameters

    def test_names_are_unique(self) -> None:
        assert len(COMMAND_NAMES) == len(COMMAND_DEFINITIONS)

    def test_required_parameters_are_declared(self) -> None:
        for command in COMMAND_DEFINITIONS:
            for required in command.parameters["required"]:
                assert required in command.parameters["properties"]

    def test_unknown_command_raises(self, inventory: InventorySystem) -> None:
        with pytest.raises(ValueError, match="Unknown command"):
            execute_command(inventory, "burn_everything")


class TestCollectionCommands:
    def test_add_card_returns_summary(self, inventory: InventorySystem) -> None:
        response = execute_command(
            inventory,
            "add_card",
            {"name": "Shock", "rarity": "rare", "variation": "full_art", "base_value": "2.50"},
        )

        assert is_finalized(response)
        assert isinstance(response.data, CardSummary)
        assert response.data.value == Decimal("5.00")
        assert response.data.display_value == "$5.00"

    def test_bad_rarity_is_validation_failure(self, inventory: InventorySystem) -> None:
        response = execute_command(
            inventory,
            "add_card",
            {"name": "Shock", "rarity": "mythic", "variation": "normal", "base_value": "1"},
        )

        assert response.outcome == OutcomeType.KNOWN_FAILURE
        assert response.failure is not None
        assert response.failure.kind == FailureKind.VALIDATION_FAILED
        assert response.failure.suggestion is not None
        assert "legendary" in response.failure.suggestion

    def test_find_missing_card_is_success_with_no_data(self, inventory: InventorySystem) -> None:
        response = execute_command(inventory, "find_card", {"name": "Shock"})
        assert response.ok
        assert response.data is None

    def test_increment_and_decrement(self, inventory: InventorySystem) -> None:
        _add(inventory, "Shock")
        assert execute_command(inventory, "increment_card", {"name": "shock"}).data.count == 2
        assert execute_command(inventory, "decrement_card", {"name": "shock"}).data.count == 1

    def test_view_collection_sorted(self, inventory: InventorySystem) -> None:
        _add(inventory, "Shock")
        _add(inventory, "Bolt")
        response = execute_command(inventory, "view_collection")
        assert [card.name for card in response.data] == ["Bolt", "Shock"]

    def test_sell_card_receipt(self, inventory: InventorySystem) -> None:
        _add(inventory, "Shock", base_value="2.00")
        response = execute_command(inventory, "sell_card", {"name": "Shock"})

        assert isinstance(response.data, SaleReceipt)
        assert response.data.source == "card"
        assert response.data.amount == Decimal("2.00")
        assert response.data.total_earnings == Decimal("2.00")

    def test_missing_card_is_known_failure(self, inventory: InventorySystem) -> None:
        response = execute_command(inventory, "sell_card", {"name": "Shock"})

        assert is_finalized(response)
        assert response.outcome == OutcomeType.KNOWN_FAILURE
        assert response.failure is not None
        assert response.failure.kind == FailureKind.NOT_FOUND


class TestContainerCommands:
    def test_create_and_view_binder(self, inventory: InventorySystem) -> None:
        _add(inventory, "Dragon", rarity="rare", base_value="10.00")
        execute_command(inventory, "create_binder", {"name": "Rares", "kind": "rares"})
        execute_command(inventory, "add_to_binder", {"binder": "Rares", "card": "Dragon"})

        response = execute_command(inventory, "view_binder", {"name": "rares"})

        assert isinstance(response.data, ContainerSummary)
        assert response.data.kind == "rares"
        assert response.data.sellable is True
        assert response.data.capacity == 20
        assert response.data.current_value == Decimal("10.00")
        assert [card.name for card in response.data.cards] == ["Dragon"]

    def test_unknown_binder_kind(self, inventory: InventorySystem) -> None:
        response = execute_command(inventory, "create_binder", {"name": "X", "kind": "gold"})
        assert response.failure is not None
        assert response.failure.kind == FailureKind.VALIDATION_FAILED

    def test_duplicate_binder(self, inventory: InventorySystem) -> None:
        execute_command(inventory, "create_binder", {"name": "Trades"})
        response = execute_command(inventory, "create_binder", {"name": "trades"})
        assert response.failure is not None
        assert response.failure.kind == FailureKind.ALREADY_EXISTS

    def test_selling_non_curated_binder_is_refusal(self, inventory: InventorySystem) -> None:
        execute_command(inventory, "create_binder", {"name": "Trades"})
        response = execute_command(inventory, "sell_binder", {"name": "Trades"})

        assert response.outcome == OutcomeType.REFUSAL
        assert response.failure is not None
        assert response.failure.kind == FailureKind.NOT_SELLABLE

    def test_full_binder_reports_capacity(self, inventory: InventorySystem) -> None:
        _add(inventory, "Filler", count=21)
        execute_command(inventory, "create_binder", {"name": "Trades"})
        for _ in range(20):
            execute_command(inventory, "add_to_binder", {"binder": "Trades", "card": "Filler"})

        response = execute_command(
            inventory, "add_to_binder", {"binder": "Trades", "card": "Filler"}
        )

        assert response.failure is not None
        assert response.failure.kind == FailureKind.CAPACITY_EXCEEDED
        assert execute_command(inventory, "find_card", {"name": "Filler"}).data.count == 1

    def test_luxury_price_and_sale(self, inventory: InventorySystem) -> None:
        _add(inventory, "Angel", variation="alt_art", base_value="5.00")
        execute_command(inventory, "create_binder", {"name": "Shiny", "kind": "luxury"})
        execute_command(inventory, "add_to_binder", {"binder": "Shiny", "card": "Angel"})

        priced = execute_command(inventory, "set_binder_price", {"name": "Shiny", "price": "30"})
        assert priced.data.custom_price == Decimal("30")

        sold = execute_command(inventory, "sell_binder", {"name": "Shiny"})
        assert sold.data.amount == Decimal("33.00")
        assert execute_command(inventory, "list_binders").data == []

    def test_delete_binder_reports_returned_cards(self, inventory: InventorySystem) -> None:
        _add(inventory, "Shock")
        execute_command(inventory, "create_binder", {"name": "Trades"})
        execute_command(inventory, "add_to_binder", {"binder": "Trades", "card": "Shock"})

        response = execute_command(inventory, "delete_binder", {"name": "Trades"})

        assert isinstance(response.data, DeletionReceipt)
        assert response.data.container == "binder"
        assert response.data.name == "Trades"
        assert response.data.returned_cards == 1

    def test_delete_deck_reports_returned_cards(self, inventory: InventorySystem) -> None:
        _add(inventory, "Shock")
        execute_command(inventory, "create_deck", {"name": "Burn"})
        execute_command(inventory, "add_to_deck", {"deck": "Burn", "card": "Shock"})

        response = execute_command(inventory, "delete_deck", {"name": "burn"})

        assert isinstance(response.data, DeletionReceipt)
        assert response.data.container == "deck"
        assert response.data.name == "Burn"
        assert response.data.returned_cards == 1
        assert execute_command(inventory, "find_card", {"name": "Shock"}).data.count == 1

    def test_delete_missing_deck_is_not_found(self, inventory: InventorySystem) -> None:
        response = execute_command(inventory, "delete_deck", {"name": "Burn"})
        assert response.failure is not None
        assert response.failure.kind == FailureKind.NOT_FOUND

    def test_deck_duplicate(self, inventory: InventorySystem) -> None:
        _add(inventory, "Shock", count=2)
        execute_command(inventory, "create_deck", {"name": "Burn"})
        execute_command(inventory, "add_to_deck", {"deck": "Burn", "card": "Shock"})

        response = execute_command(inventory, "add_to_deck", {"deck": "Burn", "card": "Shock"})

        assert response.failure is not None
        assert response.failure.kind == FailureKind.DUPLICATE_CARD

    def test_sellable_deck_round_trip(self, inventory: InventorySystem) -> None:
        _add(inventory, "Shock", base_value="1.50")
        created = execute_command(inventory, "create_deck", {"name": "Sale", "sellable": True})
        assert created.data.kind == "sellable_deck"

        execute_command(inventory, "add_to_deck", {"deck": "Sale", "card": "Shock"})
        execute_command(inventory, "remove_from_deck", {"deck": "Sale", "card": "Shock"})
        execute_command(inventory, "add_to_deck", {"deck": "Sale", "card": "Shock"})
        view = execute_command(inventory, "view_deck", {"name": "Sale"})
        assert view.data.card_count == 1

        sold = execute_command(inventory, "sell_deck", {"name": "Sale"})
        assert sold.data.source == "deck"
        assert execute_command(inventory, "list_decks").data == []


class TestTradeCommand:
    @pytest.fixture
    def trade_ready(self, inventory: InventorySystem) -> InventorySystem:
        _add(inventory, "Outgoing", base_value="5.00")
        execute_command(inventory, "create_binder", {"name": "Trades"})
        execute_command(inventory, "add_to_binder", {"binder": "Trades", "card": "Outgoing"})
        return inventory

    def _trade(self, inventory: InventorySystem, base_value: str, force: bool = False) -> Any:
        return execute_command(
            inventory,
            "trade_card",
            {
                "binder": "Trades",
                "outgoing": "Outgoing",
                "incoming": {
                    "name": "Incoming",
                    "rarity": "common",
                    "variation": "normal",
                    "base_value": base_value,
                },
                "force": force,
            },
        )

    def test_lopsided_trade_asks_for_confirmation(self, trade_ready: InventorySystem) -> None:
        response = self._trade(trade_ready, "6.00")

        assert response.ok
        assert isinstance(response.data, TradeOutcome)
        assert response.data.completed is False
        assert response.data.needs_confirmation is True

    def test_confirmed_trade_completes(self, trade_ready: InventorySystem) -> None:
        response = self._trade(trade_ready, "6.00", force=True)

        assert response.data.completed is True
        view = execute_command(trade_ready, "view_binder", {"name": "Trades"})
        assert [card.name for card in view.data.cards] == ["Incoming"]

    def test_trade_from_sellable_binder_is_refusal(self, inventory: InventorySystem) -> None:
        _add(inventory, "Outgoing")
        execute_command(inventory, "create_binder", {"name": "Trades", "kind": "pauper"})
        execute_command(inventory, "add_to_binder", {"binder": "Trades", "card": "Outgoing"})

        response = self._trade(inventory, "1.00")

        assert response.outcome == OutcomeType.REFUSAL
        assert response.failure is not None
        assert response.failure.kind == FailureKind.NOT_TRADABLE


class TestEnvelopeClassification:
    def test_missing_argument_is_validation_failure(self, inventory: InventorySystem) -> None:
        response = execute_command(inventory, "create_binder", {})

        assert is_finalized(response)
        assert response.failure is not None
        assert response.failure.kind == FailureKind.VALIDATION_FAILED
        assert "'name'" in response.failure.message

    def test_unexpected_error_is_unknown_failure(self, inventory: InventorySystem) -> None:
        response = execute_command(inventory, "find_card", {"name": None})

        assert is_finalized(response)
        assert response.outcome == OutcomeType.UNKNOWN_FAILURE
        assert response.failure is not None
        assert response.failure.detail == "AttributeError"

    def test_earnings(self, inventory: InventorySystem) -> None:
        _add(inventory, "Shock", base_value="2.00", count=2)
        execute_command(inventory, "sell_card", {"name": "Shock"})
        execute_command(inventory, "sell_card", {"name": "Shock"})

        response = execute_command(inventory, "get_earnings")

        assert isinstance(response.data, EarningsSummary)
        assert response.data.total == Decimal("4.00")
        assert response.data.display_total == "$4.00"
        assert response.data.sales == 2


class TestFormatMoney:
    def test_two_decimals(self) -> None:
        assert format_money(Decimal("3")) == "$3.00"
        assert format_money(Decimal("12.5")) == "$12.50"

from cardkeeper.commands.dispatch import (
    COMMAND_DEFINITIONS,
    COMMAND_NAMES,
    CommandDefinition,
    execute_command,
)
from cardkeeper.commands.views import (
    CardSummary,
    ContainerSummary,
    DeletionReceipt,
    EarningsSummary,
    SaleReceipt,
    TradeOutcome,
    format_money,
)

__all__ = [
    "COMMAND_DEFINITIONS",
    "COMMAND_NAMES",
    "CardSummary",
    "CommandDefinition",
    "ContainerSummary",
    "DeletionReceipt",
    "EarningsSummary",
    "SaleReceipt",
    "TradeOutcome",
    "execute_command",
    "format_money",
]

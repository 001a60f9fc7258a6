from cardkeeper.models.binder import (
    BINDER_CAPACITY,
    HANDLING_RATE,
    SALE_TERMS,
    Binder,
    BinderKind,
    SaleTerms,
    policy_violation,
)
from cardkeeper.models.card import (
    VARIATION_MULTIPLIERS,
    Card,
    CardIdentity,
    Rarity,
    Variation,
    normalize_name,
    round_money,
    to_money,
)
from cardkeeper.models.collection import CardCollection
from cardkeeper.models.deck import DECK_CAPACITY, Deck
from cardkeeper.models.earnings import EarningsLedger, SaleRecord, SaleSource
from cardkeeper.models.failure import (
    STANDARD_MESSAGES,
    STANDARD_SUGGESTIONS,
    AlreadyExistsError,
    ApiResponse,
    CapacityExceededError,
    DuplicateCardError,
    EmptyStateError,
    FailureDetail,
    FailureKind,
    KnownError,
    NotFoundError,
    NotSellableError,
    NotTradableError,
    OutcomeType,
    RefusalError,
    ValidationFailedError,
    create_failure,
    create_success,
    create_unknown_failure,
    finalize_response,
    is_finalized,
)

__all__ = [
    "AlreadyExistsError",
    "ApiResponse",
    "BINDER_CAPACITY",
    "Binder",
    "BinderKind",
    "CapacityExceededError",
    "Card",
    "CardCollection",
    "CardIdentity",
    "DECK_CAPACITY",
    "Deck",
    "DuplicateCardError",
    "EarningsLedger",
    "EmptyStateError",
    "FailureDetail",
    "FailureKind",
    "HANDLING_RATE",
    "KnownError",
    "NotFoundError",
    "NotSellableError",
    "NotTradableError",
    "OutcomeType",
    "Rarity",
    "RefusalError",
    "SALE_TERMS",
    "STANDARD_MESSAGES",
    "STANDARD_SUGGESTIONS",
    "SaleRecord",
    "SaleSource",
    "SaleTerms",
    "VARIATION_MULTIPLIERS",
    "ValidationFailedError",
    "Variation",
    "create_failure",
    "create_success",
    "create_unknown_failure",
    "finalize_response",
    "is_finalized",
    "normalize_name",
    "policy_violation",
    "round_money",
    "to_money",
]

"""
Failure Envelope — Unified Outcome Classification for Inventory Commands.

Every inventory operation either succeeds or fails with a classified,
explainable error. The presentation layer never sees a raw exception:
commands are wrapped in the response envelope defined here.

Response types:
- Success: Operation completed successfully
- Refusal: The target lacks the capability (not sellable, not tradable)
- KnownFailure: The system knows why it failed (not found, empty, full...)
- UnknownFailure: The system does not know why it failed

AUTHORITY BOUNDARY:
All envelopes handed to the presentation layer pass through
`finalize_response()`.
"""

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field, PrivateAttr


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Lookup failures
    NOT_FOUND = "not_found"
    EMPTY_STATE = "empty_state"
    ALREADY_EXISTS = "already_exists"

    # Constraint violations
    VALIDATION_FAILED = "validation_failed"
    CAPACITY_EXCEEDED = "capacity_exceeded"
    DUPLICATE_CARD = "duplicate_card"

    # Capability refusals
    NOT_SELLABLE = "not_sellable"
    NOT_TRADABLE = "not_tradable"

    # Unknown
    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    """High-level outcome classification."""

    SUCCESS = "success"
    REFUSAL = "refusal"
    KNOWN_FAILURE = "known_failure"
    UNKNOWN_FAILURE = "unknown_failure"


T = TypeVar("T")


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


class ApiResponse(BaseModel, Generic[T]):
    """
    Universal response envelope for inventory commands.

    Every response is classified into one of four outcome types,
    ensuring no failure reaches the user unexplained.
    """

    outcome: OutcomeType = Field(
        ...,
        description="High-level classification of the result",
    )
    data: T | None = Field(
        default=None,
        description="Response data (present on success)",
    )
    failure: FailureDetail | None = Field(
        default=None,
        description="Failure details (present on non-success)",
    )

    # Set only by finalize_response; lives and dies with the response
    _finalized: bool = PrivateAttr(default=False)

    @property
    def ok(self) -> bool:
        return self.outcome == OutcomeType.SUCCESS

    @classmethod
    def refusal(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> "ApiResponse[Any]":
        """Create a refusal response (capability missing)."""
        return cls(
            outcome=OutcomeType.REFUSAL,
            failure=FailureDetail(
                kind=kind,
                message=message,
                detail=detail,
                suggestion=suggestion,
            ),
        )

    @classmethod
    def known_failure(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> "ApiResponse[Any]":
        """Create a known failure response."""
        return cls(
            outcome=OutcomeType.KNOWN_FAILURE,
            failure=FailureDetail(
                kind=kind,
                message=message,
                detail=detail,
                suggestion=suggestion,
            ),
        )


# =============================================================================
# EXCEPTION BASES
# =============================================================================


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        super().__init__(message)

    def to_response(self) -> ApiResponse[Any]:
        """Convert to an ApiResponse."""
        return ApiResponse.known_failure(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class RefusalError(Exception):
    """
    Exception for capability-based refusals.

    Use when the operation is valid in general but the target
    variant does not support it (e.g. selling a non-curated binder).
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        super().__init__(message)

    def to_response(self) -> ApiResponse[Any]:
        """Convert to an ApiResponse."""
        return ApiResponse.refusal(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


# =============================================================================
# INVENTORY ERRORS
# =============================================================================


class NotFoundError(KnownError):
    """A referenced card, binder or deck does not exist."""

    def __init__(self, what: str, name: str, where: str | None = None):
        self.what = what
        self.name = name
        location = f" in {where}" if where else ""
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message=f"{what.capitalize()} '{name}' not found{location}",
            suggestion=f"Check the {what} name and try again.",
        )


class EmptyStateError(KnownError):
    """
    The name is valid but there is nothing to take.

    Distinct from NotFoundError: the card or container exists,
    its quantity is zero.
    """

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.EMPTY_STATE,
            message=message,
            detail=detail,
        )


class AlreadyExistsError(KnownError):
    """A binder or deck with this name is already registered."""

    def __init__(self, what: str, name: str):
        self.what = what
        self.name = name
        super().__init__(
            kind=FailureKind.ALREADY_EXISTS,
            message=f"{what.capitalize()} '{name}' already exists",
            suggestion=f"Pick a different {what} name.",
        )


class ValidationFailedError(KnownError):
    """
    A value or card violates a domain rule.

    Raised for container acceptance policies, attribute conflicts on a
    name collision, custom prices below the floor and malformed input.
    """

    def __init__(
        self,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ):
        super().__init__(
            kind=FailureKind.VALIDATION_FAILED,
            message=message,
            detail=detail,
            suggestion=suggestion,
        )


class CapacityExceededError(KnownError):
    """A move targeted a full container. Another container may still fit."""

    def __init__(self, what: str, name: str, capacity: int):
        self.capacity = capacity
        super().__init__(
            kind=FailureKind.CAPACITY_EXCEEDED,
            message=f"{what.capitalize()} '{name}' is full",
            detail=f"capacity={capacity}",
            suggestion=f"Remove a card or choose another {what}.",
        )


class DuplicateCardError(KnownError):
    """A deck already holds a copy of this card."""

    def __init__(self, deck_name: str, card_name: str):
        super().__init__(
            kind=FailureKind.DUPLICATE_CARD,
            message=f"Deck '{deck_name}' already contains '{card_name}'",
            suggestion="Decks hold one copy of each card.",
        )


class NotSellableError(RefusalError):
    """The binder or deck variant cannot be sold."""

    def __init__(self, what: str, name: str):
        super().__init__(
            kind=FailureKind.NOT_SELLABLE,
            message=f"{what.capitalize()} '{name}' cannot be sold",
        )


class NotTradableError(RefusalError):
    """Sellable binders are liquidated, not traded from."""

    def __init__(self, binder_name: str):
        super().__init__(
            kind=FailureKind.NOT_TRADABLE,
            message=f"Binder '{binder_name}' cannot be used for trading",
            suggestion="Trade from a non-curated or collector binder.",
        )


# =============================================================================
# FAILURE AUTHORITY BOUNDARY
# =============================================================================

# Standard messages: fixed and predictable.

STANDARD_MESSAGES: dict[OutcomeType, str] = {
    OutcomeType.REFUSAL: "The inventory cannot perform this operation on that target.",
    OutcomeType.KNOWN_FAILURE: "The operation failed due to a known issue.",
    OutcomeType.UNKNOWN_FAILURE: (
        "I failed and I don't know why. Try simplifying the request or retrying."
    ),
}

STANDARD_SUGGESTIONS: dict[OutcomeType, str] = {
    OutcomeType.REFUSAL: "Choose a binder or deck that supports this operation.",
    OutcomeType.KNOWN_FAILURE: "Check the error details and adjust your request.",
    OutcomeType.UNKNOWN_FAILURE: "If this persists, please report the issue.",
}

def finalize_response(response: ApiResponse[Any]) -> ApiResponse[Any]:
    """
    Finalize a response through the authority boundary.

    Args:
        response: The ApiResponse to finalize

    Returns:
        The same response, marked as having passed through the boundary

    Raises:
        ValueError: If response structure is invalid
    """
    if response.outcome == OutcomeType.SUCCESS:
        if response.failure is not None:
            raise ValueError("Success response must not have failure details")
    else:
        if response.failure is None:
            raise ValueError(f"{response.outcome.value} response must have failure details")

    response._finalized = True

    return response


def is_finalized(response: ApiResponse[Any]) -> bool:
    """Check if a response has passed through the authority boundary."""
    return response._finalized


def create_unknown_failure(
    exception: Exception,
    include_type: bool = True,
) -> ApiResponse[Any]:
    """
    Create a finalized unknown failure response from an exception.

    The message is fixed and cannot be customized.
    """
    detail = None
    if include_type:
        detail = f"{type(exception).__name__}"

    response: ApiResponse[Any] = ApiResponse(
        outcome=OutcomeType.UNKNOWN_FAILURE,
        failure=FailureDetail(
            kind=FailureKind.UNKNOWN,
            message=STANDARD_MESSAGES[OutcomeType.UNKNOWN_FAILURE],
            detail=detail,
            suggestion=STANDARD_SUGGESTIONS[OutcomeType.UNKNOWN_FAILURE],
        ),
    )

    return finalize_response(response)


def create_failure(error: KnownError | RefusalError) -> ApiResponse[Any]:
    """Create a finalized failure or refusal response from a domain error."""
    return finalize_response(error.to_response())


def create_success(data: T) -> ApiResponse[T]:
    """Create a finalized success response."""
    response = ApiResponse[T](outcome=OutcomeType.SUCCESS, data=data)
    return finalize_response(response)

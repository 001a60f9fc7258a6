"""
Tests for the Failure Authority Boundary.

These tests verify the core invariant:

    Every envelope handed to the presentation layer passes through
    finalize_response().

These tests protect the boundary only.
"""

import pytest

from cardkeeper.models.failure import (
    STANDARD_MESSAGES,
    STANDARD_SUGGESTIONS,
    ApiResponse,
    CapacityExceededError,
    EmptyStateError,
    FailureDetail,
    FailureKind,
    NotFoundError,
    NotSellableError,
    NotTradableError,
    OutcomeType,
    create_failure,
    create_success,
    create_unknown_failure,
    finalize_response,
    is_finalized,
)


class TestFinalizeResponse:
    """Tests for the finalize_response authority boundary."""

    def test_success_response_is_finalized(self) -> None:
        """Success responses pass through the boundary."""
        response = ApiResponse(outcome=OutcomeType.SUCCESS, data={"key": "value"})
        finalized = finalize_response(response)

        assert is_finalized(finalized)
        assert finalized.ok

    def test_failure_response_is_finalized(self) -> None:
        """Failure responses pass through the boundary."""
        response = ApiResponse.known_failure(
            kind=FailureKind.NOT_FOUND,
            message="Not found",
        )
        finalized = finalize_response(response)

        assert is_finalized(finalized)
        assert not finalized.ok

    def test_unfinalized_response_not_marked(self) -> None:
        """Responses that bypass the boundary are detectable."""
        response = ApiResponse(outcome=OutcomeType.SUCCESS, data={"key": "value"})

        assert not is_finalized(response)

    def test_discarded_responses_do_not_mark_new_ones(self) -> None:
        """Finalization belongs to the response, so reused memory is never trusted."""
        for i in range(1000):
            create_success({"n": i})

        response = ApiResponse(outcome=OutcomeType.SUCCESS, data={"key": "value"})

        assert not is_finalized(response)

    def test_rejected_response_stays_unfinalized(self) -> None:
        response = ApiResponse(outcome=OutcomeType.UNKNOWN_FAILURE, failure=None)

        with pytest.raises(ValueError):
            finalize_response(response)

        assert not is_finalized(response)

    def test_success_with_failure_raises(self) -> None:
        """Success response with failure details is invalid."""
        response = ApiResponse(
            outcome=OutcomeType.SUCCESS,
            data={"key": "value"},
            failure=FailureDetail(kind=FailureKind.UNKNOWN, message="oops"),
        )

        with pytest.raises(ValueError, match="must not have failure"):
            finalize_response(response)

    def test_failure_without_details_raises(self) -> None:
        """Failure response without details is invalid."""
        response = ApiResponse(outcome=OutcomeType.REFUSAL, failure=None)

        with pytest.raises(ValueError, match="must have failure details"):
            finalize_response(response)


class TestStandardMessages:
    """Tests for the fixed unknown-failure message."""

    def test_unknown_failure_uses_standard_message(self) -> None:
        response = create_unknown_failure(ValueError("test"))

        assert response.failure is not None
        assert response.failure.message == STANDARD_MESSAGES[OutcomeType.UNKNOWN_FAILURE]
        assert "I failed and I don't know why" in response.failure.message

    def test_unknown_failure_uses_standard_suggestion(self) -> None:
        response = create_unknown_failure(ValueError("test"))

        assert response.failure is not None
        assert response.failure.suggestion == STANDARD_SUGGESTIONS[OutcomeType.UNKNOWN_FAILURE]

    def test_unknown_failure_detail_is_type_only(self) -> None:
        """Unknown failure detail contains only the exception type."""
        response = create_unknown_failure(RuntimeError("internal state dump"))

        assert response.failure is not None
        assert response.failure.detail == "RuntimeError"
        assert response.failure.kind == FailureKind.UNKNOWN

    def test_unknown_failure_without_type(self) -> None:
        response = create_unknown_failure(RuntimeError("x"), include_type=False)

        assert response.failure is not None
        assert response.failure.detail is None


class TestDomainErrorClassification:
    """Domain errors map onto the outcome they describe."""

    @pytest.mark.parametrize(
        ("error", "kind"),
        [
            (NotFoundError("binder", "Trades"), FailureKind.NOT_FOUND),
            (EmptyStateError("No copies left"), FailureKind.EMPTY_STATE),
            (CapacityExceededError("deck", "Burn", 10), FailureKind.CAPACITY_EXCEEDED),
        ],
    )
    def test_known_errors_are_known_failures(self, error: Exception, kind: FailureKind) -> None:
        response = create_failure(error)  # type: ignore[arg-type]

        assert response.outcome == OutcomeType.KNOWN_FAILURE
        assert response.failure is not None
        assert response.failure.kind == kind

    @pytest.mark.parametrize(
        ("error", "kind"),
        [
            (NotSellableError("binder", "Trades"), FailureKind.NOT_SELLABLE),
            (NotTradableError("Bulk"), FailureKind.NOT_TRADABLE),
        ],
    )
    def test_capability_errors_are_refusals(self, error: Exception, kind: FailureKind) -> None:
        response = create_failure(error)  # type: ignore[arg-type]

        assert response.outcome == OutcomeType.REFUSAL
        assert response.failure is not None
        assert response.failure.kind == kind

    def test_not_found_message(self) -> None:
        error = NotFoundError("card", "Shock", where="collection")
        assert error.message == "Card 'Shock' not found in collection"

    def test_capacity_detail(self) -> None:
        response = create_failure(CapacityExceededError("binder", "Trades", 20))
        assert response.failure is not None
        assert response.failure.detail == "capacity=20"


class TestFactoryFunctionsFinalize:
    """Tests that factory functions automatically finalize."""

    def test_create_success_is_finalized(self) -> None:
        response = create_success({"data": "value"})

        assert is_finalized(response)
        assert response.outcome == OutcomeType.SUCCESS

    def test_create_failure_is_finalized(self) -> None:
        response = create_failure(NotFoundError("deck", "Burn"))

        assert is_finalized(response)

    def test_create_unknown_failure_is_finalized(self) -> None:
        response = create_unknown_failure(ValueError("test"))

        assert is_finalized(response)
        assert response.outcome == OutcomeType.UNKNOWN_FAILURE

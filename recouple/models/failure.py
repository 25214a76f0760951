"""
Failure Envelope.

Endpoints return their own response models on success. Every failure the
HTTP surface reports is classified and explained through the envelope
defined here.

INVARIANT: No raw 500 errors may reach the client.

Failure types:
- KnownFailure: System knows why it failed
- UnknownFailure: System does not know why it failed

AUTHORITY BOUNDARY:
Every failure response passes through `finalize_response()`.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"
    INVALID_GAME_INDEX = "invalid_game_index"
    UNKNOWN_LAYOUT = "unknown_layout"
    BOARD_SHAPE = "board_shape"

    # Resource failures
    NOT_FOUND = "not_found"
    POOL_UNAVAILABLE = "pool_unavailable"

    # Constraint violations
    SEARCH_TOO_LARGE = "search_too_large"

    # Internal errors
    INVARIANT_VIOLATION = "invariant_violation"

    # Unknown
    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    """High-level outcome classification."""

    KNOWN_FAILURE = "known_failure"
    UNKNOWN_FAILURE = "unknown_failure"


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


class ApiResponse(BaseModel):
    """
    Response envelope for failures.

    Every failure is classified into one of two outcome types,
    ensuring no failure reaches the user unexplained.
    """

    outcome: OutcomeType = Field(
        ...,
        description="High-level classification of the failure",
    )
    failure: FailureDetail | None = Field(
        default=None,
        description="Failure details",
    )

    @classmethod
    def known_failure(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> "ApiResponse":
        """
        Create a known failure response.

        Use when the system knows exactly why the operation failed.
        Example: Unknown layout name, board of the wrong length.
        """
        return cls(
            outcome=OutcomeType.KNOWN_FAILURE,
            failure=FailureDetail(
                kind=kind,
                message=message,
                detail=detail,
                suggestion=suggestion,
            ),
        )


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
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code
        super().__init__(message)

    def to_response(self) -> ApiResponse:
        """Convert to an ApiResponse."""
        return ApiResponse.known_failure(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


# =============================================================================
# FAILURE AUTHORITY BOUNDARY
# =============================================================================

# Standard messages — fixed, boring, predictable

STANDARD_MESSAGES: dict[OutcomeType, str] = {
    OutcomeType.UNKNOWN_FAILURE: (
        "I failed and I don't know why. Try simplifying the request or retrying."
    ),
}

STANDARD_SUGGESTIONS: dict[OutcomeType, str] = {
    OutcomeType.KNOWN_FAILURE: "Check the error details and adjust your request.",
    OutcomeType.UNKNOWN_FAILURE: "If this persists, please report the issue.",
}


def finalize_response(response: ApiResponse) -> ApiResponse:
    """
    Finalize a failure response through the authority boundary.

    Args:
        response: The ApiResponse to finalize

    Returns:
        The same response, with a suggestion guaranteed

    Raises:
        ValueError: If the response carries no failure details
    """
    if response.failure is None:
        raise ValueError(f"{response.outcome.value} response must have failure details")

    if response.failure.suggestion is None:
        response.failure.suggestion = STANDARD_SUGGESTIONS[response.outcome]

    return response


def create_unknown_failure(
    exception: Exception,
    include_type: bool = True,
) -> ApiResponse:
    """
    Create an unknown failure response from an exception.

    The message is fixed and cannot be customized.

    Args:
        exception: The exception that caused the failure
        include_type: Whether to include exception type in detail

    Returns:
        A finalized unknown failure response
    """
    detail = None
    if include_type:
        detail = f"{type(exception).__name__}"

    response = ApiResponse(
        outcome=OutcomeType.UNKNOWN_FAILURE,
        failure=FailureDetail(
            kind=FailureKind.UNKNOWN,
            message=STANDARD_MESSAGES[OutcomeType.UNKNOWN_FAILURE],
            detail=detail,
        ),
    )

    return finalize_response(response)


def create_known_failure(error: KnownError) -> ApiResponse:
    """
    Create a finalized known failure response from a KnownError.

    Falls back to the standard suggestion when the error carries none.
    """
    return finalize_response(error.to_response())

from recouple.models.board import (
    WILDCARD,
    Board,
    BoardConfig,
    BoardConfigError,
    RuleSet,
    RuleSetError,
    SlotRequirement,
)
from recouple.models.contestant import Contestant, DraftCard, Tag
from recouple.models.failure import (
    STANDARD_MESSAGES,
    STANDARD_SUGGESTIONS,
    ApiResponse,
    FailureDetail,
    FailureKind,
    KnownError,
    OutcomeType,
    create_known_failure,
    create_unknown_failure,
    finalize_response,
)
from recouple.models.score import (
    CellScore,
    Connection,
    ConnectionKind,
    OptimalResult,
    ScoreBreakdown,
)

__all__ = [
    "ApiResponse",
    "Board",
    "BoardConfig",
    "BoardConfigError",
    "CellScore",
    "Connection",
    "ConnectionKind",
    "Contestant",
    "DraftCard",
    "FailureDetail",
    "FailureKind",
    "KnownError",
    "OptimalResult",
    "OutcomeType",
    "RuleSet",
    "RuleSetError",
    "STANDARD_MESSAGES",
    "STANDARD_SUGGESTIONS",
    "ScoreBreakdown",
    "SlotRequirement",
    "Tag",
    "WILDCARD",
    "create_known_failure",
    "create_unknown_failure",
    "finalize_response",
]

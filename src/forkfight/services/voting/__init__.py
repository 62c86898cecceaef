from .submit import VoteProcessor, VoteResult
from .undo import (
    REASON_ALREADY_UNDONE,
    REASON_ENTITY_NOT_FOUND,
    REASON_NOT_FOUND,
    UndoProcessor,
    UndoResult,
)

__all__ = [
    "REASON_ALREADY_UNDONE",
    "REASON_ENTITY_NOT_FOUND",
    "REASON_NOT_FOUND",
    "UndoProcessor",
    "UndoResult",
    "VoteProcessor",
    "VoteResult",
]

from enum import Enum
from typing import Optional


class QuestionType(str, Enum):
    OBJECTIVE = "OBJECTIVE"     # Single correct option
    PREFERENCE = "PREFERENCE"   # Options carry a trait label and a weight

    @classmethod
    def parse(cls, raw) -> Optional["QuestionType"]:
        """Map a stored type tag to a QuestionType, or None if unrecognized."""
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return None
        return _QUESTION_TYPE_ALIASES.get(raw.strip().upper())


# Legacy tags written by older question editors
_QUESTION_TYPE_ALIASES = {
    "OBJECTIVE": QuestionType.OBJECTIVE,
    "MULTIPLE_CHOICE": QuestionType.OBJECTIVE,
    "PREFERENCE": QuestionType.PREFERENCE,
    "OPINION_MULTIPLE": QuestionType.PREFERENCE,
}


class ScoreMode(str, Enum):
    """Which branch of the overall combiner produced the score."""
    BLENDED = "blended"
    OBJECTIVE_ONLY = "objective_only"
    OPINION_ONLY = "opinion_only"
    EMPTY = "empty"

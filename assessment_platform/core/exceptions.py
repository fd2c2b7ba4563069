"""
Custom Exceptions - Assessment Platform
assessment_platform/core/exceptions.py

Exception classes raised by the scoring engine.
"""


class ScoringException(Exception):
    """Base exception for scoring operations."""

    pass


class InconsistentInputError(ScoringException):
    """The supplied snapshot breaks the engine's input contract.

    Raised before any result is built, so callers never receive a partial
    ScoreResult.
    """

    def __init__(self, message: str, *, candidate_id: str = None, question_id: str = None):
        self.message = message
        self.candidate_id = candidate_id
        self.question_id = question_id
        super().__init__(message)


class MissingQuestionError(InconsistentInputError):
    """A response references a question that is not in the batch."""

    def __init__(self, question_id: str, candidate_id: str = None):
        super().__init__(
            f"Response references question {question_id} which is not present in the supplied batch",
            candidate_id=candidate_id,
            question_id=question_id,
        )


class NegativeWeightError(InconsistentInputError):
    """A trait, option or combiner weight is below zero."""

    def __init__(self, subject: str, weight: float):
        self.subject = subject
        self.weight = weight
        super().__init__(f"Weight for {subject} must be >= 0, got {weight}")


class DuplicateResponseError(InconsistentInputError):
    """More than one response exists for the same (candidate, question) pair."""

    def __init__(self, candidate_id: str, question_id: str):
        super().__init__(
            f"Candidate {candidate_id} has more than one response for question {question_id}",
            candidate_id=candidate_id,
            question_id=question_id,
        )


class InvalidWeightError(InconsistentInputError):
    """A trait, option or combiner weight is NaN or infinite."""

    def __init__(self, subject: str, weight: float):
        self.subject = subject
        self.weight = weight
        super().__init__(f"Weight for {subject} must be a finite number, got {weight}")

"""
Core Package - Assessment Platform
assessment_platform/core/__init__.py

Core infrastructure: exceptions, logging.
"""

from assessment_platform.core.exceptions import (
    DuplicateResponseError,
    InconsistentInputError,
    InvalidWeightError,
    MissingQuestionError,
    NegativeWeightError,
    ScoringException,
)
from assessment_platform.core.logging import configure_logging

__all__ = [
    # Exceptions
    "DuplicateResponseError",
    "InconsistentInputError",
    "InvalidWeightError",
    "MissingQuestionError",
    "NegativeWeightError",
    "ScoringException",
    # Logging
    "configure_logging",
]

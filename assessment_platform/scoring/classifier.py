"""
scoring/classifier.py — Response Classifier

Partitions a candidate's resolved responses into objective and preference
sequences by question type. Input order is preserved in both outputs and a
response never lands in both. Unrecognized type tags are left out of both
and counted.
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import structlog

from assessment_platform.models.enumerations import QuestionType
from assessment_platform.scoring.records import ResolvedResponse

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ClassifiedResponses:
    """Output of ResponseClassifier.classify()."""
    objective: Tuple[ResolvedResponse, ...]
    preference: Tuple[ResolvedResponse, ...]
    unrecognized: int                      # responses with an unknown type tag

    @property
    def has_objective(self) -> bool:
        return bool(self.objective)

    @property
    def has_preference(self) -> bool:
        return bool(self.preference)


class ResponseClassifier:
    """Split responses by QuestionType."""

    def classify(self, responses: Sequence[ResolvedResponse]) -> ClassifiedResponses:
        objective: List[ResolvedResponse] = []
        preference: List[ResolvedResponse] = []
        unrecognized = 0

        for resolved in responses:
            question_type = QuestionType.parse(resolved.question.type)
            if question_type is QuestionType.OBJECTIVE:
                objective.append(resolved)
            elif question_type is QuestionType.PREFERENCE:
                preference.append(resolved)
            else:
                unrecognized += 1
                logger.warning(
                    "unrecognized_question_type",
                    question_id=resolved.question.id,
                    question_type=resolved.question.type,
                )

        return ClassifiedResponses(
            objective=tuple(objective),
            preference=tuple(preference),
            unrecognized=unrecognized,
        )

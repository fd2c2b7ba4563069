"""
scoring/objective_scorer.py — Objective Scorer

Counts correct and incorrect answers on objective questions and turns them
into accuracy percentages, for the whole test and per stage / per category.

Formula:
    accuracy = round(correct / total × 100, 1)   (0 when total = 0)

Stages and categories without objective responses are left out of their
breakdowns instead of being reported as zero.
"""

from collections import OrderedDict
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Sequence, Tuple

import structlog

from assessment_platform.scoring.records import ResolvedResponse, StageRecord
from assessment_platform.scoring.utils import percentage

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class StageScore:
    """Objective performance within one stage."""
    stage_id: str
    stage_name: str
    order: int
    total: int
    correct: int
    incorrect: int
    accuracy: Decimal


@dataclass(frozen=True)
class CategoryScore:
    """Objective performance within one question category (skill area)."""
    category: str
    total: int
    correct: int
    incorrect: int
    accuracy: Decimal


@dataclass(frozen=True)
class ObjectiveResult:
    """Output of ObjectiveScorer.calculate()."""
    total: int
    correct: int
    incorrect: int
    accuracy: Decimal                      # [0, 100] quantized to 0.1
    by_stage: Tuple[StageScore, ...]
    by_category: Tuple[CategoryScore, ...]


def is_correct(resolved: ResolvedResponse) -> bool:
    """Response flag first, then the selected option's key."""
    if resolved.response.is_correct is not None:
        return bool(resolved.response.is_correct)
    if resolved.option is not None:
        return bool(resolved.option.is_correct)
    return False


class ObjectiveScorer:
    """Calculate accuracy for objective responses."""

    def calculate(self, responses: Sequence[ResolvedResponse]) -> ObjectiveResult:
        """
        Args:
            responses: Objective responses from the classifier, in input order.

        Returns:
            ObjectiveResult with global counts plus stage and category breakdowns.

        Examples:
            >>> # 10 responses, 7 correct
            >>> ObjectiveScorer().calculate(responses).accuracy
            Decimal('70.0')
        """
        total = len(responses)
        correct = sum(1 for r in responses if is_correct(r))

        result = ObjectiveResult(
            total=total,
            correct=correct,
            incorrect=total - correct,
            accuracy=percentage(correct, total),
            by_stage=self._by_stage(responses),
            by_category=self._by_category(responses),
        )

        logger.info(
            "objective_calculated",
            total=total,
            correct=correct,
            accuracy=float(result.accuracy),
            stages=len(result.by_stage),
        )
        return result

    def _by_stage(self, responses: Sequence[ResolvedResponse]) -> Tuple[StageScore, ...]:
        stages: Dict[str, StageRecord] = OrderedDict()
        buckets: Dict[str, List[ResolvedResponse]] = OrderedDict()
        for r in responses:
            stage = r.question.stage
            stages.setdefault(stage.id, stage)
            buckets.setdefault(stage.id, []).append(r)

        scores = []
        for stage_id, bucket in buckets.items():
            stage = stages[stage_id]
            correct = sum(1 for r in bucket if is_correct(r))
            scores.append(StageScore(
                stage_id=stage.id,
                stage_name=stage.name,
                order=stage.order,
                total=len(bucket),
                correct=correct,
                incorrect=len(bucket) - correct,
                accuracy=percentage(correct, len(bucket)),
            ))
        # stable: equal orders keep first-appearance order
        scores.sort(key=lambda s: s.order)
        return tuple(scores)

    def _by_category(self, responses: Sequence[ResolvedResponse]) -> Tuple[CategoryScore, ...]:
        buckets: Dict[str, List[ResolvedResponse]] = OrderedDict()
        for r in responses:
            category = r.question.category
            if category:
                buckets.setdefault(category, []).append(r)

        scores = []
        for category, bucket in buckets.items():
            correct = sum(1 for r in bucket if is_correct(r))
            scores.append(CategoryScore(
                category=category,
                total=len(bucket),
                correct=correct,
                incorrect=len(bucket) - correct,
                accuracy=percentage(correct, len(bucket)),
            ))
        return tuple(scores)

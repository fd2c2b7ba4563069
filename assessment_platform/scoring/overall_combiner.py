"""
scoring/overall_combiner.py — Overall Score Combiner

Blends objective accuracy and the opinion score into one overall score.

Weights:
    w'_obj = w_obj / (w_obj + w_op),  w'_op = w_op / (w_obj + w_op)
    Missing weights take the defaults (0.50 / 0.50); a zero sum falls back
    to the default split.

Branches:
    objective and preference present → accuracy × w'_obj + opinion × w'_op
    objective only                   → accuracy
    preference only                  → opinion
    neither                          → 0

A candidate is never penalized for a question type the test does not have.
Result rounded to 0.1 and clamped to [0, 100].
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple

import structlog

from assessment_platform.models.enumerations import ScoreMode
from assessment_platform.scoring.records import ScoringPolicy
from assessment_platform.scoring.utils import ZERO, check_weight, clamp, exact_decimal, round1

logger = structlog.get_logger(__name__)

_WEIGHT_PLACES = Decimal("0.0001")


@dataclass(frozen=True)
class OverallResult:
    """Output of OverallScoreCombiner.calculate()."""
    overall_score: Decimal         # [0, 100] quantized to 0.1
    mode: ScoreMode
    objective_weight: Decimal      # normalized, quantized to 0.0001
    opinion_weight: Decimal        # normalized, quantized to 0.0001
    objective_contribution: Decimal
    opinion_contribution: Decimal
    weight_fallback: bool          # configured weights summed to zero


class OverallScoreCombiner:
    """Combine accuracy and opinion score."""

    def __init__(self, policy: Optional[ScoringPolicy] = None):
        self.policy = policy or ScoringPolicy()

    def normalize_weights(
        self,
        objective_weight: Optional[float] = None,
        opinion_weight: Optional[float] = None,
    ) -> Tuple[Decimal, Decimal, bool]:
        """
        Returns:
            (w_obj, w_op, fallback) with w_obj + w_op == 1.

        Raises:
            NegativeWeightError: if either weight is below zero.
            InvalidWeightError: if either weight is NaN or infinite.
        """
        check_weight("multiple_choice_weight", objective_weight)
        check_weight("opinion_weight", opinion_weight)
        w_obj = self.policy.default_objective_weight if objective_weight is None else exact_decimal(objective_weight)
        w_op = self.policy.default_opinion_weight if opinion_weight is None else exact_decimal(opinion_weight)

        fallback = False
        total = w_obj + w_op
        if total == ZERO:
            logger.warning(
                "combiner_weights_zero_sum",
                objective_weight=float(w_obj),
                opinion_weight=float(w_op),
            )
            fallback = True
            w_obj = self.policy.default_objective_weight
            w_op = self.policy.default_opinion_weight
            total = w_obj + w_op

        return w_obj / total, w_op / total, fallback

    def calculate(
        self,
        accuracy: Decimal,
        opinion_score: Decimal,
        has_objective: bool,
        has_preference: bool,
        objective_weight: Optional[float] = None,
        opinion_weight: Optional[float] = None,
    ) -> OverallResult:
        """
        Args:
            accuracy: Objective accuracy in [0, 100].
            opinion_score: Opinion score in [0, 100].
            has_objective: Whether any objective responses were scored.
            has_preference: Whether any preference responses were scored.
            objective_weight: Configured multiple-choice weight (optional).
            opinion_weight: Configured opinion weight (optional).

        Examples:
            >>> combiner = OverallScoreCombiner()
            >>> combiner.calculate(Decimal("80"), Decimal("50"), True, True, 0.7, 0.3).overall_score
            Decimal('71.0')
        """
        w_obj, w_op, fallback = self.normalize_weights(objective_weight, opinion_weight)

        if has_objective and has_preference:
            mode = ScoreMode.BLENDED
            obj_part = accuracy * w_obj
            op_part = opinion_score * w_op
        elif has_objective:
            mode = ScoreMode.OBJECTIVE_ONLY
            obj_part, op_part = accuracy, ZERO
        elif has_preference:
            mode = ScoreMode.OPINION_ONLY
            obj_part, op_part = ZERO, opinion_score
        else:
            mode = ScoreMode.EMPTY
            obj_part = op_part = ZERO

        overall = round1(clamp(obj_part + op_part))

        logger.info(
            "overall_calculated",
            mode=mode.value,
            accuracy=float(accuracy),
            opinion_score=float(opinion_score),
            objective_weight=float(w_obj),
            opinion_weight=float(w_op),
            weight_fallback=fallback,
            overall_score=float(overall),
        )

        return OverallResult(
            overall_score=overall,
            mode=mode,
            objective_weight=w_obj.quantize(_WEIGHT_PLACES),
            opinion_weight=w_op.quantize(_WEIGHT_PLACES),
            objective_contribution=round1(obj_part),
            opinion_contribution=round1(op_part),
            weight_fallback=fallback,
        )

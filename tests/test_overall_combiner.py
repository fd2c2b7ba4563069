# tests/test_overall_combiner.py
"""
Overall score: weight normalization and the objective / opinion branches.
"""

from decimal import Decimal

import pytest

from assessment_platform.core.exceptions import InconsistentInputError, InvalidWeightError, NegativeWeightError
from assessment_platform.models.enumerations import ScoreMode
from assessment_platform.scoring.overall_combiner import OverallScoreCombiner
from assessment_platform.scoring.records import ScoringPolicy


@pytest.fixture
def combiner():
    return OverallScoreCombiner()


class TestNormalizeWeights:

    def test_already_normalized(self, combiner):
        w_obj, w_op, fallback = combiner.normalize_weights(0.7, 0.3)
        assert (w_obj, w_op, fallback) == (Decimal("0.7"), Decimal("0.3"), False)

    def test_rescaled_to_sum_one(self, combiner):
        w_obj, w_op, _ = combiner.normalize_weights(3, 1)
        assert w_obj == Decimal("0.75")
        assert w_op == Decimal("0.25")

    def test_missing_weights_take_defaults(self, combiner):
        assert combiner.normalize_weights(None, None) == (Decimal("0.5"), Decimal("0.5"), False)

    def test_one_missing_weight(self, combiner):
        # 0.5 default for the opinion side: 1.5 / 2.0
        w_obj, w_op, _ = combiner.normalize_weights(1.5, None)
        assert w_obj == Decimal("0.75")

    def test_zero_sum_falls_back_to_even_split(self, combiner):
        assert combiner.normalize_weights(0, 0) == (Decimal("0.5"), Decimal("0.5"), True)

    def test_tiny_weights_are_not_a_zero_sum(self, combiner):
        w_obj, w_op, fallback = combiner.normalize_weights(0.00001, 0.00003)
        assert (w_obj, w_op, fallback) == (Decimal("0.25"), Decimal("0.75"), False)

    def test_huge_weights(self, combiner):
        w_obj, w_op, fallback = combiner.normalize_weights(3e30, 1e30)
        assert (w_obj, w_op, fallback) == (Decimal("0.75"), Decimal("0.25"), False)

    @pytest.mark.parametrize("obj,op", [(float("inf"), 0.5), (0.5, float("nan"))])
    def test_non_finite_weight_rejected(self, combiner, obj, op):
        with pytest.raises(InvalidWeightError):
            combiner.normalize_weights(obj, op)

    def test_zero_sum_uses_policy_defaults(self):
        policy = ScoringPolicy(default_objective_weight=Decimal("0.6"), default_opinion_weight=Decimal("0.4"))
        w_obj, w_op, fallback = OverallScoreCombiner(policy).normalize_weights(0, 0)
        assert (w_obj, w_op, fallback) == (Decimal("0.6"), Decimal("0.4"), True)

    @pytest.mark.parametrize("obj,op,subject", [
        (-0.1, 0.5, "multiple_choice_weight"),
        (0.5, -1, "opinion_weight"),
    ])
    def test_negative_weight_rejected(self, combiner, obj, op, subject):
        with pytest.raises(NegativeWeightError) as exc_info:
            combiner.normalize_weights(obj, op)
        assert exc_info.value.subject == subject
        assert isinstance(exc_info.value, InconsistentInputError)


class TestOverallScoreCombiner:

    def test_blended_score(self, combiner):
        result = combiner.calculate(Decimal("80"), Decimal("50"), True, True, 0.7, 0.3)

        assert result.overall_score == Decimal("71.0")
        assert result.mode == ScoreMode.BLENDED
        assert result.objective_contribution == Decimal("56.0")
        assert result.opinion_contribution == Decimal("15.0")
        assert result.objective_weight == Decimal("0.7000")

    def test_zero_weights_blend_evenly(self, combiner):
        result = combiner.calculate(Decimal("80"), Decimal("50"), True, True, 0, 0)

        assert result.overall_score == Decimal("65.0")
        assert result.weight_fallback is True

    def test_objective_only_ignores_weights(self, combiner):
        result = combiner.calculate(Decimal("70"), Decimal("0"), True, False, 0.7, 0.3)

        assert result.overall_score == Decimal("70.0")
        assert result.mode == ScoreMode.OBJECTIVE_ONLY

    def test_opinion_only_ignores_weights(self, combiner):
        result = combiner.calculate(Decimal("0"), Decimal("80"), False, True, 0.7, 0.3)

        assert result.overall_score == Decimal("80.0")
        assert result.mode == ScoreMode.OPINION_ONLY

    def test_no_responses_scores_zero(self, combiner):
        result = combiner.calculate(Decimal("0"), Decimal("0"), False, False)

        assert result.overall_score == Decimal("0.0")
        assert result.mode == ScoreMode.EMPTY

    def test_rounds_half_up(self, combiner):
        # 66.7 * 0.5 + 33.4 * 0.5 = 50.05 -> 50.1
        result = combiner.calculate(Decimal("66.7"), Decimal("33.4"), True, True)
        assert result.overall_score == Decimal("50.1")

    def test_one_third_weights(self, combiner):
        result = combiner.calculate(Decimal("100"), Decimal("0"), True, True, 1, 2)
        assert result.overall_score == Decimal("33.3")
        assert result.objective_weight == Decimal("0.3333")

    def test_perfect_score_keeps_one_decimal(self, combiner):
        result = combiner.calculate(Decimal("100.0"), Decimal("100.0"), True, True)

        assert result.overall_score == Decimal("100.0")
        assert str(result.overall_score) == "100.0"

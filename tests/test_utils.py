# tests/test_utils.py
"""
Decimal helpers: exact conversion, magnitude-safe rounding, clamping.
"""

from decimal import Decimal

import pytest

from assessment_platform.core.exceptions import InvalidWeightError, NegativeWeightError
from assessment_platform.scoring.utils import (
    check_weight,
    clamp,
    exact_decimal,
    percentage,
    round1,
    to_decimal,
)


class TestConversion:

    def test_exact_decimal_keeps_tiny_values(self):
        assert exact_decimal(0.00002) == Decimal("0.00002")
        assert exact_decimal(None) == Decimal("0")

    @pytest.mark.parametrize("value", [1e24, 1e25, 1e30, 1.5e300])
    def test_rounding_large_values_does_not_raise(self, value):
        assert round1(exact_decimal(value)) == Decimal(str(value))
        assert to_decimal(value) == Decimal(str(value))

    def test_round1_half_up(self):
        assert round1(Decimal("0.05")) == Decimal("0.1")
        assert round1(Decimal("12.25")) == Decimal("12.3")


class TestClamp:

    def test_in_range_value_returned_unchanged(self):
        assert str(clamp(Decimal("100.0"))) == "100.0"
        assert str(clamp(Decimal("0.0"))) == "0.0"

    def test_out_of_range_values(self):
        assert clamp(Decimal("140")) == Decimal("100")
        assert clamp(Decimal("-3")) == Decimal("0")

    def test_full_share_keeps_one_decimal(self):
        assert str(percentage(3, 3)) == "100.0"
        assert str(percentage(0, 3)) == "0.0"


class TestCheckWeight:

    def test_valid_weights(self):
        check_weight("w", None)
        check_weight("w", 0)
        check_weight("w", 1e30)

    def test_negative(self):
        with pytest.raises(NegativeWeightError):
            check_weight("w", -0.5)

    @pytest.mark.parametrize("weight", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite(self, weight):
        with pytest.raises(InvalidWeightError):
            check_weight("w", weight)

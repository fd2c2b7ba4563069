"""
scoring/timing.py — Timing Aggregator

Sums and averages time spent per question, regardless of correctness or
question type. Missing or negative times count as 0.
"""

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from assessment_platform.scoring.records import ResponseRecord
from assessment_platform.scoring.utils import ZERO, exact_decimal, round1


@dataclass(frozen=True)
class TimingResult:
    total_time_seconds: Decimal         # quantized to 0.1
    avg_time_per_question: Decimal      # quantized to 0.1
    question_count: int
    clamped_values: int                 # missing or negative inputs read as 0


class TimingAggregator:

    def calculate(self, responses: Sequence[ResponseRecord]) -> TimingResult:
        total = ZERO
        clamped = 0
        for response in responses:
            raw = response.time_spent
            if raw is None or not math.isfinite(raw) or raw < 0:
                clamped += 1
                continue
            total += exact_decimal(raw)

        count = len(responses)
        average = total / Decimal(count) if count > 0 else ZERO
        return TimingResult(
            total_time_seconds=round1(total),
            avg_time_per_question=round1(average),
            question_count=count,
            clamped_values=clamped,
        )

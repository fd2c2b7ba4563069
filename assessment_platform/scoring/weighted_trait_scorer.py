"""
scoring/weighted_trait_scorer.py — Weighted Trait Scorer

Turns each trait's configured weight into a score relative to the heaviest
trait of its group, and averages those into the candidate's opinion score.

Formula:
    max_weight     = max(weights in the trait's group)   (5 when ungrouped)
    weighted_score = round(weight / max_weight × 100, 1)  clamped to [0, 100]
                     (0 when max_weight = 0)
    opinion_score  = round(mean(weighted_score), 1)       (0 with no traits)

Weight is set by whoever designed the assessment; it is not derived from the
responses. weighted_score is therefore independent of how often a trait was
chosen, which is what `percentage` measures.
"""

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Dict, Optional, Tuple

import structlog

from assessment_platform.scoring.records import ProcessConfig, ScoringPolicy
from assessment_platform.scoring.trait_aggregator import TraitAggregation, TraitRecord
from assessment_platform.scoring.utils import HUNDRED, ZERO, clamp, exact_decimal, mean, round1

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class WeightedTraitResult:
    """Output of WeightedTraitScorer.score()."""
    records: Tuple[TraitRecord, ...]       # same order as the aggregation
    opinion_score: Decimal                 # [0, 100] quantized to 0.1
    group_max_weights: Dict[str, Decimal]


class WeightedTraitScorer:
    """Normalize trait weights within their groups."""

    def __init__(self, policy: Optional[ScoringPolicy] = None):
        self.policy = policy or ScoringPolicy()

    def score(
        self,
        aggregation: TraitAggregation,
        config: Optional[ProcessConfig] = None,
    ) -> WeightedTraitResult:
        """
        Args:
            aggregation: Trait records from TraitAggregator.
            config: Process configuration; its groups define the
                    normalization denominator for configured traits.

        Returns:
            WeightedTraitResult with weighted records and the opinion score.

        Examples:
            >>> # group G: A weight 5, B weight 3
            >>> [float(r.weighted_score) for r in result.records]
            [100.0, 60.0]
            >>> result.opinion_score
            Decimal('80.0')
        """
        group_max = self.group_max_weights(aggregation, config)

        records = []
        for record in aggregation.records:
            if record.group_id:
                max_weight = group_max.get(record.group_id, ZERO)
            else:
                max_weight = self.policy.ungrouped_max_weight
            records.append(replace(record, weighted_score=self.weighted_score(record.weight, max_weight)))

        opinion = round1(clamp(mean(r.weighted_score for r in records)))

        logger.info(
            "opinion_calculated",
            traits=len(records),
            groups=len(group_max),
            opinion_score=float(opinion),
        )

        return WeightedTraitResult(
            records=tuple(records),
            opinion_score=opinion,
            group_max_weights=group_max,
        )

    @staticmethod
    def weighted_score(weight: Decimal, max_weight: Decimal) -> Decimal:
        """round(weight / max_weight × 100, 1) in [0, 100]; 0 if max_weight <= 0."""
        if max_weight <= ZERO:
            return round1(ZERO)
        return round1(clamp(weight / max_weight * HUNDRED))

    @staticmethod
    def group_max_weights(
        aggregation: TraitAggregation,
        config: Optional[ProcessConfig] = None,
    ) -> Dict[str, Decimal]:
        """Largest weight per group over configured and observed traits."""
        group_max: Dict[str, Decimal] = {}
        if config is not None:
            for group in config.trait_groups:
                for trait in group.traits:
                    weight = exact_decimal(trait.weight)
                    if weight > group_max.get(group.id, ZERO):
                        group_max[group.id] = weight
                group_max.setdefault(group.id, ZERO)
        for record in aggregation.records:
            if record.group_id and record.weight > group_max.get(record.group_id, ZERO):
                group_max[record.group_id] = record.weight
        return group_max

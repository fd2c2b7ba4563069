"""
scoring/trait_aggregator.py — Trait Aggregator

Counts preference selections per trait and turns them into percentages,
globally and inside each trait group.

Pipeline:
    preference responses ──► resolve trait name ──► count per trait
                                                        │
                          group counts (Σ trait counts) ◄┘
                                                        │
                        global % / group % per trait ◄──┘

Formulas:
    global_percentage = round(count / total_preference_responses × 100, 1)
    group_percentage  = round(count / group_response_count × 100, 1)   (0 if ungrouped)
    percentage        = group_percentage if grouped else global_percentage

Records come back sorted by percentage, highest first; equal percentages
keep the order in which the traits were first seen.
"""

from collections import OrderedDict
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Optional, Sequence, Tuple

import structlog

from assessment_platform.scoring.records import (
    ProcessConfig,
    ResolvedResponse,
    ScoringPolicy,
    TraitDefinition,
    index_traits,
    normalize_trait_key,
)
from assessment_platform.scoring.trait_naming import resolve_trait_label
from assessment_platform.scoring.utils import ZERO, exact_decimal, percentage, round1

logger = structlog.get_logger(__name__)


class WeightSource:
    CONFIGURED = "configured"
    OPTION = "option"
    DEFAULT = "default"


@dataclass(frozen=True)
class TraitRecord:
    """Per-trait summary. weighted_score is filled in by WeightedTraitScorer."""
    trait: str
    count: int
    percentage: Decimal          # group % when grouped, else global %
    global_percentage: Decimal
    group_percentage: Decimal
    weight: Decimal
    weight_source: str
    group_id: Optional[str]
    group_name: Optional[str]
    trait_id: Optional[str]
    discovery_index: int
    weighted_score: Decimal = round1(ZERO)


@dataclass(frozen=True)
class TraitAggregation:
    """Output of TraitAggregator.aggregate()."""
    records: Tuple[TraitRecord, ...]
    total_responses: int                     # responses that resolved to a trait
    group_response_counts: Dict[str, int]
    unresolved_responses: int                # skipped: no option or no trait name
    derived_trait_names: int                 # responses named via option text
    has_trait_weights: bool                  # process config defines any trait

    @property
    def has_records(self) -> bool:
        return bool(self.records)


@dataclass
class _TraitTally:
    name: str
    discovery_index: int
    count: int = 0
    option_weight: Optional[Decimal] = None
    option_group_id: Optional[str] = None
    trait_id: Optional[str] = None


class TraitAggregator:
    """Aggregate preference responses into trait records."""

    def __init__(self, policy: Optional[ScoringPolicy] = None):
        self.policy = policy or ScoringPolicy()

    def aggregate(
        self,
        responses: Sequence[ResolvedResponse],
        config: Optional[ProcessConfig] = None,
    ) -> TraitAggregation:
        """
        Args:
            responses: Preference responses from the classifier.
            config: Process configuration with trait groups and weights.

        Returns:
            TraitAggregation with sorted records and diagnostics counters.
        """
        definitions = index_traits(config)
        group_names = {g.id: g.name for g in config.trait_groups} if config else {}

        tallies: Dict[str, _TraitTally] = OrderedDict()
        unresolved = 0
        derived = 0

        for resolved in responses:
            option = resolved.option
            if option is None:
                unresolved += 1
                logger.warning(
                    "trait_unresolved",
                    reason="option_not_found",
                    question_id=resolved.question.id,
                    option_id=resolved.response.selected_option_id,
                )
                continue

            name, was_derived = resolve_trait_label(option.trait, option.text)
            if not name:
                unresolved += 1
                logger.warning(
                    "trait_unresolved",
                    reason="empty_trait_name",
                    question_id=resolved.question.id,
                    option_id=option.id,
                )
                continue
            if was_derived:
                derived += 1

            key = normalize_trait_key(name)
            definition = definitions.get(key)
            tally = tallies.get(key)
            if tally is None:
                tally = _TraitTally(
                    name=definition.name if definition else name,
                    discovery_index=len(tallies),
                )
                tallies[key] = tally

            tally.count += 1
            if option.weight is not None:
                weight = exact_decimal(option.weight)
                if tally.option_weight is None or weight > tally.option_weight:
                    tally.option_weight = weight
            if tally.option_group_id is None and option.group_id:
                tally.option_group_id = option.group_id
            if tally.trait_id is None:
                tally.trait_id = (definition.trait_id if definition else None) or option.trait_id

        total = sum(t.count for t in tallies.values())

        # group of each trait: configuration first, then the option's own group
        groups: Dict[str, Optional[str]] = {
            key: self._group_of(definitions.get(key), tally)
            for key, tally in tallies.items()
        }
        group_counts: Dict[str, int] = OrderedDict()
        for key, tally in tallies.items():
            group_id = groups[key]
            if group_id:
                group_counts[group_id] = group_counts.get(group_id, 0) + tally.count

        records: List[TraitRecord] = []
        for key, tally in tallies.items():
            definition = definitions.get(key)
            group_id = groups[key]
            global_pct = percentage(tally.count, total)
            group_pct = percentage(tally.count, group_counts.get(group_id, 0)) if group_id else round1(ZERO)
            weight, source = self._weight_of(definition, tally)
            records.append(TraitRecord(
                trait=tally.name,
                count=tally.count,
                percentage=group_pct if group_id else global_pct,
                global_percentage=global_pct,
                group_percentage=group_pct,
                weight=weight,
                weight_source=source,
                group_id=group_id,
                group_name=(definition.group_name if definition else group_names.get(group_id)) if group_id else None,
                trait_id=tally.trait_id,
                discovery_index=tally.discovery_index,
            ))

        # sort is stable, so ties stay in discovery order
        records.sort(key=lambda r: r.percentage, reverse=True)

        logger.info(
            "traits_aggregated",
            preference_responses=len(responses),
            total_responses=total,
            traits=len(records),
            groups=len(group_counts),
            unresolved=unresolved,
            derived=derived,
        )

        return TraitAggregation(
            records=tuple(records),
            total_responses=total,
            group_response_counts=dict(group_counts),
            unresolved_responses=unresolved,
            derived_trait_names=derived,
            has_trait_weights=bool(definitions),
        )

    @staticmethod
    def _group_of(definition: Optional[TraitDefinition], tally: _TraitTally) -> Optional[str]:
        if definition is not None:
            return definition.group_id
        return tally.option_group_id

    def _weight_of(self, definition: Optional[TraitDefinition], tally: _TraitTally) -> Tuple[Decimal, str]:
        if definition is not None:
            return definition.weight, WeightSource.CONFIGURED
        if tally.option_weight is not None:
            return tally.option_weight, WeightSource.OPTION
        return self.policy.default_trait_weight, WeightSource.DEFAULT

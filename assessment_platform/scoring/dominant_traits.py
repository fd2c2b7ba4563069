"""
scoring/dominant_traits.py — Dominant Trait Resolver

Global: every record sharing the top percentage (ties are never broken).
Per group: one winner per group for map-keyed consumers, chosen as the first
record in discovery order among those with the group's top percentage; the
full tie set of each group is exposed next to it.
"""

from collections import OrderedDict
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

import structlog

from assessment_platform.scoring.trait_aggregator import TraitRecord

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class DominantTraits:
    """Output of DominantTraitResolver.resolve()."""
    overall: Tuple[TraitRecord, ...]
    by_group: Dict[str, TraitRecord]
    group_ties: Dict[str, Tuple[TraitRecord, ...]]

    @property
    def is_tied(self) -> bool:
        return len(self.overall) > 1


class DominantTraitResolver:
    """Pick leading traits overall and per group."""

    def resolve(self, records: Sequence[TraitRecord]) -> DominantTraits:
        if not records:
            return DominantTraits(overall=(), by_group={}, group_ties={})

        top = max(r.percentage for r in records)
        overall = tuple(r for r in records if r.percentage == top)

        grouped: Dict[str, List[TraitRecord]] = OrderedDict()
        for record in records:
            if record.group_id:
                grouped.setdefault(record.group_id, []).append(record)

        by_group: Dict[str, TraitRecord] = {}
        group_ties: Dict[str, Tuple[TraitRecord, ...]] = {}
        for group_id, members in grouped.items():
            group_top = max(r.percentage for r in members)
            ties = sorted(
                (r for r in members if r.percentage == group_top),
                key=lambda r: r.discovery_index,
            )
            by_group[group_id] = ties[0]
            group_ties[group_id] = tuple(ties)
            if len(ties) > 1:
                logger.debug(
                    "group_dominant_tie",
                    group_id=group_id,
                    traits=[r.trait for r in ties],
                    chosen=ties[0].trait,
                )

        return DominantTraits(overall=overall, by_group=by_group, group_ties=group_ties)

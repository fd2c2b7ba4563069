"""
scoring/decision.py — Pass/fail decision and ranking

Compares a candidate's overall score with the process cutoff and orders a
batch of candidates for selection views.

Rules:
    passed = overall_score >= cutoff
    rank   = competition ranking on overall_score, highest first
             (equal scores share a rank; the next rank skips: 1, 1, 3)
    order  = overall_score desc, then candidate_id asc
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional, Sequence

import structlog

from assessment_platform.scoring.records import ProcessConfig, ScoringPolicy
from assessment_platform.scoring.utils import to_decimal

if TYPE_CHECKING:
    from assessment_platform.scoring.engine import ScoreResult

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CandidateDecision:
    candidate_id: Optional[str]
    overall_score: Decimal
    cutoff: Decimal
    passed: bool
    rank: int = 1


def resolve_cutoff(config: Optional[ProcessConfig], policy: Optional[ScoringPolicy] = None) -> float:
    """Process cutoff when configured, else the policy default."""
    if config is not None and config.cutoff_score is not None:
        return config.cutoff_score
    return float((policy or ScoringPolicy()).default_cutoff_score)


def decide(result: "ScoreResult", cutoff: float) -> CandidateDecision:
    """Pass/fail for one ScoreResult."""
    cutoff_d = to_decimal(cutoff, places=1)
    return CandidateDecision(
        candidate_id=result.candidate_id,
        overall_score=result.overall.overall_score,
        cutoff=cutoff_d,
        passed=result.overall.overall_score >= cutoff_d,
    )


def rank_candidates(results: Sequence["ScoreResult"], cutoff: float) -> List[CandidateDecision]:
    """
    Rank ScoreResults by overall score.

    Args:
        results: ScoreResult objects, one per candidate.
        cutoff: Passing threshold in [0, 100].

    Returns:
        Decisions ordered best first, each carrying its competition rank.
    """
    decisions = sorted(
        (decide(r, cutoff) for r in results),
        key=lambda d: (-d.overall_score, d.candidate_id or ""),
    )

    ranked: List[CandidateDecision] = []
    previous_score = None
    rank = 0
    for position, decision in enumerate(decisions, start=1):
        if decision.overall_score != previous_score:
            rank = position
            previous_score = decision.overall_score
        ranked.append(CandidateDecision(
            candidate_id=decision.candidate_id,
            overall_score=decision.overall_score,
            cutoff=decision.cutoff,
            passed=decision.passed,
            rank=rank,
        ))

    logger.info(
        "candidates_ranked",
        candidates=len(ranked),
        passed=sum(1 for d in ranked if d.passed),
        cutoff=float(to_decimal(cutoff, places=1)),
    )
    return ranked

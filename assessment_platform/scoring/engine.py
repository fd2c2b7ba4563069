"""
scoring/engine.py — Assessment Scoring Engine

Single entry point that turns one candidate's recorded responses into a
ScoreResult.

Pipeline:
    responses ──► resolve question/option ──► ResponseClassifier
                                                   │
                       ┌───────────────────────────┴──────────────┐
                 ObjectiveScorer                          TraitAggregator
                       │                                        │
                       │                              WeightedTraitScorer
                       │                              DominantTraitResolver
                       └──────────► OverallScoreCombiner ◄───────┘
                                           │
                 TimingAggregator ──► ScoreResult (frozen)

The engine performs no I/O and keeps no state between calls; the same
snapshot always yields an identical result. Contract violations raise
InconsistentInputError before anything is returned.
"""

from dataclasses import asdict, dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

import structlog

from assessment_platform.core.exceptions import (
    DuplicateResponseError,
    InconsistentInputError,
    MissingQuestionError,
)
from assessment_platform.scoring.classifier import ResponseClassifier
from assessment_platform.scoring.dominant_traits import DominantTraitResolver, DominantTraits
from assessment_platform.scoring.objective_scorer import ObjectiveResult, ObjectiveScorer
from assessment_platform.scoring.overall_combiner import OverallResult, OverallScoreCombiner
from assessment_platform.scoring.records import (
    ProcessConfig,
    QuestionRecord,
    ResolvedResponse,
    ResponseRecord,
    ScoringPolicy,
)
from assessment_platform.scoring.timing import TimingAggregator, TimingResult
from assessment_platform.scoring.trait_aggregator import TraitAggregator, TraitRecord, WeightSource
from assessment_platform.scoring.utils import check_weight
from assessment_platform.scoring.weighted_trait_scorer import WeightedTraitScorer

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class TraitSummary:
    records: Tuple[TraitRecord, ...]       # sorted by percentage desc
    dominant: DominantTraits
    opinion_score: Decimal
    total_responses: int
    group_response_counts: Dict[str, int]
    group_max_weights: Dict[str, Decimal]
    has_trait_weights: bool


@dataclass(frozen=True)
class ScoreDiagnostics:
    """Counters for every degraded-but-non-fatal path taken."""
    unrecognized_question_types: int = 0
    unresolved_trait_responses: int = 0
    derived_trait_names: int = 0
    default_trait_weights: int = 0
    clamped_time_values: int = 0
    weight_fallback: bool = False


@dataclass(frozen=True)
class ScoreResult:
    """Everything computed for one candidate."""
    candidate_id: Optional[str]
    objective: ObjectiveResult
    traits: TraitSummary
    overall: OverallResult
    timing: TimingResult
    diagnostics: ScoreDiagnostics

    @property
    def overall_score(self) -> Decimal:
        return self.overall.overall_score

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-serializable view (Decimals as floats, enums as values)."""
        return _jsonable(asdict(self))


def _jsonable(value):
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


# ---------------------------------------------------------------------------
# Input checks
# ---------------------------------------------------------------------------

def _resolve(
    responses: Sequence[ResponseRecord],
    questions: Optional[Sequence[QuestionRecord]],
) -> List[ResolvedResponse]:
    batch: Dict[str, QuestionRecord] = {q.id: q for q in questions or ()}
    candidates = {r.candidate_id for r in responses}
    if len(candidates) > 1:
        raise InconsistentInputError(
            f"Responses belong to {len(candidates)} candidates; expected one per computation"
        )

    seen = set()
    resolved: List[ResolvedResponse] = []
    for response in responses:
        if response.question_id in seen:
            raise DuplicateResponseError(response.candidate_id, response.question_id)
        seen.add(response.question_id)

        question = response.question or batch.get(response.question_id)
        if question is None:
            raise MissingQuestionError(response.question_id, response.candidate_id)
        if question.id != response.question_id:
            raise InconsistentInputError(
                f"Response for question {response.question_id} embeds question {question.id}",
                candidate_id=response.candidate_id,
                question_id=response.question_id,
            )

        for option in question.options:
            check_weight(f"option {option.id} of question {question.id}", option.weight)

        option = question.find_option(response.selected_option_id, response.selected_option_text)
        resolved.append(ResolvedResponse(response=response, question=question, option=option))
    return resolved


def _check_config(config: Optional[ProcessConfig]) -> None:
    if config is None:
        return
    for group in config.trait_groups:
        for trait in group.traits:
            check_weight(f"trait '{trait.name}' in group {group.id}", trait.weight)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def compute_assessment(
    responses: Sequence[ResponseRecord],
    process_config: Optional[ProcessConfig] = None,
    *,
    questions: Optional[Sequence[QuestionRecord]] = None,
    policy: Optional[ScoringPolicy] = None,
) -> ScoreResult:
    """
    Score one candidate.

    Args:
        responses: The candidate's responses, each embedding its question or
                   referencing one in ``questions``.
        process_config: Trait groups, combiner weights and cutoff.
        questions: Question batch for responses that do not embed theirs.
        policy: Defaults and ceilings; ScoringPolicy() when omitted.

    Returns:
        ScoreResult.

    Raises:
        InconsistentInputError: missing question, duplicate response, more than
            one candidate, or a negative or non-finite weight. No partial result
            is produced.
    """
    policy = policy or ScoringPolicy()

    _check_config(process_config)
    resolved = _resolve(responses, questions)
    candidate_id = responses[0].candidate_id if responses else None

    classified = ResponseClassifier().classify(resolved)
    objective = ObjectiveScorer().calculate(classified.objective)

    aggregation = TraitAggregator(policy).aggregate(classified.preference, process_config)
    weighted = WeightedTraitScorer(policy).score(aggregation, process_config)
    dominant = DominantTraitResolver().resolve(weighted.records)

    overall = OverallScoreCombiner(policy).calculate(
        accuracy=objective.accuracy,
        opinion_score=weighted.opinion_score,
        has_objective=classified.has_objective,
        has_preference=aggregation.has_records,
        objective_weight=process_config.multiple_choice_weight if process_config else None,
        opinion_weight=process_config.opinion_weight if process_config else None,
    )
    timing = TimingAggregator().calculate(responses)

    diagnostics = ScoreDiagnostics(
        unrecognized_question_types=classified.unrecognized,
        unresolved_trait_responses=aggregation.unresolved_responses,
        derived_trait_names=aggregation.derived_trait_names,
        default_trait_weights=sum(1 for r in weighted.records if r.weight_source == WeightSource.DEFAULT),
        clamped_time_values=timing.clamped_values,
        weight_fallback=overall.weight_fallback,
    )

    result = ScoreResult(
        candidate_id=candidate_id,
        objective=objective,
        traits=TraitSummary(
            records=weighted.records,
            dominant=dominant,
            opinion_score=weighted.opinion_score,
            total_responses=aggregation.total_responses,
            group_response_counts=aggregation.group_response_counts,
            group_max_weights=weighted.group_max_weights,
            has_trait_weights=aggregation.has_trait_weights,
        ),
        overall=overall,
        timing=timing,
        diagnostics=diagnostics,
    )

    logger.info(
        "assessment_computed",
        candidate_id=candidate_id,
        responses=len(responses),
        objective_responses=len(classified.objective),
        preference_responses=len(classified.preference),
        accuracy=float(objective.accuracy),
        opinion_score=float(weighted.opinion_score),
        overall_score=float(overall.overall_score),
        mode=overall.mode.value,
        diagnostics=asdict(diagnostics),
    )
    return result

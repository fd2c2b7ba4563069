"""
routers/scoring.py — Assessment scoring endpoints

Endpoints:
  POST /api/v1/assessments/score  — Score one candidate snapshot
  POST /api/v1/assessments/rank   — Score and rank several candidates of one process

The router only translates payloads; all scoring happens in
assessment_platform.scoring.engine. InconsistentInputError is mapped to 422
by the handler registered in main.py.
"""

import logging
import time
from dataclasses import replace
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, HTTPException

from assessment_platform.config import Settings, get_settings
from assessment_platform.core.logging import bind_candidate, clear_context
from assessment_platform.models.assessment import (
    DecisionOut,
    RankRequest,
    RankResponse,
    ScoreRequest,
    ScoreResponse,
)
from assessment_platform.scoring.decision import CandidateDecision, decide, rank_candidates, resolve_cutoff
from assessment_platform.scoring.engine import compute_assessment

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/assessments", tags=["Assessment Scoring"])


def _decision_out(decision: CandidateDecision) -> DecisionOut:
    return DecisionOut(
        candidate_id=decision.candidate_id,
        overall_score=float(decision.overall_score),
        cutoff=float(decision.cutoff),
        passed=decision.passed,
        rank=decision.rank,
    )


@router.post("/score", response_model=ScoreResponse, summary="Score one candidate")
def score_candidate(
    payload: ScoreRequest,
    settings: Settings = Depends(get_settings),
) -> ScoreResponse:
    start = time.time()
    config = payload.process_config.to_record() if payload.process_config else None
    responses = [r.to_record() for r in payload.responses]
    if responses:
        bind_candidate(responses[0].candidate_id)

    try:
        result = compute_assessment(
            responses,
            config,
            questions=[q.to_record() for q in payload.questions],
            policy=settings.scoring_policy,
        )
    finally:
        clear_context()

    decision = decide(result, resolve_cutoff(config, settings.scoring_policy))
    logger.info(
        f"Scored candidate {result.candidate_id}: overall={float(result.overall_score):.1f} "
        f"passed={decision.passed}"
    )

    return ScoreResponse(
        status="success",
        result=result.to_dict(),
        decision=_decision_out(decision),
        scored_at=datetime.now(timezone.utc).isoformat(),
        duration_seconds=round(time.time() - start, 4),
    )


@router.post("/rank", response_model=RankResponse, summary="Score and rank candidates")
def rank_process_candidates(
    payload: RankRequest,
    settings: Settings = Depends(get_settings),
) -> RankResponse:
    start = time.time()

    if len(payload.candidates) > settings.MAX_CANDIDATES_PER_RANKING:
        raise HTTPException(
            status_code=413,
            detail=f"At most {settings.MAX_CANDIDATES_PER_RANKING} candidates per ranking request",
        )
    ids = [c.candidate_id for c in payload.candidates]
    if len(set(ids)) != len(ids):
        raise HTTPException(
            status_code=422,
            detail="Each candidate may appear only once per ranking request",
        )

    config = payload.process_config.to_record() if payload.process_config else None
    questions = [q.to_record() for q in payload.questions]
    policy = settings.scoring_policy

    results = []
    for snapshot in payload.candidates:
        bind_candidate(snapshot.candidate_id)
        try:
            result = compute_assessment(
                [r.to_record() for r in snapshot.responses],
                config,
                questions=questions,
                policy=policy,
            )
        finally:
            clear_context()
        # a candidate with no responses still gets ranked, under its own id
        if result.candidate_id is None:
            result = replace(result, candidate_id=snapshot.candidate_id)
        results.append(result)

    cutoff = resolve_cutoff(config, settings.scoring_policy)
    ranking = rank_candidates(results, cutoff)
    logger.info(
        f"Ranked {len(ranking)} candidates, {sum(1 for d in ranking if d.passed)} at or above {cutoff}"
    )

    return RankResponse(
        status="success",
        candidates_scored=len(ranking),
        candidates_passed=sum(1 for d in ranking if d.passed),
        cutoff=float(cutoff),
        ranking=[_decision_out(d) for d in ranking],
        results={r.candidate_id: r.to_dict() for r in results},
        duration_seconds=round(time.time() - start, 4),
    )

# tests/conftest.py

"""
Pytest Fixtures - Shared builders for snapshots, engine records and the API

Builders return frozen engine records; the *_payload fixtures return the
camelCase JSON the platform front end posts to the API.
"""

from typing import Iterable, List, Optional, Sequence, Tuple

import pytest
from fastapi.testclient import TestClient

from assessment_platform.main import app
from assessment_platform.scoring.records import (
    OptionRecord,
    ProcessConfig,
    QuestionRecord,
    ResolvedResponse,
    ResponseRecord,
    StageRecord,
    TraitConfig,
    TraitGroupConfig,
)

CANDIDATE_ID = "cand-0001"


# =============================================================================
# FASTAPI TEST CLIENT FIXTURE
# =============================================================================

@pytest.fixture(scope="module")
def client():
    """Create a TestClient for FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


# =============================================================================
# RECORD BUILDERS
# =============================================================================

STAGE_1 = StageRecord(id="stage-1", name="Aptitude", order=1)
STAGE_2 = StageRecord(id="stage-2", name="Personality", order=2)


def objective_question(
    qid: str,
    correct: str = "a",
    stage: StageRecord = STAGE_1,
    category: Optional[str] = None,
    qtype: str = "OBJECTIVE",
) -> QuestionRecord:
    """Two-option objective question; ``correct`` names the keyed option."""
    return QuestionRecord(
        id=qid,
        stage=stage,
        type=qtype,
        options=(
            OptionRecord(id="a", text="Option A", is_correct=correct == "a"),
            OptionRecord(id="b", text="Option B", is_correct=correct == "b"),
        ),
        category=category,
    )


def preference_question(
    qid: str,
    options: Iterable[Tuple[str, Optional[str], Optional[float]]],
    stage: StageRecord = STAGE_2,
    group_id: Optional[str] = None,
    qtype: str = "PREFERENCE",
) -> QuestionRecord:
    """Preference question from (option_id, trait, weight) triples."""
    return QuestionRecord(
        id=qid,
        stage=stage,
        type=qtype,
        options=tuple(
            OptionRecord(id=oid, text=f"I prefer ({trait})" if trait else "", trait=trait,
                         weight=weight, group_id=group_id)
            for oid, trait, weight in options
        ),
    )


def respond(
    question: QuestionRecord,
    option_id: Optional[str],
    candidate_id: str = CANDIDATE_ID,
    time_spent: Optional[float] = 10.0,
    embed: bool = True,
    **kwargs,
) -> ResponseRecord:
    return ResponseRecord(
        candidate_id=candidate_id,
        question_id=question.id,
        selected_option_id=option_id,
        time_spent=time_spent,
        question=question if embed else None,
        **kwargs,
    )


def resolve(responses: Sequence[ResponseRecord]) -> List[ResolvedResponse]:
    """Join responses to their embedded question the way the engine does."""
    return [
        ResolvedResponse(
            response=r,
            question=r.question,
            option=r.question.find_option(r.selected_option_id, r.selected_option_text),
        )
        for r in responses
    ]


def objective_responses(total: int, correct: int, **kwargs) -> List[ResponseRecord]:
    """``total`` objective responses of which the first ``correct`` are right."""
    responses = []
    for i in range(total):
        question = objective_question(f"obj-{i}", **kwargs)
        responses.append(respond(question, "a" if i < correct else "b"))
    return responses


def trait_choices(choices: Sequence[str], weights=None, group_id: Optional[str] = None) -> List[ResponseRecord]:
    """One preference response per entry of ``choices``, each picking that trait."""
    weights = weights or {}
    traits = sorted(set(choices))
    responses = []
    for i, trait in enumerate(choices):
        question = preference_question(
            f"pref-{i}",
            [(f"opt-{t}", t, weights.get(t)) for t in traits],
            group_id=group_id,
        )
        responses.append(respond(question, f"opt-{trait}"))
    return responses


def group_config(group_id: str, traits, name: str = "", **kwargs) -> ProcessConfig:
    """ProcessConfig with one group built from (name, weight) pairs."""
    return ProcessConfig(
        trait_groups=(
            TraitGroupConfig(
                id=group_id,
                name=name or group_id,
                traits=tuple(TraitConfig(name=t, weight=w) for t, w in traits),
            ),
        ),
        **kwargs,
    )


# =============================================================================
# SCENARIO FIXTURES
# =============================================================================

@pytest.fixture
def seven_of_ten():
    """10 objective responses, 7 correct."""
    return objective_responses(10, 7)


@pytest.fixture
def scenario_b_responses():
    """4 preference responses: A twice, B twice."""
    return trait_choices(["A", "B", "A", "B"])


@pytest.fixture
def scenario_b_config():
    """A weight 5, B weight 3, both in group G."""
    return group_config("G", [("A", 5), ("B", 3)], name="Work style")


# =============================================================================
# API PAYLOAD FIXTURES
# =============================================================================

def _question_payload(qid: str, qtype: str, options: list, stage_order: int = 1) -> dict:
    return {
        "id": qid,
        "stage": {"id": f"stage-{stage_order}", "name": f"Stage {stage_order}", "order": stage_order},
        "type": qtype,
        "options": options,
    }


@pytest.fixture
def question_batch_payload():
    """Two objective questions and two preference questions (group G)."""
    return [
        _question_payload("q1", "MULTIPLE_CHOICE", [
            {"id": "q1a", "text": "4", "isCorrect": True},
            {"id": "q1b", "text": "5"},
        ]),
        _question_payload("q2", "OBJECTIVE", [
            {"id": "q2a", "text": "Paris", "isCorrect": True},
            {"id": "q2b", "text": "Rome"},
        ]),
        _question_payload("q3", "OPINION_MULTIPLE", [
            {"id": "q3a", "text": "Take charge", "trait": "A"},
            {"id": "q3b", "text": "Support the team", "trait": "B"},
        ], stage_order=2),
        _question_payload("q4", "PREFERENCE", [
            {"id": "q4a", "text": "Decide quickly", "trait": "A"},
            {"id": "q4b", "text": "Ask around", "trait": "B"},
        ], stage_order=2),
    ]


@pytest.fixture
def process_config_payload():
    return {
        "traitGroups": [
            {
                "id": "G",
                "name": "Work style",
                "traits": [{"name": "A", "weight": 5}, {"name": "B", "weight": 3}],
            }
        ],
        "multipleChoiceWeight": 0.7,
        "opinionWeight": 0.3,
        "cutoffScore": 60,
    }


def responses_payload(candidate_id: str, answers: dict) -> list:
    """camelCase responses from {question_id: option_id}."""
    return [
        {
            "candidateId": candidate_id,
            "questionId": qid,
            "selectedOptionId": oid,
            "timeSpent": 12.5,
        }
        for qid, oid in answers.items()
    ]

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from assessment_platform.scoring.records import (
    OptionRecord,
    ProcessConfig,
    QuestionRecord,
    ResponseRecord,
    StageRecord,
    TraitConfig,
    TraitGroupConfig,
)


class SnapshotModel(BaseModel):
    """
    Base for request payloads. Accepts snake_case or the camelCase keys the
    platform front end sends (e.g. ``traitGroups``, ``multipleChoiceWeight``).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =====================================================================
# Snapshot payloads
# =====================================================================

class StageIn(SnapshotModel):
    id: str = Field(..., min_length=1)
    name: str = ""
    order: int = 0

    def to_record(self) -> StageRecord:
        return StageRecord(id=self.id, name=self.name, order=self.order)


class OptionIn(SnapshotModel):
    id: str = Field(..., min_length=1)
    text: str = ""
    is_correct: bool = False
    trait: Optional[str] = Field(default=None, description="Trait label (preference questions)")
    weight: Optional[float] = Field(default=None, allow_inf_nan=False)
    group_id: Optional[str] = None
    trait_id: Optional[str] = None

    def to_record(self) -> OptionRecord:
        return OptionRecord(
            id=self.id,
            text=self.text,
            is_correct=self.is_correct,
            trait=self.trait,
            weight=self.weight,
            group_id=self.group_id,
            trait_id=self.trait_id,
        )


class QuestionIn(SnapshotModel):
    id: str = Field(..., min_length=1)
    stage: StageIn
    type: str = Field(..., description="OBJECTIVE or PREFERENCE (legacy: MULTIPLE_CHOICE, OPINION_MULTIPLE)")
    options: List[OptionIn] = Field(default_factory=list)
    category: Optional[str] = None

    def to_record(self) -> QuestionRecord:
        return QuestionRecord(
            id=self.id,
            stage=self.stage.to_record(),
            type=self.type,
            options=tuple(o.to_record() for o in self.options),
            category=self.category,
        )


class ResponseIn(SnapshotModel):
    candidate_id: str = Field(..., min_length=1)
    question_id: str = Field(..., min_length=1)
    selected_option_id: Optional[str] = None
    selected_option_text: Optional[str] = None
    time_spent: Optional[float] = Field(default=None, allow_inf_nan=False, description="Seconds")
    is_correct: Optional[bool] = None
    question: Optional[QuestionIn] = None

    def to_record(self) -> ResponseRecord:
        return ResponseRecord(
            candidate_id=self.candidate_id,
            question_id=self.question_id,
            selected_option_id=self.selected_option_id,
            selected_option_text=self.selected_option_text,
            time_spent=self.time_spent,
            is_correct=self.is_correct,
            question=self.question.to_record() if self.question else None,
        )


class TraitIn(SnapshotModel):
    name: str = Field(..., min_length=1)
    weight: float = Field(default=1.0, allow_inf_nan=False)
    group_id: Optional[str] = None
    trait_id: Optional[str] = None

    def to_record(self) -> TraitConfig:
        return TraitConfig(name=self.name, weight=self.weight, trait_id=self.trait_id)


class TraitGroupIn(SnapshotModel):
    id: str = Field(..., min_length=1)
    name: str = ""
    traits: List[TraitIn] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_trait_group_ids(self):
        """A trait's groupId, when given, must name the group that lists it."""
        for trait in self.traits:
            if trait.group_id is not None and trait.group_id != self.id:
                raise ValueError(
                    f"trait '{trait.name}' declares group {trait.group_id} but is listed under {self.id}"
                )
        return self

    def to_record(self) -> TraitGroupConfig:
        return TraitGroupConfig(
            id=self.id,
            name=self.name,
            traits=tuple(t.to_record() for t in self.traits),
        )


class ProcessConfigIn(SnapshotModel):
    trait_groups: List[TraitGroupIn] = Field(default_factory=list)
    multiple_choice_weight: Optional[float] = Field(default=None, allow_inf_nan=False)
    opinion_weight: Optional[float] = Field(default=None, allow_inf_nan=False)
    cutoff_score: Optional[float] = Field(default=None, ge=0, le=100)

    def to_record(self) -> ProcessConfig:
        return ProcessConfig(
            trait_groups=tuple(g.to_record() for g in self.trait_groups),
            multiple_choice_weight=self.multiple_choice_weight,
            opinion_weight=self.opinion_weight,
            cutoff_score=self.cutoff_score,
        )


class ScoreRequest(SnapshotModel):
    """One candidate's snapshot."""
    responses: List[ResponseIn] = Field(default_factory=list)
    questions: List[QuestionIn] = Field(default_factory=list)
    process_config: Optional[ProcessConfigIn] = None


class CandidateSnapshot(SnapshotModel):
    candidate_id: str = Field(..., min_length=1)
    responses: List[ResponseIn] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_candidate_ids(self):
        for response in self.responses:
            if response.candidate_id != self.candidate_id:
                raise ValueError(
                    f"response for question {response.question_id} belongs to "
                    f"{response.candidate_id}, not {self.candidate_id}"
                )
        return self


class RankRequest(SnapshotModel):
    """Several candidates of one process, scored and ranked together."""
    candidates: List[CandidateSnapshot] = Field(..., min_length=1)
    questions: List[QuestionIn] = Field(default_factory=list)
    process_config: Optional[ProcessConfigIn] = None


# =====================================================================
# Response models
# =====================================================================

class DecisionOut(BaseModel):
    candidate_id: Optional[str] = None
    overall_score: float
    cutoff: float
    passed: bool
    rank: int = 1


class ScoreResponse(BaseModel):
    status: str
    result: Dict[str, Any]
    decision: DecisionOut
    scored_at: str
    duration_seconds: float


class RankResponse(BaseModel):
    status: str
    candidates_scored: int
    candidates_passed: int
    cutoff: float
    ranking: List[DecisionOut]
    results: Dict[str, Dict[str, Any]]
    duration_seconds: float


class ErrorResponse(BaseModel):
    """
    Standard error response model.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[dict] = Field(default=None, description="Additional error details")
    timestamp: datetime = Field(..., description="Error occurrence timestamp")

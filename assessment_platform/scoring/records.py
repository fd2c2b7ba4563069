"""
Engine input records
assessment_platform/scoring/records.py

Frozen snapshots of the rows the persistence layer has already joined:
Response -> Question -> Option, and Process -> TraitGroup -> Trait.
The engine only reads them.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Optional, Tuple

from assessment_platform.scoring.utils import exact_decimal


@dataclass(frozen=True)
class StageRecord:
    """An ordered phase of a test."""
    id: str
    name: str = ""
    order: int = 0


@dataclass(frozen=True)
class OptionRecord:
    id: str
    text: str = ""
    is_correct: bool = False           # objective questions
    trait: Optional[str] = None        # preference questions
    weight: Optional[float] = None
    group_id: Optional[str] = None
    trait_id: Optional[str] = None


@dataclass(frozen=True)
class QuestionRecord:
    id: str
    stage: StageRecord
    type: str                          # raw tag, parsed by the classifier
    options: Tuple[OptionRecord, ...] = ()
    category: Optional[str] = None

    def find_option(self, option_id: Optional[str], option_text: Optional[str] = None) -> Optional[OptionRecord]:
        """Locate the selected option by id, falling back to its text."""
        for option in self.options:
            if option_id is not None and option.id == option_id:
                return option
        if option_text:
            for option in self.options:
                if option.text == option_text:
                    return option
        return None


@dataclass(frozen=True)
class ResponseRecord:
    """One candidate's answer to one question."""
    candidate_id: str
    question_id: str
    selected_option_id: Optional[str] = None
    selected_option_text: Optional[str] = None
    time_spent: Optional[float] = None
    is_correct: Optional[bool] = None
    question: Optional[QuestionRecord] = None


@dataclass(frozen=True)
class ResolvedResponse:
    """A response joined to its question and selected option."""
    response: ResponseRecord
    question: QuestionRecord
    option: Optional[OptionRecord]


@dataclass(frozen=True)
class TraitConfig:
    name: str
    weight: float = 1.0
    trait_id: Optional[str] = None


@dataclass(frozen=True)
class TraitGroupConfig:
    id: str
    name: str = ""
    traits: Tuple[TraitConfig, ...] = ()


@dataclass(frozen=True)
class ProcessConfig:
    """Per-process scoring configuration."""
    trait_groups: Tuple[TraitGroupConfig, ...] = ()
    multiple_choice_weight: Optional[float] = None
    opinion_weight: Optional[float] = None
    cutoff_score: Optional[float] = None


@dataclass(frozen=True)
class TraitDefinition:
    """A configured trait flattened out of its group."""
    name: str
    weight: Decimal
    group_id: str
    group_name: str
    trait_id: Optional[str] = None


def normalize_trait_key(name: str) -> str:
    """Lookup key for trait names: trimmed, single-spaced, case-folded."""
    return " ".join(name.split()).casefold()


def index_traits(config: Optional[ProcessConfig]) -> Dict[str, TraitDefinition]:
    """
    Flatten the process trait groups into a lookup by normalized trait name.

    A trait listed twice keeps its first group and the larger weight.
    """
    index: Dict[str, TraitDefinition] = {}
    if config is None:
        return index
    for group in config.trait_groups:
        for trait in group.traits:
            key = normalize_trait_key(trait.name)
            weight = exact_decimal(trait.weight)
            existing = index.get(key)
            if existing is None:
                index[key] = TraitDefinition(
                    name=trait.name,
                    weight=weight,
                    group_id=group.id,
                    group_name=group.name,
                    trait_id=trait.trait_id,
                )
            elif weight > existing.weight:
                index[key] = TraitDefinition(
                    name=existing.name,
                    weight=weight,
                    group_id=existing.group_id,
                    group_name=existing.group_name,
                    trait_id=existing.trait_id or trait.trait_id,
                )
    return index


@dataclass(frozen=True)
class ScoringPolicy:
    """Defaults the engine falls back to when configuration is silent."""
    default_objective_weight: Decimal = Decimal("0.5")
    default_opinion_weight: Decimal = Decimal("0.5")
    ungrouped_max_weight: Decimal = Decimal("5")
    default_trait_weight: Decimal = Decimal("1")
    default_cutoff_score: Decimal = Decimal("70")

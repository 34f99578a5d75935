# classgroups/domain/models.py
"""
Pydantic DTOs shared by the grouping engines, services and API.

Attribute names are snake_case; the JSON names keep the camelCase used by
the survey forms and the stored documents (birthDate, mbtiType, ...).
"""
from datetime import datetime
from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from classgroups.config.settings import settings


class Mode(str, Enum):
    INTERESTS = "interests"
    MBTI = "mbti"


# storage keys the dashboards read group assignments from
ASSIGNMENT_KEYS = {
    Mode.INTERESTS: "groupAssignments",
    Mode.MBTI: "mbtiGroupAssignments",
}

MONTH_NAMES = [
    "", "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

MBTI_TYPES = [
    "INTJ", "INTP", "ENTJ", "ENTP",  # Analysts (NT)
    "INFJ", "INFP", "ENFJ", "ENFP",  # Diplomats (NF)
    "ISTJ", "ISFJ", "ESTJ", "ESFJ",  # Sentinels (SJ)
    "ISTP", "ISFP", "ESTP", "ESFP",  # Explorers (SP)
]

MBTI_DESCRIPTIONS = {
    "INTJ": "Architect",
    "INTP": "Thinker",
    "ENTJ": "Commander",
    "ENTP": "Debater",
    "INFJ": "Advocate",
    "INFP": "Mediator",
    "ENFJ": "Protagonist",
    "ENFP": "Campaigner",
    "ISTJ": "Logistician",
    "ISFJ": "Defender",
    "ESTJ": "Executive",
    "ESFJ": "Consul",
    "ISTP": "Virtuoso",
    "ISFP": "Adventurer",
    "ESTP": "Entrepreneur",
    "ESFP": "Entertainer",
}

CONFIDENCE_TEXT = {
    "high": "Very confident",
    "medium": "Moderately confident",
    "low": "Not very confident",
}

Confidence = Literal["high", "medium", "low"]

# path segments under /students/{mode}/ that would shadow a student id
RESERVED_IDS = {"analytics"}


def _clean_interests(values: List[str]) -> List[str]:
    cleaned = [v.strip() for v in values if v and v.strip()]
    if len({v.lower() for v in cleaned}) != len(cleaned):
        raise ValueError("interests must be different from each other")
    return cleaned


def _normalize_type(value: str) -> str:
    code = value.strip().upper()
    if code not in MBTI_TYPES:
        raise ValueError(f"unknown MBTI type: {value!r}")
    return code


class BirthDate(BaseModel):
    month: int = Field(ge=1, le=12)
    day: int = Field(ge=1, le=31)

    @property
    def formatted(self) -> str:
        """Sortable MM-DD key."""
        return f"{self.month:02d}-{self.day:02d}"

    def display(self) -> str:
        return f"{MONTH_NAMES[self.month]} {self.day}"


class MbtiDimensions(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    energy_direction: Literal["E", "I"] = Field(alias="energyDirection")
    information_processing: Literal["S", "N"] = Field(alias="informationProcessing")
    decision_making: Literal["T", "F"] = Field(alias="decisionMaking")
    lifestyle_approach: Literal["J", "P"] = Field(alias="lifestyleApproach")

    def letters(self) -> List[str]:
        return [
            self.energy_direction,
            self.information_processing,
            self.decision_making,
            self.lifestyle_approach,
        ]


class StudentBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    name: str
    submit_time: Optional[datetime] = Field(default=None, alias="submitTime")
    original_submit_time: Optional[datetime] = Field(default=None, alias="originalSubmitTime")
    # resubmissions merged into this record
    update_count: int = Field(default=0, ge=0, alias="updateCount")


class InterestStudent(StudentBase):
    interests: List[str] = Field(default_factory=list)
    birth_date: Optional[BirthDate] = Field(default=None, alias="birthDate")

    @field_validator("interests")
    @classmethod
    def _distinct_interests(cls, v: List[str]) -> List[str]:
        v = _clean_interests(v)
        if len(v) > settings.MAX_INTERESTS:
            raise ValueError(f"at most {settings.MAX_INTERESTS} interests are allowed")
        return v


class MbtiStudent(StudentBase):
    mbti_type: str = Field(alias="mbtiType")
    mbti_dimensions: Optional[MbtiDimensions] = Field(default=None, alias="mbtiDimensions")
    mbti_confidence: Optional[Confidence] = Field(default=None, alias="mbtiConfidence")
    personality_description: Optional[str] = Field(default=None, alias="personalityDescription")

    @field_validator("mbti_type")
    @classmethod
    def _known_type(cls, v: str) -> str:
        return _normalize_type(v)


# ----------------------------
# Submissions (survey forms)
# ----------------------------

class SubmissionBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    name: str

    @field_validator("id")
    @classmethod
    def _usable_id(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            return None
        if v.lower() in RESERVED_IDS:
            raise ValueError(f"{v!r} cannot be used as a student id")
        return v

    @field_validator("name")
    @classmethod
    def _valid_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < settings.MIN_NAME_LENGTH:
            raise ValueError(
                f"please enter a valid name (at least {settings.MIN_NAME_LENGTH} characters)"
            )
        return v


class InterestSubmission(SubmissionBase):
    birth_date: BirthDate = Field(alias="birthDate")
    interests: List[str]

    @field_validator("interests")
    @classmethod
    def _all_interests(cls, v: List[str]) -> List[str]:
        v = _clean_interests(v)
        limit = settings.MAX_INTERESTS
        if settings.REQUIRE_ALL_INTERESTS and len(v) != limit:
            raise ValueError(f"please fill in all {limit} interests/hobbies")
        if len(v) > limit:
            raise ValueError(f"at most {limit} interests are allowed")
        return v


class MbtiSubmission(SubmissionBase):
    mbti_type: str = Field(alias="mbtiType")
    mbti_confidence: Optional[Confidence] = Field(default=None, alias="mbtiConfidence")
    personality_description: Optional[str] = Field(default=None, alias="personalityDescription")

    @field_validator("mbti_type")
    @classmethod
    def _known_type(cls, v: str) -> str:
        return _normalize_type(v)


class GenerateGroupsReq(BaseModel):
    num_groups: int = settings.DEFAULT_GROUP_COUNT


# ----------------------------
# Statistics
# ----------------------------

class InterestGroupStats(BaseModel):
    index: int
    size: int
    avg_similarity: float


class InterestPartitionStats(BaseModel):
    total_students: int
    num_groups: int
    avg_group_size: float
    min_group_size: int
    max_group_size: int
    avg_intra_group_similarity: float
    balance_score: float
    groups: List[InterestGroupStats] = Field(default_factory=list)


class MbtiGroupStats(BaseModel):
    index: int
    size: int
    dimensions: Dict[str, int]
    balance_score: float


class MbtiPartitionStats(BaseModel):
    total_students: int
    num_groups: int
    avg_group_size: float
    min_group_size: int
    max_group_size: int
    overall_balance: float
    groups: List[MbtiGroupStats] = Field(default_factory=list)


class InterestGroupingResult(BaseModel):
    mode: Mode = Mode.INTERESTS
    groups: List[List[InterestStudent]]
    statistics: InterestPartitionStats


class MbtiGroupingResult(BaseModel):
    mode: Mode = Mode.MBTI
    groups: List[List[MbtiStudent]]
    statistics: MbtiPartitionStats

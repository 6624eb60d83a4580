from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class Residence(str, Enum):
    """Where the applicant lives relative to the school's service district."""
    IN_DISTRICT = "IN_DISTRICT"
    OUT_DISTRICT = "OUT_DISTRICT"


@dataclass
class Subject:
    """
    Exam subject. The order of subjects in a run is the tie-break priority:
    the first subject is the strongest tie-breaker.
    """
    id: str  # key into Applicant.scores
    name: str
    max_score: float = 100


@dataclass
class Program:
    """
    Study plan (stream) with a fixed number of seats.
    `name` is both the display name and the key preferences are matched against.
    """
    id: str
    name: str
    quota: int = 0


@dataclass
class Applicant:
    """
    Candidate for admission.
    """
    id: str  # unique within a roster
    title: str
    first_name: str
    last_name: str
    preferred_programs: List[str] = field(default_factory=list)  # 1st choice first
    scores: Dict[str, object] = field(default_factory=dict)  # subject id -> raw score
    residence: Optional[Residence] = Residence.OUT_DISTRICT
    is_quota_reserved: bool = False

    @property
    def full_name(self) -> str:
        return f"{self.title}{self.first_name} {self.last_name}".strip()

    @property
    def is_in_district(self) -> bool:
        return self.residence == Residence.IN_DISTRICT


@dataclass
class Policy:
    """Global admission criteria for one run."""
    enable_district_priority: bool = False
    enable_quota_reservation: bool = False


@dataclass
class RankedApplicant(Applicant):
    """
    Applicant annotated with the run's results.
    qualified_program is None exactly when the applicant is wait-listed.
    """
    total_score: float = 0.0
    rank: int = 0  # 1-based, unique, contiguous
    qualified_program: Optional[str] = None

    @property
    def is_admitted(self) -> bool:
        return self.qualified_program is not None


@dataclass
class ProgramFill:
    """How many seats of a program were taken."""
    program: str
    quota: int
    admitted: int
    percent: float  # capped at 100


@dataclass
class SubjectStats:
    subject_id: str
    name: str
    max_score: float
    average: int
    full_count: int  # scores equal to max_score
    zero_count: int


@dataclass
class AdmissionSummary:
    """
    Aggregate figures over one ranked roster.
    """
    total_applicants: int
    admitted_count: int
    waitlisted_count: int
    average_total: int
    max_total: float
    program_fill: List[ProgramFill] = field(default_factory=list)
    first_choice_interest: Dict[str, int] = field(default_factory=dict)
    subject_stats: List[SubjectStats] = field(default_factory=list)

# admitrank/services/seat_allocator.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence

from admitrank.config.logger import logger
from admitrank.domain.models import Policy, Program, RankedApplicant, Subject
from admitrank.services.program_matcher import resolve_program
from admitrank.services.tie_break import sort_by_score


class AllocationStrategy(Enum):
    """
    Which priority tiers get first pick of the seats:
      FLAT     : everybody in one pass, by score;
      DISTRICT : in-district applicants, then everybody else;
      QUOTA    : quota-reserved applicants, then the rest
                 (split by district if that policy is also on).
    """
    FLAT = "flat"
    DISTRICT = "district"
    QUOTA = "quota"


def select_strategy(policy: Policy) -> AllocationStrategy:
    if policy.enable_quota_reservation:
        return AllocationStrategy.QUOTA
    if policy.enable_district_priority:
        return AllocationStrategy.DISTRICT
    return AllocationStrategy.FLAT


@dataclass
class AllocationPass:
    name: str
    members: List[RankedApplicant]


def build_passes(applicants: Sequence[RankedApplicant],
                 policy: Policy,
                 subjects: Sequence[Subject] | None) -> List[AllocationPass]:
    """
    Splits the roster into disjoint, ordered passes; every pass is sorted
    most competitive first. Together the passes cover every applicant once.
    """
    strategy = select_strategy(policy)
    passes: List[AllocationPass] = []
    pool = list(applicants)

    if strategy is AllocationStrategy.QUOTA:
        reserved = [a for a in pool if a.is_quota_reserved]
        pool = [a for a in pool if not a.is_quota_reserved]
        passes.append(AllocationPass("quota", sort_by_score(reserved, subjects)))

    if policy.enable_district_priority:
        local = [a for a in pool if a.is_in_district]
        general = [a for a in pool if not a.is_in_district]
        passes.append(AllocationPass("in_district", sort_by_score(local, subjects)))
        passes.append(AllocationPass("general", sort_by_score(general, subjects)))
    else:
        passes.append(AllocationPass("general", sort_by_score(pool, subjects)))

    return passes


class SeatAllocator:
    """
    Greedy seat allocation for a single run.
    Seat counters live on the instance; use a fresh allocator per run.
    """

    def __init__(self, programs: Sequence[Program]):
        # name → quota; with duplicate names the last definition wins
        self._quota: Dict[str, int] = {p.name: p.quota for p in programs}
        self._program_names: List[str] = list(self._quota)
        self._seats_used: Dict[str, int] = {name: 0 for name in self._program_names}
        self._assignment: Dict[str, Optional[str]] = {}

    @property
    def quotas(self) -> Dict[str, int]:
        return dict(self._quota)

    @property
    def seats_used(self) -> Dict[str, int]:
        return dict(self._seats_used)

    def try_assign(self, applicant: RankedApplicant) -> Optional[str]:
        """
        Walks the applicant's preferences in order and takes the first
        available seat. Unmatched or full preferences are skipped.
        """
        assigned: Optional[str] = None
        for preference in applicant.preferred_programs or ():
            program = resolve_program(preference, self._program_names)
            if program is None:
                continue
            if self._seats_used[program] < self._quota[program]:
                self._seats_used[program] += 1
                assigned = program
                break
        self._assignment[applicant.id] = assigned
        return assigned

    def run(self, passes: Sequence[AllocationPass]) -> Dict[str, Optional[str]]:
        for p in passes:
            before = sum(self._seats_used.values())
            for applicant in p.members:
                self.try_assign(applicant)
            logger.debug("   pass %-11s: %d applicants, %d seats taken",
                         p.name, len(p.members), sum(self._seats_used.values()) - before)
        return dict(self._assignment)


def allocate(applicants: Sequence[RankedApplicant],
             programs: Sequence[Program],
             subjects: Sequence[Subject] | None,
             policy: Policy) -> Dict[str, Optional[str]]:
    """
    applicant id → admitted program name (None = wait-listed).
    Every applicant id is present in the result.
    """
    allocator = SeatAllocator(programs)
    passes = build_passes(applicants, policy, subjects)
    logger.debug("   strategy=%s, passes=%s",
                 select_strategy(policy).value, [p.name for p in passes])
    assignment = allocator.run(passes)
    quotas = allocator.quotas
    for name, used in allocator.seats_used.items():
        logger.debug("   %s: %d / %d", name, used, quotas[name])
    return assignment

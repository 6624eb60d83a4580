# admitrank/application/use_cases/rank_applicants.py
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from admitrank.config.config import settings
from admitrank.config.logger import logger
from admitrank.domain.constants import default_subjects
from admitrank.domain.models import AdmissionSummary, Applicant, Policy, Program, RankedApplicant, Subject
from admitrank.services.admission_summary import summarize
from admitrank.services.rank_composer import compose_ranking
from admitrank.services.scoring import score_applicants
from admitrank.services.seat_allocator import allocate, select_strategy


class RankApplicantsUseCase:
    """
    Full admission run over one roster snapshot:
        1. total score per applicant
        2. seat allocation by priority tiers
        3. final display order and ranks

    Holds no state between calls: the same input always yields the same output.
    """

    def __init__(self,
                 subjects: Sequence[Subject],
                 programs: Sequence[Program],
                 policy: Optional[Policy] = None):
        self._subjects = list(subjects or [])
        self._programs = list(programs or [])
        self._policy = policy if policy is not None else settings.default_policy

    @property
    def policy(self) -> Policy:
        return self._policy

    def execute(self, applicants: Sequence[Applicant]) -> List[RankedApplicant]:
        logger.info("→ Ranking %d applicants over %d programs, %d subjects (strategy=%s)",
                    len(applicants), len(self._programs), len(self._subjects),
                    select_strategy(self._policy).value)
        if not self._subjects:
            logger.debug("   no subjects configured: legacy subject keys are used for totals")

        scored = score_applicants(applicants, self._subjects)

        logger.info("→ Seat allocation …")
        assignment = allocate(scored, self._programs, self._subjects, self._policy)

        ranked = compose_ranking(scored, assignment, self._policy, self._subjects)
        admitted = sum(1 for r in ranked if r.is_admitted)
        logger.info("Ranking done: admitted=%d, wait-listed=%d", admitted, len(ranked) - admitted)
        return ranked

    def execute_with_summary(self, applicants: Sequence[Applicant]) -> Tuple[List[RankedApplicant], AdmissionSummary]:
        ranked = self.execute(applicants)
        # totals fell back to the legacy subjects, so report on those
        subjects = self._subjects or default_subjects(settings.max_score_per_subject)
        return ranked, summarize(ranked, self._programs, subjects)


def rank_applicants(applicants: Sequence[Applicant],
                    programs: Sequence[Program],
                    subjects: Sequence[Subject],
                    enable_district_priority: bool = False,
                    enable_quota_reservation: bool = False) -> List[RankedApplicant]:
    """Plain-function entry point: roster + programs + subjects + policy flags in, ranked roster out."""
    policy = Policy(
        enable_district_priority=enable_district_priority,
        enable_quota_reservation=enable_quota_reservation,
    )
    return RankApplicantsUseCase(subjects=subjects, programs=programs, policy=policy).execute(applicants)

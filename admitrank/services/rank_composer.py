# admitrank/services/rank_composer.py
from __future__ import annotations

from dataclasses import replace
from functools import cmp_to_key
from typing import Dict, List, Optional, Sequence

from admitrank.domain.models import Policy, RankedApplicant, Subject
from admitrank.services.tie_break import compare_by_score


def _tier_first(a_flag: bool, b_flag: bool) -> int:
    """Flagged applicant first; 0 when both or neither are flagged."""
    if a_flag == b_flag:
        return 0
    return -1 if a_flag else 1


def compare_final(a: RankedApplicant,
                  b: RankedApplicant,
                  assignment: Dict[str, Optional[str]],
                  policy: Policy,
                  subjects: Sequence[Subject] | None) -> int:
    """
    Display order:
      1. admitted before wait-listed;
      2. among the wait-listed only: quota-reserved first (quota policy),
         then in-district first (district policy);
      3. score with the tie-break cascade.
    """
    a_admitted = assignment.get(a.id) is not None
    b_admitted = assignment.get(b.id) is not None
    decided = _tier_first(a_admitted, b_admitted)
    if decided:
        return decided

    if not a_admitted:
        if policy.enable_quota_reservation:
            decided = _tier_first(bool(a.is_quota_reserved), bool(b.is_quota_reserved))
            if decided:
                return decided
        if policy.enable_district_priority:
            decided = _tier_first(a.is_in_district, b.is_in_district)
            if decided:
                return decided

    return compare_by_score(a, b, subjects)


def compose_ranking(scored: Sequence[RankedApplicant],
                    assignment: Dict[str, Optional[str]],
                    policy: Policy,
                    subjects: Sequence[Subject] | None) -> List[RankedApplicant]:
    """
    Sorts the whole roster into display order and numbers it 1..N.
    Returns new records; `scored` is not modified.
    """
    ordered = sorted(
        scored,
        key=cmp_to_key(lambda a, b: compare_final(a, b, assignment, policy, subjects)),
    )
    return [
        replace(s, rank=position, qualified_program=assignment.get(s.id))
        for position, s in enumerate(ordered, start=1)
    ]

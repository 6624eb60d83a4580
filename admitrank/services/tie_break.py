# admitrank/services/tie_break.py
from __future__ import annotations

from functools import cmp_to_key
from typing import Iterable, List, Sequence

from admitrank.domain.constants import LEGACY_TIE_BREAK_ORDER
from admitrank.domain.models import RankedApplicant, Subject
from admitrank.services.scoring import coerce_score, score_for


def _sign(diff: float) -> int:
    return (diff > 0) - (diff < 0)


def compare_by_score(a: RankedApplicant, b: RankedApplicant, subjects: Sequence[Subject] | None) -> int:
    """
    Competitiveness comparator, shaped for `sorted`:
      < 0  → `a` is more competitive and goes first,
      > 0  → `b` goes first,
      0    → a true tie (the sort keeps arrival order).

    Rules, first decisive one wins:
      1. higher total score;
      2. configured subjects in their order, higher score on the first differing one;
      3. legacy cascade science → math → english → thai → social.
    """
    decided = _sign(coerce_score(b.total_score) - coerce_score(a.total_score))
    if decided:
        return decided

    for subj in subjects or ():
        decided = _sign(score_for(b.scores, subj.id) - score_for(a.scores, subj.id))
        if decided:
            return decided

    for key in LEGACY_TIE_BREAK_ORDER:
        decided = _sign(score_for(b.scores, key) - score_for(a.scores, key))
        if decided:
            return decided
    return 0


def sort_by_score(applicants: Iterable[RankedApplicant], subjects: Sequence[Subject] | None) -> List[RankedApplicant]:
    """Stable sort, most competitive first."""
    key = cmp_to_key(lambda a, b: compare_by_score(a, b, subjects))
    return sorted(applicants, key=key)

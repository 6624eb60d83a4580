# admitrank/services/scoring.py
from __future__ import annotations

import math
from typing import Iterable, Mapping, Sequence

from admitrank.domain.constants import LEGACY_SUBJECT_KEYS
from admitrank.domain.models import Applicant, RankedApplicant, Residence, Subject


def coerce_score(value: object) -> float:
    """
    Turns a raw score cell into a finite number: None, blanks, garbage,
    NaN and infinities become 0. Plain numeric strings ("85", " 72.5 ")
    are accepted, booleans count as 1/0.
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:  # ints beyond float range
            return 0.0
    elif isinstance(value, str):
        text = value.strip()
        if not text or "_" in text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return 0.0
    else:
        try:
            number = float(value)  # numpy scalars, Decimal, ...
        except (TypeError, ValueError, OverflowError):
            return 0.0
    return number if math.isfinite(number) else 0.0


def score_for(scores: Mapping[str, object] | None, subject_id: str) -> float:
    if not scores:
        return 0.0
    return coerce_score(scores.get(subject_id))


def total_score(applicant: Applicant, subject_ids: Sequence[str] | None = None) -> float:
    """
    Sum of the applicant's scores over `subject_ids`.
    With no subject ids the five legacy subjects are summed instead.
    """
    keys: Iterable[str] = subject_ids if subject_ids else LEGACY_SUBJECT_KEYS
    return sum((score_for(applicant.scores, key) for key in keys), 0.0)


def subject_ids_of(subjects: Sequence[Subject] | None) -> list[str]:
    return [s.id for s in subjects or []]


def score_applicants(applicants: Sequence[Applicant], subjects: Sequence[Subject] | None) -> list[RankedApplicant]:
    """
    Fresh RankedApplicant copies with total_score filled in; inputs stay untouched.
    """
    subject_ids = subject_ids_of(subjects)
    scored = []
    for a in applicants:
        scored.append(RankedApplicant(
            id=a.id,
            title=a.title,
            first_name=a.first_name,
            last_name=a.last_name,
            preferred_programs=list(a.preferred_programs or []),
            scores=dict(a.scores or {}),
            residence=a.residence if a.residence is not None else Residence.OUT_DISTRICT,
            is_quota_reserved=bool(a.is_quota_reserved),
            total_score=total_score(a, subject_ids),
        ))
    return scored

# admitrank/services/admission_summary.py
from __future__ import annotations

import math
from typing import Dict, List, Sequence, Tuple

import pandas as pd

from admitrank.domain.models import (
    AdmissionSummary, Program, ProgramFill, RankedApplicant, Subject, SubjectStats,
)
from admitrank.services.scoring import score_for


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _frame(ranked: Sequence[RankedApplicant], subjects: Sequence[Subject]) -> pd.DataFrame:
    """One row per applicant: totals, result, first choice and coerced subject scores."""
    rows = []
    for r in ranked:
        row = {
            "id": r.id,
            "total_score": float(r.total_score),
            "qualified_program": r.qualified_program,
            "first_choice": r.preferred_programs[0] if r.preferred_programs else None,
        }
        for subj in subjects:
            row[f"score:{subj.id}"] = score_for(r.scores, subj.id)
        rows.append(row)
    columns = ["id", "total_score", "qualified_program", "first_choice"] + [f"score:{s.id}" for s in subjects]
    return pd.DataFrame(rows, columns=columns)


def _program_fill(df: pd.DataFrame, programs: Sequence[Program]) -> List[ProgramFill]:
    admitted_by_program = df["qualified_program"].value_counts(dropna=True)
    fill = []
    for p in programs:
        admitted = int(admitted_by_program.get(p.name, 0))
        percent = min(100.0, admitted / p.quota * 100) if p.quota > 0 else 0.0
        fill.append(ProgramFill(program=p.name, quota=p.quota, admitted=admitted, percent=percent))
    return fill


def _first_choice_interest(df: pd.DataFrame, programs: Sequence[Program]) -> Dict[str, int]:
    counts = df["first_choice"].value_counts(dropna=True)
    interest = {}
    for p in programs:
        n = int(counts.get(p.name, 0))
        if n > 0:
            interest[p.name] = n
    return interest


def _subject_stats(df: pd.DataFrame, subjects: Sequence[Subject]) -> List[SubjectStats]:
    stats = []
    for subj in subjects:
        col = df[f"score:{subj.id}"]
        average = _round_half_up(col.mean()) if len(col) else 0
        stats.append(SubjectStats(
            subject_id=subj.id,
            name=subj.name,
            max_score=subj.max_score,
            average=average,
            full_count=int((col == subj.max_score).sum()),
            zero_count=int((col == 0).sum()),
        ))
    return stats


def summarize(ranked: Sequence[RankedApplicant],
              programs: Sequence[Program],
              subjects: Sequence[Subject] | None) -> AdmissionSummary:
    """
    Roster-level figures for the analysis screen:
    averages, per-program seat fill, first-choice interest and per-subject extremes.
    """
    subjects = list(subjects or [])
    df = _frame(ranked, subjects)
    total = len(df)
    admitted = int(df["qualified_program"].notna().sum())

    return AdmissionSummary(
        total_applicants=total,
        admitted_count=admitted,
        waitlisted_count=total - admitted,
        average_total=_round_half_up(df["total_score"].mean()) if total else 0,
        max_total=float(df["total_score"].max()) if total else 0,
        program_fill=_program_fill(df, programs),
        first_choice_interest=_first_choice_interest(df, programs),
        subject_stats=_subject_stats(df, subjects),
    )


def group_by_program(ranked: Sequence[RankedApplicant],
                     programs: Sequence[Program]) -> Tuple[Dict[str, List[RankedApplicant]], List[RankedApplicant]]:
    """
    Admitted applicants per program and the wait-list, both in rank order.
    Every program gets an entry, even with nobody admitted.
    """
    by_rank = sorted(ranked, key=lambda r: r.rank)
    groups: Dict[str, List[RankedApplicant]] = {p.name: [] for p in programs}
    waitlist: List[RankedApplicant] = []
    for r in by_rank:
        if r.qualified_program is None:
            waitlist.append(r)
        else:
            groups.setdefault(r.qualified_program, []).append(r)
    return groups, waitlist

import pytest

from admitrank.application.use_cases.rank_applicants import RankApplicantsUseCase, rank_applicants
from admitrank.domain.models import Program, Subject
from admitrank.services.admission_summary import group_by_program, summarize

SUBJECTS = [Subject(id="math", name="Math", max_score=100), Subject(id="science", name="Science", max_score=50)]
PROGRAMS = [Program("1", "A", 2), Program("2", "B", 0), Program("3", "C", 1)]


@pytest.fixture
def ranked(make_applicant):
    roster = [
        make_applicant("S1", prefs=["A"], math=100, science=-10),       # 90
        make_applicant("S2", prefs=["1.A", "C"], math=31, science=50),  # 81
        make_applicant("S3", prefs=["B"], math=0, science=None),        # 0
        make_applicant("S4", prefs=["C"], math="71", science=""),       # 71
    ]
    return rank_applicants(roster, PROGRAMS, SUBJECTS)


def test_totals(ranked):
    summary = summarize(ranked, PROGRAMS, SUBJECTS)

    assert summary.total_applicants == 4
    assert summary.admitted_count == 3
    assert summary.waitlisted_count == 1
    assert summary.average_total == 61  # 242 / 4 = 60.5, rounded half-up
    assert summary.max_total == 90


def test_program_fill(ranked):
    fill = {f.program: f for f in summarize(ranked, PROGRAMS, SUBJECTS).program_fill}

    assert (fill["A"].admitted, fill["A"].percent) == (2, 100.0)
    assert (fill["B"].admitted, fill["B"].percent) == (0, 0.0)
    assert (fill["C"].admitted, fill["C"].percent) == (1, 100.0)


def test_first_choice_interest_uses_exact_names(ranked):
    interest = summarize(ranked, PROGRAMS, SUBJECTS).first_choice_interest
    assert interest == {"A": 1, "B": 1, "C": 1}


def test_subject_stats(ranked):
    stats = {s.subject_id: s for s in summarize(ranked, PROGRAMS, SUBJECTS).subject_stats}

    assert stats["math"].average == 51  # (100 + 31 + 0 + 71) / 4 = 50.5
    assert (stats["math"].full_count, stats["math"].zero_count) == (1, 1)
    assert stats["science"].average == 10  # (-10 + 50 + 0 + 0) / 4
    assert (stats["science"].full_count, stats["science"].zero_count) == (1, 2)


def test_empty_roster():
    summary = summarize([], PROGRAMS, SUBJECTS)
    assert (summary.total_applicants, summary.average_total, summary.max_total) == (0, 0, 0)
    assert [f.admitted for f in summary.program_fill] == [0, 0, 0]
    assert summary.first_choice_interest == {}
    assert [s.average for s in summary.subject_stats] == [0, 0]


def test_group_by_program(ranked):
    groups, waitlist = group_by_program(ranked, PROGRAMS)

    assert [r.id for r in groups["A"]] == ["S1", "S2"]
    assert groups["B"] == []
    assert [r.id for r in groups["C"]] == ["S4"]
    assert [r.id for r in waitlist] == ["S3"]


def test_summary_with_infinite_score_cells(make_applicant):
    use_case = RankApplicantsUseCase(subjects=SUBJECTS, programs=PROGRAMS)
    ranked, summary = use_case.execute_with_summary([
        make_applicant("S1", prefs=["A"], math="inf", science="-inf"),
        make_applicant("S2", prefs=["A"], math=40, science="1e999"),
    ])

    assert [(r.id, r.total_score) for r in ranked] == [("S2", 40), ("S1", 0)]
    assert (summary.average_total, summary.max_total) == (20, 40)
    assert [s.average for s in summary.subject_stats] == [20, 0]

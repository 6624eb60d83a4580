import pytest

from admitrank.domain.models import Policy, Program, Residence
from admitrank.services.scoring import score_applicants
from admitrank.services.seat_allocator import (
    AllocationStrategy, SeatAllocator, allocate, build_passes, select_strategy,
)

IN = Residence.IN_DISTRICT


@pytest.mark.parametrize("district, quota, expected", [
    (False, False, AllocationStrategy.FLAT),
    (True, False, AllocationStrategy.DISTRICT),
    (False, True, AllocationStrategy.QUOTA),
    (True, True, AllocationStrategy.QUOTA),
])
def test_select_strategy(district, quota, expected):
    policy = Policy(enable_district_priority=district, enable_quota_reservation=quota)
    assert select_strategy(policy) is expected


@pytest.mark.parametrize("district, quota, names", [
    (False, False, ["general"]),
    (True, False, ["in_district", "general"]),
    (False, True, ["quota", "general"]),
    (True, True, ["quota", "in_district", "general"]),
])
def test_pass_layout(make_applicant, subjects, district, quota, names):
    roster = score_applicants([
        make_applicant("Q", quota=True, math=10),
        make_applicant("L", residence=IN, math=20),
        make_applicant("G", math=30),
        make_applicant("QL", quota=True, residence=IN, math=40),
    ], subjects)
    policy = Policy(enable_district_priority=district, enable_quota_reservation=quota)
    passes = build_passes(roster, policy, subjects)

    assert [p.name for p in passes] == names
    ids = [a.id for p in passes for a in p.members]
    assert sorted(ids) == ["G", "L", "Q", "QL"]


def test_passes_are_sorted_by_score(make_applicant, subjects):
    roster = score_applicants([
        make_applicant("low", quota=True, math=10),
        make_applicant("high", quota=True, math=90),
        make_applicant("mid", math=50),
    ], subjects)
    passes = build_passes(roster, Policy(enable_quota_reservation=True), subjects)
    assert [a.id for a in passes[0].members] == ["high", "low"]
    assert [a.id for a in passes[1].members] == ["mid"]


def test_try_assign_falls_through_full_and_unknown_programs(make_applicant, subjects):
    allocator = SeatAllocator([Program("1", "A", 1), Program("2", "B", 1)])
    first, second = score_applicants([
        make_applicant("X", prefs=["A"]),
        make_applicant("Y", prefs=["Nope", "A", "B"]),
    ], subjects)

    assert allocator.try_assign(first) == "A"
    assert allocator.try_assign(second) == "B"
    assert allocator.seats_used == {"A": 1, "B": 1}


def test_full_exact_match_does_not_fall_back_to_lenient(make_applicant, subjects):
    allocator = SeatAllocator([Program("1", "A", 0), Program("2", "A1", 5)])
    applicant, = score_applicants([make_applicant("X", prefs=["A"])], subjects)
    assert allocator.try_assign(applicant) is None


@pytest.mark.parametrize("quota", [0, -1])
def test_non_positive_quota_never_assigns(make_applicant, subjects, quota):
    roster = score_applicants([make_applicant("X", prefs=["A"], math=100)], subjects)
    assignment = allocate(roster, [Program("1", "A", quota)], subjects, Policy())
    assert assignment == {"X": None}


def test_empty_program_list_wait_lists_everyone(make_applicant, subjects):
    roster = score_applicants([make_applicant("X", prefs=["A"]), make_applicant("Y")], subjects)
    assert allocate(roster, [], subjects, Policy()) == {"X": None, "Y": None}


def test_quota_is_never_exceeded(make_applicant, subjects):
    programs = [Program("1", "A", 3), Program("2", "B", 2)]
    roster = score_applicants(
        [make_applicant(f"S{i}", prefs=["A", "B"], math=i % 7, science=i % 5) for i in range(20)],
        subjects,
    )
    assignment = allocate(roster, programs, subjects, Policy(enable_district_priority=True))

    assert list(assignment.values()).count("A") == 3
    assert list(assignment.values()).count("B") == 2
    assert len(assignment) == 20


def test_higher_tier_takes_seats_first(make_applicant, subjects):
    roster = score_applicants([
        make_applicant("top", prefs=["A"], math=100),
        make_applicant("local", prefs=["A"], residence=IN, math=1),
    ], subjects)
    assignment = allocate(roster, [Program("1", "A", 1)], subjects, Policy(enable_district_priority=True))
    assert assignment == {"top": None, "local": "A"}

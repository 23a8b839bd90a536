"""Tests for service layer (leave index, eligibility, ranking, shortage resolver)."""

from datetime import date

from roster.domain.entities import LeaveRecord, Machine, ShiftCode, Worker, WorkloadState
from roster.services.constraints import is_eligible
from roster.services.dates import next_monday, parse_calendar_date
from roster.services.leave import build_leave_index
from roster.services.requirements import (
    available_count,
    flexed_machines_for_day,
    required_slots,
    resolve_flex_machines,
    shifts_for_machine,
)
from roster.services.scoring import candidate_sort_key, rank_candidates


WEEK = date(2025, 8, 18)  # Monday


def test_leave_blocks_day_and_next_day():
    """Each leave record blocks its own date and the following date."""
    index = build_leave_index([LeaveRecord("B", "2025-08-20")])
    assert index == {"B": {"2025-08-20", "2025-08-21"}}


def test_leave_window_crosses_month_and_year():
    index = build_leave_index([LeaveRecord("A", "2025-08-31"), LeaveRecord("C", date(2025, 12, 31))])
    assert index["A"] == {"2025-08-31", "2025-09-01"}
    assert index["C"] == {"2025-12-31", "2026-01-01"}


def test_leave_index_drops_malformed_records():
    """Blank names and unparsable dates are ignored without error."""
    index = build_leave_index(
        [
            LeaveRecord("   ", "2025-08-20"),
            LeaveRecord("C", "2025-02-30"),
            LeaveRecord("D", "not a date"),
            LeaveRecord("E", ""),
            LeaveRecord("  F ", "2025-08-22"),
        ]
    )
    assert index == {"F": {"2025-08-22", "2025-08-23"}}


def test_parse_calendar_date():
    assert parse_calendar_date("2025-08-20") == date(2025, 8, 20)
    assert parse_calendar_date("2025-13-01") is None
    assert parse_calendar_date("YYYY-MM-DD") is None
    assert parse_calendar_date(None) is None


def test_next_monday():
    assert next_monday(date(2025, 8, 18)) == date(2025, 8, 18)
    assert next_monday(date(2025, 8, 20)) == date(2025, 8, 25)
    assert next_monday(date(2025, 8, 24)) == date(2025, 8, 25)


def test_eligibility_leave_window():
    """Worker on leave is blocked on the leave day and the day after."""
    b = Worker("B")
    workload = WorkloadState.for_workers([b])
    leave_index = build_leave_index([LeaveRecord("B", "2025-08-20")])

    assert is_eligible(b, 1, ShiftCode.MORNING, workload, leave_index, WEEK)
    assert not is_eligible(b, 2, ShiftCode.MORNING, workload, leave_index, WEEK)
    assert not is_eligible(b, 3, ShiftCode.EVENING, workload, leave_index, WEEK)
    assert is_eligible(b, 4, ShiftCode.MORNING, workload, leave_index, WEEK)


def test_eligibility_one_shift_per_day():
    a = Worker("A")
    workload = WorkloadState.for_workers([a])
    workload.record("A", 0)

    assert not is_eligible(a, 0, ShiftCode.EVENING, workload, {}, WEEK)
    assert is_eligible(a, 1, ShiftCode.MORNING, workload, {}, WEEK)


def test_eligibility_retired_never_night():
    retired = Worker("R", retired=True)
    workload = WorkloadState.for_workers([retired])

    assert not is_eligible(retired, 0, ShiftCode.NIGHT, workload, {}, WEEK)
    assert is_eligible(retired, 0, ShiftCode.MORNING, workload, {}, WEEK)
    assert is_eligible(retired, 0, ShiftCode.GENERAL, workload, {}, WEEK)


def test_eligibility_day_cap():
    """Six days worked blocks the seventh."""
    a = Worker("A")
    workload = WorkloadState.for_workers([a])
    for day in range(6):
        workload.record("A", day)

    assert not is_eligible(a, 6, ShiftCode.MORNING, workload, {}, WEEK)
    assert is_eligible(a, 6, ShiftCode.MORNING, workload, {}, WEEK, max_days=7)


def test_rank_by_shift_count_first():
    workers = [Worker("A"), Worker("B"), Worker("C")]
    workload = WorkloadState.for_workers(workers)
    workload.record("A", 0)
    workload.record("A", 1)
    workload.record("B", 0)

    ranked = rank_candidates(workers, 2, ShiftCode.MORNING, workload, {}, WEEK)
    assert [w.name for w in ranked] == ["C", "B", "A"]


def test_rank_by_days_worked_second():
    """Equal shift counts fall back to fewer days worked."""
    workers = [Worker("X"), Worker("Y")]
    workload = WorkloadState(shift_counts={"X": 2, "Y": 2}, days_worked={"X": {0, 1}, "Y": {0}})

    ranked = rank_candidates(workers, 3, ShiftCode.MORNING, workload, {}, WEEK)
    assert [w.name for w in ranked] == ["Y", "X"]


def test_rank_name_ignores_case():
    workers = [Worker("Zed"), Worker("adam"), Worker("Bea")]
    workload = WorkloadState.for_workers(workers)

    ranked = rank_candidates(workers, 0, ShiftCode.MORNING, workload, {}, WEEK)
    assert [w.name for w in ranked] == ["adam", "Bea", "Zed"]


def test_rank_filters_ineligible():
    workers = [Worker("A", retired=True), Worker("B")]
    workload = WorkloadState.for_workers(workers)
    leave_index = build_leave_index([LeaveRecord("B", "2025-08-18")])

    assert rank_candidates(workers, 0, ShiftCode.NIGHT, workload, leave_index, WEEK) == []
    assert [w.name for w in rank_candidates(workers, 0, ShiftCode.MORNING, workload, leave_index, WEEK)] == ["A"]


def test_candidate_sort_key():
    workload = WorkloadState(shift_counts={"Ann": 3}, days_worked={"Ann": {0, 1, 2}})
    assert candidate_sort_key(Worker("Ann"), workload) == (3, 3, "ann", "Ann")


def test_required_slots():
    machines = [Machine("T01", three_shift=True), Machine("T02"), Machine("T03", flex_to_general=True)]
    assert required_slots(machines) == 7
    assert required_slots([]) == 0


def test_available_count_ignores_retirement():
    """Leave and the day cap reduce availability; retirement does not."""
    workers = [Worker("A", retired=True), Worker("B"), Worker("C"), Worker("D")]
    workload = WorkloadState.for_workers(workers)
    for day in range(6):
        workload.record("D", day)
    leave_index = build_leave_index([LeaveRecord("C", "2025-08-23")])

    assert available_count(workers, 6, workload, leave_index, WEEK) == 2
    assert available_count(workers, 0, workload, leave_index, WEEK) == 3


def test_resolve_flex_follows_priority():
    machines = [
        Machine("T03", flex_to_general=True),
        Machine("T11", flex_to_general=True),
        Machine("T15", flex_to_general=True),
        Machine("T17", flex_to_general=True),
    ]
    priority = ["T15", "T11", "T17", "T03"]

    assert resolve_flex_machines(machines, 0, priority) == set()
    assert resolve_flex_machines(machines, 2, priority) == {"T15", "T11"}
    assert resolve_flex_machines(machines, 10, priority) == {"T15", "T11", "T17", "T03"}


def test_resolve_flex_skips_ineligible_machines():
    """Unknown ids, three-shift and non-flex machines never flex."""
    machines = [
        Machine("T04", three_shift=True, flex_to_general=True),
        Machine("T05"),
        Machine("T11", flex_to_general=True),
    ]
    assert resolve_flex_machines(machines, 3, ["X99", "T04", "T05", "T11"]) == {"T11"}


def test_flexed_machines_for_day():
    workers = [Worker("Ann"), Worker("Ben"), Worker("Cid"), Worker("Dee")]
    machines = [Machine("T03", flex_to_general=True), Machine("T04", three_shift=True)]
    workload = WorkloadState.for_workers(workers)

    # 5 slots needed, 4 workers available
    assert flexed_machines_for_day(workers, machines, 0, workload, {}, WEEK, ["T03"]) == {"T03"}
    workers.append(Worker("Eve"))
    assert flexed_machines_for_day(workers, machines, 0, workload, {}, WEEK, ["T03"]) == set()


def test_shifts_for_machine():
    assert shifts_for_machine(Machine("T04", three_shift=True), False) == (
        ShiftCode.MORNING,
        ShiftCode.EVENING,
        ShiftCode.NIGHT,
    )
    assert shifts_for_machine(Machine("T03", flex_to_general=True), True) == (ShiftCode.GENERAL,)
    assert shifts_for_machine(Machine("T03", flex_to_general=True), False) == (
        ShiftCode.MORNING,
        ShiftCode.EVENING,
    )


def test_rank_name_ignores_accents():
    workers = [Worker("Zed"), Worker("Àna"), Worker("bob")]
    workload = WorkloadState.for_workers(workers)

    ranked = rank_candidates(workers, 0, ShiftCode.MORNING, workload, {}, WEEK)
    assert [w.name for w in ranked] == ["Àna", "bob", "Zed"]
    assert candidate_sort_key(Worker("Àna"), workload)[2] == "ana"

from core.process import ProcessState
from core.step_log import StepEvent
from schedulers import PriorityPreemptiveScheduler

from helpers import (make_processes, assert_valid_log, events, execution_timeline,
                     termination_order, termination_times)


def test_higher_priority_arrival_preempts():
    processes = make_processes(("A", 0, 4, 3), ("B", 1, 2, 1))
    steps = PriorityPreemptiveScheduler(processes).run()

    assert events(steps)[:6] == [
        StepEvent.START, StepEvent.ARRIVAL, StepEvent.SELECT,
        StepEvent.EXECUTE, StepEvent.PREEMPT, StepEvent.SELECT,
    ]
    preempt = steps[4]
    assert preempt.time == 1
    assert preempt.process_id == 1
    assert preempt.find(1).state == ProcessState.READY
    assert preempt.description == "A (priority 3) preempted by B (priority 1) -> Ready"

    assert execution_timeline(steps) == ["A", "B", "B", "A", "A", "A"]
    assert termination_times(steps) == {"B": 3, "A": 6}
    assert_valid_log(steps)


def test_preemption_logged_before_next_tick_of_preempted():
    processes = make_processes(("A", 0, 6, 3), ("B", 2, 3, 1), ("C", 4, 2, 2))
    steps = PriorityPreemptiveScheduler(processes).run()

    preempts = [s for s in steps if s.event == StepEvent.PREEMPT]
    assert len(preempts) == 1
    assert preempts[0].time == 2

    # C(2)는 B(1)를 선점하지 못한다
    assert execution_timeline(steps) == ["A", "A", "B", "B", "B", "C", "C", "A", "A", "A", "A"]
    assert termination_order(steps) == ["B", "C", "A"]
    assert termination_times(steps) == {"B": 5, "C": 7, "A": 11}
    assert_valid_log(steps)


def test_equal_priority_does_not_preempt():
    processes = make_processes(("A", 0, 3, 2), ("B", 1, 1, 2))
    steps = PriorityPreemptiveScheduler(processes).run()

    assert StepEvent.PREEMPT not in events(steps)
    assert termination_times(steps) == {"A": 3, "B": 4}


def test_running_process_not_reselected_every_tick():
    steps = PriorityPreemptiveScheduler(make_processes(("P1", 0, 3))).run()
    assert events(steps).count(StepEvent.SELECT) == 1
    assert events(steps).count(StepEvent.EXECUTE) == 3


def test_ties_broken_by_name():
    processes = make_processes(("P2", 0, 1, 1), ("P1", 0, 1, 1))
    steps = PriorityPreemptiveScheduler(processes).run()
    assert termination_order(steps) == ["P1", "P2"]


def test_ties_broken_by_arrival_before_name():
    processes = make_processes(("M", 0, 2, 1), ("A", 1, 1, 2), ("B", 0, 1, 2))
    steps = PriorityPreemptiveScheduler(processes).run()
    assert termination_order(steps) == ["M", "B", "A"]


def test_jumps_to_next_arrival_when_idle():
    processes = make_processes(("P1", 4, 2, 1), ("P2", 9, 1, 1))
    steps = PriorityPreemptiveScheduler(processes).run()

    idle = [s for s in steps if s.event == StepEvent.IDLE]
    assert [s.time for s in idle] == [4, 9]
    assert steps.last.time == 10
    assert_valid_log(steps)


def test_select_description_names_priority():
    steps = PriorityPreemptiveScheduler(make_processes(("P1", 0, 1, 4))).run()
    select = next(s for s in steps if s.event == StepEvent.SELECT)
    assert select.description == "P1 Running (priority 4)"

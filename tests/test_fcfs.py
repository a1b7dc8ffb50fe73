from core.process import ProcessState
from core.step_log import StepEvent
from schedulers import FCFSScheduler

from helpers import (make_processes, assert_valid_log, events, execution_timeline,
                     termination_order, termination_times)


def test_single_process_step_sequence():
    steps = FCFSScheduler(make_processes(("P1", 0, 2))).run()

    assert events(steps) == [
        StepEvent.START, StepEvent.ARRIVAL, StepEvent.SELECT,
        StepEvent.EXECUTE, StepEvent.EXECUTE, StepEvent.TERMINATE, StepEvent.COMPLETE,
    ]
    assert steps.times() == [0, 0, 0, 1, 2, 2, 2]
    assert steps[0].processes[0].state == ProcessState.NEW
    assert steps[1].processes[0].state == ProcessState.READY
    assert steps[3].description == "P1 executing (remaining 1)"
    assert_valid_log(steps)


def test_runs_in_arrival_order():
    processes = make_processes(("P1", 0, 3), ("P2", 5, 2), ("P3", 1, 4))
    steps = FCFSScheduler(processes).run()

    assert termination_order(steps) == ["P1", "P3", "P2"]
    assert termination_times(steps) == {"P1": 3, "P3": 7, "P2": 9}
    assert_valid_log(steps)


def test_arrival_ties_keep_input_order():
    # 짧은 작업이 같은 시각에 도착해도 입력 순서대로 실행
    steps = FCFSScheduler(make_processes(("A", 0, 2), ("B", 0, 1))).run()
    assert execution_timeline(steps) == ["A", "A", "B"]


def test_later_short_job_never_interrupts():
    steps = FCFSScheduler(make_processes(("Long", 0, 4), ("Short", 1, 1))).run()
    assert execution_timeline(steps) == ["Long"] * 4 + ["Short"]
    assert not any(s.event == StepEvent.PREEMPT for s in steps)


def test_idle_gaps_advance_clock():
    processes = make_processes(("P1", 2, 2), ("P2", 10, 1))
    steps = FCFSScheduler(processes).run()

    idle = [s for s in steps if s.event == StepEvent.IDLE]
    assert [s.time for s in idle] == [2, 10]
    assert "P1 arrived" in idle[0].description
    # 총 경과 시간 = 실행 시간 합 + 유휴 시간
    assert steps.last.time == (2 + 1) + 2 + 6
    assert_valid_log(steps)


def test_original_processes_untouched():
    processes = make_processes(("P1", 0, 2), ("P2", 1, 1))
    FCFSScheduler(processes).run()
    assert all(p.state == ProcessState.NEW for p in processes)
    assert [p.remaining_time for p in processes] == [2, 1]

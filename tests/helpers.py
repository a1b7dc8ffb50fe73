from core.process import Process, ProcessState
from core.step_log import StepEvent

ALLOWED_TRANSITIONS = {
    (ProcessState.NEW, ProcessState.NEW),
    (ProcessState.NEW, ProcessState.READY),
    (ProcessState.READY, ProcessState.READY),
    (ProcessState.READY, ProcessState.RUNNING),
    (ProcessState.RUNNING, ProcessState.RUNNING),
    (ProcessState.RUNNING, ProcessState.READY),
    (ProcessState.RUNNING, ProcessState.TERMINATED),
    (ProcessState.TERMINATED, ProcessState.TERMINATED),
}


def make_processes(*rows):
    """(이름, 도착, 실행[, 우선순위]) 튜플로 프로세스 생성"""
    return [
        Process(pid, row[0], row[1], row[2], row[3] if len(row) > 3 else 1)
        for pid, row in enumerate(rows, 1)
    ]


def names_by_pid(steps):
    return {p.pid: p.name for p in steps.first.processes}


def execution_timeline(steps):
    """EXECUTE 스텝마다 실행된 프로세스 이름"""
    names = names_by_pid(steps)
    return [names[s.process_id] for s in steps if s.event == StepEvent.EXECUTE]


def termination_times(steps):
    names = names_by_pid(steps)
    return {names[s.process_id]: s.time for s in steps if s.event == StepEvent.TERMINATE}


def termination_order(steps):
    names = names_by_pid(steps)
    return [names[s.process_id] for s in steps if s.event == StepEvent.TERMINATE]


def events(steps):
    return [s.event for s in steps]


def assert_valid_log(steps):
    times = steps.times()
    assert times[0] == 0
    assert times == sorted(times)
    assert steps.first.event == StepEvent.START
    assert steps.last.event == StepEvent.COMPLETE

    for step in steps:
        running = [p for p in step.processes if p.state == ProcessState.RUNNING]
        assert len(running) <= 1
        for p in step.processes:
            assert 0 <= p.remaining_time <= p.burst_time
            assert p.state != ProcessState.WAITING

    for previous, current in zip(steps[:-1], steps[1:]):
        for before in previous.processes:
            after = current.find(before.pid)
            assert (before.state, after.state) in ALLOWED_TRANSITIONS, \
                f"{before.name}: {before.state.value} -> {after.state.value} at t={current.time}"

    for p in steps.last.processes:
        assert p.state == ProcessState.TERMINATED
        assert p.remaining_time == 0

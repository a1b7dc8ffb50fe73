import pytest

from core.errors import SimulationError
from core.process import Process
from core.step_log import Step, StepEvent, StepLog


def _step(time, event=StepEvent.EXECUTE):
    snapshot = (Process(1, "P1", 0, 3).snapshot(),)
    return Step(time=time, description=f"t{time}", processes=snapshot, event=event, process_id=1)


def test_append_and_access():
    log = StepLog()
    log.append(_step(0, StepEvent.START))
    log.append(_step(1))
    log.append(_step(1))

    assert len(log) == 3
    assert log.first.event == StepEvent.START
    assert log.last.time == 1
    assert log.times() == [0, 1, 1]
    assert [s.description for s in log] == ["t0", "t1", "t1"]
    assert log[1].find(1).name == "P1"
    assert log[1].find(99) is None


def test_time_cannot_go_backwards():
    log = StepLog()
    log.append(_step(3))
    with pytest.raises(SimulationError):
        log.append(_step(2))
    assert len(log) == 1


def test_frozen_log_rejects_appends():
    log = StepLog()
    log.append(_step(0))
    log.freeze()
    assert log.frozen
    with pytest.raises(SimulationError):
        log.append(_step(1))


def test_to_list_is_json_friendly():
    log = StepLog()
    log.append(_step(0, StepEvent.START))
    data = log.to_list()
    assert data[0]['event'] == 'Start'
    assert data[0]['processes'][0]['state'] == 'New'

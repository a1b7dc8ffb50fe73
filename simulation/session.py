"""
시뮬레이션 세션
프로세스 목록, 선택된 알고리즘, 계산된 스텝 로그와 현재 스텝 인덱스를 보관한다.
스텝 로그는 한 번 계산되면 읽기 전용이므로 앞/뒤 이동과 자동 재생에 잠금이 필요 없다.
"""

import logging
import threading
from typing import List, Optional, Callable, Union

from core.errors import InvalidInputError, SimulationError
from core.process import Process
from core.scheduler_base import DEFAULT_QUANTUM
from core.step_log import Step, StepLog
from .driver import Algorithm, simulate, validate_processes

logger = logging.getLogger(__name__)


class SimulationSession:
    """시뮬레이션 세션 (드라이버 연산에 명시적으로 전달되는 컨텍스트)"""

    def __init__(self, processes: Optional[List[Process]] = None,
                 algorithm: Optional[Union[Algorithm, str]] = None,
                 quantum: Optional[int] = DEFAULT_QUANTUM):
        self.processes: List[Process] = []
        self.algorithm: Optional[Algorithm] = None
        self.quantum = quantum
        self.steps: Optional[StepLog] = None
        self.current_index = 0
        self._next_pid = 1

        for process in processes or []:
            self._register(process)
        if algorithm is not None:
            self.select_algorithm(algorithm)

    def _register(self, process: Process):
        if any(p.pid == process.pid for p in self.processes):
            raise InvalidInputError(f"Duplicate process id: {process.pid}")
        self.processes.append(process)
        # 이후 할당되는 PID가 기존 PID와 겹치지 않도록
        self._next_pid = max(self._next_pid, process.pid + 1)

    def add_process(self, name: str, arrival_time: int, burst_time: int,
                    priority: Optional[int] = None) -> Process:
        """프로세스 추가 (PID 자동 할당, 우선순위 기본값 1)"""
        pid = self._next_pid
        self._next_pid += 1
        process = Process(pid, name.strip() if isinstance(name, str) else name,
                          arrival_time, burst_time, 1 if priority is None else priority)
        validate_processes([process])
        self.processes.append(process)
        self.steps = None
        logger.debug("Added %s", process)
        return process

    def remove_process(self, pid: int) -> Process:
        for process in self.processes:
            if process.pid == pid:
                self.processes.remove(process)
                self.steps = None
                return process
        raise KeyError(pid)

    def select_algorithm(self, algorithm: Union[Algorithm, str]):
        self.algorithm = Algorithm.parse(algorithm)
        self.steps = None

    def start(self) -> StepLog:
        """시뮬레이션 실행 후 첫 스텝으로 이동"""
        if self.algorithm is None:
            raise InvalidInputError("Select an algorithm first")
        self.steps = simulate(self.algorithm, self.processes, self.quantum)
        self.current_index = 0
        return self.steps

    def _require_steps(self) -> StepLog:
        if self.steps is None:
            raise SimulationError("Simulation has not been started")
        return self.steps

    @property
    def started(self) -> bool:
        return self.steps is not None

    def current_step(self) -> Step:
        return self._require_steps()[self.current_index]

    def next_step(self) -> Step:
        steps = self._require_steps()
        if self.current_index < len(steps) - 1:
            self.current_index += 1
        return steps[self.current_index]

    def previous_step(self) -> Step:
        steps = self._require_steps()
        if self.current_index > 0:
            self.current_index -= 1
        return steps[self.current_index]

    def jump_to(self, index: int) -> Step:
        steps = self._require_steps()
        if not 0 <= index < len(steps):
            raise IndexError(f"Step index out of range: {index} (0..{len(steps) - 1})")
        self.current_index = index
        return steps[index]

    def rewind(self) -> Step:
        return self.jump_to(0)

    def is_at_start(self) -> bool:
        return self.current_index == 0

    def is_at_end(self) -> bool:
        return self.current_index == len(self._require_steps()) - 1

    def reset(self):
        """모든 프로세스와 결과 초기화"""
        self.processes = []
        self.algorithm = None
        self.steps = None
        self.current_index = 0


class Playback:
    """
    자동 재생
    interval 초마다 다음 스텝으로 이동하며 stop()으로 언제든 중단할 수 있다
    """

    def __init__(self, session: SimulationSession, interval: float = 1.0,
                 on_step: Optional[Callable[[int, Step], None]] = None):
        self.session = session
        self.interval = interval
        self.on_step = on_step
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self):
        if not self.session.started:
            raise SimulationError("Simulation has not been started")
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="playback", daemon=True)
        self._thread.start()

    def _run(self):
        while not self.session.is_at_end():
            if self._stop_event.wait(self.interval):
                break
            step = self.session.next_step()
            if self.on_step is not None:
                self.on_step(self.session.current_index, step)
        logger.debug("Playback stopped at step %d", self.session.current_index)

    def stop(self, timeout: Optional[float] = None):
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)

    def wait(self, timeout: Optional[float] = None):
        if self._thread is not None:
            self._thread.join(timeout)

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

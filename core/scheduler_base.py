"""
스케줄러 기본 프레임워크 및 시간 진행 규칙
"""

import logging
from typing import List, Optional
from dataclasses import dataclass

from .errors import InvalidInputError, SimulationError
from .process import Process, ProcessState, create_process_copy
from .step_log import Step, StepEvent, StepLog

logger = logging.getLogger(__name__)

# Round Robin 기본 타임 퀀텀 (시간 단위)
DEFAULT_QUANTUM = 2


def normalize_quantum(value) -> int:
    """
    타임 퀀텀 정규화: 없거나 정수가 아니거나 0 이하이면 DEFAULT_QUANTUM
    """
    if value is None:
        return DEFAULT_QUANTUM
    if isinstance(value, bool):
        logger.warning("Invalid quantum %r, using default %d", value, DEFAULT_QUANTUM)
        return DEFAULT_QUANTUM
    try:
        quantum = int(value)
    except (TypeError, ValueError):
        logger.warning("Invalid quantum %r, using default %d", value, DEFAULT_QUANTUM)
        return DEFAULT_QUANTUM
    if isinstance(value, float) and value != quantum:
        logger.warning("Non-integer quantum %r, using default %d", value, DEFAULT_QUANTUM)
        return DEFAULT_QUANTUM
    if quantum <= 0:
        logger.warning("Non-positive quantum %r, using default %d", value, DEFAULT_QUANTUM)
        return DEFAULT_QUANTUM
    return quantum


@dataclass(frozen=True)
class SchedulerConfig:
    """스케줄러 설정"""
    quantum: int = DEFAULT_QUANTUM


class BaseScheduler:
    """
    기본 스케줄러 클래스
    모든 스케줄링 알고리즘의 공통 기능 제공:
    도착 처리, 시계 진행, 1틱 실행, 종료 처리, 스텝 기록
    """

    name = "Base Scheduler"

    def __init__(self, processes: List[Process], config: Optional[SchedulerConfig] = None):
        if not processes:
            raise InvalidInputError("At least one process is required")
        # 원본은 건드리지 않고 복사본만 변경한다
        self.processes = [create_process_copy(p) for p in processes]
        self.config = config or SchedulerConfig()
        self.current_time = 0
        self.running_process: Optional[Process] = None
        self.steps = StepLog()

    @property
    def title(self) -> str:
        """시작/완료 스텝에 표시할 알고리즘 이름"""
        return self.name

    def log_step(self, event: StepEvent, description: str,
                 process: Optional[Process] = None):
        """현재 시각과 전체 스냅샷으로 스텝 기록"""
        self.steps.append(Step(
            time=self.current_time,
            description=description,
            processes=tuple(p.snapshot() for p in self.processes),
            event=event,
            process_id=process.pid if process is not None else None,
        ))

    def admit_arrivals(self) -> List[Process]:
        """
        도착 시간이 된 New 프로세스를 Ready로 전환

        Returns:
            이번에 Ready가 된 프로세스 리스트 (입력 순서)
        """
        arrived = []
        for process in self.processes:
            if process.state == ProcessState.NEW and process.has_arrived(self.current_time):
                process.state = ProcessState.READY
                arrived.append(process)
        if arrived:
            self.on_arrival(arrived)
        return arrived

    def on_arrival(self, arrived: List[Process]):
        """새로 도착한 프로세스에 대한 훅 (Round Robin 큐 등)"""

    def ready_processes(self) -> List[Process]:
        return [p for p in self.processes if p.state == ProcessState.READY]

    def has_pending(self) -> bool:
        return any(p.state != ProcessState.TERMINATED for p in self.processes)

    def advance_to(self, time: int) -> List[Process]:
        """CPU 유휴: 시계를 지정 시각으로 이동하고 도착 처리"""
        self.current_time = time
        arrived = self.admit_arrivals()
        names = ", ".join(p.name for p in arrived)
        if names:
            self.log_step(StepEvent.IDLE,
                          f"CPU idle, time advanced to {time} ({names} arrived)")
        else:
            self.log_step(StepEvent.IDLE, f"CPU idle, time advanced to {time}")
        return arrived

    def advance_to_next_arrival(self) -> bool:
        """
        아직 도착하지 않은 프로세스 중 가장 이른 도착 시각으로 이동

        Returns:
            이동했는지 여부 (남은 New 프로세스가 없으면 False)
        """
        upcoming = [p.arrival_time for p in self.processes if p.state == ProcessState.NEW]
        if not upcoming:
            return False
        self.advance_to(max(self.current_time, min(upcoming)))
        return True

    def dispatch(self, process: Process, description: str):
        """Ready 프로세스를 Running으로 전환"""
        if process.state != ProcessState.READY:
            raise SimulationError(
                f"Cannot dispatch {process.name} from state {process.state.value}")
        process.state = ProcessState.RUNNING
        self.running_process = process
        self.log_step(StepEvent.SELECT, description, process)

    def execute_tick(self, process: Process, progress: str = ""):
        """1 시간 단위 실행 후 도착 처리 및 스텝 기록"""
        process.execute(1)
        self.current_time += 1
        arrived = self.admit_arrivals()

        description = f"{process.name} executing{progress} (remaining {process.remaining_time})"
        if arrived:
            description += "; " + ", ".join(p.name for p in arrived) + " arrived"
        self.log_step(StepEvent.EXECUTE, description, process)

    def terminate_process(self, process: Process):
        """프로세스 종료 처리"""
        process.remaining_time = 0
        process.state = ProcessState.TERMINATED
        if self.running_process is process:
            self.running_process = None
        self.log_step(StepEvent.TERMINATE, f"{process.name} terminated", process)

    def schedule(self):
        """알고리즘별 스케줄링 루프 (하위 클래스에서 구현)"""
        raise NotImplementedError("Subclasses must implement schedule()")

    def run(self) -> StepLog:
        """
        스케줄링 시뮬레이션 실행

        Returns:
            완성된 (freeze된) 스텝 로그
        """
        logger.debug("%s started with %d processes", self.name, len(self.processes))
        self.log_step(StepEvent.START, f"{self.title} started")

        arrived = self.admit_arrivals()
        if arrived:
            names = ", ".join(p.name for p in arrived)
            self.log_step(StepEvent.ARRIVAL, f"{names} arrived -> Ready")

        self.schedule()

        unfinished = [p.name for p in self.processes if p.state != ProcessState.TERMINATED]
        if unfinished:
            raise SimulationError(f"{self.name} stalled with unfinished processes: {unfinished}")

        self.log_step(StepEvent.COMPLETE, f"All processes completed ({self.title})")

        logger.debug("%s finished at t=%d with %d steps",
                     self.name, self.current_time, len(self.steps))
        return self.steps.freeze()

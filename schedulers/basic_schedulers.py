"""
기본 스케줄링 알고리즘 구현
- FCFS (First-Come, First-Served)
- SJF (Shortest Job First - Non-Preemptive)
- Round Robin
"""

from collections import deque
from typing import List, Optional, Deque

from core.process import Process, ProcessState
from core.scheduler_base import BaseScheduler, SchedulerConfig
from core.step_log import StepEvent


class FCFSScheduler(BaseScheduler):
    """
    FCFS (First-Come, First-Served) 스케줄러
    비선점형: 먼저 도착한 프로세스를 먼저 처리
    """

    name = "FCFS"

    @property
    def title(self) -> str:
        return "FCFS (ordered by arrival time)"

    def schedule(self):
        # 도착 시간 순 정렬 (동일하면 입력 순서 유지)
        order = sorted(self.processes, key=lambda p: p.arrival_time)

        for process in order:
            # 아직 도착하지 않았으면 도착 시각까지 시계 이동
            if self.current_time < process.arrival_time:
                self.advance_to(process.arrival_time)

            self.dispatch(process, f"{process.name} starts Running")

            # 완료될 때까지 실행 (비선점)
            while process.remaining_time > 0:
                self.execute_tick(process)

            self.terminate_process(process)


class SJFScheduler(BaseScheduler):
    """
    SJF (Shortest Job First) 스케줄러 - 비선점형
    선택 시점에 남은 시간이 가장 짧은 Ready 프로세스를 끝까지 실행
    """

    name = "SJF"

    @property
    def title(self) -> str:
        return "SJF (Non-Preemptive)"

    def select_next_process(self) -> Optional[Process]:
        """남은 시간이 가장 짧은 프로세스 선택 (동률이면 먼저 도착한 것)"""
        ready = self.ready_processes()
        if not ready:
            return None
        return min(ready, key=lambda p: (p.remaining_time, p.arrival_time))

    def schedule(self):
        while self.has_pending():
            process = self.select_next_process()
            if process is None:
                if not self.advance_to_next_arrival():
                    break
                continue

            self.dispatch(process, f"{process.name} selected (shortest burst {process.remaining_time})")

            # 실행 중에 더 짧은 작업이 도착해도 중단하지 않음
            while process.remaining_time > 0:
                self.execute_tick(process)

            self.terminate_process(process)


class RoundRobinScheduler(BaseScheduler):
    """
    Round Robin 스케줄러
    Ready 큐를 FIFO로 순환하며 프로세스마다 최대 quantum 만큼 실행
    """

    name = "Round Robin"

    def __init__(self, processes: List[Process], config: Optional[SchedulerConfig] = None):
        super().__init__(processes, config)
        self.time_slice = self.config.quantum
        self.ready_queue: Deque[Process] = deque()

    @property
    def title(self) -> str:
        return f"Round Robin (quantum {self.time_slice})"

    def on_arrival(self, arrived: List[Process]):
        # 도착한 프로세스는 한 번만 큐에 들어간다
        for process in arrived:
            if process not in self.ready_queue:
                self.ready_queue.append(process)

    def schedule(self):
        while self.has_pending():
            if not self.ready_queue:
                if not self.advance_to_next_arrival():
                    break
                continue

            process = self.ready_queue.popleft()
            self.dispatch(process,
                          f"{process.name} starts Running (remaining {process.remaining_time})")

            used = 0
            while used < self.time_slice and process.remaining_time > 0:
                used += 1
                self.execute_tick(process, f" ({used}/{self.time_slice})")

            if process.remaining_time == 0:
                self.terminate_process(process)
            else:
                # 타임 퀀텀 만료 -> 큐의 맨 뒤로
                process.state = ProcessState.READY
                self.running_process = None
                self.ready_queue.append(process)
                self.log_step(StepEvent.QUANTUM_EXPIRED,
                              f"Quantum expired: {process.name} back to Ready "
                              f"(remaining {process.remaining_time})", process)

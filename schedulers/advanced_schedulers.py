"""
고급 스케줄링 알고리즘 구현
- Priority Scheduling (Preemptive)
"""

from typing import Optional

from core.process import Process, ProcessState
from core.scheduler_base import BaseScheduler
from core.step_log import StepEvent


def priority_rank(process: Process):
    """정렬 키: 우선순위 -> 도착 시간 -> 이름"""
    return (process.priority, process.arrival_time, process.name)


class PriorityPreemptiveScheduler(BaseScheduler):
    """
    선점형 우선순위 스케줄러
    우선순위 숫자가 작을수록 높은 우선순위
    매 틱마다 다시 평가하여 더 높은 우선순위의 프로세스가 Ready이면 선점
    """

    name = "Priority"

    @property
    def title(self) -> str:
        return "Priority (Preemptive)"

    def select_next_process(self) -> Optional[Process]:
        """Ready 큐에서 가장 높은 우선순위 프로세스 선택"""
        ready = self.ready_processes()
        if not ready:
            return None
        return min(ready, key=priority_rank)

    def check_preemption(self, candidate: Optional[Process]) -> bool:
        """
        선점 여부 확인

        Returns:
            후보가 실행 중인 프로세스보다 엄격하게 높은 우선순위이면 True
        """
        if self.running_process is None or candidate is None:
            return False
        return candidate.priority < self.running_process.priority

    def preempt(self, candidate: Process):
        """실행 중인 프로세스를 Ready로 되돌림"""
        current = self.running_process
        current.state = ProcessState.READY
        self.running_process = None
        self.log_step(
            StepEvent.PREEMPT,
            f"{current.name} (priority {current.priority}) preempted by "
            f"{candidate.name} (priority {candidate.priority}) -> Ready",
            current,
        )

    def schedule(self):
        while self.has_pending():
            candidate = self.select_next_process()

            if self.running_process is None and candidate is None:
                # Ready 프로세스가 없으면 다음 도착 시각으로 이동
                if not self.advance_to_next_arrival():
                    break
                continue

            if self.check_preemption(candidate):
                self.preempt(candidate)

            # 이미 실행 중이면 다시 기록하지 않음
            if self.running_process is None:
                self.dispatch(candidate,
                              f"{candidate.name} Running (priority {candidate.priority})")

            process = self.running_process
            self.execute_tick(process)

            if process.remaining_time == 0:
                self.terminate_process(process)

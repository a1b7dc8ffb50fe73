"""
스텝 로그 기반 스케줄링 통계 및 Gantt Chart 계산
"""

from typing import List, Dict, Optional
from dataclasses import dataclass, asdict

from .step_log import StepEvent, StepLog

# Gantt Chart 특수 PID: CPU 유휴
IDLE_PID = -1


@dataclass
class GanttEntry:
    """Gantt Chart 엔트리"""
    pid: int
    name: str
    start_time: int
    end_time: int


@dataclass
class ProcessResult:
    """프로세스별 결과"""
    pid: int
    name: str
    arrival_time: int
    burst_time: int
    priority: int
    start_time: Optional[int] = None
    finish_time: Optional[int] = None
    waiting_time: int = 0
    turnaround_time: int = 0
    response_time: Optional[int] = None

    def to_dict(self) -> Dict:
        return asdict(self)


def build_gantt_chart(steps: StepLog) -> List[GanttEntry]:
    """
    EXECUTE 스텝을 이어 붙여 Gantt Chart 생성
    연속 실행 구간은 하나로 합치고 실행 사이의 빈 구간은 유휴(IDLE_PID)로 기록
    """
    chart: List[GanttEntry] = []
    names = {p.pid: p.name for p in steps.first.processes} if len(steps) else {}

    for step in steps:
        if step.event != StepEvent.EXECUTE:
            continue
        start, end = step.time - 1, step.time

        if chart and chart[-1].end_time < start:
            chart.append(GanttEntry(IDLE_PID, "Idle", chart[-1].end_time, start))
        elif not chart and start > 0:
            chart.append(GanttEntry(IDLE_PID, "Idle", 0, start))

        last = chart[-1] if chart else None
        if last is not None and last.pid == step.process_id and last.end_time == start:
            last.end_time = end
        else:
            chart.append(GanttEntry(step.process_id, names.get(step.process_id, "?"), start, end))

    return chart


class SchedulerStats:
    """스케줄링 통계"""

    def __init__(self):
        self.total_waiting_time = 0
        self.total_turnaround_time = 0
        self.total_response_time = 0
        self.context_switches = 0
        self.cpu_busy_time = 0
        self.total_simulation_time = 0
        self.process_count = 0
        self.results: List[ProcessResult] = []

    @classmethod
    def from_steps(cls, steps: StepLog) -> 'SchedulerStats':
        """스텝 로그만으로 통계 계산"""
        stats = cls()
        if len(steps) == 0:
            return stats

        results = {
            p.pid: ProcessResult(pid=p.pid, name=p.name, arrival_time=p.arrival_time,
                                 burst_time=p.burst_time, priority=p.priority)
            for p in steps.first.processes
        }

        previous_pid = None
        for step in steps:
            if step.event == StepEvent.SELECT:
                result = results[step.process_id]
                if result.start_time is None:
                    result.start_time = step.time
            elif step.event == StepEvent.TERMINATE:
                results[step.process_id].finish_time = step.time
            elif step.event == StepEvent.EXECUTE:
                stats.cpu_busy_time += 1
                if previous_pid is not None and previous_pid != step.process_id:
                    stats.context_switches += 1
                previous_pid = step.process_id

        for result in results.values():
            if result.finish_time is not None:
                result.turnaround_time = result.finish_time - result.arrival_time
                result.waiting_time = result.turnaround_time - result.burst_time
            if result.start_time is not None:
                result.response_time = result.start_time - result.arrival_time

            stats.total_waiting_time += result.waiting_time
            stats.total_turnaround_time += result.turnaround_time
            if result.response_time is not None:
                stats.total_response_time += result.response_time

        stats.results = list(results.values())
        stats.process_count = len(stats.results)
        stats.total_simulation_time = steps.last.time
        return stats

    def calculate_averages(self) -> Dict:
        """평균 계산"""
        if self.process_count == 0:
            return {
                'avg_waiting_time': 0,
                'avg_turnaround_time': 0,
                'avg_response_time': 0,
                'cpu_utilization': 0,
                'context_switches': 0,
                'total_time': 0
            }

        return {
            'avg_waiting_time': self.total_waiting_time / self.process_count,
            'avg_turnaround_time': self.total_turnaround_time / self.process_count,
            'avg_response_time': self.total_response_time / self.process_count,
            'cpu_utilization': (self.cpu_busy_time / self.total_simulation_time * 100)
                               if self.total_simulation_time > 0 else 0,
            'context_switches': self.context_switches,
            'total_time': self.total_simulation_time
        }

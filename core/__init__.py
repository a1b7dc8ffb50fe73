"""
Core modules for CPU Scheduling Step Simulator
"""

from .errors import SimulationError, InvalidInputError, UnknownAlgorithmError, EmptyResultError
from .process import Process, ProcessState, ProcessSnapshot, create_process_copy
from .step_log import Step, StepEvent, StepLog
from .scheduler_base import BaseScheduler, SchedulerConfig, DEFAULT_QUANTUM, normalize_quantum
from .statistics import SchedulerStats, GanttEntry, ProcessResult, build_gantt_chart, IDLE_PID

__all__ = [
    'SimulationError',
    'InvalidInputError',
    'UnknownAlgorithmError',
    'EmptyResultError',
    'Process',
    'ProcessState',
    'ProcessSnapshot',
    'create_process_copy',
    'Step',
    'StepEvent',
    'StepLog',
    'BaseScheduler',
    'SchedulerConfig',
    'DEFAULT_QUANTUM',
    'normalize_quantum',
    'SchedulerStats',
    'GanttEntry',
    'ProcessResult',
    'build_gantt_chart',
    'IDLE_PID'
]

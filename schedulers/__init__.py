"""
CPU Scheduling Algorithms
"""

from .basic_schedulers import FCFSScheduler, SJFScheduler, RoundRobinScheduler
from .advanced_schedulers import PriorityPreemptiveScheduler

__all__ = [
    'FCFSScheduler',
    'SJFScheduler',
    'RoundRobinScheduler',
    'PriorityPreemptiveScheduler'
]

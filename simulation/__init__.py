"""
Simulation driver and session
"""

from .driver import Algorithm, ALGORITHMS, simulate, summarize, run_algorithm, validate_processes
from .session import SimulationSession, Playback

__all__ = [
    'Algorithm',
    'ALGORITHMS',
    'simulate',
    'summarize',
    'run_algorithm',
    'validate_processes',
    'SimulationSession',
    'Playback'
]

"""
CPU scheduling simulator.

Computes per-process metrics and an execution timeline for FCFS, SJF,
Priority and Round Robin scheduling, and ships a small terminal front end.
"""

from .dispatcher import DISCIPLINES, run_algorithm
from .errors import ValidationError

__all__ = ["DISCIPLINES", "ValidationError", "cli", "run_algorithm"]

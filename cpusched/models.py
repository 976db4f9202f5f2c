from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


def process_label(pid: int) -> str:
    return f"P{pid + 1}"


@dataclass
class Process:
    """
    Working record for one process during a single simulation run.
    """

    pid: int
    arrival_time: int
    burst_time: int
    priority: Optional[int] = None
    remaining_time: int = field(init=False)
    start_time: Optional[int] = None  # None until first dispatch
    finish_time: Optional[int] = None

    def __post_init__(self) -> None:
        self.remaining_time = self.burst_time

    @property
    def label(self) -> str:
        return process_label(self.pid)

    @property
    def turnaround_time(self) -> int:
        if self.finish_time is None:
            raise RuntimeError(f"{self.label} has not finished")
        return self.finish_time - self.arrival_time

    @property
    def waiting_time(self) -> int:
        return self.turnaround_time - self.burst_time


@dataclass(frozen=True)
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: int
    start_time: int
    end_time: int

    @property
    def label(self) -> str:
        return process_label(self.pid)

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass(frozen=True)
class ProcessMetrics:
    pid: int
    arrival_time: int
    burst_time: int
    start_time: int
    finish_time: int
    waiting_time: int
    turnaround_time: int
    response_time: int
    priority: Optional[int] = None

    @classmethod
    def from_process(cls, p: Process) -> "ProcessMetrics":
        if p.start_time is None or p.finish_time is None:
            raise RuntimeError(f"{p.label} did not run to completion")
        return cls(
            pid=p.pid,
            arrival_time=p.arrival_time,
            burst_time=p.burst_time,
            start_time=p.start_time,
            finish_time=p.finish_time,
            waiting_time=p.waiting_time,
            turnaround_time=p.turnaround_time,
            response_time=p.start_time - p.arrival_time,
            priority=p.priority,
        )

    @property
    def label(self) -> str:
        return process_label(self.pid)


@dataclass
class SystemMetrics:
    cpu_busy_time: int
    makespan: int
    throughput: float
    cpu_utilization: float


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    processes: List[ProcessMetrics] = field(default_factory=list)
    timeline: List[ScheduledSlice] = field(default_factory=list)
    system: Optional[SystemMetrics] = None

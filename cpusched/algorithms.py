from __future__ import annotations

import logging
from collections import deque
from typing import Deque, List, Optional, Sequence

from .metrics import compute_system_metrics
from .models import Process, ProcessMetrics, ScheduleResult, ScheduledSlice
from .validation import build_processes, validate_quantum

logger = logging.getLogger(__name__)


def _run_to_completion(p: Process, time: int, timeline: List[ScheduledSlice]) -> int:
    """
    Dispatch ``p`` at ``time`` without preemption and return the new clock.
    """
    p.start_time = time
    p.finish_time = time + p.burst_time
    p.remaining_time = 0
    timeline.append(ScheduledSlice(pid=p.pid, start_time=p.start_time, end_time=p.finish_time))
    logger.debug("t=%d: %s runs to completion at t=%d", time, p.label, p.finish_time)
    return p.finish_time


def _build_result(
    algorithm: str,
    quantum: Optional[int],
    processes: List[Process],
    timeline: List[ScheduledSlice],
) -> ScheduleResult:
    metrics = [ProcessMetrics.from_process(p) for p in processes]
    result = ScheduleResult(algorithm=algorithm, quantum=quantum, processes=metrics, timeline=timeline)
    compute_system_metrics(result)
    return result


def schedule_fcfs(arrivals: Sequence[int], bursts: Sequence[int]) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.

    Processes are returned in execution order; equal arrivals keep their
    input order.
    """
    processes_sorted = sorted(build_processes(arrivals, bursts), key=lambda p: p.arrival_time)

    time = 0
    timeline: List[ScheduledSlice] = []

    for p in processes_sorted:
        if time < p.arrival_time:
            logger.debug("t=%d: CPU idle until %s arrives at t=%d", time, p.label, p.arrival_time)
            time = p.arrival_time
        time = _run_to_completion(p, time, timeline)

    return _build_result("FCFS", None, processes_sorted, timeline)


def schedule_sjf(arrivals: Sequence[int], bursts: Sequence[int]) -> ScheduleResult:
    """
    Shortest Job First (non-preemptive).

    At each decision point, among processes that have arrived and are not yet
    completed, choose the one with the smallest burst time. Ties go to the
    process listed first. Processes are returned in execution order.
    """
    processes = build_processes(arrivals, bursts)

    time = 0
    timeline: List[ScheduledSlice] = []
    completed: List[Process] = []

    while len(completed) < len(processes):
        ready = [p for p in processes if p.finish_time is None and p.arrival_time <= time]

        if not ready:
            time += 1
            continue

        # min() keeps the first of equal keys, i.e. the lowest pid.
        p = min(ready, key=lambda x: x.burst_time)
        time = _run_to_completion(p, time, timeline)
        completed.append(p)

    return _build_result("SJF (non-preemptive)", None, completed, timeline)


def schedule_priority(
    arrivals: Sequence[int],
    bursts: Sequence[int],
    priorities: Optional[Sequence] = None,
) -> ScheduleResult:
    """
    Static Priority scheduling (non-preemptive).

    Lower numeric priority value means higher priority. Among ready
    processes, choose the one with the smallest priority; break ties
    by earlier arrival time, then by input order. Missing priorities
    count as 0. Processes are returned in input order.
    """
    if priorities is None:
        priorities = [None] * len(arrivals)
    processes = build_processes(arrivals, bursts, priorities)

    time = 0
    timeline: List[ScheduledSlice] = []
    done = 0

    while done < len(processes):
        ready = [p for p in processes if p.finish_time is None and p.arrival_time <= time]

        if not ready:
            time += 1
            continue

        p = min(ready, key=lambda x: (x.priority, x.arrival_time))
        time = _run_to_completion(p, time, timeline)
        done += 1

    return _build_result("Priority (non-preemptive)", None, processes, timeline)


def schedule_rr(arrivals: Sequence[int], bursts: Sequence[int], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.

    Processes that arrive while a slice is running are queued ahead of the
    process being preempted at the end of that slice. Processes are
    returned in input order.
    """
    quantum = validate_quantum(quantum)
    processes = build_processes(arrivals, bursts)

    time = 0
    timeline: List[ScheduledSlice] = []
    ready: Deque[int] = deque()
    visited = [False] * len(processes)

    def enqueue_new_arrivals(current_time: int) -> None:
        for p in processes:
            if not visited[p.pid] and p.remaining_time > 0 and p.arrival_time <= current_time:
                ready.append(p.pid)
                visited[p.pid] = True

    while True:
        enqueue_new_arrivals(time)

        if not ready:
            if all(p.remaining_time == 0 for p in processes):
                break
            time += 1
            continue

        p = processes[ready.popleft()]
        if p.start_time is None:
            p.start_time = time

        run_time = min(quantum, p.remaining_time)
        timeline.append(ScheduledSlice(pid=p.pid, start_time=time, end_time=time + run_time))
        time += run_time
        p.remaining_time -= run_time

        # New arrivals go in before the preempted process is requeued.
        enqueue_new_arrivals(time)

        if p.remaining_time > 0:
            logger.debug("t=%d: %s preempted with %d remaining", time, p.label, p.remaining_time)
            ready.append(p.pid)
        else:
            p.finish_time = time
            logger.debug("t=%d: %s finished", time, p.label)

    return _build_result("Round Robin", quantum, processes, timeline)

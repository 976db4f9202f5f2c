import random
from collections import defaultdict

import pytest

from cpusched.dispatcher import run_algorithm

WORKLOADS = [
    ([0, 1, 2], [5, 3, 1], [2, 1, 3]),
    ([0, 0, 0], [6, 8, 7], [1, 1, 1]),
    ([3, 10, 10, 0], [4, 1, 7, 2], [0, 2, 1, 2]),
    ([5], [3], [0]),
]


def _random_workload(seed):
    rng = random.Random(seed)
    n = rng.randint(1, 8)
    arrivals = [rng.randint(0, 15) for _ in range(n)]
    bursts = [rng.randint(1, 9) for _ in range(n)]
    priorities = [rng.randint(0, 4) for _ in range(n)]
    return arrivals, bursts, priorities


WORKLOADS += [_random_workload(seed) for seed in range(12)]

CASES = [
    ("fcfs", None),
    ("sjf", None),
    ("priority", None),
    ("rr", 1),
    ("rr", 3),
]


def _run(name, quantum, workload):
    arrivals, bursts, priorities = workload
    return run_algorithm(name, arrivals, bursts, priorities=priorities, quantum=quantum)


@pytest.mark.parametrize("name, quantum", CASES)
@pytest.mark.parametrize("workload", WORKLOADS)
def test_metric_identities(name, quantum, workload):
    res = _run(name, quantum, workload)
    assert len(res.processes) == len(workload[0])
    for p in res.processes:
        assert p.turnaround_time == p.finish_time - p.arrival_time
        assert p.waiting_time == p.turnaround_time - p.burst_time
        assert p.start_time >= p.arrival_time
        assert p.arrival_time == workload[0][p.pid]
        assert p.burst_time == workload[1][p.pid]


@pytest.mark.parametrize("name, quantum", CASES)
@pytest.mark.parametrize("workload", WORKLOADS)
def test_timeline_is_consistent(name, quantum, workload):
    res = _run(name, quantum, workload)
    by_pid = defaultdict(list)
    for sl in res.timeline:
        assert sl.end_time > sl.start_time
        by_pid[sl.pid].append(sl)

    # Execution order is also start order on a single CPU, and nothing overlaps.
    ordered = sorted(res.timeline, key=lambda s: s.start_time)
    assert ordered == res.timeline
    for prev, cur in zip(ordered, ordered[1:]):
        assert prev.end_time <= cur.start_time

    for p in res.processes:
        slices = by_pid[p.pid]
        assert sum(s.duration for s in slices) == p.burst_time
        assert slices[0].start_time == p.start_time
        assert slices[-1].end_time == p.finish_time
        assert all(s.start_time >= p.arrival_time for s in slices)


@pytest.mark.parametrize("name", ["fcfs", "sjf", "priority"])
@pytest.mark.parametrize("workload", WORKLOADS)
def test_non_preemptive_runs_each_process_once(name, workload):
    res = _run(name, None, workload)
    assert len(res.timeline) == len(res.processes)
    for p in res.processes:
        assert p.finish_time == p.start_time + p.burst_time


@pytest.mark.parametrize("name, quantum", CASES)
def test_repeated_runs_are_identical(name, quantum):
    workload = WORKLOADS[2]
    assert _run(name, quantum, workload) == _run(name, quantum, workload)


def test_input_lists_are_not_mutated():
    arrivals, bursts, priorities = [0, 2, 1], [3, 1, 2], [1, 0, 2]
    for name, quantum in CASES:
        run_algorithm(name, arrivals, bursts, priorities=priorities, quantum=quantum)
    assert (arrivals, bursts, priorities) == ([0, 2, 1], [3, 1, 2], [1, 0, 2])

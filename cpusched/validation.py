from __future__ import annotations

from typing import List, Optional, Sequence

from .errors import ValidationError
from .models import Process


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _coerce_priority(value) -> int:
    # Missing or unparseable priorities fall back to 0.
    if value is None or isinstance(value, bool):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return 0


def validate_quantum(quantum: Optional[int]) -> int:
    if quantum is None or not _is_int(quantum) or quantum <= 0:
        raise ValidationError(f"Round Robin requires a positive integer quantum, got {quantum!r}")
    return quantum


def build_processes(
    arrivals: Sequence[int],
    bursts: Sequence[int],
    priorities: Optional[Sequence] = None,
) -> List[Process]:
    """
    Validate raw input arrays and turn them into fresh Process records.

    ``priorities`` is optional; when given it must match the other arrays
    in length, and individual entries that are missing or not integers
    default to 0.
    """
    if not arrivals or not bursts:
        raise ValidationError("At least one process is required")
    if len(arrivals) != len(bursts):
        raise ValidationError(
            f"Arrival and burst lists differ in length ({len(arrivals)} != {len(bursts)})"
        )
    if priorities is not None and len(priorities) != len(arrivals):
        raise ValidationError(
            f"Priority list length {len(priorities)} does not match {len(arrivals)} processes"
        )

    processes: List[Process] = []
    for pid, (arrival, burst) in enumerate(zip(arrivals, bursts)):
        label = f"P{pid + 1}"
        if not _is_int(arrival) or arrival < 0:
            raise ValidationError(f"{label}: arrival time must be a non-negative integer, got {arrival!r}")
        if not _is_int(burst) or burst <= 0:
            raise ValidationError(f"{label}: burst time must be a positive integer, got {burst!r}")

        priority = _coerce_priority(priorities[pid]) if priorities is not None else None
        processes.append(Process(pid=pid, arrival_time=arrival, burst_time=burst, priority=priority))

    return processes

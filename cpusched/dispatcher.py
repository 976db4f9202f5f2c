from __future__ import annotations

import logging
from typing import Callable, Dict, Optional, Sequence

from .algorithms import schedule_fcfs, schedule_priority, schedule_rr, schedule_sjf
from .errors import ValidationError
from .models import ScheduleResult

logger = logging.getLogger(__name__)

DISCIPLINES: Dict[str, Callable[..., ScheduleResult]] = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf,
    "priority": schedule_priority,
    "rr": schedule_rr,
}


def run_algorithm(
    name: str,
    arrivals: Sequence[int],
    bursts: Sequence[int],
    priorities: Optional[Sequence] = None,
    quantum: Optional[int] = None,
) -> ScheduleResult:
    """
    Dispatch to the requested discipline.

    ``priorities`` only matters for ``priority`` and ``quantum`` only for
    ``rr``; the other disciplines ignore them.
    """
    key = name.strip().lower()
    if key not in DISCIPLINES:
        raise ValidationError(
            f"Unknown scheduling discipline '{name}' (choose from {', '.join(DISCIPLINES)})"
        )

    logger.debug("Dispatching %d processes to %s", len(arrivals), key)

    if key == "rr":
        return schedule_rr(arrivals, bursts, quantum=quantum)
    if key == "priority":
        return schedule_priority(arrivals, bursts, priorities)
    return DISCIPLINES[key](arrivals, bursts)

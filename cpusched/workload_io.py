from __future__ import annotations

import csv
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .errors import ValidationError


@dataclass
class Workload:
    """
    Parallel input arrays, one entry per process in file order.
    """

    arrivals: List[int] = field(default_factory=list)
    bursts: List[int] = field(default_factory=list)
    priorities: List[Optional[int]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.arrivals)


def load_workload(path: str | Path) -> Workload:
    """
    Load a workload from a JSON or CSV file.

    JSON files hold a list of objects and CSV files a header row; both use
    the keys ``arrival``, ``burst`` and an optional ``priority``.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    raise ValidationError(f"Unsupported workload format: {suffix} (use .json or .csv)")


def _load_json(path: Path) -> Workload:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise ValidationError(f"{path}: invalid JSON ({exc.msg})") from exc

    if not isinstance(raw, list):
        raise ValidationError("JSON workload must be a list of process objects")

    workload = Workload()
    for entry in raw:
        _append_entry(workload, entry)
    return workload


def _load_csv(path: Path) -> Workload:
    workload = Workload()
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            _append_entry(workload, row)
    return workload


def _parse_time(value) -> int:
    # JSON numbers arrive typed; fractional or boolean times are never truncated.
    if isinstance(value, (bool, float)):
        raise ValueError(f"not an integer: {value!r}")
    if isinstance(value, int):
        return value
    return int(value)


def _append_entry(workload: Workload, mapping) -> None:
    try:
        arrival = _parse_time(mapping["arrival"])
        burst = _parse_time(mapping["burst"])
    except (KeyError, TypeError, ValueError, OverflowError) as exc:
        raise ValidationError(f"Invalid process entry: {mapping!r}") from exc

    priority_val = mapping.get("priority")
    try:
        priority = int(priority_val) if priority_val not in (None, "") else None
    except (TypeError, ValueError, OverflowError):
        priority = None

    workload.arrivals.append(arrival)
    workload.bursts.append(burst)
    workload.priorities.append(priority)

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .dispatcher import DISCIPLINES, run_algorithm
from .errors import ValidationError
from .gantt import build_rich_gantt, render_gantt
from .metrics import summarize_process_metrics
from .models import ScheduleResult
from .workload_io import Workload, load_workload

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _add_input_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--workload",
        "-w",
        default=None,
        help="Path to JSON or CSV workload file.",
    )
    parser.add_argument(
        "--arrivals",
        nargs="+",
        type=int,
        default=None,
        help="Arrival times, one per process (instead of --workload).",
    )
    parser.add_argument(
        "--bursts",
        nargs="+",
        type=int,
        default=None,
        help="Burst times, one per process (instead of --workload).",
    )
    parser.add_argument(
        "--priorities",
        nargs="+",
        default=None,
        help="Priorities, one per process; lower runs first, invalid entries count as 0.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cpusched",
        description="CPU scheduling simulator (FCFS, SJF, Priority, RR).",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging level for simulation tracing (default: WARNING).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Shorthand for --log-level DEBUG.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run one scheduling discipline on a workload.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help=f"Discipline to use ({', '.join(DISCIPLINES)}).",
    )
    _add_input_arguments(run_parser)
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help="Time quantum for round-robin (ignored by FCFS, SJF, Priority).",
    )
    run_parser.add_argument(
        "--plain",
        action="store_true",
        help="Print an uncolored text Gantt chart.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run multiple disciplines on the same workload and compare average metrics.",
    )
    _add_input_arguments(compare_parser)
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=list(DISCIPLINES),
        help=f"Disciplines to compare (default: {' '.join(DISCIPLINES)}).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=2,
        help="Time quantum used for RR when included (default: 2).",
    )

    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _resolve_workload(args: argparse.Namespace, parser: argparse.ArgumentParser) -> Workload:
    if args.workload is not None:
        if args.arrivals or args.bursts or args.priorities:
            parser.error("use either --workload or --arrivals/--bursts, not both")
        return load_workload(Path(args.workload))

    if args.arrivals is None or args.bursts is None:
        parser.error("either --workload or both --arrivals and --bursts are required")

    return Workload(arrivals=args.arrivals, bursts=args.bursts, priorities=args.priorities)


def _print_result(result: ScheduleResult, console: Console, plain: bool = False) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    if plain:
        console.print(render_gantt(result.timeline), markup=False, highlight=False, soft_wrap=True)
    else:
        console.print(build_rich_gantt(result.timeline))

    console.print()

    headers = ["Process", "Arrival", "Burst", "Start", "Finish", "Waiting", "Turnaround", "Priority"]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"Process", "Priority"} else "right"
        proc_table.add_column(h, justify=justify)

    for p in result.processes:
        proc_table.add_row(
            p.label,
            str(p.arrival_time),
            str(p.burst_time),
            str(p.start_time),
            str(p.finish_time),
            str(p.waiting_time),
            str(p.turnaround_time),
            "" if p.priority is None else str(p.priority),
        )

    console.print(proc_table)
    console.print()

    summary = summarize_process_metrics(result.processes)
    if result.system:
        system = result.system
        sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
        sys_table.add_column("Metric")
        sys_table.add_column("Value", justify="right")

        sys_table.add_row("Avg waiting", f"{summary['avg_waiting']:.2f}")
        sys_table.add_row("Avg turnaround", f"{summary['avg_turnaround']:.2f}")
        sys_table.add_row("Avg response", f"{summary['avg_response']:.2f}")
        sys_table.add_row("Makespan", str(system.makespan))
        sys_table.add_row("Throughput (proc/time)", f"{system.throughput:.3f}")
        sys_table.add_row("CPU utilization", f"{system.cpu_utilization*100:.1f}%")

        console.print(sys_table)


def _print_comparison(workload: Workload, algorithms: List[str], quantum: int, console: Console) -> None:
    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg response", justify="right")

    for alg in algorithms:
        result = run_algorithm(
            alg,
            workload.arrivals,
            workload.bursts,
            priorities=workload.priorities or None,
            quantum=quantum,
        )
        summary = summarize_process_metrics(result.processes)
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{summary['avg_waiting']:.2f}",
            f"{summary['avg_turnaround']:.2f}",
            f"{summary['avg_response']:.2f}",
        )

    console.print(summary_table)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging("DEBUG" if args.verbose else args.log_level)

    console = Console()
    err_console = Console(stderr=True)

    try:
        workload = _resolve_workload(args, parser)
        logger.info("Loaded workload with %d processes", len(workload))

        if args.command == "run":
            result = run_algorithm(
                args.algorithm,
                workload.arrivals,
                workload.bursts,
                priorities=workload.priorities or None,
                quantum=args.quantum,
            )
            _print_result(result, console, plain=args.plain)
            return 0

        if args.command == "compare":
            _print_comparison(workload, args.algorithms, args.quantum, console)
            return 0
    except ValidationError as exc:
        err_console.print(f"Error: {exc}", style="red", markup=False)
        return 2

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())

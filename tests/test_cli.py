import json
from pathlib import Path

import pytest

from cpusched.cli import main


def test_run_inline_round_robin(capsys):
    code = main(["run", "-a", "rr", "-q", "2", "--arrivals", "0", "1", "2", "--bursts", "5", "3", "1", "--plain"])
    out = capsys.readouterr().out
    assert code == 0
    assert "Round Robin" in out
    assert "Quantum: 2" in out
    assert "8-9" in out
    assert "P3" in out


def test_run_priority_from_workload_file(tmp_path: Path, capsys):
    p = tmp_path / "w.json"
    p.write_text(json.dumps([
        {"arrival": 0, "burst": 10, "priority": 3},
        {"arrival": 0, "burst": 1, "priority": 1},
        {"arrival": 0, "burst": 2, "priority": 2},
    ]))
    code = main(["run", "-a", "priority", "-w", str(p)])
    out = capsys.readouterr().out
    assert code == 0
    assert "Priority (non-preemptive)" in out
    assert "Per-process metrics" in out


def test_compare_all_disciplines(capsys):
    code = main(["compare", "--arrivals", "0", "1", "2", "--bursts", "5", "3", "1"])
    out = capsys.readouterr().out
    assert code == 0
    for name in ("FCFS", "SJF", "Priority", "Round Robin"):
        assert name in out


def test_rr_without_quantum_reports_error(capsys):
    code = main(["run", "-a", "rr", "--arrivals", "0", "1", "--bursts", "2", "2"])
    captured = capsys.readouterr()
    assert code == 2
    assert "quantum" in captured.err
    assert "Per-process metrics" not in captured.out


def test_non_positive_burst_reports_error(capsys):
    code = main(["run", "-a", "fcfs", "--arrivals", "0", "--bursts", "0"])
    assert code == 2
    assert "burst" in capsys.readouterr().err


def test_missing_input_is_a_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        main(["run", "-a", "fcfs", "--arrivals", "0"])
    assert excinfo.value.code == 2


def test_run_prints_system_metrics(capsys):
    code = main(["run", "-a", "fcfs", "--arrivals", "0", "6", "--bursts", "2", "2"])
    out = capsys.readouterr().out
    assert code == 0
    assert "System metrics" in out
    assert "Makespan" in out
    assert "50.0%" in out


def test_non_finite_workload_file_reports_error(tmp_path: Path, capsys):
    p = tmp_path / "w.json"
    p.write_text('[{"arrival": Infinity, "burst": 1}]')
    code = main(["run", "-a", "fcfs", "-w", str(p)])
    assert code == 2
    assert "Invalid process entry" in capsys.readouterr().err

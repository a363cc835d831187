"""
Test the run_optics.py command line runner
"""

import importlib.util
import json
import sys
from pathlib import Path

import pytest

SCRIPT_PATH = Path(__file__).parent.parent / "scripts" / "run_optics.py"


@pytest.fixture
def run_optics_module():
    spec = importlib.util.spec_from_file_location("run_optics", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_main_writes_results(tmp_path, monkeypatch, run_optics_module):
    csv_file = tmp_path / "points.csv"
    csv_file.write_text("x,y\n0,0\n0,1\n0,8\n0,9\n")
    output_dir = tmp_path / "results"

    monkeypatch.setattr(sys, "argv", [
        "run_optics.py", "--data", str(csv_file), "--epsilon", "3", "--min-pts", "2",
        "--output-dir", str(output_dir)
    ])
    run_optics_module.main()

    with open(output_dir / "optics_results.json") as f:
        result = json.load(f)

    assert result['parameters']['epsilon'] == 3.0
    assert result['results']['n_clusters'] == 2
    assert result['results']['clusters'] == [[0, 1], [2, 3]]
    assert (output_dir / "optics_ordering.csv").exists()
    assert (output_dir / "optics_reachability.png").exists()
    assert (output_dir / "optics_clusters_2d.png").exists()


def test_main_exits_on_error(tmp_path, monkeypatch, run_optics_module):
    monkeypatch.setattr(sys, "argv", [
        "run_optics.py", "--data", str(tmp_path / "missing.csv"), "--no-visualize"
    ])

    with pytest.raises(SystemExit) as excinfo:
        run_optics_module.main()

    assert excinfo.value.code == 1

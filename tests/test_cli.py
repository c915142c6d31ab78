"""End-to-end tests for the command-line entry point."""

import contextlib
import io

import pytest

from tortuga.cli import main
from tortuga.config import Config

VALID_INPUT = "[0,0] [2,6] [7,7] [0,8] [8,8] [5,2]\n1\n"


@pytest.fixture(autouse=True)
def no_color(monkeypatch):
    monkeypatch.setenv("TORTUGA_NO_COLOR", "1")
    monkeypatch.delenv("DEBUG_SEARCH", raising=False)


def run_cli(argv):
    buffer = io.StringIO()
    with contextlib.redirect_stdout(buffer):
        code = main(argv)
    return code, buffer.getvalue()


def test_load_writes_both_reports(tmp_path):
    input_path = tmp_path / "input.txt"
    input_path.write_text(VALID_INPUT, encoding="utf-8")

    code, output = run_cli(["load", "--input", str(input_path), "--output-dir", str(tmp_path)])

    assert code == 0
    astar = (tmp_path / "outputAStar.txt").read_text(encoding="utf-8").splitlines()
    backtracking = (tmp_path / "outputBacktracking.txt").read_text(encoding="utf-8").splitlines()
    assert astar[:2] == ["Win", "11"]
    assert backtracking[:2] == ["Win", "11"]
    assert astar[-1].endswith(" ms")
    assert "[✓] [AStar] Win in 11 moves" in output


def test_load_reports_invalid_placement(tmp_path):
    input_path = tmp_path / "input.txt"
    input_path.write_text("[0,0] [4,2] [7,4] [7,4] [0,8] [7,5]\n1\n", encoding="utf-8")

    code, output = run_cli(["load", "--input", str(input_path), "--output-dir", str(tmp_path)])

    assert code == 1
    assert "[!] Invalid data" in output
    assert not (tmp_path / "outputAStar.txt").exists()


def test_load_reports_malformed_input(tmp_path):
    input_path = tmp_path / "input.txt"
    input_path.write_text("[0,0] [4,2]\n1\n", encoding="utf-8")

    code, output = run_cli(["load", "--input", str(input_path)])

    assert code == 1
    assert "Invalid data" in output


def test_load_reports_missing_file(tmp_path):
    code, output = run_cli(["load", "--input", str(tmp_path / "nope.txt")])

    assert code == 1
    assert "Input file not found" in output


def test_load_loss_report(tmp_path):
    input_path = tmp_path / "input.txt"
    input_path.write_text("[0,0] [1,1] [8,0] [8,0] [8,8] [4,4]\n1\n", encoding="utf-8")

    code, output = run_cli(["load", "--input", str(input_path), "--output-dir", str(tmp_path)])

    assert code == 0
    assert (tmp_path / "outputAStar.txt").read_text(encoding="utf-8") == "Loss\n"
    assert (tmp_path / "outputBacktracking.txt").read_text(encoding="utf-8") == "Loss\n"
    assert "Loss" in output


def test_generate_with_seed_saves_replayable_input(tmp_path):
    saved = tmp_path / "generated.txt"

    code, _ = run_cli(
        ["generate", "--scenario", "2", "--seed", "5", "--save-input", str(saved), "--output-dir", str(tmp_path)]
    )

    assert code == 0
    lines = saved.read_text(encoding="utf-8").splitlines()
    assert lines[0].startswith("[0,0]")
    assert lines[1] == "2"
    assert (tmp_path / "outputAStar.txt").exists()

    replay_dir = tmp_path / "replay"
    code, _ = run_cli(["load", "--input", str(saved), "--output-dir", str(replay_dir)])
    assert code == 0
    original = (tmp_path / "outputAStar.txt").read_text(encoding="utf-8").splitlines()
    replayed = (replay_dir / "outputAStar.txt").read_text(encoding="utf-8").splitlines()
    # Everything but the timing line matches
    assert original[:-1] == replayed[:-1]


def test_analyse_prints_summaries():
    code, output = run_cli(["analyse", "--maps", "2", "--seed", "3"])

    assert code == 0
    assert "AStar with scenario 1:" in output
    assert "Backtracking with scenario 2:" in output
    assert "[✓] Analysis complete" in output


def test_analyse_rejects_zero_maps():
    code, output = run_cli(["analyse", "--maps", "0"])
    assert code == 1
    assert "--maps must be at least 1" in output


def test_analyse_warns_about_low_depth_cap():
    code, output = run_cli(["analyse", "--maps", "1", "--seed", "3", "--max-depth", "4"])
    assert code == 0
    assert "[~] Backtracking capped at 4 moves" in output


def test_bad_configuration_is_logged_not_raised(monkeypatch):
    monkeypatch.setattr(Config, "MAX_SEARCH_DEPTH", 0)

    code, output = run_cli(["analyse", "--maps", "1"])

    assert code == 1
    assert "[!] Invalid configuration: TORTUGA_MAX_DEPTH" in output

import importlib.util
from pathlib import Path

import pytest

TOOL = Path(__file__).resolve().parent.parent / "tools" / "plan_level.py"


@pytest.fixture
def plan_level(tmp_path, monkeypatch):
    monkeypatch.setenv("BULLETGRID_SETTINGS", str(tmp_path / "planner.json"))
    monkeypatch.setattr("bulletgrid.settings._settings", None)
    spec = importlib.util.spec_from_file_location("plan_level", TOOL)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_plan_from_level_file(tmp_path, plan_level, capsys):
    level = tmp_path / "level.csv"
    level.write_text("x,y,direction,turn\n-3,1,3,0\n0,3,2,1\n")
    code = plan_level.main([str(level), "--count", "2", "--policy", "first", "--seed", "1"])
    assert code == 0
    out = capsys.readouterr().out
    assert "Planned 2 of 2 spawns" in out


def test_bad_level_falls_back_to_empty_board(tmp_path, plan_level, capsys):
    level = tmp_path / "broken.csv"
    level.write_text("x,y\n1,2\n")
    assert plan_level.main([str(level), "--count", "1", "--strategy", "iterate", "--policy", "first"]) == 0
    out = capsys.readouterr().out
    assert "Could not load level" in out
    assert "Planned 1 of 1 spawns" in out


def test_png_output(tmp_path, plan_level):
    png = tmp_path / "plan.png"
    assert plan_level.main(["--size", "5", "--count", "1", "--policy", "first", "--png", str(png)]) == 0
    assert png.exists()

import json

from bulletgrid.settings import PlannerSettings


def test_defaults_when_file_missing(tmp_path):
    s = PlannerSettings(str(tmp_path / "missing.json"))
    assert s.board_size == 7
    assert s.spawn_count == 1
    assert s.strategy == "choose"
    assert s.policy == "random"
    assert s.workers == 1
    assert s.seed is None
    assert not (tmp_path / "missing.json").exists()


def test_load_values_and_clamp(tmp_path):
    path = tmp_path / "planner.json"
    path.write_text(json.dumps({"board_size": 8, "spawn_count": -2, "strategy": "iterate", "workers": 0, "seed": 9}))
    s = PlannerSettings(str(path))
    assert s.board_size == 9  # even sizes round up to the next odd size
    assert s.spawn_count == 0
    assert s.strategy == "iterate"
    assert s.workers == 1
    assert s.seed == 9


def test_unknown_strategy_ignored(tmp_path):
    path = tmp_path / "planner.json"
    path.write_text(json.dumps({"strategy": "bogus"}))
    assert PlannerSettings(str(path)).strategy == "choose"


def test_bad_json_keeps_defaults(tmp_path):
    path = tmp_path / "planner.json"
    path.write_text("{not json")
    s = PlannerSettings(str(path))
    assert s.board_size == 7
    path.write_text("[1, 2]")
    assert PlannerSettings(str(path)).board_size == 7


def test_flush_writes_only_when_dirty(tmp_path):
    path = tmp_path / "nested" / "planner.json"
    s = PlannerSettings(str(path))
    s.flush()
    assert not path.exists()

    s.board_size = 11
    s.policy = "hardest"
    s.flush()
    data = json.loads(path.read_text())
    assert data["board_size"] == 11
    assert data["policy"] == "hardest"

    reloaded = PlannerSettings(str(path))
    assert reloaded.to_dict() == s.to_dict()


def test_env_path_override(tmp_path, monkeypatch):
    path = tmp_path / "env.json"
    path.write_text(json.dumps({"spawn_count": 4}))
    monkeypatch.setenv("BULLETGRID_SETTINGS", str(path))
    assert PlannerSettings().spawn_count == 4


def test_wrongly_typed_values_keep_defaults(tmp_path):
    path = tmp_path / "planner.json"
    path.write_text(json.dumps({"board_size": "big", "workers": None, "spawn_count": 3, "seed": [1]}))
    s = PlannerSettings(str(path))
    assert s.board_size == 7
    assert s.workers == 1
    assert s.spawn_count == 3
    assert s.seed is None

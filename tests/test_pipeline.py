import json

import numpy as np
import pytest

from logiopt.glue.pipeline import build_params, load_and_run, main, run_pipeline


def test_build_params_override():
    cfg = {"seed": 3, "params": {"ordering": "weight"}}
    params = build_params(cfg)
    assert params["seed"] == 3
    assert params["ordering"] == "weight"
    assert params["start_vertex"] == 0


def test_run_stage_graph(tmp_path):
    cfg = {
        "problem": "stage_graph",
        "stage_graph": {"stages": 3, "nodes_per_stage": 2, "edges": "0-1:2, 0-2:3, 1-3:4, 2-3:5"},
    }
    out = run_pipeline(cfg, base_dir=tmp_path, outdir=tmp_path / "out", export_trace=True)
    assert out["result"].minimum_cost == pytest.approx(6.0)
    assert out["result"].path == (0, 1, 3)
    assert (tmp_path / "out" / "result.json").exists()
    assert (tmp_path / "out" / "trace.csv").exists()

    with open(tmp_path / "out" / "result.json", encoding="utf-8") as f:
        data = json.load(f)
    assert data["problem"] == "stage_graph"
    assert data["result"]["path"] == [0, 1, 3]


def test_run_stage_graph_from_npz(tmp_path):
    cost = np.full((3, 3), np.inf)
    cost[0, 1] = 1.0
    cost[1, 2] = 1.0
    cost[0, 2] = 5.0
    np.savez(tmp_path / "graph.npz", cost=cost)
    cfg = {"problem": "stage_graph", "stage_graph": {"matrix": "graph.npz"}}
    out = run_pipeline(cfg, base_dir=tmp_path)
    assert out["result"].path == (0, 1, 2)
    assert out["meta"]["steps"] == 2 + 2


def test_run_tour_random_is_seeded(tmp_path):
    cfg = {"problem": "tour", "seed": 9, "tour": {"cities": 7}}
    a = run_pipeline(cfg, base_dir=tmp_path)
    b = run_pipeline(cfg, base_dir=tmp_path)
    assert a["result"].tour == b["result"].tour
    assert a["result"].all_visited
    assert len(a["trace"]) == 7


def test_run_allocation_with_ordering_override(tmp_path):
    cfg_path = tmp_path / "cfg.yaml"
    cfg_path.write_text(
        "problem: allocation\n"
        "allocation:\n"
        "  capacity: 25\n"
        "  packages: '10:60:electronics, 20:100:furniture, 15:120:appliances'\n",
        encoding="utf-8",
    )
    ratio = load_and_run(cfg_path)
    value = load_and_run(cfg_path, ordering_override="value")
    assert ratio["result"].total_value == pytest.approx(180.0)
    assert value["result"].total_value == pytest.approx(170.0)


def test_unknown_problem(tmp_path):
    with pytest.raises(ValueError):
        run_pipeline({"problem": "vrp"}, base_dir=tmp_path)


def test_main_prints_summary(tmp_path, capsys):
    cfg_path = tmp_path / "cfg.json"
    cfg_path.write_text(
        json.dumps({"problem": "tour", "tour": {"locations": 3, "edges": "0-1:10, 0-2:15, 1-2:12"}}),
        encoding="utf-8",
    )
    run = main(["--config", str(cfg_path), "--outdir", str(tmp_path / "out"), "--trace"])
    printed = capsys.readouterr().out
    assert "[DONE]" in printed
    assert run["result"].tour == (0, 1, 2, 0)
    summary = json.loads(printed.split("[DONE]", 1)[1])
    assert summary["total_distance"] == pytest.approx(37.0)
    assert (tmp_path / "out" / "trace.csv").exists()

import json

import geopandas as gpd

from run_classification import main


def _args(no_config, input_path, out_dir, *extra):
    return [
        "--config", no_config,
        "--input", str(input_path),
        "--out", str(out_dir),
        "--column", "pct_poverty",
        *extra,
    ]


def test_classification_writes_classes_and_legend(tmp_path, rates_csv, no_config):
    out = tmp_path / "out"
    code = main(_args(no_config, rates_csv, out, "--k", "4", "--strategy", "quantiles", "--unit", "%"))
    assert code == 0

    records = json.loads((out / "classes.json").read_text(encoding="utf-8"))
    assert len(records) == 12
    assert {r["class"] for r in records} == {0, 1, 2, 3}
    assert all(r["label"].endswith("%") for r in records)

    legend = json.loads((out / "legend.json").read_text(encoding="utf-8"))
    assert legend["method"] == "quantiles"
    assert legend["k"] == 4
    assert [row["count"] for row in legend["classes"]] == [3, 3, 3, 3]
    assert 0.0 <= legend["gvf"] <= 1.0
    assert len(legend["params_hash"]) == 10


def test_classification_defaults_to_natural_breaks(tmp_path, rates_csv, no_config):
    out = tmp_path / "out"
    assert main(_args(no_config, rates_csv, out)) == 0

    legend = json.loads((out / "legend.json").read_text(encoding="utf-8"))
    assert legend["method"] == "natural_breaks"
    assert legend["k"] == 5
    assert sum(row["count"] for row in legend["classes"]) == 12


def test_classification_config_file(tmp_path, rates_csv):
    config = tmp_path / "binning_config.json"
    config.write_text(json.dumps({
        "paths": {"input": str(rates_csv), "out": str(tmp_path / "cfg_out")},
        "classification": {"column": "pct_poverty", "k": 3, "strategy": "equal_interval", "precision": 1},
    }), encoding="utf-8")

    assert main(["--config", str(config)]) == 0

    legend = json.loads((tmp_path / "cfg_out" / "legend.json").read_text(encoding="utf-8"))
    assert legend["method"] == "equal_interval"
    assert legend["classes"][0]["label"] == "4.2 to 13.1"


def test_classification_user_defined(tmp_path, rates_csv, no_config):
    out = tmp_path / "out"
    code = main(_args(no_config, rates_csv, out, "--strategy", "user_defined", "--bins", "10", "20"))
    assert code == 0

    legend = json.loads((out / "legend.json").read_text(encoding="utf-8"))
    assert legend["k"] == 3
    assert [row["count"] for row in legend["classes"]] == [4, 5, 3]


def test_classification_user_defined_requires_bins(tmp_path, rates_csv, no_config):
    assert main(_args(no_config, rates_csv, tmp_path / "out", "--strategy", "user_defined")) == 1


def test_classification_missing_column(tmp_path, rates_csv, no_config):
    code = main(["--config", no_config, "--input", str(rates_csv), "--out", str(tmp_path / "out"), "--column", "median_income"])
    assert code == 1


def test_classification_too_many_classes(tmp_path, rates_csv, no_config, capsys):
    assert main(_args(no_config, rates_csv, tmp_path / "out", "--k", "20")) == 1
    assert "Cannot form 20 classes" in capsys.readouterr().out


def test_classification_cap_k(tmp_path, rates_csv, no_config, capsys):
    out = tmp_path / "out"
    assert main(_args(no_config, rates_csv, out, "--k", "20", "--cap-k")) == 0
    assert "[WARN]" in capsys.readouterr().out

    legend = json.loads((out / "legend.json").read_text(encoding="utf-8"))
    assert legend["k"] == 12


def test_classification_geojson(tmp_path, rates_geojson, no_config):
    out = tmp_path / "out"
    assert main(_args(no_config, rates_geojson, out, "--k", "3")) == 0

    gdf = gpd.read_file(out / "classes.geojson")
    assert len(gdf) == 12
    assert {"class", "label", "geoid"} <= set(gdf.columns)
    assert not (out / "classes.json").exists()


def test_classification_very_large_values(tmp_path, no_config):
    path = tmp_path / "big.csv"
    path.write_text("v\n0\n2e29\n5e29\n1e30\n", encoding="utf-8")
    out = tmp_path / "out"

    code = main(["--config", no_config, "--input", str(path), "--out", str(out), "--column", "v", "--k", "2", "--strategy", "equal_interval"])
    assert code == 0

    legend = json.loads((out / "legend.json").read_text(encoding="utf-8"))
    assert legend["classes"][-1]["label"].endswith(" to 1" + "0" * 30)

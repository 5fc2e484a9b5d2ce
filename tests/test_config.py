import json

import config


def test_load_wrapped_weights(tmp_path):
    path = tmp_path / "best.json"
    path.write_text(json.dumps({"generation": 3, "fitness": 12.5,
                                "weights": {"holes": -0.4, "bumpiness": -0.2}}))
    assert config.load_weights(str(path)) == {"holes": -0.4, "bumpiness": -0.2}


def test_load_bare_weights(tmp_path):
    path = tmp_path / "w.json"
    path.write_text(json.dumps({"aggregate_height": -0.5}))
    assert config.load_weights(str(path)) == {"aggregate_height": -0.5}


def test_missing_file_gives_none(tmp_path, capsys):
    assert config.load_weights(str(tmp_path / "nope.json")) is None
    assert "[Warning]" in capsys.readouterr().out


def test_broken_file_gives_none(tmp_path, capsys):
    path = tmp_path / "bad.json"
    path.write_text("{not json")
    assert config.load_weights(str(path)) is None
    assert "[Warning]" in capsys.readouterr().out


def test_non_numeric_weight_gives_none(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"weights": {"holes": "lots"}}))
    assert config.load_weights(str(path)) is None


def test_save_then_load(tmp_path):
    path = tmp_path / "results" / "best_overall.json"
    written = config.save_weights(config.DEFAULT_WEIGHTS, str(path), generation=1)
    assert written == str(path)
    assert json.loads(path.read_text())["generation"] == 1
    assert config.load_weights(written) == config.DEFAULT_WEIGHTS

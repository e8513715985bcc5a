"""Tests for the command-line runner."""

import pytest

from scripts.run_cipher import load_config, main


@pytest.fixture
def no_config(tmp_path):
    return str(tmp_path / "missing.yaml")


def test_defaults_without_config(tmp_path):
    config = load_config(tmp_path / "missing.yaml")
    assert config["message"] == {"text": "HELLOWORLD", "width": 5}
    assert config["folds"] == []


def test_config_merges_over_defaults(tmp_path):
    path = tmp_path / "cipher.yaml"
    path.write_text("message:\n  width: 4\nfolds: [vertical]\n", encoding="utf-8")
    config = load_config(path)
    assert config["message"] == {"text": "HELLOWORLD", "width": 4}
    assert config["folds"] == ["vertical"]
    assert config["run"]["step_delay"] == 0.6


def test_no_folds(capsys, no_config):
    assert main(["--config", no_config]) == 0
    assert capsys.readouterr().out.strip() == "HELLOWORLD"


def test_degenerate_horizontal(capsys, no_config):
    assert main(["--config", no_config, "--fold", "horizontal"]) == 0
    out = capsys.readouterr().out.strip().splitlines()
    assert out[0] == "INITIATING HORIZONTAL FOLD [POS:1] [KEEP:DOWN]"
    assert out[-1] == "HELLOWORLD"


def test_stepwise_matches_eager(capsys, no_config):
    main(["--config", no_config, "--fold", "vertical", "--fold", "vertical"])
    eager = capsys.readouterr().out
    main(["--config", no_config, "--fold", "vertical", "--fold", "vertical", "--step"])
    stepwise = capsys.readouterr().out
    assert eager == stepwise
    assert eager.strip().splitlines()[-1] == "LVERPX"


def test_invalid_width(capsys, no_config):
    assert main(["--config", no_config, "--width", "2"]) == 2
    assert capsys.readouterr().out == ""


def test_unknown_axis_in_config(tmp_path, capsys, caplog):
    path = tmp_path / "cipher.yaml"
    path.write_text("folds: [vertical, diagonal]\n", encoding="utf-8")
    assert main(["--config", str(path)]) == 2
    assert capsys.readouterr().out == ""
    assert "Unknown fold axis: 'diagonal'" in caplog.text


def test_folds_from_config(tmp_path, capsys):
    path = tmp_path / "cipher.yaml"
    path.write_text("folds: [vertical]\n", encoding="utf-8")
    assert main(["--config", str(path)]) == 0
    assert capsys.readouterr().out.strip().splitlines()[-1] == "LQWRAA"


def test_writes_step_svgs(tmp_path, no_config):
    svg_dir = tmp_path / "svgs"
    main(["--config", no_config, "--text", "abcdefghi", "--width", "3",
          "--fold", "horizontal", "--fold", "vertical", "--svg-dir", str(svg_dir)])
    files = sorted(p.name for p in svg_dir.iterdir())
    assert files == ["fold_step_1.svg", "fold_step_2.svg"]

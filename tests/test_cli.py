import json

from typer.testing import CliRunner

from cyber_feed.cli import app

runner = CliRunner()


def test_build_writes_site(tmp_path):
    cfg = tmp_path / "config.json"
    cfg.write_text(json.dumps({"feeds": [], "title": "Empty Feed"}), encoding="utf-8")
    out = tmp_path / "dist"

    result = runner.invoke(app, ["build", "--config", str(cfg), "--out", str(out)])

    assert result.exit_code == 0, result.output
    assert "Built 0 items from 0 feeds" in result.output
    assert "Empty Feed" in (out / "index.html").read_text(encoding="utf-8")


def test_build_config_error_exits_2(tmp_path):
    result = runner.invoke(app, ["build", "--config", str(tmp_path / "missing.json")])
    assert result.exit_code == 2
    assert "Config error" in result.output

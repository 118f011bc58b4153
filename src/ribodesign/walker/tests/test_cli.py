"""
--------------------------------------------------------------------------------
<ribodesign project>
src/ribodesign/walker/tests/test_cli.py

Module Author(s): Eric J. South
--------------------------------------------------------------------------------
"""

from __future__ import annotations

import sys
from pathlib import Path

import yaml
from typer.testing import CliRunner

from ribodesign.walker import cli
from ribodesign.walker.cli import app
from ribodesign.walker.errors import ConfigurationError

runner = CliRunner()


def test_cli_help_smoke() -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "walk" in result.output


def test_walk_with_options() -> None:
    result = runner.invoke(
        app,
        ["walk", "--sequence", "AAAAAAAAAAAAAAA", "--seed", "1", "--max-fails", "10", "--warmup", "3"],
    )
    assert result.exit_code == 0, result.output
    assert "Walk summary" in result.output
    assert result.output.count("Single step:") == 3


def test_walk_from_config_with_override(tmp_path: Path) -> None:
    cfg = tmp_path / "walk.yaml"
    cfg.write_text(
        yaml.safe_dump(
            {
                "walker": {
                    "length": 12,
                    "seed": 4,
                    "decision": {"kind": "metropolis_hastings", "scale_factor": 0.5},
                    "max_successive_fails": 10,
                }
            }
        )
    )
    result = runner.invoke(app, ["walk", "--config", str(cfg), "--decision", "greedy"])
    assert result.exit_code == 0, result.output
    assert "final score" in result.output


def test_walk_invalid_config_raises_configuration_error() -> None:
    result = runner.invoke(app, ["walk", "--sequence", "AUGC", "--scale-factor=-1"])
    assert result.exit_code != 0
    assert isinstance(result.exception, ConfigurationError)


def test_sample_and_bench_and_scores() -> None:
    result = runner.invoke(app, ["sample", "--length", "8", "--count", "5", "--seed", "0"])
    assert result.exit_code == 0, result.output
    assert " 5: " in result.output

    result = runner.invoke(app, ["bench", "--length", "10", "--count", "20", "--repeats", "2", "--seed", "0"])
    assert result.exit_code == 0, result.output

    result = runner.invoke(app, ["scores"])
    assert result.exit_code == 0
    assert "gc_content" in result.output


def _main_with_args(monkeypatch, *args: str) -> int:
    monkeypatch.setattr(sys, "argv", ["ribowalk", *args])
    return cli.main()


def test_main_exit_code_ok(monkeypatch) -> None:
    assert _main_with_args(monkeypatch, "scores") == 0


def test_main_exit_code_malformed_yaml(monkeypatch, tmp_path: Path) -> None:
    bad = tmp_path / "bad.yaml"
    bad.write_text("walker: [unclosed\n")
    assert _main_with_args(monkeypatch, "walk", "--config", str(bad)) == 2


def test_main_exit_code_invalid_config(monkeypatch) -> None:
    assert _main_with_args(monkeypatch, "walk", "--sequence", "AUGC", "--scale-factor=-1") == 2


def test_main_exit_code_invalid_parameter(monkeypatch) -> None:
    assert _main_with_args(monkeypatch, "sample", "--length", "0") == 3


def test_main_exit_code_unexpected_error(monkeypatch) -> None:
    def _broken(_cfg):
        raise RuntimeError("folding engine unavailable")

    monkeypatch.setattr(cli, "build_walk", _broken)
    assert _main_with_args(monkeypatch, "walk", "--length", "10") == 1


def test_walk_malformed_yaml_raises_configuration_error(tmp_path: Path) -> None:
    bad = tmp_path / "bad.yaml"
    bad.write_text("walker: [unclosed\n")
    result = runner.invoke(app, ["walk", "--config", str(bad)])
    assert result.exit_code != 0
    assert isinstance(result.exception, ConfigurationError)

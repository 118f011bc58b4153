"""
--------------------------------------------------------------------------------
<ribodesign project>
ribodesign/walker/cli.py

Module Author(s): Eric J. South
Dunlop Lab
--------------------------------------------------------------------------------
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np
import typer
from rich.console import Console
from rich.table import Table
from rich.traceback import install as rich_tb

from .bench import benchmark_generator, survey_generator
from .config import WalkConfig, load_walk_mapping, parse_walk_config
from .errors import ConfigurationError, InvalidParameter
from .logging_utils import init_logger, level_for_verbosity
from .mutation import MutationGenerator
from .optimizer import WalkResult, build_walk
from .scoring import list_score_specs

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help=(
        "ribowalk: single-mutation local search over RNA/DNA sequences.\n\n"
        "\b\nCommands:\n"
        "  • ribowalk walk   - greedy or Metropolis–Hastings walk minimising a score\n"
        "  • ribowalk sample - successive outputs of a mutation generator\n"
        "  • ribowalk bench  - mutation generator throughput\n"
        "  • ribowalk scores - list registered score functions"
    ),
)
console = Console()
rich_tb(show_locals=False)


def _exit_for(e: Exception) -> int:
    mapping = {
        ConfigurationError: 2,
        InvalidParameter: 3,
    }
    for etype, code in mapping.items():
        if isinstance(e, etype):
            return code
    return 1


@app.callback()
def _root(verbose: int = typer.Option(0, "--verbose", "-v", count=True)):
    """
    Global flags: -v for more logs (repeatable).
    """
    init_logger(level_for_verbosity(verbose))


def _walk_config(
    config: Optional[Path],
    overrides: Dict[str, Any],
    decision_overrides: Dict[str, Any],
) -> WalkConfig:
    data = load_walk_mapping(config) if config is not None else {}
    # --sequence and --length are alternatives; one on the CLI replaces the other from YAML
    if overrides.get("init_sequence") is not None:
        data.pop("length", None)
    elif overrides.get("length") is not None:
        data.pop("init_sequence", None)
    data.update({k: v for k, v in overrides.items() if v is not None})
    decision = dict(data.get("decision") or {})
    decision.update({k: v for k, v in decision_overrides.items() if v is not None})
    data["decision"] = decision
    return parse_walk_config({"walker": data})


def _render_result(result: WalkResult) -> None:
    table = Table(title="Walk summary", show_header=True, header_style="bold")
    table.add_column("field")
    table.add_column("value")
    table.add_row("initial sequence", result.init_sequence)
    table.add_row("initial score", f"{result.init_score:g}")
    table.add_row("final sequence", result.final_sequence)
    table.add_row("final score", f"{result.final_score:g}")
    table.add_row("steps", str(result.step_count))
    table.add_row("accepted", str(result.successful_step_count))
    console.print(table)


@app.command("walk", help="Run a local-search walk. Options override values from --config.")
def walk(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML with a top-level `walker:` block."),
    length: Optional[int] = typer.Option(None, "--length", "-l", help="Random start of this length."),
    sequence: Optional[str] = typer.Option(None, "--sequence", "-s", help="Explicit start sequence."),
    alphabet: Optional[str] = typer.Option(None, "--alphabet", help="Preset: rna|dna."),
    seed: Optional[int] = typer.Option(None, "--seed"),
    score: Optional[str] = typer.Option(None, "--score", help="Registered score name (see `ribowalk scores`)."),
    decision: Optional[str] = typer.Option(None, "--decision", "-d", help="greedy|metropolis_hastings"),
    scale_factor: Optional[float] = typer.Option(None, "--scale-factor", help="Metropolis–Hastings scale (> 0)."),
    max_fails: Optional[int] = typer.Option(None, "--max-fails", help="Successive rejections tolerated by run()."),
    warmup: Optional[int] = typer.Option(None, "--warmup", help="Single steps reported before run()."),
):
    cfg = _walk_config(
        config,
        {
            "length": length,
            "init_sequence": sequence,
            "alphabet": alphabet,
            "seed": seed,
            "score": score,
            "max_successive_fails": max_fails,
            "warmup_steps": warmup,
        },
        {"kind": decision, "scale_factor": scale_factor},
    )
    opt = build_walk(cfg)
    console.print(f"Start sequence: [bold]{opt.init_state}[/bold]  score: {opt.init_state_score:g}")
    for _ in range(cfg.warmup_steps):
        outcome = "success" if opt.step() else "no success"
        console.print(f"Single step:    {opt.current_state}  score: {opt.current_state_score:g}  {outcome}")
    opt.run()
    _render_result(opt.summary())


@app.command("sample", help="Print successive sequences from a random-start mutation generator.")
def sample(
    length: int = typer.Option(15, "--length", "-l"),
    count: int = typer.Option(10, "--count", "-n"),
    alphabet: str = typer.Option("rna", "--alphabet"),
    seed: Optional[int] = typer.Option(None, "--seed"),
):
    gen = MutationGenerator(length=length, alphabet=alphabet, rng=np.random.default_rng(seed))
    for i, (seq, seen) in enumerate(survey_generator(gen, count), start=1):
        console.print(f"{i:2d}: {seq if seen == 1 else f'{seen}. encounter'}")


@app.command("bench", help="Time building a generator and pulling --count sequences, --repeats times.")
def bench(
    length: int = typer.Option(20, "--length", "-l"),
    count: int = typer.Option(1000, "--count", "-n"),
    repeats: int = typer.Option(100, "--repeats", "-r"),
    alphabet: str = typer.Option("rna", "--alphabet"),
    seed: Optional[int] = typer.Option(None, "--seed"),
):
    result = benchmark_generator(alphabet, length, count, repeats, rng=np.random.default_rng(seed))
    table = Table(title="Mutation generator benchmark", show_header=True, header_style="bold")
    for col in ("length", "count", "repeats", "total (s)", "per run (s)", "seq/s"):
        table.add_column(col, justify="right")
    table.add_row(
        str(result.length),
        str(result.count),
        str(result.repeats),
        f"{result.total_seconds:.3f}",
        f"{result.seconds_per_run:.5f}",
        f"{result.sequences_per_second:,.0f}",
    )
    console.print(table)


@app.command("scores", help="List registered score functions.")
def scores():
    table = Table(show_header=True, header_style="bold")
    table.add_column("name")
    table.add_column("description")
    for spec in list_score_specs():
        table.add_row(spec.name, spec.description)
    console.print(table)


def main() -> int:
    try:
        app(standalone_mode=False)
        return 0
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        return _exit_for(e)


if __name__ == "__main__":
    sys.exit(main())

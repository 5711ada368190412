"""Main CLI entrypoint using Typer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, List

import typer

from setcompare import __version__

app = typer.Typer(
    name="setcompare",
    help="Per-window statistical comparison of two groups of genomic signal tracks.",
    add_completion=False,
)

# Logging setup
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        typer.echo(f"setcompare {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log every skipped window."),
):
    """setcompare: compare replicate groups of genomic tracks window by window."""
    if verbose:
        logging.getLogger("setcompare").setLevel(logging.DEBUG)


def _run(
    test: str,
    set_a: List[Path],
    set_b: List[Path],
    out: Path,
    region: Optional[str],
) -> None:
    from setcompare.config import ComparisonConfig
    from setcompare.stats import run_comparison_from_config

    try:
        config = ComparisonConfig(
            test=test,
            set_a=set_a,
            set_b=set_b,
            output=out,
            region=region,
        )
    except (ValueError, FileNotFoundError) as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    try:
        typer.echo(f"Comparing {len(set_a)} vs {len(set_b)} tracks ({test})...")
        results = run_comparison_from_config(config)
    except (ValueError, FileNotFoundError) as e:
        typer.secho(f"\n✗ Comparison failed: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"\n✓ Comparison complete!", fg=typer.colors.GREEN)
    typer.echo(f"  Output: {results['output']}")
    typer.echo(f"  Windows: {results['n_records']}")


@app.command()
def ttest(
    set_a: List[Path] = typer.Option(..., "--set-a", "-a", help="bedGraph track of group A (repeatable)"),
    set_b: List[Path] = typer.Option(..., "--set-b", "-b", help="bedGraph track of group B (repeatable)"),
    out: Path = typer.Option(Path("ttest.bg"), "--out", "-o", help="Output bedGraph of p-values"),
    region: Optional[str] = typer.Option(None, "--region", help="Restrict to chrom:start-finish"),
):
    """
    Welch's t-test p-value for every window where both groups have data.

    Windows where neither group varies are left out of the output.

    Examples:
        setcompare ttest -a ctrl1.bg -a ctrl2.bg -b treat1.bg -b treat2.bg -o ttest.bg

        setcompare ttest -a ctrl1.bg -a ctrl2.bg -b treat1.bg --region chr1:0-1000000
    """
    _run("ttest", set_a, set_b, out, region)


@app.command()
def mwu(
    set_a: List[Path] = typer.Option(..., "--set-a", "-a", help="bedGraph track of group A (repeatable)"),
    set_b: List[Path] = typer.Option(..., "--set-b", "-b", help="bedGraph track of group B (repeatable)"),
    out: Path = typer.Option(Path("mwu.bg"), "--out", "-o", help="Output bedGraph of p-values"),
    region: Optional[str] = typer.Option(None, "--region", help="Restrict to chrom:start-finish"),
):
    """
    Mann-Whitney U p-value (normal approximation) for every window where
    both groups have data.

    Examples:
        setcompare mwu -a ctrl1.bg -a ctrl2.bg -b treat1.bg -b treat2.bg -o mwu.bg
    """
    _run("mwu", set_a, set_b, out, region)


if __name__ == "__main__":
    app()

"""Command-line entry point (Typer)."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.text import Text

from adapters.json_exporter import export_responses_json
from cli import doctor
from cli.ui_components import build_beacons_table, build_responses_table, format_answer, print_banner
from core.config import AppSettings
from core.log import configure_logging
from core.services.aggregator import BeaconAggregator
from core.services.beacon_registry import build_default_registry

app = typer.Typer(no_args_is_help=True, help="Query public genomic beacons for a variant.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level."),
) -> None:
    settings = AppSettings()
    configure_logging("DEBUG" if verbose else settings.log_level)


@app.command()
def query(
    chrom: str = typer.Option(..., "--chrom", "-c", help="Chromosome (1-22, X, Y, MT; chr prefix allowed)."),
    pos: str = typer.Option(..., "--pos", "-p", help="Position on the chromosome."),
    allele: str = typer.Option(..., "--allele", "-a", help="Allele: bases (ACGT), D or I."),
    ref: Optional[str] = typer.Option(None, "--ref", "-r", help="Reference build (hg19, GRCh37, hg38...)."),
    beacon: Optional[str] = typer.Option(None, "--beacon", "-b", help="Only ask this beacon id."),
    as_json: bool = typer.Option(False, "--json", help="Print JSON records instead of a table."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Also write JSON records to this file."),
) -> None:
    """Ask the registered beacons whether they have observed an allele."""

    settings = AppSettings()
    aggregator = BeaconAggregator(settings=settings)
    result = asyncio.run(aggregator.ask(chrom, pos, allele, ref, beacon_id=beacon))

    if not result.beacon_known:
        _console.print(f"[red]Unknown beacon:[/red] {beacon}")
        raise typer.Exit(code=2)

    if output is not None:
        export_responses_json(responses=result.responses, output_path=output)

    if as_json:
        typer.echo(json.dumps(result.records(), ensure_ascii=False, indent=2))
        return

    print_banner(_console)
    if result.invalid_fields:
        _console.print(f"[yellow]Invalid field(s):[/yellow] {', '.join(sorted(result.invalid_fields))}")
    if result.converted_fields:
        _console.print(f"[dim]Normalized field(s): {', '.join(sorted(result.converted_fields))}[/dim]")
    if not result.responses:
        _console.print("[yellow]No beacon supports this query.[/yellow]")
        return
    _console.print(build_responses_table(result.responses))
    _console.print(Text.assemble("Any beacon: ", format_answer(result.combined_answer())))
    if output is not None:
        _console.print(f"[green]Saved JSON to:[/green] {output}")


@app.command()
def beacons() -> None:
    """List registered beacons and the reference builds they serve."""

    registry = build_default_registry(AppSettings())
    _console.print(build_beacons_table(registry.descriptors()))


def run() -> None:
    app()


if __name__ == "__main__":
    run()

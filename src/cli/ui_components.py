"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- Tables/panels are reused by several commands.
"""

from __future__ import annotations

from typing import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Answer, BeaconDescriptor, BeaconResponse


def print_banner(console: Console) -> None:
    """Print the welcome banner (skipped in JSON mode)."""

    title = Text("Beacon Aggregator", style="bold cyan")
    subtitle = Text("Genomic variant lookup across public beacons", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def format_answer(answer: Answer) -> Text:
    if answer is True:
        return Text("yes", style="bold green")
    if answer is False:
        return Text("no", style="red")
    return Text("unknown", style="yellow")


def build_responses_table(responses: Iterable[BeaconResponse]) -> Table:
    table = Table(title="Beacon Responses")
    table.add_column("Beacon", style="cyan", no_wrap=True)
    table.add_column("Reference", style="white")
    table.add_column("Chrom", style="white")
    table.add_column("Position", style="white", justify="right")
    table.add_column("Allele", style="white")
    table.add_column("Answer")
    table.add_column("Detail", style="dim")

    for response in responses:
        query = response.query
        table.add_row(
            response.beacon_id,
            query.reference.value if query.reference else "-",
            query.chromosome or "-",
            str(query.position) if query.position is not None else "-",
            query.allele or "-",
            format_answer(response.answer),
            response.detail or "",
        )
    return table


def build_beacons_table(descriptors: Iterable[BeaconDescriptor]) -> Table:
    table = Table(title="Registered Beacons")
    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("References", style="magenta")
    table.add_column("D/I alleles", style="dim")

    for descriptor in descriptors:
        table.add_row(
            descriptor.id,
            descriptor.name,
            ", ".join(ref.value for ref in descriptor.supported_references),
            "no" if descriptor.sequence_alleles_only else "yes",
        )
    return table

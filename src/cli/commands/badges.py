"""Badge listing CLI command."""

import click
from rich.console import Console
from rich.table import Table

from cli.utils import get_components

console = Console()


@click.command()
def badges():
    """List earned badges."""
    c = get_components()
    earned = c["tracker"].state.badges

    if not earned:
        console.print(
            "[yellow]No badges yet - complete weekly challenges to earn cosmic badges.[/]"
        )
        return

    table = Table(show_header=True)
    table.add_column("Date", style="cyan")
    table.add_column("Badge", style="green")
    table.add_column("Challenge")
    for b in earned:
        table.add_row(b.date, b.title, b.note)
    console.print(table)

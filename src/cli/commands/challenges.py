"""Weekly challenge CLI commands."""

import click
from rich.console import Console
from rich.table import Table

from cli.utils import get_components

console = Console()


def _print_week(week):
    from habits.challenges import week_range

    span = week_range(week)
    title = "Weekly challenges"
    if span:
        title += f" ({span[0].strftime('%a %b %d')} - {span[1].strftime('%a %b %d')})"

    table = Table(show_header=True, title=title)
    table.add_column("ID", style="dim")
    table.add_column("Type", style="magenta")
    table.add_column("Challenge")
    table.add_column("Status")
    for item in week.items:
        table.add_row(
            item.id,
            str(item.type),
            item.text,
            "[green]completed[/]" if item.completed else "[dim]open[/]",
        )
    console.print(table)


@click.group()
def challenges():
    """View and complete weekly challenges."""
    pass


@challenges.command("show")
def challenges_show():
    """Show this week's challenges, generating them if the week rolled over."""
    c = get_components()
    _print_week(c["tracker"].ensure_challenges())


@challenges.command("regen")
def challenges_regen():
    """Regenerate this week's challenges from the current ranking."""
    c = get_components()
    week = c["tracker"].generate_challenges()
    console.print(f"[green]Generated {len(week.items)} challenges[/]")
    _print_week(week)


@challenges.command("complete")
@click.argument("challenge_id")
def challenges_complete(challenge_id: str):
    """Mark a challenge completed and earn a badge."""
    c = get_components()
    try:
        badge = c["tracker"].complete_challenge(challenge_id)
    except KeyError:
        console.print(f"[red]Not found:[/] {challenge_id}")
        raise SystemExit(1)

    if badge is None:
        console.print("[yellow]Already completed.[/]")
        return
    console.print(f"[green]Badge earned:[/] {badge.title} - {badge.note}")

"""Habit CLI commands."""

from datetime import date
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from cli.utils import get_components, resolve_habit
from habits.dates import day_key, parse_day_key
from shared_types import ActionType, ToggleOutcome

console = Console()


@click.group()
def habit():
    """Add, list and check off habits."""
    pass


@habit.command("add")
@click.argument("name")
@click.option("-e", "--emoji", help="Emoji shown next to the habit")
@click.option(
    "-p", "--priority", default=3, type=click.IntRange(1, 5), help="Priority 1-5 (default 3)"
)
@click.option("--color", help="Hex color, random if omitted")
def habit_add(name: str, emoji: Optional[str], priority: int, color: Optional[str]):
    """Add a new habit (names are cut to 40 characters)."""
    c = get_components()
    try:
        h = c["tracker"].add_habit(name, emoji=emoji, priority=priority, color=color)
    except ValueError as e:
        console.print(f"[red]Error:[/] {e}")
        raise SystemExit(1)
    console.print(f"[green]Added:[/] {h.emoji} {h.name} [dim]({h.id})[/]")


@habit.command("list")
@click.option("-f", "--focus", is_flag=True, help="Only show the top-ranked habits")
def habit_list(focus: bool):
    """List habits by rank with today's status."""
    from habits.ranking import focus as focus_slice

    c = get_components()
    tracker = c["tracker"]
    ranked = tracker.ranked()
    if focus:
        ranked = focus_slice(ranked, c["config"].ranking.focus_limit)

    if not ranked:
        console.print("[yellow]No habits yet. Add one with `cosmos habit add`.[/]")
        return

    today = day_key(date.today())
    table = Table(show_header=True)
    table.add_column("ID", style="dim")
    table.add_column("Habit")
    table.add_column("Priority", style="yellow")
    table.add_column("Total", justify="right")
    table.add_column("Score", justify="right", style="cyan")
    table.add_column("Today")

    for h in ranked:
        done = tracker.store.has_completion(h.id, today)
        table.add_row(
            h.id,
            f"{h.emoji} {h.name}",
            "★" * h.priority,
            str(h.total),
            f"{h.score:.2f}",
            "[green]done[/]" if done else "[dim]not done[/]",
        )

    console.print(table)


@habit.command("toggle")
@click.argument("ref")
@click.option("-d", "--day", help="Day as YYYY-MM-DD (default: today)")
def habit_toggle(ref: str, day: Optional[str]):
    """Mark or unmark a habit (by id or name) for a day."""
    if day:
        try:
            parse_day_key(day)
        except ValueError:
            console.print(f"[red]Invalid day:[/] {day} (expected YYYY-MM-DD)")
            raise SystemExit(1)

    c = get_components()
    h = resolve_habit(c["tracker"], ref)
    if h is None:
        raise SystemExit(1)

    outcome = c["tracker"].toggle_habit(h.id, day=day)
    if outcome == ToggleOutcome.MARKED:
        console.print(f"[green]Done:[/] {h.emoji} {h.name} - nice!")
    else:
        console.print(f"[yellow]Unmarked:[/] {h.emoji} {h.name}")


@habit.command("undo")
def habit_undo():
    """Undo the last toggle."""
    c = get_components()
    action = c["tracker"].undo()
    if action is None:
        console.print("[yellow]No action to undo.[/]")
        return
    verb = "unmarked" if action.type == ActionType.MARK else "re-marked"
    h = c["tracker"].find_habit(action.habit)
    name = h.name if h else action.habit
    console.print(f"[green]Undone:[/] {name} {verb} for {action.day}")

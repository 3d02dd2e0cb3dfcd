"""Local reminder CLI commands."""

import time

import click
from rich.console import Console

from cli.utils import get_components

console = Console()


def _notify(message: str):
    console.print(f"[magenta bold]Cosmos reminder:[/] {message}")


def _state_reader(storage, fallback):
    """Re-read the state file on each call without ever writing it.

    A missing or corrupt file yields the last state that loaded.
    """
    latest = {"state": fallback}

    def read():
        state = storage.load()
        if state is not None:
            latest["state"] = state
        return latest["state"]

    return read


@click.group()
def reminders():
    """Periodic reminders for your top habit."""
    pass


@reminders.command("enable")
def reminders_enable():
    """Allow reminders."""
    c = get_components()
    c["tracker"].enable_reminders()
    console.print("[green]Reminders enabled.[/] Run `cosmos reminders start` to keep them running.")


@reminders.command("disable")
def reminders_disable():
    """Turn reminders off."""
    c = get_components()
    c["tracker"].disable_reminders()
    console.print("[yellow]Reminders disabled.[/]")


@reminders.command("fire")
def reminders_fire():
    """Send one reminder now."""
    from habits.reminders import ReminderScheduler

    c = get_components()
    scheduler = ReminderScheduler(lambda: c["tracker"].state, _notify)
    if scheduler.fire() is None:
        console.print("[yellow]No habits to remind you about.[/]")


@reminders.command("start")
@click.option("--hours", type=float, help="Hours between reminders (default from config)")
def reminders_start(hours: float):
    """Run reminders in the foreground until Ctrl+C."""
    from habits.reminders import ReminderScheduler

    c = get_components()
    storage = c["storage"]
    interval = hours or c["config"].reminders.interval_hours

    # Toggles made from other commands are picked up on the next run
    reader = _state_reader(storage, c["tracker"].state)
    scheduler = ReminderScheduler(reader, _notify, interval_hours=interval)
    try:
        scheduler.start()
    except PermissionError:
        console.print("[red]Reminders are disabled.[/] Run `cosmos reminders enable` first.")
        raise SystemExit(1)

    console.print(f"[green]Started[/] reminders every {interval:g}h")
    console.print("Press Ctrl+C to stop")
    try:
        while True:
            time.sleep(60)
    except KeyboardInterrupt:
        scheduler.stop()
        console.print("\n[yellow]Stopped[/]")

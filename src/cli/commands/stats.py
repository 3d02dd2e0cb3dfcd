"""Analytics CLI command: streaks, consistency, heatmap and insights."""

import click
from rich.console import Console
from rich.text import Text

from cli.utils import get_components

console = Console()

LEVEL_STYLE = {
    0: "grey23",
    1: "dark_green",
    2: "green4",
    3: "green3",
    4: "bright_green",
}


def _render_heatmap(cells) -> Text:
    """Seven rows by N columns, filled column by column from the oldest day."""
    text = Text()
    rows = [cells[i::7] for i in range(7)]
    for row in rows:
        for cell in row:
            text.append("■ ", style=LEVEL_STYLE[cell.level])
        text.append("\n")
    return text


@click.command()
@click.option("--heatmap-days", default=90, help="Days shown in the heatmap")
@click.option("--trend-days", default=30, help="Days shown in the trend line")
def stats(heatmap_days: int, trend_days: int):
    """Show streaks, consistency, activity heatmap and insights."""
    from habits import insights

    c = get_components()
    tracker = c["tracker"]
    logs = tracker.store.all_logs()
    s = tracker.streak_stats()

    console.print(
        f"[bold]Current streak:[/] {s.current}d  |  "
        f"[bold]Longest:[/] {s.longest}d  |  "
        f"[bold]Consistency:[/] {s.consistency}%"
    )

    console.print(f"\n[bold]Activity[/] [dim](last {heatmap_days} days)[/]")
    console.print(_render_heatmap(insights.heatmap(logs, days=heatmap_days)))

    counts = insights.trend(logs, days=trend_days)
    console.print(f"[bold]Trend[/] [dim](last {trend_days} days)[/]  {insights.sparkline(counts)}")

    ranked = tracker.ranked()
    lines = insights.priority_list(ranked)
    if lines:
        console.print("\n[bold]Priorities[/]")
        for line in lines:
            console.print(f"  {line}")

    console.print("\n[bold]Insights[/]")
    for message in insights.insights(ranked, logs):
        console.print(f"  • {message}")

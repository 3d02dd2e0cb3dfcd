"""Export, import and encrypted backup CLI commands."""

from datetime import datetime
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from cli.utils import get_components

console = Console()


@click.group()
def export():
    """Export, import and back up tracker data."""
    pass


@export.command("json")
@click.option("-o", "--output", type=click.Path(), help="Output file (default: stdout)")
def export_json_cmd(output: Optional[str]):
    """Export the full state as JSON."""
    from habits.backup import export_json

    c = get_components()
    text = export_json(c["tracker"].state)
    if not output:
        click.echo(text)
        return
    out = Path(output)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text, encoding="utf-8")
    console.print(f"[green]Exported to {out}[/]")


@export.command("import")
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def import_cmd(source: str, yes: bool):
    """Replace current state with a JSON export."""
    from habits.backup import import_json
    from habits.errors import StateImportError

    try:
        state = import_json(Path(source).read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, StateImportError) as e:
        console.print(f"[red]Invalid JSON:[/] {e}")
        raise SystemExit(1)

    if not yes and not click.confirm("Replace all current habits, logs and badges?"):
        return

    c = get_components()
    c["tracker"].replace_state(state)
    console.print(
        f"[green]Imported[/] {len(state.habits)} habits, {len(state.logs)} logs, "
        f"{len(state.badges)} badges"
    )


@export.command("backup")
@click.option("-o", "--output", type=click.Path(), help="Output file")
@click.option(
    "--passphrase",
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    help="Passphrase used to encrypt the backup",
)
def backup_cmd(output: Optional[str], passphrase: str):
    """Write an encrypted backup. Keep the passphrase safe."""
    from habits.backup import encrypt_state

    c = get_components()
    if output:
        out = Path(output)
    else:
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        out = c["config"].paths.backup_dir / f"cosmos-backup-{stamp}.bin"

    try:
        blob = encrypt_state(c["tracker"].state, passphrase)
    except ValueError as e:
        console.print(f"[red]Error:[/] {e}")
        raise SystemExit(1)

    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(blob)
    console.print(f"[green]Encrypted backup saved:[/] {out}")


@export.command("restore")
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
@click.option("--passphrase", prompt=True, hide_input=True, help="Backup passphrase")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
def restore_cmd(source: str, passphrase: str, yes: bool):
    """Restore state from an encrypted backup."""
    from habits.backup import decrypt_state
    from habits.errors import DecryptionError

    try:
        state = decrypt_state(Path(source).read_bytes(), passphrase)
    except (DecryptionError, ValueError) as e:
        console.print(f"[red]Restore failed:[/] {e}")
        raise SystemExit(1)

    if not yes and not click.confirm("Replace all current habits, logs and badges?"):
        return

    c = get_components()
    c["tracker"].replace_state(state)
    console.print(f"[green]Restored[/] {len(state.habits)} habits from {source}")

"""CLI entry point for content-sync."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
import yaml
from pydantic import ValidationError
from rich import print as rprint
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from content_sync.config import ContentSyncSettings, load_config
from content_sync.config.loader import CONFIG_FILENAME, DEFAULT_CONFIG_TEMPLATE
from content_sync.errors import SyncInProgressError, VaultUnavailable
from content_sync.log import configure_logging
from content_sync.notify import ConsoleNotifier, LoggingNotifier
from content_sync.sync import SyncEngine, SyncReport
from content_sync.vault import FilesystemVault

app = typer.Typer(
    name="content-sync",
    help="Publish flagged vault notes to an external content folder.",
)

config_app = typer.Typer(help="Manage content-sync settings.")
app.add_typer(config_app, name="config")

# Global state
_config: ContentSyncSettings | None = None


def _get_config() -> ContentSyncSettings:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help=f"Path to {CONFIG_FILENAME}")
    ] = None,
    plugin_data: Annotated[
        str | None, typer.Option("--plugin-data", help="Host plugin data.json with pathToContentFolder/contentKey")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", help="Debug logging")] = False,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config, plugin_data)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    configure_logging("debug" if verbose else _config.log_level)


def _display_report(report: SyncReport) -> None:
    table = Table(title="Sync Report")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="green")
    table.add_row("Selected", str(report.selected))
    table.add_row("Created", str(report.created))
    table.add_row("Updated", str(report.updated))
    table.add_row("Skipped", str(report.skipped))
    table.add_row("Removed", str(report.removed))
    table.add_row("Errors", str(len(report.errors)))
    table.add_row("Duration", f"{report.duration:.2f}s")
    rprint(table)

    for err in report.errors:
        rprint(f"  [red]{err.kind.value}[/red] {escape(err.path)}: {escape(err.error)}")

    if report.dry_run:
        rprint("[yellow]This was a dry run: nothing was written.[/yellow]")


@app.command(name="sync")
def sync_cmd(
    vault: Annotated[str, typer.Option("--vault", "-v", help="Path to the vault")] = "",
    dest: Annotated[str, typer.Option("--dest", "-d", help="Path to the content folder")] = "",
    key: Annotated[str, typer.Option("--key", "-k", help="Frontmatter key that flags a note")] = "",
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Show what would change without writing")] = False,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Send notices to the log instead of the console")] = False,
) -> None:
    """Sync files with content folder."""
    settings = _get_config()
    overrides = {}
    if dest:
        overrides["path_to_content_folder"] = dest
    if key:
        overrides["content_key"] = key
    if overrides:
        settings = settings.model_copy(update=overrides)

    try:
        sync_config = settings.to_sync_config()
    except ValidationError as e:
        typer.echo(f"Error: invalid settings: {e}", err=True)
        raise typer.Exit(1)

    engine = SyncEngine(
        source=FilesystemVault(vault or settings.vault_path),
        notifier=LoggingNotifier() if quiet else ConsoleNotifier(),
    )
    try:
        report = engine.sync(sync_config, dry_run=dry_run)
    except (VaultUnavailable, SyncInProgressError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    _display_report(report)


@config_app.command("show")
def config_show() -> None:
    """Show current resolved settings."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing settings file"),
) -> None:
    """Create default content-sync.yaml in current directory."""
    target = Path(CONFIG_FILENAME)
    if target.exists() and not force:
        rprint(f"[yellow]{CONFIG_FILENAME} already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()

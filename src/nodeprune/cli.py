"""CLI interface for nodeprune."""

import logging
import time
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from nodeprune import __version__
from nodeprune.cleaner import delete_all
from nodeprune.display import (
    confirm_action,
    console,
    show_cleanup_result,
    show_deletion_summary,
    show_scanning_progress,
    show_summary,
    sort_by_size,
)
from nodeprune.exporter import ExportError, export_results
from nodeprune.filters import filter_results
from nodeprune.models import ScanConfig
from nodeprune.recursive_scanner import find_node_modules
from nodeprune.scanner import PROGRESS_THRESHOLD, NodePruneError, resolve_root, scan_directories
from nodeprune.selector import prompt_selection

app = typer.Typer(
    name="nodeprune",
    help="Scan, identify, and delete node_modules directories.",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"nodeprune version {__version__}")
        raise typer.Exit()


def setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.command()
def main(
    root: Path = typer.Option(Path("."), "--dir", "-d", help="Directory to scan"),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Show what would be deleted without actually deleting"
    ),
    yes: bool = typer.Option(
        False, "-y", "--yes", help="Automatically answer yes to prompts (use with caution!)"
    ),
    scan: bool = typer.Option(False, "--scan", help="Only scan and show results, don't delete"),
    min_size: int = typer.Option(
        0, "--min-size", min=0, help="Only process directories of at least this many bytes"
    ),
    max_size: int = typer.Option(
        0, "--max-size", min=0, help="Only process directories of at most this many bytes"
    ),
    older_than: int = typer.Option(
        0, "--older-than", min=0, help="Only process directories at least this many days old"
    ),
    interactive: bool = typer.Option(
        False, "--interactive", "-i", help="Choose which directories to delete"
    ),
    export: Optional[Path] = typer.Option(None, "--export", help="Export results to a JSON file"),
    verbose: int = typer.Option(
        0, "--verbose", "-V", count=True, help="Increase log verbosity (-V info, -VV debug)"
    ),
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Scan, identify, and delete node_modules directories."""
    setup_logging(verbose)
    start = time.perf_counter()

    try:
        config = ScanConfig(
            root=resolve_root(root),
            dry_run=dry_run,
            auto_yes=yes,
            scan_only=scan,
            min_size=min_size,
            max_size=max_size,
            older_than=older_than,
            interactive=interactive,
            export_path=export,
        )
        console.print(f"🚀 Scanning for node_modules in: {escape(str(config.root))}\n")
        console.print("🔍 Searching for node_modules directories...")
        found = find_node_modules(config.root)
    except NodePruneError as e:
        console.print(f"[red]❌ Error: {escape(str(e))}[/red]", soft_wrap=True)
        raise typer.Exit(1)

    if not found:
        console.print("✨ No node_modules directories found!")
        return

    console.print(f"📊 Found {len(found)} node_modules directories")
    console.print("📏 Calculating sizes (this may take a moment)...")

    if len(found) > PROGRESS_THRESHOLD:
        with show_scanning_progress() as progress:
            task = progress.add_task("Processing directories...", total=len(found))

            def update_progress(done: int, total: int) -> None:
                progress.update(task, completed=done)

            results = scan_directories(found, progress_callback=update_progress)
        console.print(f"✅ All {len(found)} directories processed")
    else:
        results = scan_directories(found)

    if config.has_filters:
        results = filter_results(results, config)
        console.print(f"🎯 After filtering: {len(results)} node_modules directories")

    if results:
        show_summary(results)
    else:
        console.print("[yellow]No directories match the filters.[/yellow]")

    # An empty filter result still overwrites the export file
    if config.export_path:
        try:
            written = export_results(results, config.export_path)
            console.print(f"📄 Results exported to: {escape(str(written))}")
        except ExportError as e:
            console.print(f"[red]❌ Export failed: {escape(str(e))}[/red]", soft_wrap=True)

    if not results:
        return

    console.print(f"⏱️  Scan completed in {time.perf_counter() - start:.2f} seconds\n")

    if config.scan_only:
        return

    if config.interactive:
        results = prompt_selection(sort_by_size(results))
        if not results:
            return
    elif not config.auto_yes and not config.dry_run:
        if not confirm_action("\n⚠️  Do you want to DELETE all these node_modules directories?"):
            console.print("[yellow]❌ Operation cancelled by user[/yellow]")
            return

    if config.dry_run:
        console.print("\n[yellow]🔍 DRY RUN MODE - No files will be deleted[/yellow]")
    console.print()

    delete_start = time.perf_counter()
    summary = delete_all(results, dry_run=config.dry_run, progress_callback=show_cleanup_result)
    show_deletion_summary(
        summary,
        delete_seconds=time.perf_counter() - delete_start,
        total_seconds=time.perf_counter() - start,
    )


if __name__ == "__main__":
    app()

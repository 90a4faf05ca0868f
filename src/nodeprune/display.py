"""Rich terminal display for nodeprune."""

from datetime import datetime
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from nodeprune.models import CleanupResult, DeletionSummary, ScanResult

console = Console()

KB = 1 << 10
MB = 1 << 20
GB = 1 << 30


def format_size(size_bytes: int) -> str:
    """Format bytes to human-readable string (binary units)."""
    if size_bytes >= GB:
        return f"{size_bytes / GB:.2f} GB"
    elif size_bytes >= MB:
        return f"{size_bytes / MB:.2f} MB"
    elif size_bytes >= KB:
        return f"{size_bytes / KB:.2f} KB"
    else:
        return f"{size_bytes} bytes"


def format_number(num: int) -> str:
    """Format an integer with comma thousands separators."""
    return f"{num:,}"


def format_count(count: int) -> str:
    """Format a large count with separators and a word suffix."""
    formatted = format_number(count)
    if count >= 1_000_000_000:
        return f"{formatted} ({count / 1_000_000_000:.1f} Billion)"
    elif count >= 1_000_000:
        return f"{formatted} ({count / 1_000_000:.1f} Million)"
    elif count >= 1_000:
        return f"{formatted} ({count / 1_000:.1f} Thousand)"
    return formatted


def age_bucket(modified_at: Optional[datetime], now: Optional[datetime] = None) -> str:
    """Coarse human-readable age of a directory."""
    if modified_at is None:
        return "unknown"

    now = now or datetime.now(modified_at.tzinfo)
    days = int((now - modified_at).total_seconds() // 86400)
    if days <= 0:
        return "today"
    elif days == 1:
        return "1 day"
    elif days < 30:
        return f"{days} days"
    elif days < 365:
        return f"{days // 30} mo"
    return f"{days // 365} yr"


def sort_by_size(results: list[ScanResult]) -> list[ScanResult]:
    """Return a copy of results, largest first."""
    return sorted(results, key=lambda r: r.size_bytes, reverse=True)


def show_summary(results: list[ScanResult], now: Optional[datetime] = None) -> None:
    """Display the results table, largest first, followed by totals."""
    table = Table(
        title="📦 Found node_modules directories (sorted by size, largest first)",
        show_header=True,
        header_style="bold",
    )
    table.add_column("Order", justify="right")
    table.add_column("Read", justify="right")
    table.add_column("Size", justify="right")
    table.add_column("Files", justify="right")
    table.add_column("Dirs", justify="right")
    table.add_column("Age")
    table.add_column("Path", overflow="fold")

    for i, r in enumerate(sort_by_size(results), 1):
        table.add_row(
            str(i),
            str(r.read_order),
            format_size(r.size_bytes),
            format_number(r.file_count),
            format_number(r.dir_count),
            age_bucket(r.modified_at, now),
            escape(r.path),
        )

    console.print()
    console.print(table)
    console.print(f"🧮 TOTAL: {len(results)} node_modules directories")
    console.print(f"💾 Total Size: {format_size(sum(r.size_bytes for r in results))}")
    console.print(f"📄 Total Files: {format_count(sum(r.file_count for r in results))}")
    console.print(f"📁 Total Directories: {format_count(sum(r.dir_count for r in results))}")


def show_scanning_progress() -> Progress:
    """Create progress bar for sizing."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        TimeElapsedColumn(),
        console=console,
    )


def show_cleanup_result(result: CleanupResult) -> None:
    """Display result of a single deletion."""
    path = escape(result.path)
    if result.dry_run:
        console.print(f"🔍 \\[DRY RUN] Would delete: {path}")
    elif result.success:
        console.print(f"  [green]✓[/green] Deleted: {path}")
    else:
        console.print(f"  [red]✗[/red] Error deleting {path}: {escape(result.error or '')}")


def show_deletion_summary(summary: DeletionSummary, delete_seconds: float, total_seconds: float) -> None:
    """Display the outcome of a deletion batch."""
    table = Table(show_header=False, title="🔍 DRY RUN SUMMARY" if summary.dry_run else "✅ DELETION SUMMARY")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    if summary.dry_run:
        table.add_row("Would delete", f"{summary.deleted} directories")
    else:
        table.add_row("Successfully deleted", f"{summary.deleted} directories")
        if summary.failed > 0:
            table.add_row("[red]Failed[/red]", f"{summary.failed} directories")
    table.add_row("Deletion time", f"{delete_seconds:.2f} seconds")
    table.add_row("Total time", f"{total_seconds:.2f} seconds")

    console.print()
    console.print(table)


def confirm_action(message: str) -> bool:
    """Ask for confirmation. Closed or interrupted input counts as no."""
    from rich.prompt import Confirm

    try:
        return Confirm.ask(message, default=False)
    except (EOFError, KeyboardInterrupt):
        console.print()
        return False

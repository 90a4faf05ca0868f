"""Interactive selection of directories to delete."""

from pathlib import Path

from rich.markup import escape
from rich.prompt import Prompt

from nodeprune.display import console, format_size
from nodeprune.models import ScanResult

CANCEL_WORDS = frozenset({"none", "cancel"})


def parse_selection(text: str, results: list[ScanResult]) -> list[ScanResult]:
    """
    Turn a line of user input into the chosen results.

    Accepts 'all', 'none'/'cancel', or comma-separated 1-based indices.
    Non-numeric and out-of-range tokens are ignored and repeated indices are
    taken once. An empty list means the user cancelled.
    """
    choice = text.strip().lower()

    if choice in CANCEL_WORDS:
        return []
    if choice == "all":
        return list(results)

    selected: list[ScanResult] = []
    seen: set[int] = set()
    for token in choice.split(","):
        try:
            index = int(token.strip())
        except ValueError:
            continue
        if 1 <= index <= len(results) and index not in seen:
            seen.add(index)
            selected.append(results[index - 1])

    return selected


def show_choices(results: list[ScanResult]) -> None:
    """Print the numbered list the user picks from."""
    console.print("\n[bold]🎯 INTERACTIVE MODE[/bold]")
    console.print("Choose which node_modules directories to delete:")
    console.print(
        "Enter numbers separated by commas (e.g., '1,3,5'), 'all' for all, or 'none' to cancel"
    )
    for i, result in enumerate(results, 1):
        project = Path(result.path).parent.name
        console.print(f"{i:2d}. {escape(project)} ({format_size(result.size_bytes)})")


def prompt_selection(results: list[ScanResult]) -> list[ScanResult]:
    """
    Let the user pick directories from results.

    Reads exactly one line. Returns an empty list if the user cancelled,
    made no valid choice, or input could not be read.
    """
    if not results:
        return []

    show_choices(results)

    try:
        answer = Prompt.ask("\nYour choice", console=console)
    except (EOFError, KeyboardInterrupt):
        console.print("[red]❌ Error reading input[/red]")
        return []

    if answer.strip().lower() in CANCEL_WORDS:
        console.print("[yellow]❌ Operation cancelled[/yellow]")
        return []

    selected = parse_selection(answer, results)
    if not selected:
        console.print("[yellow]❌ No valid selections made[/yellow]")
        return []

    console.print(f"[green]✅ Selected {len(selected)} directories for deletion[/green]")
    return selected

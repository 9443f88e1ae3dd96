"""Rich formatting helpers for feedback runs.

Rich auto-detects TTY and degrades gracefully when piped (no ANSI codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from transcript_feedback.applier import ApplyResult
    from transcript_feedback.models import Change


def get_console() -> Console:
    """Create a Rich Console that auto-detects TTY for graceful pipe degradation."""
    return Console(stderr=False)


def format_preview(
    changes: Sequence[Change],
    result: ApplyResult,
    source_path: Path,
    console: Console,
) -> None:
    """Show what a dry run would do: the change list and the target path."""
    console.print("\n[bold yellow]\\[Dry Run][/bold yellow] Would apply the following changes:")
    for change in changes:
        console.print(f"  - {escape(change.description)}")
    if result.new_path != source_path:
        verb = "move" if result.moved else "rename"
        console.print(f"\nWould {verb} to: [cyan]{escape(str(result.new_path))}[/cyan]")


def format_applied(
    changes: Sequence[Change],
    result: ApplyResult,
    source_path: Path,
    console: Console,
) -> None:
    """Report applied changes and where the transcript now lives."""
    console.print()
    console.print(Rule("[bold]Changes Applied[/bold]", align="left"))
    for change in changes:
        console.print(f"  [green]✓[/green] {escape(change.description)}")

    if result.new_path == source_path:
        console.print(f"\nFile updated: [cyan]{escape(str(source_path))}[/cyan]")
    elif result.moved:
        console.print(f"\nFile moved to: [cyan]{escape(str(result.new_path))}[/cyan]")
    else:
        console.print(f"\nFile renamed to: [cyan]{escape(result.new_path.name)}[/cyan]")


def format_diff(lines: Sequence[str], console: Console) -> None:
    """Display unified diff lines with added/removed coloring."""
    for line in lines:
        text = escape(line.rstrip("\n"))
        if line.startswith(("+++", "---")):
            console.print(f"[bold]{text}[/bold]")
        elif line.startswith("@@"):
            console.print(f"[cyan]{text}[/cyan]")
        elif line.startswith("+"):
            console.print(f"[green]{text}[/green]")
        elif line.startswith("-"):
            console.print(f"[red]{text}[/red]")
        else:
            console.print(text)

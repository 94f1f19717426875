"""Human-readable scan report."""

from typing import Optional, Sequence, TextIO

from rich.console import Console
from rich.markup import escape

from ..core.types import ScanResult, StatusResult

# Number of file names listed per category before summarising the rest
MAX_LISTED_FILES = 3


def create_console(
    use_color: bool = True,
    stream: Optional[TextIO] = None,
    stderr: bool = False
) -> Console:
    """Create a console for report or progress output.

    Args:
        use_color: Allow colour when the stream is a terminal
        stream: Output stream (default: stdout, or stderr if ``stderr`` is set)
        stderr: Write to stderr instead of stdout

    Returns:
        Console instance
    """
    return Console(
        file=stream,
        stderr=stderr,
        no_color=not use_color,
        highlight=False,
        soft_wrap=True
    )


def _print_files(
    console: Console,
    label: str,
    files: Sequence[str],
    style: str = ""
) -> None:
    if not files:
        return
    console.print(f"  {label}: {len(files)}", style=style)
    for name in files[:MAX_LISTED_FILES]:
        console.print(f"    - {escape(name)}", style=style)
    if len(files) > MAX_LISTED_FILES:
        console.print(f"    ... and {len(files) - MAX_LISTED_FILES} more")


def _print_result(console: Console, result: StatusResult, show_all: bool) -> None:
    path = escape(result.repo.path)

    if result.clean:
        if show_all:
            console.print(f"[green]✓ {path}[/]")
            console.print("  Clean")
            console.print()
        return

    if result.unknown:
        console.print(f"[red]✗ {path}[/]")
        console.print(f"  Status unknown: {escape(result.error or '')}")
        console.print()
        return

    status = result.status
    console.print(f"[yellow]⚠ {path}[/]")
    _print_files(console, "Untracked files", status.untracked_files)
    _print_files(console, "Modified files", status.modified_files, style="red")
    if status.unpushed_commits > 0:
        console.print(f"  Unpushed commits: {status.unpushed_commits}", style="yellow")
    console.print()


def print_report(
    scan_result: ScanResult,
    show_all: bool = False,
    console: Optional[Console] = None
) -> None:
    """Print per-repository details followed by a summary.

    Args:
        scan_result: Results of the scan
        show_all: Also list clean repositories
        console: Console to print to (default: stdout)
    """
    console = console or create_console()

    if scan_result.is_empty:
        console.print("No git repositories found.")
        return

    console.print()
    for result in scan_result.sorted_results():
        _print_result(console, result, show_all)

    console.print("─" * 37)
    console.print("Summary:")
    console.print(f"  Clean: {scan_result.clean_count}", style="green")
    if scan_result.dirty_count:
        console.print(f"  Dirty: {scan_result.dirty_count}", style="red")
    else:
        console.print("  Dirty: 0")
    if scan_result.unknown_count:
        console.print(f"  Unknown: {scan_result.unknown_count}", style="red")
    console.print(f"  Total: {scan_result.total}")

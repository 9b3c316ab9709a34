"""Shared Rich display functions for runs.

Provides the per-path event lines, per-entry messages, and the plan and
result tables used by the run and plan commands.
"""

from rich.markup import escape
from rich.table import Table

from dirkeeper.filesystem.archiver import ArchiveJob
from dirkeeper.models.entry import ActionKind, DirectoryEntry
from dirkeeper.models.outcome import EventKind, OperationEvent, OperationOutcome
from dirkeeper.models.report import RunReport
from dirkeeper.utils.formatting import console, format_size, print_error, print_success

# Label and style for each event kind.
EVENT_LABELS: dict[EventKind, tuple[str, str]] = {
    EventKind.FILE: ("File", "listed"),
    EventKind.DIRECTORY: ("Directory", "listed"),
    EventKind.REMOVED_FILE: ("Removing file", "removed"),
    EventKind.REMOVED_DIRECTORY: ("Removing directory", "removed"),
    EventKind.SKIPPED_DIRECTORY: ("Skipping directory", "skipped"),
    EventKind.ARCHIVED_FILE: ("Adding file", "archived"),
    EventKind.ARCHIVED_DIRECTORY: ("Adding directory", "archived"),
}

_ACTION_STYLES: dict[ActionKind, str] = {
    ActionKind.ENUMERATE: "listed",
    ActionKind.PURGE: "removed",
    ActionKind.MEASURE: "info",
    ActionKind.ARCHIVE: "archived",
}


def _printable(path: str) -> str:
    """Replace undecodable bytes in a file name with escape sequences."""
    return path.encode("utf-8", "backslashreplace").decode("utf-8")


def format_event(event: OperationEvent) -> str:
    """Format a progress event as a Rich markup line.

    Args:
        event: The event to format.

    Returns:
        Markup string such as ``Removing file: '/tmp/x/a.txt'``.
    """
    label, style = EVENT_LABELS[event.kind]
    prefix = "[muted](dry-run)[/muted] " if event.dry_run else ""
    return f"{prefix}[{style}]{label}:[/{style}] '{escape(_printable(event.path))}'"


def print_event(event: OperationEvent) -> None:
    """Print one progress line without wrapping long paths."""
    console.print(format_event(event), soft_wrap=True)


def print_entry_start(entry: DirectoryEntry) -> None:
    """Print the heading shown before an entry runs."""
    style = _ACTION_STYLES[entry.action]
    subdirs = "yes" if entry.include_subdirectories else "no"
    console.print(
        f"\n[{style}]{entry.action.value.capitalize()}[/{style}] "
        f"'{escape(entry.path)}' [muted](subdirs: {subdirs})[/muted]",
        soft_wrap=True,
    )


def print_outcome(outcome: OperationOutcome) -> None:
    """Print the per-entry result lines after an entry finishes."""
    if outcome.failed:
        print_error(outcome.error or "Unknown error")
        return

    action = outcome.entry.action
    if action is ActionKind.MEASURE:
        console.print(f"Number of files: {outcome.files_touched}")
        console.print(f"Total size: {outcome.bytes_touched} bytes")
    elif action is ActionKind.ARCHIVE and outcome.archive_path:
        verb = "Would write" if outcome.dry_run else "Archive written"
        console.print(
            f"[archived]{verb}:[/archived] '{escape(outcome.archive_path)}'", soft_wrap=True
        )


def create_plan_table(
    entries: list[DirectoryEntry],
    archive_jobs: dict[DirectoryEntry, ArchiveJob],
) -> Table:
    """Create a Rich table displaying the dispatch order.

    Args:
        entries: Entries in dispatch order.
        archive_jobs: Archive job per archive entry, used for the destination column.

    Returns:
        Rich Table configured for plan display.
    """
    table = Table(
        title="Run Plan",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("#", justify="right", width=3)
    table.add_column("Action", width=8)
    table.add_column("Path", overflow="fold")
    table.add_column("Subdirs", width=7, justify="center")
    table.add_column("Archive", style="muted", overflow="fold")

    for index, entry in enumerate(entries, start=1):
        style = _ACTION_STYLES[entry.action]
        job = archive_jobs.get(entry)
        table.add_row(
            str(index),
            f"[{style}]{entry.action.value}[/{style}]",
            escape(entry.path),
            "yes" if entry.include_subdirectories else "no",
            escape(str(job.destination_file)) if job else "",
        )

    return table


def create_results_table(report: RunReport) -> Table:
    """Create a Rich table displaying per-entry results.

    Entries that never ran because the run aborted are listed as skipped.

    Args:
        report: Report of a finished run.

    Returns:
        Rich Table configured for results display.
    """
    table = Table(
        title="Results",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Status", width=8, justify="center")
    table.add_column("Action", width=8)
    table.add_column("Path", overflow="fold")
    table.add_column("Files", justify="right")
    table.add_column("Size", justify="right", style="info")

    for outcome in report.outcomes:
        if outcome.failed:
            status = "[error]FAIL[/error]"
        elif outcome.dry_run:
            status = "[info]DRY[/info]"
        else:
            status = "[success]OK[/success]"
        table.add_row(
            status,
            outcome.entry.action.value,
            escape(outcome.entry.path),
            str(outcome.files_touched),
            format_size(outcome.bytes_touched),
        )

    for entry in report.pending:
        table.add_row(
            "[muted]SKIP[/muted]",
            entry.action.value,
            escape(entry.path),
            "-",
            "-",
        )

    return table


def print_run_summary(report: RunReport) -> None:
    """Print a summary of a finished run.

    Args:
        report: Report of a finished run.
    """
    if report.success:
        count = len(report.outcomes)
        noun = "entry" if count == 1 else "entries"
        print_success(f"All {count} {noun} completed successfully.")
        return

    parts = [
        f"[success]{len(report.succeeded)} succeeded[/success]",
        f"[error]{len(report.failed)} failed[/error]",
    ]
    if report.pending:
        parts.append(f"[muted]{len(report.pending)} not run[/muted]")
    console.print(f"\n{', '.join(parts)}")
    if report.aborted:
        console.print("[warning]Run aborted at the first failure.[/warning]")

"""Unit tests for RunReport."""

from dirkeeper.models.entry import ActionKind, DirectoryEntry
from dirkeeper.models.outcome import OperationOutcome
from dirkeeper.models.report import RunReport


def _outcome(
    path: str, files: int = 0, size: int = 0, error: str | None = None
) -> OperationOutcome:
    entry = DirectoryEntry(path=path, action=ActionKind.MEASURE)
    return OperationOutcome(entry=entry, files_touched=files, bytes_touched=size, error=error)


class TestRunReport:
    """Tests for RunReport."""

    def test_empty_report_is_success(self) -> None:
        """A report with nothing dispatched is a success."""
        report = RunReport(timestamp_tag="20240101000000")
        assert report.success is True
        assert report.total_files == 0

    def test_totals(self) -> None:
        """Totals sum over all outcomes."""
        report = RunReport(timestamp_tag="20240101000000")
        report.record(_outcome("/a", files=2, size=10))
        report.record(_outcome("/b", files=3, size=5))

        assert report.total_files == 5
        assert report.total_bytes == 15
        assert len(report.succeeded) == 2

    def test_failure_makes_report_unsuccessful(self) -> None:
        """Any failed outcome fails the report."""
        report = RunReport(timestamp_tag="20240101000000")
        report.record(_outcome("/a"))
        report.record(_outcome("/b", error="boom"))

        assert report.success is False
        assert [o.entry.path for o in report.failed] == ["/b"]

    def test_pending_entries_make_report_unsuccessful(self) -> None:
        """Entries left undispatched fail the report."""
        report = RunReport(timestamp_tag="20240101000000")
        report.pending.append(DirectoryEntry(path="/c", action=ActionKind.PURGE))

        assert report.success is False

    def test_outcome_flags(self) -> None:
        """success and failed mirror the error field."""
        assert _outcome("/a").success is True
        assert _outcome("/a", error="x").failed is True

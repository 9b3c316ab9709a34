"""Run report accumulating per-entry outcomes."""

from dataclasses import dataclass, field

from dirkeeper.models.entry import DirectoryEntry
from dirkeeper.models.outcome import OperationOutcome


@dataclass(slots=True)
class RunReport:
    """Outcomes of one maintenance run, in dispatch order.

    Attributes:
        timestamp_tag: Run identity shared by every archive of the run.
        outcomes: One outcome per dispatched entry.
        pending: Entries never dispatched because the run aborted.
        aborted: Whether the run stopped at a failure.
    """

    timestamp_tag: str
    outcomes: list[OperationOutcome] = field(default_factory=list)
    pending: list[DirectoryEntry] = field(default_factory=list)
    aborted: bool = False

    def record(self, outcome: OperationOutcome) -> None:
        """Append a finalized outcome."""
        self.outcomes.append(outcome)

    @property
    def succeeded(self) -> list[OperationOutcome]:
        return [o for o in self.outcomes if o.success]

    @property
    def failed(self) -> list[OperationOutcome]:
        return [o for o in self.outcomes if o.failed]

    @property
    def success(self) -> bool:
        """True only if every entry was dispatched and none failed."""
        return not self.aborted and not self.pending and not self.failed

    @property
    def total_files(self) -> int:
        return sum(o.files_touched for o in self.outcomes)

    @property
    def total_bytes(self) -> int:
        return sum(o.bytes_touched for o in self.outcomes)

"""Accumulates per-package outcomes into run statistics and the outcome log."""

from c2w.config import logger
from c2w.models import MigrationOutcome, MigrationReport, MigrationStatus, RunStatistics

# WouldMigrate has no counter: a preview changes nothing
STATUS_COUNTERS: dict[MigrationStatus, str] = {
    MigrationStatus.MIGRATED: "migrated",
    MigrationStatus.SKIPPED: "skipped",
    MigrationStatus.NOT_FOUND: "not_found",
    MigrationStatus.FAILED: "failed",
}


class RunAggregator:
    """Owns the statistics and ordered outcome log of one run."""

    def __init__(self, total: int) -> None:
        self._statistics = RunStatistics(total=total)
        self._outcomes: list[MigrationOutcome] = []
        self.cancelled = False

    @property
    def statistics(self) -> RunStatistics:
        return self._statistics.model_copy()

    @property
    def outcomes(self) -> list[MigrationOutcome]:
        return list(self._outcomes)

    def record(self, outcome: MigrationOutcome) -> None:
        """Append an outcome and bump the counter matching its status."""
        if self.cancelled:
            msg = "Cannot record outcomes after the run was cancelled"
            raise RuntimeError(msg)

        counter = STATUS_COUNTERS.get(outcome.status)
        if counter is not None:
            setattr(self._statistics, counter, getattr(self._statistics, counter) + 1)
        self._outcomes.append(outcome)

    def cancel(self) -> None:
        """Mark the run as stopped by the operator."""
        self.cancelled = True
        logger.warning(
            "Run cancelled after %d of %d packages",
            len(self._outcomes),
            self._statistics.total,
        )

    def build_report(self, dry_run: bool) -> MigrationReport:
        """Return the report for everything recorded so far."""
        return MigrationReport(
            dry_run=dry_run,
            statistics=self.statistics,
            outcomes=self.outcomes,
        )

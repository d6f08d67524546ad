"""
Run-level report models for the migration.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from c2w.models.migration_outcome import MigrationOutcome

REPORT_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class RunStatistics(BaseModel):
    """Counters for one run; only the aggregator mutates these."""

    model_config = ConfigDict(populate_by_name=True)

    total: int = Field(default=0, alias="Total")
    migrated: int = Field(default=0, alias="Migrated")
    skipped: int = Field(default=0, alias="Skipped")
    not_found: int = Field(default=0, alias="NotFound")
    failed: int = Field(default=0, alias="Failed")

    @property
    def processed(self) -> int:
        return self.migrated + self.skipped + self.not_found + self.failed


class MigrationReport(BaseModel):
    """Represents the overall result of a migration run."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    timestamp: str = Field(
        default_factory=lambda: datetime.now().strftime(REPORT_TIMESTAMP_FORMAT),
        alias="Timestamp",
    )
    dry_run: bool = Field(default=False, alias="DryRun")
    statistics: RunStatistics = Field(default_factory=RunStatistics, alias="Statistics")
    outcomes: list[MigrationOutcome] = Field(default_factory=list, alias="Packages")

    def to_document(self) -> dict[str, Any]:
        """Return the report in its persisted shape.

        Field names are the aliases; ``WingetId`` is left out when a package
        has no target id.
        """
        document = self.model_dump(by_alias=True, mode="json")
        for package in document["Packages"]:
            if package.get("WingetId") is None:
                package.pop("WingetId", None)
        return document

"""Models package for data structures used in the application."""

from c2w.models.catalog_match import CatalogMatch
from c2w.models.migration_error import MigrationError, PrerequisiteError
from c2w.models.migration_outcome import MigrationOutcome, MigrationStatus
from c2w.models.migration_report import MigrationReport, RunStatistics

__all__ = [
    "CatalogMatch",
    "MigrationError",
    "MigrationOutcome",
    "MigrationReport",
    "MigrationStatus",
    "PrerequisiteError",
    "RunStatistics",
]

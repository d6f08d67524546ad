"""Per-package outcome models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MigrationStatus(str, Enum):
    """Terminal status of one package in a run."""

    MIGRATED = "Migrated"
    SKIPPED = "Skipped"
    NOT_FOUND = "NotFound"
    FAILED = "Failed"
    WOULD_MIGRATE = "WouldMigrate"


class MigrationOutcome(BaseModel):
    """Represents the single, immutable outcome recorded for one package."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    package: str = Field(alias="Package")
    target_id: str | None = Field(default=None, alias="WingetId")
    status: MigrationStatus = Field(alias="Status")
    reason: str = Field(alias="Reason")

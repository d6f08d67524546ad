"""Runs a complete Chocolatey to winget migration.

Lists the installed Chocolatey packages, feeds them through the migration
engine and persists the resulting report.
"""

from collections.abc import Collection
from datetime import datetime
from pathlib import Path

from c2w import config
from c2w.clients import ChocolateyClient, CommandRunner, WingetClient
from c2w.clients.exceptions import ClientError
from c2w.display import ProgressTracker, console, prompt_confirmation
from c2w.engine import Confirmer, ConfirmationMode, MigrationEngine
from c2w.models import MigrationError, MigrationOutcome, MigrationReport
from c2w.normalizer import parse_installed_packages
from c2w.utils import data_handler

logger = config.logger


def resolve_mode(auto_accept: bool, dry_run: bool) -> ConfirmationMode:
    """Pick the confirmation mode; a preview never executes, even with auto-accept."""
    if dry_run:
        return ConfirmationMode.PREVIEW
    if auto_accept:
        return ConfirmationMode.AUTO
    return ConfirmationMode.INTERACTIVE


def build_clients(runner: CommandRunner) -> tuple[ChocolateyClient, WingetClient]:
    """Create both package-manager clients from the loaded configuration."""
    choco = ChocolateyClient(
        runner,
        executable=config.choco_config.get("executable", "choco"),
        list_args=config.choco_config.get("list_args"),
    )
    winget = WingetClient(
        runner,
        executable=config.winget_config.get("executable", "winget"),
        source=config.winget_config.get("source"),
    )
    return choco, winget


def default_report_path() -> Path:
    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    return config.get_path("results") / f"migration_report_{timestamp}.json"


def run_migration(
    choco: ChocolateyClient,
    winget: WingetClient,
    mode: ConfirmationMode,
    skip_packages: Collection[str] = (),
    confirm: Confirmer | None = None,
    progress: bool = True,
) -> MigrationReport:
    """Migrate every installed Chocolatey package that winget provides.

    Args:
        choco: Source manager client
        winget: Target manager client
        mode: Confirmation mode for the run
        skip_packages: Package names that must not be migrated
        confirm: Prompt for interactive mode (defaults to the console prompt)
        progress: Show a live progress display in non-interactive modes

    Returns:
        The run report, partial if the operator quit

    Raises:
        MigrationError: If the installed packages cannot be listed

    """
    try:
        listing = choco.list_installed()
    except ClientError as e:
        msg = f"Could not list installed Chocolatey packages: {e}"
        raise MigrationError(msg) from e

    packages = parse_installed_packages(listing)
    logger.info("Found %d installed Chocolatey packages", len(packages))

    if mode is ConfirmationMode.INTERACTIVE and confirm is None:
        confirm = prompt_confirmation

    engine = MigrationEngine(
        source=choco,
        target=winget,
        mode=mode,
        skip_packages=skip_packages,
        confirm=confirm,
    )

    if mode is ConfirmationMode.PREVIEW:
        logger.notice("Dry run: no packages will be changed")

    # The live display would fight with interactive prompts
    if progress and mode is not ConfirmationMode.INTERACTIVE and packages:
        with ProgressTracker("Migrating packages", total=len(packages)) as tracker:

            def _track(outcome: MigrationOutcome) -> None:
                tracker.add_log_item(f"{outcome.package}: {outcome.status.value}")
                tracker.increment()

            report = engine.run(packages, on_outcome=_track)
    else:
        report = engine.run(packages)

    stats = report.statistics
    logger.info(
        "Run finished: %d total, %d migrated, %d skipped, %d not found, %d failed",
        stats.total,
        stats.migrated,
        stats.skipped,
        stats.not_found,
        stats.failed,
    )
    return report


def save_report(report: MigrationReport, path: Path | str | None = None) -> Path | None:
    """Write the report as JSON.

    A write failure is logged as a warning and does not raise.

    Returns:
        The written path, or None if writing failed

    """
    target = Path(path) if path else default_report_path()
    try:
        written = data_handler.save(report.to_document(), target)
    except MigrationError as e:
        logger.warning("Could not write migration report: %s", e)
        return None

    console.print(f"Report saved to [bold]{written}[/bold]")
    return written

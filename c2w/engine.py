"""Migration engine: moves one installed package from Chocolatey to winget.

Each package goes through the same decisions:

    skip list? -> catalog search -> confirmation -> uninstall -> install
                                                          \\-> rollback on failure

and ends with exactly one MigrationOutcome. The engine never lets an error
from a single package escape; only the operator's ``quit`` answer stops the
run early.
"""

from collections.abc import Callable, Collection, Iterable
from enum import Enum
from typing import Protocol

from c2w.aggregator import RunAggregator
from c2w.config import logger
from c2w.matcher import CatalogMatcher, CatalogSearch
from c2w.models import CatalogMatch, MigrationOutcome, MigrationReport, MigrationStatus
from c2w.type_definitions import InstalledPackage

REASON_SKIP_LISTED = "in skip list"
REASON_NOT_FOUND = "not found in winget"
REASON_DECLINED = "user declined"
REASON_PREVIEW = "would migrate (dry run)"
REASON_UNINSTALL_FAILED = "source uninstall failed"
REASON_SUCCESS = "success"
REASON_ROLLED_BACK = "install failed, rolled back"
REASON_ROLLBACK_FAILED = "install failed, rollback failed - manual intervention required"


class ConfirmationMode(Enum):
    """How found packages are confirmed; fixed for the whole run."""

    AUTO = "auto"
    PREVIEW = "preview"
    INTERACTIVE = "interactive"


class Confirmation(Enum):
    """Operator answer for one package in interactive mode."""

    YES = "yes"
    NO = "no"
    QUIT = "quit"


type Confirmer = Callable[[str, CatalogMatch], Confirmation]
type OutcomeCallback = Callable[[MigrationOutcome], None]


class SourceManager(Protocol):
    """The package manager packages are migrated away from."""

    def uninstall(self, name: str) -> bool: ...

    def install(self, name: str, version: str | None = None) -> bool: ...


class TargetManager(CatalogSearch, Protocol):
    """The package manager packages are migrated to."""

    def install(self, target: str, exact: bool = True) -> bool: ...


class MigrationEngine:
    """Drives packages through the migration decisions one at a time."""

    def __init__(
        self,
        source: SourceManager,
        target: TargetManager,
        mode: ConfirmationMode,
        skip_packages: Collection[str] = (),
        confirm: Confirmer | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            source: Source manager used for uninstall and rollback
            target: Target manager used for search and install
            mode: Confirmation mode for the whole run
            skip_packages: Normalized names that are never migrated (case-sensitive)
            confirm: Prompt used in interactive mode

        Raises:
            ValueError: If interactive mode is requested without a prompt

        """
        if mode is ConfirmationMode.INTERACTIVE and confirm is None:
            msg = "Interactive mode requires a confirmation prompt"
            raise ValueError(msg)

        self.source = source
        self.target = target
        self.matcher = CatalogMatcher(target)
        self.mode = mode
        self.skip_packages = frozenset(skip_packages)
        self.confirm = confirm

    @property
    def dry_run(self) -> bool:
        return self.mode is ConfirmationMode.PREVIEW

    def migrate_package(self, package: InstalledPackage) -> MigrationOutcome | None:
        """Process one package and return its outcome.

        Returns:
            The package's outcome, or None when the operator chose to quit.
            No outcome is recorded for the package in that case.

        """
        name = package.name

        if name in self.skip_packages:
            logger.info("Skipping %s: in skip list", name)
            return self._outcome(name, MigrationStatus.SKIPPED, REASON_SKIP_LISTED)

        match = self.matcher.find(name)
        if not match.found:
            logger.info("%s not found in winget", name)
            return self._outcome(name, MigrationStatus.NOT_FOUND, REASON_NOT_FOUND)

        target = match.install_target(name)

        if self.mode is ConfirmationMode.PREVIEW:
            logger.info("Would migrate %s -> %s", name, target)
            return self._outcome(name, MigrationStatus.WOULD_MIGRATE, REASON_PREVIEW, target)

        if self.mode is ConfirmationMode.INTERACTIVE:
            answer = self.confirm(name, match)  # type: ignore[misc]
            if answer is Confirmation.QUIT:
                logger.warning("Migration cancelled by user at %s", name)
                return None
            if answer is Confirmation.NO:
                logger.info("Skipping %s: declined", name)
                return self._outcome(name, MigrationStatus.SKIPPED, REASON_DECLINED, target)

        return self._execute(package, match)

    def _execute(self, package: InstalledPackage, match: CatalogMatch) -> MigrationOutcome:
        name = package.name
        target = match.install_target(name)

        logger.info("Uninstalling %s from Chocolatey", name)
        try:
            uninstalled = self.source.uninstall(name)
        except Exception as e:  # noqa: BLE001
            logger.error("Uninstall of %s raised: %s", name, e)
            uninstalled = False
        if not uninstalled:
            logger.error("Failed to uninstall %s from Chocolatey", name)
            return self._outcome(name, MigrationStatus.FAILED, REASON_UNINSTALL_FAILED, target)

        logger.info("Installing %s with winget", target)
        try:
            installed = self.target.install(target, exact=match.id is not None)
        except Exception as e:  # noqa: BLE001
            logger.error("winget install of %s raised: %s", target, e)
            installed = False
        if installed:
            logger.success("Migrated %s -> %s", name, target)
            return self._outcome(name, MigrationStatus.MIGRATED, REASON_SUCCESS, target)

        return self._rollback(package, target)

    def _rollback(self, package: InstalledPackage, target: str) -> MigrationOutcome:
        name = package.name
        logger.warning("winget install of %s failed, reinstalling %s with Chocolatey", target, name)
        try:
            restored = self.source.install(name, version=package.version)
        except Exception as e:  # noqa: BLE001
            logger.error("Rollback of %s raised: %s", name, e)
            restored = False

        if restored:
            logger.warning("Rolled back %s", name)
            return self._outcome(name, MigrationStatus.FAILED, REASON_ROLLED_BACK, target)

        logger.error("Rollback of %s failed; reinstall it manually", name)
        return self._outcome(name, MigrationStatus.FAILED, REASON_ROLLBACK_FAILED, target)

    def _outcome(
        self,
        name: str,
        status: MigrationStatus,
        reason: str,
        target_id: str | None = None,
    ) -> MigrationOutcome:
        return MigrationOutcome(package=name, target_id=target_id, status=status, reason=reason)

    def run(
        self,
        packages: Iterable[InstalledPackage],
        on_outcome: OutcomeCallback | None = None,
    ) -> MigrationReport:
        """Process packages strictly in order and return the run report.

        A ``quit`` answer stops the loop before the current package is
        executed; the report then holds only the outcomes recorded so far.
        """
        packages = list(packages)
        aggregator = RunAggregator(total=len(packages))

        for package in packages:
            outcome = self.migrate_package(package)
            if outcome is None:
                aggregator.cancel()
                break
            aggregator.record(outcome)
            if on_outcome is not None:
                on_outcome(outcome)

        return aggregator.build_report(dry_run=self.dry_run)

"""Tests for the per-package migration state machine."""

from unittest.mock import MagicMock

import pytest

from c2w.engine import (
    REASON_DECLINED,
    REASON_NOT_FOUND,
    REASON_ROLLBACK_FAILED,
    REASON_ROLLED_BACK,
    REASON_SKIP_LISTED,
    REASON_SUCCESS,
    REASON_UNINSTALL_FAILED,
    Confirmation,
    ConfirmationMode,
    MigrationEngine,
)
from c2w.models import CatalogMatch, MigrationStatus
from c2w.type_definitions import InstalledPackage
from tests.utils.mock_factory import create_mock_choco_client, create_mock_winget_client


def _package(name: str, version: str | None = "1.0") -> InstalledPackage:
    return InstalledPackage(name=name, version=version, raw=f"{name} {version}")


@pytest.fixture
def choco():
    return create_mock_choco_client()


@pytest.fixture
def winget():
    return create_mock_winget_client({"7zip": "7zip.7zip", "git": "Git.Git"})


@pytest.mark.unit
def test_skip_listed_package_is_not_searched(choco, winget) -> None:
    engine = MigrationEngine(choco, winget, ConfirmationMode.AUTO, skip_packages={"7zip"})

    outcome = engine.migrate_package(_package("7zip"))

    assert outcome.status is MigrationStatus.SKIPPED
    assert outcome.reason == REASON_SKIP_LISTED
    winget.search.assert_not_called()
    choco.uninstall.assert_not_called()


@pytest.mark.unit
def test_skip_list_is_case_sensitive(choco, winget) -> None:
    engine = MigrationEngine(choco, winget, ConfirmationMode.AUTO, skip_packages={"7Zip"})

    outcome = engine.migrate_package(_package("7zip"))

    assert outcome.status is MigrationStatus.MIGRATED
    winget.search.assert_called_once_with("7zip")


@pytest.mark.unit
def test_not_found_invokes_no_tools(choco, winget) -> None:
    engine = MigrationEngine(choco, winget, ConfirmationMode.AUTO)

    outcome = engine.migrate_package(_package("vlc"))

    assert outcome.status is MigrationStatus.NOT_FOUND
    assert outcome.reason == REASON_NOT_FOUND
    assert outcome.target_id is None
    assert choco.uninstall.call_count == 0
    assert choco.install.call_count == 0
    assert winget.install.call_count == 0


@pytest.mark.unit
def test_auto_mode_migrates_with_catalog_id(choco, winget) -> None:
    engine = MigrationEngine(choco, winget, ConfirmationMode.AUTO)

    outcome = engine.migrate_package(_package("7zip", "19.00"))

    assert outcome.status is MigrationStatus.MIGRATED
    assert outcome.reason == REASON_SUCCESS
    assert outcome.target_id == "7zip.7zip"
    choco.uninstall.assert_called_once_with("7zip")
    winget.install.assert_called_once_with("7zip.7zip", exact=True)
    choco.install.assert_not_called()


@pytest.mark.unit
def test_missing_catalog_id_installs_by_name(choco, winget) -> None:
    engine = MigrationEngine(choco, winget, ConfirmationMode.AUTO)
    engine.matcher.find = MagicMock(return_value=CatalogMatch(found=True, display_name="PuTTY"))

    outcome = engine.migrate_package(_package("putty"))

    assert outcome.status is MigrationStatus.MIGRATED
    assert outcome.target_id == "putty"
    winget.install.assert_called_once_with("putty", exact=False)


@pytest.mark.unit
def test_preview_records_would_migrate_and_executes_nothing(choco, winget) -> None:
    engine = MigrationEngine(choco, winget, ConfirmationMode.PREVIEW)

    outcome = engine.migrate_package(_package("7zip"))

    assert outcome.status is MigrationStatus.WOULD_MIGRATE
    assert outcome.target_id == "7zip.7zip"
    choco.uninstall.assert_not_called()
    winget.install.assert_not_called()
    choco.install.assert_not_called()


@pytest.mark.unit
def test_interactive_requires_prompt(choco, winget) -> None:
    with pytest.raises(ValueError, match="confirmation prompt"):
        MigrationEngine(choco, winget, ConfirmationMode.INTERACTIVE)


@pytest.mark.unit
def test_interactive_decline_skips(choco, winget) -> None:
    confirm = MagicMock(return_value=Confirmation.NO)
    engine = MigrationEngine(choco, winget, ConfirmationMode.INTERACTIVE, confirm=confirm)

    outcome = engine.migrate_package(_package("7zip"))

    assert outcome.status is MigrationStatus.SKIPPED
    assert outcome.reason == REASON_DECLINED
    confirm.assert_called_once()
    assert confirm.call_args.args[0] == "7zip"
    assert confirm.call_args.args[1].id == "7zip.7zip"
    choco.uninstall.assert_not_called()


@pytest.mark.unit
def test_interactive_yes_executes(choco, winget) -> None:
    confirm = MagicMock(return_value=Confirmation.YES)
    engine = MigrationEngine(choco, winget, ConfirmationMode.INTERACTIVE, confirm=confirm)

    outcome = engine.migrate_package(_package("7zip"))

    assert outcome.status is MigrationStatus.MIGRATED


@pytest.mark.unit
def test_interactive_quit_returns_no_outcome(choco, winget) -> None:
    confirm = MagicMock(return_value=Confirmation.QUIT)
    engine = MigrationEngine(choco, winget, ConfirmationMode.INTERACTIVE, confirm=confirm)

    assert engine.migrate_package(_package("7zip")) is None
    choco.uninstall.assert_not_called()


@pytest.mark.unit
def test_prompt_not_shown_for_not_found_packages(choco, winget) -> None:
    confirm = MagicMock(return_value=Confirmation.YES)
    engine = MigrationEngine(choco, winget, ConfirmationMode.INTERACTIVE, confirm=confirm)

    engine.migrate_package(_package("vlc"))

    confirm.assert_not_called()


@pytest.mark.unit
def test_uninstall_failure_does_not_roll_back(winget) -> None:
    choco = create_mock_choco_client(uninstall_ok=False)
    engine = MigrationEngine(choco, winget, ConfirmationMode.AUTO)

    outcome = engine.migrate_package(_package("7zip"))

    assert outcome.status is MigrationStatus.FAILED
    assert outcome.reason == REASON_UNINSTALL_FAILED
    winget.install.assert_not_called()
    choco.install.assert_not_called()


@pytest.mark.unit
def test_uninstall_exception_is_a_failed_outcome(choco, winget) -> None:
    choco.uninstall.side_effect = OSError("access denied")
    engine = MigrationEngine(choco, winget, ConfirmationMode.AUTO)

    outcome = engine.migrate_package(_package("7zip"))

    assert outcome.status is MigrationStatus.FAILED
    assert outcome.reason == REASON_UNINSTALL_FAILED
    choco.install.assert_not_called()


@pytest.mark.unit
def test_install_failure_rolls_back_once_with_original_name(choco) -> None:
    winget = create_mock_winget_client({"7zip": "7zip.7zip"}, install_ok=False)
    engine = MigrationEngine(choco, winget, ConfirmationMode.AUTO)

    outcome = engine.migrate_package(_package("7zip", "19.00"))

    assert outcome.status is MigrationStatus.FAILED
    assert outcome.reason == REASON_ROLLED_BACK
    choco.install.assert_called_once_with("7zip", version="19.00")


@pytest.mark.unit
def test_rollback_failure_is_still_failed_with_distinct_reason() -> None:
    choco = create_mock_choco_client(install_ok=False)
    winget = create_mock_winget_client({"7zip": "7zip.7zip"}, install_ok=False)
    engine = MigrationEngine(choco, winget, ConfirmationMode.AUTO)

    outcome = engine.migrate_package(_package("7zip"))

    assert outcome.status is MigrationStatus.FAILED
    assert outcome.reason == REASON_ROLLBACK_FAILED
    assert choco.install.call_count == 1


@pytest.mark.unit
def test_install_exception_triggers_rollback(choco, winget) -> None:
    winget.install.side_effect = RuntimeError("installer crashed")
    choco.install.side_effect = RuntimeError("still broken")
    engine = MigrationEngine(choco, winget, ConfirmationMode.AUTO)

    outcome = engine.migrate_package(_package("git"))

    assert outcome.status is MigrationStatus.FAILED
    assert outcome.reason == REASON_ROLLBACK_FAILED
    choco.install.assert_called_once_with("git", version="1.0")


@pytest.mark.unit
def test_run_stops_at_quit_and_keeps_earlier_outcomes(choco, winget) -> None:
    answers = iter([Confirmation.YES, Confirmation.QUIT, Confirmation.YES])
    engine = MigrationEngine(
        choco,
        winget,
        ConfirmationMode.INTERACTIVE,
        confirm=lambda name, match: next(answers),
    )

    report = engine.run([_package("7zip"), _package("git"), _package("7zip")])

    assert [o.package for o in report.outcomes] == ["7zip"]
    assert report.statistics.total == 3
    assert report.statistics.migrated == 1
    assert report.statistics.processed == 1
    assert choco.uninstall.call_count == 1


@pytest.mark.unit
def test_run_calls_outcome_callback_in_order(choco, winget) -> None:
    seen = []
    engine = MigrationEngine(choco, winget, ConfirmationMode.AUTO)

    report = engine.run(
        [_package("vlc"), _package("7zip")],
        on_outcome=lambda outcome: seen.append(outcome.package),
    )

    assert seen == ["vlc", "7zip"]
    assert [o.status for o in report.outcomes] == [
        MigrationStatus.NOT_FOUND,
        MigrationStatus.MIGRATED,
    ]
    assert not report.dry_run

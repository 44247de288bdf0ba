"""Unit tests for the sprintsync CLI."""

from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from sprintsync.cli import main
from sprintsync.resolver import SprintDates
from sprintsync.updater import DateUpdate

ENV = {
    "JIRA_BASE_URL": "https://example.atlassian.net",
    "JIRA_USER_ID": "bot@example.com",
    "JIRA_ACCESS_TOKEN": "secret",
}

DATES = SprintDates(start="2024-01-01", end="2024-01-14", sprint_id=2)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.mark.unit
class TestResolveCommand:
    """Tests for `sprintsync resolve`."""

    def test_prints_dates(self, runner: CliRunner) -> None:
        resolver = MagicMock()
        resolver.resolve.return_value = DATES

        with patch("sprintsync.cli.create_resolver", return_value=resolver) as factory:
            result = runner.invoke(main, ["resolve", "PROJ-5"], env=ENV)

        assert result.exit_code == 0
        assert "PROJ-5: start 2024-01-01, due 2024-01-14 (sprint 2)" in result.output
        assert factory.call_args.args[1] == "issue"

    def test_strategy_option(self, runner: CliRunner) -> None:
        resolver = MagicMock()
        resolver.resolve.return_value = DATES

        with patch("sprintsync.cli.create_resolver", return_value=resolver) as factory:
            runner.invoke(main, ["resolve", "PROJ-5", "--strategy", "board"], env=ENV)

        assert factory.call_args.args[1] == "board"

    def test_no_dates_exits_nonzero(self, runner: CliRunner) -> None:
        resolver = MagicMock()
        resolver.resolve.return_value = None

        with patch("sprintsync.cli.create_resolver", return_value=resolver):
            result = runner.invoke(main, ["resolve", "PROJ-5"], env=ENV)

        assert result.exit_code == 1

    def test_missing_config_exits_nonzero(self, runner: CliRunner) -> None:
        result = runner.invoke(
            main, ["resolve", "PROJ-5"], env={"JIRA_BASE_URL": "", "JIRA_ACCESS_TOKEN": ""}
        )

        assert result.exit_code == 1
        assert "Configuration error" in result.output


@pytest.mark.unit
class TestSyncCommand:
    """Tests for `sprintsync sync`."""

    def test_writes_dates(self, runner: CliRunner) -> None:
        resolver = MagicMock()
        resolver.resolve.return_value = DATES
        updater = MagicMock()
        updater.apply_dates.return_value = DateUpdate(
            issue_key="PROJ-5", fields={"duedate": "2024-01-14"}, success=True
        )

        with (
            patch("sprintsync.cli.create_resolver", return_value=resolver),
            patch("sprintsync.cli.FieldUpdater", return_value=updater),
        ):
            result = runner.invoke(main, ["sync", "PROJ-5"], env=ENV)

        assert result.exit_code == 0
        assert "duedate = 2024-01-14" in result.output
        updater.apply_dates.assert_called_once_with("PROJ-5", DATES)

    def test_failed_write_exits_nonzero(self, runner: CliRunner) -> None:
        resolver = MagicMock()
        resolver.resolve.return_value = DATES
        updater = MagicMock()
        updater.apply_dates.return_value = DateUpdate(issue_key="PROJ-5", success=False)

        with (
            patch("sprintsync.cli.create_resolver", return_value=resolver),
            patch("sprintsync.cli.FieldUpdater", return_value=updater),
        ):
            result = runner.invoke(main, ["sync", "PROJ-5"], env=ENV)

        assert result.exit_code == 1

"""Tests for the qgh command line entry point."""
from types import SimpleNamespace
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from qgh import cli
from qgh.github import GhClient
from qgh.state import View

from .conftest import FRONTEND_URL, make_repo


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("QGH_CONFIG", str(tmp_path / "no-config.json"))
    monkeypatch.delenv("QGH_WORKSPACE", raising=False)
    return tmp_path


@pytest.fixture
def mock_find(repos):
    with patch("qgh.cli.find_repositories", return_value=repos) as mock:
        yield mock


class TestNonInteractive:

    def test_prints_table(self, runner, mock_find, cache):
        with patch.object(GhClient, "load_pr_cache", return_value=cache):
            result = runner.invoke(cli.main, [])
        assert result.exit_code == 0
        assert "DIRECTORY" in result.output
        assert "frontend" in result.output
        assert "Yes" in result.output
        assert "No" in result.output

    def test_skip_ignore_flag(self, runner, mock_find, cache, isolated):
        with patch.object(GhClient, "load_pr_cache", return_value=cache):
            runner.invoke(cli.main, ["--skip-ignore"])
        mock_find.assert_called_once_with(isolated.resolve(), skip_ignore=True)

    def test_no_repositories(self, runner):
        with patch("qgh.cli.find_repositories", return_value=[]):
            result = runner.invoke(cli.main, [])
        assert result.exit_code == 0
        assert "No git repositories found in subdirectories." in result.output

    def test_version(self, runner):
        result = runner.invoke(cli.main, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestInteractive:

    @pytest.fixture(autouse=True)
    def tty(self):
        with patch("qgh.cli.is_interactive", return_value=True), \
                patch.object(GhClient, "check_auth", return_value=True) as mock_auth:
            yield mock_auth

    def test_search_argument_seeds_the_list(self, runner, mock_find, tty):
        with patch("qgh.cli.RepoExplorerApp") as mock_app, patch("qgh.cli.run_interactive"):
            result = runner.invoke(cli.main, ["--pr", "review"])
        assert result.exit_code == 0
        state = mock_app.call_args[0][0]
        assert state.search_text == "review"
        assert state.pr_mode is True
        assert state.view is View.LIST
        tty.assert_called_once()

    def test_inside_leaf_repository_opens_detail(self, runner, isolated):
        (isolated / ".git").mkdir()
        repo = make_repo(str(isolated), FRONTEND_URL)
        with patch("qgh.cli.find_repositories", return_value=[]), \
                patch("qgh.cli.repository_info", return_value=repo), \
                patch("qgh.cli.RepoExplorerApp") as mock_app, \
                patch("qgh.cli.run_interactive"):
            result = runner.invoke(cli.main, [])
        assert result.exit_code == 0
        state = mock_app.call_args[0][0]
        assert state.view is View.DETAIL
        assert state.detail.initial


class TestCdHandoff:

    def test_writes_path(self, tmp_path):
        target = tmp_path / "qgh_cd"
        with patch("qgh.cli.CD_HANDOFF_FILE", target):
            assert cli.write_cd_handoff("/work/frontend")
        assert target.read_text() == "/work/frontend"

    def test_write_failure(self, tmp_path):
        with patch("qgh.cli.CD_HANDOFF_FILE", tmp_path / "missing" / "qgh_cd"), \
                patch("qgh.cli.logger.error") as mock_error:
            assert not cli.write_cd_handoff("/work/frontend")
        mock_error.assert_called_once()

    def test_run_interactive_exits_on_failure(self, tmp_path):
        app = SimpleNamespace(run=lambda: None, pending_cd="/work/frontend")
        with patch("qgh.cli.CD_HANDOFF_FILE", tmp_path / "missing" / "qgh_cd"), \
                patch("qgh.cli.logger.error"):
            with pytest.raises(SystemExit) as exc:
                cli.run_interactive(app)
        assert exc.value.code == 1

    def test_run_interactive_without_cd(self, tmp_path):
        target = tmp_path / "qgh_cd"
        app = SimpleNamespace(run=lambda: None, pending_cd=None)
        with patch("qgh.cli.CD_HANDOFF_FILE", target):
            cli.run_interactive(app)
        assert not target.exists()


class TestSetupLogging:

    def test_debug_level(self):
        cli.setup_logging(debug=True)
        assert cli.logger.level == 10
        cli.setup_logging(debug=False)
        assert cli.logger.level == 30
        assert len(cli.logger.handlers) == 1

"""Tests for goto_core.cli — the goto entry point."""

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from goto_core.cli import cli
from goto_core.launcher import ConfigurationError, LaunchError, ShellResolutionError
from goto_core.tui.app import MenuError, UserCancellation


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "conf" / ".goto.yaml"
    path.parent.mkdir()
    path.write_text(
        "shell: /bin/sh\n"
        "startInSearchMode: true\n"
        "commands:\n"
        "  - name: first\n"
        "    cmd: echo one\n"
        "  - name: second\n"
        "    color: '0;255;0'\n"
        "    cmd: echo two\n"
    )
    return path


class TestInfoFlags:
    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "goto, version 0.0.1" in result.output

    def test_help(self, runner):
        result = runner.invoke(cli, ["-h"])
        assert result.exit_code == 0
        assert "interactive command-line tool" in result.output
        assert "--config" in result.output

    def test_doc_commands_hidden_from_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert "gen-man" not in result.output
        assert "gen-markdown" not in result.output


class TestDefaultAction:
    @patch("goto_core.cli.launch", return_value=0)
    @patch("goto_core.cli.select", return_value=1)
    def test_selects_and_launches(self, mock_select, mock_launch, runner, config_path):
        result = runner.invoke(cli, ["-c", str(config_path)])

        assert result.exit_code == 0, result.output
        entries, search_mode = mock_select.call_args.args
        assert [e.name for e in entries] == ["first", "second"]
        assert search_mode is True
        entry, conf = mock_launch.call_args.args
        assert entry.name == "second"
        assert conf.default_shell == "/bin/sh"
        assert "Going to second" in result.output

    @patch("goto_core.cli.launch", return_value=0)
    @patch("goto_core.cli.select", return_value=0)
    def test_config_from_env(self, mock_select, mock_launch, runner, config_path):
        result = runner.invoke(cli, [], env={"GOTO_CONFIG": str(config_path)})
        assert result.exit_code == 0, result.output
        assert mock_launch.call_args.args[0].name == "first"

    @patch("goto_core.cli.launch", return_value=0)
    @patch("goto_core.cli.select", return_value=0)
    def test_first_run_creates_config(self, mock_select, mock_launch, runner, goto_home):
        result = runner.invoke(cli, [])
        assert result.exit_code == 0, result.output
        assert (goto_home / ".goto.yaml").exists()
        assert mock_launch.call_args.args[0].name == "Help"

    @patch("goto_core.cli.launch", return_value=7)
    @patch("goto_core.cli.select", return_value=0)
    def test_child_exit_code_propagates(self, mock_select, mock_launch, runner, config_path):
        result = runner.invoke(cli, ["-c", str(config_path)])
        assert result.exit_code == 7

    @patch("goto_core.cli.launch")
    @patch("goto_core.cli.select", side_effect=UserCancellation())
    def test_cancel_is_quiet(self, mock_select, mock_launch, runner, config_path):
        result = runner.invoke(cli, ["-c", str(config_path)])
        assert result.exit_code == 0
        assert "Error" not in result.output
        mock_launch.assert_not_called()


class TestErrors:
    @patch("goto_core.cli.launch")
    @patch("goto_core.cli.select", side_effect=MenuError("menu exited abnormally (code 1)"))
    def test_menu_crash_exits_nonzero(self, mock_select, mock_launch, runner, config_path):
        result = runner.invoke(cli, ["-c", str(config_path)])
        assert result.exit_code == 1
        assert "Error: menu exited abnormally" in result.output
        mock_launch.assert_not_called()

    @patch("goto_core.cli.select")
    def test_bad_config(self, mock_select, runner, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("commands: [oops\n")
        result = runner.invoke(cli, ["-c", str(path)])
        assert result.exit_code == 1
        assert "Error: cannot parse" in result.output
        mock_select.assert_not_called()

    @pytest.mark.parametrize("error", [
        ConfigurationError("command first is empty"),
        ShellResolutionError("Cannot determine your login shell."),
        LaunchError("nope: executable file not found in $PATH"),
    ])
    @patch("goto_core.cli.select", return_value=0)
    def test_launch_errors_exit_nonzero(self, mock_select, runner, config_path, error):
        with patch("goto_core.cli.launch", side_effect=error):
            result = runner.invoke(cli, ["-c", str(config_path)])
        assert result.exit_code == 1
        assert f"Error: {error}" in result.output

    @patch("goto_core.cli.select", return_value=0)
    def test_empty_command_end_to_end(self, mock_select, runner, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("commands:\n  - name: blank\n    cmd: '   '\n")
        with patch("os.execve") as mock_execve, patch("subprocess.run") as mock_run:
            result = runner.invoke(cli, ["-c", str(path)])
        assert result.exit_code == 1
        assert "command blank is empty" in result.output
        mock_execve.assert_not_called()
        mock_run.assert_not_called()


class TestDocCommands:
    def test_gen_markdown(self, runner, tmp_path):
        out = tmp_path / "docs"
        result = runner.invoke(cli, ["gen-markdown", str(out)])
        assert result.exit_code == 0, result.output
        assert (out / "goto.md").exists()

    def test_gen_man(self, runner, tmp_path):
        out = tmp_path / "man"
        result = runner.invoke(cli, ["gen-man", str(out)])
        assert result.exit_code == 0, result.output
        assert (out / "goto.1").exists()

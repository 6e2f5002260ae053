"""Unit tests for shell execution utilities."""

from unittest.mock import MagicMock, patch

from pacup.utils.shell import CommandResult, command_exists, run_command, run_interactive


class TestCommandResult:
    """Tests for CommandResult."""

    def test_success(self) -> None:
        """Only exit code 0 is success."""
        assert CommandResult(stdout="", stderr="", returncode=0).success is True
        assert CommandResult(stdout="", stderr="", returncode=1).success is False


class TestRunCommand:
    """Tests for run_command function."""

    @patch("pacup.utils.shell.subprocess.run")
    def test_captures_output(self, mock_run: MagicMock) -> None:
        """run_command returns captured stdout and stderr."""
        mock_run.return_value = MagicMock(stdout="out", stderr="err", returncode=3)

        result = run_command(["pacman", "-Q"])

        assert result == CommandResult(stdout="out", stderr="err", returncode=3)
        assert mock_run.call_args.kwargs["capture_output"] is True
        assert mock_run.call_args.kwargs["env"] is None

    @patch("pacup.utils.shell.subprocess.run")
    def test_merges_env(self, mock_run: MagicMock) -> None:
        """Extra variables are merged over the current environment."""
        mock_run.return_value = MagicMock(stdout="", stderr="", returncode=0)

        with patch.dict("os.environ", {"HOME": "/home/test"}):
            run_command(["pacman", "-Q"], env={"LC_ALL": "C"})

        env = mock_run.call_args.kwargs["env"]
        assert env["LC_ALL"] == "C"
        assert env["HOME"] == "/home/test"


class TestRunInteractive:
    """Tests for run_interactive function."""

    @patch("pacup.utils.shell.subprocess.run")
    def test_returns_exit_code(self, mock_run: MagicMock) -> None:
        """run_interactive returns the subprocess exit code."""
        mock_run.return_value = MagicMock(returncode=1)

        assert run_interactive(["false"]) == 1

    @patch("pacup.utils.shell.subprocess.run")
    def test_does_not_capture_output(self, mock_run: MagicMock) -> None:
        """run_interactive inherits the terminal."""
        mock_run.return_value = MagicMock(returncode=0)

        run_interactive(["pacman", "-S", "linux"])

        assert "capture_output" not in mock_run.call_args.kwargs
        assert "stdout" not in mock_run.call_args.kwargs


class TestCommandExists:
    """Tests for command_exists."""

    def test_uses_which(self) -> None:
        """command_exists looks the command up on PATH."""
        with patch("pacup.utils.shell.shutil.which", return_value="/usr/bin/pacman"):
            assert command_exists("pacman") is True
        with patch("pacup.utils.shell.shutil.which", return_value=None):
            assert command_exists("pacman") is False

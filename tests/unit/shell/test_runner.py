"""Tests for the CommandRunner process invoker."""

import os
import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from buildlib.errors import CommandError
from buildlib.shell.runner import CommandRunner, raise_for_result
from buildlib.shell.types import CommandResult


@pytest.fixture
def runner() -> CommandRunner:
    return CommandRunner(Path("/test/project"))


class TestRun:
    @patch("subprocess.run")
    def test_run_executes_command(self, mock_run, runner, completed):
        """run() passes the command, cwd and text mode to subprocess."""
        mock_run.return_value = completed(stdout="out\n", stderr="warn")

        result = runner.run(["git", "status"])

        mock_run.assert_called_once()
        call_args = mock_run.call_args
        assert call_args.args[0] == ["git", "status"]
        assert call_args.kwargs["cwd"] == Path("/test/project")
        assert call_args.kwargs["text"] is True
        assert call_args.kwargs["capture_output"] is True
        assert call_args.kwargs["env"] is None
        assert result == CommandResult(
            success=True,
            stdout="out\n",
            stderr="warn",
            returncode=0,
            cmd=["git", "status"],
        )

    @patch("subprocess.run")
    def test_explicit_cwd_wins(self, mock_run, runner, completed):
        mock_run.return_value = completed()

        runner.run(["ls"], cwd=Path("/elsewhere"))

        assert mock_run.call_args.kwargs["cwd"] == Path("/elsewhere")

    @patch("subprocess.run")
    def test_no_project_root_uses_process_cwd(self, mock_run, completed):
        mock_run.return_value = completed()

        CommandRunner().run(["ls"])

        assert mock_run.call_args.kwargs["cwd"] is None

    @patch("subprocess.run")
    def test_env_is_layered_over_environ(self, mock_run, runner, completed, monkeypatch):
        monkeypatch.setenv("BUILDLIB_TEST_KEEP", "1")
        mock_run.return_value = completed()

        runner.run(["go", "mod", "tidy"], env={"GO111MODULE": "on"})

        env = mock_run.call_args.kwargs["env"]
        assert env["GO111MODULE"] == "on"
        assert env["BUILDLIB_TEST_KEEP"] == "1"
        assert env is not os.environ

    @patch("subprocess.run")
    def test_failure_is_reported_not_raised(self, mock_run, runner, completed):
        mock_run.return_value = completed(returncode=2, stderr="boom")

        result = runner.run(["false"])

        assert result.success is False
        assert result.returncode == 2
        assert result.stderr == "boom"

    @patch("subprocess.run")
    def test_check_raises_command_error(self, mock_run, runner, completed):
        mock_run.return_value = completed(returncode=1, stderr="fatal: nope\n")

        with pytest.raises(CommandError) as excinfo:
            runner.run(["git", "fetch"], check=True)

        error = excinfo.value
        assert error.cmd == ["git", "fetch"]
        assert error.returncode == 1
        assert error.stderr == "fatal: nope\n"
        assert error.message == "git fetch: exit status 1 err: [fatal: nope]"

    @patch("subprocess.run", side_effect=FileNotFoundError(2, "No such file", "git"))
    def test_spawn_failure_becomes_command_error(self, _mock_run, runner):
        with pytest.raises(CommandError) as excinfo:
            runner.run(["git", "status"])

        assert excinfo.value.returncode is None
        assert "failed to start" in excinfo.value.message
        assert isinstance(excinfo.value.__cause__, FileNotFoundError)


class TestCheckedVariants:
    @patch("subprocess.run")
    def test_run_checked_returns_stdout(self, mock_run, runner, completed):
        mock_run.return_value = completed(stdout="abc\n")

        assert runner.run_checked(["git", "rev-parse", "HEAD"]) == "abc\n"
        assert mock_run.call_args.kwargs["check"] is False

    @patch("subprocess.run")
    def test_output_strips(self, mock_run, runner, completed):
        mock_run.return_value = completed(stdout="  /home/u/go\n")

        assert runner.output(["go", "env", "GOPATH"]) == "/home/u/go"

    @patch("subprocess.run")
    def test_output_raises_on_failure(self, mock_run, runner, completed):
        mock_run.return_value = completed(returncode=1)

        with pytest.raises(CommandError):
            runner.output(["go", "env", "GOPATH"])

    @patch("subprocess.run")
    def test_run_verbose_does_not_capture(self, mock_run, runner, completed):
        mock_run.return_value = completed()

        runner.run_verbose(["docker", "push", "app:1"])

        assert mock_run.call_args.kwargs["capture_output"] is False

    @patch("subprocess.run")
    def test_run_verbose_raises(self, mock_run, runner, completed):
        mock_run.return_value = completed(returncode=3)

        with pytest.raises(CommandError) as excinfo:
            runner.run_verbose(["docker", "push", "app:1"])

        assert excinfo.value.returncode == 3

    @patch("subprocess.run")
    def test_run_shell_uses_bash_pipefail(self, mock_run, runner, completed):
        mock_run.return_value = completed()

        runner.run_shell("curl x | tar -xzf -")

        assert mock_run.call_args.args[0] == [
            "bash",
            "-o",
            "pipefail",
            "-c",
            "curl x | tar -xzf -",
        ]

    @patch("subprocess.run")
    def test_text_mode_replaces_undecodable_bytes(self, mock_run, runner, completed):
        mock_run.return_value = completed()

        runner.run(["git", "rev-parse", "--show-toplevel"])

        assert mock_run.call_args.kwargs["errors"] == "replace"


class TestRunBytes:
    @patch("subprocess.run")
    def test_keeps_raw_stdout(self, mock_run, runner):
        mock_run.return_value = subprocess.CompletedProcess(
            args=[], returncode=0, stdout=b"? caf\xe9.txt\n", stderr=b""
        )

        result = runner.run_bytes(["git", "status", "--porcelain=v2"])

        assert "text" not in mock_run.call_args.kwargs
        assert mock_run.call_args.kwargs["capture_output"] is True
        assert mock_run.call_args.kwargs["cwd"] == Path("/test/project")
        assert result.success
        assert result.raw_stdout == b"? caf\xe9.txt\n"
        assert result.stdout == "? caf�.txt\n"

    @patch("subprocess.run")
    def test_failure_decodes_stderr_with_replacement(self, mock_run, runner):
        mock_run.return_value = subprocess.CompletedProcess(
            args=[], returncode=1, stdout=b"", stderr=b"bad \xff path"
        )

        result = runner.run_bytes(["git", "status"])

        assert not result.success
        assert result.stderr == "bad � path"
        with pytest.raises(CommandError):
            raise_for_result(result)

    @patch("subprocess.run", side_effect=FileNotFoundError(2, "No such file", "git"))
    def test_spawn_failure_becomes_command_error(self, _mock_run, runner):
        with pytest.raises(CommandError) as excinfo:
            runner.run_bytes(["git", "status"])

        assert excinfo.value.returncode is None


class TestRunStreaming:
    @patch("subprocess.Popen")
    def test_streams_non_empty_lines(self, mock_popen, runner):
        process = MagicMock()
        process.stdout.readline.side_effect = ["one\n", "\n", "two\n", ""]
        process.returncode = 0
        mock_popen.return_value = process
        seen: list[str] = []

        result = runner.run_streaming(["docker", "build", "."], on_output=seen.append)

        assert seen == ["one", "two"]
        assert result.stdout == "one\ntwo"
        assert result.success is True
        assert mock_popen.call_args.kwargs["stderr"] == subprocess.STDOUT
        assert mock_popen.call_args.kwargs["env"]["PYTHONUNBUFFERED"] == "1"

    @patch("subprocess.Popen")
    def test_reports_failure(self, mock_popen, runner):
        process = MagicMock()
        process.stdout.readline.side_effect = [""]
        process.returncode = 4
        mock_popen.return_value = process

        result = runner.run_streaming(["make"])

        assert result.success is False
        assert result.returncode == 4


class TestRaiseForResult:
    def test_success_is_silent(self, result):
        raise_for_result(result())

    def test_operation_name_in_message(self, result):
        with pytest.raises(CommandError) as excinfo:
            raise_for_result(
                result(returncode=1, stderr="denied", cmd=["git", "status"]),
                operation="GitStatus",
            )

        assert excinfo.value.operation == "GitStatus"
        assert excinfo.value.message == "GitStatus: exit status 1 err: [denied]"

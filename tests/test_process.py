"""Tests for external command execution."""

import sys
from pathlib import Path

import pytest

from bref_deploy.exceptions import ProcessFailedError
from bref_deploy.process import run_locally, run_process


class TestRunLocally:
    """Test shell command execution."""

    def test_runs_in_given_directory(self, tmp_path: Path) -> None:
        run_locally("echo hello > out.txt", tmp_path)
        assert (tmp_path / "out.txt").read_text() == "hello\n"

    def test_returns_stdout(self, tmp_path: Path) -> None:
        assert run_locally("echo hello", tmp_path) == "hello\n"

    def test_non_zero_exit_raises_with_output(self, tmp_path: Path) -> None:
        with pytest.raises(ProcessFailedError) as exc_info:
            run_locally("echo broken >&2; exit 3", tmp_path)

        error = exc_info.value
        assert error.command == "echo broken >&2; exit 3"
        assert error.returncode == 3
        assert error.output == "broken"
        assert "exit code 3" in str(error)


class TestRunProcess:
    """Test argument list execution."""

    def test_arguments_are_not_interpreted_by_a_shell(self, tmp_path: Path) -> None:
        output = run_process(["echo", "$HOME; rm -rf /", "'quoted'"], tmp_path)
        assert output == "$HOME; rm -rf / 'quoted'\n"

    def test_non_zero_exit_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ProcessFailedError) as exc_info:
            run_process([sys.executable, "-c", "import sys; sys.exit(2)"], tmp_path)
        assert exc_info.value.returncode == 2

    def test_missing_program_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ProcessFailedError) as exc_info:
            run_process(["bref-deploy-no-such-program"], tmp_path)
        assert exc_info.value.returncode == 127

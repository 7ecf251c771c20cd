"""Tests for the subprocess command runner."""

import sys

import pytest

from tsinit.adapters.command_runner import (
    CommandError,
    CommandNotFoundError,
    SubprocessRunner,
)
from tsinit.domain.models import CommandResult


def test_captures_both_streams(tmp_path):
    script = "import sys; print('out'); print('err', file=sys.stderr)"

    result = SubprocessRunner().run([sys.executable, "-c", script], tmp_path)

    assert isinstance(result, CommandResult)
    assert result.ok
    assert result.stdout.strip() == "out"
    assert result.stderr.strip() == "err"


def test_runs_in_working_directory(tmp_path):
    result = SubprocessRunner().run([sys.executable, "-c", "import os; print(os.getcwd())"], tmp_path)

    assert result.stdout.strip() == str(tmp_path.resolve())


def test_non_zero_exit_is_reported_not_raised(tmp_path):
    script = "import sys; print('{}'); sys.exit(3)"

    result = SubprocessRunner().run([sys.executable, "-c", script], tmp_path)

    assert not result.ok
    assert result.returncode == 3
    assert result.stdout.strip() == "{}"


def test_missing_executable(tmp_path):
    with pytest.raises(CommandNotFoundError):
        SubprocessRunner().run(["tsinit-no-such-binary"], tmp_path)


def test_timeout(tmp_path):
    with pytest.raises(CommandError, match="timed out"):
        SubprocessRunner(timeout=0.2).run([sys.executable, "-c", "import time; time.sleep(5)"], tmp_path)


def test_empty_command(tmp_path):
    with pytest.raises(CommandError):
        SubprocessRunner().run([], tmp_path)


def test_error_text_prefers_stderr():
    result = CommandResult(["npm", "install", "x"], "some output", "npm ERR! 404", 1)

    assert result.error_text() == "Command 'npm install x' exited with status 1\nnpm ERR! 404"

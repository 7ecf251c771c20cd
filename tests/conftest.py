"""Shared fixtures for tsinit tests."""

import json
from collections import deque
from pathlib import Path
from typing import Sequence

import pytest

from tsinit.domain.events import Emit, Quit, RunTask, TaskFailed
from tsinit.domain.exceptions import WizardFatalError
from tsinit.domain.models import CommandResult, WizardState
from tsinit.services.pipeline import build_context
from tsinit.services.tasks import get_task
from tsinit.services.wizard import update

MODERATE_AUDIT = {
    "metadata": {
        "vulnerabilities": {"info": 0, "low": 0, "moderate": 1, "high": 0, "critical": 0, "total": 1},
        "dependencies": {"prod": 2, "dev": 3, "optional": 0, "peer": 0, "peerOptional": 0, "total": 5},
    }
}

CLEAN_AUDIT = {
    "metadata": {
        "vulnerabilities": {"info": 0, "low": 0, "moderate": 0, "high": 0, "critical": 0, "total": 0},
        "dependencies": {"prod": 1, "dev": 6, "optional": 0, "peer": 0, "peerOptional": 0, "total": 7},
    }
}


class FakeRunner:
    """Command runner that records calls and answers like npm would."""

    def __init__(
        self,
        audit_stdout: str = json.dumps(CLEAN_AUDIT),
        audit_stderr: str = "",
        audit_returncode: int = 0,
        failing_packages: Sequence[str] = (),
    ):
        self.audit_stdout = audit_stdout
        self.audit_stderr = audit_stderr
        self.audit_returncode = audit_returncode
        self.failing_packages = set(failing_packages)
        self.calls: list[tuple[list[str], Path]] = []

    def run(self, argv, cwd):
        argv = list(argv)
        self.calls.append((argv, Path(cwd)))
        if argv[1] == "audit":
            return CommandResult(argv, self.audit_stdout, self.audit_stderr, self.audit_returncode)
        if self.failing_packages.intersection(argv):
            return CommandResult(argv, "", "npm ERR! code E404", 1)
        return CommandResult(argv, "added 1 package", "", 0)

    def installed_packages(self) -> list[str]:
        """Package names passed to npm install, in call order."""
        names = []
        for argv, _ in self.calls:
            if argv[1] == "install":
                names.append(next(arg for arg in argv[2:] if arg not in ("-D", "--color=always")))
        return names


class WizardDriver:
    """Runs the state machine with tasks executed inline instead of in workers."""

    def __init__(self, state: WizardState, runner: FakeRunner):
        self.state = state
        self.runner = runner
        self.exit_code: int | None = None
        self.max_installing = 0

    def send(self, *events) -> int | None:
        queue = deque(events)
        while queue:
            commands = update(self.state, queue.popleft())
            self.max_installing = max(self.max_installing, self.state.installing_count())
            for command in commands:
                if isinstance(command, RunTask):
                    queue.append(self._run(command))
                elif isinstance(command, Emit):
                    queue.append(command.event)
                elif isinstance(command, Quit):
                    self.exit_code = command.exit_code
        return self.exit_code

    def _run(self, command: RunTask):
        task = get_task(command.name)
        ctx = build_context(self.state, command, self.runner)
        try:
            return task.run(ctx)
        except WizardFatalError as e:
            return TaskFailed(message=e.message, source=e.source)
        except OSError as e:
            return TaskFailed(message=str(e), source=command.name)


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run the test from an empty temporary working directory."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TSINIT_TEMPLATE_DIR", raising=False)
    monkeypatch.delenv("TSINIT_NPM", raising=False)
    return tmp_path


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def make_runner():
    """Factory for FakeRunner with scripted audit output or failing installs."""
    return FakeRunner


@pytest.fixture
def moderate_audit_text():
    """npm audit JSON reporting a single moderate vulnerability."""
    return json.dumps(MODERATE_AUDIT)


@pytest.fixture
def make_driver():
    def _make(state: WizardState, runner: FakeRunner | None = None) -> WizardDriver:
        return WizardDriver(state, runner or FakeRunner())

    return _make

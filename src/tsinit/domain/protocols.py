"""Protocols (interfaces) for tasks and the command runner."""

from pathlib import Path
from typing import Protocol, Sequence

from tsinit.domain.events import Event
from tsinit.domain.models import CommandResult, Context


class CommandRunner(Protocol):
    """Executes an external command and captures its output."""

    def run(self, argv: Sequence[str], cwd: Path) -> CommandResult:
        """Run argv in cwd and return captured output and exit status."""
        ...


class Task(Protocol):
    """Protocol for background wizard tasks."""

    name: str

    def get_status_message(self, ctx: Context) -> str:
        """Generate status message for this task."""
        ...

    def run(self, ctx: Context) -> Event:
        """Run the task and return the event describing its outcome."""
        ...
